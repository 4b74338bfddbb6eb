"""Tests for asset classification and per-platform selection."""

import pytest

from gh_installer.domain.asset import (
    checksum_for,
    classify,
    digest_to_sha256,
    get_arch,
    get_file_ext,
    get_file_type,
    get_os,
    is_checksum_file,
    parse_checksums,
    select_assets,
)
from tests.factories import make_asset

SHA = "a" * 64


class TestGetOS:
    """Test OS detection from filenames."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("tool_linux_amd64.tar.gz", "linux"),
            ("tool-Darwin-arm64.tar.gz", "darwin"),
            ("tool-macOS.zip", "darwin"),
            ("tool_osx_x64.zip", "darwin"),
            ("tool_freebsd_amd64.tar.gz", "freebsd"),
            ("tool_openbsd_386.tar.gz", "openbsd"),
            ("tool_windows_amd64.zip", "windows"),
            ("tool-win64.zip", "windows"),
            ("tool.tar.gz", ""),
        ],
    )
    def test_get_os(self, name, expected):
        """Test common naming conventions map to normalized OS names."""
        assert get_os(name) == expected


class TestGetArch:
    """Test architecture detection from filenames."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("tool_linux_amd64.tar.gz", "amd64"),
            ("tool_linux_x86_64.tar.gz", "amd64"),
            ("tool-linux-aarch64.tar.gz", "arm64"),
            ("tool-darwin-arm64.tar.gz", "arm64"),
            ("tool_linux_386.tar.gz", "386"),
            ("tool_linux_i686.tar.gz", "386"),
            ("tool-linux32.tar.gz", "386"),
            ("tool-linux64.tar.gz", "amd64"),
            ("tool_linux_armv7.tar.gz", "arm"),
            ("tool_linux_riscv64.tar.gz", "riscv64"),
            ("tool_linux_mips.tar.gz", "mips"),
            ("tool_linux_mips64.tar.gz", "mips64"),
            ("tool_linux_mips64le.tar.gz", "mips64le"),
            ("tool_linux_mipsle.tar.gz", "mipsle"),
            ("tool_linux_ppc64.tar.gz", "ppc64"),
            ("tool_linux_ppc64le.tar.gz", "ppc64le"),
            ("tool_linux.tar.gz", "amd64"),
        ],
    )
    def test_get_arch(self, name, expected):
        """Test arch aliases and the amd64 default."""
        assert get_arch(name) == expected


class TestFileType:
    """Test download type detection."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://x/tool.tar.gz", ".tar.gz"),
            ("https://x/tool.tgz", ".tgz"),
            ("https://x/tool.tar.bz2", ".tar.bz2"),
            ("https://x/tool.zip", ".zip"),
            ("https://x/tool.gz", ".gz"),
        ],
    )
    def test_supported_types(self, url, expected):
        """Test archive extensions are recognised."""
        assert get_file_type(url) == expected

    def test_unsupported_types_are_empty(self):
        """Test packages and checksum files are rejected."""
        assert get_file_type("https://x/tool.deb") == ""
        assert get_file_type("https://x/checksums.txt") == ""
        assert get_file_type("https://x/tool.tar.xz") == ""

    def test_large_extensionless_file_is_binary(self):
        """Test raw binaries over 1 MiB are typed .bin."""
        assert get_file_type("https://x/tool_linux_amd64", 2_000_000) == ".bin"

    def test_small_extensionless_file_is_rejected(self):
        """Test small extensionless files are not taken as binaries."""
        assert get_file_type("https://x/LICENSE", 1000) == ""

    def test_get_file_ext_keeps_tar_prefix(self):
        """Test double extensions keep the .tar part."""
        assert get_file_ext("tool.tar.bz2") == ".tar.bz2"
        assert get_file_ext("tool") == ""


class TestClassify:
    """Test the combined classification function."""

    def test_classify_returns_os_arch_type(self):
        """Test a conventional release filename."""
        assert classify("tool_1.0_linux_arm64.tar.gz") == (
            "linux",
            "arm64",
            ".tar.gz",
        )

    def test_classify_uses_url_for_type(self):
        """Test the type comes from the download URL when given."""
        assert classify("tool-linux", "https://x/dl/tool-linux.zip") == (
            "linux",
            "amd64",
            ".zip",
        )

    def test_classify_unknown(self):
        """Test unknown files return empty sentinels."""
        assert classify("README.md") == ("", "amd64", "")


class TestSelectAssets:
    """Test deduplication per platform key."""

    def test_first_seen_wins(self):
        """Test the first asset per key is kept."""
        first = make_asset("linux", "amd64", name="a_linux_amd64.tar.gz")
        second = make_asset("linux", "amd64", name="b_linux_amd64.zip")
        assert list(select_assets([first, second])) == [first]

    def test_listing_order_is_preserved(self):
        """Test kept assets stay in upstream order."""
        assets = [
            make_asset("linux", "arm64"),
            make_asset("darwin", "amd64"),
            make_asset("linux", "amd64"),
        ]
        assert list(select_assets(assets)) == assets

    def test_mips_and_ppc_variants_stay_distinct(self):
        """Test endianness and word-size variants get their own keys."""
        names = [
            "t_linux_mips.tar.gz",
            "t_linux_mips64.tar.gz",
            "t_linux_mips64le.tar.gz",
            "t_linux_mipsle.tar.gz",
            "t_linux_ppc64.tar.gz",
            "t_linux_ppc64le.tar.gz",
        ]
        assets = [
            make_asset("linux", get_arch(name), name=name) for name in names
        ]

        selected = select_assets(assets)

        assert [a.name for a in selected] == names

    def test_musl_replaces_gnu(self):
        """Test a musl build replaces an earlier glibc build in place."""
        gnu = make_asset("linux", "amd64", name="tool-x86_64-linux-gnu.tgz")
        mac = make_asset("darwin", "arm64")
        musl = make_asset("linux", "amd64", name="tool-x86_64-linux-musl.tgz")
        assert list(select_assets([gnu, mac, musl])) == [musl, mac]

    def test_gnu_does_not_replace_musl(self):
        """Test a later glibc build does not replace a musl build."""
        musl = make_asset("linux", "amd64", name="tool-x86_64-linux-musl.tgz")
        gnu = make_asset("linux", "amd64", name="tool-x86_64-linux-gnu.tgz")
        assert list(select_assets([musl, gnu])) == [musl]

    def test_empty(self):
        """Test no candidates give no assets."""
        assert len(select_assets([])) == 0


class TestChecksums:
    """Test checksum list parsing and lookup."""

    def test_is_checksum_file(self):
        """Test checksum list names are detected."""
        assert is_checksum_file("tool_1.0_checksums.txt")
        assert is_checksum_file("SHA256SUMS")
        assert not is_checksum_file("tool_linux_amd64.tar.gz")

    def test_parse_checksums(self):
        """Test two-field lines are indexed by filename."""
        text = (
            f"{SHA}  tool_linux_amd64.tar.gz\n"
            f"{'b' * 64} *tool_darwin_arm64.tar.gz\n"
            "malformed line with many fields\n"
            "\n"
        )
        assert parse_checksums(text) == {
            "tool_linux_amd64.tar.gz": SHA,
            "tool_darwin_arm64.tar.gz": "b" * 64,
        }

    def test_digest_to_sha256(self):
        """Test GitHub digest fields are reduced to hex."""
        assert digest_to_sha256(f"sha256:{SHA}") == SHA
        assert digest_to_sha256(f"sha512:{SHA}") == ""
        assert digest_to_sha256("sha256:nothex") == ""
        assert digest_to_sha256("") == ""

    def test_checksum_for_prefers_index(self):
        """Test the published index wins over the API digest."""
        index = {"tool.tgz": SHA}
        assert checksum_for("tool.tgz", index, f"sha256:{'c' * 64}") == SHA
        assert checksum_for("other.tgz", index, f"sha256:{'c' * 64}") == "c" * 64
        assert checksum_for("other.tgz", index) == ""

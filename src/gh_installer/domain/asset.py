"""Asset classification and selection logic.

Pure functions that turn release filenames into platform information and
pick one asset per platform. Nothing here performs IO.
"""

import re
from collections.abc import Iterable, Mapping

from gh_installer.constants import RAW_BINARY_MIN_SIZE, SUPPORTED_FILE_TYPES
from gh_installer.domain.types import Asset, Assets

ARCH_RE = re.compile(
    r"(arm64|arm|386|686|amd64|x86_64|aarch64|loong64|mips64le|mips64|"
    r"mipsle|mips|ppc64le|ppc64|riscv64|s390x|32|64)"
)
FILE_EXT_RE = re.compile(r"(\.tar)?(\.[a-z][a-z0-9]+)$")
POSIX_OS_RE = re.compile(r"(darwin|linux|(net|free|open)bsd|mac|osx|windows|win)")
CHECKSUM_RE = re.compile(r"(checksums|sha256sums)")
SHA256_RE = re.compile(r"^[a-f0-9]{64}$")

_OS_ALIASES = {"mac": "darwin", "osx": "darwin", "win": "windows"}
_ARCH_ALIASES = {
    "": "amd64",
    "64": "amd64",
    "x86_64": "amd64",
    "32": "386",
    "686": "386",
    "aarch64": "arm64",
}


def get_os(name: str) -> str:
    """Return the normalized OS named in a filename, or "" if none."""
    match = POSIX_OS_RE.search(name.lower())
    if not match:
        return ""
    found = match.group(0)
    return _OS_ALIASES.get(found, found)


def get_arch(name: str) -> str:
    """Return the normalized architecture named in a filename.

    Filenames that name no architecture are assumed to be amd64.
    """
    match = ARCH_RE.search(name.lower())
    found = match.group(0) if match else ""
    return _ARCH_ALIASES.get(found, found)


def get_file_ext(url: str) -> str:
    """Return the trailing extension of a URL, keeping ``.tar`` prefixes."""
    match = FILE_EXT_RE.search(url)
    return match.group(0) if match else ""


def get_file_type(url: str, size: int = 0) -> str:
    """Return the supported file type of a download, or "".

    Extension-less files over 1 MiB are taken to be raw binaries.
    """
    ext = get_file_ext(url)
    if not ext and size > RAW_BINARY_MIN_SIZE:
        ext = ".bin"
    return ext if ext in SUPPORTED_FILE_TYPES else ""


def classify(name: str, url: str = "", size: int = 0) -> tuple[str, str, str]:
    """Classify a release file by platform and type.

    Args:
        name: Asset filename
        url: Download URL (type detection uses it; defaults to the name)
        size: Asset size in bytes

    Returns:
        Tuple of (os, arch, type); os and type are "" when unknown

    """
    return get_os(name), get_arch(name), get_file_type(url or name, size)


def is_checksum_file(name: str) -> bool:
    """Return True for published checksum lists (checksums.txt etc.)."""
    return bool(CHECKSUM_RE.search(name.lower()))


def parse_checksums(text: str) -> dict[str, str]:
    """Index a ``sha256sum``-style listing by filename.

    Lines that do not have exactly two fields are skipped. A leading ``*``
    (binary mode marker) on the filename is dropped.
    """
    index: dict[str, str] = {}
    for line in text.splitlines():
        parts = line.split()
        if len(parts) != 2:
            continue
        digest, filename = parts
        index[filename.lstrip("*")] = digest
    return index


def digest_to_sha256(digest: str) -> str:
    """Extract a hex SHA-256 from a GitHub ``sha256:<hex>`` digest field."""
    algorithm, _, value = digest.partition(":")
    if algorithm.lower() != "sha256" or not SHA256_RE.match(value.lower()):
        return ""
    return value.lower()


def _is_gnu(name: str) -> bool:
    return "gnu" in name


def _is_musl(name: str) -> bool:
    return "musl" in name


def _prefers_musl(current: Asset, candidate: Asset) -> bool:
    """Return True when candidate is the musl twin of a glibc build."""
    return (
        _is_gnu(current.name)
        and not _is_musl(current.name)
        and not _is_gnu(candidate.name)
        and _is_musl(candidate.name)
    )


def select_assets(candidates: Iterable[Asset]) -> Assets:
    """Keep one asset per platform key, preserving listing order.

    The first asset seen for a key wins, except that a musl build replaces
    an earlier glibc build for the same key (statically linked builds are
    more portable). The replacement keeps the original position.
    """
    index: dict[str, Asset] = {}
    for asset in candidates:
        key = asset.key()
        current = index.get(key)
        if current is not None and not _prefers_musl(current, asset):
            continue
        index[key] = asset
    return Assets(index.values())


def checksum_for(
    name: str, index: Mapping[str, str], digest: str = ""
) -> str:
    """Return the checksum of an asset from the published index or digest."""
    return index.get(name) or digest_to_sha256(digest)

"""Domain types for install requests and their resolved releases.

These are plain immutable values with no IO: a Query describes what was
asked for, an Asset is one installable release file and a Result joins
the two once a release has been resolved.
"""

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class Query:
    """Normalized description of one install request.

    Field order is part of the cache key; append new fields at the end.

    Attributes:
        user: Repository owner (empty until defaulting has run)
        program: Repository name
        as_program: Name to install the binary as (empty keeps the original)
        release: Release tag (empty means latest)
        move_to_path: Install into a system path instead of the cwd
        google: Owner was defaulted, so a search fallback is allowed
        insecure: Skip TLS verification in the rendered script
        sudo_move: Deprecated, kept so cache keys stay stable

    """

    user: str = ""
    program: str = ""
    as_program: str = ""
    release: str = ""
    move_to_path: bool = False
    google: bool = False
    insecure: bool = False
    sudo_move: bool = False

    def is_valid(self) -> bool:
        """Return True if both owner and repository are known."""
        return bool(self.user and self.program)


@dataclass(frozen=True, slots=True)
class Asset:
    """One installable file attached to a release.

    Attributes:
        name: Original filename
        os: Normalized operating system (e.g. "linux", "darwin")
        arch: Normalized architecture (e.g. "amd64", "arm64")
        url: Download URL
        type: File type extension (e.g. ".tar.gz", ".bin")
        sha256: Published checksum, empty when upstream has none

    """

    name: str
    os: str
    arch: str
    url: str
    type: str
    sha256: str = ""

    def key(self) -> str:
        """Return the platform key, ``os/arch``."""
        return self.os + "/" + self.arch

    def is_32bit(self) -> bool:
        return self.arch == "386"

    def is_mac(self) -> bool:
        return self.os == "darwin"

    def is_mac_m1(self) -> bool:
        return self.is_mac() and self.arch == "arm64"


class Assets(tuple):
    """Ordered, immutable sequence of assets in upstream listing order."""

    __slots__ = ()

    def has_m1(self) -> bool:
        """Return True if a native Apple Silicon build is present."""
        return any(asset.is_mac_m1() for asset in self)

    def find(self, os: str, arch: str) -> "Asset | None":
        """Return the first asset for a platform, or None."""
        for asset in self:
            if asset.os == os and asset.arch == arch:
                return asset
        return None


@dataclass(frozen=True, slots=True)
class Result:
    """A Query together with the release assets it resolved to.

    Shared read-only between every request hitting the same cache entry.

    Attributes:
        query: The query as resolved (discovered tag and owner filled in)
        timestamp: When the resolution happened, for TTL accounting
        assets: Matched assets, at most one per platform key
        m1_asset: Whether assets contain a darwin/arm64 build

    """

    query: Query
    timestamp: datetime
    assets: Assets
    m1_asset: bool

    @classmethod
    def build(
        cls, query: Query, timestamp: datetime, assets: Assets
    ) -> "Result":
        """Create a Result, deriving m1_asset from the assets."""
        return cls(
            query=query,
            timestamp=timestamp,
            assets=assets,
            m1_asset=assets.has_m1(),
        )

    def template_context(self) -> dict[str, Any]:
        """Return the values exposed to script templates.

        Every Query field is available by name, alongside ``timestamp``,
        ``assets`` and ``m1_asset``.
        """
        context: dict[str, Any] = {
            f.name: getattr(self.query, f.name) for f in fields(self.query)
        }
        context.update(
            timestamp=self.timestamp,
            assets=self.assets,
            m1_asset=self.m1_asset,
        )
        return context

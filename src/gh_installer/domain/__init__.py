"""Domain model - queries, assets, results and classification rules."""

from gh_installer.domain.asset import classify, select_assets
from gh_installer.domain.types import Asset, Assets, Query, Result

__all__ = [
    "Asset",
    "Assets",
    "Query",
    "Result",
    "classify",
    "select_assets",
]

"""gh-installer: one-line install scripts for GitHub release binaries."""

__version__ = "1.0.0"

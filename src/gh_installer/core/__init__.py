"""Core services - query building, caching and release resolution."""

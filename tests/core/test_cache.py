"""Tests for the in-memory result cache."""

from dataclasses import replace
from datetime import timedelta

import pytest

from gh_installer.core.cache import ResultCache, cache_key
from gh_installer.domain.types import Query
from tests.factories import make_asset, make_result


@pytest.fixture
def cache(clock):
    """Cache with a one hour TTL on a fake clock."""
    return ResultCache(ttl=timedelta(hours=1), clock=clock)


@pytest.fixture
def query():
    return Query(user="owner", program="tool")


class TestCacheKey:
    """Test cache key derivation."""

    def test_deterministic(self, query):
        """Test equal queries share a key."""
        assert cache_key(query) == cache_key(Query(user="owner", program="tool"))

    @pytest.mark.parametrize(
        "changes",
        [
            {"user": "other"},
            {"program": "tool "},
            {"release": "v1"},
            {"as_program": "t"},
            {"move_to_path": True},
            {"google": True},
            {"insecure": True},
            {"sudo_move": True},
        ],
    )
    def test_any_field_changes_key(self, query, changes):
        """Test every field, including whitespace, is part of the key."""
        assert cache_key(query) != cache_key(replace(query, **changes))

    def test_unicode_variants_differ(self):
        """Test names are compared byte for byte, not normalized."""
        composed = Query(user="owner", program="caf\u00e9")
        decomposed = Query(user="owner", program="cafe\u0301")
        assert cache_key(composed) != cache_key(decomposed)


class TestResultCache:
    """Test lookup, store and TTL expiry."""

    def test_miss(self, cache, query):
        """Test an empty cache misses."""
        assert cache.lookup(query) == (None, False)

    def test_hit_within_ttl(self, cache, clock, query):
        """Test a stored result is served unchanged before expiry."""
        result = make_result([make_asset("linux", "amd64")], timestamp=clock())
        cache.store(query, result)
        clock.advance(minutes=59, seconds=59)

        cached, found = cache.lookup(query)
        assert found
        assert cached is result

    def test_miss_at_ttl(self, cache, clock, query):
        """Test an entry exactly one TTL old is a miss."""
        cache.store(query, make_result(timestamp=clock()))
        clock.advance(hours=1)
        assert cache.lookup(query) == (None, False)

    def test_expired_entries_are_kept_until_purged(self, cache, clock, query):
        """Test eviction is lazy."""
        cache.store(query, make_result(timestamp=clock()))
        clock.advance(hours=2)
        cache.lookup(query)
        assert len(cache) == 1

        assert cache.purge_expired() == 1
        assert len(cache) == 0

    def test_store_overwrites(self, cache, clock, query):
        """Test the last write wins."""
        cache.store(query, make_result(timestamp=clock()))
        newer = make_result([make_asset("darwin", "arm64")], timestamp=clock())
        cache.store(query, newer)
        assert cache.lookup(query) == (newer, True)

    def test_distinct_queries(self, cache, clock, query):
        """Test results are isolated per query."""
        cache.store(query, make_result(timestamp=clock()))
        assert not cache.lookup(replace(query, insecure=True))[1]

    def test_stats(self, cache, clock, query):
        """Test fresh and expired counts."""
        cache.store(query, make_result(timestamp=clock()))
        clock.advance(hours=2)
        cache.store(replace(query, release="v2"), make_result(timestamp=clock()))
        assert cache.stats() == {
            "total_entries": 2,
            "fresh_entries": 1,
            "expired_entries": 1,
        }

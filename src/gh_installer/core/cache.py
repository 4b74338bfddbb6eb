"""In-memory cache of resolved releases.

Results are keyed by a SHA-256 fingerprint of the serialized Query and
served for a fixed time-to-live. Expiry is checked when reading: a stale
entry is reported as a miss and left in place until it is overwritten or
purged. Error outcomes are never stored.
"""

import base64
import hashlib
import threading
from collections.abc import Callable
from datetime import datetime, timedelta

import orjson

from gh_installer.constants import CACHE_TTL
from gh_installer.domain.types import Query, Result
from gh_installer.logger import get_logger
from gh_installer.utils.datetime_utils import get_current_datetime_local

logger = get_logger(__name__)


def cache_key(query: Query) -> str:
    """Return the cache key of a query.

    The query is serialized field by field in declaration order, so two
    queries share a key exactly when every field value is identical.
    """
    digest = hashlib.sha256(orjson.dumps(query)).digest()
    return base64.b64encode(digest).decode("ascii")


class ResultCache:
    """Time-bounded memo of Query -> Result.

    A single lock guards the backing dict; it is held only for the dict
    access itself, never across upstream calls or rendering.

    Usage:
        cache = ResultCache()
        result, found = cache.lookup(query)
        if not found:
            result = await resolve(query)
            cache.store(query, result)
    """

    def __init__(
        self,
        ttl: timedelta = CACHE_TTL,
        clock: Callable[[], datetime] = get_current_datetime_local,
    ) -> None:
        """Initialize the cache.

        Args:
            ttl: How long a result is served after its resolution time
            clock: Source of the current time (injectable for tests)

        """
        self.ttl = ttl
        self.clock = clock
        self._lock = threading.Lock()
        self._entries: dict[str, Result] = {}

    def _is_fresh(self, result: Result, now: datetime) -> bool:
        return now - result.timestamp < self.ttl

    def lookup(self, query: Query) -> tuple[Result | None, bool]:
        """Return the fresh cached result for a query.

        Returns:
            Tuple of (result, found); result is None when not found

        """
        key = cache_key(query)
        with self._lock:
            result = self._entries.get(key)
        if result is None:
            return None, False
        if not self._is_fresh(result, self.clock()):
            logger.debug(
                "Cache expired for %s/%s", query.user, query.program
            )
            return None, False
        return result, True

    def store(self, query: Query, result: Result) -> None:
        """Store a result under the query's key, replacing any entry."""
        key = cache_key(query)
        with self._lock:
            self._entries[key] = result

    def purge_expired(self) -> int:
        """Drop stale entries.

        Returns:
            Number of entries removed

        """
        now = self.clock()
        with self._lock:
            stale = [
                key
                for key, result in self._entries.items()
                if not self._is_fresh(result, now)
            ]
            for key in stale:
                del self._entries[key]
        if stale:
            logger.info("Purged %d expired cache entries", len(stale))
        return len(stale)

    def stats(self) -> dict[str, int]:
        """Return entry counts: total, fresh and expired."""
        now = self.clock()
        with self._lock:
            results = list(self._entries.values())
        fresh = sum(1 for result in results if self._is_fresh(result, now))
        return {
            "total_entries": len(results),
            "fresh_entries": fresh,
            "expired_entries": len(results) - fresh,
        }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

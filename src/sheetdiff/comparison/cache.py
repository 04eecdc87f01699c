"""Comparison cache management."""

import logging
import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from ..workbook.models import Workbook
from .models import CachedComparison

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ComparisonCache:
    """In-memory store for compared workbooks.

    Thread-safe: every access to the entry map happens under a lock. Entries
    expire ``ttl_minutes`` after they are stored. Expired entries are dropped
    lazily by :meth:`get` and eagerly by the sweep that runs on each
    :meth:`put`.
    """

    def __init__(
        self,
        ttl_minutes: int = 30,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._cache: dict[str, CachedComparison] = {}
        self._ttl = timedelta(minutes=ttl_minutes)
        self._clock = clock or _utc_now
        self._lock = threading.Lock()

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def put(self, workbook1: Workbook, workbook2: Workbook) -> str:
        """
        Store both workbooks of a comparison.

        Args:
            workbook1: The original workbook
            workbook2: The workbook it was compared against

        Returns:
            The new comparison ID
        """
        now = self._clock()
        comparison_id = str(uuid.uuid4())
        entry = CachedComparison(
            id=comparison_id,
            workbook1=workbook1,
            workbook2=workbook2,
            created_at=now,
            expires_at=now + self._ttl,
        )

        with self._lock:
            self._cache[comparison_id] = entry
            removed = self._remove_expired(now)

        if removed:
            logger.info(f"Purged {removed} expired comparison(s)")
        logger.info(f"Cached comparison {comparison_id} until {entry.expires_at.isoformat()}")
        return comparison_id

    def get(self, comparison_id: str) -> Optional[CachedComparison]:
        """
        Retrieve a comparison from the cache.

        Args:
            comparison_id: The comparison ID to retrieve

        Returns:
            The comparison if found and not expired, None otherwise
        """
        with self._lock:
            entry = self._cache.get(comparison_id)

            if entry is None:
                return None

            if entry.is_expired(self._clock()):
                del self._cache[comparison_id]
                logger.info(f"Comparison {comparison_id} expired")
                return None

            return entry

    def invalidate(self, comparison_id: str) -> bool:
        """
        Remove a comparison from the cache.

        Returns:
            True if removed, False if not found
        """
        with self._lock:
            return self._cache.pop(comparison_id, None) is not None

    def invalidate_all(self):
        """Remove every comparison from the cache."""
        with self._lock:
            self._cache.clear()

    def cleanup_expired(self) -> int:
        """
        Remove all expired comparisons from the cache.

        Returns:
            Number of expired comparisons removed
        """
        with self._lock:
            return self._remove_expired(self._clock())

    def _remove_expired(self, now: datetime) -> int:
        # Caller holds the lock.
        expired_ids = [
            comparison_id
            for comparison_id, entry in self._cache.items()
            if entry.is_expired(now)
        ]

        for comparison_id in expired_ids:
            del self._cache[comparison_id]

        return len(expired_ids)

    def size(self) -> int:
        """Get the current cache size."""
        with self._lock:
            return len(self._cache)

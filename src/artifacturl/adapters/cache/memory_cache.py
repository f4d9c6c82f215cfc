"""In-memory cache adapter implementing ResolutionCachePort."""

from __future__ import annotations

import threading
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from artifacturl.core.models import CacheEntry


if TYPE_CHECKING:
    from collections.abc import Callable


class MemoryCache:
    """Process-wide resolution cache guarded by a lock.

    Entries are never evicted in the background; staleness is checked when
    an entry is read. Concurrent writers for the same signature replace each
    other (last write wins).

    Example:
        >>> cache = MemoryCache()
        >>> entry = cache.put("country=de", "https://example/24.0.0.0/de")
        >>> cache.get("country=de") == entry
        True
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        """Initialize an empty cache.

        Args:
            clock: Returns the current time for new entries. Defaults to UTC now.
        """
        self._clock = clock or (lambda: datetime.now(UTC))
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(
        self, signature: str, threshold: datetime | None = None
    ) -> CacheEntry | None:
        """Get the entry for a signature.

        Args:
            signature: Normalized request signature.
            threshold: Entries created before this time count as a miss.

        Returns:
            The CacheEntry, or None if missing or expired.
        """
        with self._lock:
            entry = self._entries.get(signature)
        if entry is None:
            return None
        if threshold is not None and entry.is_expired(threshold):
            return None
        return entry

    def put(
        self, signature: str, url: str, created_at: datetime | None = None
    ) -> CacheEntry:
        """Store a resolved URL, replacing any previous entry.

        Args:
            signature: Normalized request signature.
            url: The resolved URL.
            created_at: Entry timestamp. Defaults to the cache clock.

        Returns:
            The stored CacheEntry.
        """
        entry = CacheEntry(url=url, created_at=created_at or self._clock())
        with self._lock:
            self._entries[signature] = entry
        return entry

    def invalidate(self, signature: str) -> None:
        """Remove the entry for a signature, if present."""
        with self._lock:
            self._entries.pop(signature, None)

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._entries.clear()

    def statistics(self) -> dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with 'entry_count' and 'oldest' (creation time or None).
        """
        with self._lock:
            entries = list(self._entries.values())
        return {
            "entry_count": len(entries),
            "oldest": min((e.created_at for e in entries), default=None),
        }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

"""Port interfaces for hexagonal architecture.

Ports define contracts that adapters must implement. The core domain
depends only on these protocols, never on concrete implementations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable


if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import datetime

    from artifacturl.core.models import BlobEntry, CacheEntry


@runtime_checkable
class BlobListerPort(Protocol):
    """Remote container enumeration (Azure blob storage)."""

    def list(self, container_url: str, prefix: str = "") -> Iterator[BlobEntry]:
        """Enumerate blobs in a container, following continuation markers.

        Args:
            container_url: Container URL, optionally carrying a SAS query string
                (e.g. "https://bcartifacts.blob.core.windows.net/sandbox/").
            prefix: Only return blobs whose name starts with this prefix.

        Returns:
            Lazy iterator of BlobEntry in remote enumeration order.

        Raises:
            ListingRetriesExhaustedError: If a page keeps failing.
            ListingAccessError: If the storage account denies access.
            ListingNotFoundError: If the container does not exist.
        """
        ...


@runtime_checkable
class ResolutionCachePort(Protocol):
    """Process-wide map from request signature to resolved URL."""

    def get(
        self, signature: str, threshold: datetime | None = None
    ) -> CacheEntry | None:
        """Get the cached entry, or None if missing or created before threshold."""
        ...

    def put(
        self, signature: str, url: str, created_at: datetime | None = None
    ) -> CacheEntry:
        """Store (or replace) the entry for a signature."""
        ...

    def invalidate(self, signature: str) -> None:
        """Remove the entry for a signature, if any."""
        ...

    def clear(self) -> None:
        """Remove every entry."""
        ...

    def statistics(self) -> dict[str, Any]:
        """Return cache statistics."""
        ...

"""Core domain models for artifacturl.

These models are pure Python dataclasses with no I/O dependencies.
They represent resolution requests, enumerated blobs, resolved artifacts
and cache entries.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Self

from artifacturl.core.version import Version


class ArtifactType(Enum):
    """Artifact container: on-premises installers or sandbox images."""

    ONPREM = "OnPrem"
    SANDBOX = "Sandbox"

    @classmethod
    def _missing_(cls, value: object) -> ArtifactType | None:
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None

    @property
    def container(self) -> str:
        """Container name used in listing and download URLs."""
        return self.value.lower()


class ArtifactSelect(Enum):
    """Selection strategies.

    The first five reduce a listing directly; the rest are composite and
    resolve through simpler selections.
    """

    LATEST = "Latest"
    FIRST = "First"
    ALL = "All"
    CLOSEST = "Closest"
    SECOND_TO_LAST_MAJOR = "SecondToLastMajor"
    CURRENT = "Current"
    NEXT_MINOR = "NextMinor"
    NEXT_MAJOR = "NextMajor"
    DAILY = "Daily"
    WEEKLY = "Weekly"

    @classmethod
    def _missing_(cls, value: object) -> ArtifactSelect | None:
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None

    @property
    def is_composite(self) -> bool:
        """True for strategies that recurse instead of listing."""
        return self in _COMPOSITE


_COMPOSITE = frozenset(
    {
        ArtifactSelect.CURRENT,
        ArtifactSelect.NEXT_MINOR,
        ArtifactSelect.NEXT_MAJOR,
        ArtifactSelect.DAILY,
        ArtifactSelect.WEEKLY,
    }
)


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@dataclass(frozen=True, slots=True)
class BlobEntry:
    """One blob returned by a container listing.

    Attributes:
        name: Blob name, ``<version>/<country-or-platform>``.
        last_modified: Last modification time of the blob (UTC).
    """

    name: str
    last_modified: datetime | None = None

    @property
    def suffix(self) -> str:
        """The segment after the version (country code or "platform")."""
        return self.name.split("/", 1)[1] if "/" in self.name else ""


@dataclass(frozen=True, slots=True)
class ResolutionRequest:
    """A logical artifact request.

    Attributes:
        artifact_type: OnPrem or Sandbox.
        country: Locale code; empty means all locales except platform entries.
        version: Version prefix filter (a full version for Closest).
        select: Selection strategy.
        after: Only consider blobs modified after this time.
        before: Only consider blobs modified before this time.
        storage_account: Storage account name or host; empty for the default.
        accept_insider_eula: Whether the insider EULA has been accepted.
        do_not_check_platform: Skip requiring a ``<version>/platform`` sibling.

    Example:
        >>> request = ResolutionRequest(country="de", select=ArtifactSelect.FIRST)
        >>> request.signature()
        'country=de&select=first'
    """

    artifact_type: ArtifactType = ArtifactType.SANDBOX
    country: str = ""
    version: str = ""
    select: ArtifactSelect = ArtifactSelect.LATEST
    after: datetime | None = None
    before: datetime | None = None
    storage_account: str = ""
    accept_insider_eula: bool = False
    do_not_check_platform: bool = False

    def __post_init__(self) -> None:
        """Normalize whitespace and timezones."""
        object.__setattr__(self, "country", self.country.strip())
        object.__setattr__(self, "version", self.version.strip())
        object.__setattr__(self, "storage_account", self.storage_account.strip())
        if self.after is not None:
            object.__setattr__(self, "after", as_utc(self.after))
        if self.before is not None:
            object.__setattr__(self, "before", as_utc(self.before))

    def derive(self, **changes: Any) -> Self:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def signature(self) -> str:
        """Normalized cache key built from every non-default field.

        Fields appear in declaration order and the result is lowercased, so
        requests differing only in letter case share a signature.
        """
        parts: list[str] = []
        for f in fields(self):
            value = getattr(self, f.name)
            if value == f.default:
                continue
            parts.append(f"{_SIGNATURE_KEYS[f.name]}={_render(value)}")
        return "&".join(parts).lower()


_SIGNATURE_KEYS = {
    "artifact_type": "type",
    "country": "country",
    "version": "version",
    "select": "select",
    "after": "after",
    "before": "before",
    "storage_account": "storageaccount",
    "accept_insider_eula": "acceptinsidereula",
    "do_not_check_platform": "donotcheckplatform",
}


def _render(value: object) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


@dataclass(frozen=True, slots=True)
class ResolvedArtifact:
    """A selected artifact name bound to the storage channel it came from.

    Attributes:
        name: Blob name, ``<version>/<country>``.
        base_url: Download base, e.g. ``https://bcartifacts.azureedge.net/sandbox/``.
        sas_token: Query string appended to the download URL (may be empty).
    """

    name: str
    base_url: str
    sas_token: str = ""

    @property
    def version(self) -> Version:
        """Version parsed from the name."""
        return Version.from_artifact_name(self.name)

    @property
    def country(self) -> str:
        """Country segment of the name."""
        return self.name.split("/", 1)[1] if "/" in self.name else ""

    @property
    def url(self) -> str:
        """Full download URL."""
        return f"{self.base_url}{self.name}{self.sas_token}"


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A resolved URL remembered by the resolution cache.

    Attributes:
        url: The resolved URL.
        created_at: When the resolution finished (UTC).
    """

    url: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Normalize the timestamp to UTC (naive values are taken to be UTC)."""
        object.__setattr__(self, "created_at", as_utc(self.created_at))

    def is_expired(self, threshold: datetime) -> bool:
        """Check whether the entry was created before ``threshold``.

        Args:
            threshold: Cutoff timestamp, usually now minus the freshness window.

        Returns:
            True if the entry must be re-resolved.
        """
        return self.created_at < as_utc(threshold)


@dataclass(frozen=True, slots=True)
class CachedResolution:
    """Result of a cache-aware resolution.

    Attributes:
        url: The resolved URL, or None when nothing matched.
        from_cache: Whether the URL was served from the cache.
        cached_at: Creation time of the cache entry, when one was used or written.
    """

    url: str | None
    from_cache: bool = False
    cached_at: datetime | None = None

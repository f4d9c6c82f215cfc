"""Core domain services for artifacturl."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from artifacturl.config import ResolverConfig
from artifacturl.core.exceptions import (
    ConfigurationError,
    InsiderEulaNotAcceptedError,
)
from artifacturl.core.filtering import filter_candidates
from artifacturl.core.models import (
    ArtifactSelect,
    ArtifactType,
    CachedResolution,
    ResolutionRequest,
    ResolvedArtifact,
)
from artifacturl.core.ports import BlobListerPort, ResolutionCachePort
from artifacturl.core.selection import select
from artifacturl.core.validation import validate_expiration, validate_request
from artifacturl.core.version import Version


logger = logging.getLogger(__name__)

# Composite selections recurse at most this deep
MAX_DEPTH = 2

# Country used to find the current release when NextMinor/NextMajor has none
DEFAULT_NEXT_COUNTRY = "w1"


def _utcnow() -> datetime:
    return datetime.now(UTC)


def start_of_day(now: datetime) -> datetime:
    """Midnight (UTC) of the day containing ``now``."""
    now = now.astimezone(UTC)
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(now: datetime) -> datetime:
    """Midnight (UTC) of the Sunday starting the week containing ``now``."""
    today = start_of_day(now)
    # weekday(): Monday == 0, Sunday == 6
    return today - timedelta(days=(today.weekday() + 1) % 7)


class ArtifactResolver:
    """Resolves artifact requests to download URLs, with optional caching."""

    def __init__(
        self,
        lister: BlobListerPort,
        cache: ResolutionCachePort | None = None,
        config: ResolverConfig | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._lister = lister
        self._cache = cache
        self._config = config or ResolverConfig()
        self._clock = clock

    @classmethod
    def from_config(
        cls,
        config: ResolverConfig | None = None,
        cache: ResolutionCachePort | None = None,
    ) -> ArtifactResolver:
        """Create a resolver with the Azure blob lister and an in-memory cache.

        Args:
            config: Settings to use. Defaults to ``ResolverConfig.from_env()``.
            cache: Cache to share. Defaults to a new MemoryCache.

        Returns:
            ArtifactResolver wired with default adapters.
        """
        from artifacturl.adapters.cache import MemoryCache
        from artifacturl.adapters.listing import AzureBlobLister

        config = config or ResolverConfig.from_env()
        return cls(
            lister=AzureBlobLister(
                max_attempts=config.max_page_attempts,
                timeout=config.request_timeout,
                retry_delay=config.retry_delay,
            ),
            cache=cache if cache is not None else MemoryCache(),
            config=config,
        )

    @property
    def config(self) -> ResolverConfig:
        """The active configuration."""
        return self._config

    def close(self) -> None:
        """Release the lister's resources, such as its HTTP session."""
        close = getattr(self._lister, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> ArtifactResolver:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def resolve(self, request: ResolutionRequest) -> str | None:
        """Resolve a request to a download URL.

        Args:
            request: The artifact request.

        Returns:
            The URL, or None if nothing matched. For All, every matching URL
            joined by newlines in ascending version order.

        Raises:
            RequestValidationError: If the request breaks a selection rule.
            ListingError: If the remote listing fails.
        """
        artifacts = self.resolve_artifacts(request)
        if not artifacts:
            return None
        return "\n".join(a.url for a in artifacts)

    def resolve_artifacts(self, request: ResolutionRequest) -> list[ResolvedArtifact]:
        """Resolve a request to the selected artifacts.

        Returns:
            Zero or one artifact, or every match ascending for All.
        """
        return self._resolve(request, depth=0)

    def resolve_cached(
        self,
        request: ResolutionRequest,
        expiration_seconds: int | None = None,
    ) -> CachedResolution:
        """Resolve through the cache, re-resolving entries older than the window.

        Args:
            request: The artifact request.
            expiration_seconds: Freshness window. Defaults to the configured
                default (1 hour); must not be below the configured minimum.

        Returns:
            CachedResolution with the URL and whether it came from the cache.

        Raises:
            ExpirationTooShortError: If expiration_seconds is below the minimum.
            ConfigurationError: If the resolver has no cache.
            RequestValidationError: If the request breaks a selection rule.
            ListingError: If the remote listing fails (nothing is cached).
        """
        if self._cache is None:
            raise ConfigurationError("ArtifactResolver was created without a cache")
        validate_expiration(expiration_seconds, self._config.min_expiration)
        # Withdrawn OnPrem builds are redirected before their version is checked
        validate_request(self._replace_withdrawn_build(request))

        window = (
            expiration_seconds
            if expiration_seconds is not None
            else self._config.default_expiration
        )
        signature = request.signature()
        threshold = self._clock() - timedelta(seconds=window)

        entry = self._cache.get(signature, threshold=threshold)
        if entry is not None:
            logger.debug("Cache hit for '%s'", signature)
            return CachedResolution(
                url=entry.url, from_cache=True, cached_at=entry.created_at
            )

        logger.debug("Cache miss for '%s'", signature)
        url = self.resolve(request)
        if url is None:
            return CachedResolution(url=None)

        entry = self._cache.put(signature, url, created_at=self._clock())
        return CachedResolution(url=url, from_cache=False, cached_at=entry.created_at)

    def _resolve(
        self, request: ResolutionRequest, depth: int
    ) -> list[ResolvedArtifact]:
        """Dispatch on the selection strategy."""
        if depth > MAX_DEPTH:
            raise RecursionError(
                f"Selection {request.select.value} exceeded depth {MAX_DEPTH}"
            )

        request = self._replace_withdrawn_build(request)
        closest_to = validate_request(request)
        logger.debug("Resolving %s (depth %d)", request.signature() or "defaults", depth)

        if request.select in (ArtifactSelect.DAILY, ArtifactSelect.WEEKLY):
            return self._resolve_periodic(request, depth)
        if request.select is ArtifactSelect.CURRENT:
            return self._resolve(request.derive(select=ArtifactSelect.LATEST), depth + 1)
        if request.select in (ArtifactSelect.NEXT_MINOR, ArtifactSelect.NEXT_MAJOR):
            return self._resolve_next(request, depth)
        return self._resolve_listing(request, closest_to)

    def _replace_withdrawn_build(self, request: ResolutionRequest) -> ResolutionRequest:
        """Redirect OnPrem requests for withdrawn builds to their replacement."""
        if request.artifact_type is not ArtifactType.ONPREM or not request.version:
            return request
        for prefix, replacement in self._config.onprem_replacements:
            if request.version.startswith(prefix) and request.version != replacement:
                logger.warning(
                    "On-premises build for %s was replaced by %s, using this "
                    "version number instead",
                    prefix,
                    replacement,
                )
                return request.derive(version=replacement)
        return request

    def _resolve_periodic(
        self, request: ResolutionRequest, depth: int
    ) -> list[ResolvedArtifact]:
        """Daily/Weekly: the newest build published before the period started."""
        now = self._clock()
        boundary = (
            start_of_day(now)
            if request.select is ArtifactSelect.DAILY
            else start_of_week(now)
        )

        latest = request.derive(select=ArtifactSelect.LATEST)
        current = self._resolve(latest, depth + 1)
        if not current:
            return []

        version = current[0].version
        scoped = latest.derive(version=f"{version.major}.{version.minor}")
        periodic = self._resolve(scoped.derive(before=boundary), depth + 1)
        if not periodic:
            periodic = self._resolve(
                scoped.derive(select=ArtifactSelect.FIRST, after=boundary), depth + 1
            )
        logger.debug(
            "%s build before %s: %s",
            request.select.value,
            boundary.isoformat(),
            periodic[0].name if periodic else "none",
        )
        return periodic or current

    def _resolve_next(
        self, request: ResolutionRequest, depth: int
    ) -> list[ResolvedArtifact]:
        """NextMinor/NextMajor: newest insider or preview build after the current one."""
        current = self._resolve(
            request.derive(
                select=ArtifactSelect.LATEST,
                country=request.country or DEFAULT_NEXT_COUNTRY,
            ),
            depth + 1,
        )
        if not current:
            return []

        version = current[0].version
        next_major_prefix = f"{version.major + 1}.0."
        next_minor_prefix = (
            next_major_prefix
            if version.minor >= 5
            else f"{version.major}.{version.minor + 1}."
        )

        channel = request.derive(select=ArtifactSelect.ALL)
        previews = self._resolve(
            channel.derive(storage_account=self._config.public_preview_storage_account),
            depth + 1,
        )
        insiders = self._resolve(
            channel.derive(storage_account=self._config.insider_storage_account),
            depth + 1,
        )

        next_major = _newest_with_prefix(previews, insiders, next_major_prefix)
        if request.select is ArtifactSelect.NEXT_MAJOR:
            return [next_major] if next_major else []

        next_minor = _newest_with_prefix(previews, insiders, next_minor_prefix)
        chosen = next_minor or next_major
        return [chosen] if chosen else []

    def _resolve_listing(
        self, request: ResolutionRequest, closest_to: Version | None
    ) -> list[ResolvedArtifact]:
        """List the container, filter the names and apply the selection."""
        config = self._config
        account = request.storage_account or config.default_storage_account
        if config.is_insider(account) and not request.accept_insider_eula:
            raise InsiderEulaNotAcceptedError(account=account)

        container = request.artifact_type.container
        sas_token = config.sas_token_for(account)
        base_url = f"https://{config.download_host(account)}/{container}/"
        listing_url = f"https://{config.listing_host(account)}/{container}/{sas_token}"

        entries = list(self._lister.list(listing_url, _listing_prefix(request, closest_to)))
        names = filter_candidates(entries, request, config.country_aliases)
        selected = select(names, request.select, closest_to)
        logger.debug(
            "%d blobs, %d candidates, %d selected from %s",
            len(entries),
            len(names),
            len(selected),
            base_url,
        )
        return [ResolvedArtifact(name, base_url, sas_token) for name in selected]


def _listing_prefix(request: ResolutionRequest, closest_to: Version | None) -> str:
    """Listing prefix for a request's version filter."""
    if closest_to is not None:
        return closest_to.prefix(2)
    version = request.version
    if not version:
        return ""
    if version.count(".") < 3:
        # "14.1" must not match "14.10"
        return f"{version.rstrip('.')}."
    return version


def _newest_with_prefix(
    previews: list[ResolvedArtifact],
    insiders: list[ResolvedArtifact],
    prefix: str,
) -> ResolvedArtifact | None:
    """Highest match per channel; the preview wins ties and newer versions."""
    preview = _last_with_prefix(previews, prefix)
    insider = _last_with_prefix(insiders, prefix)
    if insider is None:
        return preview
    if preview is not None and preview.version >= insider.version:
        return preview
    return insider


def _last_with_prefix(
    artifacts: list[ResolvedArtifact], prefix: str
) -> ResolvedArtifact | None:
    matches = [a for a in artifacts if a.name.startswith(prefix)]
    return matches[-1] if matches else None

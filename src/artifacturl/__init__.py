"""artifacturl - Resolve versioned artifact download URLs from blob storage.

This library lists a blob container, filters the artifact names by country,
platform and date, applies a selection strategy (latest, first, closest,
next major, daily snapshot, ...) and caches the resolved URL for a
freshness window.

Example:
    >>> from artifacturl import ArtifactResolver, ResolutionRequest
    >>> resolver = ArtifactResolver.from_config()
    >>> resolver.resolve(ResolutionRequest(country="de"))  # doctest: +SKIP
    'https://bcartifacts.azureedge.net/sandbox/24.5.23489.0/de'
"""

from artifacturl.adapters.cache import MemoryCache
from artifacturl.adapters.listing import AzureBlobLister
from artifacturl.config import ResolverConfig
from artifacturl.core.exceptions import (
    ArtifactUrlError,
    ConfigurationError,
    ConflictingParameterError,
    ExpirationTooShortError,
    InsiderEulaNotAcceptedError,
    InvalidVersionError,
    ListingAccessError,
    ListingError,
    ListingNotFoundError,
    ListingRetriesExhaustedError,
    MissingVersionError,
    RequestValidationError,
)
from artifacturl.core.models import (
    ArtifactSelect,
    ArtifactType,
    BlobEntry,
    CachedResolution,
    CacheEntry,
    ResolutionRequest,
    ResolvedArtifact,
)
from artifacturl.core.ports import BlobListerPort, ResolutionCachePort
from artifacturl.core.services import ArtifactResolver
from artifacturl.core.version import Version


__version__ = "0.1.0"

__all__ = [
    "ArtifactResolver",
    "ArtifactSelect",
    "ArtifactType",
    "ArtifactUrlError",
    "AzureBlobLister",
    "BlobEntry",
    "BlobListerPort",
    "CacheEntry",
    "CachedResolution",
    "ConfigurationError",
    "ConflictingParameterError",
    "ExpirationTooShortError",
    "InsiderEulaNotAcceptedError",
    "InvalidVersionError",
    "ListingAccessError",
    "ListingError",
    "ListingNotFoundError",
    "ListingRetriesExhaustedError",
    "MemoryCache",
    "MissingVersionError",
    "RequestValidationError",
    "ResolutionCachePort",
    "ResolutionRequest",
    "ResolvedArtifact",
    "ResolverConfig",
    "Version",
    "__version__",
]

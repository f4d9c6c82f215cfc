"""Core domain module for artifacturl.

This module contains pure Python domain models, selection logic and port
definitions. It has no I/O dependencies and can be tested in isolation.
"""

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
from artifacturl.core.version import Version


__all__ = [
    "ArtifactSelect",
    "ArtifactType",
    "BlobEntry",
    "BlobListerPort",
    "CacheEntry",
    "CachedResolution",
    "ResolutionCachePort",
    "ResolutionRequest",
    "ResolvedArtifact",
    "Version",
]

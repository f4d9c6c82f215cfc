"""Basic artifact URL resolution example.

This example shows the simplest usage pattern: build a resolver, describe
the artifact you want, and get its download URL. Repeated requests within
the freshness window are served from the in-memory cache.
"""

from artifacturl import ArtifactResolver, ArtifactSelect, ResolutionRequest


# Factory method: Azure blob lister + in-memory cache, ARTIFACTURL_* settings
resolver = ArtifactResolver.from_config()

# Latest sandbox build for Germany
request = ResolutionRequest(country="de")
print(resolver.resolve(request))

# Closest build at or above a full version
closest = ResolutionRequest(
    country="w1",
    version="24.1.18989.0",
    select=ArtifactSelect.CLOSEST,
)
print(resolver.resolve(closest))

# Cached resolution: the second call does not list the container again
result = resolver.resolve_cached(request)
result = resolver.resolve_cached(request, expiration_seconds=900)
print(f"{result.url} (from cache: {result.from_cache}, cached at {result.cached_at})")

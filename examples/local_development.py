"""Offline development with a custom blob lister.

Any object with a ``list(container_url, prefix)`` method satisfies
BlobListerPort. This example serves a fixed listing so selection logic can
be explored without network access.
"""

from collections.abc import Iterator

from artifacturl import (
    ArtifactResolver,
    ArtifactSelect,
    BlobEntry,
    MemoryCache,
    ResolutionRequest,
)


class StaticLister:
    """Serve the same artifact names for every container."""

    def __init__(self, names: list[str]) -> None:
        self.names = names

    def list(self, container_url: str, prefix: str = "") -> Iterator[BlobEntry]:
        for name in self.names:
            if name.startswith(prefix):
                yield BlobEntry(name)


lister = StaticLister(
    [
        "14.5.0.0/w1",
        "14.5.0.0/platform",
        "15.0.0.0/w1",
        "15.0.0.0/platform",
        "15.2.0.0/w1",
        "15.2.0.0/platform",
    ]
)
resolver = ArtifactResolver(lister, cache=MemoryCache())

for select in (
    ArtifactSelect.LATEST,
    ArtifactSelect.FIRST,
    ArtifactSelect.SECOND_TO_LAST_MAJOR,
):
    request = ResolutionRequest(country="w1", select=select)
    print(f"{select.value}: {resolver.resolve(request)}")

# Every match, oldest first
for artifact in resolver.resolve_artifacts(ResolutionRequest(select=ArtifactSelect.ALL)):
    print(artifact.version, artifact.url)

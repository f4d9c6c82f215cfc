"""Shared fixtures for integration tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest
import responses


@pytest.fixture
def mocked_http():
    """Intercept requests made through requests.Session."""
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def listing_page() -> Callable[..., bytes]:
    """Build EnumerationResults bodies.

    Each blob is a name or a (name, RFC 1123 Last-Modified) pair.
    """

    def build(blobs: list, next_marker: str = "") -> bytes:
        parts = []
        for blob in blobs:
            name, modified = blob if isinstance(blob, tuple) else (blob, None)
            properties = (
                f"<Properties><Last-Modified>{modified}</Last-Modified></Properties>"
                if modified
                else "<Properties />"
            )
            parts.append(f"<Blob><Name>{name}</Name>{properties}</Blob>")
        return (
            '<?xml version="1.0" encoding="utf-8"?><EnumerationResults>'
            f"<Blobs>{''.join(parts)}</Blobs>"
            f"<NextMarker>{next_marker}</NextMarker></EnumerationResults>"
        ).encode()

    return build


@pytest.fixture
def azure_resolver():
    """Resolver using the real Azure lister (no retry delay) and a memory cache."""
    from artifacturl.adapters.cache import MemoryCache
    from artifacturl.adapters.listing import AzureBlobLister
    from artifacturl.config import ResolverConfig
    from artifacturl.core.services import ArtifactResolver

    config = ResolverConfig(retry_delay=0.0, insider_sas_token="?sv=insider")
    return ArtifactResolver(
        AzureBlobLister(max_attempts=config.max_page_attempts, retry_delay=0.0),
        cache=MemoryCache(),
        config=config,
    )

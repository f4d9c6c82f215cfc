"""Pytest configuration and shared fixtures.

This module registers custom markers for CI job separation and provides
shared fixtures for the test suite.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import UTC, datetime

import pytest

from artifacturl.core.models import BlobEntry


SANDBOX_LISTING = "https://bcartifacts.blob.core.windows.net/sandbox/"


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "core: Core models, selection and services")
    config.addinivalue_line("markers", "listing: Blob listing adapters")
    config.addinivalue_line("markers", "cache: Resolution cache adapter")
    config.addinivalue_line("markers", "cli: CLI tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests")
    config.addinivalue_line(
        "markers", "tra: Test Responsibility Anchor (TRA) - namespace.Anchor format"
    )
    config.addinivalue_line(
        "markers",
        "tier: Test tier for CI job separation (0=instant, 1=fast, 2=standard, 3=slow, 4=manual)",
    )


class FakeBlobLister:
    """In-memory BlobListerPort keyed by container URL.

    Records every (container_url, prefix) it is asked to list.
    """

    def __init__(self) -> None:
        self.containers: dict[str, list[BlobEntry]] = {}
        self.calls: list[tuple[str, str]] = []

    def add(
        self,
        container_url: str,
        names: list[str],
        last_modified: datetime | None = None,
    ) -> None:
        self.containers.setdefault(container_url, []).extend(
            BlobEntry(name=n, last_modified=last_modified) for n in names
        )

    def list(self, container_url: str, prefix: str = "") -> Iterator[BlobEntry]:
        self.calls.append((container_url, prefix))
        for entry in self.containers.get(container_url, []):
            if entry.name.startswith(prefix):
                yield entry


@pytest.fixture
def fake_lister() -> FakeBlobLister:
    """Reusable fake blob lister with no containers."""
    return FakeBlobLister()


@pytest.fixture
def now() -> datetime:
    """A fixed Wednesday afternoon used as the resolver clock."""
    return datetime(2024, 5, 15, 14, 30, tzinfo=UTC)


@pytest.fixture
def clock(now: datetime) -> Callable[[], datetime]:
    """Clock returning the fixed ``now``."""
    return lambda: now

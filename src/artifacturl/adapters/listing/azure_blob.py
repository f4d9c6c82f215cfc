"""Azure blob container listing adapter using requests."""

from __future__ import annotations

import codecs
import logging
import re
import time
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from email.utils import parsedate_to_datetime
from typing import TYPE_CHECKING, Self
from urllib.parse import urlsplit, urlunsplit

import requests

from artifacturl.core.exceptions import (
    ListingAccessError,
    ListingError,
    ListingNotFoundError,
    ListingRetriesExhaustedError,
)
from artifacturl.core.models import BlobEntry, as_utc


if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from datetime import datetime


logger = logging.getLogger(__name__)

# Status codes worth retrying on the same page
_RETRYABLE_STATUS = frozenset({408, 429, 500, 502, 503, 504})

_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


class _TransientPageError(Exception):
    """A page fetch failed in a way that may succeed on retry."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)


@dataclass
class _PageCursor:
    """Retry state for paginated listing: the page marker and attempts left.

    The attempt budget applies per page: it resets whenever the marker moves.
    """

    max_attempts: int
    marker: str = ""
    attempts_remaining: int = field(init=False)

    def __post_init__(self) -> None:
        self.attempts_remaining = self.max_attempts

    def advance(self, marker: str) -> None:
        """Move to the next page and restore the full attempt budget."""
        self.marker = marker
        self.attempts_remaining = self.max_attempts

    def record_failure(self) -> bool:
        """Consume one attempt; return False once the budget is spent."""
        self.attempts_remaining -= 1
        return self.attempts_remaining > 0


def _safe_url(url: str) -> str:
    """Drop the query string (which may hold a SAS token) for logs and errors."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


def decode_body(body: bytes) -> str:
    """Decode a listing body, removing UTF-8/UTF-16 byte-order marks."""
    if body.startswith(codecs.BOM_UTF8):
        text = body[len(codecs.BOM_UTF8) :].decode("utf-8")
    elif body.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        text = body.decode("utf-16")
    else:
        text = body.decode("utf-8")
    # The declared encoding no longer applies to the decoded text
    return _XML_DECLARATION.sub("", text.lstrip("\ufeff"), count=1)


def _parse_last_modified(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return as_utc(parsedate_to_datetime(value.strip()))
    except (TypeError, ValueError):
        logger.debug("Ignoring unparsable Last-Modified value %r", value)
        return None


def parse_listing(body: bytes) -> tuple[list[BlobEntry], str]:
    """Parse one ``EnumerationResults`` page.

    Args:
        body: Raw response body, possibly prefixed by a byte-order mark.

    Returns:
        Tuple of (blob entries in page order, next marker or "").

    Raises:
        xml.etree.ElementTree.ParseError: If the body is not well-formed XML.
    """
    root = ET.fromstring(decode_body(body))

    entries: list[BlobEntry] = []
    blobs = root.find("Blobs")
    if blobs is not None:
        for blob in blobs.findall("Blob"):
            name = (blob.findtext("Name") or "").strip()
            if not name:
                continue
            entries.append(
                BlobEntry(
                    name=name,
                    last_modified=_parse_last_modified(
                        blob.findtext("Properties/Last-Modified")
                    ),
                )
            )

    next_marker = (root.findtext("NextMarker") or "").strip()
    return entries, next_marker


class AzureBlobLister:
    """Blob lister for Azure storage containers.

    Implements BlobListerPort. Follows ``NextMarker`` continuation markers
    and retries each page up to ``max_attempts`` times on transient errors.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        max_attempts: int = 10,
        timeout: float = 30.0,
        retry_delay: float = 0.5,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the lister.

        Args:
            session: Optional requests session. If not provided, creates one.
            max_attempts: Attempts per page before the listing fails.
            timeout: HTTP timeout in seconds per page request.
            retry_delay: Seconds to wait between attempts on the same page.
            sleep: Sleep function (replaceable in tests).
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._max_attempts = max_attempts
        self._timeout = timeout
        self._retry_delay = retry_delay
        self._sleep = sleep

    def close(self) -> None:
        """Close the HTTP session if this lister created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def list(self, container_url: str, prefix: str = "") -> Iterator[BlobEntry]:
        """Enumerate blobs in a container.

        Args:
            container_url: Container URL, optionally with a SAS query string.
            prefix: Only return blobs whose name starts with this prefix.

        Yields:
            BlobEntry for every blob, page by page.

        Raises:
            ListingRetriesExhaustedError: If one page fails max_attempts times.
            ListingAccessError: If access is denied (HTTP 403).
            ListingNotFoundError: If the container does not exist (HTTP 404).
            ListingError: For other non-retryable HTTP errors.
        """
        safe_source = _safe_url(container_url)
        cursor = _PageCursor(self._max_attempts)

        while True:
            try:
                entries, next_marker = self._fetch_page(
                    container_url, prefix, cursor.marker
                )
            except _TransientPageError as e:
                if not cursor.record_failure():
                    raise ListingRetriesExhaustedError(
                        safe_source,
                        marker=cursor.marker,
                        attempts=self._max_attempts,
                        cause=e.cause,
                    ) from e
                logger.warning(
                    "Listing %s failed (%s), %d attempt(s) left for this page",
                    safe_source,
                    e,
                    cursor.attempts_remaining,
                )
                if self._retry_delay:
                    self._sleep(self._retry_delay)
                continue

            yield from entries

            if not next_marker:
                return
            if next_marker == cursor.marker:
                raise ListingError(
                    f"Listing {safe_source} returned the same marker twice",
                    source=safe_source,
                )
            cursor.advance(next_marker)

    def _fetch_page(
        self, container_url: str, prefix: str, marker: str
    ) -> tuple[list[BlobEntry], str]:
        """Fetch and parse one page, classifying failures."""
        params = {"comp": "list", "restype": "container"}
        if prefix:
            params["prefix"] = prefix
        if marker:
            params["marker"] = marker

        safe_source = _safe_url(container_url)
        logger.debug("Listing %s prefix=%r marker=%r", safe_source, prefix, marker)

        try:
            response = self._session.get(
                container_url, params=params, timeout=self._timeout
            )
        except requests.RequestException as e:
            raise _TransientPageError(f"request error: {e}", cause=e) from e

        status = response.status_code
        if status in _RETRYABLE_STATUS:
            raise _TransientPageError(f"HTTP {status}")
        if status == 403:
            raise ListingAccessError(
                f"Access denied listing {safe_source}", source=safe_source
            )
        if status == 404:
            raise ListingNotFoundError(
                f"Container not found: {safe_source}", source=safe_source
            )
        if status >= 400:
            raise ListingError(
                f"Listing {safe_source} failed with HTTP {status}",
                source=safe_source,
            )

        try:
            return parse_listing(response.content)
        except (ET.ParseError, UnicodeDecodeError) as e:
            raise _TransientPageError(f"malformed listing: {e}", cause=e) from e

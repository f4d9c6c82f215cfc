"""Configuration for artifacturl.

This module holds storage endpoints, retry limits and cache freshness
settings, with optional overrides from environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Self

from artifacturl.core.exceptions import ConfigurationError


if TYPE_CHECKING:
    from collections.abc import Mapping


ENV_PREFIX = "ARTIFACTURL_"

# Sandbox locales published only under another locale's artifacts
DEFAULT_COUNTRY_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "ae": "w1",
        "br": "w1",
        "co": "w1",
        "dz": "fr",
        "eg": "w1",
        "hk": "w1",
        "id": "w1",
        "kr": "w1",
        "ma": "fr",
        "my": "w1",
        "ng": "w1",
        "pe": "w1",
        "ph": "w1",
        "qa": "w1",
        "sa": "w1",
        "sg": "w1",
        "th": "w1",
        "tn": "fr",
        "tw": "w1",
        "vn": "w1",
        "za": "w1",
    }
)

# OnPrem builds that were withdrawn and replaced by a later build
DEFAULT_ONPREM_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("18.9", "18.10.35134.0"),
    ("17.14", "17.15.35135.0"),
    ("16.19", "16.19.35126.0"),
)


@dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Settings shared by the resolver, the blob lister and the cache.

    Attributes:
        default_storage_account: Account used when a request names none.
        insider_storage_account: EULA-gated account holding insider builds.
        public_preview_storage_account: Account holding public preview builds.
        cdn_suffix: Host suffix for download URLs of bare account names.
        blob_suffix: Host suffix for listing URLs of bare account names.
        insider_sas_token: SAS query string for the insider account.
        country_aliases: Sandbox country remap used when a locale has no builds.
        onprem_replacements: (version prefix, replacement build) pairs.
        max_page_attempts: Attempts per listing page before giving up.
        retry_delay: Seconds to wait between attempts on the same page.
        request_timeout: HTTP timeout in seconds for a single page fetch.
        default_expiration: Default cache freshness window in seconds.
        min_expiration: Smallest accepted explicit freshness window in seconds.
    """

    default_storage_account: str = "bcartifacts"
    insider_storage_account: str = "bcinsider"
    public_preview_storage_account: str = "bcpublicpreview"
    cdn_suffix: str = ".azureedge.net"
    blob_suffix: str = ".blob.core.windows.net"
    insider_sas_token: str = ""
    country_aliases: Mapping[str, str] = field(
        default_factory=lambda: DEFAULT_COUNTRY_ALIASES
    )
    onprem_replacements: tuple[tuple[str, str], ...] = DEFAULT_ONPREM_REPLACEMENTS
    max_page_attempts: int = 10
    retry_delay: float = 0.5
    request_timeout: float = 30.0
    default_expiration: int = 3600
    min_expiration: int = 900

    def __post_init__(self) -> None:
        """Validate numeric limits."""
        if self.max_page_attempts < 1:
            raise ConfigurationError("max_page_attempts must be at least 1")
        if self.retry_delay < 0:
            raise ConfigurationError("retry_delay cannot be negative")
        if self.request_timeout <= 0:
            raise ConfigurationError("request_timeout must be positive")
        if self.default_expiration < self.min_expiration:
            raise ConfigurationError(
                "default_expiration cannot be below min_expiration"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Self:
        """Build a configuration from ``ARTIFACTURL_*`` environment variables.

        Recognized variables: STORAGE_ACCOUNT, INSIDER_SAS_TOKEN,
        MAX_PAGE_ATTEMPTS, RETRY_DELAY, REQUEST_TIMEOUT, CACHE_EXPIRATION.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed.
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, object] = {}

        if account := env.get(f"{ENV_PREFIX}STORAGE_ACCOUNT"):
            overrides["default_storage_account"] = account
        if token := env.get(f"{ENV_PREFIX}INSIDER_SAS_TOKEN"):
            overrides["insider_sas_token"] = normalize_sas_token(token)

        numeric = {
            "MAX_PAGE_ATTEMPTS": ("max_page_attempts", int),
            "RETRY_DELAY": ("retry_delay", float),
            "REQUEST_TIMEOUT": ("request_timeout", float),
            "CACHE_EXPIRATION": ("default_expiration", int),
        }
        for suffix, (attr, convert) in numeric.items():
            raw = env.get(f"{ENV_PREFIX}{suffix}")
            if raw is None or raw == "":
                continue
            try:
                overrides[attr] = convert(raw)
            except ValueError as e:
                raise ConfigurationError(
                    f"{ENV_PREFIX}{suffix} must be a number, got '{raw}'"
                ) from e

        return cls(**overrides)  # type: ignore[arg-type]

    def sas_token_for(self, storage_account: str) -> str:
        """Return the SAS token configured for an account ("" if none)."""
        if _account_name(storage_account) == self.insider_storage_account:
            return self.insider_sas_token
        return ""

    def is_insider(self, storage_account: str) -> bool:
        """Whether the account is the EULA-gated insider account."""
        return _account_name(storage_account) == self.insider_storage_account

    def download_host(self, storage_account: str) -> str:
        """Host serving downloads for an account (bare names get the CDN suffix)."""
        account = storage_account or self.default_storage_account
        if "." not in account:
            return f"{account}{self.cdn_suffix}"
        return account

    def listing_host(self, storage_account: str) -> str:
        """Host serving container listings for an account."""
        return self.download_host(storage_account).replace(
            self.cdn_suffix, self.blob_suffix
        )


def normalize_sas_token(token: str) -> str:
    """Ensure a non-empty SAS token starts with ``?``."""
    token = token.strip()
    if token and not token.startswith("?"):
        return f"?{token}"
    return token


def _account_name(storage_account: str) -> str:
    return storage_account.split(".", 1)[0].lower()

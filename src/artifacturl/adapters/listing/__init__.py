"""Blob listing adapters."""

from artifacturl.adapters.listing.azure_blob import AzureBlobLister, parse_listing


__all__ = ["AzureBlobLister", "parse_listing"]

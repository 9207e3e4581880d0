"""Custom exception hierarchy for the DOI metadata adapter."""

from __future__ import annotations

from typing import Optional


class MetadataError(Exception):
    """Base exception for metadata adapter errors."""


class ConfigError(MetadataError):
    """Raised when configuration is invalid or incomplete."""


class ValidationError(MetadataError):
    """Raised when caller input or a registry record is malformed."""


class UpstreamError(MetadataError):
    """Raised when the mandatory registry lookup for a DOI fails."""

    def __init__(self, doi: str, cause: object, *, operation: str = "metadata") -> None:
        super().__init__(f"Failed to fetch {operation} for DOI {doi}: {cause}")
        self.doi = doi
        self.cause: Optional[object] = cause
        self.operation = operation

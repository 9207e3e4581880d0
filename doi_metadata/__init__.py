"""DOI metadata, author enhancement and BibTeX generation backed by Crossref and ORCID."""

from __future__ import annotations

from typing import Any, Dict, Optional

from .api import MetadataClient
from .config import MetadataConfig
from .core.models import NameSource, ReferenceList, ResolvedAuthor, WorkMetadata
from .exceptions import ConfigError, MetadataError, UpstreamError, ValidationError

_default_client: Optional[MetadataClient] = None


def get_default_client() -> MetadataClient:
    """Return the default ``MetadataClient`` instance, creating it lazily."""

    global _default_client
    if _default_client is None:
        _default_client = MetadataClient()
    return _default_client


def fetch_doi_metadata(doi: str) -> Dict[str, Any]:
    """Fetch metadata, enhanced author names and BibTeX for a DOI."""

    return get_default_client().fetch_metadata(doi).to_dict()


def fetch_references(doi: str) -> Dict[str, Any]:
    """Fetch the references cited by a DOI, if Crossref has them."""

    return get_default_client().fetch_references(doi).to_dict()


__all__ = [
    "ConfigError",
    "MetadataClient",
    "MetadataConfig",
    "MetadataError",
    "NameSource",
    "ReferenceList",
    "ResolvedAuthor",
    "UpstreamError",
    "ValidationError",
    "WorkMetadata",
    "fetch_doi_metadata",
    "fetch_references",
    "get_default_client",
]

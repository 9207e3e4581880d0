"""Core data models and identifiers for the metadata adapter."""

from .identifiers import is_valid_doi, normalize_doi, normalize_orcid
from .models import (
    DirectBibTeX,
    GeneratedBibTeX,
    NameSource,
    NormalizedWork,
    ReferenceList,
    ReferenceStub,
    ResolvedAuthor,
    Venue,
    WorkCounts,
    WorkMetadata,
    WorkType,
)

__all__ = [
    "DirectBibTeX",
    "GeneratedBibTeX",
    "NameSource",
    "NormalizedWork",
    "ReferenceList",
    "ReferenceStub",
    "ResolvedAuthor",
    "Venue",
    "WorkCounts",
    "WorkMetadata",
    "WorkType",
    "is_valid_doi",
    "normalize_doi",
    "normalize_orcid",
]

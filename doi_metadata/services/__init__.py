"""Service layer for the metadata adapter."""

from .author_resolver import AuthorResolver, baseline_author, is_abbreviated_given_name
from .bibtex_formatter import BibTeXFormatter
from .metadata_service import MetadataService, validate_doi
from .reference_extractor import ReferenceExtractor
from .work_normalizer import WorkNormalizer

__all__ = [
    "AuthorResolver",
    "BibTeXFormatter",
    "MetadataService",
    "ReferenceExtractor",
    "WorkNormalizer",
    "baseline_author",
    "is_abbreviated_given_name",
    "validate_doi",
]

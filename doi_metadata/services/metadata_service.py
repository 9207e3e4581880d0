"""DOI metadata and reference lookups backed by Crossref.

Only the Crossref work lookup is mandatory. The BibTeX export and the ORCID
name lookups are enhancements: when they fail the service falls back to a
locally generated entry and to the Crossref author names.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Optional

from doi_metadata.core.identifiers import is_valid_doi, normalize_doi
from doi_metadata.core.models import (
    BibTeXCitation,
    DirectBibTeX,
    GeneratedBibTeX,
    ReferenceList,
    WorkMetadata,
)
from doi_metadata.exceptions import UpstreamError, ValidationError
from doi_metadata.providers.clients.base import ClientError
from doi_metadata.providers.clients.crossref import CrossrefClient
from doi_metadata.services.author_resolver import AuthorResolver
from doi_metadata.services.bibtex_formatter import BibTeXFormatter
from doi_metadata.services.reference_extractor import ReferenceExtractor
from doi_metadata.services.work_normalizer import WorkNormalizer

logger = logging.getLogger(__name__)


def validate_doi(doi: Optional[str]) -> str:
    """Return the normalized DOI or raise :class:`ValidationError`."""

    if doi is None or not isinstance(doi, str) or not doi.strip():
        raise ValidationError("Missing required parameter: doi")
    normalized = normalize_doi(doi)
    if not is_valid_doi(normalized):
        raise ValidationError(f"Malformed DOI: {doi!r}")
    return normalized  # type: ignore[return-value]


class MetadataService:
    """Compose normalized metadata, resolved authors and BibTeX for a DOI."""

    def __init__(
        self,
        *,
        crossref: Optional[CrossrefClient] = None,
        normalizer: Optional[WorkNormalizer] = None,
        author_resolver: Optional[AuthorResolver] = None,
        formatter: Optional[BibTeXFormatter] = None,
        reference_extractor: Optional[ReferenceExtractor] = None,
        enable_direct_bibtex: bool = True,
    ) -> None:
        self.crossref = crossref or CrossrefClient()
        self.normalizer = normalizer or WorkNormalizer()
        self.author_resolver = author_resolver or AuthorResolver()
        self.formatter = formatter or BibTeXFormatter()
        self.reference_extractor = reference_extractor or ReferenceExtractor()
        self.enable_direct_bibtex = enable_direct_bibtex

    def fetch_metadata(self, doi: Optional[str]) -> WorkMetadata:
        normalized_doi = validate_doi(doi)
        raw = self._fetch_work(normalized_doi, operation="metadata")
        work = self.normalizer.normalize(raw, doi=normalized_doi)

        # The export runs alongside the ORCID lookups; both are joined here.
        with ThreadPoolExecutor(max_workers=1) as executor:
            export = (
                executor.submit(self._fetch_direct_bibtex, normalized_doi)
                if self.enable_direct_bibtex
                else None
            )
            authors = self.author_resolver.resolve_all(work.authors)
            direct = export.result() if export is not None else None

        citation: BibTeXCitation = direct or GeneratedBibTeX(work=work, authors=authors)
        try:
            bibtex = self.formatter.render(citation)
        except ValueError as exc:
            logger.warning("Crossref BibTeX export for %s could not be parsed: %s", work.doi, exc)
            citation = GeneratedBibTeX(work=work, authors=authors)
            bibtex = self.formatter.render(citation)
        logger.info(
            "Fetched DOI metadata",
            extra={"doi": work.doi, "authors": len(authors), "bibtex_source": citation.kind},
        )
        return WorkMetadata(work=work, authors=authors, bibtex=bibtex, bibtex_source=citation.kind)

    def fetch_references(self, doi: Optional[str]) -> ReferenceList:
        normalized_doi = validate_doi(doi)
        raw = self._fetch_work(normalized_doi, operation="references")
        record_doi = raw.get("DOI")
        if not isinstance(record_doi, str) or not record_doi.strip():
            record_doi = normalized_doi
        return self.reference_extractor.extract(raw, record_doi.strip())

    def _fetch_work(self, doi: str, *, operation: str) -> Dict[str, Any]:
        try:
            return self.crossref.get_work(doi)
        except ClientError as exc:
            raise UpstreamError(doi, exc, operation=operation) from exc

    def _fetch_direct_bibtex(self, doi: str) -> Optional[DirectBibTeX]:
        try:
            text = self.crossref.get_bibtex(doi)
        except ClientError as exc:
            logger.warning("Crossref BibTeX export failed for %s: %s", doi, exc)
            return None

        if not text or not text.strip().startswith("@"):
            logger.warning("Crossref BibTeX export for %s was empty or malformed", doi)
            return None
        return DirectBibTeX(text=text)

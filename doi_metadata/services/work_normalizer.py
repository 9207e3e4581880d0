"""Projection of raw Crossref work records onto :class:`NormalizedWork`."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from doi_metadata.core.models import NormalizedWork, Venue, WorkCounts
from doi_metadata.exceptions import ValidationError

DEFAULT_TITLE = "Untitled"
DEFAULT_TYPE = "article"

_DATE_KEYS = ("published-print", "published-online")


class WorkNormalizer:
    """Extract canonical metadata from a Crossref ``message`` record.

    The normalizer performs no I/O. Missing optional fields come back as
    ``None``; only the title and type are defaulted.
    """

    def __init__(self, *, default_title: str = DEFAULT_TITLE, default_type: str = DEFAULT_TYPE) -> None:
        self.default_title = default_title
        self.default_type = default_type

    def normalize(self, raw: Mapping[str, Any], *, doi: Optional[str] = None) -> NormalizedWork:
        if not isinstance(raw, Mapping):
            raise ValidationError("Work record must be a mapping")

        record_doi = self._text(raw.get("DOI")) or self._text(doi)
        if not record_doi:
            raise ValidationError("Work record has no DOI")

        return NormalizedWork(
            doi=record_doi,
            title=self._first(raw.get("title")) or self.default_title,
            type=self._text(raw.get("type")) or self.default_type,
            authors=self._extract_authors(raw.get("author")),
            year=self._extract_year(raw),
            venue=self._extract_venue(raw),
            volume=self._text(raw.get("volume")),
            issue=self._text(raw.get("issue")),
            pages=self._text(raw.get("page")),
            publisher=self._text(raw.get("publisher")),
            url=self._text(raw.get("URL")),
            abstract=self._text(raw.get("abstract")),
            published_date=self._published_date(raw),
            counts=WorkCounts(
                references_count=self._count(raw.get("references-count")),
                cited_by_count=self._count(raw.get("is-referenced-by-count")),
            ),
        )

    def _extract_year(self, raw: Mapping[str, Any]) -> Optional[int]:
        for key in _DATE_KEYS:
            component = raw.get(key)
            if not isinstance(component, dict):
                continue
            parts = component.get("date-parts")
            if isinstance(parts, list) and parts and isinstance(parts[0], list) and parts[0]:
                year = parts[0][0]
                if isinstance(year, int) and not isinstance(year, bool):
                    return year
                if isinstance(year, str) and year.isdigit():
                    return int(year)
        return None

    def _published_date(self, raw: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        for key in _DATE_KEYS:
            component = raw.get(key)
            if isinstance(component, dict):
                return dict(component)
        return None

    def _extract_venue(self, raw: Mapping[str, Any]) -> Venue:
        full_name = self._first(raw.get("container-title"))
        abbreviated = self._first(raw.get("short-container-title")) or full_name
        issn = raw.get("ISSN")
        return Venue(
            full_name=full_name,
            abbreviated=abbreviated,
            issn=[str(value) for value in issn] if isinstance(issn, list) else [],
        )

    def _extract_authors(self, authors: Any) -> List[Dict[str, Any]]:
        if not isinstance(authors, list):
            return []
        return [dict(author) for author in authors if isinstance(author, dict)]

    def _first(self, values: Any) -> Optional[str]:
        if isinstance(values, str):
            return values or None
        if isinstance(values, list) and values:
            return self._text(values[0])
        return None

    def _text(self, value: Any) -> Optional[str]:
        if value is None:
            return None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, str):
            return value or None
        return None

    def _count(self, value: Any) -> int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return 0

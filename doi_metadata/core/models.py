from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

UNKNOWN_AUTHOR = "Unknown Author"


class WorkType(str, Enum):
    """Work classification used to pick the BibTeX entry shape."""

    ARTICLE = "article"
    BOOK = "book"
    BOOK_CHAPTER = "book-chapter"
    PROCEEDINGS_ARTICLE = "proceedings-article"
    REPORT = "report"
    THESIS = "thesis"
    OTHER = "other"

    @classmethod
    def from_registry(cls, value: Optional[str]) -> "WorkType":
        if not value:
            return cls.ARTICLE
        return _REGISTRY_TYPES.get(value.strip().lower(), cls.OTHER)


_REGISTRY_TYPES: Dict[str, WorkType] = {
    "article": WorkType.ARTICLE,
    "journal-article": WorkType.ARTICLE,
    "book": WorkType.BOOK,
    "book-chapter": WorkType.BOOK_CHAPTER,
    "proceedings-article": WorkType.PROCEEDINGS_ARTICLE,
    "report": WorkType.REPORT,
    "thesis": WorkType.THESIS,
    "dissertation": WorkType.THESIS,
}


class NameSource(str, Enum):
    PRIMARY = "primary"
    IDENTITY_REGISTRY = "identity-registry"
    FALLBACK = "fallback"


@dataclass
class Venue:
    full_name: Optional[str] = None
    abbreviated: Optional[str] = None
    issn: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "full_name": self.full_name,
            "abbreviated": self.abbreviated,
            "issn": list(self.issn),
        }


@dataclass
class WorkCounts:
    references_count: int = 0
    cited_by_count: int = 0


@dataclass
class NormalizedWork:
    """Canonical projection of a Crossref work record.

    ``type`` keeps the registry's own type string for display while ``kind``
    classifies it for citation formatting. Optional fields are ``None`` when the
    record does not carry them.
    """

    doi: str
    title: str
    type: str
    authors: List[Dict[str, Any]] = field(default_factory=list)
    year: Optional[int] = None
    venue: Venue = field(default_factory=Venue)
    volume: Optional[str] = None
    issue: Optional[str] = None
    pages: Optional[str] = None
    publisher: Optional[str] = None
    url: Optional[str] = None
    abstract: Optional[str] = None
    published_date: Optional[Dict[str, Any]] = None
    counts: WorkCounts = field(default_factory=WorkCounts)

    @property
    def kind(self) -> WorkType:
        return WorkType.from_registry(self.type)


@dataclass
class ResolvedAuthor:
    given: str
    family: str
    full_name: str
    id: Optional[str] = None
    name_source: NameSource = NameSource.PRIMARY

    def to_dict(self) -> Dict[str, Any]:
        return {
            "given": self.given,
            "family": self.family,
            "full_name": self.full_name,
            "id": self.id,
            "name_source": self.name_source.value,
        }


@dataclass
class ReferenceStub:
    key: Optional[str] = None
    doi: Optional[str] = None
    title: Optional[str] = None
    authors: Optional[str] = None
    year: Optional[str] = None
    journal: Optional[str] = None
    volume: Optional[str] = None
    issue: Optional[str] = None
    pages: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "doi": self.doi,
            "title": self.title,
            "authors": self.authors,
            "year": self.year,
            "journal": self.journal,
            "volume": self.volume,
            "issue": self.issue,
            "pages": self.pages,
            "raw": self.raw,
        }


@dataclass
class ReferenceList:
    """References cited by a work.

    ``note`` is only set when the record carries no reference list at all; an
    explicit empty list yields ``references_count == 0`` without a note.
    """

    doi: str
    references_count: int
    references: List[ReferenceStub] = field(default_factory=list)
    note: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "doi": self.doi,
            "references_count": self.references_count,
            "references": [reference.to_dict() for reference in self.references],
        }
        if self.note is not None:
            payload["note"] = self.note
        return payload


@dataclass
class DirectBibTeX:
    """BibTeX exported by the registry; always re-sanitized before use."""

    text: str
    kind: str = field(default="direct", init=False)


@dataclass
class GeneratedBibTeX:
    """BibTeX to be generated locally from a normalized work."""

    work: NormalizedWork
    authors: Optional[List[ResolvedAuthor]] = None
    kind: str = field(default="generated", init=False)


BibTeXCitation = Union[DirectBibTeX, GeneratedBibTeX]


@dataclass
class WorkMetadata:
    work: NormalizedWork
    authors: List[ResolvedAuthor]
    bibtex: str
    bibtex_source: str = "generated"

    def to_dict(self) -> Dict[str, Any]:
        work = self.work
        return {
            "doi": work.doi,
            "title": work.title,
            "type": work.type,
            "authors": [author.to_dict() for author in self.authors],
            "year": work.year,
            "venue": work.venue.to_dict(),
            "volume": work.volume,
            "issue": work.issue,
            "pages": work.pages,
            "publisher": work.publisher,
            "url": work.url,
            "abstract": work.abstract,
            "published_date": work.published_date,
            "references_count": work.counts.references_count,
            "cited_by_count": work.counts.cited_by_count,
            "bibtex": self.bibtex,
            "bibtex_source": self.bibtex_source,
        }


__all__ = [
    "UNKNOWN_AUTHOR",
    "BibTeXCitation",
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
]

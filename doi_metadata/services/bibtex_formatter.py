"""Citation keys and BibTeX entries for normalized works.

Generated entries follow a fixed layout::

    @article{LeCun2015,
      title = {{Deep Learning}},
      author = {Yann LeCun},
      year = {2015},
      journal = {Nature}
    }

Titles are always wrapped in a second pair of braces so that LaTeX styles keep
their capitalization. Entries exported by Crossref are parsed with bibtexparser in
:meth:`BibTeXFormatter.sanitize_export`, which enforces the same title bracing
and drops abstracts.
"""

from __future__ import annotations

import re
import unicodedata
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import bibtexparser
from bibtexparser.bibdatabase import BibDatabase
from bibtexparser.bparser import BibTexParser
from bibtexparser.bwriter import BibTexWriter

from doi_metadata.core.models import (
    BibTeXCitation,
    DirectBibTeX,
    GeneratedBibTeX,
    NormalizedWork,
    ResolvedAuthor,
    WorkType,
)
from doi_metadata.services.author_resolver import baseline_author

UNKNOWN_KEY_AUTHOR = "Unknown"

ENTRY_TYPES: Dict[WorkType, str] = {
    WorkType.ARTICLE: "article",
    WorkType.BOOK: "book",
    WorkType.BOOK_CHAPTER: "incollection",
    WorkType.PROCEEDINGS_ARTICLE: "inproceedings",
    WorkType.REPORT: "techreport",
    WorkType.THESIS: "phdthesis",
    WorkType.OTHER: "article",
}

VENUE_FIELDS: Dict[str, str] = {
    "article": "journal",
    "incollection": "booktitle",
    "inproceedings": "booktitle",
}

_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")


def _ascii_fold(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def _first_family_name(authors: Sequence[Mapping[str, Any]]) -> str:
    if not authors or not isinstance(authors[0], Mapping):
        return ""
    family = authors[0].get("family")
    return family.strip() if isinstance(family, str) else ""


class BibTeXFormatter:
    """Render citation keys and BibTeX entries.

    ``today`` supplies the calendar date used when a work has no resolved year;
    it only affects the citation key and the ``year`` field.
    """

    def __init__(self, *, today: Optional[Callable[[], date]] = None) -> None:
        self.today = today or date.today

    def entry_type(self, kind: WorkType) -> str:
        return ENTRY_TYPES.get(kind, "article")

    def citation_year(self, work: NormalizedWork) -> int:
        return work.year if work.year is not None else self.today().year

    def citation_key(self, work: NormalizedWork) -> str:
        """Build ``<Family><Year>`` from the first author as Crossref records them."""

        family = _first_family_name(work.authors)
        key = f"{family or UNKNOWN_KEY_AUTHOR}{self.citation_year(work)}"
        return _NON_ALPHANUMERIC.sub("", _ascii_fold(key))

    def format_entry(
        self, work: NormalizedWork, authors: Optional[Sequence[ResolvedAuthor]] = None
    ) -> str:
        """Generate a BibTeX entry from ``work``.

        ``authors`` are the resolved authors in citation order. Without them the
        Crossref author names recorded on the work are used as they are.
        """

        resolved = self._authors_for(work, authors)
        entry_type = self.entry_type(work.kind)
        author_names = " and ".join(author.full_name for author in resolved) or UNKNOWN_KEY_AUTHOR

        fields: List[Tuple[str, str]] = [
            ("title", f"{{{work.title}}}"),
            ("author", author_names),
            ("year", str(self.citation_year(work))),
        ]
        venue_field = VENUE_FIELDS.get(entry_type)
        if venue_field and work.venue.full_name:
            fields.append((venue_field, work.venue.full_name))

        optional = (
            ("publisher", work.publisher),
            ("volume", work.volume),
            ("number", work.issue),
            ("pages", work.pages),
            ("doi", work.doi),
            ("url", work.url),
        )
        fields.extend((name, value) for name, value in optional if value)

        body = ",\n".join(f"  {name} = {{{value}}}" for name, value in fields)
        return f"@{entry_type}{{{self.citation_key(work)},\n{body}\n}}"

    def sanitize_export(self, text: str) -> str:
        """Drop ``abstract`` fields and double-brace the title of an exported entry.

        Raises :class:`ValueError` when ``text`` holds no BibTeX entry.
        """

        parser = BibTexParser(common_strings=True, ignore_nonstandard_types=False)
        try:
            exported = bibtexparser.loads(text, parser=parser)
        except Exception as exc:
            raise ValueError(f"Exported BibTeX could not be parsed: {exc}") from exc
        if not exported.entries:
            raise ValueError("Exported BibTeX contains no entries")

        cleaned = BibDatabase()
        cleaned.entries = [self._clean_entry(entry) for entry in exported.entries]
        writer = BibTexWriter()
        writer.indent = "  "
        writer.order_entries_by = None
        # Exported field order is preserved.
        writer.display_order = list(
            dict.fromkeys(name for entry in cleaned.entries for name in entry if name not in ("ENTRYTYPE", "ID"))
        )
        return bibtexparser.dumps(cleaned, writer=writer).strip()

    def render(self, citation: BibTeXCitation) -> str:
        if isinstance(citation, DirectBibTeX):
            return self.sanitize_export(citation.text)
        if isinstance(citation, GeneratedBibTeX):
            return self.format_entry(citation.work, citation.authors)
        raise TypeError(f"Unsupported citation variant: {type(citation).__name__}")

    def _clean_entry(self, entry: Dict[str, str]) -> Dict[str, str]:
        cleaned = {name: value for name, value in entry.items() if name.lower() != "abstract"}
        title = cleaned.get("title")
        if title is not None and not (title.startswith("{") and title.endswith("}")):
            cleaned["title"] = f"{{{title}}}"
        return cleaned

    def _authors_for(
        self, work: NormalizedWork, authors: Optional[Sequence[ResolvedAuthor]]
    ) -> List[ResolvedAuthor]:
        if authors is not None:
            return list(authors)
        return [baseline_author(author) for author in work.authors]

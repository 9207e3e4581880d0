from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from doi_metadata.core.models import ReferenceList, ReferenceStub

NO_REFERENCES_NOTE = "No references available for this DOI"


class ReferenceExtractor:
    """Map the ``reference`` list of a Crossref record onto :class:`ReferenceStub` items."""

    def extract(self, raw: Mapping[str, Any], doi: str) -> ReferenceList:
        references = raw.get("reference")
        if not isinstance(references, list):
            return ReferenceList(doi=doi, references_count=0, references=[], note=NO_REFERENCES_NOTE)

        stubs = [self._to_stub(item if isinstance(item, dict) else {}) for item in references]
        return ReferenceList(doi=doi, references_count=len(stubs), references=stubs)

    def _to_stub(self, reference: Dict[str, Any]) -> ReferenceStub:
        return ReferenceStub(
            key=self._value(reference, "key"),
            doi=self._value(reference, "DOI"),
            title=self._value(reference, "article-title") or self._value(reference, "volume-title"),
            authors=self._value(reference, "author"),
            year=self._value(reference, "year"),
            journal=self._value(reference, "journal-title"),
            volume=self._value(reference, "volume"),
            issue=self._value(reference, "issue"),
            pages=self._value(reference, "first-page"),
            raw=dict(reference),
        )

    def _value(self, reference: Dict[str, Any], key: str) -> Optional[Any]:
        value = reference.get(key)
        if value is None or value == "":
            return None
        return value


__all__ = ["NO_REFERENCES_NOTE", "ReferenceExtractor"]

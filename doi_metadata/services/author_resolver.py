"""Author name resolution with optional ORCID enhancement.

Crossref frequently records given names as initials (``"Y."``). When an author
carries an ORCID the resolver asks the ORCID registry for the full public name
and falls back to the Crossref name whenever that lookup is skipped or fails.

Example
-------
```python
from doi_metadata.providers.clients.orcid import OrcidClient
from doi_metadata.services.author_resolver import AuthorResolver

resolver = AuthorResolver(orcid_client=OrcidClient())
authors = resolver.resolve_all(work.authors)
```
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, List, Mapping, Optional, Sequence

from doi_metadata.core.models import UNKNOWN_AUTHOR, NameSource, ResolvedAuthor
from doi_metadata.providers.clients.base import ClientError
from doi_metadata.providers.clients.orcid import OrcidClient

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def baseline_full_name(author: Mapping[str, Any]) -> str:
    given = _text(author.get("given"))
    family = _text(author.get("family"))
    name = _text(author.get("name"))
    if given and family:
        return f"{given} {family}"
    if family:
        return family
    if name:
        return name
    return UNKNOWN_AUTHOR


def baseline_author(author: Mapping[str, Any]) -> ResolvedAuthor:
    """Resolve ``author`` from the Crossref fields alone."""

    full_name = baseline_full_name(author)
    orcid = author.get("ORCID")
    return ResolvedAuthor(
        given=_text(author.get("given")),
        family=_text(author.get("family")),
        full_name=full_name,
        id=orcid if isinstance(orcid, str) and orcid else None,
        name_source=NameSource.FALLBACK if full_name == UNKNOWN_AUTHOR else NameSource.PRIMARY,
    )


def is_abbreviated_given_name(given: str) -> bool:
    """Return ``True`` when ``given`` looks like an initial such as ``"J."``.

    This is a coarse proxy (three characters or fewer containing a period);
    names like ``"J.R.R."`` or ``"Jo"`` slip past it.
    """

    return bool(given) and len(given) <= 3 and "." in given


class AuthorResolver:
    """Resolve Crossref author fragments into :class:`ResolvedAuthor` records."""

    def __init__(
        self,
        *,
        orcid_client: Optional[OrcidClient] = None,
        enable_lookup: bool = True,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self.orcid_client = orcid_client if orcid_client is not None else OrcidClient()
        self.enable_lookup = enable_lookup
        self.max_workers = max(1, max_workers)

    def should_lookup(self, author: Mapping[str, Any]) -> bool:
        if not self.enable_lookup or not author.get("ORCID"):
            return False
        return is_abbreviated_given_name(_text(author.get("given")))

    def resolve(self, author: Mapping[str, Any]) -> ResolvedAuthor:
        baseline = baseline_author(author)
        if not self.should_lookup(author):
            return baseline

        orcid = str(author["ORCID"])
        try:
            orcid_name = self.orcid_client.get_person_name(orcid)
        except (ClientError, ValueError) as exc:
            logger.debug("ORCID lookup failed for %s: %s", orcid, exc)
            return baseline

        given, _, family = orcid_name.full_name.rpartition(" ")
        if not given or not family:
            return baseline

        return ResolvedAuthor(
            given=given,
            family=family,
            full_name=orcid_name.full_name,
            id=baseline.id,
            name_source=NameSource.IDENTITY_REGISTRY,
        )

    def resolve_all(self, authors: Sequence[Mapping[str, Any]]) -> List[ResolvedAuthor]:
        """Resolve every author concurrently, preserving the input order."""

        if not authors:
            return []

        resolved: List[Optional[ResolvedAuthor]] = [None] * len(authors)
        workers = min(self.max_workers, len(authors))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(self.resolve, author): index for index, author in enumerate(authors)
            }
            for future in as_completed(futures):
                index = futures[future]
                try:
                    resolved[index] = future.result()
                except Exception as exc:
                    logger.warning("Author resolution failed at position %s: %s", index, exc)
                    resolved[index] = baseline_author(authors[index])

        return [author for author in resolved if author is not None]

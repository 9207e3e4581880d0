from __future__ import annotations

import re

_DOI_PREFIX_PATTERN = re.compile(r"^(https?://)?(dx\.)?doi\.org/", re.IGNORECASE)
_DOI_SHAPE_PATTERN = re.compile(r"^10\.\d+/\S+$")
_ORCID_PATTERN = re.compile(r"(\d{4}-\d{4}-\d{4}-\d{3}[\dXx])")


def normalize_doi(doi: str | None) -> str | None:
    """Normalize a DOI string into a canonical lowercase form.

    The normalization removes leading DOI prefixes (e.g., ``https://doi.org/`` or
    ``doi:``), trims whitespace, and lowercases the remaining identifier. Empty
    or missing values return ``None``.
    """

    if not doi:
        return None

    cleaned = doi.strip()
    cleaned = _DOI_PREFIX_PATTERN.sub("", cleaned)
    if cleaned.lower().startswith("doi:"):
        cleaned = cleaned.split(":", 1)[1]
    cleaned = cleaned.strip().lower()

    return cleaned or None


def is_valid_doi(doi: str | None) -> bool:
    """Return ``True`` when ``doi`` looks like ``10.<registrant>/<suffix>``."""

    if not doi:
        return False
    return bool(_DOI_SHAPE_PATTERN.match(doi))


def normalize_orcid(orcid: str | None) -> str | None:
    """Extract the bare ``0000-0000-0000-000X`` identifier from an ORCID value.

    Crossref reports ORCIDs as ``http://orcid.org/...`` or ``https://orcid.org/...``
    URLs; bare identifiers pass through. Anything without a recognizable
    identifier returns ``None``.
    """

    if not orcid:
        return None

    match = _ORCID_PATTERN.search(orcid.strip())
    if not match:
        return None
    return match.group(1).upper()

"""Crossref client for work records and BibTeX exports."""

from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import quote

from doi_metadata.providers.clients.base import BaseHttpClient, InvalidResponseError

BIBTEX_MEDIA_TYPE = "application/x-bibtex"


def _doi_path(doi: str) -> str:
    return quote(doi.strip(), safe="/")


class CrossrefClient(BaseHttpClient):
    """Lightweight wrapper around the Crossref works API.

    Errors propagate as :class:`~doi_metadata.providers.clients.base.ClientError`
    subclasses; deciding which failures are fatal is left to the service layer.
    """

    BASE_URL = "https://api.crossref.org"

    def get_work(self, doi: str) -> Dict[str, Any]:
        """Return the raw ``message`` record for ``doi``."""

        response = self._request("GET", f"/works/{_doi_path(doi)}")
        payload = self._json(response)
        message = payload.get("message") if isinstance(payload, dict) else None
        if not isinstance(message, dict):
            raise InvalidResponseError("Crossref response did not contain a work record")
        return message

    def get_bibtex(self, doi: str, *, attempts: Optional[int] = 1) -> str:
        """Return the registry's own BibTeX serialization for ``doi``.

        A single attempt is made by default since callers can always generate an
        entry locally.
        """

        response = self._request(
            "GET",
            f"/works/{_doi_path(doi)}/transform/{BIBTEX_MEDIA_TYPE}",
            headers={"Accept": BIBTEX_MEDIA_TYPE},
            attempts=attempts,
        )
        return response.text

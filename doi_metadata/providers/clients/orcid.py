"""ORCID public API client for researcher names."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from doi_metadata.core.identifiers import normalize_orcid
from doi_metadata.providers.clients.base import BaseHttpClient, InvalidResponseError


@dataclass
class OrcidName:
    given_names: str
    family_name: str

    @property
    def full_name(self) -> str:
        return f"{self.given_names} {self.family_name}"


class OrcidClient(BaseHttpClient):
    """Thin wrapper around the ORCID ``/{id}/person`` endpoint."""

    BASE_URL = "https://pub.orcid.org/v3.0"

    def get_person_name(self, orcid: str, *, attempts: Optional[int] = 1) -> OrcidName:
        """Return the public name recorded for ``orcid``.

        One attempt is made unless ``attempts`` says otherwise. Raises
        :class:`InvalidResponseError` when the identifier is unusable or the
        record does not expose both given and family names.
        """

        orcid_id = normalize_orcid(orcid)
        if not orcid_id:
            raise InvalidResponseError(f"Not an ORCID identifier: {orcid!r}")

        response = self._request(
            "GET",
            f"/{orcid_id}/person",
            headers={"Accept": "application/json"},
            attempts=attempts,
        )
        payload = self._json(response)
        name = payload.get("name") if isinstance(payload, dict) else None
        if not isinstance(name, dict):
            raise InvalidResponseError(f"ORCID record {orcid_id} has no public name")

        given = self._field_value(name.get("given-names"))
        family = self._field_value(name.get("family-name"))
        if not given or not family:
            raise InvalidResponseError(f"ORCID record {orcid_id} has an incomplete name")
        return OrcidName(given_names=given, family_name=family)

    def _field_value(self, field: Any) -> Optional[str]:
        if not isinstance(field, dict):
            return None
        value = field.get("value")
        if not isinstance(value, str):
            return None
        cleaned = " ".join(value.split())
        return cleaned or None

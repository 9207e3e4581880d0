"""Application configuration for the DOI metadata adapter."""

from typing import Optional

import requests
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from doi_metadata.providers.clients.base import DEFAULT_USER_AGENT


class MetadataConfig(BaseSettings):  # type: ignore[misc]
    """Settings controlling registry endpoints and optional lookups."""

    crossref_base_url: str = Field(
        "https://api.crossref.org", description="Base URL of the Crossref REST API"
    )
    orcid_base_url: str = Field(
        "https://pub.orcid.org/v3.0", description="Base URL of the ORCID public API"
    )
    user_agent: str = Field(
        DEFAULT_USER_AGENT, description="User-Agent header sent to both registries"
    )
    request_timeout_s: float = Field(
        10.0, description="Timeout (in seconds) for outbound HTTP requests"
    )
    max_attempts: int = Field(
        3, description="Attempts for the mandatory work lookup before giving up"
    )
    enable_orcid_lookup: bool = Field(
        True, description="Expand abbreviated given names through ORCID"
    )
    enable_direct_bibtex: bool = Field(
        True, description="Prefer the BibTeX exported by Crossref over a generated entry"
    )
    author_lookup_workers: int = Field(
        8, description="Concurrent ORCID lookups per work"
    )

    model_config = SettingsConfigDict(env_prefix="DOI_METADATA_", env_file=".env", extra="ignore")

    @field_validator("crossref_base_url", "orcid_base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        cleaned = value.strip().rstrip("/")
        if not cleaned.startswith(("http://", "https://")):
            raise ValueError("base URLs must start with http:// or https://")
        return cleaned

    @field_validator("request_timeout_s")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("request_timeout_s must be positive")
        return value

    @field_validator("max_attempts", "author_lookup_workers")
    @classmethod
    def validate_positive_int(cls, value: int) -> int:
        if value < 1:
            raise ValueError("value must be at least 1")
        return value

    def build_session(self, session: Optional[requests.Session] = None) -> requests.Session:
        """Return a :class:`requests.Session` carrying the configured User-Agent."""

        session = session if session is not None else requests.Session()
        if self.user_agent:
            session.headers["User-Agent"] = self.user_agent
        session.headers.setdefault("Accept", "application/json")
        return session

"""High-level metadata API keyed by DOI.

Example: metadata and BibTeX for a DOI
--------------------------------------
```python
from doi_metadata.api import MetadataClient

client = MetadataClient()
metadata = client.fetch_metadata("10.1038/nature14539")
print(metadata.work.title, metadata.bibtex)
```
"""

from __future__ import annotations

from typing import Optional

import pydantic
import requests

from .config import MetadataConfig
from .core.models import ReferenceList, WorkMetadata
from .exceptions import ConfigError
from .providers.clients.crossref import CrossrefClient
from .providers.clients.orcid import OrcidClient
from .services.author_resolver import AuthorResolver
from .services.bibtex_formatter import BibTeXFormatter
from .services.metadata_service import MetadataService
from .services.reference_extractor import ReferenceExtractor
from .services.work_normalizer import WorkNormalizer


def load_config() -> MetadataConfig:
    """Build :class:`MetadataConfig` from the environment."""

    try:
        return MetadataConfig()
    except pydantic.ValidationError as exc:
        raise ConfigError(f"Invalid metadata configuration: {exc}") from exc


class MetadataClient:
    """Facade wiring the Crossref and ORCID clients into :class:`MetadataService`."""

    def __init__(
        self,
        config: Optional[MetadataConfig] = None,
        *,
        session: Optional[requests.Session] = None,
        crossref_client: Optional[CrossrefClient] = None,
        orcid_client: Optional[OrcidClient] = None,
        formatter: Optional[BibTeXFormatter] = None,
        debug_logging: bool = False,
    ) -> None:
        self.config = config or load_config()
        self.session = self.config.build_session(session)

        crossref_client = crossref_client or CrossrefClient(
            session=self.session,
            base_url=self.config.crossref_base_url,
            timeout=self.config.request_timeout_s,
            max_attempts=self.config.max_attempts,
            debug_logging=debug_logging,
        )
        orcid_client = orcid_client or OrcidClient(
            session=self.session,
            base_url=self.config.orcid_base_url,
            timeout=self.config.request_timeout_s,
            debug_logging=debug_logging,
        )

        self._service = MetadataService(
            crossref=crossref_client,
            normalizer=WorkNormalizer(),
            author_resolver=AuthorResolver(
                orcid_client=orcid_client,
                enable_lookup=self.config.enable_orcid_lookup,
                max_workers=self.config.author_lookup_workers,
            ),
            formatter=formatter or BibTeXFormatter(),
            reference_extractor=ReferenceExtractor(),
            enable_direct_bibtex=self.config.enable_direct_bibtex,
        )

    def fetch_metadata(self, doi: str) -> WorkMetadata:
        """Return normalized metadata, resolved authors and BibTeX for ``doi``."""

        return self._service.fetch_metadata(doi)

    def fetch_references(self, doi: str) -> ReferenceList:
        """Return the references Crossref records for ``doi``."""

        return self._service.fetch_references(doi)

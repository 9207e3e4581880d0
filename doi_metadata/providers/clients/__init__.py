"""HTTP clients for the bibliographic and identity registries."""

from .base import (
    BaseHttpClient,
    ClientError,
    InvalidResponseError,
    NotFoundError,
    RateLimitedError,
    RequestRejectedError,
    ServiceError,
)
from .crossref import CrossrefClient
from .orcid import OrcidClient, OrcidName

__all__ = [
    "BaseHttpClient",
    "ClientError",
    "CrossrefClient",
    "InvalidResponseError",
    "NotFoundError",
    "OrcidClient",
    "OrcidName",
    "RateLimitedError",
    "RequestRejectedError",
    "ServiceError",
]

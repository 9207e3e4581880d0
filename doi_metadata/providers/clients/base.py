"""HTTP plumbing shared by the Crossref and ORCID clients.

Every registry call goes through :meth:`BaseHttpClient._request`, which retries
transport failures and throttled or failing responses with tenacity and then
translates the final status code into a :class:`ClientError` subclass. The
number of attempts comes from ``max_attempts`` unless a call narrows it with
``attempts=``; optional lookups pass ``attempts=1``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Dict, Optional

import requests
from tenacity import RetryCallState, retry, retry_if_exception_type, wait_exponential_jitter

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "doi-metadata/1.0"
DEFAULT_MAX_ATTEMPTS = 3

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})

BACKOFF_INITIAL_SECONDS = 0.5
BACKOFF_MAX_SECONDS = 8.0

EXCERPT_LENGTH = 200


class ClientError(Exception):
    """Base class for failures talking to a registry."""


class NotFoundError(ClientError):
    """The registry has no record at the requested path (HTTP 404)."""


class RateLimitedError(ClientError):
    """The registry kept throttling the request (HTTP 429)."""

    def __init__(self, message: str, retry_after: Optional[float] = None) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class RequestRejectedError(ClientError):
    """Any other 4xx answer."""

    def __init__(self, status: int, message: str, body_excerpt: Optional[str] = None) -> None:
        super().__init__(message)
        self.status = status
        self.body_excerpt = body_excerpt


class ServiceError(ClientError):
    """5xx answers and transport failures that outlived the retry budget."""


class InvalidResponseError(ClientError):
    """A successful answer whose payload cannot be used."""


class _RetryableStatus(Exception):
    def __init__(self, response: requests.Response) -> None:
        super().__init__(f"HTTP {response.status_code}")
        self.response = response


def retry_after_seconds(response: requests.Response) -> Optional[float]:
    """Read ``Retry-After`` as seconds, accepting both delta and HTTP-date forms."""

    value = (response.headers.get("Retry-After") or "").strip()
    if not value:
        return None
    if value.isdigit():
        return float(value)
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max((when - datetime.now(timezone.utc)).total_seconds(), 0.0)


def body_excerpt(response: requests.Response) -> Optional[str]:
    text = " ".join((response.text or "").split())
    return text[:EXCERPT_LENGTH] or None


_backoff = wait_exponential_jitter(initial=BACKOFF_INITIAL_SECONDS, max=BACKOFF_MAX_SECONDS)


def _wait(retry_state: RetryCallState) -> float:
    outcome = retry_state.outcome
    if outcome is not None and outcome.failed:
        error = outcome.exception()
        if isinstance(error, _RetryableStatus):
            hinted = retry_after_seconds(error.response)
            if hinted is not None:
                return min(hinted, BACKOFF_MAX_SECONDS)
    return _backoff(retry_state)


def _budget_spent(retry_state: RetryCallState) -> bool:
    client = retry_state.args[0] if retry_state.args else None
    budget = retry_state.kwargs.get("attempts") or getattr(
        client, "max_attempts", DEFAULT_MAX_ATTEMPTS
    )
    return retry_state.attempt_number >= max(int(budget), 1)


def _log_retry(retry_state: RetryCallState) -> None:
    client = retry_state.args[0] if retry_state.args else None
    if not getattr(client, "debug_logging", False):
        return
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.debug(
        "Retrying %s (attempt %s failed: %s)",
        retry_state.args[2] if len(retry_state.args) > 2 else "request",
        retry_state.attempt_number,
        error,
    )


class BaseHttpClient:
    """Registry client base holding the session, base URL and retry budget.

    Without an explicit ``session`` the client opens its own, identified by
    ``user_agent``. Sessions passed in are used as they are.
    """

    BASE_URL = ""

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 10.0,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        debug_logging: bool = False,
    ) -> None:
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = user_agent
        self.session = session
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.debug_logging = debug_logging

    @retry(
        reraise=True,
        stop=_budget_spent,
        wait=_wait,
        retry=retry_if_exception_type((requests.RequestException, _RetryableStatus)),
        before_sleep=_log_retry,
    )
    def _send(
        self, method: str, url: str, *, attempts: Optional[int] = None, **kwargs: Any
    ) -> requests.Response:
        response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        if response.status_code in RETRYABLE_STATUS_CODES:
            raise _RetryableStatus(response)
        return response

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        attempts: Optional[int] = None,
    ) -> requests.Response:
        url = f"{self.base_url}{path}"
        if self.debug_logging:
            logger.debug("%s %s", method.upper(), url)
        try:
            response = self._send(method, url, attempts=attempts, params=params, headers=headers)
        except _RetryableStatus as exc:
            response = exc.response
        except requests.RequestException as exc:
            raise ServiceError(f"Request to {url} failed: {exc}") from exc
        return self._raise_for_status(response)

    def _raise_for_status(self, response: requests.Response) -> requests.Response:
        status = response.status_code
        if status < 400:
            return response
        if status == 404:
            raise NotFoundError(f"Not found: {response.url}")
        if status == 429:
            raise RateLimitedError("Rate limit exceeded", retry_after=retry_after_seconds(response))

        excerpt = body_excerpt(response)
        detail = f" {excerpt}" if excerpt else ""
        if status >= 500:
            raise ServiceError(f"Registry error ({status}){detail}")
        raise RequestRejectedError(status, f"Request rejected ({status}){detail}", body_excerpt=excerpt)

    def _json(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise InvalidResponseError(f"Response body is not valid JSON: {exc}") from exc

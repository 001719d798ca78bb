"""Upstream feed fetching."""

import json
import logging
from typing import Dict, Mapping

import requests
from pydantic import BaseModel, Field, ValidationError, field_validator

ALLOWED_METHODS = ("GET", "POST")


class InvalidFetchRequest(ValueError):
    """Raised when the caller's connection parameters cannot be used."""


class UpstreamError(Exception):
    """Raised when the upstream fetch fails."""

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class UpstreamTimeout(UpstreamError):
    """Raised when the upstream does not answer within the timeout."""


class FetchRequest(BaseModel):
    """Connection parameters for an upstream feed."""

    host: str = Field(min_length=1)
    path: str = Field(min_length=1)
    method: str = "GET"
    headers: Dict[str, str] = Field(default_factory=dict)

    @field_validator('method')
    @classmethod
    def normalize_method(cls, value: str) -> str:
        method = value.upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Method must be one of {list(ALLOWED_METHODS)}")
        return method

    @field_validator('path')
    @classmethod
    def require_absolute_path(cls, value: str) -> str:
        if not value.startswith('/'):
            raise ValueError("Path must start with '/'")
        return value

    @classmethod
    def from_form(cls, form: Mapping[str, str]) -> "FetchRequest":
        """
        Build a request from url-encoded form fields.

        ``headers`` is accepted as a JSON object string.

        Raises:
            InvalidFetchRequest: If required fields are missing or invalid
        """
        data = {key: form[key] for key in ("host", "path", "method") if form.get(key)}

        raw_headers = form.get("headers")
        if raw_headers:
            try:
                headers = json.loads(raw_headers)
            except json.JSONDecodeError as e:
                raise InvalidFetchRequest(f"headers is not valid JSON: {e}")
            if not isinstance(headers, dict):
                raise InvalidFetchRequest("headers must be a JSON object")
            data["headers"] = {str(k): str(v) for k, v in headers.items()}

        try:
            return cls(**data)
        except ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
            raise InvalidFetchRequest(f"Invalid fetch request fields: {fields}")


class UpstreamFetcher:
    """Fetches upstream feeds into memory."""

    def __init__(
        self,
        timeout: float = 10.0,
        scheme: str = "http",
        user_agent: str = "RSS-Relay/1.0",
    ):
        """
        Initialize the fetcher.

        Args:
            timeout: Connect and read timeout in seconds
            scheme: URL scheme used for upstream requests
            user_agent: User-Agent header sent upstream
        """
        self.timeout = timeout
        self.scheme = scheme
        self.user_agent = user_agent

    def _create_session(self) -> requests.Session:
        """Create HTTP session with default headers."""
        session = requests.Session()
        session.headers.update({'User-Agent': self.user_agent})
        return session

    def build_url(self, request: FetchRequest) -> str:
        return f"{self.scheme}://{request.host}{request.path}"

    def fetch(self, request: FetchRequest) -> bytes:
        """
        Fetch the full upstream body.

        Blocking; callers on the event loop run this in a worker thread.
        Each call opens its own session, so concurrent workers never share
        connection state.

        Args:
            request: Upstream connection parameters

        Returns:
            Complete response body

        Raises:
            UpstreamTimeout: If the upstream does not answer in time
            UpstreamError: On connection failures or error statuses
        """
        url = self.build_url(request)
        logging.info(f"Fetching feed: {request.method} {url}")

        try:
            with self._create_session() as session:
                response = session.request(
                    request.method,
                    url,
                    headers=request.headers or None,
                    timeout=self.timeout,
                )
            response.raise_for_status()
        except requests.Timeout as e:
            logging.error(f"Timeout fetching feed {url}: {e}")
            raise UpstreamTimeout(f"Upstream timed out after {self.timeout}s", url) from e
        except requests.HTTPError as e:
            logging.error(f"HTTP error fetching feed {url}: {e}")
            raise UpstreamError(f"Upstream returned {e.response.status_code}", url) from e
        except requests.RequestException as e:
            logging.error(f"Error fetching feed {url}: {e}")
            raise UpstreamError(f"Upstream connection failed: {e.__class__.__name__}", url) from e

        logging.debug(f"Fetched {len(response.content)} bytes from {url}")
        return response.content

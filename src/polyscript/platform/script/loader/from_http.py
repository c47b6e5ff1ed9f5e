"""Loader for scripts fetched over HTTP(S).

Authentication is configured through ``HTTPOptions``:

- no authentication (default)
- basic authentication: ``HTTPOptions().with_basic_auth(user, password)``
- bearer token: ``HTTPOptions().with_bearer_auth(token)``
- arbitrary auth headers: ``HTTPOptions().with_header_auth({"X-API-Key": key})``

Example:
    >>> options = HTTPOptions(timeout=10).with_bearer_auth("s3cret")
    >>> loader = FromHTTP("https://scripts.example.com/greet.py", options)
    >>> with loader.get_reader() as reader:
    ...     source = reader.read()
"""

import io
import logging
from typing import BinaryIO, Literal

import httpx
from pydantic import Field

from polyscript.errors import LoaderError, SchemeUnsupportedError, ScriptNotAvailableError
from polyscript.models import PolyscriptBaseModel

from .base import Loader

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "polyscript/http-loader"


class HTTPOptions(PolyscriptBaseModel):
    """Client settings for FromHTTP.

    Instances are immutable; the ``with_*`` helpers return modified copies.
    """

    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    verify: bool = Field(default=True, description="Verify TLS certificates")
    auth_type: Literal["none", "basic", "bearer", "header"] = "none"
    username: str | None = None
    password: str | None = None
    token: str | None = None
    auth_headers: dict[str, str] = Field(default_factory=dict)
    headers: dict[str, str] = Field(
        default_factory=dict, description="Extra headers unrelated to authentication"
    )

    def with_basic_auth(self, username: str, password: str) -> "HTTPOptions":
        return self.model_copy(
            update={"auth_type": "basic", "username": username, "password": password}
        )

    def with_bearer_auth(self, token: str) -> "HTTPOptions":
        return self.model_copy(update={"auth_type": "bearer", "token": token})

    def with_header_auth(self, headers: dict[str, str]) -> "HTTPOptions":
        return self.model_copy(update={"auth_type": "header", "auth_headers": dict(headers)})

    def with_no_auth(self) -> "HTTPOptions":
        return self.model_copy(update={"auth_type": "none"})

    def with_timeout(self, timeout: float) -> "HTTPOptions":
        return self.model_copy(update={"timeout": timeout})

    def build_auth(self) -> httpx.Auth | None:
        """Return the httpx auth flow for basic authentication, if configured."""
        if self.auth_type == "basic":
            if not self.username:
                raise LoaderError("authentication failed: basic auth requires a username")
            return httpx.BasicAuth(self.username, self.password or "")
        return None

    def build_headers(self) -> dict[str, str]:
        """Return the headers to send: auth headers, then extra headers, then a User-Agent."""
        headers: dict[str, str] = {}
        if self.auth_type == "bearer":
            if not self.token:
                raise LoaderError("authentication failed: bearer auth requires a token")
            headers["Authorization"] = f"Bearer {self.token}"
        elif self.auth_type == "header":
            headers.update(self.auth_headers)

        headers.update(self.headers)
        if not any(name.lower() == "user-agent" for name in headers):
            headers["User-Agent"] = DEFAULT_USER_AGENT
        return headers


class FromHTTP(Loader):
    """Fetches a script from an ``http://`` or ``https://`` URL.

    Every ``get_reader`` call performs a fresh GET. Non-2xx responses are
    reported as ``ScriptNotAvailableError``.
    """

    def __init__(
        self,
        url: str,
        options: HTTPOptions | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ):
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as e:
            raise LoaderError(f"unable to parse URL: {e}") from e

        if parsed.scheme not in ("http", "https"):
            raise SchemeUnsupportedError(f"scheme not supported: {parsed.scheme or url}")
        if not parsed.host:
            raise LoaderError(f"unable to parse URL: missing host in {url}")

        self._url = str(parsed)
        self.options = options or HTTPOptions()
        self._transport = transport

    def __repr__(self) -> str:
        return f"FromHTTP(url={self._url!r})"

    @property
    def source_url(self) -> str:
        return self._url

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self.options.timeout,
            verify=self.options.verify,
            transport=self._transport,
        )

    def get_reader(self) -> BinaryIO:
        headers = self.options.build_headers()
        auth = self.options.build_auth()

        logger.debug(f"Fetching script from {self._url}")
        try:
            with self._client() as client:
                response = client.get(self._url, headers=headers, auth=auth)
        except httpx.HTTPError as e:
            raise LoaderError(f"failed to execute HTTP request: {e}") from e

        if not response.is_success:
            raise ScriptNotAvailableError(
                f"script not available: HTTP {response.status_code} - {response.reason_phrase}"
            )
        return io.BytesIO(response.content)

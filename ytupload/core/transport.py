"""HTTP transport used by the upload client.

The client only needs one primitive: send a request to a host and get back
a status code and body text. ``HttpxTransport`` provides it on top of httpx;
tests and alternative stacks can supply anything matching ``Transport``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol, Union

import httpx

from ytupload.core.exceptions import NetworkError, ServerUnreachableError
from ytupload.core.timeouts import DEFAULT_HTTP_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

RequestBody = Union[bytes, Iterable[bytes]]


# =============================================================================
# Request / Response
# =============================================================================


@dataclass
class TransportRequest:
    """A single HTTP exchange to perform."""

    method: str
    host: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    body: RequestBody = b""
    ssl: bool = False
    timeout: float | None = None

    @property
    def url(self) -> str:
        scheme = "https" if self.ssl else "http"
        return f"{scheme}://{self.host}{self.path}"


@dataclass
class TransportResponse:
    """Status and decoded body of a completed request."""

    status_code: int
    text: str
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    """Anything that can send a ``TransportRequest``."""

    def send(self, request: TransportRequest) -> TransportResponse: ...


# =============================================================================
# HttpxTransport
# =============================================================================


class HttpxTransport:
    """Transport backed by a lazily created ``httpx.Client``.

    Iterable bodies are streamed as-is. Callers that want a fixed-length
    request (rather than chunked transfer encoding) must set Content-Length
    themselves.
    """

    def __init__(
        self,
        *,
        timeout: float | None = DEFAULT_HTTP_TIMEOUT_SECONDS,
        verify_ssl: bool = True,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize transport.

        Args:
            timeout: Request timeout in seconds, None to wait forever.
            verify_ssl: Whether to verify TLS certificates.
            transport: Optional httpx transport override (e.g. httpx.MockTransport).
        """
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self._transport = transport
        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            kwargs: dict[str, Any] = {
                "timeout": self.timeout,
                "verify": self.verify_ssl,
                "follow_redirects": True,
            }
            if self._transport is not None:
                kwargs["transport"] = self._transport
            self._client = httpx.Client(**kwargs)
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def send(self, request: TransportRequest) -> TransportResponse:
        """Send a request and wait for the full response.

        Raises:
            ServerUnreachableError: If the connection cannot be established.
            NetworkError: On timeouts and other transport failures.
        """
        client = self._get_client()
        url = request.url
        logger.debug("%s %s", request.method, url)

        kwargs: dict[str, Any] = {"headers": request.headers}
        if request.timeout is not None:
            kwargs["timeout"] = request.timeout

        content = request.body
        if not isinstance(content, (bytes, bytearray)):
            # httpx reads file-like bodies in 64 KiB calls; an iterator keeps our chunk size.
            # A one-shot iterator cannot be replayed to a redirect target.
            content = iter(content)
            kwargs["follow_redirects"] = False

        try:
            resp = client.request(request.method, url, content=content, **kwargs)
        except httpx.ConnectError as e:
            raise ServerUnreachableError(url) from e
        except httpx.TimeoutException as e:
            raise NetworkError(url, f"Timeout: {e}") from e
        except httpx.HTTPError as e:
            raise NetworkError(url, str(e)) from e
        except httpx.StreamError as e:
            raise NetworkError(url, f"Request body could not be sent: {e}") from e

        logger.debug("%s %s -> HTTP %d", request.method, url, resp.status_code)
        return TransportResponse(
            status_code=resp.status_code,
            text=resp.text,
            headers=dict(resp.headers),
        )

"""Base service with common methods for ytupload services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ytupload.core.responses import raise_on_faulty_response

if TYPE_CHECKING:
    from ytupload.core.client import YouTubeClient
    from ytupload.core.transport import TransportResponse


class BaseService:
    """Base service class with common functionality."""

    def __init__(self, client: "YouTubeClient") -> None:
        """Initialize service with a client.

        Args:
            client: YouTubeClient instance; authenticates on first request.
        """
        self.client = client

    def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        extra_headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> "TransportResponse":
        """Send an authorized request and raise on a failed response.

        Args:
            operation: Operation name used in errors.
            method: HTTP method.
            path: API endpoint path.
            extra_headers: Headers added to the authorization headers.
            **kwargs: Passed to ``YouTubeClient.send`` (host, body).

        Returns:
            The successful response.

        Raises:
            AuthenticationError: On HTTP 403 or failed login.
            UploadError: On any other failure status.
        """
        headers = {**self.client.authorization_headers(), **(extra_headers or {})}
        resp = self.client.send(method, path, headers=headers, **kwargs)
        raise_on_faulty_response(resp, operation)
        return resp

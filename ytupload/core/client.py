"""Client for the video upload API.

Holds account settings, the lazily authenticated session and the transport.
Status handling is left to callers (see ``ytupload.core.responses``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, cast

from ytupload.core.auth import AuthSession
from ytupload.core.config import (
    DEFAULT_AUTH_HOST,
    DEFAULT_BASE_HOST,
    DEFAULT_CLIENT_ID,
    Profile,
)
from ytupload.core.exceptions import ValidationError
from ytupload.core.timeouts import DEFAULT_HTTP_TIMEOUT_SECONDS
from ytupload.core.transport import (
    HttpxTransport,
    RequestBody,
    Transport,
    TransportRequest,
    TransportResponse,
)

UPLOADS_SUBDOMAIN = "uploads"


# =============================================================================
# YouTubeClient
# =============================================================================


@dataclass
class YouTubeClient:
    """Authenticated access to the upload feed of one account.

    Not safe to share across threads except for token initialization,
    which is serialized by ``AuthSession``.
    """

    username: str
    password: str = ""
    developer_key: str = ""
    client_id: str = DEFAULT_CLIENT_ID
    base_host: str = DEFAULT_BASE_HOST
    auth_host: str = DEFAULT_AUTH_HOST
    use_ssl: bool = False
    timeout: int = DEFAULT_HTTP_TIMEOUT_SECONDS
    verify_ssl: bool = True
    auth_token: Optional[str] = None
    transport: Optional[Transport] = None
    auth: AuthSession = field(init=False, repr=False)
    _owns_transport: bool = field(init=False, default=False, repr=False)

    def __post_init__(self) -> None:
        """Validate settings and wire up the transport and auth session."""
        if not self.username:
            raise ValidationError("Username is required", field="username")
        if not self.auth_token and not self.password:
            raise ValidationError("Password or auth token is required", field="password")

        if self.transport is None:
            self.transport = HttpxTransport(timeout=self.timeout, verify_ssl=self.verify_ssl)
            self._owns_transport = True

        self.auth = AuthSession(
            self.username,
            self.password,
            self.transport,
            client_id=self.client_id,
            auth_host=self.auth_host,
            token=self.auth_token,
        )

    @classmethod
    def from_profile(
        cls,
        profile: Profile,
        password: str = "",
        **overrides: Any,
    ) -> YouTubeClient:
        """Build a client from a config profile.

        Args:
            profile: Stored connection settings.
            password: Account password (profiles never store it).
            **overrides: Any other constructor argument, e.g. transport.
        """
        settings: dict[str, Any] = {**profile.to_dict(), **overrides}
        return cls(password=password, **settings)

    # =========================================================================
    # Client Management
    # =========================================================================

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and isinstance(self.transport, HttpxTransport):
            self.transport.close()

    def __enter__(self) -> YouTubeClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # =========================================================================
    # Authentication
    # =========================================================================

    @property
    def is_authenticated(self) -> bool:
        """Check if a token has been obtained."""
        return self.auth.is_authenticated

    def authenticate(self) -> str:
        """Return the auth token, logging in on first use.

        Raises:
            AuthenticationError: If the credentials are rejected.
        """
        return self.auth.get_token()

    def authorization_headers(self) -> dict[str, str]:
        """Headers every upload API call carries."""
        return {
            "Authorization": f"GoogleLogin auth={self.authenticate()}",
            "X-GData-Client": self.client_id,
            "X-GData-Key": f"key={self.developer_key}",
        }

    # =========================================================================
    # Hosts & Paths
    # =========================================================================

    @property
    def uploads_host(self) -> str:
        return f"{UPLOADS_SUBDOMAIN}.{self.base_host}"

    def uploads_path(self, video_id: str | None = None) -> str:
        """Path of the user's upload feed, or of one video in it."""
        path = f"/feeds/api/users/{self.username}/uploads"
        if video_id:
            path = f"{path}/{video_id}"
        return path

    # =========================================================================
    # HTTP
    # =========================================================================

    def send(
        self,
        method: str,
        path: str,
        *,
        host: str | None = None,
        headers: dict[str, str] | None = None,
        body: RequestBody = b"",
    ) -> TransportResponse:
        """Send one request and return the response, whatever its status.

        Args:
            method: HTTP method.
            path: API path.
            host: Host override (defaults to the base host).
            headers: Request headers.
            body: Bytes or an iterable of byte chunks.

        Raises:
            NetworkError: If the transport fails.
        """
        transport = cast(Transport, self.transport)
        request = TransportRequest(
            method=method,
            host=host or self.base_host,
            path=path,
            headers=headers or {},
            body=body,
            ssl=self.use_ssl,
        )
        return transport.send(request)

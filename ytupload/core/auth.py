"""ClientLogin authentication for ytupload.

Fetches the auth token once per session and caches it for the lifetime of
the session object. There is no expiry handling: a rejected token means
building a new client (or calling ``AuthSession.clear``).
"""

from __future__ import annotations

import logging
import re
import threading
from urllib.parse import quote_plus

from ytupload.core.config import DEFAULT_AUTH_HOST, DEFAULT_CLIENT_ID
from ytupload.core.exceptions import AuthenticationError
from ytupload.core.timeouts import DEFAULT_AUTH_TIMEOUT_SECONDS
from ytupload.core.transport import Transport, TransportRequest

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

CLIENT_LOGIN_PATH = "/youtube/accounts/ClientLogin"
CLIENT_LOGIN_SERVICE = "youtube"

_AUTH_RE = re.compile(r"Auth=(.+)")
_ERROR_RE = re.compile(r"Error=(.+)")


# =============================================================================
# Response Parsing
# =============================================================================


def parse_auth_token(text: str) -> str | None:
    """Extract the token from a ClientLogin success body.

    The body is a list of ``Key=value`` lines; the token is the value of
    the ``Auth`` line.
    """
    match = _AUTH_RE.search(text)
    return match.group(1).strip() if match else None


def parse_auth_error(text: str) -> str | None:
    """Extract the ``Error=`` code from a ClientLogin failure body."""
    match = _ERROR_RE.search(text)
    return match.group(1).strip() if match else None


def encode_login_form(username: str, password: str, client_id: str) -> str:
    """Build the form-encoded ClientLogin body.

    Values are escaped individually so the field order on the wire stays fixed.
    """
    return (
        f"Email={quote_plus(username)}"
        f"&Passwd={quote_plus(password)}"
        f"&service={CLIENT_LOGIN_SERVICE}"
        f"&source={quote_plus(client_id)}"
    )


# =============================================================================
# AuthSession
# =============================================================================


class AuthSession:
    """Lazily fetched, cached ClientLogin token.

    The first ``get_token`` call performs the network round trip; concurrent
    first calls on the same session are serialized so the login happens once.
    """

    def __init__(
        self,
        username: str,
        password: str,
        transport: Transport,
        *,
        client_id: str = DEFAULT_CLIENT_ID,
        auth_host: str = DEFAULT_AUTH_HOST,
        token: str | None = None,
    ) -> None:
        """Initialize session.

        Args:
            username: Account email or name.
            password: Account password.
            transport: Transport used for the login request.
            client_id: Value sent as ``source``.
            auth_host: Identity endpoint host.
            token: Pre-obtained token; skips the login request entirely.
        """
        self.username = username
        self.password = password
        self.transport = transport
        self.client_id = client_id
        self.auth_host = auth_host
        self._token = token
        self._lock = threading.Lock()

    @property
    def token(self) -> str | None:
        """Cached token, or None if not yet authenticated."""
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def get_token(self) -> str:
        """Return the cached token, logging in first if needed.

        Returns:
            Auth token.

        Raises:
            AuthenticationError: If ClientLogin rejects the credentials or
                returns no token.
        """
        if self._token is not None:
            return self._token

        with self._lock:
            if self._token is None:
                self._token = self._login()
            return self._token

    def clear(self) -> None:
        """Forget the cached token."""
        with self._lock:
            self._token = None

    def _login(self) -> str:
        logger.info("Authenticating %s against %s", self.username, self.auth_host)
        resp = self.transport.send(
            TransportRequest(
                method="POST",
                host=self.auth_host,
                path=CLIENT_LOGIN_PATH,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                body=encode_login_form(self.username, self.password, self.client_id).encode(),
                ssl=True,
                timeout=DEFAULT_AUTH_TIMEOUT_SECONDS,
            )
        )

        if resp.status_code != 200:
            code = parse_auth_error(resp.text)
            raise AuthenticationError(
                code or f"HTTP {resp.status_code}",
                status_code=resp.status_code,
                code=code,
            )

        token = parse_auth_token(resp.text)
        if not token:
            raise AuthenticationError("No Auth token in ClientLogin response", status_code=200)
        return token

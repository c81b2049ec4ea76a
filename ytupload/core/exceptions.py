"""Exception hierarchy for ytupload.

Provides typed exceptions for different failure modes with clear error messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ytupload.core.responses import Fault


class YTUploadError(Exception):
    """Base exception for all ytupload errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(YTUploadError):
    """Error in configuration (missing, invalid, or malformed)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


class ProfileNotFoundError(ConfigurationError):
    """Requested profile does not exist."""

    def __init__(self, profile: str):
        super().__init__(f"Profile not found: {profile}", field="profile", value=profile)
        self.profile = profile


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(YTUploadError):
    """Input validation failed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


# =============================================================================
# Connection Errors
# =============================================================================


class ConnectionError(YTUploadError):
    """Base class for connection-related errors."""

    def __init__(self, message: str, url: str | None = None):
        details = {"url": url} if url else {}
        super().__init__(message, details)
        self.url = url


class NetworkError(ConnectionError):
    """Network-level error (DNS, TCP, TLS, timeouts)."""

    def __init__(self, url: str, cause: str | None = None):
        msg = f"Network error connecting to {url}"
        if cause:
            msg = f"{msg}: {cause}"
        super().__init__(msg, url)
        self.cause = cause


class ServerUnreachableError(ConnectionError):
    """Server is not reachable."""

    def __init__(self, url: str):
        super().__init__(f"Server unreachable: {url}", url)


# =============================================================================
# Authentication Errors
# =============================================================================


class AuthenticationError(YTUploadError):
    """Authentication failed.

    The message is whatever the server told us: the title of a 403 page,
    or the ``Error=`` code returned by ClientLogin.
    """

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        code: str | None = None,
    ):
        super().__init__(message or "Authentication failed")
        self.status_code = status_code
        self.code = code


# =============================================================================
# Operation Errors
# =============================================================================


class OperationError(YTUploadError):
    """Error during an operation."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.operation = operation


class UploadError(OperationError):
    """The server rejected an upload, update or delete.

    ``message`` holds one ``field: code`` line per fault reported by the
    server, and ``faults`` keeps the parsed entries.
    """

    def __init__(
        self,
        message: str,
        faults: list[Fault] | None = None,
        status_code: int | None = None,
        operation: str = "upload",
    ):
        super().__init__(operation, message)
        self.faults = faults or []
        self.status_code = status_code

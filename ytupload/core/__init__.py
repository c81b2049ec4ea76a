"""Core modules for ytupload."""

from ytupload.core.auth import AuthSession, parse_auth_error, parse_auth_token
from ytupload.core.client import YouTubeClient
from ytupload.core.config import CONFIG_DIR, CONFIG_FILE, Config, Profile
from ytupload.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ConnectionError,
    NetworkError,
    OperationError,
    ProfileNotFoundError,
    ServerUnreachableError,
    UploadError,
    ValidationError,
    YTUploadError,
)
from ytupload.core.logging import AuditLogger, LogContext, get_audit_logger, setup_logging
from ytupload.core.responses import (
    Fault,
    extract_page_title,
    extract_video_id,
    parse_faults,
    raise_on_faulty_response,
)
from ytupload.core.transport import (
    HttpxTransport,
    Transport,
    TransportRequest,
    TransportResponse,
)

__all__ = [
    # Exceptions
    "YTUploadError",
    "AuthenticationError",
    "ConfigurationError",
    "ConnectionError",
    "NetworkError",
    "OperationError",
    "ProfileNotFoundError",
    "ServerUnreachableError",
    "UploadError",
    "ValidationError",
    # Config
    "Config",
    "Profile",
    "CONFIG_DIR",
    "CONFIG_FILE",
    # Client
    "YouTubeClient",
    # Auth
    "AuthSession",
    "parse_auth_error",
    "parse_auth_token",
    # Transport
    "HttpxTransport",
    "Transport",
    "TransportRequest",
    "TransportResponse",
    # Responses
    "Fault",
    "extract_page_title",
    "extract_video_id",
    "parse_faults",
    "raise_on_faulty_response",
    # Logging
    "AuditLogger",
    "get_audit_logger",
    "setup_logging",
    "LogContext",
]

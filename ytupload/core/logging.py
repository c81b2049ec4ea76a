"""Logging for ytupload.

Operation logs go to the ``ytupload`` logger tree; audit records of
uploads, updates and deletes go to ``ytupload.audit``, which can be sent to
its own file.
"""

from __future__ import annotations

import logging
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

# =============================================================================
# Constants
# =============================================================================

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PACKAGE_LOGGER_NAME = "ytupload"
AUDIT_LOGGER_NAME = "ytupload.audit"

# Marks handlers installed by setup_logging so repeated calls replace them
_HANDLER_TAG = "_ytupload_handler"


# =============================================================================
# Logger Setup
# =============================================================================


def _replace_handler(logger: logging.Logger, handler: logging.Handler) -> None:
    for existing in list(logger.handlers):
        if getattr(existing, _HANDLER_TAG, False):
            logger.removeHandler(existing)
            existing.close()
    setattr(handler, _HANDLER_TAG, True)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(
    level: int = logging.INFO,
    *,
    quiet: bool = False,
    verbose: bool = False,
    audit_file: Optional[Path] = None,
) -> logging.Logger:
    """Attach a stderr handler to the ``ytupload`` logger.

    The root logger is left alone, so applications embedding the library
    keep their own configuration. Calling this again replaces the handlers
    it installed earlier.

    Args:
        level: Base logging level.
        quiet: If True, only show errors.
        verbose: If True, show debug output (including body sizes).
        audit_file: Also append audit records to this file.

    Returns:
        The configured package logger.
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(level)
    _replace_handler(package_logger, logging.StreamHandler(sys.stderr))

    if audit_file is not None:
        audit_logger = logging.getLogger(AUDIT_LOGGER_NAME)
        audit_logger.setLevel(logging.INFO)
        audit_file.parent.mkdir(parents=True, exist_ok=True)
        _replace_handler(audit_logger, logging.FileHandler(audit_file, encoding="utf-8"))

    # Request lines from httpx would repeat what the transport already logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    return package_logger


# =============================================================================
# Log Context
# =============================================================================


class LogContext:
    """Times one video operation and logs its start and outcome.

    Context fields (user, video_id, filename) are appended to every message
    logged through the context.
    """

    def __init__(self, operation: str, logger: logging.Logger, **context: Any):
        self.operation = operation
        self.logger = logger
        self.context = {k: v for k, v in context.items() if v is not None}
        self.duration: Optional[float] = None
        self._started: Optional[float] = None

    def _context_str(self) -> str:
        return ", ".join(f"{k}={v}" for k, v in self.context.items())

    def __enter__(self) -> "LogContext":
        self._started = time.monotonic()
        self.logger.info("Starting %s (%s)", self.operation, self._context_str())
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.duration = time.monotonic() - (self._started or time.monotonic())
        if exc_type:
            self.logger.error("%s failed after %.2fs: %s", self.operation, self.duration, exc_val)
        else:
            self.logger.info("%s completed in %.2fs", self.operation, self.duration)

    def debug(self, message: str, *args: Any) -> None:
        self.logger.debug(f"[{self.operation}] {message} ({self._context_str()})", *args)


# =============================================================================
# Audit Logger
# =============================================================================


class AuditLogger:
    """Audit trail of uploads, updates and deletes."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(AUDIT_LOGGER_NAME)

    def log_operation(
        self,
        operation: str,
        *,
        user: Optional[str] = None,
        video_id: Optional[str] = None,
        filename: Optional[str] = None,
        error: Optional[str] = None,
    ) -> None:
        """Record the outcome of one video operation.

        Args:
            operation: upload, update or delete.
            user: Account the operation ran as.
            video_id: Video affected, when known.
            filename: Slug sent with an upload.
            error: Failure message; its presence marks the record as failed.
        """
        record: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "operation": operation,
            "success": error is None,
        }
        for key, value in (("user", user), ("video_id", video_id), ("filename", filename)):
            if value:
                record[key] = value
        if error is not None:
            record["error"] = error

        level = logging.INFO if error is None else logging.WARNING
        self.logger.log(level, "AUDIT: %s", record)


def get_audit_logger() -> AuditLogger:
    """Get the audit logger instance."""
    return AuditLogger()

"""Interpretation of upload API responses.

Turns HTTP status codes and the GData ``errors`` document into typed
exceptions, and pulls the video id out of a successful upload.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from ytupload.core.exceptions import AuthenticationError, UploadError
from ytupload.core.transport import TransportResponse

logger = logging.getLogger(__name__)

_TITLE_RE = re.compile(r"<TITLE>(.+?)</TITLE>", re.IGNORECASE | re.DOTALL)
_LOCATION_RE = re.compile(r"media:group/media:(.*)/text\(\)")
_VIDEO_ID_RE = re.compile(r"videos/(.+)")


@dataclass
class Fault:
    """One entry of a GData ``errors`` document."""

    field: str
    code: str
    domain: str = ""
    location: str = ""

    def __str__(self) -> str:
        return f"{self.field}: {self.code}"


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child_text(elem: ET.Element, name: str) -> str:
    for child in elem:
        if _local_name(child.tag) == name:
            return (child.text or "").strip()
    return ""


def _parse_xml(text: str) -> ET.Element | None:
    try:
        return ET.fromstring(text)
    except ET.ParseError:
        return None


# =============================================================================
# Extraction Helpers
# =============================================================================


def extract_page_title(text: str) -> str | None:
    """Return the ``<TITLE>`` text of an HTML error page, if any."""
    match = _TITLE_RE.search(text)
    return match.group(1).strip() if match else None


def field_from_location(location: str) -> str:
    """Narrow an xpath fault location to the metadata field it points at.

    ``media:group/media:title/text()`` becomes ``title``. Locations that do
    not point into the media group are returned unchanged.
    """
    match = _LOCATION_RE.search(location)
    return match.group(1) if match else location


def parse_faults(text: str) -> list[Fault]:
    """Parse every ``error`` entry of a GData errors document.

    Returns an empty list when the body is not XML.
    """
    root = _parse_xml(text)
    if root is None:
        return []

    faults = []
    for elem in root.iter():
        if _local_name(elem.tag) != "error":
            continue
        location = _child_text(elem, "location")
        faults.append(
            Fault(
                field=field_from_location(location),
                code=_child_text(elem, "code"),
                domain=_child_text(elem, "domain"),
                location=location,
            )
        )
    return faults


def format_faults(faults: list[Fault]) -> str:
    """Render faults as ``field: code`` lines, each newline terminated."""
    return "".join(f"{fault}\n" for fault in faults)


def extract_video_id(text: str) -> str:
    """Extract the video id from an uploaded entry.

    The entry ``id`` looks like ``tag:youtube.com,2008:video:...`` or
    ``http://gdata.youtube.com/feeds/api/videos/<id>``; the id is whatever
    follows ``videos/``.

    Raises:
        UploadError: If the body has no usable id element.
    """
    root = _parse_xml(text)
    if root is None:
        raise UploadError("Upload response is not a valid XML document")

    for elem in root.iter():
        if _local_name(elem.tag) == "id":
            match = _VIDEO_ID_RE.search((elem.text or "").strip())
            if match:
                return match.group(1)
            break

    raise UploadError("Upload response does not contain a video id")


# =============================================================================
# Classification
# =============================================================================


def raise_on_faulty_response(response: TransportResponse, operation: str = "upload") -> None:
    """Raise the typed error matching a failed response.

    Args:
        response: Response to inspect.
        operation: Operation name recorded on UploadError.

    Raises:
        AuthenticationError: On HTTP 403; message is the error page title.
        UploadError: On any other non-2xx status; message lists the faults.
    """
    status = response.status_code
    if status == 403:
        raise AuthenticationError(extract_page_title(response.text), status_code=status)

    if not response.ok:
        faults = parse_faults(response.text)
        message = format_faults(faults)
        if not message:
            body = response.text.strip()
            message = f"HTTP {status}: {body}" if body else f"HTTP {status}"
        logger.debug("%s rejected with HTTP %d: %r", operation, status, message)
        raise UploadError(message, faults=faults, status_code=status, operation=operation)

"""Upload body builders for ytupload.

These are internal implementation details. Use `VideoService` from
`ytupload.services.videos` as the public API.
"""

from ytupload.uploaders.common import (
    Payload,
    derive_filename,
    is_seekable,
    is_stream,
    payload_path,
    stream_length,
)
from ytupload.uploaders.constants import (
    BOUNDARY,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_MIME_TYPE,
    FILENAME_PEEK_BYTES,
)
from ytupload.uploaders.multipart import StreamingBody, build_upload_body

__all__ = [
    # Constants
    "BOUNDARY",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_MIME_TYPE",
    "FILENAME_PEEK_BYTES",
    # Payload helpers
    "Payload",
    "derive_filename",
    "is_seekable",
    "is_stream",
    "payload_path",
    "stream_length",
    # Body
    "StreamingBody",
    "build_upload_body",
]

"""Common payload helpers for the upload body builders."""

from __future__ import annotations

import hashlib
import io
import os
from typing import IO, Union

from ytupload.core.exceptions import ConfigurationError
from ytupload.uploaders.constants import FILENAME_PEEK_BYTES

Payload = Union[bytes, bytearray, memoryview, IO[bytes]]


def is_stream(payload: object) -> bool:
    """Check whether payload is a readable handle rather than raw bytes."""
    return hasattr(payload, "read")


def payload_path(payload: object) -> str | None:
    """Return the filesystem path behind a payload, if it exposes one.

    Handle names that are not real paths (``<stdin>``, ``<fdopen>``) are
    ignored.
    """
    if isinstance(payload, (str, os.PathLike)):
        return os.fspath(payload)
    name = getattr(payload, "name", None)
    if isinstance(name, str) and os.path.exists(name):
        return name
    return None


def _is_raw_file(stream: object) -> bool:
    """True for plain OS files, whose fstat size is the byte count they yield."""
    if isinstance(stream, io.FileIO):
        return True
    return isinstance(stream, (io.BufferedReader, io.BufferedRandom)) and isinstance(
        stream.raw, io.FileIO
    )


def stream_length(stream: IO[bytes], start: int | None = None) -> int:
    """Bytes remaining in a stream from ``start`` without moving its position.

    Plain files are measured with fstat. Anything else (including wrappers
    such as ``gzip.GzipFile`` whose ``fileno`` belongs to the compressed
    file) is measured through ``getbuffer`` or by seeking to the end.

    Args:
        stream: Readable binary handle.
        start: Position to measure from (defaults to current position).

    Returns:
        Remaining byte count.

    Raises:
        ConfigurationError: If the size cannot be determined without
            reading the stream.
    """
    if start is None:
        start = stream_position(stream)

    if _is_raw_file(stream):
        try:
            size = os.fstat(stream.fileno()).st_size
        except (OSError, io.UnsupportedOperation):
            size = 0
        # Zero also covers pipes and /proc files, which report no size
        if size:
            return max(size - (start or 0), 0)

    getbuffer = getattr(stream, "getbuffer", None)
    if getbuffer is not None:
        return max(len(getbuffer()) - (start or 0), 0)

    if is_seekable(stream):
        current = stream.tell()
        try:
            end = stream.seek(0, os.SEEK_END)
        except (OSError, ValueError) as e:
            stream.seek(current)
            raise ConfigurationError(
                f"Cannot determine payload size: {e}",
                field="payload",
                value=type(stream).__name__,
            ) from e
        stream.seek(current)
        return max(end - (start or 0), 0)

    raise ConfigurationError(
        "Cannot determine payload size; pass a file, a seekable stream or bytes",
        field="payload",
        value=type(stream).__name__,
    )


def derive_filename(payload: Payload | os.PathLike[str]) -> str:
    """Derive a stable Slug for a payload.

    1. Payloads with a filesystem path hash the path.
    2. Other streams hash their first 1024 bytes, then seek back.
    3. Raw bytes hash their full contents.

    The digest is only used for uniqueness, not security.

    Raises:
        ConfigurationError: If a stream has to be peeked but cannot seek back.
    """
    path = payload_path(payload)
    if path is not None:
        return hashlib.md5(path.encode("utf-8")).hexdigest()

    if is_stream(payload):
        stream = payload  # type: ignore[assignment]
        if not is_seekable(stream):
            raise ConfigurationError(
                "Cannot derive a filename from a non-seekable stream; pass filename explicitly",
                field="filename",
            )
        position = stream.tell()
        chunk = stream.read(FILENAME_PEEK_BYTES)
        stream.seek(position)
        return hashlib.md5(chunk).hexdigest()

    return hashlib.md5(bytes(payload)).hexdigest()  # type: ignore[arg-type]


def is_seekable(stream: object) -> bool:
    """Check whether a handle can report and restore its position."""
    seekable = getattr(stream, "seekable", None)
    if seekable is None:
        return hasattr(stream, "seek") and hasattr(stream, "tell")
    try:
        return bool(seekable())
    except (OSError, ValueError):
        return False


def stream_position(stream: object) -> int | None:
    """Current position of a seekable handle, None otherwise."""
    if not is_seekable(stream):
        return None
    return stream.tell()  # type: ignore[attr-defined]

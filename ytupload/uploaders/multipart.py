"""Streaming multipart/related request bodies.

``StreamingBody`` chains in-memory parts and borrowed file handles into one
readable stream whose total length is known before a single payload byte is
read, so uploads can send a Content-Length without buffering the video.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from typing import IO, Union

from ytupload.core.exceptions import ConfigurationError
from ytupload.uploaders.common import (
    Payload,
    is_seekable,
    is_stream,
    stream_length,
    stream_position,
)
from ytupload.uploaders.constants import BOUNDARY, DEFAULT_CHUNK_SIZE, ENTRY_CONTENT_TYPE

logger = logging.getLogger(__name__)

Part = Union[str, bytes, bytearray, memoryview, IO[bytes]]


class _StreamPart:
    """Borrowed handle plus the position it started at."""

    __slots__ = ("stream", "start", "length")

    def __init__(self, stream: IO[bytes]) -> None:
        self.stream = stream
        self.start = stream_position(stream)
        self.length = stream_length(stream, self.start)


class StreamingBody:
    """Read-only stream over an ordered list of body parts.

    Parts are either literals (``str`` is UTF-8 encoded) or binary handles.
    Handles are borrowed: they are read forward from their current position
    and never closed. A body can be read once; ``rewind`` restarts it only
    when every handle can seek.

    Raises:
        ConfigurationError: At construction, if a handle's size cannot be
            determined without reading it.
    """

    def __init__(self, parts: Sequence[Part], chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self.chunk_size = chunk_size
        self._parts: list[bytes | _StreamPart] = []
        for part in parts:
            if isinstance(part, str):
                self._parts.append(part.encode("utf-8"))
            elif is_stream(part):
                self._parts.append(_StreamPart(part))  # type: ignore[arg-type]
            else:
                self._parts.append(bytes(part))  # type: ignore[arg-type]

        self._length = sum(
            len(p) if isinstance(p, bytes) else p.length for p in self._parts
        )
        self._index = 0
        self._offset = 0

    def __len__(self) -> int:
        return self._length

    def length(self) -> int:
        """Total byte length of the body."""
        return self._length

    @property
    def exhausted(self) -> bool:
        """True once every part has been read to the end."""
        return self._index >= len(self._parts)

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes, crossing part boundaries as needed.

        Args:
            size: Maximum bytes to return; negative reads everything left.

        Returns:
            Next chunk of the body. ``b""`` means end of stream.
        """
        if size is None or size < 0:
            size = self._length

        chunks: list[bytes] = []
        remaining = size
        while remaining > 0 and not self.exhausted:
            data = self._read_part(self._parts[self._index], remaining)
            if data:
                chunks.append(data)
                remaining -= len(data)
            else:
                self._index += 1
                self._offset = 0
        return b"".join(chunks)

    def _read_part(self, part: bytes | _StreamPart, size: int) -> bytes:
        if isinstance(part, bytes):
            data = part[self._offset : self._offset + size]
        else:
            # Never read past the length promised in Content-Length
            left = part.length - self._offset
            data = part.stream.read(min(size, left)) if left > 0 else b""
        self._offset += len(data)
        return data

    def __iter__(self) -> Iterator[bytes]:
        while True:
            chunk = self.read(self.chunk_size)
            if not chunk:
                return
            yield chunk

    def rewind(self) -> None:
        """Restart the body from the beginning.

        Raises:
            ConfigurationError: If any handle cannot seek back.
        """
        for part in self._parts:
            if isinstance(part, _StreamPart) and (part.start is None or not is_seekable(part.stream)):
                raise ConfigurationError("Body contains a non-seekable stream and cannot be re-read")

        for part in self._parts:
            if isinstance(part, _StreamPart):
                part.stream.seek(part.start)
        self._index = 0
        self._offset = 0


def build_upload_body(
    envelope: str,
    payload: Payload,
    mime_type: str,
    boundary: str = BOUNDARY,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> StreamingBody:
    """Assemble the multipart/related upload body.

    Args:
        envelope: Atom entry describing the video.
        payload: Video bytes or a borrowed binary handle.
        mime_type: Content type of the video part.
        boundary: Multipart boundary.
        chunk_size: Iteration chunk size handed to the HTTP layer.

    Returns:
        Body ready to stream, with its length already computed.
    """
    body = StreamingBody(
        [
            f"--{boundary}\r\n",
            f"Content-Type: {ENTRY_CONTENT_TYPE}\r\n\r\n",
            envelope,
            f"\r\n--{boundary}\r\n",
            f"Content-Type: {mime_type}\r\nContent-Transfer-Encoding: binary\r\n\r\n",
            payload,
            f"\r\n--{boundary}--\r\n",
        ],
        chunk_size=chunk_size,
    )
    logger.debug("Upload body is %d bytes (%s payload)", len(body), mime_type)
    return body

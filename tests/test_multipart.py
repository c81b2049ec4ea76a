"""Tests for ytupload.uploaders.multipart."""

from __future__ import annotations

import gzip
import io
from pathlib import Path

import pytest

from ytupload.core.exceptions import ConfigurationError
from ytupload.uploaders.constants import BOUNDARY
from ytupload.uploaders.multipart import StreamingBody, build_upload_body


class ReadOnlyStream:
    """Readable stream that cannot seek and exposes no size."""

    def __init__(self, data: bytes) -> None:
        self._buf = io.BytesIO(data)

    def read(self, size: int = -1) -> bytes:
        return self._buf.read(size)


def drain(body: StreamingBody, size: int) -> bytes:
    chunks = []
    while True:
        chunk = body.read(size)
        if not chunk:
            return b"".join(chunks)
        chunks.append(chunk)


# =============================================================================
# Length
# =============================================================================


class TestLength:
    """Tests for StreamingBody.length."""

    def test_literal_parts(self):
        body = StreamingBody(["abc", b"de", bytearray(b"f")])
        assert body.length() == 6
        assert len(body) == 6

    def test_str_parts_count_encoded_bytes(self):
        body = StreamingBody(["héllo"])
        assert body.length() == len("héllo".encode("utf-8"))

    def test_bytesio_part_measured_from_current_position(self):
        stream = io.BytesIO(b"0123456789")
        stream.seek(4)

        body = StreamingBody([b"xx", stream])

        assert body.length() == 2 + 6
        assert stream.tell() == 4

    def test_file_part_uses_file_size(self, temp_dir: Path):
        path = temp_dir / "clip.mp4"
        path.write_bytes(b"v" * 5000)

        with open(path, "rb") as fh:
            body = StreamingBody(["head", fh, "tail"])
            assert body.length() == 4 + 5000 + 4
            assert fh.tell() == 0

    def test_gzip_payload_counts_decompressed_bytes(self, temp_dir: Path):
        path = temp_dir / "clip.gz"
        data = b"\x00" * 100000
        with gzip.open(path, "wb") as out:
            out.write(data)

        with gzip.open(path, "rb") as fh:
            body = StreamingBody(["h", fh, "t"])
            drained = drain(body, 4096)

        assert body.length() == len(data) + 2
        assert drained == b"h" + data + b"t"

    def test_unsized_stream_is_rejected(self):
        with pytest.raises(ConfigurationError):
            StreamingBody([b"head", ReadOnlyStream(b"data")])

    @pytest.mark.parametrize("read_size", [1, 3, 7, 64, 1 << 20])
    def test_length_matches_drained_bytes(self, temp_dir: Path, read_size: int):
        path = temp_dir / "clip.bin"
        path.write_bytes(bytes(range(256)) * 11)

        with open(path, "rb") as fh:
            body = StreamingBody(["--b\r\n", io.BytesIO(b"meta"), fh, "\r\n--b--\r\n"])
            expected = body.length()
            data = drain(body, read_size)

        assert len(data) == expected

    def test_empty_payload(self):
        body = StreamingBody(["a", io.BytesIO(b""), b"", "b"])
        assert body.length() == 2
        assert drain(body, 10) == b"ab"


# =============================================================================
# Read
# =============================================================================


class TestRead:
    """Tests for StreamingBody.read."""

    def test_read_fills_across_part_boundaries(self):
        body = StreamingBody(["ab", b"cd", io.BytesIO(b"ef")])

        assert body.read(5) == b"abcde"
        assert body.read(5) == b"f"
        assert body.read(5) == b""
        assert body.exhausted

    def test_read_all(self):
        body = StreamingBody(["ab", io.BytesIO(b"cd"), "ef"])
        assert body.read() == b"abcdef"
        assert body.read() == b""

    def test_large_read_not_capped(self):
        payload = b"x" * (3 * 1024 * 1024)
        body = StreamingBody(["h", io.BytesIO(payload), "t"])

        chunk = body.read(len(payload) + 2)

        assert len(chunk) == len(payload) + 2

    def test_not_exhausted_until_last_part_read(self):
        body = StreamingBody(["ab", io.BytesIO(b"cd")])

        body.read(2)

        assert not body.exhausted

    def test_stream_read_from_its_starting_position(self):
        stream = io.BytesIO(b"skipme-payload")
        stream.seek(7)

        body = StreamingBody(["[", stream, "]"])

        assert body.read() == b"[payload]"

    def test_does_not_read_past_measured_length(self):
        stream = io.BytesIO(b"12345")
        body = StreamingBody([stream])
        stream.seek(0, io.SEEK_END)
        stream.write(b"678")
        stream.seek(0)

        assert body.read() == b"12345"

    def test_handle_is_not_closed(self, temp_dir: Path):
        path = temp_dir / "clip.mp4"
        path.write_bytes(b"video")

        with open(path, "rb") as fh:
            body = StreamingBody([fh])
            list(body)
            assert not fh.closed

    def test_iteration_uses_chunk_size(self):
        body = StreamingBody(["abc", io.BytesIO(b"defg")], chunk_size=3)

        assert list(body) == [b"abc", b"def", b"g"]


# =============================================================================
# Rewind
# =============================================================================


class TestRewind:
    """Tests for StreamingBody.rewind."""

    def test_rewind_replays_body(self):
        stream = io.BytesIO(b"--payload")
        stream.seek(2)
        body = StreamingBody(["<", stream, ">"])

        first = body.read()
        body.rewind()
        second = body.read()

        assert first == second == b"<payload>"

    def test_rewind_rejects_non_seekable_stream(self):
        class NoSeekFile(io.BytesIO):
            def seekable(self) -> bool:
                return self._allow_seek

        stream = NoSeekFile(b"data")
        stream._allow_seek = True
        body = StreamingBody([stream])
        stream._allow_seek = False

        with pytest.raises(ConfigurationError):
            body.rewind()


# =============================================================================
# build_upload_body
# =============================================================================


class TestBuildUploadBody:
    """Tests for build_upload_body."""

    def test_wire_layout(self):
        body = build_upload_body("<entry/>", b"VIDEO", "video/quicktime")

        assert body.read() == (
            f"--{BOUNDARY}\r\n"
            "Content-Type: application/atom+xml; charset=UTF-8\r\n\r\n"
            "<entry/>"
            f"\r\n--{BOUNDARY}\r\n"
            "Content-Type: video/quicktime\r\nContent-Transfer-Encoding: binary\r\n\r\n"
            "VIDEO"
            f"\r\n--{BOUNDARY}--\r\n"
        ).encode()

    def test_length_with_stream_payload(self):
        payload = io.BytesIO(b"p" * 4096)
        body = build_upload_body("<entry/>", payload, "video/mp4")

        assert body.length() == len(body.read())

    def test_custom_boundary(self):
        body = build_upload_body("<entry/>", b"", "video/mp4", boundary="XYZ")
        data = body.read()

        assert data.startswith(b"--XYZ\r\n")
        assert data.endswith(b"\r\n--XYZ--\r\n")

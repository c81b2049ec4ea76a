"""Pytest configuration and fixtures for ytupload tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from ytupload.core.client import YouTubeClient
from ytupload.core.transport import TransportRequest, TransportResponse


class FakeTransport:
    """Transport stub that records requests and replays queued responses."""

    def __init__(self) -> None:
        self.requests: list[TransportRequest] = []
        self.bodies: list[bytes] = []
        self.responses: list[TransportResponse] = []

    def queue(self, status_code: int, text: str = "") -> None:
        self.responses.append(TransportResponse(status_code=status_code, text=text))

    def send(self, request: TransportRequest) -> TransportResponse:
        body = request.body
        if not isinstance(body, (bytes, bytearray)):
            body = b"".join(body)
        self.requests.append(request)
        self.bodies.append(bytes(body))
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        return self.responses.pop(0)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(transport: FakeTransport) -> YouTubeClient:
    """Client with a pre-seeded token, so no login request is made."""
    return YouTubeClient(
        username="testuser",
        password="secret",
        developer_key="devkey",
        client_id="ytupload-tests",
        auth_token="cached-token",
        transport=transport,
    )


@pytest.fixture
def uploaded_entry_xml() -> str:
    """Atom entry returned by a successful upload or update."""
    return """<?xml version='1.0' encoding='UTF-8'?>
<entry xmlns='http://www.w3.org/2005/Atom'
       xmlns:app='http://www.w3.org/2007/app'
       xmlns:media='http://search.yahoo.com/mrss/'
       xmlns:yt='http://gdata.youtube.com/schemas/2007'>
  <id>http://gdata.youtube.com/feeds/api/videos/abc123</id>
  <published>2008-05-01T10:00:00.000Z</published>
  <updated>2008-05-02T11:30:00.000Z</updated>
  <title type='text'>My clip</title>
  <link rel='alternate' type='text/html' href='http://www.youtube.com/watch?v=abc123'/>
  <link rel='edit' type='application/atom+xml'
        href='http://gdata.youtube.com/feeds/api/users/testuser/uploads/abc123'/>
  <author><name>testuser</name></author>
  <app:control><yt:state name='processing'/></app:control>
  <media:group>
    <media:title type='plain'>My clip</media:title>
    <media:description type='plain'>cool vid d00d</media:description>
    <media:keywords>cool, blah, test</media:keywords>
    <media:category label='People'
        scheme='http://gdata.youtube.com/schemas/2007/categories.cat'>People</media:category>
    <media:player url='http://www.youtube.com/watch?v=abc123'/>
    <yt:private/>
  </media:group>
</entry>
"""


@pytest.fixture
def title_required_xml() -> str:
    """GData errors document with a single missing-title fault."""
    return """<?xml version='1.0' encoding='UTF-8'?>
<errors xmlns='http://schemas.google.com/g/2005'>
  <error>
    <domain>yt:validation</domain>
    <code>required</code>
    <location type='xpath'>media:group/media:title/text()</location>
  </error>
</errors>
"""


@pytest.fixture
def forbidden_html() -> str:
    return "<HTML>\n<HEAD>\n<TITLE>Forbidden</TITLE>\n</HEAD>\n<BODY>Error 403</BODY>\n</HTML>\n"

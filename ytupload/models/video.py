"""Video models: metadata sent to the API and entries parsed from it."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from datetime import datetime
from typing import Optional

from pydantic import Field

from ytupload.core.envelope import ATOM_NS, MEDIA_NS, YT_NS
from ytupload.uploaders.constants import DEFAULT_MIME_TYPE

from .base import BaseModel

APP_NS = "http://www.w3.org/2007/app"

_NS = {"atom": ATOM_NS, "media": MEDIA_NS, "yt": YT_NS, "app": APP_NS}
_ID_RE = re.compile(r"(?:videos/|video:)([^/:]+)$")


class VideoMetadata(BaseModel):
    """Complete metadata for a video, as sent on update."""

    title: str = Field(..., description="Video title")
    description: str = Field(..., description="Video description")
    category: str = Field(..., description="Category term, e.g. People")
    keywords: list[str] = Field(..., description="Keywords, in display order")
    private: bool = Field(False, description="Hide the video from public listings")


class UploadOptions(VideoMetadata):
    """Metadata plus upload settings, with defaults for everything."""

    title: str = ""
    description: str = ""
    category: str = ""
    keywords: list[str] = Field(default_factory=list)
    mime_type: str = Field(DEFAULT_MIME_TYPE, description="Content type of the video bytes")
    filename: Optional[str] = Field(None, description="Slug; derived from the payload if unset")


class Video(BaseModel):
    """A video entry returned by the API."""

    video_id: str = Field(..., description="Platform video ID")
    title: str = ""
    description: str = ""
    keywords: list[str] = Field(default_factory=list)
    category: Optional[str] = None
    private: bool = False
    published: Optional[datetime] = None
    updated: Optional[datetime] = None
    author: Optional[str] = None
    player_url: Optional[str] = None
    edit_url: Optional[str] = None
    state: Optional[str] = Field(None, description="Processing state, absent once live")

    @classmethod
    def from_xml(cls, text: str) -> "Video":
        """Parse an Atom video entry.

        Args:
            text: Entry XML as returned by the API.

        Returns:
            Parsed video.

        Raises:
            xml.etree.ElementTree.ParseError: If the text is not XML.
            pydantic.ValidationError: If no video id can be found.
        """
        entry = ET.fromstring(text)
        return cls.from_entry(entry)

    @classmethod
    def from_entry(cls, entry: ET.Element) -> "Video":
        """Build a video from a parsed ``atom:entry`` element."""
        group = entry.find("media:group", _NS)

        def group_text(path: str) -> str:
            if group is None:
                return ""
            return (group.findtext(path, default="", namespaces=_NS) or "").strip()

        keywords = group_text("media:keywords")
        player = group.find("media:player", _NS) if group is not None else None
        state = entry.find("app:control/yt:state", _NS)

        data = {
            "video_id": group_text("yt:videoid") or _id_from_entry(entry),
            "title": group_text("media:title")
            or entry.findtext("atom:title", default="", namespaces=_NS),
            "description": group_text("media:description"),
            "keywords": [k.strip() for k in keywords.split(",") if k.strip()],
            "category": group_text("media:category") or None,
            "private": group is not None and group.find("yt:private", _NS) is not None,
            "published": entry.findtext("atom:published", namespaces=_NS),
            "updated": entry.findtext("atom:updated", namespaces=_NS),
            "author": entry.findtext("atom:author/atom:name", namespaces=_NS),
            "player_url": player.get("url") if player is not None else _link(entry, "alternate"),
            "edit_url": _link(entry, "edit"),
            "state": state.get("name") if state is not None else None,
        }
        return cls.model_validate(data)


def _id_from_entry(entry: ET.Element) -> Optional[str]:
    raw = (entry.findtext("atom:id", default="", namespaces=_NS) or "").strip()
    match = _ID_RE.search(raw)
    return match.group(1) if match else None


def _link(entry: ET.Element, rel: str) -> Optional[str]:
    for link in entry.findall("atom:link", _NS):
        if link.get("rel") == rel:
            return link.get("href")
    return None

"""Atom entry serialization for video metadata."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ytupload.models.video import VideoMetadata

ATOM_NS = "http://www.w3.org/2005/Atom"
MEDIA_NS = "http://search.yahoo.com/mrss/"
YT_NS = "http://gdata.youtube.com/schemas/2007"
GD_NS = "http://schemas.google.com/g/2005"
CATEGORY_SCHEME = "http://gdata.youtube.com/schemas/2007/categories.cat"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Prefixes are written literally so the envelope always declares the same
# three namespaces, whether or not yt:private is present.
ENTRY_NAMESPACES = {
    "xmlns": ATOM_NS,
    "xmlns:media": MEDIA_NS,
    "xmlns:yt": YT_NS,
}


def build_video_xml(metadata: VideoMetadata) -> str:
    """Serialize metadata into the Atom entry the upload API expects.

    Empty fields become empty elements. ``yt:private`` is only present for
    private videos; there is no public marker.

    Args:
        metadata: Video metadata to serialize.

    Returns:
        XML document as text, with declaration.
    """
    entry = ET.Element("entry", ENTRY_NAMESPACES)
    group = ET.SubElement(entry, "media:group")

    ET.SubElement(group, "media:title", type="plain").text = metadata.title
    ET.SubElement(group, "media:description", type="plain").text = metadata.description
    ET.SubElement(group, "media:keywords").text = ",".join(metadata.keywords)
    ET.SubElement(group, "media:category", scheme=CATEGORY_SCHEME).text = metadata.category

    if metadata.private:
        ET.SubElement(group, "yt:private")

    return XML_DECLARATION + ET.tostring(entry, encoding="unicode")

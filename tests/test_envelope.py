"""Tests for ytupload.core.envelope."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from ytupload.core.envelope import (
    ATOM_NS,
    CATEGORY_SCHEME,
    MEDIA_NS,
    YT_NS,
    build_video_xml,
)
from ytupload.models.video import UploadOptions, VideoMetadata

NS = {"atom": ATOM_NS, "media": MEDIA_NS, "yt": YT_NS}


def parse(xml: str) -> ET.Element:
    return ET.fromstring(xml)


def group_of(xml: str) -> ET.Element:
    group = parse(xml).find("media:group", NS)
    assert group is not None
    return group


class TestBuildVideoXml:
    """Tests for build_video_xml."""

    def test_declaration_and_root(self):
        xml = build_video_xml(UploadOptions(title="t"))

        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert parse(xml).tag == f"{{{ATOM_NS}}}entry"

    def test_declares_all_namespaces(self):
        xml = build_video_xml(UploadOptions())

        assert f'xmlns="{ATOM_NS}"' in xml
        assert f'xmlns:media="{MEDIA_NS}"' in xml
        assert f'xmlns:yt="{YT_NS}"' in xml

    def test_fields(self):
        meta = VideoMetadata(
            title="My clip",
            description="cool vid d00d",
            category="People",
            keywords=["cool", "blah"],
        )
        group = group_of(build_video_xml(meta))

        title = group.find("media:title", NS)
        assert title is not None
        assert title.text == "My clip"
        assert title.get("type") == "plain"
        assert group.findtext("media:description", namespaces=NS) == "cool vid d00d"
        category = group.find("media:category", NS)
        assert category is not None
        assert category.text == "People"
        assert category.get("scheme") == CATEGORY_SCHEME

    def test_text_is_escaped(self):
        group = group_of(build_video_xml(UploadOptions(title="Tom & Jerry <3")))
        assert group.findtext("media:title", namespaces=NS) == "Tom & Jerry <3"

    @pytest.mark.parametrize(
        "keywords",
        [[], ["solo"], ["cool", "blah", "test"], ["zeta", "alpha", "mid"]],
    )
    def test_keywords_comma_joined_in_order(self, keywords: list[str]):
        group = group_of(build_video_xml(UploadOptions(keywords=keywords)))

        keywords_elem = group.find("media:keywords", NS)
        assert keywords_elem is not None
        assert (keywords_elem.text or "") == ",".join(keywords)

    def test_empty_fields_are_present(self):
        group = group_of(build_video_xml(UploadOptions()))

        for tag in ("media:title", "media:description", "media:keywords", "media:category"):
            elem = group.find(tag, NS)
            assert elem is not None, tag
            assert (elem.text or "") == ""

    def test_private_marker_once(self):
        group = group_of(build_video_xml(UploadOptions(private=True)))
        assert len(group.findall("yt:private", NS)) == 1

    @pytest.mark.parametrize("options", [UploadOptions(), UploadOptions(private=False)])
    def test_no_private_marker_when_public(self, options: UploadOptions):
        xml = build_video_xml(options)

        assert group_of(xml).findall("yt:private", NS) == []
        assert "yt:private" not in xml

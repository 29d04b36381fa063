import pytest

from morning_news.news.services.content_normalizer import (
    PlainText,
    RichItem,
    detect_kind,
    normalize_content,
)
from morning_news.news.schemas.responses import build_content_blocks


class TestNormalizeContent:
    def test_none_is_empty(self):
        assert normalize_content(None) == []

    def test_string_becomes_single_block(self):
        assert normalize_content("  Body text  ") == [PlainText(text="Body text")]

    def test_mixed_list_keeps_order(self):
        blocks = normalize_content([
            "first",
            {"data": "second", "type": "p"},
            {"text": "third"},
            {"content": "fourth"},
        ])

        assert [b.text for b in blocks] == ["first", "second", "third", "fourth"]
        assert isinstance(blocks[0], PlainText)
        assert isinstance(blocks[1], RichItem)
        assert blocks[1].attributes == {"type": "p"}

    def test_object_text_key_precedence(self):
        blocks = normalize_content([{"data": "from data", "text": "from text"}])
        assert blocks[0].text == "from data"

    def test_blank_and_unknown_entries_dropped(self):
        blocks = normalize_content(["", "   ", {"data": ""}, {"data": 5}, 42, None, "kept"])
        assert blocks == [PlainText(text="kept")]


class TestDetectKind:
    @pytest.mark.parametrize("text, kind", [
        ("https://cdn.example.com/photo.JPG", "image"),
        ("https://cdn.example.com/photo.webp?w=600", "image"),
        ("http://example.com/gazette.pdf", "document"),
        ("https://example.com/story", "link"),
        ("A plain paragraph", "paragraph"),
    ])
    def test_kinds(self, text, kind):
        assert detect_kind(text) == kind


def test_build_content_blocks():
    blocks = build_content_blocks(["Intro", {"data": "https://cdn.example.com/a.png", "width": 600}])

    assert [b.kind for b in blocks] == ["paragraph", "image"]
    assert blocks[0].type == "plain_text"
    assert blocks[1].type == "rich_item"
    assert blocks[1].attributes == {"width": 600}

"""
Content normalization

The feed delivers article bodies either as a single string or as a list
mixing strings and objects such as {"data": "..."}. This module turns both
shapes into a flat list of typed blocks so callers never inspect the raw value.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

TEXT_KEYS = ("data", "text", "content")

IMAGE_URL_PATTERN = re.compile(r"^https?://.+\.(jpg|jpeg|png|gif|webp|bmp|avif)(\?.*)?$", re.IGNORECASE)
PDF_URL_PATTERN = re.compile(r"^https?://.+\.pdf(\?.*)?$", re.IGNORECASE)
URL_PATTERN = re.compile(r"^https?://", re.IGNORECASE)


@dataclass
class PlainText:
    text: str
    type: str = "plain_text"


@dataclass
class RichItem:
    text: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    type: str = "rich_item"


ContentBlock = Union[PlainText, RichItem]


def detect_kind(text: str) -> str:
    """Render hint for a block: image, document, link or paragraph."""
    if IMAGE_URL_PATTERN.match(text):
        return "image"
    if PDF_URL_PATTERN.match(text):
        return "document"
    if URL_PATTERN.match(text):
        return "link"
    return "paragraph"


def _text_from_object(item: Dict[str, Any]) -> Optional[str]:
    for key in TEXT_KEYS:
        value = item.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def _to_block(item: Any) -> Optional[ContentBlock]:
    if isinstance(item, str):
        text = item.strip()
        return PlainText(text=text) if text else None

    if isinstance(item, dict):
        text = _text_from_object(item)
        if text is None or not text.strip():
            return None
        attributes = {k: v for k, v in item.items() if k not in TEXT_KEYS}
        return RichItem(text=text.strip(), attributes=attributes)

    return None


def normalize_content(raw: Any) -> List[ContentBlock]:
    """
    Flatten a raw content value into ordered blocks.

    None becomes an empty list, a string becomes a single block, and lists are
    walked in order. Blank entries and values that are neither strings nor
    objects are dropped.
    """
    if raw is None:
        return []

    items = raw if isinstance(raw, list) else [raw]

    blocks = []
    for item in items:
        block = _to_block(item)
        if block is not None:
            blocks.append(block)
    return blocks

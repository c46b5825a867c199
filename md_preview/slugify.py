"""Anchor id generation for rendered headings."""

from __future__ import annotations

import re

from .constants import ANCHOR_STRIP_PATTERN


def generate_anchor_id(text: str) -> str:
    """Generate a stable element id from heading text.

    Lowercases the text, removes characters that are neither ASCII word
    characters, whitespace, nor Japanese kana/kanji, collapses whitespace runs
    to single hyphens and trims leading and trailing hyphens. Returns an empty
    string when nothing remains.

    Args:
        text: Raw heading text, as written after the ``#`` marker.

    Returns:
        str: Hyphen-separated id suitable for fragment links.

    Examples:
        generate_anchor_id("Hello World")  # "hello-world"
        generate_anchor_id("What's New?")  # "whats-new"
        generate_anchor_id("はじめに Guide")  # "はじめに-guide"
    """
    anchor_id = ANCHOR_STRIP_PATTERN.sub("", text.lower())
    anchor_id = re.sub(r"\s+", "-", anchor_id)
    return anchor_id.strip("-")

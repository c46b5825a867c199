from __future__ import annotations

import html
import re

from hypothesis import given, settings
from hypothesis import strategies as st

from md_preview import render_markdown
from md_preview.inline import InlineTransformer
from md_preview.security import is_valid_image_url, is_valid_link_url
from md_preview.slugify import generate_anchor_id

ALLOWED_TAGS = {
    "a",
    "blockquote",
    "br",
    "code",
    "div",
    "em",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "hr",
    "img",
    "li",
    "p",
    "pre",
    "span",
    "strong",
    "table",
    "tbody",
    "td",
    "th",
    "thead",
    "tr",
    "ul",
}
TAG_PATTERN = re.compile(r"</?([a-z0-9]+)[^<>]*>")
HREF_PATTERN = re.compile(r'<a href="([^"]*)"')
SRC_PATTERN = re.compile(r'<img src="([^"]*)"')
PLACEHOLDER_CHARACTERS = ("\x00", "\x1e", "\x1f", "\ue000", "\ue001")

markdown_fragments = st.sampled_from(
    [
        "# ",
        "## ",
        "###### ",
        "- ",
        "1. ",
        "> ",
        "---",
        "```",
        "```python",
        "|",
        "|---|",
        "**",
        "*",
        "`",
        "[",
        "]",
        "(",
        ")",
        "![",
        "[x]",
        "[ ]",
        "  ",
        "\n",
        "\r\n",
        "javascript:alert(1)",
        "https://example.com",
        "#anchor",
        '"',
        "<script>",
        "&amp;",
        "text",
    ]
)
markdown_text = st.one_of(
    st.text(),
    st.lists(markdown_fragments | st.text(max_size=5), max_size=40).map("".join),
)


@given(markdown_text)
@settings(max_examples=200)
def test_render_never_raises(source: str):
    assert isinstance(render_markdown(source), str)


@given(markdown_text, st.booleans(), st.booleans())
def test_render_is_deterministic(source: str, is_mobile: bool, is_slideshow: bool):
    first = render_markdown(source, is_mobile=is_mobile, is_slideshow=is_slideshow)
    second = render_markdown(source, is_mobile=is_mobile, is_slideshow=is_slideshow)

    assert first == second


@given(markdown_text)
@settings(max_examples=200)
def test_only_known_tags_are_emitted(source: str):
    rendered = render_markdown(source)

    assert {match.group(1) for match in TAG_PATTERN.finditer(rendered)} <= ALLOWED_TAGS


@given(markdown_text)
@settings(max_examples=200)
def test_no_raw_angle_brackets_outside_tags(source: str):
    rendered = render_markdown(source)

    text_only = TAG_PATTERN.sub("", rendered)
    assert "<" not in text_only
    assert ">" not in text_only


@given(markdown_text)
def test_emitted_urls_pass_validation(source: str):
    rendered = render_markdown(source)

    for match in HREF_PATTERN.finditer(rendered):
        href = match.group(1)
        assert href.startswith("#") or is_valid_link_url(html.unescape(href))
    for match in SRC_PATTERN.finditer(rendered):
        assert is_valid_image_url(html.unescape(match.group(1)))


@given(st.text(alphabet=st.sampled_from("abc *`[]()!#-|\n")))
def test_no_placeholder_tokens_leak(source: str):
    rendered = render_markdown(source)

    assert not any(character in rendered for character in PLACEHOLDER_CHARACTERS)


@given(st.text())
def test_inline_transform_never_raises(text: str):
    assert isinstance(InlineTransformer().transform(text), str)


@given(st.text())
def test_anchor_ids_are_stable_and_trimmed(text: str):
    anchor_id = generate_anchor_id(text)

    assert anchor_id == generate_anchor_id(text)
    assert not anchor_id.startswith("-")
    assert not anchor_id.endswith("-")
    assert " " not in anchor_id

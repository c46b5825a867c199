"""Allowlist sanitization of rendered HTML.

The renderer escapes user text and validates URLs as it builds markup. This
final pass re-parses the assembled fragment with bleach and keeps only the
tags, attributes, URL protocols and CSS properties the renderer itself emits.
"""

from __future__ import annotations

from functools import lru_cache

import bleach
from bleach.css_sanitizer import CSSSanitizer

ALLOWED_TAGS = frozenset(
    {
        # blocks
        "p",
        "br",
        "hr",
        "div",
        "span",
        "blockquote",
        # headings
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        # lists
        "ul",
        "li",
        # inline
        "a",
        "img",
        "strong",
        "em",
        # code
        "pre",
        "code",
        # tables
        "table",
        "thead",
        "tbody",
        "tr",
        "th",
        "td",
    }
)

ALLOWED_ATTRIBUTES = {
    "*": ["class"],
    "a": ["href", "target", "rel", "data-anchor-link"],
    "img": ["src", "alt", "width", "height", "loading", "onerror"],
    "div": ["style"],
    "h1": ["id"],
    "h2": ["id"],
    "h3": ["id"],
    "h4": ["id"],
    "h5": ["id"],
}

ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto", "data"})

# Table and code wrappers constrain their width inline
ALLOWED_CSS_PROPERTIES = frozenset({"max-width", "width"})


@lru_cache(maxsize=1)
def _get_css_sanitizer() -> CSSSanitizer:
    return CSSSanitizer(allowed_css_properties=ALLOWED_CSS_PROPERTIES)


def sanitize_html(html: str) -> str:
    """Drop any tag, attribute, protocol or style outside the rendered vocabulary.

    Disallowed tags are escaped rather than removed, so their text stays
    visible.

    Args:
        html: Rendered HTML fragment.

    Returns:
        str: Sanitized HTML fragment.

    Examples:
        sanitize_html('<p onclick="x()">hi</p>')  # '<p>hi</p>'
    """
    if not html:
        return ""

    # A new Cleaner per call: bleach cleaners must not be shared across threads
    return bleach.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        css_sanitizer=_get_css_sanitizer(),
        strip=False,
    )

"""HTML escaping helpers shared by the render passes."""

from __future__ import annotations

import html


def escape_html(text: str) -> str:
    """Escape ``&``, ``<``, ``>``, ``"`` and ``'`` for HTML text and attributes.

    Examples:
        escape_html("<b>&</b>")  # "&lt;b&gt;&amp;&lt;/b&gt;"
    """
    return html.escape(text, quote=True)


def unescape_html(text: str) -> str:
    """Decode an escaped value back to the characters the author typed.

    URL validation runs on the decoded value so scheme and prefix checks see
    real characters.
    """
    return html.unescape(text)

"""URL validation shared by link and image rendering.

Every check runs on the decoded URL (see `escaping.unescape_html`). A URL that
fails validation is never written into an ``href`` or ``src`` attribute.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from .constants import HOST_SCHEMES, IMAGE_SCHEMES, LINK_SCHEMES, SCHEME_PATTERN

_C0_AND_SPACE = "".join(chr(code) for code in range(0x21))
_TAB_AND_NEWLINES = str.maketrans("", "", "\t\n\r")


def _normalize(url: str) -> str:
    """Apply the browser's pre-parse cleanup so schemes cannot hide behind it."""
    return url.strip(_C0_AND_SPACE).translate(_TAB_AND_NEWLINES)


def url_scheme(url: str) -> str | None:
    """Return the lowercase scheme of an absolute URL, or None for relative ones.

    Examples:
        url_scheme("HTTPS://example.com")  # "https"
        url_scheme(" java\\tscript:alert(1)")  # "javascript"
        url_scheme("docs/page.md")  # None
    """
    match = SCHEME_PATTERN.match(_normalize(url))
    if not match:
        return None
    return match.group(1).lower()


def is_absolute_url(url: str) -> bool:
    return url_scheme(url) is not None


def _url_host(url: str) -> str | None:
    try:
        return urlsplit(_normalize(url)).hostname
    except ValueError:
        return None


def _is_safe_relative(url: str) -> bool:
    return (
        not url.startswith("javascript:")
        and "<" not in url
        and ">" not in url
        and '"' not in url
    )


def _is_valid(url: str, schemes: frozenset[str]) -> bool:
    scheme = url_scheme(url)
    if scheme is None:
        return _is_safe_relative(url)
    if scheme not in schemes:
        return False
    if scheme in HOST_SCHEMES:
        return bool(_url_host(url))
    return True


def is_valid_link_url(url: str) -> bool:
    """Check whether a decoded URL may be used as a link target.

    Absolute URLs must use ``http``, ``https`` or ``mailto`` (web URLs also
    need a host). Relative URLs must not contain ``<``, ``>`` or ``"`` and
    must not start with ``javascript:``.

    Examples:
        is_valid_link_url("https://example.com")  # True
        is_valid_link_url("javascript:alert(1)")  # False
        is_valid_link_url("./guide.md")  # True
    """
    return _is_valid(url, LINK_SCHEMES)


def is_valid_image_url(url: str) -> bool:
    """Check whether a decoded URL may be used as an image source.

    Same relative-path rule as links; absolute URLs must use ``http``,
    ``https`` or ``data``.
    """
    return _is_valid(url, IMAGE_SCHEMES)


def is_anchor_url(url: str) -> bool:
    """Return True for same-document fragment links such as ``#setup``."""
    return url.startswith("#")


def is_external_url(url: str, current_host: str | None = None) -> bool:
    """Return True when an absolute URL points at a host other than the page's.

    URLs without a host (relative paths, ``mailto:``) are never external.

    Examples:
        is_external_url("https://other.org/x", "example.com")  # True
        is_external_url("https://EXAMPLE.com/x", "example.com")  # False
    """
    if not is_absolute_url(url):
        return False
    host = _url_host(url)
    if not host:
        return False
    page_host = _url_host(f"//{current_host}") if current_host else None
    return host.lower() != (page_host or "").lower()

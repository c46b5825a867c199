"""Inline markdown substitutions.

The transformer escapes its input once and then applies a fixed sequence of
substitutions. The order is significant:

1. trailing double spaces become ``<br>`` (needs the literal whitespace),
2. inline code (its content must not see any later pass),
3. images (before links, since ``![alt](url)`` contains a link shape),
4. links,
5. blockquote lines,
6. checkboxes,
7. bold, then italic (a single ``*`` would otherwise match inside ``**``).

Elements produced by steps 2-4 are swapped for placeholder tokens until the
end of the pass so later substitutions cannot reach into their markup.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .constants import (
    BLOCKQUOTE_PATTERN,
    BOLD_PATTERN,
    CHECKED_PATTERN,
    HARD_BREAK_PATTERN,
    IMAGE_CUSTOM_SIZE,
    IMAGE_DIMENSION_PATTERN,
    IMAGE_HEIGHT_HINT,
    IMAGE_PATTERN,
    IMAGE_WIDTH_HINT,
    INLINE_CODE_PATTERN,
    ITALIC_PATTERN,
    LINK_PATTERN,
    UNCHECKED_PATTERN,
)
from .escaping import escape_html, unescape_html
from .models import DisplayMode, PlaceholderKind
from .placeholders import PlaceholderRegistry
from .security import is_anchor_url, is_external_url, is_valid_image_url, is_valid_link_url
from .styles import get_preset

logger = logging.getLogger(__name__)

CHECKED_BOX = (
    '<span class="inline-flex items-center justify-center w-4 h-4 mr-2 bg-blue-500 '
    'border border-blue-500 rounded text-white text-xs font-bold">&#10003;</span>'
)
UNCHECKED_BOX = (
    '<span class="inline-flex items-center justify-center w-4 h-4 mr-2 bg-white '
    'border-2 border-gray-300 rounded"></span>'
)
BLOCKQUOTE_TEMPLATE = (
    '<blockquote class="border-l-4 border-gray-300 pl-4 py-3 bg-gray-50 text-gray-700 my-3 '
    'rounded-r-md"><span class="text-gray-600 italic">{}</span></blockquote>'
)
IMAGE_ONERROR = (
    "this.style.display='none'; "
    "if(this.nextElementSibling) this.nextElementSibling.style.display='block';"
)
DEFAULT_IMAGE_CLASS = "max-w-full h-auto"


@dataclass(frozen=True)
class ImageSize:
    """Resolved presentation for an image size hint.

    Attributes:
        css_class: Sizing classes for the ``<img>`` element.
        width: Declared pixel width, when the hint names one.
        height: Declared pixel height, when the hint names one.
    """

    css_class: str = DEFAULT_IMAGE_CLASS
    width: int | None = None
    height: int | None = None


IMAGE_PRESETS: dict[str, ImageSize] = {
    "small": ImageSize("w-32 max-w-full h-auto", 128),
    "sm": ImageSize("w-32 max-w-full h-auto", 128),
    "medium": ImageSize("w-64 max-w-full h-auto", 256),
    "md": ImageSize("w-64 max-w-full h-auto", 256),
    "large": ImageSize("w-96 max-w-full h-auto", 384),
    "lg": ImageSize("w-96 max-w-full h-auto", 384),
    "thumbnail": ImageSize("w-16 h-16 object-cover", 64, 64),
    "thumb": ImageSize("w-16 h-16 object-cover", 64, 64),
    "icon": ImageSize("w-8 h-8 object-cover", 32, 32),
    "responsive": ImageSize("w-full h-auto"),
    "fit-content": ImageSize("w-auto h-auto max-w-full max-h-full"),
}


def _pixels(value: str) -> int | None:
    digits = value[:-2] if value.endswith("px") else value
    return int(digits) if digits.isdigit() else None


def _dimension(hint: str, pattern: re.Pattern[str]) -> str | None:
    match = pattern.search(hint)
    if not match or not IMAGE_DIMENSION_PATTERN.match(match.group(1)):
        return None
    value = match.group(1)
    if value.endswith(("%", "px")):
        return value
    return f"{value}px"


def resolve_image_size(hint: str | None) -> ImageSize:
    """Translate an image title hint into sizing classes and dimensions.

    Supports ``width:`` / ``height:`` in pixels, percent or bare numbers, the
    named presets in `IMAGE_PRESETS`, and ``WxH`` pixel sizes. Unrecognized
    hints fall back to a responsive default.

    Examples:
        resolve_image_size("small").width  # 128
        resolve_image_size("width: 50%").css_class  # "w-[50%] max-w-full h-auto"
        resolve_image_size("300x200").height  # 200
    """
    if not hint:
        return ImageSize()

    if "width:" in hint:
        width = _dimension(hint, IMAGE_WIDTH_HINT)
        if width is None:
            return ImageSize()
        return ImageSize(f"w-[{width}] max-w-full h-auto", width=_pixels(width))

    if "height:" in hint:
        height = _dimension(hint, IMAGE_HEIGHT_HINT)
        if height is None:
            return ImageSize()
        return ImageSize(f"h-[{height}] max-w-full w-auto", height=_pixels(height))

    preset = IMAGE_PRESETS.get(hint.strip().lower())
    if preset is not None:
        return preset

    custom = IMAGE_CUSTOM_SIZE.match(hint.strip())
    if custom:
        width, height = int(custom.group(1)), int(custom.group(2))
        return ImageSize(
            f"w-[{width}px] h-[{height}px] max-w-full max-h-full object-contain", width, height
        )

    return ImageSize()


class InlineTransformer:
    """Apply inline markdown substitutions to a piece of block text.

    Args:
        mode: Display mode selecting class presets.
        current_host: Host of the page the output is shown on; absolute links
            to other hosts open in a new browsing context.
    """

    def __init__(self, mode: DisplayMode = DisplayMode.DEFAULT, current_host: str | None = None):
        self.mode = mode
        self.preset = get_preset(mode)
        self.current_host = current_host

    def transform(self, text: str) -> str:
        """Escape `text` and render its inline markdown as HTML.

        Examples:
            InlineTransformer().transform("**hi** <b>")
        """
        escaped = escape_html(text)
        shield = PlaceholderRegistry(escaped)
        sources: dict[str, str] = {}

        def stash(match: re.Match[str], fragment: str) -> str:
            token = shield.add(PlaceholderKind.INLINE, fragment)
            sources[token] = match.group(0)
            return token

        def plain(value: str | None) -> str | None:
            # Attribute values get the markdown source back, never generated markup
            if value is None:
                return None
            return shield.pattern.sub(lambda match: plain(sources.get(match.group(0), "")), value)

        def image(match: re.Match[str]) -> str:
            alt, url, hint = (plain(group) for group in match.groups())
            return stash(match, self.render_image(alt, url, hint))

        def link(match: re.Match[str]) -> str:
            label = shield.restore(self._emphasis(match.group(1)))
            return stash(match, self.render_link(label, plain(match.group(2))))

        result = HARD_BREAK_PATTERN.sub("<br>", escaped)
        result = INLINE_CODE_PATTERN.sub(
            lambda match: stash(match, self.render_code(match.group(1))), result
        )
        result = IMAGE_PATTERN.sub(image, result)
        result = LINK_PATTERN.sub(link, result)
        result = BLOCKQUOTE_PATTERN.sub(
            lambda match: BLOCKQUOTE_TEMPLATE.format(match.group(1)), result
        )
        result = self._emphasis(result)

        return shield.restore(result)

    def _emphasis(self, text: str) -> str:
        text = CHECKED_PATTERN.sub(CHECKED_BOX, text)
        text = UNCHECKED_PATTERN.sub(UNCHECKED_BOX, text)
        text = BOLD_PATTERN.sub(
            lambda match: f'<strong class="{self.preset.strong}">{match.group(1)}</strong>', text
        )
        return ITALIC_PATTERN.sub(r'<em class="italic text-gray-700">\1</em>', text)

    def render_code(self, code: str) -> str:
        return (
            f'<code class="{self.preset.inline_code} bg-gray-200 text-gray-900 border '
            f'border-gray-300 rounded font-mono">{code}</code>'
        )

    def render_image(self, alt: str, url: str, hint: str | None = None) -> str:
        """Render an image from its escaped alt text, URL and size hint.

        Invalid URLs render a muted label instead of an ``<img>`` element.
        """
        if not is_valid_image_url(unescape_html(url)):
            logger.debug("Rejected image URL %r", url)
            return f'<span class="text-gray-500 italic">Image: {alt or "Invalid URL"}</span>'

        size = resolve_image_size(unescape_html(hint) if hint else None)
        dimensions = ""
        if size.width is not None:
            dimensions += f' width="{size.width}"'
        if size.height is not None:
            dimensions += f' height="{size.height}"'

        return (
            f'<img src="{url}" alt="{alt}" class="{size.css_class} rounded-lg shadow-sm border '
            f'border-gray-200 my-2"{dimensions} loading="lazy" onerror="{IMAGE_ONERROR}">'
            f'<span class="text-gray-500 italic text-sm hidden">'
            f"Failed to load image: {alt or url}</span>"
        )

    def render_link(self, label: str, url: str) -> str:
        """Render a link from its rendered label and escaped URL.

        Fragment links are always kept and marked for smooth scrolling. Other
        URLs must pass validation; failures render the label as muted text.
        """
        decoded = unescape_html(url)
        is_anchor = is_anchor_url(decoded)
        if not is_anchor and not is_valid_link_url(decoded):
            logger.debug("Rejected link URL %r", url)
            return f'<span class="text-gray-500">{label}</span>'

        attributes = ""
        external_marker = ""
        if is_external_url(decoded, self.current_host):
            attributes += ' target="_blank" rel="noopener noreferrer"'
            external_marker = '<span class="ml-1 text-xs text-gray-400">&#8599;</span>'
        if is_anchor:
            attributes += ' data-anchor-link="true"'

        return (
            f'<a href="{url}" class="text-blue-600 hover:text-blue-800 underline break-words"'
            f"{attributes}>{label}{external_marker}</a>"
        )

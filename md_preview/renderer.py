"""Markdown to HTML rendering pipeline.

Tables are extracted first, then fenced code; both are pre-rendered and
replaced by placeholder tokens. The remaining text is block-parsed segment by
segment, the tokens are swapped back for their HTML, and the result is
sanitized against the vocabulary the renderer emits.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .codeblocks import extract_code_blocks, find_fenced_spans
from .config import ConfigError, RenderConfig, apply_overrides, normalize_config, validate_config
from .exceptions import InputTooLargeError, RenderFileError
from .filesystem import safe_read
from .inline import InlineTransformer
from .models import Placeholder
from .parser import parse_blocks
from .placeholders import PlaceholderRegistry
from .sanitizer import sanitize_html
from .styles import Preset, get_preset
from .tables import extract_tables

logger = logging.getLogger(__name__)


def coerce_content(content: object) -> str:
    """Turn any input value into text with ``\\n`` line endings.

    None becomes an empty string, bytes are decoded as UTF-8 (invalid
    sequences replaced), and anything else goes through `str`.
    """
    if content is None:
        text = ""
    elif isinstance(content, str):
        text = content
    elif isinstance(content, (bytes, bytearray)):
        text = bytes(content).decode("utf-8", errors="replace")
    else:
        text = str(content)
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _assemble(
    text: str, registry: PlaceholderRegistry, inline: InlineTransformer, preset: Preset
) -> str:
    parts = registry.split(text)
    html = []

    for index, part in enumerate(parts):
        if isinstance(part, Placeholder):
            html.append(registry.resolve(part))
            continue

        # The newline that separates a block from its placeholder is not an empty line
        segment = part
        if index > 0 and isinstance(parts[index - 1], Placeholder) and segment.startswith("\n"):
            segment = segment[1:]
        if (
            index + 1 < len(parts)
            and isinstance(parts[index + 1], Placeholder)
            and segment.endswith("\n")
        ):
            segment = segment[:-1]
        if segment:
            html.append(parse_blocks(segment, inline, preset))

    return "".join(html)


def render_markdown(
    content: object,
    config: RenderConfig | None = None,
    *,
    is_mobile: bool | None = None,
    is_slideshow: bool | None = None,
) -> str:
    """Render constrained markdown into a sanitized HTML fragment.

    All user text is escaped before any markup is generated, link and image
    URLs are validated, and code is escaped verbatim. The assembled fragment
    then goes through an allowlist sanitizer. Malformed markdown degrades to
    plain text; this function does not raise for any input.

    Args:
        content: Markdown text. Non-string values are coerced to text.
        config: Rendering configuration. Defaults to a new `RenderConfig`.
        is_mobile: Override for `RenderConfig.is_mobile`.
        is_slideshow: Override for `RenderConfig.is_slideshow`.

    Returns:
        str: HTML fragment.

    Examples:
        render_markdown("# Title\\n\\n- one\\n- two")
        render_markdown("| a | b |\\n|---|---|\\n| 1 | 2 |", is_mobile=True)
    """
    config = normalize_config(
        apply_overrides(config or RenderConfig(), is_mobile=is_mobile, is_slideshow=is_slideshow)
    )
    text = coerce_content(content)

    preset = get_preset(config.display_mode)
    inline = InlineTransformer(config.display_mode, config.current_host)
    registry = PlaceholderRegistry(text)

    text = extract_tables(text, inline, preset, registry, skip_spans=find_fenced_spans(text))
    text = extract_code_blocks(text, preset, registry)
    html = _assemble(text, registry, inline, preset)

    unresolved = registry.unresolved()
    if unresolved:
        logger.warning("Placeholders not substituted exactly once: %s", unresolved)

    return sanitize_html(html)


def render_file(filepath: Path, config: RenderConfig | None = None) -> str:
    """Read a Markdown file and render it.

    Args:
        filepath: Path to the markdown file.
        config: Rendering configuration; defaults to a new `RenderConfig`.

    Returns:
        str: HTML fragment.

    Raises:
        RenderFileError: If the configuration is invalid, the file cannot be
            read or decoded, or its content exceeds `max_input_chars`.

    Examples:
        html = render_file(Path("README.md"), RenderConfig(is_mobile=True))
    """
    config = config or RenderConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise RenderFileError(str(error)) from error

    try:
        with safe_read(filepath) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise RenderFileError(error_message) from error
    except IOError as error:
        raise RenderFileError(str(error)) from error

    if len(content) > config.max_input_chars:
        error = InputTooLargeError(len(content), config.max_input_chars)
        raise RenderFileError(f"{filepath}: {error}") from error

    logger.debug("Rendering %s (%d characters)", filepath, len(content))
    return render_markdown(content, config)

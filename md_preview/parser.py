"""Line-based block parser.

A single forward pass classifies each line and drives a two-state machine
(`ParserState.NONE` / `ParserState.IN_LIST`). Lists are flat: a change of
indentation closes the open list and starts a new one at the new level.
"""

from __future__ import annotations

from .constants import (
    BOLD_LABEL_PATTERN,
    HEADING_PATTERN,
    HR_PATTERN,
    LIST_MARKER_PATTERN,
    QUOTE_LINE_PATTERN,
)
from .inline import InlineTransformer
from .models import Line, LineType, ListContext, ParserState
from .slugify import generate_anchor_id
from .styles import Preset


def classify_line(raw: str) -> Line:
    """Classify a single source line.

    Args:
        raw: Line without its trailing newline.

    Returns:
        Line: Classification, indentation and inline payload.

    Examples:
        classify_line("## Setup").type  # LineType.HEADING
        classify_line("  - item").indent_level  # 2
        classify_line("---").type  # LineType.HR
    """
    content = raw.strip()
    stripped_left = raw.lstrip()
    indent_level = len(raw) - len(stripped_left)

    if not content:
        return Line(content, indent_level, LineType.EMPTY)

    if HR_PATTERN.match(content):
        return Line(content, indent_level, LineType.HR)

    heading_match = HEADING_PATTERN.match(content)
    if heading_match:
        return Line(
            content,
            indent_level,
            LineType.HEADING,
            text=heading_match.group(2).strip(),
            level=len(heading_match.group(1)),
        )

    if LIST_MARKER_PATTERN.match(content):
        return Line(
            content,
            indent_level,
            LineType.LIST,
            text=LIST_MARKER_PATTERN.sub("", stripped_left, count=1),
        )

    return Line(content, indent_level, LineType.TEXT, text=stripped_left)


def _close_list(ctx: ListContext, html: list[str]) -> bool:
    """Emit the closing tag for an open list and reset the context.

    Returns:
        bool: True when a list was open.
    """
    if ctx.state is not ParserState.IN_LIST:
        return False

    html.append("</ul>")
    ctx.close()
    return True


def _open_list(ctx: ListContext, line: Line, html: list[str], preset: Preset) -> bool:
    """Make sure a list at the line's indentation is open.

    A list open at another indentation is closed first.

    Returns:
        bool: True when a new list wrapper was emitted.
    """
    if ctx.needs_restart(line.indent_level):
        _close_list(ctx, html)

    if ctx.state is ParserState.IN_LIST:
        return False

    html.append(f'<ul class="{preset.list_wrapper}">')
    ctx.open_at(line.indent_level)
    return True


def _render_heading(line: Line, inline: InlineTransformer, preset: Preset) -> str:
    anchor_id = generate_anchor_id(line.text)
    id_attribute = f' id="{anchor_id}"' if anchor_id else ""
    tag = f"h{line.level}"
    return (
        f'<{tag}{id_attribute} class="{preset.heading(line.level)}">'
        f"{inline.transform(line.text)}</{tag}>"
    )


def _render_list_item(line: Line, inline: InlineTransformer, preset: Preset) -> str:
    text = inline.transform(line.text)
    if preset.bullet:
        return (
            f'<li class="{preset.list_item}"><span class="{preset.bullet}">&#8226;</span>'
            f'<span class="{preset.list_text}">{text}</span></li>'
        )
    return f'<li class="{preset.list_item}">&#8226; {text}</li>'


def _render_text(line: Line, inline: InlineTransformer, preset: Preset) -> str:
    if BOLD_LABEL_PATTERN.match(line.content):
        return f'<div class="{preset.bold_label}">{inline.transform(line.content)}</div>'

    # Blockquotes are block-level, so they are not wrapped in a paragraph
    if QUOTE_LINE_PATTERN.match(line.content):
        return inline.transform(line.text)

    return f'<p class="{preset.paragraph}">{inline.transform(line.text)}</p>'


def parse_blocks(text: str, inline: InlineTransformer, preset: Preset) -> str:
    """Render markdown block structure as HTML.

    Each line is handled in priority order: heading, horizontal rule, list
    item, text, empty line. Any list still open at the end is closed.

    Args:
        text: Markdown text without tables or fenced code.
        inline: Transformer applied to each block's text.
        preset: Presentation preset for the current display mode.

    Returns:
        str: Rendered HTML.

    Examples:
        parse_blocks("- a\\n- b", InlineTransformer(), get_preset(DisplayMode.DEFAULT))
    """
    html: list[str] = []
    ctx = ListContext()

    for raw in text.split("\n"):
        line = classify_line(raw)

        if line.type is LineType.HEADING:
            _close_list(ctx, html)
            html.append(_render_heading(line, inline, preset))
        elif line.type is LineType.HR:
            _close_list(ctx, html)
            html.append('<hr class="my-3 border-gray-300 border-t-2">')
        elif line.type is LineType.LIST:
            _open_list(ctx, line, html, preset)
            html.append(_render_list_item(line, inline, preset))
        elif line.type is LineType.TEXT:
            _close_list(ctx, html)
            html.append(_render_text(line, inline, preset))
        else:
            _close_list(ctx, html)
            html.append("<br>")

    _close_list(ctx, html)
    return "".join(html)

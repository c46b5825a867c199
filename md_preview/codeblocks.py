"""Fenced code block extraction and rendering."""

from __future__ import annotations

import logging

from .constants import CODE_FENCE
from .escaping import escape_html
from .models import CodeBlock, PlaceholderKind
from .placeholders import PlaceholderRegistry
from .styles import Preset

logger = logging.getLogger(__name__)


def find_fenced_spans(text: str) -> list[tuple[int, int]]:
    """Locate terminated fenced regions, delimiters included.

    Fences pair up in order of appearance; an unpaired final fence does not
    open a region.

    Examples:
        find_fenced_spans("a\\n```\\ncode\\n```\\n")  # [(2, 14)]
    """
    positions = []
    index = text.find(CODE_FENCE)
    while index != -1:
        positions.append(index)
        index = text.find(CODE_FENCE, index + len(CODE_FENCE))

    return [
        (positions[i], positions[i + 1] + len(CODE_FENCE)) for i in range(0, len(positions) - 1, 2)
    ]


def parse_code_segment(segment: str) -> CodeBlock | None:
    """Split the text between two fences into a language tag and body.

    Returns None when the body is blank. Leading and trailing blank lines are
    removed; indentation inside the body is kept.
    """
    first_line, _, rest = segment.partition("\n")
    lines = rest.splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        return None

    return CodeBlock(language=first_line.strip() or None, body="\n".join(lines))


def render_code_block(block: CodeBlock, preset: Preset) -> str:
    """Render a code block. The body is escaped and never markdown-processed."""
    label = ""
    if block.language:
        label = (
            '<div class="px-3 py-1 text-xs font-mono text-gray-400 border-b border-slate-600 '
            f'bg-slate-800">{escape_html(block.language)}</div>'
        )

    return (
        '<div class="bg-slate-700 rounded-lg overflow-hidden border border-slate-500 '
        f'{preset.code_margin} max-w-full w-full" style="max-width: 800px;">{label}'
        f'<pre class="overflow-x-auto"><code class="{preset.code_text} font-mono whitespace-pre '
        f'block leading-relaxed text-gray-200 {preset.code_padding}">{escape_html(block.body)}'
        "</code></pre></div>"
    )


def extract_code_blocks(text: str, preset: Preset, registry: PlaceholderRegistry) -> str:
    """Replace fenced code regions in `text` with ``CODE`` placeholders.

    Segments between a pair of fences are code. Blank bodies are left in place
    with their fences, and an unterminated final fence stays plain text, so
    placeholder indices only count blocks that were rendered.

    Examples:
        extract_code_blocks("```python\\nprint(1)\\n```", preset, registry)
    """
    parts = text.split(CODE_FENCE)
    pieces = [parts[0]]

    for index in range(1, len(parts), 2):
        segment = parts[index]
        if index + 1 >= len(parts):
            logger.debug("Leaving unterminated code fence as text")
            pieces.append(CODE_FENCE + segment)
            break

        block = parse_code_segment(segment)
        if block is None:
            pieces.append(CODE_FENCE + segment + CODE_FENCE)
        else:
            pieces.append(registry.add(PlaceholderKind.CODE, render_code_block(block, preset)))
        pieces.append(parts[index + 1])

    return "".join(pieces)

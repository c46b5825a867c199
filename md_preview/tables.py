"""Pipe table extraction and rendering."""

from __future__ import annotations

from collections.abc import Iterable

from .constants import TABLE_PATTERN
from .inline import InlineTransformer
from .models import PlaceholderKind, Table
from .placeholders import PlaceholderRegistry
from .styles import Preset


def split_row(row: str) -> list[str]:
    """Split a pipe row into trimmed cells.

    Drops the empty cell produced by a leading or trailing pipe; interior
    empty cells are preserved.

    Examples:
        split_row("| a | b |")  # ["a", "b"]
        split_row("| a |  | c |")  # ["a", "", "c"]
    """
    cells = [cell.strip() for cell in row.strip().split("|")]
    last = len(cells) - 1
    return [cell for index, cell in enumerate(cells) if not (cell == "" and index in (0, last))]


def parse_table_block(block: str) -> Table | None:
    """Parse a matched table block into header cells and data rows.

    The second line is the separator row and is skipped. Rows that yield no
    cells are dropped; row widths are left as written.
    """
    lines = block.strip().split("\n")
    if len(lines) < 2:
        return None

    rows = [split_row(line) for line in lines[2:]]
    return Table(header_cells=split_row(lines[0]), rows=[row for row in rows if row])


def _classes(*names: str) -> str:
    return " ".join(name for name in names if name)


def render_table(table: Table, inline: InlineTransformer, preset: Preset) -> str:
    """Render a table inside a horizontally scrollable wrapper.

    Every cell goes through `inline` before it is embedded.
    """
    border = preset.table_border
    parts = [
        f'<div class="overflow-x-auto overflow-y-hidden {border} border rounded-lg max-w-full '
        'my-4" style="max-width: 100%; width: 100%;"><div class="min-w-max">'
        '<table class="w-full border-collapse">',
        f'<thead class="{preset.table_header_bg}"><tr class="border-b {border}">',
    ]

    last_header = len(table.header_cells) - 1
    for index, header in enumerate(table.header_cells):
        classes = _classes(
            preset.table_header_padding,
            f"border-r {border}" if index < last_header else "",
            "text-left",
            preset.table_header_text,
            "font-semibold text-gray-900 min-w-0 break-words",
        )
        parts.append(f'<th class="{classes}">{inline.transform(header)}</th>')
    parts.append('</tr></thead><tbody class="bg-white">')

    last_row = len(table.rows) - 1
    for row_index, row in enumerate(table.rows):
        row_class = f"border-b {border}" if row_index < last_row else ""
        parts.append(f'<tr class="{row_class}">')
        last_cell = len(row) - 1
        for cell_index, cell in enumerate(row):
            classes = _classes(
                preset.table_cell_padding,
                f"border-r {border}" if cell_index < last_cell else "",
                preset.table_text,
                "text-gray-700 min-w-0 break-words",
            )
            parts.append(f'<td class="{classes}">{inline.transform(cell)}</td>')
        parts.append("</tr>")

    parts.append("</tbody></table></div></div>")
    return "".join(parts)


def _overlaps(start: int, end: int, spans: Iterable[tuple[int, int]]) -> bool:
    return any(start < span_end and span_start < end for span_start, span_end in spans)


def extract_tables(
    text: str,
    inline: InlineTransformer,
    preset: Preset,
    registry: PlaceholderRegistry,
    skip_spans: Iterable[tuple[int, int]] = (),
) -> str:
    """Replace every pipe table in `text` with a ``TABLE`` placeholder.

    Args:
        text: Source text.
        inline: Transformer applied to each cell.
        preset: Presentation preset for the current display mode.
        registry: Registry receiving the rendered tables.
        skip_spans: Character ranges (fenced code) where tables are ignored.

    Returns:
        str: Text with each table replaced by its placeholder token. A newline
            that ended the table is kept after the token.

    Examples:
        extract_tables("| a |\\n|---|\\n| 1 |\\n", inline, preset, registry)
    """
    skip_spans = list(skip_spans)
    pieces = []
    offset = 0

    for match in TABLE_PATTERN.finditer(text):
        if _overlaps(match.start(), match.end(), skip_spans):
            continue

        block = match.group(0)
        table = parse_table_block(block)
        if table is None:
            continue

        pieces.append(text[offset : match.start()])
        pieces.append(registry.add(PlaceholderKind.TABLE, render_table(table, inline, preset)))
        if block.endswith("\n"):
            pieces.append("\n")
        offset = match.end()

    pieces.append(text[offset:])
    return "".join(pieces)

"""Presentation presets for each display mode.

The presets only choose class names for spacing, sizing, borders and
backgrounds. Parsing never consults them.
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import DisplayMode


@dataclass(frozen=True)
class Preset:
    """Class names used by the render passes for one display mode.

    Attributes:
        headings: Classes for heading levels 1 through 5, in order.
        paragraph: Classes for regular paragraphs.
        bold_label: Classes for standalone ``**Label**:`` lines.
        list_wrapper: Classes for the flat list wrapper.
        list_item: Classes for list items.
        bullet: Classes for the bullet glyph in slideshow items, or empty when
            the glyph is inlined in the item text.
        list_text: Classes for the item text span in slideshow items.
        table_cell_padding: Padding for body cells.
        table_header_padding: Padding for header cells.
        table_text: Text size for body cells.
        table_header_text: Text size for header cells.
        table_border: Border color for the table wrapper and cell dividers.
        table_header_bg: Background for the header section.
        code_padding: Padding inside fenced code blocks.
        code_text: Text size inside fenced code blocks.
        code_margin: Vertical margin around fenced code blocks.
        inline_code: Size and padding for inline code spans.
        strong: Classes for ``**bold**`` spans.
    """

    headings: tuple[str, str, str, str, str]
    paragraph: str
    bold_label: str
    list_wrapper: str
    list_item: str
    bullet: str
    list_text: str
    table_cell_padding: str
    table_header_padding: str
    table_text: str
    table_header_text: str
    table_border: str
    table_header_bg: str
    code_padding: str
    code_text: str
    code_margin: str
    inline_code: str
    strong: str

    def heading(self, level: int) -> str:
        """Return classes for a heading level, clamped to 1..5."""
        return self.headings[min(max(level, 1), 5) - 1]


PRESETS: dict[DisplayMode, Preset] = {
    DisplayMode.DEFAULT: Preset(
        headings=(
            "text-3xl font-bold text-gray-900 mb-2 mt-3 border-b border-gray-200 pb-2",
            "text-2xl font-semibold text-gray-800 mb-1 mt-2",
            "text-xl font-medium text-gray-700 mb-1 mt-1",
            "text-xl font-medium text-gray-700 mb-0 mt-1",
            "text-lg font-medium text-gray-700 mb-0 mt-1",
        ),
        paragraph="text-base text-gray-700 mb-0 leading-tight break-words",
        bold_label="font-semibold text-gray-900 mt-3 mb-1",
        list_wrapper="list-none space-y-0 my-0",
        list_item="text-gray-700 leading-tight",
        bullet="",
        list_text="",
        table_cell_padding="px-4 py-2",
        table_header_padding="px-4 py-2",
        table_text="text-sm",
        table_header_text="text-sm",
        table_border="border-gray-200",
        table_header_bg="bg-gray-50",
        code_padding="p-4",
        code_text="text-sm",
        code_margin="my-3",
        inline_code="px-2 py-1 text-sm",
        strong="font-bold text-gray-900",
    ),
    DisplayMode.MOBILE: Preset(
        headings=(
            "text-2xl font-bold text-gray-900 mb-1 mt-2 border-b border-gray-200 pb-1",
            "text-xl font-semibold text-gray-800 mb-1 mt-1",
            "text-lg font-medium text-gray-700 mb-0 mt-1",
            "text-lg font-medium text-gray-700 mb-0 mt-1",
            "text-base font-medium text-gray-700 mb-0 mt-1",
        ),
        paragraph="text-base text-gray-700 mb-0 leading-tight break-words",
        bold_label="font-semibold text-gray-900 mt-2 mb-1",
        list_wrapper="list-none space-y-0 my-0",
        list_item="text-gray-700 leading-tight",
        bullet="",
        list_text="",
        table_cell_padding="px-2 py-1",
        table_header_padding="px-2 py-1",
        table_text="text-xs",
        table_header_text="text-xs",
        table_border="border-gray-200",
        table_header_bg="bg-gray-50",
        code_padding="p-2",
        code_text="text-xs",
        code_margin="my-2",
        inline_code="px-1.5 py-0.5 text-xs",
        strong="font-bold text-gray-900",
    ),
    DisplayMode.SLIDESHOW: Preset(
        headings=(
            "text-lg font-bold text-gray-900 mb-1 text-center pb-1",
            "text-base font-semibold text-gray-800 mb-1 text-center",
            "text-sm font-medium text-gray-700 mb-1",
            "text-sm font-medium text-gray-700 mb-0",
            "text-sm font-medium text-gray-700 mb-0",
        ),
        paragraph="text-sm text-gray-700 mb-1 leading-tight break-words",
        bold_label="font-semibold text-gray-900 mt-2 mb-1",
        list_wrapper="list-none space-y-0 my-0",
        list_item="flex items-start gap-1",
        bullet="text-gray-600 font-bold text-sm",
        list_text="text-sm text-gray-700 leading-tight",
        table_cell_padding="px-2 py-1",
        table_header_padding="px-2 py-1",
        table_text="text-xs",
        table_header_text="text-xs",
        table_border="border-gray-300",
        table_header_bg="bg-gray-100",
        code_padding="p-4",
        code_text="text-sm",
        code_margin="my-3",
        inline_code="px-2 py-1 text-sm",
        strong="font-bold text-gray-800",
    ),
}


def get_preset(mode: DisplayMode) -> Preset:
    return PRESETS[mode]

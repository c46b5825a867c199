"""Constants used across the md-preview package."""

from __future__ import annotations

import re

# Placeholder delimiters, tried in order until one is absent from the input
PLACEHOLDER_DELIMITERS = ("\x00", "\x1e", "\x1f", "\ue000", "\ue001")

# Block patterns (applied to stripped lines)
HEADING_PATTERN = re.compile(r"^(#{1,5})\s+(.*)$")
HR_PATTERN = re.compile(r"^(?:-{3,}|\*{3,}|_{3,})$")
LIST_MARKER_PATTERN = re.compile(r"^(?:[-*+]|\d+\.)\s+")
BOLD_LABEL_PATTERN = re.compile(r"^\*\*[^*]+\*\*:?\s*$")
# A quote marker needs a space or tab and then visible text
QUOTE_LINE_PATTERN = re.compile(r"^>[ \t]+\S")

# Fenced code
CODE_FENCE = "```"

# Pipe tables: header row, separator row with at least one dash, data rows
TABLE_PATTERN = re.compile(
    r"^[ \t]*\|[^\n]*\|[ \t]*\n"
    r"[ \t]*\|(?=[^\n]*-)[-:| \t]*\|[ \t]*(?:\n|$)"
    r"(?:[ \t]*\|[^\n]*\|[ \t]*(?:\n|$))*",
    re.MULTILINE,
)

# Inline patterns (applied to escaped text)
HARD_BREAK_PATTERN = re.compile(r"(?<! ) {2,}$", re.MULTILINE)
INLINE_CODE_PATTERN = re.compile(r"`([^`]+)`")
IMAGE_PATTERN = re.compile(
    r"!\[([^\[\]]*)\]\(((?:[^()\s]|\([^()\s]*\))+)(?:\s+&quot;([^()\n]*?)&quot;)?\s*\)"
)
LINK_PATTERN = re.compile(r"\[([^\[\]]+)\]\(((?:[^()\n]|\([^()\n]*\))+)\)")
# Same marker rule as QUOTE_LINE_PATTERN; a raw "<" after it can only be a generated <br>
BLOCKQUOTE_PATTERN = re.compile(r"^&gt;[ \t]+([^\s<].*)$", re.MULTILINE)
CHECKED_PATTERN = re.compile(r"\[[xX]\]")
UNCHECKED_PATTERN = re.compile(r"\[\s\]")
BOLD_PATTERN = re.compile(r"\*\*(.+?)\*\*")
ITALIC_PATTERN = re.compile(r"\*(.+?)\*")

# URL validation
LINK_SCHEMES = frozenset({"http", "https", "mailto"})
IMAGE_SCHEMES = frozenset({"http", "https", "data"})
HOST_SCHEMES = frozenset({"http", "https"})
SCHEME_PATTERN = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")

# Anchor ids keep ASCII word characters, whitespace and Japanese script ranges
ANCHOR_STRIP_PATTERN = re.compile(r"[^\w\s\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FAF]", re.ASCII)

# Image size hints
IMAGE_DIMENSION_PATTERN = re.compile(r"^\d+(?:\.\d+)?(?:px|%)?$")
IMAGE_WIDTH_HINT = re.compile(r"width:\s*([^;\s]+)")
IMAGE_HEIGHT_HINT = re.compile(r"height:\s*([^;\s]+)")
IMAGE_CUSTOM_SIZE = re.compile(r"^(\d+)x(\d+)$")

# Files
MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd", ".txt")
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
DEFAULT_MAX_INPUT_CHARS = 2_000_000

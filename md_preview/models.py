"""Data models for md-preview."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class DisplayMode(Enum):
    """Presentation presets. Only sizing and spacing depend on the mode.

    Attributes:
        DEFAULT: Regular desktop rendering.
        MOBILE: Compact spacing and smaller text.
        SLIDESHOW: Compact spacing with centered top-level headings.
    """

    DEFAULT = auto()
    MOBILE = auto()
    SLIDESHOW = auto()

    @classmethod
    def from_flags(cls, is_mobile: bool = False, is_slideshow: bool = False) -> DisplayMode:
        """Resolve the mode from caller flags; slideshow takes precedence."""
        if is_slideshow:
            return cls.SLIDESHOW
        if is_mobile:
            return cls.MOBILE
        return cls.DEFAULT


class LineType(Enum):
    """Classification of a single source line."""

    HEADING = auto()
    LIST = auto()
    TEXT = auto()
    EMPTY = auto()
    HR = auto()


class ParserState(Enum):
    """Block parser states.

    Attributes:
        NONE: No block is open.
        IN_LIST: A flat list is open and accepting items.
    """

    NONE = auto()
    IN_LIST = auto()


@dataclass
class Line:
    """A classified source line.

    Attributes:
        content: The line with surrounding whitespace removed.
        indent_level: Number of leading whitespace characters.
        type: Line classification.
        text: Payload handed to the inline pass. Heading and list markers are
            removed; trailing whitespace is kept so hard breaks survive.
        level: Heading level, or 0 for other line types.
    """

    content: str
    indent_level: int
    type: LineType
    text: str = ""
    level: int = 0


@dataclass
class ListContext:
    """Open/closed state of the single flat list the parser may emit.

    Attributes:
        open: Whether a list wrapper has been emitted and not yet closed.
        indent_level: Indentation of the open list, or -1 when closed.
    """

    open: bool = False
    indent_level: int = -1

    @property
    def state(self) -> ParserState:
        return ParserState.IN_LIST if self.open else ParserState.NONE

    def open_at(self, indent_level: int) -> None:
        self.open = True
        self.indent_level = indent_level

    def close(self) -> None:
        self.open = False
        self.indent_level = -1

    def needs_restart(self, indent_level: int) -> bool:
        """Return True when an open list sits at a different indentation."""
        return self.open and indent_level != self.indent_level


@dataclass
class Table:
    """A parsed pipe table.

    Row widths are not reconciled with the header: rows render whatever cells
    they contain.
    """

    header_cells: list[str]
    rows: list[list[str]] = field(default_factory=list)


@dataclass
class CodeBlock:
    """A fenced code block with an optional language tag."""

    language: str | None
    body: str


class PlaceholderKind(Enum):
    """Kinds of pre-rendered fragments carried through the pipeline.

    Attributes:
        TABLE: A rendered table.
        CODE: A rendered fenced code block.
        INLINE: An inline element shielded from later inline substitutions.
    """

    TABLE = auto()
    CODE = auto()
    INLINE = auto()


@dataclass(frozen=True)
class Placeholder:
    """Tagged reference to the ``index``-th fragment of a given kind."""

    kind: PlaceholderKind
    index: int

"""Placeholder tokens for fragments that must survive later passes untouched."""

from __future__ import annotations

import logging
import re
import uuid
from collections import Counter

from .constants import PLACEHOLDER_DELIMITERS
from .models import Placeholder, PlaceholderKind

logger = logging.getLogger(__name__)


def choose_delimiter(text: str) -> str:
    """Pick a delimiter that does not occur anywhere in `text`.

    Tries the fixed candidates first and falls back to a random private-use
    sequence, regenerated until it does not collide.

    Examples:
        choose_delimiter("plain text")  # "\\x00"
    """
    for candidate in PLACEHOLDER_DELIMITERS:
        if candidate not in text:
            return candidate

    while True:
        candidate = f"\ue000{uuid.uuid4().hex}\ue000"
        if candidate not in text:
            return candidate


class PlaceholderRegistry:
    """Collect pre-rendered fragments and the tokens standing in for them.

    Indices are assigned per kind, sequentially from 0, so the number of
    tokens of a kind always equals the number of stored fragments.

    Args:
        source: Text the tokens will be embedded in; used to select a
            delimiter that cannot collide with user content.
    """

    def __init__(self, source: str):
        self.delimiter = choose_delimiter(source)
        self._fragments: dict[PlaceholderKind, list[str]] = {kind: [] for kind in PlaceholderKind}
        self._resolved: Counter[Placeholder] = Counter()
        kinds = "|".join(kind.name for kind in PlaceholderKind)
        delimiter = re.escape(self.delimiter)
        self.pattern = re.compile(rf"{delimiter}({kinds}):(\d+){delimiter}")
        self._split_pattern = re.compile(rf"({delimiter}(?:{kinds}):\d+{delimiter})")

    def add(self, kind: PlaceholderKind, fragment: str) -> str:
        """Store `fragment` and return the token that refers to it."""
        fragments = self._fragments[kind]
        placeholder = Placeholder(kind, len(fragments))
        fragments.append(fragment)
        return self.token(placeholder)

    def token(self, placeholder: Placeholder) -> str:
        return f"{self.delimiter}{placeholder.kind.name}:{placeholder.index}{self.delimiter}"

    def fragments(self, kind: PlaceholderKind) -> list[str]:
        return list(self._fragments[kind])

    def parse(self, token: str) -> Placeholder | None:
        """Return the placeholder a whole token refers to, or None."""
        match = self.pattern.fullmatch(token)
        if not match:
            return None
        return Placeholder(PlaceholderKind[match.group(1)], int(match.group(2)))

    def split(self, text: str) -> list[str | Placeholder]:
        """Split text into plain segments and the placeholders between them.

        Empty segments are dropped.
        """
        parts: list[str | Placeholder] = []
        for segment in self._split_pattern.split(text):
            if not segment:
                continue
            placeholder = self.parse(segment)
            parts.append(placeholder if placeholder is not None else segment)
        return parts

    def resolve(self, placeholder: Placeholder) -> str:
        """Return the fragment for `placeholder` and record that it was used."""
        fragments = self._fragments[placeholder.kind]
        if placeholder.index >= len(fragments):
            logger.warning("Dropping unknown placeholder %s", placeholder)
            return ""
        self._resolved[placeholder] += 1
        return fragments[placeholder.index]

    def restore(self, text: str, kind: PlaceholderKind | None = None) -> str:
        """Substitute every token (optionally of one kind) with its fragment."""

        def _replace(match: re.Match[str]) -> str:
            placeholder = Placeholder(PlaceholderKind[match.group(1)], int(match.group(2)))
            if kind is not None and placeholder.kind is not kind:
                return match.group(0)
            return self.resolve(placeholder)

        return self.pattern.sub(_replace, text)

    def unresolved(self) -> list[Placeholder]:
        """Return placeholders that were not substituted exactly once."""
        pending = []
        for kind, fragments in self._fragments.items():
            for index in range(len(fragments)):
                placeholder = Placeholder(kind, index)
                if self._resolved[placeholder] != 1:
                    pending.append(placeholder)
        return pending

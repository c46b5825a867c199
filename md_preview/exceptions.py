"""Package-specific exception types."""

from __future__ import annotations


class RenderError(ValueError):
    """Base class for rendering-related errors.

    Rendering itself never raises for malformed markup; these errors cover the
    limits enforced around it (for example, when reading input files).
    """


class InputTooLargeError(RenderError):
    """Raised when input content exceeds the configured maximum size.

    Args:
        size: Length of the offending content in characters.
        limit: Maximum allowed length in characters.
    """

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"Input of {self.size} characters exceeds the maximum allowed length of {self.limit}"


class RenderFileError(RenderError):
    """Raised when rendering a Markdown file fails."""

"""Copy-to-clipboard affordance for rendered previews.

Copying is best effort: failures are logged and swallowed, and nothing here
takes part in rendering.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import Protocol

logger = logging.getLogger(__name__)

COPIED_INDICATOR_SECONDS = 2.0


class AsyncClipboard(Protocol):
    """Asynchronous clipboard write capability."""

    def write_text(self, text: str) -> Awaitable[None]: ...


class LegacyClipboard(Protocol):
    """Synchronous fallback copy mechanism."""

    def copy(self, text: str) -> None: ...


class ClipboardCopier:
    """Copy source text and expose a transient "copied" indicator.

    Args:
        clipboard: Async clipboard, or None when the capability is unavailable.
        fallback: Synchronous copy mechanism used when the async write is
            unavailable or fails.
        reset_delay: Seconds before the indicator reverts.

    Attributes:
        copied: True while the success indicator is shown.
    """

    def __init__(
        self,
        clipboard: AsyncClipboard | None = None,
        fallback: LegacyClipboard | None = None,
        reset_delay: float = COPIED_INDICATOR_SECONDS,
    ):
        self.clipboard = clipboard
        self.fallback = fallback
        self.reset_delay = reset_delay
        self.copied = False
        self._reset_handle: asyncio.TimerHandle | None = None

    async def copy(self, text: str) -> bool:
        """Copy `text`, trying the async clipboard first.

        Returns:
            bool: True when either mechanism succeeded. Never raises.

        Examples:
            copied = await ClipboardCopier(clipboard, fallback).copy(source)
        """
        if self.clipboard is not None:
            try:
                await self.clipboard.write_text(text)
            except Exception as error:
                logger.debug("Async clipboard write failed: %s", error)
            else:
                self._show_indicator()
                return True

        if self.fallback is not None:
            try:
                self.fallback.copy(text)
            except Exception as error:
                logger.debug("Legacy clipboard copy failed: %s", error)
            else:
                self._show_indicator()
                return True

        return False

    def _show_indicator(self) -> None:
        self.copied = True
        if self._reset_handle is not None:
            self._reset_handle.cancel()
        loop = asyncio.get_running_loop()
        self._reset_handle = loop.call_later(self.reset_delay, self._reset_indicator)

    def _reset_indicator(self) -> None:
        self.copied = False
        self._reset_handle = None

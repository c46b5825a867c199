from __future__ import annotations

import asyncio

from md_preview import ClipboardCopier
from md_preview.clipboard import COPIED_INDICATOR_SECONDS


class FakeAsyncClipboard:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.written: list[str] = []

    async def write_text(self, text: str) -> None:
        if self.fail:
            raise PermissionError("clipboard access denied")
        self.written.append(text)


class FakeLegacyClipboard:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.copied: list[str] = []

    def copy(self, text: str) -> None:
        if self.fail:
            raise RuntimeError("execCommand failed")
        self.copied.append(text)


def test_async_clipboard_is_preferred():
    clipboard = FakeAsyncClipboard()
    fallback = FakeLegacyClipboard()
    copier = ClipboardCopier(clipboard, fallback)

    async def scenario():
        return await copier.copy("# Source")

    assert asyncio.run(scenario()) is True
    assert clipboard.written == ["# Source"]
    assert fallback.copied == []


def test_fallback_is_used_when_async_write_fails():
    fallback = FakeLegacyClipboard()
    copier = ClipboardCopier(FakeAsyncClipboard(fail=True), fallback)

    assert asyncio.run(copier.copy("text")) is True
    assert fallback.copied == ["text"]


def test_fallback_is_used_when_async_clipboard_is_missing():
    fallback = FakeLegacyClipboard()

    assert asyncio.run(ClipboardCopier(None, fallback).copy("text")) is True
    assert fallback.copied == ["text"]


def test_failures_are_swallowed():
    copier = ClipboardCopier(FakeAsyncClipboard(fail=True), FakeLegacyClipboard(fail=True))

    assert asyncio.run(copier.copy("text")) is False
    assert copier.copied is False


def test_no_mechanism_available():
    assert asyncio.run(ClipboardCopier().copy("text")) is False


def test_indicator_reverts_after_delay():
    copier = ClipboardCopier(FakeAsyncClipboard(), reset_delay=0.01)

    async def scenario():
        await copier.copy("text")
        shown = copier.copied
        await asyncio.sleep(0.05)
        return shown, copier.copied

    assert asyncio.run(scenario()) == (True, False)


def test_repeated_copy_restarts_indicator_timer():
    copier = ClipboardCopier(FakeAsyncClipboard(), reset_delay=0.1)

    async def scenario():
        await copier.copy("one")
        await asyncio.sleep(0.06)
        await copier.copy("two")
        await asyncio.sleep(0.06)
        still_shown = copier.copied
        await asyncio.sleep(0.15)
        return still_shown, copier.copied

    assert asyncio.run(scenario()) == (True, False)


def test_default_indicator_duration():
    assert ClipboardCopier().reset_delay == COPIED_INDICATOR_SECONDS == 2.0

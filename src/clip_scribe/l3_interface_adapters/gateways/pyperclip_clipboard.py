"""Gateway: system clipboard via pyperclip — implements Clipboard port."""

from __future__ import annotations

import asyncio

import pyperclip


class PyperclipClipboard:
    async def copy(self, text: str) -> None:
        await asyncio.to_thread(pyperclip.copy, text)

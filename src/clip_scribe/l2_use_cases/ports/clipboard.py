"""Port: system clipboard."""

from __future__ import annotations

from typing import Protocol


class Clipboard(Protocol):
    async def copy(self, text: str) -> None:
        """Place *text* on the clipboard. May raise; callers treat it as best-effort."""
        ...

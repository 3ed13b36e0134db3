"""Transcript view — read-only text of the last result, copyable with ``c``."""

from __future__ import annotations

import pyperclip
from textual.binding import Binding
from textual.widgets import TextArea


class TranscriptView(TextArea):
    DEFAULT_CSS = """
    TranscriptView {
        border: solid $primary;
        height: 1fr;
    }
    TranscriptView:focus {
        border: solid $accent;
    }
    """

    BINDINGS = [Binding('c', 'copy_content', 'Copy', show=False)]

    def __init__(self, title: str = 'Transcript', **kwargs) -> None:
        super().__init__(read_only=True, soft_wrap=True, **kwargs)
        self.border_title = title

    def show_transcript(self, text: str) -> None:
        self.load_text(text)

    def action_copy_content(self) -> None:
        """Copy the transcript to the system clipboard."""
        if not self.text:
            self.app.notify('No transcript to copy', severity='warning', timeout=2)
            return
        try:
            pyperclip.copy(self.text)
        except pyperclip.PyperclipException as exc:
            self.app.notify(f'Copy failed: {exc}', severity='error', timeout=4)
            return
        self.app.notify('Copied!', timeout=2)

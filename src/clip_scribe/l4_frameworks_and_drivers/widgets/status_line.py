"""Status line — current workflow stage, or the last error in error styling."""

from __future__ import annotations

from textual.reactive import reactive
from textual.widgets import Static


class StatusLine(Static):
    DEFAULT_CSS = """
    StatusLine {
        height: auto;
        padding: 0 1;
        color: $text;
    }
    StatusLine.-error {
        color: $error;
        text-style: bold;
    }
    """

    is_error: reactive[bool] = reactive(False)
    message: reactive[str] = reactive('')

    def watch_is_error(self, value: bool) -> None:
        self.set_class(value, '-error')

    def watch_message(self, value: str) -> None:
        self.update(value)

    def show_status(self, message: str) -> None:
        self.is_error = False
        self.message = message

    def show_error(self, message: str) -> None:
        self.is_error = True
        self.message = message

    def clear(self) -> None:
        self.is_error = False
        self.message = ''

"""DropApp — drop (or type) an audio file path, get a transcript."""

from __future__ import annotations

import logging
import shlex
from pathlib import Path

from textual.app import App as TextualApp
from textual.app import ComposeResult
from textual.binding import Binding
from textual.timer import Timer
from textual.widgets import Input, Static

from clip_scribe.l1_entities.config import AppConfig
from clip_scribe.l1_entities.workflow import WorkflowState
from clip_scribe.l2_use_cases.transcribe_file_use_case import TranscriptionOrchestrator
from clip_scribe.l4_frameworks_and_drivers.container import DependencyContainer
from clip_scribe.l4_frameworks_and_drivers.messages import MessageStatusSink, WorkflowUpdate
from clip_scribe.l4_frameworks_and_drivers.widgets.status_line import StatusLine
from clip_scribe.l4_frameworks_and_drivers.widgets.transcript_view import TranscriptView

log = logging.getLogger('cs.app')

DROP_PROMPT = 'Drag an audio file into this window (or type its path) and press Enter.'


def parse_dropped_path(raw: str) -> Path | None:
    """Turn text pasted by a terminal drag-and-drop into a path.

    Terminals quote or backslash-escape paths with spaces; accept both.
    """
    raw = raw.strip()
    if not raw:
        return None
    if raw.startswith('file://'):
        raw = raw[len('file://') :]
    try:
        parts = shlex.split(raw)
    except ValueError:
        parts = [raw]
    if not parts:
        return None
    return Path(' '.join(parts)).expanduser()


class DropApp(TextualApp):
    """Single-screen TUI around one TranscriptionOrchestrator session."""

    CSS = """
    #header {
        background: $primary;
        color: $text;
        padding: 0 1;
    }
    #drop-prompt {
        padding: 1 1 0 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding('ctrl+q', 'quit', 'Quit', priority=True),
        Binding('escape', 'focus_input', 'New file', show=False),
    ]

    def __init__(self, config: AppConfig, container: DependencyContainer | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._config = config
        self._container = container or DependencyContainer(config)
        self._orchestrator = self._container.orchestrator(MessageStatusSink(self.post_message))
        self._error_timer: Timer | None = None

    @property
    def orchestrator(self) -> TranscriptionOrchestrator:
        return self._orchestrator

    def compose(self) -> ComposeResult:
        tc = self._config.transcription
        yield Static(f'  clip-scribe | {tc.model} [{tc.language}]', id='header')
        yield Static(DROP_PROMPT, id='drop-prompt')
        yield Input(placeholder='/path/to/clip.m4a', id='path-input')
        yield StatusLine(id='status')
        yield TranscriptView(id='transcript')

    def on_mount(self) -> None:
        self.query_one('#status', StatusLine).display = False
        self.query_one('#transcript', TranscriptView).display = False
        self.query_one('#path-input', Input).focus()

    # --- Input ---

    def on_input_submitted(self, event: Input.Submitted) -> None:
        path = parse_dropped_path(event.value)
        event.input.value = ''
        if path is None:
            return
        if not path.is_file():
            self.notify(f'Not a file: {path}', severity='error', timeout=4)
            return
        try:
            data = path.read_bytes()
        except OSError as exc:
            self.notify(f'Cannot read {path.name}: {exc}', severity='error', timeout=4)
            return

        log.info('Submitted %s (%d bytes)', path, len(data))
        self._reset_for_submission()
        self._start_transcription(data)

    def _start_transcription(self, data: bytes) -> None:  # pragma: no cover -- thin worker launcher; patched out in tests
        self.run_worker(self._orchestrator.submit(data), group='transcription', exit_on_error=False)

    def _reset_for_submission(self) -> None:
        self._cancel_error_timer()
        transcript = self.query_one('#transcript', TranscriptView)
        transcript.display = False
        transcript.show_transcript('')
        self.query_one('#drop-prompt', Static).display = False
        status = self.query_one('#status', StatusLine)
        status.clear()
        status.display = True

    # --- Message Handlers ---

    def on_workflow_update(self, message: WorkflowUpdate) -> None:
        event = message.event
        if event.copied:
            self.notify(event.message, timeout=2)
            return
        status = self.query_one('#status', StatusLine)

        if event.state == WorkflowState.DONE:
            status.display = False
            self.query_one('#drop-prompt', Static).display = True
            transcript = self.query_one('#transcript', TranscriptView)
            transcript.show_transcript(event.text)
            transcript.display = True
        elif event.state == WorkflowState.ERROR:
            status.display = True
            status.show_error(event.message)
            self._cancel_error_timer()
            self._error_timer = self.set_timer(event.reset_after or 0.0, self._clear_error)
        else:
            status.display = True
            status.show_status(event.message)

    def _clear_error(self) -> None:
        self._error_timer = None
        status = self.query_one('#status', StatusLine)
        status.clear()
        status.display = False
        self.query_one('#drop-prompt', Static).display = True

    def _cancel_error_timer(self) -> None:
        if self._error_timer is not None:
            self._error_timer.stop()
            self._error_timer = None

    # --- Actions ---

    def action_focus_input(self) -> None:
        self.query_one('#path-input', Input).focus()

"""Workflow entities — per-session state and the notifications it emits."""

from __future__ import annotations

import enum

from pydantic import BaseModel


class WorkflowState(enum.Enum):
    IDLE = 'idle'
    LOADING = 'loading'
    PROCESSING = 'processing'
    TRANSCRIBING = 'transcribing'
    DONE = 'done'
    ERROR = 'error'


class WorkflowEvent(BaseModel):
    """One lifecycle notification for the status sink.

    ``text`` is set only on DONE; ``reset_after`` only on ERROR, telling the
    sink how long to keep the error on screen before showing the idle prompt.
    ``copied`` marks the IDLE notice sent after a successful auto-copy.
    """

    state: WorkflowState
    message: str = ''
    text: str = ''
    reset_after: float | None = None
    copied: bool = False

    @property
    def is_final(self) -> bool:
        return self.state in (WorkflowState.DONE, WorkflowState.ERROR)

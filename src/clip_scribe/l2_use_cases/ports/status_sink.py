"""Port: one-way channel for workflow lifecycle notifications."""

from __future__ import annotations

from typing import Protocol

from clip_scribe.l1_entities.workflow import WorkflowEvent


class StatusSink(Protocol):
    def post(self, event: WorkflowEvent) -> None:
        """Accept a notification. No acknowledgement is expected."""
        ...

"""Textual Message subclasses and the sink that posts them."""

from __future__ import annotations

from collections.abc import Callable

from textual.message import Message

from clip_scribe.l1_entities.workflow import WorkflowEvent


class WorkflowUpdate(Message):
    """Posted for every lifecycle event of a transcription workflow."""

    def __init__(self, event: WorkflowEvent) -> None:
        super().__init__()
        self.event = event


class MessageStatusSink:
    """StatusSink that forwards workflow events as Textual messages."""

    def __init__(self, post_message: Callable[[Message], object]) -> None:
        self._post_message = post_message

    def post(self, event: WorkflowEvent) -> None:
        self._post_message(WorkflowUpdate(event))

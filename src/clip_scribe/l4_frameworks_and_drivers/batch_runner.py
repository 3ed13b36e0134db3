"""Batch runner — headless transcription of files given on the command line."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

from clip_scribe.l1_entities.workflow import WorkflowEvent, WorkflowState
from clip_scribe.l4_frameworks_and_drivers.container import DependencyContainer

log = logging.getLogger('cs.batch')


def _err(msg: str) -> None:
    print(msg, file=sys.stderr, flush=True)


class ConsoleStatusSink:
    """Status lines to stderr, transcripts to stdout."""

    def __init__(self, show_header: bool = False) -> None:
        self._show_header = show_header
        self.current: Path | None = None

    def post(self, event: WorkflowEvent) -> None:
        if event.state == WorkflowState.DONE:
            if self._show_header and self.current is not None:
                print(f'==> {self.current.name} <==')
            print(event.text, flush=True)
        elif event.state == WorkflowState.ERROR:
            _err(f'Error: {event.message}')
        else:
            _err(event.message)


async def _transcribe_all(paths: list[Path], container: DependencyContainer) -> int:
    sink = ConsoleStatusSink(show_header=len(paths) > 1)
    orchestrator = container.orchestrator(sink)
    failures = 0
    for path in paths:
        sink.current = path
        _err(f'[{path}]')
        try:
            data = path.read_bytes()
        except OSError as exc:
            _err(f'Error: cannot read {path}: {exc}')
            failures += 1
            continue
        result = await orchestrator.submit(data)
        if result is None:
            failures += 1
    return failures


def run_batch(paths: list[Path], container: DependencyContainer) -> int:
    """Transcribe each file in turn. Blocks until done; returns the number of failures."""
    log.info('Batch transcription of %d file(s)', len(paths))
    return asyncio.run(_transcribe_all(paths, container))

"""Use case: reject clips longer than the configured ceiling."""

from __future__ import annotations

from clip_scribe.l1_entities.audio_constants import MAX_DURATION_SEC
from clip_scribe.l1_entities.errors import DurationExceededError


class DurationGuard:
    """Pure duration check. The limit is inclusive: a clip exactly at the limit passes."""

    def __init__(self, limit: float = MAX_DURATION_SEC) -> None:
        if limit <= 0:
            raise ValueError(f'Duration limit must be positive, got {limit}')
        self._limit = limit

    @property
    def limit(self) -> float:
        return self._limit

    def check(self, duration_seconds: float) -> None:
        if duration_seconds > self._limit:
            raise DurationExceededError(actual=duration_seconds, limit=self._limit)

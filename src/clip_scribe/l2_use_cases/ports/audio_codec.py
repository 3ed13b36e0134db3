"""Port: native audio decoding and offline rendering."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

import numpy as np

from clip_scribe.l1_entities.audio import DecodedAudio


class AudioCodec(Protocol):
    """One decode/render session. Holds native resources until ``close()``.

    A session is private to a single ingest call and is never reused.
    """

    async def decode(self, data: bytes) -> DecodedAudio:
        """Decode container/codec bytes into PCM. Raises DecodeError on failure."""
        ...

    async def render_offline(
        self,
        decoded: DecodedAudio,
        target_rate: int,
        target_channels: int,
        target_length: int,
    ) -> np.ndarray:
        """Render *decoded* into exactly ``target_length`` frames at the target format.

        Returns shape ``(target_length,)`` for mono, ``(target_channels, target_length)`` otherwise.
        """
        ...

    async def close(self) -> None:
        """Release native resources. Safe to call more than once."""
        ...


AudioCodecFactory = Callable[[], AudioCodec]

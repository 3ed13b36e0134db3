"""Tests for transcription entities."""

import pytest
from pydantic import ValidationError

from clip_scribe.l1_entities.transcript import TranscriptionOptions


class TestTranscriptionOptions:
    def test_defaults(self):
        opts = TranscriptionOptions()
        assert opts.language == 'english'
        assert opts.chunk_length_s == 30.0
        assert opts.stride_length_s == 5.0
        assert opts.step_length_s == 20.0

    def test_frozen(self):
        opts = TranscriptionOptions()
        with pytest.raises(ValidationError):
            opts.language = 'french'  # type: ignore[misc]

    def test_stride_too_large_raises(self):
        with pytest.raises(ValidationError, match='half of chunk_length_s'):
            TranscriptionOptions(chunk_length_s=10, stride_length_s=5)

    def test_step_rounding_to_zero_samples_raises(self):
        # 1.00001 s - 2 * 0.5 s is positive in seconds but 0 whole samples at 16 kHz
        with pytest.raises(ValidationError, match='half of chunk_length_s'):
            TranscriptionOptions(chunk_length_s=1.00001, stride_length_s=0.5)

    def test_step_samples(self):
        assert TranscriptionOptions().step_samples(16000) == 20 * 16000

    def test_non_positive_chunk_raises(self):
        with pytest.raises(ValidationError):
            TranscriptionOptions(chunk_length_s=0)

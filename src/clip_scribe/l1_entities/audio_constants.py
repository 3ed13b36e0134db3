"""Audio format constants shared across layers."""

SAMPLE_RATE = 16000  # Hz, what whisper expects
CHANNELS = 1
MAX_DURATION_SEC = 120.0  # hard ceiling for a single clip

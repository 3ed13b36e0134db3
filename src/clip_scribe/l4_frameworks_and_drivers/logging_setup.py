"""File-based debug logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

from clip_scribe.l3_interface_adapters.gateways.paths import LOG_DIR


def setup_file_logging(log_dir: Path = LOG_DIR, level: int = logging.DEBUG) -> Path:
    """Configure file-based debug logging for the ``cs`` logger tree. Returns the log path."""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / 'cs_debug.log'
    root = logging.getLogger('cs')
    if not any(isinstance(h, logging.FileHandler) and Path(h.baseFilename) == log_path for h in root.handlers):
        handler = logging.FileHandler(log_path, encoding='utf-8')
        handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s'))
        root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger('cs.cli').info('Debug logging started → %s', log_path)
    return log_path

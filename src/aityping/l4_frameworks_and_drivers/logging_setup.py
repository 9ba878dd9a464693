"""File-based debug logging setup."""

from __future__ import annotations

import logging
from pathlib import Path


def setup_file_logging(log_dir: Path) -> None:
    """Configure file-based debug logging into *log_dir*."""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / 'aityping_debug.log'
    handler = logging.FileHandler(log_path, encoding='utf-8')
    handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(message)s'))
    root = logging.getLogger('ait')
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)
    logging.getLogger('ait.app').info('Debug logging started → %s', log_path)

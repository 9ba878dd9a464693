"""L1 entity: capture session state."""

from __future__ import annotations

import enum


class CaptureState(enum.Enum):
    IDLE = 'idle'
    RECORDING = 'recording'

"""Pointer gesture states."""
from __future__ import annotations

from enum import Enum, auto


class GestureState(Enum):
    """Enum for the pointer gesture in progress."""
    IDLE = auto()
    ROTATING = auto()
    PANNING = auto()

    def __str__(self):
        return self.name.lower()

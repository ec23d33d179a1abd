"""Bounded polling for eventually-consistent remote predicates."""

from .clock import Clock, SystemClock, VirtualClock
from .engine import DEFAULT_IGNORED, Wait, is_ignored, is_usable, wait

__all__ = [
    "Clock",
    "SystemClock",
    "VirtualClock",
    "Wait",
    "wait",
    "is_usable",
    "is_ignored",
    "DEFAULT_IGNORED",
]

"""Time operations abstraction for testing."""

from chuck.core.time.abc import Time
from chuck.core.time.real import RealTime

__all__ = [
    "RealTime",
    "Time",
]

"""
Playback contracts.

The coordinator never touches a concrete player; callers hand it an object
satisfying AudioHandle together with a PlaybackListener that mirrors state
into their UI.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol


class PlaybackState(str, Enum):
    """Coordinator session states."""

    IDLE = "idle"
    FADING_IN = "fading_in"
    STEADY = "steady"
    FADING_OUT = "fading_out"


class AudioHandle(Protocol):
    """A caller-owned audio element."""

    volume: float
    current_time: float  # seconds

    @property
    def paused(self) -> bool: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def add_ended_callback(self, callback: Callable[[], None]) -> None: ...

    def remove_ended_callback(self, callback: Callable[[], None]) -> None: ...


class PlaybackListener(Protocol):
    """Receives coordinator notifications for one UI element."""

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def stop(self) -> None: ...


@dataclass
class PlaybackOptions:
    """
    Per-call preview window.

    Attributes:
        start_time: Seek position in seconds (coordinator default when None)
        duration: Seconds before auto-stop (coordinator default when None)
    """

    start_time: Optional[float] = None
    duration: Optional[float] = None

"""Exclusive preview playback with fade envelopes."""

from mintmedia.playback.base import (
    AudioHandle,
    PlaybackListener,
    PlaybackOptions,
    PlaybackState,
)
from mintmedia.playback.coordinator import PlaybackCoordinator

__all__ = [
    "AudioHandle",
    "PlaybackListener",
    "PlaybackOptions",
    "PlaybackState",
    "PlaybackCoordinator",
]

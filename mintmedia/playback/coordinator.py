"""
Preview playback coordination.

Keeps at most one preview clip audible at a time, with linear fade-in and
fade-out envelopes and an auto-stop after a bounded preview window.

Runs on the asyncio event loop: play() and pause() are synchronous and must
be called from inside the running loop. Each session owns one fade task and
one auto-stop timer; both are cancelled before a replacement is armed.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Optional

from mintmedia.playback.base import (
    AudioHandle,
    PlaybackListener,
    PlaybackOptions,
    PlaybackState,
)

logger = logging.getLogger(__name__)


class _Session:
    """The single active preview: handle, listener, fade task and auto-stop timer."""

    def __init__(self, handle: AudioHandle, listener: PlaybackListener):
        self.handle = handle
        self.listener = listener
        self.state = PlaybackState.FADING_IN
        self.fade_task: Optional[asyncio.Task] = None
        self.auto_stop: Optional[asyncio.TimerHandle] = None
        self.ended_callback: Optional[Callable[[], None]] = None

    def cancel_fade(self) -> None:
        if self.fade_task is not None:
            self.fade_task.cancel()
            self.fade_task = None

    def cancel_auto_stop(self) -> None:
        if self.auto_stop is not None:
            self.auto_stop.cancel()
            self.auto_stop = None

    def detach(self) -> None:
        """Cancel timers and stop listening for the track end."""
        self.cancel_fade()
        self.cancel_auto_stop()
        if self.ended_callback is not None:
            self.handle.remove_ended_callback(self.ended_callback)
            self.ended_callback = None


class PlaybackCoordinator:
    """
    Exclusive preview playback manager.

    Construct one per application and share it explicitly with every
    consumer that plays previews.

    Usage:
        coordinator = PlaybackCoordinator()
        unregister = coordinator.register(listener)
        coordinator.play(audio, listener)
        ...
        unregister()
    """

    def __init__(
        self,
        fade_duration_ms: int = 2300,
        fade_step_ms: int = 50,
        initial_volume: float = 0.1,
        peak_volume: float = 0.8,
        default_start_time: float = 18.0,
        default_duration: float = 18.0,
    ):
        if fade_duration_ms <= 0 or fade_step_ms <= 0:
            raise ValueError("Fade duration and step must be positive milliseconds")

        self.fade_duration_ms = fade_duration_ms
        self.fade_step_ms = fade_step_ms
        self.initial_volume = initial_volume
        self.peak_volume = peak_volume
        self.default_start_time = default_start_time
        self.default_duration = default_duration

        self._listeners: list[PlaybackListener] = []
        self._session: Optional[_Session] = None

    @classmethod
    def from_config(cls, playback_config: Any) -> "PlaybackCoordinator":
        """Build a coordinator from a PlaybackConfig section."""
        return cls(
            fade_duration_ms=playback_config.fade_duration_ms,
            fade_step_ms=playback_config.fade_step_ms,
            initial_volume=playback_config.initial_volume,
            peak_volume=playback_config.peak_volume,
            default_start_time=playback_config.default_start_time,
            default_duration=playback_config.default_duration,
        )

    # ------------------------------------------------------------------
    # Listener registry
    # ------------------------------------------------------------------

    def register(self, listener: PlaybackListener) -> Callable[[], None]:
        """
        Register a listener for stop broadcasts.

        Returns:
            Function that unregisters the listener; extra calls are ignored
        """
        if not self._is_registered(listener):
            self._listeners.append(listener)

        def unregister() -> None:
            self._listeners = [l for l in self._listeners if l is not listener]

        return unregister

    def _is_registered(self, listener: PlaybackListener) -> bool:
        return any(l is listener for l in self._listeners)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> PlaybackState:
        if self._session is None:
            return PlaybackState.IDLE
        return self._session.state

    @property
    def current_handle(self) -> Optional[AudioHandle]:
        return self._session.handle if self._session else None

    def is_playing(self, handle: AudioHandle) -> bool:
        """Check whether the handle is the active, unpaused session."""
        return (
            self._session is not None
            and self._session.handle is handle
            and not handle.paused
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def play(
        self,
        handle: AudioHandle,
        listener: PlaybackListener,
        options: Optional[PlaybackOptions] = None,
    ) -> None:
        """
        Start a preview session for a handle.

        Any active session is interrupted immediately (no crossfade). The
        handle is seeked to the start time, faded in from the initial to the
        peak volume, and auto-stopped after the preview duration.

        If the handle or listener fails to start, the new session is
        discarded and the error is re-raised; the coordinator is left idle.
        """
        loop = asyncio.get_running_loop()
        options = options or PlaybackOptions()
        start_time = (
            options.start_time if options.start_time is not None else self.default_start_time
        )
        duration = options.duration if options.duration is not None else self.default_duration

        previous = self._session
        if previous is not None:
            self._interrupt(previous, handle, listener)

        session = _Session(handle, listener)
        self._session = session

        handle.current_time = start_time
        handle.volume = self.initial_volume

        # Timers exist before the handle starts; a failed start is undone by close()
        session.fade_task = loop.create_task(self._fade_in(session))
        session.auto_stop = loop.call_later(duration, self._on_auto_stop, session)
        session.ended_callback = lambda: self._on_ended(session)
        handle.add_ended_callback(session.ended_callback)

        try:
            handle.play()
            listener.play()
        except Exception:
            logger.warning("Preview failed to start; session discarded")
            self.close()
            if not handle.paused:
                handle.pause()
            raise

        for other in list(self._listeners):
            if other is not listener:
                other.stop()

        logger.debug(f"Preview started at {start_time}s for {duration}s")

    def pause(self) -> None:
        """
        Fade out and stop the active session.

        No-op without an active session, and while a fade-out is already
        running.
        """
        session = self._session
        if session is None or session.state == PlaybackState.FADING_OUT:
            return

        session.cancel_auto_stop()
        session.cancel_fade()

        start_volume = min(max(session.handle.volume, 0.0), self.peak_volume)
        session.state = PlaybackState.FADING_OUT
        session.fade_task = asyncio.get_running_loop().create_task(
            self._fade_out(session, start_volume)
        )

    def close(self) -> None:
        """Cancel all timers of the active session without notifying anyone."""
        if self._session is not None:
            self._session.detach()
            self._session = None

    def _interrupt(
        self,
        previous: _Session,
        handle: AudioHandle,
        listener: PlaybackListener,
    ) -> None:
        """Hard-stop the previous session so a new one can start."""
        previous.detach()
        if previous.handle is not handle:
            previous.handle.pause()
            previous.handle.current_time = 0
        # Registered listeners are reached by the play() broadcast
        if previous.listener is not listener and not self._is_registered(previous.listener):
            previous.listener.stop()
        self._session = None
        logger.debug("Active preview interrupted")

    def _on_auto_stop(self, session: _Session) -> None:
        if self._session is session:
            session.auto_stop = None
            self.pause()

    def _on_ended(self, session: _Session) -> None:
        if self._session is session:
            self.pause()

    # ------------------------------------------------------------------
    # Fade envelopes
    # ------------------------------------------------------------------

    @property
    def _fade_steps(self) -> int:
        return max(1, self.fade_duration_ms // self.fade_step_ms)

    async def _fade_in(self, session: _Session) -> None:
        steps = self._fade_steps
        increment = (self.peak_volume - self.initial_volume) / steps
        interval = self.fade_step_ms / 1000

        for step in range(1, steps + 1):
            await asyncio.sleep(interval)
            session.handle.volume = min(self.peak_volume, self.initial_volume + increment * step)

        session.handle.volume = self.peak_volume
        session.fade_task = None
        if self._session is session:
            session.state = PlaybackState.STEADY

    async def _fade_out(self, session: _Session, start_volume: float) -> None:
        steps = self._fade_steps
        decrement = start_volume / steps
        interval = self.fade_step_ms / 1000

        for step in range(1, steps + 1):
            await asyncio.sleep(interval)
            session.handle.volume = max(0.0, start_volume - decrement * step)

        session.handle.volume = 0.0
        session.fade_task = None
        self._finish(session)

    def _finish(self, session: _Session) -> None:
        """Complete a fade-out: pause, rewind, notify, and return to idle."""
        if self._session is not session:
            return

        session.detach()
        self._session = None

        session.handle.pause()
        session.handle.current_time = 0
        session.listener.pause()
        for listener in list(self._listeners):
            listener.stop()

        logger.debug("Preview finished")

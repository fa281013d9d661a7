"""Playback controller: owns the single live trajectory animation.

The controller replays a trajectory one sample per scheduling tick. Ticks
are requested from an injected scheduler (``QTimer.singleShot`` in the
application, a manual queue in tests), so the controller itself does not
depend on Qt.

Restarting is a swap-and-cancel: the previous session's flag is set before
the new session is armed, and every tick checks that flag before drawing.
A tick queued for a superseded session therefore never renders.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import partial

from config import GROUND_BAND_HEIGHT
from errors import EmptyTrajectoryError
from playback.mapper import compute_scale
from playback.renderer import Surface, render_frame
from simulation import PhysicalState

logger = logging.getLogger(__name__)

Scheduler = Callable[[Callable[[], None]], None]


class PlaybackState(enum.Enum):
    IDLE = "idle"
    ARMED = "armed"
    PLAYING = "playing"
    FINISHED = "finished"
    CANCELLED = "cancelled"


@dataclass(eq=False)
class PlaybackSession:
    """One cancellable replay of a trajectory."""

    trajectory: tuple[PhysicalState, ...]
    scale: float
    current_frame_index: int = 0
    cancelled: bool = False
    state: PlaybackState = PlaybackState.ARMED

    @property
    def frame_count(self) -> int:
        return len(self.trajectory)

    @property
    def live(self) -> bool:
        """True while the session may still schedule frames."""
        return self.state in (PlaybackState.ARMED, PlaybackState.PLAYING)

    def cancel(self) -> None:
        self.cancelled = True
        if self.live:
            self.state = PlaybackState.CANCELLED


class PlaybackController:
    """Drives the frame renderer for at most one session at a time."""

    def __init__(
        self,
        surface: Surface,
        schedule: Scheduler,
        ground_band_height: float = GROUND_BAND_HEIGHT,
        on_frame: Callable[[PlaybackSession], None] | None = None,
        on_finished: Callable[[PlaybackSession], None] | None = None,
    ):
        self._surface = surface
        self._schedule = schedule
        self._ground_band_height = ground_band_height
        self._on_frame = on_frame
        self._on_finished = on_finished
        self._session: PlaybackSession | None = None

    @property
    def session(self) -> PlaybackSession | None:
        return self._session

    @property
    def state(self) -> PlaybackState:
        if self._session is None:
            return PlaybackState.IDLE
        return self._session.state

    def start(self, trajectory: Sequence[PhysicalState]) -> PlaybackSession:
        """Replace any running session with a new one for ``trajectory``.

        Raises:
            EmptyTrajectoryError: the trajectory has no samples. Any
                previous session is still cancelled.
        """
        self.cancel()
        if not trajectory:
            raise EmptyTrajectoryError("cannot play an empty trajectory")

        trajectory = tuple(trajectory)
        scale = compute_scale(
            trajectory, self._surface.width, self._surface.height,
            self._ground_band_height,
        )
        session = PlaybackSession(trajectory=trajectory, scale=scale)
        self._session = session
        logger.debug(
            "Armed playback of %d frames at scale %.4f px/m",
            session.frame_count, scale,
        )
        self._schedule(partial(self._tick, session))
        return session

    def cancel(self) -> None:
        """Stop the active session, if any, and return to IDLE."""
        session, self._session = self._session, None
        if session is not None and session.live:
            session.cancel()
            logger.debug(
                "Cancelled playback at frame %d/%d",
                session.current_frame_index, session.frame_count,
            )

    def _tick(self, session: PlaybackSession) -> None:
        if session.cancelled or not session.live:
            return

        if session.current_frame_index >= session.frame_count:
            session.state = PlaybackState.FINISHED
            logger.debug("Playback finished after %d frames",
                         session.frame_count)
            if self._on_finished is not None:
                self._on_finished(session)
            return

        session.state = PlaybackState.PLAYING
        trajectory = session.trajectory
        render_frame(
            self._surface,
            trajectory[session.current_frame_index],
            trajectory[0],
            session.scale,
            self._ground_band_height,
        )
        session.current_frame_index += 1
        if self._on_frame is not None:
            self._on_frame(session)
        self._schedule(partial(self._tick, session))

"""Request orchestrator: simulation run lifecycle and user-facing status.

A run goes through ``begin`` (cancel playback, show "computing"), then
either ``finish`` (show the summary, start playback) or ``fail`` (show the
error). The asynchronous UI calls these three steps around a background
request; ``run_simulation`` chains them synchronously.

Every run gets an increasing id. Results arriving for an older id are
dropped, so a slow response can never replace a newer run's playback.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass

from errors import SimulationError
from playback.controller import PlaybackController
from simulation import SimulationParameters, SimulationResult

logger = logging.getLogger(__name__)


class StatusKind(enum.Enum):
    IDLE = "idle"
    COMPUTING = "computing"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Status:
    """Structured status for the hosting UI; ``to_text`` renders it."""

    kind: StatusKind
    total_time: float | None = None
    max_distance: float | None = None
    message: str | None = None

    @classmethod
    def idle(cls) -> Status:
        return cls(StatusKind.IDLE)

    @classmethod
    def computing(cls) -> Status:
        return cls(StatusKind.COMPUTING)

    @classmethod
    def success(cls, total_time: float, max_distance: float) -> Status:
        return cls(StatusKind.SUCCESS, total_time=total_time,
                   max_distance=max_distance)

    @classmethod
    def error(cls, message: str) -> Status:
        return cls(StatusKind.ERROR, message=message)

    def to_text(self) -> str:
        if self.kind is StatusKind.COMPUTING:
            return "Computing..."
        if self.kind is StatusKind.SUCCESS:
            return (
                f"Total flight time: {self.total_time:.2f} s\n"
                f"Maximum range: {self.max_distance:.2f} m"
            )
        if self.kind is StatusKind.ERROR:
            return f"Error: {self.message}"
        return ""


class RequestOrchestrator:
    """Connects the service client, the playback controller and the status."""

    def __init__(
        self,
        client,
        playback: PlaybackController,
        on_status: Callable[[Status], None] | None = None,
    ):
        self._client = client
        self._playback = playback
        self._on_status = on_status
        self._status = Status.idle()
        self._run_id = 0

    @property
    def status(self) -> Status:
        return self._status

    @property
    def current_run_id(self) -> int:
        return self._run_id

    def _set_status(self, status: Status) -> None:
        self._status = status
        if self._on_status is not None:
            self._on_status(status)

    def _is_stale(self, run_id: int) -> bool:
        if run_id != self._run_id:
            logger.debug("Dropping result of superseded run %d (current %d)",
                         run_id, self._run_id)
            return True
        return False

    def begin(self, parameters: SimulationParameters) -> int:
        """Start a new run and return its id."""
        self._playback.cancel()
        self._run_id += 1
        logger.info(
            "Run %d: v0=%.2f m/s h0=%.2f m m=%.2f kg A=%.3f m^2 shape=%s",
            self._run_id, parameters.initial_velocity,
            parameters.initial_height, parameters.mass, parameters.area,
            parameters.shape.value,
        )
        self._set_status(Status.computing())
        return self._run_id

    def finish(self, run_id: int, result: SimulationResult) -> None:
        """Publish the summary and replay the trajectory."""
        if self._is_stale(run_id):
            return
        try:
            self._playback.start(result.trajectory)
        except ValueError as exc:
            self.fail(run_id, exc)
            return
        logger.info(
            "Run %d: %d samples, t=%.2f s, range=%.2f m",
            run_id, len(result.trajectory), result.total_time,
            result.max_distance,
        )
        self._set_status(Status.success(result.total_time, result.max_distance))

    def fail(self, run_id: int, error: Exception) -> None:
        """Publish ``error``; playback stays stopped."""
        if self._is_stale(run_id):
            return
        self._playback.cancel()
        logger.warning("Run %d failed: %s", run_id, error)
        self._set_status(Status.error(str(error)))

    def run_simulation(self, parameters: SimulationParameters) -> Status:
        """Request a simulation and start its playback, blocking on the request."""
        run_id = self.begin(parameters)
        try:
            result = self._client.run(parameters)
        except SimulationError as exc:
            self.fail(run_id, exc)
        else:
            self.finish(run_id, result)
        return self._status

"""Exception types for simulation runs and trajectory playback."""


class SimulationError(Exception):
    """Base class for failures of a simulation run."""


class ServiceError(SimulationError):
    """The computation service answered with a non-success status."""

    def __init__(self, status_code, reason):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"Server error: {reason}")


class TransportError(SimulationError):
    """The request could not be completed or its body could not be decoded."""


class DegenerateTrajectoryError(ValueError):
    """A trajectory has no extent along one axis."""


class EmptyTrajectoryError(ValueError):
    """Playback was requested for a trajectory without samples."""

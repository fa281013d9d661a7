"""Projectile simulation data model.

Parameters sent to the computation service and the trajectory it returns.
The numerical integration itself runs remotely; this module only defines
the values exchanged with it and their wire format.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass


class Shape(enum.Enum):
    """Projectile shape presets selectable in the UI."""

    SPHERE = "sphere"
    CUBE = "cube"


DRAG_COEFFICIENTS = {
    Shape.SPHERE: 0.47,
    Shape.CUBE: 1.05,
}


@dataclass(frozen=True)
class PhysicalState:
    """One sampled instant of the trajectory."""

    position_x: float
    position_y: float
    time: float = 0.0

    @classmethod
    def from_payload(cls, payload):
        return cls(
            position_x=float(payload["positionX"]),
            position_y=float(payload["positionY"]),
            time=float(payload.get("time", 0.0)),
        )


@dataclass(frozen=True)
class SimulationParameters:
    """Launch parameters for one simulation run.

    The drag coefficient is derived from ``shape`` and cannot be given
    directly.
    """

    initial_velocity: float = 50.0
    initial_height: float = 150.0
    mass: float = 10.0
    area: float = 0.1
    shape: Shape = Shape.SPHERE

    def __post_init__(self):
        # Accept the plain string values coming from the UI combo box
        object.__setattr__(self, "shape", Shape(self.shape))
        for name in ("initial_velocity", "initial_height", "mass", "area"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be finite")
        if self.mass <= 0:
            raise ValueError("mass must be positive")
        if self.initial_height < 0:
            raise ValueError("initial_height must not be negative")
        if self.area < 0:
            raise ValueError("area must not be negative")

    @property
    def drag_coefficient(self) -> float:
        return DRAG_COEFFICIENTS[self.shape]

    def to_payload(self) -> dict:
        """Serialize to the flat object the service expects."""
        return {
            "initialVelocity": self.initial_velocity,
            "initialHeight": self.initial_height,
            "mass": self.mass,
            "dragCoefficient": self.drag_coefficient,
            "area": self.area,
        }


@dataclass(frozen=True)
class SimulationResult:
    """Summary scalars plus the time-ordered trajectory."""

    total_time: float
    max_distance: float
    trajectory: tuple[PhysicalState, ...]

    @classmethod
    def from_payload(cls, payload) -> SimulationResult:
        """Decode a service response body.

        Raises:
            ValueError: missing keys, non-numeric values or an empty
                trajectory.
        """
        try:
            trajectory = tuple(
                PhysicalState.from_payload(p) for p in payload["trajectory"]
            )
            result = cls(
                total_time=float(payload["totalTime"]),
                max_distance=float(payload["maxDistance"]),
                trajectory=trajectory,
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"malformed simulation result: {exc!r}") from exc

        if not result.trajectory:
            raise ValueError("simulation result has an empty trajectory")
        return result

"""Coordinate mapping from physical trajectory space to viewport pixels.

A single uniform scale factor is used for both axes so the shape of the
motion is not distorted. The trajectory is assumed to start at its highest
point and end at its furthest horizontal distance.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np

from config import EXTENT_MARGIN, GROUND_BAND_HEIGHT
from errors import DegenerateTrajectoryError, EmptyTrajectoryError
from simulation import PhysicalState

logger = logging.getLogger(__name__)

# Used when the trajectory has no extent along either axis
FALLBACK_SCALE = 1.0


def _axis_scale(extent: float, span: float) -> float:
    """Pixels per metre needed to fit ``extent`` (plus margin) into ``span``."""
    if not extent > 0:
        raise DegenerateTrajectoryError(f"axis extent {extent!r} is not positive")
    return span / (extent * EXTENT_MARGIN)


def compute_scale(
    trajectory: Sequence[PhysicalState],
    viewport_width: float,
    viewport_height: float,
    ground_band_height: float = GROUND_BAND_HEIGHT,
) -> float:
    """Return the uniform scale fitting ``trajectory`` into the viewport.

    The horizontal extent is taken from the last sample and the vertical
    extent from the first one. A straight vertical drop (last X == 0) is
    scaled vertically only; a trajectory with no vertical extent is scaled
    horizontally only.

    Raises:
        EmptyTrajectoryError: the trajectory has no samples.
    """
    if not trajectory:
        raise EmptyTrajectoryError("cannot scale an empty trajectory")

    max_x = trajectory[-1].position_x
    max_y = trajectory[0].position_y
    _warn_on_hidden_extent(trajectory, max_x, max_y)

    candidates = []
    for extent, span in ((max_x, viewport_width),
                         (max_y, viewport_height - ground_band_height)):
        try:
            candidates.append(_axis_scale(extent, span))
        except DegenerateTrajectoryError:
            logger.debug("Degenerate axis (extent=%r), ignoring it", extent)

    candidates = [c for c in candidates if math.isfinite(c) and c > 0]
    if not candidates:
        logger.debug("No usable axis extent, using fallback scale")
        return FALLBACK_SCALE
    return min(candidates)


def _warn_on_hidden_extent(trajectory, max_x, max_y):
    """Log when the endpoints do not bound the trajectory.

    An initial upward arc, for instance, rises above the first sample and
    would be drawn partly outside the viewport.
    """
    coords = np.array(
        [(s.position_x, s.position_y) for s in trajectory], dtype=float,
    )
    true_max_x, true_max_y = coords.max(axis=0)
    if true_max_x > max_x or true_max_y > max_y:
        logger.warning(
            "Trajectory extends beyond its endpoints "
            "(max x %.3f > %.3f or max y %.3f > %.3f); it may be clipped",
            true_max_x, max_x, true_max_y, max_y,
        )


def to_screen(
    state: PhysicalState,
    scale: float,
    viewport_height: float,
    ground_band_height: float = GROUND_BAND_HEIGHT,
) -> tuple[float, float]:
    """Convert physics coords to pixel coords (y grows downward)."""
    screen_x = state.position_x * scale
    screen_y = viewport_height - state.position_y * scale - ground_band_height
    return screen_x, screen_y

"""Frame renderer: paints one trajectory sample onto a drawing surface.

The renderer keeps no state between calls. It only needs three drawing
primitives from the surface, described by the Surface protocol, so it can
draw onto a QImage in the application or onto a recording fake in tests.
"""

from __future__ import annotations

from typing import Protocol

from config import (
    BACKGROUND_COLOR, GROUND_COLOR, GROUND_BAND_HEIGHT, MARKER_COLOR,
    MARKER_RADIUS, PLATFORM_COLOR, PLATFORM_WIDTH,
)
from playback.mapper import to_screen
from simulation import PhysicalState


class Surface(Protocol):
    """Fixed-size pixel canvas the renderer draws on."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def clear(self) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float,
                  color: str) -> None: ...

    def fill_disc(self, cx: float, cy: float, radius: float,
                  color: str) -> None: ...


def render_frame(
    surface: Surface,
    state: PhysicalState,
    first_state: PhysicalState,
    scale: float,
    ground_band_height: float = GROUND_BAND_HEIGHT,
) -> tuple[float, float]:
    """Draw background, ground, launch platform and projectile marker.

    The platform height matches the release height of ``first_state``.

    Returns:
        (screen_x, screen_y) of the projectile marker.
    """
    width, height = surface.width, surface.height

    surface.clear()
    surface.fill_rect(0, 0, width, height, BACKGROUND_COLOR)
    surface.fill_rect(0, height - ground_band_height, width,
                      ground_band_height, GROUND_COLOR)

    platform_height = first_state.position_y * scale
    platform_top = height - platform_height - ground_band_height
    surface.fill_rect(0, platform_top, PLATFORM_WIDTH, platform_height,
                      PLATFORM_COLOR)

    screen_x, screen_y = to_screen(state, scale, height, ground_band_height)
    surface.fill_disc(screen_x, screen_y, MARKER_RADIUS, MARKER_COLOR)
    return screen_x, screen_y

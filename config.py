"""Application configuration: service endpoint, viewport geometry, colors.

The endpoint and request timeout can be overridden through the
``PROJECTILE_SERVICE_URL`` and ``PROJECTILE_REQUEST_TIMEOUT`` environment
variables, or on the command line (see main.py).
"""

import os

DEFAULT_SERVICE_URL = "http://localhost:8080/api/simulation/run"

SERVICE_URL = os.environ.get("PROJECTILE_SERVICE_URL", DEFAULT_SERVICE_URL)


def read_timeout(raw):
    """Parse a timeout in seconds; empty, unset or non-positive means none."""
    if raw is None or raw == "":
        return None
    value = float(raw)
    return value if value > 0 else None


REQUEST_TIMEOUT = read_timeout(os.environ.get("PROJECTILE_REQUEST_TIMEOUT"))

# Viewport geometry (pixels)
VIEWPORT_WIDTH = 800
VIEWPORT_HEIGHT = 600
GROUND_BAND_HEIGHT = 20
PLATFORM_WIDTH = 50
MARKER_RADIUS = 5

# Headroom so the trajectory never touches the viewport edges
EXTENT_MARGIN = 1.1

FPS = 60

BACKGROUND_COLOR = "#e9f5ff"
GROUND_COLOR = "#4CAF50"
PLATFORM_COLOR = "#8D6E63"
MARKER_COLOR = "red"

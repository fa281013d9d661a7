"""Shared fakes: a recording drawing surface and a manual frame scheduler."""

from collections import deque

import pytest

from simulation import PhysicalState


class RecordingSurface:
    """Surface that records every drawing call instead of painting."""

    def __init__(self, width=800, height=600):
        self.width = width
        self.height = height
        self.calls = []

    def clear(self):
        self.calls.append(("clear",))

    def fill_rect(self, x, y, w, h, color):
        self.calls.append(("fill_rect", x, y, w, h, color))

    def fill_disc(self, cx, cy, radius, color):
        self.calls.append(("fill_disc", cx, cy, radius, color))

    @property
    def discs(self):
        return [c for c in self.calls if c[0] == "fill_disc"]


class ManualScheduler:
    """Queues tick callbacks; tests run them explicitly."""

    def __init__(self):
        self.pending = deque()

    def __call__(self, callback):
        self.pending.append(callback)

    def run_next(self):
        self.pending.popleft()()

    def run_all(self, limit=100_000):
        """Run ticks until none are queued; returns how many ran."""
        count = 0
        while self.pending:
            self.run_next()
            count += 1
            if count > limit:
                raise AssertionError("scheduler did not drain")
        return count


def make_trajectory(n=10, height=150.0, distance=220.0):
    """Time-ordered fall from (0, height) to (distance, 0)."""
    if n == 1:
        return (PhysicalState(0.0, height),)
    states = []
    for i in range(n):
        f = i / (n - 1)
        states.append(PhysicalState(
            position_x=distance * f,
            position_y=height * (1 - f * f),
            time=f,
        ))
    return tuple(states)


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def scheduler():
    return ManualScheduler()

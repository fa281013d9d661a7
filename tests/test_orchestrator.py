"""Tests for playback/orchestrator.py: run lifecycle, status, stale results."""

import pytest

from conftest import make_trajectory
from errors import ServiceError, TransportError
from main import parse_args
from playback.controller import PlaybackController, PlaybackState
from playback.orchestrator import RequestOrchestrator, Status, StatusKind
from service_client import SimulationClient
from simulation import SimulationParameters, SimulationResult


class FakeClient:
    """Returns a canned result or raises a canned error."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def run(self, parameters):
        self.calls.append(parameters)
        if self.error is not None:
            raise self.error
        return self.result


class StrictTimeoutSession:
    """Session that rejects non-positive timeouts the way urllib3 does."""

    def __init__(self, error=None):
        self.error = error
        self.timeouts = []

    def post(self, url, json=None, timeout=None):
        self.timeouts.append(timeout)
        if timeout is not None and timeout <= 0:
            raise ValueError(
                f"Attempted to set connect timeout to {timeout}, but the "
                "timeout cannot be set to a value less than or equal to 0."
            )
        raise self.error


def _make_result(n=20):
    return SimulationResult(total_time=5.53, max_distance=210.4,
                            trajectory=make_trajectory(n))


def _make_orchestrator(surface, scheduler, client):
    statuses = []
    playback = PlaybackController(surface, scheduler, ground_band_height=20)
    orchestrator = RequestOrchestrator(client, playback,
                                       on_status=statuses.append)
    return orchestrator, playback, statuses


class TestStatus:
    """Plain-text rendering of structured status."""

    def test_computing(self):
        assert Status.computing().to_text() == "Computing..."

    def test_success_two_decimals(self):
        """Both summary values are shown with two decimals on separate lines."""
        text = Status.success(5.53, 210.4).to_text()
        assert text == "Total flight time: 5.53 s\nMaximum range: 210.40 m"

    def test_error(self):
        assert Status.error("boom").to_text() == "Error: boom"

    def test_idle_is_empty(self):
        """Nothing is shown before the first run."""
        assert Status.idle().to_text() == ""


class TestRunSimulation:
    """Synchronous end-to-end runs."""

    def test_success_scenario(self, surface, scheduler):
        """Summary is shown and every sample is drawn exactly once."""
        params = SimulationParameters(
            initial_velocity=50, initial_height=150, mass=10, area=0.1,
            shape="sphere",
        )
        result = _make_result(25)
        client = FakeClient(result=result)
        orchestrator, playback, statuses = _make_orchestrator(
            surface, scheduler, client)

        status = orchestrator.run_simulation(params)

        assert client.calls == [params]
        assert client.calls[0].to_payload()["dragCoefficient"] == 0.47
        assert status.kind is StatusKind.SUCCESS
        assert "5.53 s" in status.to_text()
        assert "210.40 m" in status.to_text()
        assert [s.kind for s in statuses] == [StatusKind.COMPUTING,
                                              StatusKind.SUCCESS]

        scheduler.run_all()
        assert len(surface.discs) == len(result.trajectory)
        assert playback.state is PlaybackState.FINISHED

    def test_service_error(self, surface, scheduler):
        """An HTTP 500 shows the status text and renders nothing."""
        client = FakeClient(error=ServiceError(500, "Internal Server Error"))
        orchestrator, playback, statuses = _make_orchestrator(
            surface, scheduler, client)

        status = orchestrator.run_simulation(SimulationParameters())

        assert status.kind is StatusKind.ERROR
        assert "Internal Server Error" in status.to_text()
        assert statuses[-1] == status
        scheduler.run_all()
        assert surface.discs == []
        assert playback.state is PlaybackState.IDLE

    def test_transport_error_same_path(self, surface, scheduler):
        """Transport failures surface exactly like service errors."""
        client = FakeClient(error=TransportError("Connection refused"))
        orchestrator, playback, _ = _make_orchestrator(surface, scheduler, client)

        status = orchestrator.run_simulation(SimulationParameters())

        assert status.kind is StatusKind.ERROR
        assert status.to_text() == "Error: Connection refused"
        assert not scheduler.pending
        assert playback.state is PlaybackState.IDLE

    def test_zero_timeout_from_command_line(self, surface, scheduler):
        """--timeout 0 reaches the session as 'no timeout'."""
        args = parse_args(["--timeout", "0"])
        session = StrictTimeoutSession(error=TransportError("unreachable"))
        client = SimulationClient(url="http://svc", timeout=args.timeout,
                                  session=session)
        orchestrator, _, _ = _make_orchestrator(surface, scheduler, client)

        status = orchestrator.run_simulation(SimulationParameters())

        assert session.timeouts == [None]
        assert status == Status.error("unreachable")

    def test_rejected_timeout_becomes_error_status(self, surface, scheduler):
        """A ValueError raised by the HTTP stack ends as an error status."""
        session = StrictTimeoutSession()
        client = SimulationClient(url="http://svc", session=session)
        client.timeout = -1.0
        orchestrator, playback, _ = _make_orchestrator(
            surface, scheduler, client)

        status = orchestrator.run_simulation(SimulationParameters())

        assert status.kind is StatusKind.ERROR
        assert "connect timeout" in status.to_text()
        assert playback.state is PlaybackState.IDLE
        assert not scheduler.pending

    def test_new_run_cancels_playback(self, surface, scheduler):
        """Only the newest run's frames are drawn after a restart."""
        client = FakeClient(result=_make_result(30))
        orchestrator, playback, _ = _make_orchestrator(surface, scheduler, client)
        orchestrator.run_simulation(SimulationParameters())
        scheduler.run_next()
        first = playback.session

        client.result = _make_result(8)
        orchestrator.run_simulation(SimulationParameters())
        assert first.state is PlaybackState.CANCELLED

        before = len(surface.discs)
        scheduler.run_all()
        assert len(surface.discs) - before == 8

    def test_failed_run_after_success_stops_playback(self, surface, scheduler):
        """A failing rerun leaves no animation from the previous run."""
        client = FakeClient(result=_make_result(30))
        orchestrator, playback, _ = _make_orchestrator(surface, scheduler, client)
        orchestrator.run_simulation(SimulationParameters())
        scheduler.run_next()

        client.error = ServiceError(503, "Service Unavailable")
        orchestrator.run_simulation(SimulationParameters())
        drawn = len(surface.discs)
        scheduler.run_all()
        assert len(surface.discs) == drawn
        assert playback.state is PlaybackState.IDLE


class TestAsyncLifecycle:
    """begin / finish / fail as driven by the background worker."""

    def test_begin_publishes_computing(self, surface, scheduler):
        """begin shows the progress indicator and returns the current id."""
        orchestrator, playback, statuses = _make_orchestrator(
            surface, scheduler, FakeClient())
        run_id = orchestrator.begin(SimulationParameters())
        assert run_id == orchestrator.current_run_id
        assert orchestrator.status.kind is StatusKind.COMPUTING
        assert statuses == [Status.computing()]
        assert playback.state is PlaybackState.IDLE

    def test_run_ids_increase(self, surface, scheduler):
        orchestrator, _, _ = _make_orchestrator(surface, scheduler, FakeClient())
        first = orchestrator.begin(SimulationParameters())
        second = orchestrator.begin(SimulationParameters())
        assert second > first

    def test_stale_result_dropped(self, surface, scheduler):
        """A late response for an older run neither plays nor changes status."""
        orchestrator, playback, _ = _make_orchestrator(
            surface, scheduler, FakeClient())
        old_id = orchestrator.begin(SimulationParameters())
        new_id = orchestrator.begin(SimulationParameters())

        orchestrator.finish(old_id, _make_result(5))
        assert playback.session is None
        assert orchestrator.status.kind is StatusKind.COMPUTING

        orchestrator.finish(new_id, _make_result(3))
        scheduler.run_all()
        assert len(surface.discs) == 3

    def test_stale_failure_dropped(self, surface, scheduler):
        """A late failure for an older run does not stop the current one."""
        orchestrator, playback, _ = _make_orchestrator(
            surface, scheduler, FakeClient())
        old_id = orchestrator.begin(SimulationParameters())
        new_id = orchestrator.begin(SimulationParameters())
        orchestrator.finish(new_id, _make_result(3))

        orchestrator.fail(old_id, TransportError("late"))
        assert orchestrator.status.kind is StatusKind.SUCCESS
        assert playback.state is PlaybackState.ARMED

    def test_empty_trajectory_is_an_error(self, surface, scheduler):
        """An empty trajectory never arms a session."""
        orchestrator, playback, _ = _make_orchestrator(
            surface, scheduler, FakeClient())
        run_id = orchestrator.begin(SimulationParameters())
        orchestrator.finish(run_id, SimulationResult(1.0, 2.0, ()))
        assert orchestrator.status.kind is StatusKind.ERROR
        assert playback.state is PlaybackState.IDLE
        assert not scheduler.pending

    @pytest.mark.parametrize("error", [
        ServiceError(500, "Internal Server Error"),
        TransportError("timed out"),
    ])
    def test_fail_message(self, surface, scheduler, error):
        """The status message is the exception's own text."""
        orchestrator, _, _ = _make_orchestrator(surface, scheduler, FakeClient())
        run_id = orchestrator.begin(SimulationParameters())
        orchestrator.fail(run_id, error)
        assert orchestrator.status == Status.error(str(error))

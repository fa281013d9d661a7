"""Simulation view: orchestrates requests, playback, canvas, and controls.

The HTTP request runs in a QThread worker; its outcome comes back to the
GUI thread through queued signals, so the orchestrator, the playback
controller and the canvas are only ever touched from the GUI thread.
"""

import logging

from PyQt6.QtCore import QTimer, QThread, pyqtSignal
from PyQt6.QtWidgets import QWidget, QHBoxLayout, QLabel

from config import FPS
from errors import SimulationError, TransportError
from playback.controller import PlaybackController
from playback.orchestrator import RequestOrchestrator, Status
from projectile.canvas import TrajectoryCanvas
from projectile.controls import ParameterControls
from service_client import SimulationClient

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# SimulationRequestWorker
# ---------------------------------------------------------------------------

class SimulationRequestWorker(QThread):
    """Runs one service request in a background thread."""

    # run_id, SimulationResult
    succeeded = pyqtSignal(int, object)
    # run_id, SimulationError
    failed = pyqtSignal(int, object)

    def __init__(self, client, parameters, run_id):
        super().__init__()
        self.client = client
        self.parameters = parameters
        self.run_id = run_id

    def run(self):
        try:
            result = self.client.run(self.parameters)
        except SimulationError as exc:
            self.failed.emit(self.run_id, exc)
            return
        except Exception as exc:
            logger.exception("Simulation request %d crashed", self.run_id)
            self.failed.emit(self.run_id, TransportError(str(exc)))
            return
        self.succeeded.emit(self.run_id, result)


# Hung request threads outlive their view until the process exits
_abandoned_workers = []


def abandoned_request_count():
    """Number of request threads abandoned at shutdown and still running."""
    return sum(1 for w in _abandoned_workers if w.isRunning())


def frame_scheduler(callback):
    """Run ``callback`` on the next display refresh."""
    QTimer.singleShot(int(1000 / FPS), callback)


# ---------------------------------------------------------------------------
# SimulationView
# ---------------------------------------------------------------------------

class SimulationView(QWidget):
    """Complete simulation mode: controls + canvas + request/playback wiring."""

    SHUTDOWN_WAIT_MS = 2000

    def __init__(self, client=None, parent=None):
        super().__init__(parent)

        self.canvas = TrajectoryCanvas()
        self.controls = ParameterControls()

        layout = QHBoxLayout(self)
        layout.addWidget(self.controls)
        layout.addWidget(self.canvas)
        layout.setStretch(0, 1)

        # Status bar labels (AppWindow places these in the real status bar)
        self.state_label = QLabel()
        self.frame_label = QLabel()

        self.client = client if client is not None else SimulationClient()
        self.playback = PlaybackController(
            self.canvas.surface,
            frame_scheduler,
            on_frame=self._on_frame,
            on_finished=self._on_finished,
        )
        self.orchestrator = RequestOrchestrator(
            self.client, self.playback,
            on_status=self.controls.status_label.show_status,
        )

        # Workers still running; kept referenced until their thread ends
        self._workers = set()

        self.controls.start_btn.clicked.connect(self.start_simulation)
        self._update_playback_labels()

    # -- Runs --

    def start_simulation(self):
        try:
            parameters = self.controls.get_parameters()
        except ValueError as exc:
            self.controls.status_label.show_status(Status.error(str(exc)))
            return

        run_id = self.orchestrator.begin(parameters)
        self.canvas.draw_empty_scene()
        self._update_playback_labels()

        worker = SimulationRequestWorker(self.client, parameters, run_id)
        worker.succeeded.connect(self._on_request_succeeded)
        worker.failed.connect(self._on_request_failed)
        worker.finished.connect(lambda w=worker: self._workers.discard(w))
        self._workers.add(worker)
        worker.start()

    def _on_request_succeeded(self, run_id, result):
        self.orchestrator.finish(run_id, result)
        self._update_playback_labels()

    def _on_request_failed(self, run_id, error):
        self.orchestrator.fail(run_id, error)
        self._update_playback_labels()

    # -- Playback callbacks --

    def _on_frame(self, session):
        self.canvas.update()
        self._update_playback_labels()

    def _on_finished(self, session):
        self._update_playback_labels()

    def _update_playback_labels(self):
        self.state_label.setText(f"  Playback: {self.playback.state.value}  ")
        session = self.playback.session
        if session is None:
            self.frame_label.setText("  Frame: -  ")
        else:
            self.frame_label.setText(
                f"  Frame: {session.current_frame_index} / {session.frame_count}  "
            )

    def shutdown(self):
        """Stop playback and wait briefly for pending requests.

        A request still hanging after SHUTDOWN_WAIT_MS is abandoned: its
        signals are disconnected and the worker is parked in
        _abandoned_workers so the running QThread is not destroyed
        before the process exits.
        """
        self.playback.cancel()
        for worker in list(self._workers):
            if worker.wait(self.SHUTDOWN_WAIT_MS):
                continue
            logger.warning(
                "Request %d still pending at shutdown, abandoning it",
                worker.run_id,
            )
            worker.succeeded.disconnect()
            worker.failed.disconnect()
            _abandoned_workers.append(worker)
        self._workers.clear()

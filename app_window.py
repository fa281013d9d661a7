"""App window: hosts the SimulationView and a status bar."""

import logging

from PyQt6.QtWidgets import QMainWindow, QStatusBar

from projectile.view import SimulationView

logger = logging.getLogger(__name__)


class AppWindow(QMainWindow):
    """Top-level window of the projectile simulation."""

    def __init__(self, client=None):
        super().__init__()
        self.setWindowTitle("Projectile Simulation with Air Drag")

        self.simulation_view = SimulationView(client=client)
        self.setCentralWidget(self.simulation_view)

        # --- Status bar ---
        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        self._status_bar.addWidget(self.simulation_view.state_label)
        self._status_bar.addWidget(self.simulation_view.frame_label)

        logger.info("Using simulation service at %s",
                    self.simulation_view.client.url)

    def closeEvent(self, event):
        self.simulation_view.shutdown()
        super().closeEvent(event)

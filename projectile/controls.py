"""Parameter control panel: launch inputs, shape preset, start button, status."""

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QGridLayout, QGroupBox,
    QLabel, QPushButton, QComboBox,
)

from simulation import DRAG_COEFFICIENTS, Shape, SimulationParameters
from ui_common import make_spin_box, spin_value, StatusLabel

SHAPE_LABELS = {
    Shape.SPHERE: "Sphere",
    Shape.CUBE: "Cube",
}


class ParameterControls(QWidget):
    """Inputs for one simulation run and the run status."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._init_ui()

    def _add_row(self, layout, row, label_text, widget):
        layout.addWidget(QLabel(label_text), row, 0)
        layout.addWidget(widget, row, 1)

    def _init_ui(self):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(8, 8, 8, 8)

        # --- Launch parameters ---
        params_group = QGroupBox("Parameters")
        params_layout = QGridLayout()
        params_group.setLayout(params_layout)

        self.velocity_spin = make_spin_box(0, 1000, 50, suffix=" m/s")
        self.height_spin = make_spin_box(0, 10000, 150, suffix=" m")
        self.mass_spin = make_spin_box(0.01, 10000, 10, suffix=" kg")
        self.area_spin = make_spin_box(0, 100, 0.1, decimals=3, step=0.01,
                                       suffix=" m²")

        self.shape_combo = QComboBox()
        for shape, cd in DRAG_COEFFICIENTS.items():
            self.shape_combo.addItem(f"{SHAPE_LABELS[shape]} (C_d={cd})", shape)

        self._add_row(params_layout, 0, "Initial velocity", self.velocity_spin)
        self._add_row(params_layout, 1, "Initial height", self.height_spin)
        self._add_row(params_layout, 2, "Mass", self.mass_spin)
        self._add_row(params_layout, 3, "Shape", self.shape_combo)
        self._add_row(params_layout, 4, "Surface area", self.area_spin)

        main_layout.addWidget(params_group)

        self.start_btn = QPushButton("Start Simulation")
        main_layout.addWidget(self.start_btn)

        # --- Results ---
        results_group = QGroupBox("Results")
        results_layout = QVBoxLayout()
        results_group.setLayout(results_layout)
        self.status_label = StatusLabel()
        results_layout.addWidget(self.status_label)

        main_layout.addWidget(results_group)
        main_layout.addStretch()

    # -- Public accessors --

    def get_shape(self):
        return self.shape_combo.currentData()

    def get_parameters(self):
        """Build SimulationParameters from the current inputs."""
        return SimulationParameters(
            initial_velocity=spin_value(self.velocity_spin),
            initial_height=spin_value(self.height_spin),
            mass=spin_value(self.mass_spin),
            area=spin_value(self.area_spin),
            shape=self.get_shape(),
        )

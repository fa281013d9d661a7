"""Shared UI helpers: numeric input boxes and the plain-text status label."""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QDoubleSpinBox, QLabel

from playback.orchestrator import StatusKind


# ---------------------------------------------------------------------------
# Spin box helpers
# ---------------------------------------------------------------------------

def make_spin_box(minimum, maximum, value, decimals=2, step=1.0, suffix=""):
    """Create a QDoubleSpinBox with range, default value and unit suffix."""
    spin = QDoubleSpinBox()
    spin.setRange(minimum, maximum)
    spin.setDecimals(decimals)
    spin.setSingleStep(step)
    spin.setValue(value)
    if suffix:
        spin.setSuffix(suffix)
    spin.setAlignment(Qt.AlignmentFlag.AlignRight)
    return spin


def spin_value(spin):
    """Read the float value from a spin box created by make_spin_box."""
    return float(spin.value())


# ---------------------------------------------------------------------------
# StatusLabel
# ---------------------------------------------------------------------------

class StatusLabel(QLabel):
    """Shows a Status as plain text; errors are drawn in red."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setTextFormat(Qt.TextFormat.PlainText)
        self.setWordWrap(True)
        self.setMinimumHeight(40)

    def show_status(self, status):
        self.setText(status.to_text())
        if status.kind is StatusKind.ERROR:
            self.setStyleSheet("color: red;")
        else:
            self.setStyleSheet("")

"""Trajectory canvas: QImage-backed drawing surface shown in a widget.

The playback controller paints frames into the QImageSurface; the widget
only blits the image on paintEvent.
"""

from PyQt6.QtCore import Qt, QPointF, QRectF
from PyQt6.QtGui import QPainter, QBrush, QColor, QImage
from PyQt6.QtWidgets import QWidget

from config import (
    BACKGROUND_COLOR, GROUND_BAND_HEIGHT, GROUND_COLOR,
    VIEWPORT_HEIGHT, VIEWPORT_WIDTH,
)


class QImageSurface:
    """Surface implementation that paints onto an offscreen QImage."""

    def __init__(self, width, height):
        self.image = QImage(width, height, QImage.Format.Format_ARGB32)
        self.image.fill(Qt.GlobalColor.transparent)

    @property
    def width(self):
        return self.image.width()

    @property
    def height(self):
        return self.image.height()

    def _painter(self):
        painter = QPainter(self.image)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setPen(Qt.PenStyle.NoPen)
        return painter

    def clear(self):
        self.image.fill(Qt.GlobalColor.transparent)

    def fill_rect(self, x, y, w, h, color):
        painter = self._painter()
        painter.fillRect(QRectF(x, y, w, h), QColor(color))
        painter.end()

    def fill_disc(self, cx, cy, radius, color):
        painter = self._painter()
        painter.setBrush(QBrush(QColor(color)))
        painter.drawEllipse(QPointF(cx, cy), radius, radius)
        painter.end()


class TrajectoryCanvas(QWidget):
    """Fixed-size widget that displays the playback surface."""

    def __init__(self, width=VIEWPORT_WIDTH, height=VIEWPORT_HEIGHT, parent=None):
        super().__init__(parent)
        self.surface = QImageSurface(width, height)
        self.setFixedSize(width, height)
        self.draw_empty_scene()

    def draw_empty_scene(self):
        """Background and ground band only, shown before the first run."""
        s = self.surface
        s.clear()
        s.fill_rect(0, 0, s.width, s.height, BACKGROUND_COLOR)
        s.fill_rect(0, s.height - GROUND_BAND_HEIGHT, s.width,
                    GROUND_BAND_HEIGHT, GROUND_COLOR)
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.drawImage(0, 0, self.surface.image)
        painter.end()

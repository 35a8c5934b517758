"""Animated Gaja ball."""

import math

from PyQt6.QtCore import Qt, QTimer, QPointF
from PyQt6.QtGui import QPainter, QColor, QRadialGradient, QPen, QBrush
from PyQt6.QtWidgets import QWidget

from .themes import get_animation_spec

FRAME_MS = 33
FADE_MS = 250


class GajaBall(QWidget):
    """Pulsing ball with its own fade in/out.

    The animation class only selects a spec; timing lives here so the
    surface state stays a plain boolean.
    """

    def __init__(self, diameter: int = 120, parent=None):
        super().__init__(parent)
        self._diameter = diameter
        self.setFixedSize(int(diameter * 1.8), int(diameter * 1.8))
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        self._spec = get_animation_spec("")
        self._phase = 0.0
        self._opacity = 0.0
        self._target = 0.0
        self._timer = QTimer(self)
        self._timer.setInterval(FRAME_MS)
        self._timer.timeout.connect(self._tick)

    @property
    def active(self) -> bool:
        return self._target > 0

    def set_active(self, active: bool):
        self._target = 1.0 if active else 0.0
        if self._opacity != self._target and not self._timer.isActive():
            self._timer.start()

    def set_animation(self, animation_class: str):
        self._spec = get_animation_spec(animation_class)
        self.update()

    def _tick(self):
        self._phase = (self._phase + FRAME_MS / self._spec.period_ms) % 1.0
        step = FRAME_MS / FADE_MS
        if self._opacity < self._target:
            self._opacity = min(self._target, self._opacity + step)
        elif self._opacity > self._target:
            self._opacity = max(self._target, self._opacity - step)
        if self._opacity == 0.0 and self._target == 0.0:
            self._timer.stop()
        self.update()

    def paintEvent(self, event):
        if self._opacity <= 0.0:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setOpacity(self._opacity)

        center = QPointF(self.width() / 2, self.height() / 2)
        pulse = math.sin(2 * math.pi * self._phase)
        radius = self._diameter / 2 * (1 + self._spec.amplitude * pulse)

        # outer waves
        for ring in range(1, 3):
            wave = (self._phase + ring / 3) % 1.0
            ring_color = QColor(self._spec.color)
            ring_color.setAlpha(int(self._spec.glow_alpha * (1 - wave)))
            painter.setPen(QPen(ring_color, 2))
            painter.setBrush(Qt.BrushStyle.NoBrush)
            ring_radius = radius * (1 + 0.6 * wave)
            painter.drawEllipse(center, ring_radius, ring_radius)

        gradient = QRadialGradient(center, radius)
        base = QColor(self._spec.color)
        gradient.setColorAt(0.0, base.lighter(150))
        gradient.setColorAt(0.7, base)
        gradient.setColorAt(1.0, base.darker(140))
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(gradient))
        painter.drawEllipse(center, radius, radius)
        painter.end()

"""QPainter-backed compass adapter for hosts that render the HUD through Qt."""
from __future__ import annotations

import math

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QPainter, QPen, QPolygonF

from compass_client.geometry import Vec2
from compass_client.painter import CompassPainterAdapter

BUBBLE_RADIUS = 28.0
ARROW_LENGTH = 24.0
ARROW_HALF_WIDTH = 12.0
_BACKGROUND = QColor(243, 208, 150)
_RIM = QColor(92, 53, 24)
_ARROW = QColor(220, 60, 40)


def _with_alpha(color: QColor, alpha: float) -> QColor:
    tinted = QColor(color)
    tinted.setAlphaF(max(0.0, min(1.0, float(alpha))))
    return tinted


class QtCompassPainter(CompassPainterAdapter):
    def __init__(self, painter: QPainter, *, ui_scale: float = 1.0, font_family: str = "Sans Serif") -> None:
        self._painter = painter
        self._ui_scale = ui_scale if ui_scale > 0.0 else 1.0
        self._font_family = font_family

    def draw_bubble(self, position: Vec2, *, scale: float, alpha: float, label: str) -> None:
        radius = BUBBLE_RADIUS * scale * self._ui_scale
        painter = self._painter
        painter.save()
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            pen = QPen(_with_alpha(_RIM, alpha))
            pen.setWidthF(max(1.0, 3.0 * self._ui_scale))
            painter.setPen(pen)
            painter.setBrush(QBrush(_with_alpha(_BACKGROUND, alpha)))
            painter.drawEllipse(QPointF(position.x, position.y), radius, radius)
            if label:
                font = QFont(self._font_family)
                font.setPixelSize(max(1, int(round(radius * 0.8))))
                font.setWeight(QFont.Weight.Bold)
                painter.setFont(font)
                painter.setPen(_with_alpha(_RIM, alpha))
                box = QRectF(position.x - radius, position.y - radius, radius * 2.0, radius * 2.0)
                painter.drawText(box, Qt.AlignmentFlag.AlignCenter, label[:1].upper())
        finally:
            painter.restore()

    def draw_arrow(self, position: Vec2, *, scale: float, rotation: float, alpha: float) -> None:
        size = scale * self._ui_scale
        painter = self._painter
        painter.save()
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            painter.translate(position.x, position.y)
            painter.rotate(math.degrees(rotation))
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QBrush(_with_alpha(_ARROW, alpha)))
            # Tip points toward -Y before rotation.
            painter.drawPolygon(
                QPolygonF(
                    [
                        QPointF(0.0, -ARROW_LENGTH * size / 2.0),
                        QPointF(ARROW_HALF_WIDTH * size, ARROW_LENGTH * size / 2.0),
                        QPointF(-ARROW_HALF_WIDTH * size, ARROW_LENGTH * size / 2.0),
                    ]
                )
            )
        finally:
            painter.restore()

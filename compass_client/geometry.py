"""Plain 2D value types and the line/rectangle clipping used to place compass indicators."""
from __future__ import annotations

import math
from dataclasses import dataclass

@dataclass(frozen=True)
class Vec2:
    x: float
    y: float

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Vec2":
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def dot(self, other: "Vec2") -> float:
        return self.x * other.x + self.y * other.y

    @classmethod
    def from_angle(cls, angle: float) -> "Vec2":
        return cls(math.cos(angle), math.sin(angle))


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle anchored at its top-left corner (y grows downward)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def origin(self) -> Vec2:
        return Vec2(self.x, self.y)

    @property
    def center(self) -> Vec2:
        return Vec2(self.x + self.width / 2.0, self.y + self.height / 2.0)

    def intersects(self, other: "Rect") -> bool:
        # Touching edges do not count as overlap.
        return (
            self.left < other.right
            and other.left < self.right
            and self.top < other.bottom
            and other.top < self.bottom
        )

    def contains(self, point: Vec2) -> bool:
        return self.left <= point.x < self.right and self.top <= point.y < self.bottom

    def shrink(self, inset: float) -> "Rect":
        return Rect(self.x + inset, self.y + inset, self.width - 2.0 * inset, self.height - 2.0 * inset)


def scaled_inset(offset: float, *, ui_scale: float = 1.0, zoom_level: float = 1.0) -> float:
    """Convert a screen-pixel margin into world pixels for the current zoom/UI scale."""
    safe_zoom = zoom_level if zoom_level > 0.0 else 1.0
    return float(offset) * float(ui_scale) / safe_zoom


def liang_barsky_intersection(
    p1: Vec2,
    p2: Vec2,
    rect: Rect,
    offset: float,
    *,
    ui_scale: float = 1.0,
    zoom_level: float = 1.0,
) -> Vec2:
    """Return where the segment ``p1 -> p2`` leaves ``rect`` shrunk by ``offset`` on every side.

    ``p1`` is expected inside the shrunk rectangle and ``p2`` outside of it; callers are
    responsible for that (see ``locator.locate_peer``). Only the exit parameter closest
    to ``p1`` is tracked, so the result is the first boundary crossing along the segment.

    Clipping follows Liang-Barsky as described by Daniel White:
    https://www.skytopia.com/project/articles/compsci/clipping.html
    """
    inset = scaled_inset(offset, ui_scale=ui_scale, zoom_level=zoom_level)
    min_x = rect.x + inset
    min_y = rect.y + inset
    max_x = rect.x + rect.width - inset
    max_y = rect.y + rect.height - inset

    dx = p2.x - p1.x
    dy = p2.y - p1.y
    edges = (
        (-dx, p1.x - min_x),  # left
        (dx, max_x - p1.x),  # right
        (-dy, p1.y - min_y),  # top
        (dy, max_y - p1.y),  # bottom
    )

    t = 1.0
    for p, q in edges:
        if p <= 0.0:
            continue
        u = max(0.0, q / p)
        if u < t:
            t = u
    return Vec2(p1.x + t * dx, p1.y + t * dy)

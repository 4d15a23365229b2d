from __future__ import annotations

from compass_client.geometry import Vec2


class CompassPainterAdapter:
    """Drawing surface for compass indicators; positions are screen pixels, centered."""

    def draw_bubble(self, position: Vec2, *, scale: float, alpha: float, label: str) -> None: ...
    def draw_arrow(self, position: Vec2, *, scale: float, rotation: float, alpha: float) -> None: ...


class RecordingPainterAdapter(CompassPainterAdapter):
    """Collects draw calls instead of painting; used by headless hosts and tests."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict]] = []

    def draw_bubble(self, position: Vec2, *, scale: float, alpha: float, label: str) -> None:
        self.calls.append(("bubble", {"position": position, "scale": scale, "alpha": alpha, "label": label}))

    def draw_arrow(self, position: Vec2, *, scale: float, rotation: float, alpha: float) -> None:
        self.calls.append(("arrow", {"position": position, "scale": scale, "rotation": rotation, "alpha": alpha}))

"""Host HUD element regions used to fade indicators that sit underneath them."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from compass_client.geometry import Rect, Vec2

BAR_COLUMN_WIDTH = 56
BAR_TOP_MARGIN = 72
BAR_HEIGHT_PER_POINT = 0.625
OCCLUDED_ALPHA = 0.5


@dataclass(frozen=True)
class HudLayout:
    title_safe_area: Rect
    max_stamina: int = 270
    max_health: int = 100
    showing_health_bar: bool = False
    clock_box: Optional[Rect] = None
    toolbar: Optional[Rect] = None


def _intersects_stamina_health_bar(position: Vec2, layout: HudLayout) -> bool:
    top_offset = int(max(layout.max_stamina, layout.max_health) * BAR_HEIGHT_PER_POINT)
    left_bound = layout.title_safe_area.right - BAR_COLUMN_WIDTH
    top_bound = layout.title_safe_area.bottom - top_offset - BAR_TOP_MARGIN
    if layout.showing_health_bar:
        left_bound -= BAR_COLUMN_WIDTH
    return position.x > left_bound and position.y > top_bound


def ui_elements_intersect(position: Vec2, layout: Optional[HudLayout]) -> bool:
    """True when ``position`` lies on the energy/health bars, the clock box or the toolbar."""
    if layout is None:
        return False
    if _intersects_stamina_health_bar(position, layout):
        return True
    if layout.clock_box is not None and layout.clock_box.contains(position):
        return True
    return layout.toolbar is not None and layout.toolbar.contains(position)


def occlusion_alpha(position: Vec2, layout: Optional[HudLayout]) -> float:
    return OCCLUDED_ALPHA if ui_elements_intersect(position, layout) else 1.0

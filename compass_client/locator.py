"""Decide whether a peer is off-screen and where its compass indicator belongs."""
from __future__ import annotations

import math
from enum import Enum
from typing import Optional

from compass_client.geometry import Rect, Vec2, liang_barsky_intersection
from compass_client.peer_model import LocatorResult, PeerSnapshot, ViewerContext

TILE_SIZE = 64


class OffsetMode(Enum):
    """Screen margin kept between the indicator and the viewport edge."""

    BUBBLE_ONLY = 40
    WITH_ARROW = 50

    @property
    def pixels(self) -> int:
        return int(self.value)


def viewer_center(viewer: ViewerContext, *, tile_size: int = TILE_SIZE) -> Vec2:
    return viewer.position + Vec2(0.5 * tile_size, -0.5 * tile_size)


def peer_bounds(position: Vec2, *, tile_size: int = TILE_SIZE) -> Rect:
    """Approximate a standing sprite: a narrow box over the feet, two tiles tall."""
    return Rect(
        int(position.x + 0.125 * tile_size),
        int(position.y - 1.5 * tile_size),
        int(0.75 * tile_size),
        2 * tile_size,
    )


def normalize_to_screen(point: Vec2, viewport: Rect, viewer: ViewerContext) -> Vec2:
    ui_scale = viewer.ui_scale if viewer.ui_scale > 0.0 else 1.0
    return (point - viewport.origin) * (viewer.zoom_level / ui_scale)


def denormalize_from_screen(point: Vec2, viewport: Rect, viewer: ViewerContext) -> Vec2:
    zoom = viewer.zoom_level if viewer.zoom_level > 0.0 else 1.0
    return point * (viewer.ui_scale / zoom) + viewport.origin


def locate_peer(
    viewer: ViewerContext,
    peer: PeerSnapshot,
    viewport: Rect,
    offset_mode: OffsetMode,
    *,
    tile_size: int = TILE_SIZE,
) -> Optional[LocatorResult]:
    """Return the screen-space indicator position and arrow angle for an off-screen peer.

    ``None`` means the peer's approximate bounds overlap the viewport, so no indicator
    is needed. Otherwise the segment from the viewer to the peer necessarily leaves the
    viewport, which is what ``liang_barsky_intersection`` relies on.
    """
    bounds = peer_bounds(peer.position, tile_size=tile_size)
    if bounds.intersects(viewport):
        return None

    center = bounds.center
    hit = liang_barsky_intersection(
        viewer_center(viewer, tile_size=tile_size),
        center,
        viewport,
        offset_mode.pixels,
        ui_scale=viewer.ui_scale,
        zoom_level=viewer.zoom_level,
    )
    angle = math.atan2(center.y - hit.y, center.x - hit.x)
    return LocatorResult(
        position=normalize_to_screen(hit, viewport, viewer),
        angle=angle,
        world_intersection=hit,
        peer_center=center,
    )

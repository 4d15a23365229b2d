"""Per-frame compass pass: turn peer snapshots into indicator draw instructions."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional

from compass_client.bubble_registry import BubbleRegistry
from compass_client.geometry import Rect, Vec2
from compass_client.hud_regions import HudLayout, occlusion_alpha
from compass_client.locator import TILE_SIZE, OffsetMode, locate_peer
from compass_client.painter import CompassPainterAdapter
from compass_client.peer_model import PeerSnapshot, ViewerContext

ARROW_DISTANCE = 36
ARROW_SCALE = 0.75
BUBBLE_SCALE = 1.0


@dataclass(frozen=True)
class IndicatorSettings:
    alpha: float = 1.0
    show_bubble: bool = True
    show_arrow: bool = True

    @property
    def offset_mode(self) -> OffsetMode:
        return OffsetMode.WITH_ARROW if self.show_arrow else OffsetMode.BUBBLE_ONLY


@dataclass(frozen=True)
class IndicatorFrame:
    peer_id: int
    indicator_position: Vec2
    arrow_position: Vec2
    arrow_angle: float
    alpha: float
    arrow_alpha: float
    draw_bubble: bool
    draw_arrow: bool

    @property
    def arrow_rotation(self) -> float:
        # Arrow art points up; rotate it onto the +X based angle.
        return self.arrow_angle + math.pi / 2


def _should_skip(peer: PeerSnapshot) -> bool:
    # Split-screen peers would need their own viewport; they are not supported yet.
    return peer.split_screen or not peer.same_location or peer.hidden


def build_indicator_frames(
    viewer: ViewerContext,
    peers: Iterable[PeerSnapshot],
    viewport: Rect,
    settings: IndicatorSettings,
    registry: Optional[BubbleRegistry] = None,
    *,
    hud_layout: Optional[HudLayout] = None,
    tile_size: int = TILE_SIZE,
) -> List[IndicatorFrame]:
    if viewer.hidden or not (settings.show_bubble or settings.show_arrow):
        return []
    frames: List[IndicatorFrame] = []
    for peer in peers:
        if _should_skip(peer):
            continue
        located = locate_peer(viewer, peer, viewport, settings.offset_mode, tile_size=tile_size)
        if located is None:
            continue
        has_bubble = settings.show_bubble and registry is not None and peer.peer_id in registry
        arrow_position = located.position + Vec2.from_angle(located.angle) * (ARROW_DISTANCE * viewer.ui_scale)
        frames.append(
            IndicatorFrame(
                peer_id=peer.peer_id,
                indicator_position=located.position,
                arrow_position=arrow_position,
                arrow_angle=located.angle,
                alpha=min(occlusion_alpha(located.position, hud_layout), settings.alpha),
                arrow_alpha=settings.alpha,
                draw_bubble=has_bubble,
                draw_arrow=settings.show_arrow,
            )
        )
    return frames


def paint_indicator_frames(
    adapter: CompassPainterAdapter,
    frames: Iterable[IndicatorFrame],
    registry: Optional[BubbleRegistry] = None,
) -> int:
    """Draw ``frames`` and return how many peers produced output."""
    painted = 0
    for frame in frames:
        bubble = registry.get(frame.peer_id) if registry is not None and frame.draw_bubble else None
        if bubble is not None:
            bubble.draw(adapter, frame.indicator_position, BUBBLE_SCALE, frame.alpha)
        if frame.draw_arrow:
            adapter.draw_arrow(
                frame.arrow_position,
                scale=ARROW_SCALE,
                rotation=frame.arrow_rotation,
                alpha=frame.arrow_alpha,
            )
        if bubble is not None or frame.draw_arrow:
            painted += 1
    return painted

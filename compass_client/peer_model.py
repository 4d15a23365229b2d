"""Snapshots of host state handed to the compass per call; nothing here is cached."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from compass_client.geometry import Vec2


@dataclass(frozen=True)
class ViewerContext:
    position: Vec2
    zoom_level: float = 1.0
    ui_scale: float = 1.0
    hidden: bool = False


@dataclass(frozen=True)
class PeerSnapshot:
    """A remote player as seen by the host this frame.

    ``handle`` is the host's live object for the peer and is compared by identity;
    ``generation`` lets hosts without stable object references signal a replacement.
    """

    peer_id: int
    position: Vec2
    handle: Any = None
    generation: int = 0
    same_location: bool = True
    hidden: bool = False
    split_screen: bool = False
    display_name: str = ""


@dataclass(frozen=True)
class LocatorResult:
    position: Vec2
    angle: float
    world_intersection: Vec2
    peer_center: Vec2

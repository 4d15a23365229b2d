"""Per-peer compass bubble bookkeeping across joins, leaves and peer replacement."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional

from compass_client.geometry import Vec2
from compass_client.painter import CompassPainterAdapter
from compass_client.peer_model import PeerSnapshot

_LOGGER = logging.getLogger("PeerCompass.Bubbles")


@dataclass
class CompassBubble:
    peer_id: int
    handle: Any
    generation: int = 0
    display_name: str = ""
    last_position: Optional[Vec2] = None
    last_alpha: float = 0.0

    @classmethod
    def for_peer(cls, peer: PeerSnapshot) -> "CompassBubble":
        return cls(
            peer_id=peer.peer_id,
            handle=peer.handle,
            generation=peer.generation,
            display_name=peer.display_name,
        )

    def is_stale_for(self, peer: PeerSnapshot) -> bool:
        return self.handle is not peer.handle or self.generation != peer.generation

    def draw(self, adapter: CompassPainterAdapter, position: Vec2, scale: float, alpha: float) -> None:
        self.last_position = position
        self.last_alpha = alpha
        adapter.draw_bubble(position, scale=scale, alpha=alpha, label=self.display_name or str(self.peer_id))


class BubbleRegistry:
    """Owns the peer id -> CompassBubble mapping; the render pass only reads it."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._bubbles: Dict[int, CompassBubble] = {}
        self._logger = logger or _LOGGER

    def reconcile(self, peers: Iterable[PeerSnapshot]) -> List[int]:
        """Create or replace bubbles so each connected peer has one matching its live handle."""
        changed: List[int] = []
        for peer in peers:
            existing = self._bubbles.get(peer.peer_id)
            if existing is not None and not existing.is_stale_for(peer):
                continue
            self._bubbles[peer.peer_id] = CompassBubble.for_peer(peer)
            changed.append(peer.peer_id)
            self._logger.debug(
                "Compass bubble %s for peer %s (generation=%d)",
                "replaced" if existing is not None else "created",
                peer.peer_id,
                peer.generation,
            )
        return changed

    def on_disconnect(self, peer_id: int) -> bool:
        removed = self._bubbles.pop(peer_id, None)
        if removed is not None:
            self._logger.debug("Compass bubble removed for disconnected peer %s", peer_id)
        return removed is not None

    def on_session_reset(self) -> int:
        count = len(self._bubbles)
        self._bubbles.clear()
        if count:
            self._logger.debug("Cleared %d compass bubble(s) on session reset", count)
        return count

    def get(self, peer_id: int) -> Optional[CompassBubble]:
        return self._bubbles.get(peer_id)

    def peer_ids(self) -> List[int]:
        return list(self._bubbles)

    def __contains__(self, peer_id: object) -> bool:
        return peer_id in self._bubbles

    def __len__(self) -> int:
        return len(self._bubbles)

    def __iter__(self) -> Iterator[CompassBubble]:
        return iter(list(self._bubbles.values()))

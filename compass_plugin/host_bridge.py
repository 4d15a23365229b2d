from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from compass_client.geometry import Rect
from compass_client.hud_regions import HudLayout
from compass_client.peer_model import PeerSnapshot, ViewerContext


class HostBridge:
    """What the compass reads from the game host; every call returns a fresh snapshot.

    Hosts subclass this and override what they support. ``after`` returning ``None``
    means the host has no timer and will call ``load.one_second_tick`` itself.
    """

    logger: Optional[logging.Logger] = None

    def viewport(self) -> Rect:
        raise NotImplementedError

    def viewer(self) -> ViewerContext:
        raise NotImplementedError

    def connected_peers(self) -> Iterable[PeerSnapshot]:
        return ()

    def has_remote_players(self) -> bool:
        return True

    def hud_layout(self) -> Optional[HudLayout]:
        return None

    def after(self, delay_ms: int, callback: Callable[[], None]) -> object:
        return None

    def after_cancel(self, handle: object) -> None:
        return None

"""Host hook entry points for the PeerCompass plugin."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from compass_client.bubble_registry import BubbleRegistry
from compass_client.hud_pass import build_indicator_frames, paint_indicator_frames
from compass_client.logging_utils import build_rotating_file_handler, resolve_logs_dir
from compass_client.painter import CompassPainterAdapter
from compass_plugin.host_bridge import HostBridge
from compass_plugin.preferences import Preferences
from compass_plugin.tick_scheduler import ReconcileTimer
from version import __version__ as PEER_COMPASS_VERSION, is_dev_build

PLUGIN_NAME = "PeerCompass"
PLUGIN_VERSION = PEER_COMPASS_VERSION
LOGGER_NAME = "PeerCompass"
LOG_TAG = "PeerCompass"
LOG_FILENAME = "peer-compass.log"
DEFAULT_LOG_LEVEL = logging.INFO

_host_logger: Optional[logging.Logger] = None


def _resolve_host_log_level() -> int:
    candidates: list[int] = []
    if _host_logger is not None:
        candidates.append(_host_logger.getEffectiveLevel())
    candidates.append(logging.getLogger().getEffectiveLevel())
    candidates.append(DEFAULT_LOG_LEVEL)
    for level in candidates:
        if isinstance(level, int) and level != logging.NOTSET:
            return level
    return DEFAULT_LOG_LEVEL


class _HostLogHandler(logging.Handler):
    """Logging bridge that forwards plugin records to the host's logger when one is known."""

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno < _resolve_host_log_level():
            return
        message = self.format(record)
        if _host_logger is not None and _host_logger.isEnabledFor(record.levelno):
            _host_logger.log(record.levelno, message)
            return
        root_logger = logging.getLogger()
        if root_logger.isEnabledFor(record.levelno):
            root_logger.log(record.levelno, message)


def _configure_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    if not any(getattr(handler, "_host_handler", False) for handler in logger.handlers):
        handler = _HostLogHandler()
        handler._host_handler = True  # type: ignore[attr-defined]
        handler.setFormatter(logging.Formatter(f"[%(asctime)s] [{LOG_TAG}] %(message)s", "%H:%M:%S"))
        logger.addHandler(handler)
    logger.propagate = False
    return logger


def _attach_dev_file_handler(logger: logging.Logger, plugin_dir: Path) -> Optional[logging.Handler]:
    if any(getattr(handler, "_dev_file_handler", False) for handler in logger.handlers):
        return None
    handler = build_rotating_file_handler(
        resolve_logs_dir(plugin_dir),
        LOG_FILENAME,
        formatter=logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"),
        level=logging.DEBUG,
    )
    handler._dev_file_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return handler


LOGGER = _configure_logger()


class _PluginRuntime:
    """Owns preferences, bubble registry and the reconcile timer for one session."""

    def __init__(self, plugin_dir: str, host: HostBridge, preferences: Preferences) -> None:
        self.plugin_dir = Path(plugin_dir)
        self.host = host
        self.preferences = preferences
        self.registry = BubbleRegistry(logger=LOGGER.getChild("Bubbles"))
        self.timer: Optional[ReconcileTimer] = None
        self._running = False
        self._bubbles_enabled = False
        self._render_enabled = False

    # Lifecycle ------------------------------------------------------------

    def start(self) -> str:
        if self._running:
            return PLUGIN_NAME
        self._bubbles_enabled = self.preferences.bubbles_enabled()
        self._render_enabled = self.preferences.rendering_enabled()
        self._running = True
        if self._bubbles_enabled:
            self.timer = ReconcileTimer(
                after=self.host.after,
                after_cancel=self.host.after_cancel,
                logger=LOGGER.debug,
            )
            self.timer.start(self.reconcile)
        LOGGER.info(
            "Plugin started (version=%s bubbles=%s render=%s alpha=%d)",
            PLUGIN_VERSION,
            self._bubbles_enabled,
            self._render_enabled,
            self.preferences.alpha,
        )
        return PLUGIN_NAME

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        if self.timer is not None:
            self.timer.stop()
            self.timer = None
        self.registry.on_session_reset()
        LOGGER.info("Plugin stopped")

    @property
    def running(self) -> bool:
        return self._running

    # Host events ----------------------------------------------------------

    def reconcile(self) -> None:
        if not self._running or not self._bubbles_enabled:
            return
        try:
            peers = list(self.host.connected_peers())
        except Exception as exc:
            LOGGER.warning("Reading connected peers failed: %s", exc)
            return
        self.registry.reconcile(peers)

    def handle_peer_disconnected(self, peer_id: int) -> None:
        self.registry.on_disconnect(peer_id)

    def handle_returned_to_title(self) -> None:
        self.registry.on_session_reset()

    def render(self, adapter: CompassPainterAdapter) -> int:
        if not self._running or not self._render_enabled:
            return 0
        try:
            if not self.host.has_remote_players():
                return 0
            viewer = self.host.viewer()
            if viewer.hidden:
                return 0
            frames = build_indicator_frames(
                viewer,
                self.host.connected_peers(),
                self.host.viewport(),
                self.preferences.indicator_settings(),
                self.registry if self._bubbles_enabled else None,
                hud_layout=self.host.hud_layout(),
            )
            return paint_indicator_frames(adapter, frames, self.registry)
        except Exception as exc:
            LOGGER.debug("Compass render pass failed: %s", exc, exc_info=exc)
            return 0


# Host hook functions ------------------------------------------------------

_plugin: Optional[_PluginRuntime] = None


def plugin_start(plugin_dir: str, host: HostBridge) -> str:
    global _plugin, _host_logger
    if _plugin is not None and _plugin.running:
        return PLUGIN_NAME
    _host_logger = getattr(host, "logger", None)
    if is_dev_build(PLUGIN_VERSION):
        _attach_dev_file_handler(LOGGER, Path(plugin_dir))
    LOGGER.debug("Initialising %s from %s", PLUGIN_NAME, plugin_dir)
    _plugin = _PluginRuntime(plugin_dir, host, Preferences(Path(plugin_dir)))
    return _plugin.start()


def plugin_stop() -> None:
    global _plugin
    if _plugin is None:
        return
    _plugin.stop()
    _plugin = None


def one_second_tick() -> None:
    if _plugin:
        _plugin.reconcile()


def peer_disconnected(peer_id: int) -> None:
    if _plugin:
        _plugin.handle_peer_disconnected(peer_id)


def returned_to_title() -> None:
    if _plugin:
        _plugin.handle_returned_to_title()


def rendered_hud(adapter: CompassPainterAdapter) -> int:
    if _plugin:
        return _plugin.render(adapter)
    return 0


def plugin_preferences() -> Optional[Preferences]:
    return _plugin.preferences if _plugin else None


# Metadata expected by some plugin loaders
name = PLUGIN_NAME
version = PLUGIN_VERSION
plugin_name = PLUGIN_NAME

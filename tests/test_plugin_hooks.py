from __future__ import annotations

import json

import pytest

import load
from compass_client.geometry import Rect, Vec2
from compass_client.painter import RecordingPainterAdapter
from compass_client.peer_model import PeerSnapshot, ViewerContext
from compass_plugin.host_bridge import HostBridge
from compass_plugin.preferences import PREFERENCES_FILE


class FakeHost(HostBridge):
    def __init__(self) -> None:
        self.peers: list[PeerSnapshot] = []
        self.remote_players = True
        self.viewer_hidden = False
        self.scheduled: list[tuple[int, object]] = []
        self.cancelled: list[object] = []
        self.fail_peers = False

    def viewport(self) -> Rect:
        return Rect(-100, -100, 200, 200)

    def viewer(self) -> ViewerContext:
        return ViewerContext(position=Vec2(-32, 32), hidden=self.viewer_hidden)

    def connected_peers(self):
        if self.fail_peers:
            raise RuntimeError("peer list unavailable")
        return list(self.peers)

    def has_remote_players(self) -> bool:
        return self.remote_players

    def after(self, delay_ms, callback):
        handle = f"t{len(self.scheduled) + 1}"
        self.scheduled.append((delay_ms, callback))
        return handle

    def after_cancel(self, handle) -> None:
        self.cancelled.append(handle)

    def fire_timer(self) -> None:
        _delay, callback = self.scheduled[-1]
        callback()


@pytest.fixture(autouse=True)
def _stop_plugin():
    yield
    load.plugin_stop()


@pytest.fixture
def host() -> FakeHost:
    fake = FakeHost()
    fake.peers = [
        PeerSnapshot(peer_id=11, position=Vec2(268, 32), handle=object(), display_name="sam"),
        PeerSnapshot(peer_id=12, position=Vec2(0, 32), handle=object()),
    ]
    return fake


def _write_prefs(tmp_path, **values) -> None:
    (tmp_path / PREFERENCES_FILE).write_text(json.dumps(values), encoding="utf-8")


def test_plugin_start_is_idempotent(tmp_path, host):
    assert load.plugin_start(str(tmp_path), host) == load.PLUGIN_NAME
    first = load._plugin
    assert load.plugin_start(str(tmp_path), host) == load.PLUGIN_NAME
    assert load._plugin is first
    assert len(host.scheduled) == 1
    assert host.scheduled[0][0] == 1000


def test_plugin_stop_cancels_timer_and_clears_state(tmp_path, host):
    load.plugin_start(str(tmp_path), host)
    load.one_second_tick()

    load.plugin_stop()
    load.plugin_stop()

    assert load._plugin is None
    assert host.cancelled == ["t1"]


def test_timer_tick_reconciles_connected_peers(tmp_path, host):
    load.plugin_start(str(tmp_path), host)
    registry = load._plugin.registry

    host.fire_timer()

    assert sorted(registry.peer_ids()) == [11, 12]
    assert len(host.scheduled) == 2


def test_disconnect_and_title_hooks(tmp_path, host):
    load.plugin_start(str(tmp_path), host)
    load.one_second_tick()
    registry = load._plugin.registry

    load.peer_disconnected(12)
    load.peer_disconnected(12)
    assert registry.peer_ids() == [11]

    load.returned_to_title()
    assert len(registry) == 0


def test_rendered_hud_draws_offscreen_peer(tmp_path, host):
    load.plugin_start(str(tmp_path), host)
    load.one_second_tick()
    adapter = RecordingPainterAdapter()

    assert load.rendered_hud(adapter) == 1
    assert [kind for kind, _ in adapter.calls] == ["bubble", "arrow"]
    assert adapter.calls[0][1]["label"] == "sam"


def test_rendered_hud_before_reconcile_draws_arrow_only(tmp_path, host):
    load.plugin_start(str(tmp_path), host)
    adapter = RecordingPainterAdapter()

    assert load.rendered_hud(adapter) == 1
    assert [kind for kind, _ in adapter.calls] == ["arrow"]


@pytest.mark.parametrize("attr, value", [("remote_players", False), ("viewer_hidden", True)])
def test_rendered_hud_skips_without_peers_or_in_cutscene(tmp_path, host, attr, value):
    load.plugin_start(str(tmp_path), host)
    load.one_second_tick()
    setattr(host, attr, value)
    adapter = RecordingPainterAdapter()

    assert load.rendered_hud(adapter) == 0
    assert adapter.calls == []


def test_hidden_bubble_disables_reconciliation(tmp_path, host):
    _write_prefs(tmp_path, hide_compass_bubble=True)
    load.plugin_start(str(tmp_path), host)
    load.one_second_tick()
    adapter = RecordingPainterAdapter()

    assert host.scheduled == []
    assert len(load._plugin.registry) == 0
    assert load.rendered_hud(adapter) == 1
    assert [kind for kind, _ in adapter.calls] == ["arrow"]


def test_everything_hidden_disables_rendering(tmp_path, host):
    _write_prefs(tmp_path, hide_compass_bubble=True, hide_compass_arrow=True)
    load.plugin_start(str(tmp_path), host)
    adapter = RecordingPainterAdapter()

    assert load.rendered_hud(adapter) == 0
    assert adapter.calls == []


def test_configured_alpha_reaches_painter(tmp_path, host):
    _write_prefs(tmp_path, alpha=150)
    load.plugin_start(str(tmp_path), host)
    load.one_second_tick()
    adapter = RecordingPainterAdapter()

    load.rendered_hud(adapter)

    assert load.plugin_preferences().alpha == 100
    assert adapter.calls[0][1]["alpha"] == 1.0


def test_host_failures_do_not_escape_hooks(tmp_path, host):
    load.plugin_start(str(tmp_path), host)
    host.fail_peers = True

    load.one_second_tick()
    assert load.rendered_hud(RecordingPainterAdapter()) == 0


def test_hooks_are_noops_before_start():
    load.one_second_tick()
    load.peer_disconnected(1)
    load.returned_to_title()

    assert load.rendered_hud(RecordingPainterAdapter()) == 0
    assert load.plugin_preferences() is None

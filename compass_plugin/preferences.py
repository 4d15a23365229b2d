"""JSON-backed preferences for the compass plugin."""
from __future__ import annotations

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from compass_client.hud_pass import IndicatorSettings

PREFERENCES_FILE = "config.json"
ALPHA_MIN = 0
ALPHA_MAX = 100
ALPHA_DEFAULT = 100


def _clamp_alpha(value: Any) -> int:
    try:
        alpha = float(value)
    except (TypeError, ValueError):
        return ALPHA_DEFAULT
    if math.isnan(alpha):
        return ALPHA_DEFAULT
    return int(max(ALPHA_MIN, min(alpha, ALPHA_MAX)))


def _coerce_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, str):
        token = value.strip().lower()
        if token in {"1", "true", "yes", "on"}:
            return True
        if token in {"0", "false", "no", "off", ""}:
            return False
        return default
    if value is None:
        return default
    return bool(value)


@dataclass
class Preferences:
    """Indicator transparency plus the two visibility toggles."""

    plugin_dir: Path
    alpha: int = ALPHA_DEFAULT
    hide_compass_bubble: bool = False
    hide_compass_arrow: bool = False

    def __post_init__(self) -> None:
        self.plugin_dir = Path(self.plugin_dir)
        self._path = self.plugin_dir / PREFERENCES_FILE
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    # Persistence ---------------------------------------------------------

    def _load(self) -> None:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except json.JSONDecodeError:
            return
        if not isinstance(data, dict):
            return
        self.alpha = _clamp_alpha(data.get("alpha", ALPHA_DEFAULT))
        self.hide_compass_bubble = _coerce_bool(data.get("hide_compass_bubble"))
        self.hide_compass_arrow = _coerce_bool(data.get("hide_compass_arrow"))

    def save(self) -> None:
        payload: Dict[str, Any] = {
            "alpha": _clamp_alpha(self.alpha),
            "hide_compass_bubble": bool(self.hide_compass_bubble),
            "hide_compass_arrow": bool(self.hide_compass_arrow),
        }
        self.plugin_dir.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def reset(self) -> None:
        self.alpha = ALPHA_DEFAULT
        self.hide_compass_bubble = False
        self.hide_compass_arrow = False

    def set_alpha(self, value: Any) -> int:
        self.alpha = _clamp_alpha(value)
        return self.alpha

    # Derived -------------------------------------------------------------

    def alpha_fraction(self) -> float:
        return _clamp_alpha(self.alpha) / 100.0

    def bubbles_enabled(self) -> bool:
        return not self.hide_compass_bubble

    def rendering_enabled(self) -> bool:
        return not self.hide_compass_bubble or not self.hide_compass_arrow

    def indicator_settings(self) -> IndicatorSettings:
        return IndicatorSettings(
            alpha=self.alpha_fraction(),
            show_bubble=not self.hide_compass_bubble,
            show_arrow=not self.hide_compass_arrow,
        )

# src/taskboard/utils/config.py
import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict
from .paths import config_dir

log = logging.getLogger(__name__)

SETTINGS_FILE = config_dir() / "settings.json"

VIEW_MODES = ("list", "board")

_DEFAULTS: Dict[str, Any] = {
    "main_window": {
        "width": 1280,
        "height": 760,
        "is_maximized": False,
    },
    "ui": {
        "view_mode": "list",
        "diagnostics_dock_visible": False,
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def load_settings(path: Path = SETTINGS_FILE) -> Dict[str, Any]:
    if path.exists():
        try:
            saved = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            saved = None
        if not isinstance(saved, dict) or not all(isinstance(saved.get(k, {}), dict) for k in _DEFAULTS):
            log.warning("Unreadable settings file %s; using defaults", path)
            return _merge(_DEFAULTS, {})
        settings = _merge(_DEFAULTS, saved)
        if settings["ui"].get("view_mode") not in VIEW_MODES:
            settings["ui"]["view_mode"] = "list"
        return settings
    return _merge(_DEFAULTS, {})


def save_settings(data: Dict[str, Any], path: Path = SETTINGS_FILE) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


DEFAULT_CONFIG_PATH = "config/params.yaml"

_DEFAULTS: Dict[str, Any] = {
    "mapbox": {"token": None, "username": None, "timeout_s": 30.0},
    "tilesets": {"poll_interval_s": 5.0},
    "maps": {"cache_root": None, "high_dpi": False, "format": "png"},
    "logging": {"level": None},
}

# env var -> (section, key)
_ENV_OVERRIDES = {
    "MAPBOX_TOKEN": ("mapbox", "token"),
    "MAPBOX_USERNAME": ("mapbox", "username"),
    "LOG_LEVEL": ("logging", "level"),
}


def _merge(base: Dict[str, Any], over: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in over.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load client settings.

    Precedence (highest first):
      - environment (MAPBOX_TOKEN, MAPBOX_USERNAME, LOG_LEVEL)
      - YAML file at `path` (default config/params.yaml, optional)
      - built-in defaults

    An explicitly passed `path` that does not exist raises FileNotFoundError;
    the default path is allowed to be missing.
    """
    cfg = copy.deepcopy(_DEFAULTS)

    p = Path(path or DEFAULT_CONFIG_PATH)
    if p.exists():
        with p.open("r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {p} must contain a mapping at the top level")
        cfg = _merge(cfg, data)
    elif path:
        raise FileNotFoundError(f"Config file not found: {p}")

    for env, (section, key) in _ENV_OVERRIDES.items():
        val = os.environ.get(env)
        if val:
            cfg.setdefault(section, {})[key] = val
    return cfg

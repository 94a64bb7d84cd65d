"""Load settings and env configuration."""
from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from jobboard.log import get_logger

log = get_logger(__name__)

load_dotenv()

ROOT_DIR: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = ROOT_DIR / "config"
SETTINGS_PATH: Path = CONFIG_DIR / "settings.yaml"
DATA_DIR: Path = Path(os.environ.get("JOBBOARD_DATA_DIR") or ROOT_DIR / "data")

DEFAULTS: dict[str, Any] = {
    "backend_url": "http://localhost:5003/api",
    "contact_url": "http://localhost:5000/api",
    "external_api_url": "https://mysite-z2xs.onrender.com/api",
    "request_timeout": 15,
    "page_size": 10,
    "adzuna": {
        "country": "us",
        "results_per_page": 10,
        "total_pages": 5,
        "search": "developer",
        "location": "New York",
    },
}

# env var -> settings key
_ENV_OVERRIDES: dict[str, str] = {
    "JOBBOARD_BACKEND_URL": "backend_url",
    "JOBBOARD_CONTACT_URL": "contact_url",
    "EXTERNAL_API_URL": "external_api_url",
    "REQUEST_TIMEOUT": "request_timeout",
}


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def load_settings(path: Path | None = None) -> dict[str, Any]:
    """Settings from ``config/settings.yaml`` over the defaults, then env overrides."""
    path = path or SETTINGS_PATH
    data: dict[str, Any] = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    else:
        log.debug("No settings file at %s, using defaults", path)

    settings = _merge(DEFAULTS, data)

    for env_key, setting in _ENV_OVERRIDES.items():
        value = get_env(env_key)
        if value:
            settings[setting] = value

    try:
        settings["request_timeout"] = float(settings["request_timeout"])
    except (TypeError, ValueError):
        log.warning("Invalid request_timeout %r, falling back to %s",
                    settings["request_timeout"], DEFAULTS["request_timeout"])
        settings["request_timeout"] = float(DEFAULTS["request_timeout"])

    return settings


def ensure_dirs() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)

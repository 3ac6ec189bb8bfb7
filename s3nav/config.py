from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import ConfigError
from .s3 import DEFAULT_MAX_KEYS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    profile: Optional[str] = None
    region: Optional[str] = None
    max_keys: int = DEFAULT_MAX_KEYS
    log_file: Optional[Path] = None


def config_base_dir() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        base = Path(config_home).expanduser()
    else:
        base = Path.home() / ".config"
    return base / "s3nav"


def default_config_path() -> Path:
    return config_base_dir() / "config.json"


def _read_config(path: Path) -> dict[str, object]:
    try:
        payload = json.loads(path.read_text())
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}
    if not isinstance(payload, dict):
        logger.warning("Ignoring config %s: expected a JSON object", path)
        return {}
    return payload


def _optional_text(payload: dict[str, object], name: str) -> Optional[str]:
    value = payload.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{name} must be a string")
    normalized = value.strip()
    return normalized or None


def _max_keys(payload: dict[str, object]) -> int:
    value = payload.get("max_keys", DEFAULT_MAX_KEYS)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError("max_keys must be an integer")
    if not 1 <= value <= 1000:
        raise ConfigError("max_keys must be between 1 and 1000")
    return value


def load_settings(path: Optional[Path] = None) -> Settings:
    payload = _read_config(path or default_config_path())
    log_file = _optional_text(payload, "log_file")
    return Settings(
        profile=_optional_text(payload, "profile"),
        region=_optional_text(payload, "region"),
        max_keys=_max_keys(payload),
        log_file=Path(log_file).expanduser() if log_file else None,
    )

# config_manager.py - JSON config manager
# Startup configuration: built-in defaults, then an optional JSON file, then CLI flags.
# Config is mutable while being assembled; Settings is the frozen snapshot handed
# to the engine and transport.

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from history_recall.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV = "HISTORY_RECALL_CONFIG"

DEFAULTS: Dict[str, Any] = {
    "human": False,  # interactive plain-text mode
    "case_sensitive": False,
    "max_results": 10,
    "history_files": [],  # extra history files tried before the shell defaults
    "skip_malformed": False,  # skip undecodable JSON lines instead of exiting
}


@dataclass(frozen=True)
class Settings:
    human: bool = False
    case_sensitive: bool = False
    max_results: int = 10
    history_files: Tuple[str, ...] = field(default_factory=tuple)
    skip_malformed: bool = False


class Config:
    def __init__(self, path: Optional[str] = None):
        self.path = path or os.environ.get(CONFIG_ENV)
        self.data: Dict[str, Any] = {k: (list(v) if isinstance(v, list) else v) for k, v in DEFAULTS.items()}
        self._load()

    def _load(self):
        if not self.path:
            return
        if not os.path.exists(self.path):
            logger.warning("config file %s not found, using defaults", self.path)
            return
        try:
            with open(self.path, "r", encoding="utf8") as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(f"cannot read config {self.path}: {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"config {self.path} must hold a JSON object")
        for k, v in loaded.items():
            if k not in self.data:
                logger.warning("ignoring unknown config option %r", k)
                continue
            self.set(k, v)

    def save(self):
        if not self.path:
            raise ConfigError("no config path to save to")
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def show(self):
        for k, v in self.data.items():
            print(f"{k:15} = {v}")

    def set(self, key, val):
        if key not in self.data:
            raise ConfigError(f"no such option: {key}")
        kind = type(DEFAULTS[key])
        if kind is list:
            if not isinstance(val, (list, tuple)):
                raise ConfigError(f"{key} must be a list")
            self.data[key] = [str(v) for v in val]
        elif kind is bool:
            self.data[key] = _to_bool(key, val)
        else:
            try:
                self.data[key] = kind(val)
            except (TypeError, ValueError) as e:
                raise ConfigError(f"bad value for {key}: {val!r}") from e

    def settings(self, **overrides) -> Settings:
        """Freeze the current values; overrides that are None are ignored."""
        for k, v in overrides.items():
            if v is not None:
                self.set(k, v)
        d = self.data
        return Settings(
            human=d["human"],
            case_sensitive=d["case_sensitive"],
            max_results=d["max_results"],
            history_files=tuple(d["history_files"]),
            skip_malformed=d["skip_malformed"],
        )


def _to_bool(key, val) -> bool:
    if isinstance(val, bool):
        return val
    if isinstance(val, str) and val.lower() in ("1", "true", "yes", "on", "0", "false", "no", "off"):
        return val.lower() in ("1", "true", "yes", "on")
    raise ConfigError(f"{key} must be a boolean, got {val!r}")

"""
Configuration management for Job Radar.

Settings come from layers, later ones winning: built-in defaults, a JSON
file (``~/.job_radar/config.json`` unless another path is given),
``JOB_RADAR_*`` environment variables, then values pinned from the command
line with ``Config.override``.
"""

from pathlib import Path
from typing import Optional
import copy
import json
import logging
import os


TRUE_VALUES = {"1", "true", "yes", "on"}


def merge_settings(defaults: dict, overrides: dict) -> dict:
    """Recursively lay overrides on top of defaults without mutating either."""
    merged = dict(defaults)
    for name, value in overrides.items():
        current = merged.get(name)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[name] = merge_settings(current, value)
        else:
            merged[name] = value
    return merged


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUE_VALUES
    return bool(value)


class Config:
    """Manages application configuration."""

    DEFAULT_CONFIG = {
        "storage": {
            "db_path": "./data/db.json",
            "retention_cap": 500,
        },
        "search": {
            "default_limit": 25,
            "refresh_limit": 50,
            "include_live": False,
            "live_sources": ["RemoteOK", "WeWorkRemotely", "Indeed", "Upwork"],
            "parallel": True,
        },
        "scraping": {
            "user_agent": "JobRadar/1.0 (+personal remote job search)",
            "timeout": 20,
        },
        "server": {
            "host": "127.0.0.1",
            "port": 3001,
        },
    }

    # Environment variable -> (dotted key, converter)
    ENV_OVERRIDES = {
        "JOB_RADAR_DB_PATH": ("storage.db_path", str),
        "JOB_RADAR_INCLUDE_LIVE": ("search.include_live", _as_bool),
        "JOB_RADAR_HOST": ("server.host", str),
        "JOB_RADAR_PORT": ("server.port", int),
    }

    def __init__(self, config_path: Optional[str] = None):
        """
        Args:
            config_path: Path to config file (default: ~/.job_radar/config.json)
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self.config_path = (
            Path(config_path) if config_path
            else Path.home() / ".job_radar" / "config.json"
        )
        self.config = self._read_file()
        self.overrides: dict = {}

    def _read_file(self) -> dict:
        defaults = copy.deepcopy(self.DEFAULT_CONFIG)
        if not self.config_path.exists():
            return defaults

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                stored = json.load(f)
        except (OSError, ValueError) as e:
            self.logger.warning(f"Ignoring unreadable config {self.config_path}: {e}")
            return defaults

        if not isinstance(stored, dict):
            self.logger.warning(f"Ignoring config {self.config_path}: top level must be an object")
            return defaults

        return merge_settings(defaults, stored)

    def save(self) -> None:
        """Write the file layer (environment and command-line overrides are not persisted)."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            json.dump(self.config, f, indent=2)

    def _env_value(self, key: str):
        for env_var, (env_key, convert) in self.ENV_OVERRIDES.items():
            raw = os.environ.get(env_var)
            if env_key == key and raw:
                return convert(raw)
        return None

    def get(self, key: str, default=None):
        """
        Look up a dotted key such as ``"search.include_live"``.

        Command-line overrides win over the environment, which wins over
        the file.

        Returns:
            The value, or default if any path segment is missing
        """
        if key in self.overrides:
            return self.overrides[key]

        override = self._env_value(key)
        if override is not None:
            return override

        node = self.config
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key: str, value) -> None:
        """Assign a dotted key, creating intermediate sections as needed."""
        *sections, leaf = key.split(".")
        node = self.config
        for part in sections:
            node = node.setdefault(part, {})
        node[leaf] = value

    def override(self, key: str, value) -> None:
        """Pin a dotted key for this process only (not written by save)."""
        self.overrides[key] = value

    def get_db_path(self) -> str:
        return str(self.get("storage.db_path", "./data/db.json"))

    def get_retention_cap(self) -> int:
        return int(self.get("storage.retention_cap", 500))

    def include_live(self) -> bool:
        return _as_bool(self.get("search.include_live", False))

    def get_server_address(self) -> tuple[str, int]:
        return str(self.get("server.host", "127.0.0.1")), int(self.get("server.port", 3001))

    def print_config(self) -> None:
        """Print current configuration."""
        print(json.dumps(self.config, indent=2))

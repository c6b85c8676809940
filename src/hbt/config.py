"""Configuration with JSON file and env overrides."""

import json
import os
from pathlib import Path
from typing import Any

# Module-level cache for singleton pattern
_config_cache: "Config | None" = None


def clear_config_cache() -> None:
    """Clear the config cache. Useful for testing or config reload."""
    global _config_cache
    _config_cache = None


def get_default_config_dir() -> Path:
    """Get default config directory, respecting HBT_CONFIG_DIR env var."""
    config_dir = os.environ.get("HBT_CONFIG_DIR")
    if config_dir:
        return Path(config_dir)
    return Path.home() / ".config" / "hbt"


class ConfigMeta:
    """Schema definition - separate from runtime state."""

    SETTINGS: dict[str, str] = {
        "database": "Path to the SQLite database (empty = <config dir>/hbt.db)",
        "interactive_width": "Max width for the interactive view (default: 80)",
        "log_file": "Write logs to this file (empty = no logging)",
        "log_level": "Log level (DEBUG|INFO|WARNING|ERROR)",
    }


class Config:
    """Runtime configuration with env override support."""

    DEFAULTS: dict[str, Any] = {
        "database": "",
        "interactive_width": 80,
        "log_file": "",
        "log_level": "WARNING",
    }

    def __init__(self, config_dir: Path | None = None):
        self._config_dir = config_dir or get_default_config_dir()
        self._config_file = self._config_dir / "config.json"
        self._data: dict[str, Any] = {}

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    @property
    def database_path(self) -> Path:
        """Resolved database location."""
        if self.database:
            return Path(self.database).expanduser()
        return self._config_dir / "hbt.db"

    @classmethod
    def load(cls, config_dir: Path | None = None) -> "Config":
        """Factory method - explicit loading with caching."""
        global _config_cache

        if _config_cache is not None and config_dir is None:
            return _config_cache

        config = cls(config_dir)
        config._load_from_file()
        config._apply_env_overrides()

        # Cache if using default directory
        if config_dir is None:
            _config_cache = config

        return config

    def __getattr__(self, name: str) -> Any:
        """Access config values as attributes."""
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._data:
            return self._data[name]
        if name in self.DEFAULTS:
            return self.DEFAULTS[name]
        raise AttributeError(f"Config has no attribute '{name}'")

    def get_settings(self) -> list[tuple[str, str, Any]]:
        """Return (key, description, value) for display."""
        return [(key, desc, getattr(self, key)) for key, desc in ConfigMeta.SETTINGS.items()]

    def override(self, key: str, value: Any) -> None:
        """Set value for this run only (not persisted)."""
        self._data[key] = value

    def set(self, key: str, value: Any) -> None:
        """Set value and persist."""
        self._data[key] = value
        self._save(key, value)

    @classmethod
    def parse(cls, key: str, value: str) -> Any:
        """Convert a string (env var or CLI argument) to the type of key's default."""
        if key not in cls.DEFAULTS:
            raise KeyError(f"Unknown setting: {key}")
        return cls._coerce(value, type(cls.DEFAULTS[key]))

    def _read_file(self) -> dict[str, Any]:
        if not self._config_file.exists():
            return {}
        try:
            content = self._config_file.read_text()
            return json.loads(content) if content.strip() else {}
        except json.JSONDecodeError:
            # Corrupted config - use defaults, will be fixed on next save
            return {}

    def _load_from_file(self) -> None:
        self._data = self._read_file()

    def _save(self, key: str, value: Any) -> None:
        # Only file values are written back, never env or per-run overrides
        stored = self._read_file()
        stored[key] = value
        self._config_dir.mkdir(parents=True, exist_ok=True)
        self._config_file.write_text(json.dumps(stored, indent=2))

    def _apply_env_overrides(self) -> None:
        """Apply HBT_* env vars (highest priority)."""
        for key in self.DEFAULTS:
            env_key = f"HBT_{key.upper()}"
            if env_key in os.environ:
                self._data[key] = self.parse(key, os.environ[env_key])

    @staticmethod
    def _coerce(value: str, target_type: type) -> Any:
        """Coerce string value to target type."""
        if target_type is int:
            return int(value)
        return value

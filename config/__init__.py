"""
Configuration Module for the Invoice Field Extraction Engine.

Settings live in YAML. The bundled settings.yaml is always loaded first;
a custom file (passed explicitly or named by the INVOICE_FIELDS_CONFIG
environment variable) is layered on top, so it only has to carry the
keys it changes. Every consumer still passes an in-code default to
get_config(), so a key missing from both files never breaks a caller.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_ENV_VAR = "INVOICE_FIELDS_CONFIG"
DEFAULT_SETTINGS = Path(__file__).parent / "settings.yaml"


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override into a copy of base; nested mappings merge key by key."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigurationManager:
    """
    Process-wide settings for the extraction engine.

    Attributes:
        config_path (Optional[Path]): Custom file layered over the bundled
            defaults, or None when only the defaults are in use.

    Example:
        >>> config = ConfigurationManager()
        >>> config.get("extraction.date.header_lines")
        15
        >>> config.get_section("extraction.scoring")["strong_label"]
        10.0
    """

    _instance: Optional['ConfigurationManager'] = None

    def __new__(cls, config_path: Optional[str] = None) -> 'ConfigurationManager':
        # one instance per process until reset()
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Load settings on first construction; later calls are no-ops.

        Args:
            config_path: Custom settings file. Falls back to the
                INVOICE_FIELDS_CONFIG environment variable, then to the
                bundled defaults alone.
        """
        if self._initialized:
            return

        config_path = config_path or os.environ.get(CONFIG_ENV_VAR)
        self.config_path = Path(config_path) if config_path else None
        self._config: Dict[str, Any] = {}

        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        """
        Load the bundled defaults, then the custom file over them.

        Raises:
            FileNotFoundError: If a settings file doesn't exist.
            yaml.YAMLError: If a settings file is not valid YAML.
        """
        config = self._read_yaml(DEFAULT_SETTINGS)

        if self.config_path is not None:
            config = _deep_merge(config, self._read_yaml(self.config_path))

        self._config = config
        self._resolve_paths()

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise yaml.YAMLError(f"Top level of {path} must be a mapping")
        return data

    def _resolve_paths(self) -> None:
        """Anchor relative entries under `paths` at the project root."""
        project_root = Path(__file__).parent.parent

        for key, value in (self._config.get('paths') or {}).items():
            if value and not Path(value).is_absolute():
                self._config['paths'][key] = str(project_root / value)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a value by dotted key.

        Args:
            key: Dotted path, e.g. "extraction.tax.max_rate_percent".
            default: Returned when any part of the path is missing.

        Returns:
            Configured value or default.

        Example:
            >>> config.get("extraction.tax.max_rate_percent")
            50
            >>> config.get("nonexistent.key", "default_value")
            'default_value'
        """
        value = self._config

        try:
            for part in key.split('.'):
                value = value[part]
            return value
        except (KeyError, TypeError):
            return default

    def get_section(self, key: str) -> Dict[str, Any]:
        """Return a copy of a nested mapping, or {} when absent or not a mapping."""
        section = self.get(key, {})
        return copy.deepcopy(section) if isinstance(section, dict) else {}

    def get_all(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)

    def reload(self) -> None:
        """Re-read both files, e.g. after editing settings on disk."""
        self._load_config()

    @classmethod
    def reset(cls) -> None:
        """Forget the current instance; the next construction reloads."""
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """
    Shortcut for ConfigurationManager().get(key, default).

    Args:
        key: Dotted configuration key.
        default: Value when the key is not configured.
    """
    return ConfigurationManager().get(key, default)


__all__ = ['ConfigurationManager', 'get_config', 'CONFIG_ENV_VAR']

"""
================================================================================
Configuration Loader
================================================================================

Settings for the Event Manager UI suite: target URL, browser, timeouts,
seeded identities, event defaults, locator overrides and logging.

Lookup order for ``get("timeouts.default_ms", 10000)``:
    1. Environment variable ``TIMEOUTS_DEFAULT_MS`` (coerced to the default's type)
    2. ``timeouts.default_ms`` in the YAML file
    3. The default

The YAML file is ``config/config.yaml`` at the repo root unless
``EVENT_AUTOTEST_CONFIG`` names another one (e.g. a staging profile in CI).

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

# Points the suite at an alternative YAML profile
CONFIG_PATH_ENV = "EVENT_AUTOTEST_CONFIG"

_TRUE_VALUES = ("true", "1", "yes", "on")

_MISSING = object()


class ConfigurationError(Exception):
    """Raised when the configuration file cannot be parsed."""
    pass


class ConfigLoader:
    """
    Process-wide settings store.

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("ui.base_url", "http://localhost:3000")
        'http://localhost:3000'
        >>> config.source("ui.base_url")
        'file'

    Any dotted key can be overridden from the environment by upper-casing it
    and replacing dots with underscores: ``users.admin.password`` ->
    ``USERS_ADMIN_PASSWORD``. Whole sections (``get_section``) come from the
    file only.
    """

    _instance: Optional["ConfigLoader"] = None

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Args:
            config_path: YAML file to load. Falls back to ``EVENT_AUTOTEST_CONFIG``,
                then to ``config/config.yaml``. Ignored once the singleton exists.
        """
        if self._initialized:
            return

        self._config_path = self._resolve_path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()
        self._initialized = True

    @staticmethod
    def _resolve_path(config_path: Optional[Path]) -> Path:
        if config_path:
            return Path(config_path)
        from_env = os.environ.get(CONFIG_PATH_ENV)
        if from_env:
            return Path(from_env)
        return DEFAULT_CONFIG_PATH

    @property
    def path(self) -> Path:
        return self._config_path

    def _load_config(self) -> None:
        if not self._config_path.exists():
            logger.warning(
                f"Config file {self._config_path} not found; "
                f"running on defaults and environment overrides"
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self._config_path}: {e}") from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(
                f"{self._config_path} must hold a mapping at the top level, "
                f"got {type(loaded).__name__}"
            )
        self._config = loaded
        logger.debug(f"Loaded configuration from: {self._config_path}")

    # =========================================================================
    # Lookup
    # =========================================================================

    @staticmethod
    def env_key(key: str) -> str:
        """Environment variable that overrides ``key``."""
        return key.upper().replace(".", "_")

    def _from_file(self, key: str) -> Any:
        node: Any = self._config
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return _MISSING
            node = node[part]
        return _MISSING if node is None else node

    def get(self, key: str, default: Any = None) -> Any:
        """
        Value for a dotted ``key``: environment, then file, then ``default``.

        Environment values are strings; they are coerced to the type of
        ``default`` when one is given.
        """
        env_value = os.environ.get(self.env_key(key))
        if env_value is not None:
            return self._coerce(env_value, default)

        value = self._from_file(key)
        return default if value is _MISSING else value

    def source(self, key: str) -> str:
        """Where ``get(key)`` reads from: ``env``, ``file`` or ``default``."""
        if self.env_key(key) in os.environ:
            return "env"
        return "default" if self._from_file(key) is _MISSING else "file"

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Copy of a top-level section (``{}`` when absent).

        Callers may mutate the result without touching the loaded config.
        """
        value = self._config.get(section)
        return copy.deepcopy(value) if isinstance(value, dict) else {}

    @staticmethod
    def _coerce(value: str, reference: Any) -> Any:
        if reference is None or isinstance(reference, str):
            return value
        if isinstance(reference, bool):
            return value.strip().lower() in _TRUE_VALUES
        if isinstance(reference, (int, float)):
            try:
                return type(reference)(value)
            except ValueError:
                logger.warning(f"Cannot read {value!r} as {type(reference).__name__}; using it as text")
                return value
        if isinstance(reference, (list, tuple)):
            items: List[str] = [item.strip() for item in value.split(",") if item.strip()]
            return items
        return value

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def reload(self) -> None:
        """Re-read the YAML file in place."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton; the next ``ConfigLoader()`` loads afresh."""
        cls._instance = None


__all__ = [
    "CONFIG_PATH_ENV",
    "ConfigLoader",
    "ConfigurationError",
]

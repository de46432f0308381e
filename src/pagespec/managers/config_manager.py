# src/pagespec/managers/config_manager.py
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from pagespec.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

USER_SETTINGS_ENV = "PAGESPEC_SETTINGS"


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Returns a copy of `base` with `override` merged in; nested dicts merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """
    Singleton holding the run configuration.

    The packaged settings.json is the base layer; a user file named by the
    PAGESPEC_SETTINGS environment variable is merged over it. Values set
    at runtime live in memory only and are dropped by `reset()`.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        self._config: Dict[str, Any] = {}
        self.sources: List[Path] = []
        # Incremented by reset() and set_nested().
        self.revision = 0
        self.reset()
        logger.debug("ConfigManager initialized.")

    @staticmethod
    def _read_layer(path: Path) -> Optional[Dict[str, Any]]:
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load settings from %s: %s", path, e, exc_info=True)
            return None
        if not isinstance(data, dict):
            logger.error("Settings file %s does not hold a JSON object; ignored.", path)
            return None
        return data

    def get_all(self) -> Dict[str, Any]:
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Dotted lookup, e.g. 'sectionizer.thresholds.rich_text_min_words'.
        Returns `default` when any segment is missing.
        """
        value: Any = self._config
        for key in key_path.split('.'):
            if not isinstance(value, dict):
                return default
            value = value.get(key)
        return value if value is not None else default

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        In-memory override, e.g. set_nested('spec.workers', '8').
        The value is cast to the type of the value it replaces when possible.
        """
        *parents, leaf = key_path.split('.')
        target = self._config
        for key in parents:
            target = target.setdefault(key, {})
            if not isinstance(target, dict):
                logger.error("Cannot set '%s': '%s' is not a section.", key_path, key)
                return False

        current = target.get(leaf)
        if current is not None and not isinstance(value, type(current)):
            try:
                value = type(current)(value)
            except (ValueError, TypeError):
                logger.warning(
                    "Could not cast value for '%s' to %s; storing it unchanged.",
                    key_path, type(current).__name__
                )

        target[leaf] = value
        self.revision += 1
        logger.info("Configuration updated: %s = %s", key_path, value)
        return True

    def reset(self):
        """Rebuilds the configuration from disk, discarding in-memory changes."""
        layers = [PathUtils.get_settings_path()]
        user_path = os.environ.get(USER_SETTINGS_ENV)
        if user_path:
            layers.append(Path(user_path))

        config: Dict[str, Any] = {}
        self.sources = []
        for path in layers:
            data = self._read_layer(path)
            if data is None:
                logger.warning("Settings file %s not found or unreadable; skipped.", path)
                continue
            config = deep_merge(config, data)
            self.sources.append(path)

        self._config = config
        self.revision += 1
        logger.info("Configuration (re)loaded from %d file(s).", len(self.sources))


config_manager = ConfigManager()

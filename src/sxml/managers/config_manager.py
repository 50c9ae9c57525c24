# src/sxml/managers/config_manager.py
import json
import logging
from typing import Any, Dict, Iterable, Optional

from sxml.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Process-wide settings for the CLI: log levels, the child path separator
    and the progress bar threshold.

    Values come from the bundled settings.json and can be overridden per run
    with ``key.path=value`` pairs (``sxml --set cli.path_separator=/ ...``).
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._settings = {}
            cls._instance.reset()
        return cls._instance

    def get_all(self) -> Dict[str, Any]:
        """The live settings tree (file values plus overrides)."""
        return self._settings

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """Looks up a dotted key such as 'cli.path_separator'; missing keys give ``default``."""
        node: Any = self._settings
        for part in key_path.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return default if node is None else node

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Stores ``value`` under a dotted key, creating missing sections.

        A string replacing a typed setting is converted to that type
        ("20" for an int threshold becomes 20); if that fails it is kept as is.

        Returns:
            bool: False when a path segment already holds a non-section value.
        """
        *sections, leaf = key_path.split('.')
        target = self._settings
        for section in sections:
            target = target.setdefault(section, {})
            if not isinstance(target, dict):
                logger.error("Cannot set '%s': '%s' is not a section.", key_path, section)
                return False

        current = target.get(leaf)
        if current is not None and not isinstance(value, type(current)):
            value = self._coerce(key_path, value, type(current))

        target[leaf] = value
        logger.debug("Setting %s = %r", key_path, value)
        return True

    @staticmethod
    def _coerce(key_path: str, value: Any, kind: type) -> Any:
        if kind is bool and isinstance(value, str):
            lowered = value.lower()
            if lowered in ("true", "false"):
                return lowered == "true"
        elif kind is not bool:
            try:
                return kind(value)
            except (ValueError, TypeError):
                pass
        logger.warning("Could not convert '%s' to %s for '%s'; storing it unchanged.",
                       value, kind.__name__, key_path)
        return value

    def apply_overrides(self, pairs: Iterable[str]) -> None:
        """
        Applies ``key.path=value`` strings on top of the loaded settings.

        Raises:
            ValueError: A pair has no '=' or an empty key, or targets a non-section.
        """
        for pair in pairs:
            key_path, sep, value = pair.partition("=")
            key_path = key_path.strip()
            if not sep or not key_path:
                raise ValueError(f"Invalid setting override '{pair}', expected key.path=value.")
            if not self.set_nested(key_path, value):
                raise ValueError(f"Cannot override '{key_path}'.")

    def reset(self) -> None:
        """Discards overrides and reloads settings.json."""
        settings_path = PathUtils.get_settings_file()
        if not settings_path.exists():
            logger.warning("settings.json not found at %s. Using empty settings.", settings_path)
            self._settings = {}
            return
        try:
            with open(settings_path, "r", encoding="utf-8") as f:
                self._settings = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load %s: %s", settings_path, e, exc_info=True)
            self._settings = {}
            return
        logger.debug("Settings loaded from %s.", settings_path)


config_manager = ConfigManager()

"""
Unified Configuration Manager

Configuration Priority (highest to lowest):
1. Runtime configuration (temporary overrides, e.g. command line flags)
2. User settings (QSettings persistent storage)
3. Default configuration (from config.py)
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from PyQt6.QtCore import QSettings

import config

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    {
        "name": "ConfigManager",
        "version": "1.0.0",
        "description": "Configuration access with runtime > QSettings > config.py precedence.",
        "dependencies": ["PyQt6.QtCore", "config"],
        "interface": {
            "inputs": ["key: str", "value: Any", "persist: bool"],
            "outputs": "Configuration values with change notification"
        }
    }
    """

    def __init__(self, settings: Optional[QSettings] = None):
        """
        Args:
            settings: QSettings store to use; defaults to the application's own.
        """
        self._settings = settings if settings is not None else QSettings(config.APP_NAME, "Settings")
        self._default_config = self._load_from_config_py()
        self._runtime_config: Dict[str, Any] = {}
        self._observers: List[Callable[[str, Any], None]] = []

        logger.info(
            f"ConfigManager initialized with organization: '{self._settings.organizationName()}', "
            f"application: '{self._settings.applicationName()}'"
        )

    def _load_from_config_py(self) -> Dict[str, Any]:
        """Load default configuration from config.py module."""
        return {
            "app": {
                "name": getattr(config, "APP_NAME", "Nougat Page Selector"),
                "version": getattr(config, "APP_VERSION", "0.1.0"),
            },
            "ui": dict(getattr(config, "UI_SETTINGS", {})),
            "submission": {
                "endpoint": getattr(config, "NOUGAT_ENDPOINT", "http://127.0.0.1:8503/predict/"),
                "timeout": getattr(config, "SUBMISSION_TIMEOUT", None),
            },
            "render": {
                "scale": getattr(config, "RENDER_SCALE", 1.5),
            },
            "logging": {
                "level": getattr(config, "LOG_LEVEL", "INFO"),
            },
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value with hierarchical precedence.

        Args:
            key: Dot-separated configuration key (e.g., 'submission.endpoint')
            default: Fallback value if key not found
        """
        if key in self._runtime_config:
            return self._runtime_config[key]

        if self._settings.contains(key):
            return self._settings.value(key)

        default_value = self._get_nested_value(self._default_config, key)
        if default_value is not None:
            return default_value

        return default

    def get_float(self, key: str, default: Optional[float] = None) -> Optional[float]:
        """Like get(), but coerces the value to float. QSettings hands back strings."""
        value = self.get(key, default)
        if value is None or value == "":
            return default
        try:
            return float(value)
        except (TypeError, ValueError):
            logger.warning(f"Config value for '{key}' is not a number: {value!r}")
            return default

    def set(self, key: str, value: Any, persist: bool = False) -> None:
        """
        Set configuration value with optional persistence.

        Args:
            key: Configuration key to set
            value: Value to set
            persist: If True, save to QSettings; if False, store in runtime only
        """
        if persist:
            self._settings.setValue(key, value)
            logger.debug(f"Persisted config: {key} = {value}")
        else:
            self._runtime_config[key] = value
            logger.debug(f"Runtime config: {key} = {value}")

        self._notify_observers(key, value)

    def _get_nested_value(self, config_dict: Dict[str, Any], key: str) -> Any:
        current = config_dict
        for k in key.split("."):
            if isinstance(current, dict) and k in current:
                current = current[k]
            else:
                return None
        return current

    def subscribe(self, callback: Callable[[str, Any], None]) -> None:
        """Subscribe to configuration changes; callback receives (key, value)."""
        self._observers.append(callback)

    def unsubscribe(self, callback: Callable[[str, Any], None]) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify_observers(self, key: str, value: Any) -> None:
        for observer in self._observers:
            try:
                observer(key, value)
            except Exception as e:
                logger.error(f"Error notifying observer {observer.__name__}: {e}")

    def reset_to_defaults(self) -> None:
        """Reset all configuration to default values."""
        self._runtime_config.clear()
        self._settings.clear()
        logger.info("Configuration reset to defaults")

        for observer in self._observers:
            try:
                observer("__reset__", None)
            except Exception as e:
                logger.error(f"Error notifying observer of reset: {e}")

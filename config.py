"""
Configuration management for HASS Alert CLI.

Updates: v0.2.0 - 2026-10-02 - Settings for alert config path, webhook timeout and disable codes.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class Config:
    """Load configuration with Env → .env → config.json → defaults precedence."""

    _CONFIG_KEY_MAPPING: Dict[str, tuple[str, ...]] = {
        "HASS_ALERT_CONFIG_PATH": ("HASS_ALERT_CONFIG_PATH", "alert_config_path"),
        "HASS_LOG_LEVEL": ("HASS_LOG_LEVEL", "LOG_LEVEL", "log_level"),
        "HASS_WEBHOOK_TIMEOUT": ("HASS_WEBHOOK_TIMEOUT", "webhook_timeout"),
        "HASS_REVEAL_CODE_ON_MISMATCH": ("HASS_REVEAL_CODE_ON_MISMATCH", "reveal_code_on_mismatch"),
        "HASS_DISABLE_CODE_LENGTH": ("HASS_DISABLE_CODE_LENGTH", "disable_code_length"),
        "HASS_CHANNEL_ID": ("HASS_CHANNEL_ID", "channel_id"),
    }

    _DEFAULTS: Dict[str, Any] = {
        "HASS_ALERT_CONFIG_PATH": "config.yaml",
        "HASS_LOG_LEVEL": "INFO",
        "HASS_WEBHOOK_TIMEOUT": 10.0,
        "HASS_REVEAL_CODE_ON_MISMATCH": True,
        "HASS_DISABLE_CODE_LENGTH": 11,
        "HASS_CHANNEL_ID": "general",
    }

    def __init__(self) -> None:
        load_dotenv()
        self.config_file: Path = Path(__file__).parent / "config.json"
        self._config_data: Dict[str, Any] = self._load_config_file()

        alert_config_value = self._get_setting("HASS_ALERT_CONFIG_PATH")
        log_level_value = self._get_setting("HASS_LOG_LEVEL")
        timeout_value = self._get_setting("HASS_WEBHOOK_TIMEOUT")
        reveal_value = self._get_setting("HASS_REVEAL_CODE_ON_MISMATCH")
        code_length_value = self._get_setting("HASS_DISABLE_CODE_LENGTH")
        channel_value = self._get_setting("HASS_CHANNEL_ID")

        self.alert_config_path: Path = Path(str(alert_config_value or self._DEFAULTS["HASS_ALERT_CONFIG_PATH"]))
        self.log_level: str = str(log_level_value or self._DEFAULTS["HASS_LOG_LEVEL"]).upper()
        self.webhook_timeout: float = self._to_float(timeout_value, self._DEFAULTS["HASS_WEBHOOK_TIMEOUT"])
        self.reveal_code_on_mismatch: bool = self._to_bool(reveal_value)
        self.disable_code_length: int = self._to_int(code_length_value, self._DEFAULTS["HASS_DISABLE_CODE_LENGTH"])
        self.channel_id: str = str(channel_value or self._DEFAULTS["HASS_CHANNEL_ID"]).strip()

    def _load_config_file(self) -> Dict[str, Any]:
        """Load configuration values from config.json if available."""
        if not self.config_file.exists():
            return {}
        try:
            with self.config_file.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
                if isinstance(data, dict):
                    return data
                logger.warning("config.json must contain a JSON object; ignoring content.")
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Failed to read config.json: %s", exc)
        return {}

    def _get_setting(self, env_key: str) -> Any:
        """Resolve a configuration value using the configured precedence."""
        env_value = os.getenv(env_key)
        if env_value not in (None, ""):
            return env_value

        keys_to_check = self._CONFIG_KEY_MAPPING.get(env_key, (env_key,))
        for key in keys_to_check:
            config_value = self._config_data.get(key)
            if config_value not in (None, ""):
                return config_value

        return self._DEFAULTS.get(env_key)

    @staticmethod
    def _to_bool(value: Any) -> bool:
        """Convert a configuration value to boolean."""
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def _to_int(value: Any, default: int) -> int:
        """Convert a configuration value to integer with fallback."""
        try:
            if value is None or value == "":
                return default
            return int(value)
        except (TypeError, ValueError):
            return default

    @staticmethod
    def _to_float(value: Any, default: float) -> float:
        """Convert a configuration value to float with fallback."""

        try:
            if value is None or value == "":
                return default
            return float(value)
        except (TypeError, ValueError):
            return default

    def get_alert_config_path(self) -> Path:
        """Return path to the alertable users YAML file."""
        return self.alert_config_path

    def get_webhook_timeout(self) -> float:
        """Return webhook request timeout in seconds."""

        return max(0.5, self.webhook_timeout)

    def get_disable_code_length(self) -> int:
        """Return the configured disable code length; the generator enforces the minimum."""
        return self.disable_code_length

    def reveals_code_on_mismatch(self) -> bool:
        """Return True when a wrong /stop code reply should include the correct code."""
        return self.reveal_code_on_mismatch

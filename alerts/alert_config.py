"""
Alertable user configuration loaded from the bot YAML file.

Updates: v0.2.0 - 2026-10-02 - Load alertable users and command metadata from YAML.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Mapping, Tuple

import yaml

logger = logging.getLogger(__name__)

DEFAULT_COMMAND_NAME = "alert"
DEFAULT_DESCRIPTION = "Trigger a Home Assistant alert for someone"

_REQUIRED_USER_KEYS: Tuple[str, ...] = (
    "userId",
    "friendlyName",
    "alertOnWebhook",
    "alertOffWebhook",
)


class AlertConfigError(ValueError):
    """Raised when the alert configuration file is missing or malformed."""


@dataclass(frozen=True)
class AlertableUserConfig:
    """Static alert settings for a single chat user."""

    user_id: str
    friendly_name: str
    enabled: bool
    title: str
    message: str
    on_webhook: str
    off_webhook: str
    allowed_roles: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "AlertableUserConfig":
        """Build a user record from the camelCase YAML representation."""
        missing = [key for key in _REQUIRED_USER_KEYS if payload.get(key) in (None, "")]
        if missing:
            raise AlertConfigError(f"Alertable user entry missing keys: {', '.join(missing)}")

        roles = payload.get("allowedRoles") or []
        if isinstance(roles, (str, int)):
            roles = [roles]
        if not isinstance(roles, (list, tuple, set)):
            raise AlertConfigError(
                f"allowedRoles for user {payload['userId']} must be a list of role ids"
            )

        return cls(
            user_id=str(payload["userId"]).strip(),
            friendly_name=str(payload["friendlyName"]).strip(),
            enabled=_to_bool(payload.get("enabled", True)),
            title=str(payload.get("title") or ""),
            message=str(payload.get("message") or ""),
            on_webhook=str(payload["alertOnWebhook"]).strip(),
            off_webhook=str(payload["alertOffWebhook"]).strip(),
            allowed_roles=frozenset(str(role).strip() for role in roles if str(role).strip()),
        )

    def webhook_payload(self) -> Dict[str, str]:
        """Return the JSON body sent with the alert-on webhook."""
        return {"title": self.title, "message": self.message}


@dataclass(frozen=True)
class AlertBotConfig:
    """Top-level bot configuration: command metadata plus alertable users."""

    command_name: str = DEFAULT_COMMAND_NAME
    description: str = DEFAULT_DESCRIPTION
    alertable_users: Tuple[AlertableUserConfig, ...] = ()

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "AlertBotConfig":
        users_payload = payload.get("alertableUsers") or []
        if not isinstance(users_payload, list):
            raise AlertConfigError("'alertableUsers' must be a list of user entries.")

        users: List[AlertableUserConfig] = []
        seen: set[str] = set()
        for entry in users_payload:
            if not isinstance(entry, Mapping):
                raise AlertConfigError("Each alertable user entry must be a mapping.")
            user = AlertableUserConfig.from_mapping(entry)
            if user.user_id in seen:
                raise AlertConfigError(f"Duplicate userId in alert configuration: {user.user_id}")
            seen.add(user.user_id)
            users.append(user)

        command_name = str(payload.get("commandName") or DEFAULT_COMMAND_NAME).strip().lstrip("/")
        return cls(
            command_name=command_name or DEFAULT_COMMAND_NAME,
            description=str(payload.get("description") or DEFAULT_DESCRIPTION),
            alertable_users=tuple(users),
        )


def load_alert_config(path: Path) -> AlertBotConfig:
    """Read and validate the alert bot YAML configuration."""
    path = Path(path)
    if not path.exists():
        raise AlertConfigError(f"Alert configuration not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle) or {}
    except (yaml.YAMLError, OSError) as exc:
        raise AlertConfigError(f"Failed to read alert configuration {path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise AlertConfigError("Alert configuration must contain a mapping at the top level.")

    config = AlertBotConfig.from_mapping(payload)
    logger.info(
        "Loaded alert configuration from %s (%d users, command=/%s)",
        path,
        len(config.alertable_users),
        config.command_name,
    )
    return config


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)

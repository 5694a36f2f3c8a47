"""Shared fixtures: sample alertable users and a scripted webhook caller."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

from alerts import AlertableUserConfig, AlertLifecycleManager, AlertRegistry
from api.webhook_client import WebhookResult


SAMPLE_CONFIG_YAML = """\
commandName: alert
description: Wake someone up
alertableUsers:
  - friendlyName: Alice
    userId: alice
    enabled: true
    title: Wake up
    message: Someone needs you
    alertOnWebhook: http://hass.local/api/webhook/alice-on
    alertOffWebhook: http://hass.local/api/webhook/alice-off
    allowedRoles: ["admin"]
  - friendlyName: Bob
    userId: bob
    enabled: true
    title: Hey Bob
    message: Check the chat
    alertOnWebhook: http://hass.local/api/webhook/bob-on
    alertOffWebhook: http://hass.local/api/webhook/bob-off
    allowedRoles: ["admin", "family"]
  - friendlyName: Carol
    userId: carol
    enabled: false
    title: Carol
    message: Paused
    alertOnWebhook: http://hass.local/api/webhook/carol-on
    alertOffWebhook: http://hass.local/api/webhook/carol-off
    allowedRoles: ["admin"]
"""


class FakeWebhookCaller:
    """Record webhook calls and answer with a configurable outcome."""

    def __init__(self, success: bool = True):
        self.success = success
        self.calls: List[Tuple[str, Optional[Dict[str, Any]]]] = []
        self.closed = False

    def call(self, url: str, payload: Optional[Dict[str, Any]] = None) -> WebhookResult:
        self.calls.append((url, payload))
        if self.success:
            return WebhookResult(success=True, status_code=200)
        return WebhookResult(success=False, status_code=500, error="HTTP 500")

    def close(self) -> None:
        self.closed = True


def make_user(user_id: str, *, enabled: bool = True, roles: Tuple[str, ...] = ("admin",)) -> AlertableUserConfig:
    return AlertableUserConfig(
        user_id=user_id,
        friendly_name=user_id.title(),
        enabled=enabled,
        title=f"Alert for {user_id}",
        message="Someone needs you",
        on_webhook=f"http://hass.local/api/webhook/{user_id}-on",
        off_webhook=f"http://hass.local/api/webhook/{user_id}-off",
        allowed_roles=frozenset(roles),
    )


@pytest.fixture
def users() -> List[AlertableUserConfig]:
    return [
        make_user("alice"),
        make_user("bob", roles=("admin", "family")),
        make_user("carol", enabled=False),
    ]


@pytest.fixture
def registry(users) -> AlertRegistry:
    return AlertRegistry(users)


@pytest.fixture
def webhook() -> FakeWebhookCaller:
    return FakeWebhookCaller()


@pytest.fixture
def manager(registry, webhook) -> AlertLifecycleManager:
    return AlertLifecycleManager(registry, webhook)


@pytest.fixture
def alert_config_file(tmp_path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(SAMPLE_CONFIG_YAML, encoding="utf-8")
    return path

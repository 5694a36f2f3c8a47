"""Tests for loading the alertable users YAML configuration."""

from __future__ import annotations

import pytest

from alerts import AlertConfigError, AlertableUserConfig, load_alert_config


def test_load_sample_config(alert_config_file) -> None:
    config = load_alert_config(alert_config_file)

    assert config.command_name == "alert"
    assert config.description == "Wake someone up"
    assert [user.user_id for user in config.alertable_users] == ["alice", "bob", "carol"]

    alice = config.alertable_users[0]
    assert alice.friendly_name == "Alice"
    assert alice.enabled is True
    assert alice.allowed_roles == frozenset({"admin"})
    assert alice.on_webhook.endswith("alice-on")
    assert alice.webhook_payload() == {"title": "Wake up", "message": "Someone needs you"}
    assert config.alertable_users[2].enabled is False


def test_numeric_ids_and_roles_are_normalised(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "alertableUsers:\n"
        "  - friendlyName: Dan\n"
        "    userId: 123456789\n"
        "    alertOnWebhook: http://hass/on\n"
        "    alertOffWebhook: http://hass/off\n"
        "    allowedRoles: [987654321]\n",
        encoding="utf-8",
    )

    config = load_alert_config(path)

    assert config.command_name == "alert"
    user = config.alertable_users[0]
    assert user.user_id == "123456789"
    assert user.allowed_roles == frozenset({"987654321"})
    assert user.enabled is True


def test_missing_file_raises(tmp_path) -> None:
    with pytest.raises(AlertConfigError):
        load_alert_config(tmp_path / "missing.yaml")


def test_non_mapping_payload_raises(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(AlertConfigError):
        load_alert_config(path)


def test_duplicate_user_ids_rejected(tmp_path) -> None:
    entry = (
        "  - friendlyName: Eve\n"
        "    userId: eve\n"
        "    alertOnWebhook: http://hass/on\n"
        "    alertOffWebhook: http://hass/off\n"
    )
    path = tmp_path / "config.yaml"
    path.write_text("alertableUsers:\n" + entry + entry, encoding="utf-8")

    with pytest.raises(AlertConfigError, match="Duplicate"):
        load_alert_config(path)


def test_missing_required_keys_reported() -> None:
    with pytest.raises(AlertConfigError) as excinfo:
        AlertableUserConfig.from_mapping({"userId": "x", "friendlyName": "X"})
    assert "alertOnWebhook" in str(excinfo.value)
    assert "alertOffWebhook" in str(excinfo.value)


def test_command_name_strips_leading_slash(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("commandName: /siren\nalertableUsers: []\n", encoding="utf-8")

    config = load_alert_config(path)

    assert config.command_name == "siren"
    assert config.alertable_users == ()

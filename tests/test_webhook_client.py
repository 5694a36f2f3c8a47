"""Behaviour tests for HassWebhookClient."""

from __future__ import annotations

from unittest import mock

import requests

from api.webhook_client import USER_AGENT, HassWebhookClient, WebhookResult


class _DummyResponse:
    def __init__(self, status_code: int):
        self.status_code = status_code

    def json(self):  # pragma: no cover - the client must not read bodies
        raise AssertionError("response bodies are not inspected")


def _build_client() -> HassWebhookClient:
    return HassWebhookClient(timeout=3.0)


def test_session_sets_user_agent() -> None:
    client = _build_client()
    assert client.session.headers["User-Agent"] == USER_AGENT


def test_call_with_payload_posts_json() -> None:
    client = _build_client()
    client.session.post = mock.Mock(return_value=_DummyResponse(200))

    result = client.call("http://hass/on", {"title": "t", "message": "m"})

    assert result == WebhookResult(success=True, status_code=200)
    client.session.post.assert_called_once_with(
        "http://hass/on", json={"title": "t", "message": "m"}, timeout=3.0
    )


def test_call_without_payload_sends_empty_body() -> None:
    client = _build_client()
    client.session.post = mock.Mock(return_value=_DummyResponse(204))

    result = client.call("http://hass/off")

    assert result.success is True
    client.session.post.assert_called_once_with("http://hass/off", timeout=3.0)


def test_non_2xx_is_failure() -> None:
    client = _build_client()
    client.session.post = mock.Mock(return_value=_DummyResponse(404))

    result = client.call("http://hass/on", {"title": "t", "message": "m"})

    assert result.success is False
    assert result.status_code == 404
    assert str(result) == "HTTP 404"


def test_transport_error_is_failure() -> None:
    client = _build_client()
    client.session.post = mock.Mock(side_effect=requests.exceptions.ConnectionError("refused"))

    result = client.call("http://hass/on")

    assert result.success is False
    assert result.status_code is None
    assert "Request failed" in str(result)


def test_timeout_is_failure() -> None:
    client = _build_client()
    client.session.post = mock.Mock(side_effect=requests.exceptions.Timeout("slow"))

    assert client.call("http://hass/on").success is False


def test_close_releases_session() -> None:
    client = HassWebhookClient()
    client.session = mock.Mock()

    client.close()

    client.session.close.assert_called_once_with()

"""
Home Assistant webhook client
Thin requests wrapper posting alert on/off triggers to the hub

Updates: v0.2.0 - 2026-10-02 - Replaced exchange client with webhook trigger client.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
USER_AGENT = "HASS Alert CLI/0.2.0"


@dataclass(slots=True)
class WebhookResult:
    """Outcome of a single webhook POST."""

    success: bool
    status_code: Optional[int] = None
    error: Optional[str] = None

    def __str__(self) -> str:
        if self.success:
            return f"HTTP {self.status_code}"
        if self.status_code is not None:
            return f"HTTP {self.status_code}"
        return self.error or "unknown error"


class HassWebhookClient:
    """POST to Home Assistant webhook URLs and report success or failure.

    Any 2xx response counts as accepted; other status codes and transport
    errors are reported as failures. Response bodies are never inspected and
    no retries are attempted.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': USER_AGENT
        })

    def call(self, url: str, payload: Optional[Dict[str, Any]] = None) -> WebhookResult:
        """POST ``payload`` as JSON (or an empty body) to ``url``."""
        try:
            if payload is None:
                response = self.session.post(url, timeout=self.timeout)
            else:
                response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error("Webhook request to %s failed: %s", url, e)
            return WebhookResult(success=False, error=f"Request failed: {str(e)}")

        status_code = response.status_code
        if 200 <= status_code < 300:
            logger.debug("Webhook %s accepted with HTTP %s", url, status_code)
            return WebhookResult(success=True, status_code=status_code)

        logger.error("Webhook %s returned HTTP %s", url, status_code)
        return WebhookResult(success=False, status_code=status_code, error=f"HTTP {status_code}")

    def close(self) -> None:
        self.session.close()

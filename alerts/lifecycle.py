"""
Alert lifecycle manager enforcing the enable/disable protocol.

Updates: v0.2.0 - 2026-10-02 - Enable/disable state machine with one-time disable codes.
Updates: v0.2.1 - 2026-10-09 - Optional suppression of the correct code on mismatch.
"""

from __future__ import annotations

import logging
import secrets
import string
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Protocol

from alerts.registry import AlertRegistry

logger = logging.getLogger(__name__)

DISABLE_CODE_ALPHABET = string.digits + string.ascii_lowercase
DEFAULT_DISABLE_CODE_LENGTH = 11
MIN_DISABLE_CODE_LENGTH = 8


class WebhookOutcome(Protocol):
    success: bool


class WebhookCaller(Protocol):
    """Anything able to POST to a webhook and report a ``success`` flag."""

    def call(self, url: str, payload: Optional[Dict[str, Any]] = None) -> WebhookOutcome:
        ...


class RejectionReason(str, Enum):
    """Why an enable/disable request was refused."""

    SELF_TARGET = "self_target"
    USER_NOT_CONFIGURED = "user_not_configured"
    USER_ALERTS_DISABLED = "user_alerts_disabled"
    PERMISSION_DENIED = "permission_denied"
    ALREADY_ACTIVE = "already_active"
    NOT_ACTIVE = "not_active"
    CODE_MISMATCH = "code_mismatch"
    WEBHOOK_CALL_FAILED = "webhook_call_failed"


@dataclass(frozen=True)
class EnableResult:
    ok: bool
    target_id: str
    disable_code: str = ""
    reason: Optional[RejectionReason] = None
    message: str = ""

    @classmethod
    def rejected(cls, target_id: str, reason: RejectionReason, message: str) -> "EnableResult":
        return cls(ok=False, target_id=target_id, reason=reason, message=message)


@dataclass(frozen=True)
class DisableResult:
    ok: bool
    user_id: str
    reason: Optional[RejectionReason] = None
    message: str = ""
    correct_code: str = ""

    @classmethod
    def rejected(
        cls,
        user_id: str,
        reason: RejectionReason,
        message: str,
        correct_code: str = "",
    ) -> "DisableResult":
        return cls(ok=False, user_id=user_id, reason=reason, message=message, correct_code=correct_code)


def generate_disable_code(length: int = DEFAULT_DISABLE_CODE_LENGTH) -> str:
    """Return a random lowercase base-36 code from a CSPRNG."""
    length = max(MIN_DISABLE_CODE_LENGTH, int(length))
    return "".join(secrets.choice(DISABLE_CODE_ALPHABET) for _ in range(length))


def _mention(user_id: str) -> str:
    return f"<@{user_id}>"


class AlertLifecycleManager:
    """Drive per-user alerts between the Inactive and Active states.

    Every public call returns a result object; rejections are never raised.
    State only changes after the hub accepted the webhook call, so a failed
    attempt leaves the registry exactly as it was.
    """

    def __init__(
        self,
        registry: AlertRegistry,
        webhook_caller: WebhookCaller,
        *,
        reveal_code_on_mismatch: bool = True,
        code_length: int = DEFAULT_DISABLE_CODE_LENGTH,
    ):
        self._registry = registry
        self._webhooks = webhook_caller
        self._reveal_code_on_mismatch = reveal_code_on_mismatch
        self._code_length = int(code_length)

    @property
    def registry(self) -> AlertRegistry:
        return self._registry

    def is_active(self, user_id: str) -> bool:
        entry = self._registry.find(user_id)
        return bool(entry and entry[1].active)

    def enable(self, actor_id: str, target_id: str, actor_roles: Iterable[str]) -> EnableResult:
        """Turn on the target's alert on behalf of ``actor_id``."""
        if actor_id == target_id:
            logger.warning("User %s tried to enable alert for themselves", actor_id)
            return EnableResult.rejected(
                target_id, RejectionReason.SELF_TARGET, "You cannot enable an alert for yourself"
            )

        entry = self._registry.find(target_id)
        if entry is None:
            logger.warning("%s tried to alert unconfigured user %s", actor_id, target_id)
            return EnableResult.rejected(
                target_id,
                RejectionReason.USER_NOT_CONFIGURED,
                f"User {_mention(target_id)} is not configured for alerts",
            )

        user, state = entry
        if not user.enabled:
            logger.warning("%s tried to alert %s whose alerts are disabled", actor_id, target_id)
            return EnableResult.rejected(
                target_id,
                RejectionReason.USER_ALERTS_DISABLED,
                f"Alerts configuration is disabled for user {_mention(target_id)}",
            )

        if user.allowed_roles.isdisjoint(str(role) for role in actor_roles):
            logger.warning("User %s does not have permission to enable alert for user %s", actor_id, target_id)
            return EnableResult.rejected(
                target_id,
                RejectionReason.PERMISSION_DENIED,
                "You do not have the correct role to enable this alert",
            )

        if state.active:
            logger.info("Alert already active for user %s; ignoring request from %s", target_id, actor_id)
            return EnableResult.rejected(
                target_id,
                RejectionReason.ALREADY_ACTIVE,
                f"Alert is already enabled for user {_mention(target_id)}",
            )

        payload = user.webhook_payload()
        logger.info("Calling enable alert webhook for user %s with payload %s", target_id, payload)
        result = self._webhooks.call(user.on_webhook, payload)
        if not result.success:
            logger.error("Enable webhook failed for user %s: %s", target_id, result)
            return EnableResult.rejected(
                target_id,
                RejectionReason.WEBHOOK_CALL_FAILED,
                f"Enable webhook call failed for user {_mention(target_id)}",
            )

        disable_code = generate_disable_code(self._code_length)
        self._registry.set_active(target_id, disable_code)
        logger.info("Enabled alert for user %s (requested by %s)", target_id, actor_id)
        logger.debug("Disable code for user %s is %s", target_id, disable_code)
        return EnableResult(ok=True, target_id=target_id, disable_code=disable_code)

    def disable(self, actor_id: str, code: str) -> DisableResult:
        """Turn off the actor's own alert when ``code`` matches."""
        entry = self._registry.find(actor_id)
        if entry is None:
            return DisableResult.rejected(
                actor_id,
                RejectionReason.USER_NOT_CONFIGURED,
                f"User {_mention(actor_id)} is not configured for alerts",
            )

        user, state = entry
        if not user.enabled:
            return DisableResult.rejected(
                actor_id,
                RejectionReason.USER_ALERTS_DISABLED,
                f"Alerts configuration is disabled for user {_mention(actor_id)}",
            )

        if not state.active:
            return DisableResult.rejected(
                actor_id,
                RejectionReason.NOT_ACTIVE,
                f"No active alert for user {_mention(actor_id)}",
            )

        if code != state.disable_code:
            logger.info("Invalid disable code supplied for user %s", actor_id)
            message = f"Invalid disable code `{code}` for user {_mention(actor_id)}"
            if self._reveal_code_on_mismatch:
                message += f"; correct is `{state.disable_code}`"
            return DisableResult.rejected(
                actor_id,
                RejectionReason.CODE_MISMATCH,
                message,
                correct_code=state.disable_code,
            )

        logger.info("Calling disable alert webhook for user %s", actor_id)
        result = self._webhooks.call(user.off_webhook, None)
        if not result.success:
            logger.error("Disable webhook failed for user %s: %s", actor_id, result)
            return DisableResult.rejected(
                actor_id,
                RejectionReason.WEBHOOK_CALL_FAILED,
                f"Disable webhook call failed for user {_mention(actor_id)}",
            )

        self._registry.set_inactive(actor_id)
        logger.info("Disabled alert for user %s", actor_id)
        return DisableResult(ok=True, user_id=actor_id)

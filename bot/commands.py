"""
Chat command handlers wiring /alert and /stop to the alert lifecycle manager.

Updates: v0.2.0 - 2026-10-02 - Alert/stop handlers with message tracking and per-user serialisation.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Dict, Iterable, Optional

from alerts import AlertLifecycleManager
from bot.notifier import COLOR_CLEARED, COLOR_SUCCESS, ConsoleNotifier, Embed, PostedMessage, build_error_embed
from utils.helpers import format_mention, mask_secret

logger = logging.getLogger(__name__)

STOP_COMMAND_NAME = "stop"


class AlertCommandHandler:
    """Translate chat commands into lifecycle calls and chat replies.

    The handler owns the ``(message_id, channel_id)`` handle of each alert
    message so the lifecycle manager stays free of chat concerns, and it
    serialises operations per target user.
    """

    def __init__(
        self,
        manager: AlertLifecycleManager,
        notifier: ConsoleNotifier,
        stop_command: str = STOP_COMMAND_NAME,
    ):
        self.manager = manager
        self.notifier = notifier
        self.stop_command = stop_command
        self._alert_messages: Dict[str, Optional[PostedMessage]] = {
            user_id: None for user_id in manager.registry
        }
        self._user_locks: Dict[str, Lock] = {}
        self._locks_guard = Lock()

    def _lock_for(self, user_id: str) -> Lock:
        with self._locks_guard:
            lock = self._user_locks.get(user_id)
            if lock is None:
                lock = self._user_locks[user_id] = Lock()
            return lock

    def alert_message_for(self, user_id: str) -> Optional[PostedMessage]:
        return self._alert_messages.get(user_id)

    def handle_alert(
        self,
        actor_id: str,
        target_id: str,
        actor_roles: Optional[Iterable[str]],
        channel_id: str,
    ) -> bool:
        """Process ``/<alert> target``; returns True when the alert was enabled."""
        logger.info("%s is trying to enable alert for user %s", actor_id, target_id)
        try:
            if actor_roles is None and actor_id != target_id:
                logger.error("Unable to get roles for user %s", actor_id)
                self.notifier.post(
                    channel_id,
                    build_error_embed("Error enabling alert", "Unable to get your roles"),
                    ephemeral=True,
                )
                return False

            with self._lock_for(target_id):
                result = self.manager.enable(actor_id, target_id, actor_roles or ())
                if not result.ok:
                    logger.error("Error enabling alert for user %s: %s", target_id, result.message)
                    self.notifier.post(
                        channel_id,
                        build_error_embed("Error enabling alert", result.message),
                        ephemeral=True,
                    )
                    return False

                mention = format_mention(target_id)
                embed = Embed(
                    title="Alert enabled",
                    description=(
                        f"You have enabled an alert for {mention}.\n"
                        f"To disable it, {mention} must use command `/{self.stop_command}` "
                        f"with the following code: `{result.disable_code}`"
                    ),
                    color=COLOR_SUCCESS,
                )
                self._alert_messages[target_id] = self.notifier.post(channel_id, embed, content=mention)
            return True
        except Exception as exc:
            logger.exception("Error enabling alert called by user %s: %s", actor_id, exc)
            self.notifier.post(
                channel_id,
                build_error_embed("Unknown error while enabling alert", str(exc)),
                ephemeral=True,
            )
            return False

    def handle_stop(self, actor_id: str, code: str, channel_id: str) -> bool:
        """Process ``/stop code``; returns True when the alert was disabled."""
        logger.info("%s is trying to disable their alert with code %s", actor_id, mask_secret(code))
        try:
            with self._lock_for(actor_id):
                result = self.manager.disable(actor_id, code)
                if not result.ok:
                    logger.error("Error disabling alert for user %s: %s", actor_id, result.reason)
                    self.notifier.post(
                        channel_id,
                        build_error_embed("Error disabling alert", result.message),
                        ephemeral=True,
                    )
                    return False

                self.notifier.post(
                    channel_id,
                    Embed(title="Alert disabled", description="You have disabled your alert.", color=COLOR_SUCCESS),
                )
                alert_message = self._alert_messages.get(actor_id)
                self._alert_messages[actor_id] = None

            self._clear_alert_message(actor_id, alert_message)
            return True
        except Exception as exc:
            logger.exception("Error disabling alert called by user %s: %s", actor_id, exc)
            self.notifier.post(
                channel_id,
                build_error_embed("Unknown error while disabling alert", str(exc)),
                ephemeral=True,
            )
            return False

    def _clear_alert_message(self, user_id: str, alert_message: Optional[PostedMessage]) -> None:
        if alert_message is None:
            logger.warning("No alert message found for user %s", user_id)
            return

        embed = Embed(
            title="Alert disabled",
            description=f"{format_mention(user_id)} has disabled their alert.",
            color=COLOR_CLEARED,
        )
        # The alert is already off and the reply posted; a failed edit must not surface as an error
        try:
            self.notifier.edit(alert_message.channel_id, alert_message.message_id, embed, content="")
        except Exception as exc:
            logger.warning("Unable to update alert message for user %s: %s", user_id, exc)

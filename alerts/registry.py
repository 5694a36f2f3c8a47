"""
In-memory registry of alertable users and their activation state.

Updates: v0.2.0 - 2026-10-02 - Per-user alert state table backing the lifecycle manager.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from alerts.alert_config import AlertableUserConfig


class UserNotFoundError(KeyError):
    """Raised when a user id is not present in the registry."""


@dataclass
class AlertState:
    """Mutable activation state; ``disable_code`` is set only while active."""

    active: bool = False
    disable_code: str = ""
    activated_at: Optional[float] = None


class AlertRegistry:
    """Fixed-size table mapping user ids to (config, state) pairs.

    The registry is pure storage: it applies point mutations and leaves every
    business rule to :class:`alerts.lifecycle.AlertLifecycleManager`. It is not
    thread-safe; callers serialise operations per user.
    """

    def __init__(self, users: Iterable[AlertableUserConfig]):
        self._entries: Dict[str, Tuple[AlertableUserConfig, AlertState]] = {}
        for user in users:
            if user.user_id in self._entries:
                raise ValueError(f"Duplicate user id in alert registry: {user.user_id}")
            self._entries[user.user_id] = (user, AlertState())

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, user_id: str) -> Tuple[AlertableUserConfig, AlertState]:
        try:
            return self._entries[user_id]
        except KeyError:
            raise UserNotFoundError(user_id) from None

    def find(self, user_id: str) -> Optional[Tuple[AlertableUserConfig, AlertState]]:
        return self._entries.get(user_id)

    def users(self) -> List[AlertableUserConfig]:
        return [config for config, _ in self._entries.values()]

    def set_active(self, user_id: str, disable_code: str) -> None:
        """Mark the user's alert active with the given disable code."""
        if not disable_code:
            raise ValueError("An active alert requires a non-empty disable code")
        _, state = self.get(user_id)
        state.active = True
        state.disable_code = disable_code
        state.activated_at = time.time()

    def set_inactive(self, user_id: str) -> None:
        """Reset the user's alert state in place."""
        _, state = self.get(user_id)
        state.active = False
        state.disable_code = ""
        state.activated_at = None

    def snapshot(self) -> List[Dict[str, object]]:
        """Return a display-friendly copy of every user's state."""
        return [
            {
                "user_id": config.user_id,
                "friendly_name": config.friendly_name,
                "enabled": config.enabled,
                "active": state.active,
                "activated_at": state.activated_at,
            }
            for config, state in self._entries.values()
        ]

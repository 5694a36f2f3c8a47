"""
Alert subsystem package exposing the registry and lifecycle manager.

Updates: v0.2.0 - 2026-10-02 - Per-user Home Assistant alert lifecycle.
"""

from alerts.alert_config import AlertBotConfig, AlertConfigError, AlertableUserConfig, load_alert_config
from alerts.lifecycle import AlertLifecycleManager, DisableResult, EnableResult, RejectionReason
from alerts.registry import AlertRegistry, AlertState, UserNotFoundError

__all__ = [
    "AlertBotConfig",
    "AlertConfigError",
    "AlertLifecycleManager",
    "AlertRegistry",
    "AlertState",
    "AlertableUserConfig",
    "DisableResult",
    "EnableResult",
    "RejectionReason",
    "UserNotFoundError",
    "load_alert_config",
]

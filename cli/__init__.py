"""
CLI command registration helpers for HASS Alert CLI.

Each submodule exposes a ``register`` function that attaches a group of
related commands to the root Click group defined in ``hass_alert_cli.py``.
"""

__all__ = ["alerts"]

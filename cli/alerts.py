"""
Alert relay commands for HASS Alert CLI.

Registers the user listing and interactive chat session commands on the
root Click group.

Updates: v0.2.0 - 2026-10-02 - Users table and chat session commands.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import click
from rich.console import Console
from rich.table import Table

from alerts import AlertBotConfig, AlertConfigError, AlertLifecycleManager, AlertRegistry, load_alert_config
from api.webhook_client import HassWebhookClient
from bot.commands import AlertCommandHandler
from bot.notifier import ConsoleNotifier
from bot.session import ChatSession
from config import Config
from utils.helpers import format_roles, parse_roles

logger = logging.getLogger(__name__)


@dataclass
class AlertServices:
    """Objects making up one running relay, created once per process."""

    bot_config: AlertBotConfig
    registry: AlertRegistry
    manager: AlertLifecycleManager
    notifier: ConsoleNotifier
    handler: AlertCommandHandler
    webhook_client: HassWebhookClient

    def close(self) -> None:
        """Release the webhook client's HTTP session."""
        self.webhook_client.close()


def build_services(
    config_obj: Config,
    console: Console,
    webhook_client: Optional[HassWebhookClient] = None,
) -> AlertServices:
    """Load the alert config and wire registry, manager and chat handler."""
    bot_config = load_alert_config(config_obj.get_alert_config_path())
    registry = AlertRegistry(bot_config.alertable_users)
    webhook_client = webhook_client or HassWebhookClient(timeout=config_obj.get_webhook_timeout())
    manager = AlertLifecycleManager(
        registry,
        webhook_client,
        reveal_code_on_mismatch=config_obj.reveals_code_on_mismatch(),
        code_length=config_obj.get_disable_code_length(),
    )
    notifier = ConsoleNotifier(console)
    handler = AlertCommandHandler(manager, notifier)
    return AlertServices(
        bot_config=bot_config,
        registry=registry,
        manager=manager,
        notifier=notifier,
        handler=handler,
        webhook_client=webhook_client,
    )


def _load_services_or_exit(
    console: Console,
    services_factory: Callable[[], AlertServices],
) -> AlertServices:
    try:
        return services_factory()
    except AlertConfigError as exc:
        logger.error("Alert configuration error: %s", exc)
        console.print(f"[red]❌ {exc}[/red]")
        raise SystemExit(1) from exc


def register(
    root: click.Group,
    *,
    console: Console,
    config: Config,
    services_factory: Optional[Callable[[], AlertServices]] = None,
) -> None:
    """Attach alert commands to the root CLI group."""

    def _factory() -> AlertServices:
        if services_factory is not None:
            return services_factory()
        return build_services(config, console)

    @root.command()
    def users() -> None:
        """List users that can receive alerts"""
        services = _load_services_or_exit(console, _factory)
        try:
            _render_users(console, services.bot_config)
        finally:
            services.close()

    @root.command()
    @click.option("--channel", "channel_id", default=None, help="Channel id used for posted messages.")
    @click.option("--as", "actor", default=None, help="User id (or name) to act as.")
    @click.option("--roles", default=None, help="Comma-separated roles of the acting user.")
    def session(channel_id: Optional[str], actor: Optional[str], roles: Optional[str]) -> None:
        """Start an interactive chat session reading /commands from stdin"""
        services = _load_services_or_exit(console, _factory)
        try:
            _run_session(console, config, services, channel_id, actor, roles)
        finally:
            services.close()

        logger.info("Chat session ended")
        console.print("[dim]Session closed.[/dim]")


def _render_users(console: Console, bot_config: AlertBotConfig) -> None:
    if not bot_config.alertable_users:
        console.print("[yellow]⚠️  No alertable users configured.[/yellow]")
        return

    table = Table(title=f"Alertable Users (/{bot_config.command_name})", expand=False)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("User ID", style="magenta")
    table.add_column("Enabled", style="green")
    table.add_column("Allowed Roles", style="yellow")
    table.add_column("On Webhook", style="white")
    table.add_column("Off Webhook", style="white")

    for user in bot_config.alertable_users:
        table.add_row(
            user.friendly_name,
            user.user_id,
            "✅" if user.enabled else "⏸️",
            format_roles(user.allowed_roles),
            user.on_webhook,
            user.off_webhook,
        )
    console.print(table)


def _run_session(
    console: Console,
    config: Config,
    services: AlertServices,
    channel_id: Optional[str],
    actor: Optional[str],
    roles: Optional[str],
) -> None:
    chat = ChatSession(
        services.handler,
        console,
        command_name=services.bot_config.command_name,
        channel_id=channel_id or config.channel_id,
    )
    console.print(
        f"[bold blue]🔔 {services.bot_config.description}[/bold blue] "
        f"([cyan]/{services.bot_config.command_name}[/cyan], "
        f"[cyan]/{services.handler.stop_command}[/cyan]; /help for more)"
    )
    if actor:
        chat.login(chat.resolve_user(actor), parse_roles(roles))

    stream = click.get_text_stream("stdin")
    while True:
        console.print(chat.prompt, end="", markup=False, highlight=False)
        line = stream.readline()
        if not line:
            console.print()
            break
        if not chat.handle_line(line):
            break

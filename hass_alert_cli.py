#!/usr/bin/env python3
"""
HASS Alert CLI Application
Chat-command relay that turns Home Assistant alerts on and off per user

Updates: v0.2.0 - 2026-10-02 - Alert lifecycle, webhook client and chat session commands.
Updates: v0.2.1 - 2026-10-09 - Diagnostics for alert configuration and code reveal setting.
"""

import click
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Add current directory to path for imports
sys.path.append(str(Path(__file__).parent))

from alerts import AlertConfigError, load_alert_config
from config import Config
from utils.logger import setup_logging

from cli import alerts as alert_commands

# Load environment variables
load_dotenv()

console = Console()
config = Config()
logger = logging.getLogger(__name__)

# Setup logging
setup_logging(log_level=config.log_level)


def _get_active_log_level() -> str:
    """Return the currently configured logging level name."""
    level = logging.getLogger().getEffectiveLevel()
    return logging.getLevelName(level)


def _render_diagnostics(console: Console, config_obj: Config) -> None:
    """Display alert configuration and runtime settings checks."""
    summary = Table(title="Diagnostics Summary", show_lines=False, expand=False)
    summary.add_column("Check", style="cyan", no_wrap=True)
    summary.add_column("Status", style="green")
    summary.add_column("Details", style="white")

    config_path = config_obj.get_alert_config_path()
    summary.add_row(
        "Alert Config File",
        "✅" if config_path.exists() else "⚠️",
        str(config_path.resolve()),
    )

    try:
        bot_config = load_alert_config(config_path)
    except AlertConfigError as exc:
        summary.add_row("Alert Config", "❌", str(exc))
    else:
        enabled_count = sum(1 for user in bot_config.alertable_users if user.enabled)
        summary.add_row(
            "Alertable Users",
            "✅" if bot_config.alertable_users else "⚠️",
            f"{len(bot_config.alertable_users)} configured, {enabled_count} enabled",
        )
        summary.add_row("Command", "ℹ️", f"/{bot_config.command_name}")

    summary.add_row("Webhook Timeout", "ℹ️", f"{config_obj.get_webhook_timeout():.1f}s")
    summary.add_row(
        "Code Reveal On Mismatch",
        "⚠️" if config_obj.reveals_code_on_mismatch() else "✅",
        "Wrong /stop codes show the correct code" if config_obj.reveals_code_on_mismatch() else "Hidden",
    )
    summary.add_row("Disable Code Length", "ℹ️", str(config_obj.get_disable_code_length()))
    env_path = Path(".env")
    summary.add_row(
        ".env File",
        "✅" if env_path.exists() else "ℹ️",
        str(env_path.resolve()),
    )

    console.print(summary)


@click.group()
@click.pass_context
def cli(ctx):
    """HASS Alert CLI - Trigger Home Assistant alerts from chat commands"""
    ctx.ensure_object(dict)
    ctx.obj['config'] = config


alert_commands.register(
    cli,
    console=console,
    config=config,
)


@cli.command()
@click.option(
    "--diagnostics",
    is_flag=True,
    help="Display alert configuration and runtime setting checks.",
)
@click.pass_context
def info(ctx: click.Context, diagnostics: bool):
    """Show application information"""
    if diagnostics:
        _render_diagnostics(console, ctx.obj.get('config', config))
        return

    log_level_line = f"[bold white]Current Log Level:[/bold white] [cyan]{_get_active_log_level()}[/cyan]"
    panel = Panel.fit(
        "[bold cyan]HASS Alert CLI[/bold cyan]\n\n"
        f"{log_level_line}\n\n"
        "[bold green]How it works:[/bold green]\n"
        "• /alert <name> fires the user's Home Assistant on-webhook\n"
        "• The reply carries a one-time disable code\n"
        "• The alerted user runs /stop <code> to fire the off-webhook\n\n"
        "[bold yellow]Notes:[/bold yellow]\n"
        "• Alert state lives in memory and resets on restart\n"
        "• Only roles listed in allowedRoles may alert a user\n"
        "• Nobody can alert themselves",
        title="Application Information"
    )
    console.print(panel)


if __name__ == '__main__':
    cli()

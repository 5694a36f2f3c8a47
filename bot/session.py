"""
Interactive chat session parsing slash-command lines.

Updates: v0.2.0 - 2026-10-02 - Console replacement for the chat command dispatcher.
"""

from __future__ import annotations

import logging
import shlex
from typing import FrozenSet, List, Optional

from rich.console import Console
from rich.table import Table

from bot.commands import AlertCommandHandler
from utils.helpers import format_roles, format_timestamp, parse_roles

logger = logging.getLogger(__name__)


class ChatSession:
    """Dispatch ``/command`` lines typed by a user acting under a chosen identity."""

    def __init__(
        self,
        handler: AlertCommandHandler,
        console: Console,
        *,
        command_name: str = "alert",
        channel_id: str = "general",
    ):
        self.handler = handler
        self.console = console
        self.command_name = command_name
        self.channel_id = channel_id
        self.actor_id: Optional[str] = None
        self.actor_roles: Optional[FrozenSet[str]] = None

    @property
    def prompt(self) -> str:
        return f"{self.actor_id or 'anonymous'}@#{self.channel_id}> "

    def login(self, user_id: str, roles: Optional[FrozenSet[str]] = None) -> None:
        self.actor_id = str(user_id)
        self.actor_roles = roles
        logger.debug("Session identity set to %s (roles=%s)", self.actor_id, roles)
        self.console.print(
            f"[green]Acting as [bold]{self.actor_id}[/bold] with roles: {format_roles(roles or ())}[/green]"
        )

    def resolve_user(self, name: str) -> str:
        """Map a friendly name (case-insensitive) to its user id; ids pass through."""
        if name in self.handler.manager.registry:
            return name
        lowered = name.lower()
        for user in self.handler.manager.registry.users():
            if user.friendly_name.lower() == lowered:
                return user.user_id
        return name

    def handle_line(self, line: str) -> bool:
        """Handle one input line; returns False when the session should end."""
        line = line.strip()
        if not line:
            return True
        if not line.startswith("/"):
            self.console.print("[yellow]Commands start with '/'. Type /help for a list.[/yellow]")
            return True

        try:
            parts = shlex.split(line[1:])
        except ValueError as exc:
            self.console.print(f"[red]❌ Could not parse command: {exc}[/red]")
            return True
        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]
        if command in ("quit", "exit"):
            return False
        if command == "help":
            self._print_help()
        elif command == "login":
            self._login(args)
        elif command == "status":
            self._print_status()
        elif command == "users":
            self._print_users()
        elif command == self.command_name:
            self._alert(args)
        elif command == self.handler.stop_command:
            self._stop(args)
        else:
            self.console.print(f"[yellow]Unknown command /{command}. Type /help for a list.[/yellow]")
        return True

    def _require_identity(self) -> bool:
        if self.actor_id is None:
            self.console.print("[red]❌ Use /login <user_id> \\[roles] first.[/red]")
            return False
        return True

    def _login(self, args: List[str]) -> None:
        if not args:
            self.console.print("[red]❌ Usage: /login <user_id> \\[role,role,...][/red]")
            return
        roles = parse_roles(args[1]) if len(args) > 1 else frozenset()
        self.login(self.resolve_user(args[0]), roles)

    def _alert(self, args: List[str]) -> None:
        if not self._require_identity():
            return
        if len(args) != 1:
            self.console.print(f"[red]❌ Usage: /{self.command_name} <name>[/red]")
            return
        target_id = self.resolve_user(args[0])
        self.handler.handle_alert(self.actor_id, target_id, self.actor_roles, self.channel_id)

    def _stop(self, args: List[str]) -> None:
        if not self._require_identity():
            return
        if len(args) != 1:
            self.console.print(f"[red]❌ Usage: /{self.handler.stop_command} <code>[/red]")
            return
        self.handler.handle_stop(self.actor_id, args[0], self.channel_id)

    def _print_status(self) -> None:
        table = Table(title="Alert Status", expand=False)
        table.add_column("User", style="cyan")
        table.add_column("ID", style="magenta")
        table.add_column("Enabled", style="white")
        table.add_column("State", style="green")
        table.add_column("Active Since", style="yellow")

        for row in self.handler.manager.registry.snapshot():
            table.add_row(
                str(row["friendly_name"]),
                str(row["user_id"]),
                "yes" if row["enabled"] else "no",
                "🚨 Active" if row["active"] else "Inactive",
                format_timestamp(row["activated_at"]),
            )
        self.console.print(table)

    def _print_users(self) -> None:
        for user in self.handler.manager.registry.users():
            marker = "" if user.enabled else " [dim](disabled)[/dim]"
            self.console.print(f"• [cyan]{user.friendly_name}[/cyan] ({user.user_id}){marker}")

    def _print_help(self) -> None:
        self.console.print(
            "\n".join(
                [
                    "[bold]Available commands[/bold]",
                    "/login <user_id> \\[role,role,...]  act as a chat user",
                    f"/{self.command_name} <name>  trigger an alert for someone",
                    f"/{self.handler.stop_command} <code>  stop an alert running on yourself",
                    "/status  show alert states",
                    "/users  list alertable users",
                    "/quit  leave the session",
                ]
            )
        )

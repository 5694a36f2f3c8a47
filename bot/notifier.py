"""
Console chat notifier rendering alert embeds with Rich.

Updates: v0.2.0 - 2026-10-02 - Post and edit alert messages in a console channel.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from threading import Lock
from typing import Dict, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

logger = logging.getLogger(__name__)

COLOR_SUCCESS = 0x00FF00
COLOR_ERROR = 0xFF0000
COLOR_CLEARED = 0x33E7F7


class MessageNotFoundError(LookupError):
    """Raised when editing a message that was never posted (or was ephemeral)."""


@dataclass(frozen=True)
class Embed:
    """Titled, coloured message body."""

    title: str
    description: str
    color: int = COLOR_SUCCESS


@dataclass(frozen=True)
class PostedMessage:
    """Handle needed to edit a posted message later."""

    message_id: str
    channel_id: str


@dataclass
class _StoredMessage:
    content: str
    embed: Embed


def build_error_embed(title: str, reason: str) -> Embed:
    return Embed(title=title, description=reason, color=COLOR_ERROR)


class ConsoleNotifier:
    """Chat channel stand-in printing embeds to a Rich console.

    Non-ephemeral messages are kept so they can be edited through their
    :class:`PostedMessage` handle; ephemeral replies are only rendered.
    """

    def __init__(self, console: Optional[Console] = None):
        self._console = console or Console()
        self._messages: Dict[Tuple[str, str], _StoredMessage] = {}
        self._ids = itertools.count(1)
        self._lock = Lock()

    def post(self, channel_id: str, embed: Embed, content: str = "", ephemeral: bool = False) -> PostedMessage:
        with self._lock:
            message_id = str(next(self._ids))
            if not ephemeral:
                self._messages[(channel_id, message_id)] = _StoredMessage(content=content, embed=embed)

        self._render(channel_id, message_id, embed, content, ephemeral=ephemeral)
        return PostedMessage(message_id=message_id, channel_id=channel_id)

    def edit(self, channel_id: str, message_id: str, embed: Embed, content: str = "") -> None:
        with self._lock:
            stored = self._messages.get((channel_id, message_id))
            if stored is None:
                raise MessageNotFoundError(f"Message {message_id} not found in channel {channel_id}")
            stored.content = content
            stored.embed = embed

        logger.debug("Edited message %s in channel %s", message_id, channel_id)
        self._render(channel_id, message_id, embed, content, edited=True)

    def get(self, channel_id: str, message_id: str) -> Tuple[str, Embed]:
        stored = self._messages.get((channel_id, message_id))
        if stored is None:
            raise MessageNotFoundError(f"Message {message_id} not found in channel {channel_id}")
        return stored.content, stored.embed

    def history(self, channel_id: str) -> List[Embed]:
        return [stored.embed for (channel, _), stored in self._messages.items() if channel == channel_id]

    def _render(
        self,
        channel_id: str,
        message_id: str,
        embed: Embed,
        content: str,
        *,
        ephemeral: bool = False,
        edited: bool = False,
    ) -> None:
        style = f"#{embed.color:06x}"
        tags = []
        if ephemeral:
            tags.append("only you can see this")
        if edited:
            tags.append("edited")
        subtitle = f"#{channel_id} • msg {message_id}"
        if tags:
            subtitle += f" • {', '.join(tags)}"

        if content:
            self._console.print(escape(content))
        self._console.print(
            Panel(
                escape(embed.description),
                title=f"[bold]{escape(embed.title)}[/bold]",
                subtitle=subtitle,
                border_style=style,
            )
        )

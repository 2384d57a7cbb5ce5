"""Chat channels — the seam between the dispatcher and a chat transport.

A transport (Telegram, a web widget, the terminal) adapts itself to
:class:`ChatChannel`. The bot only ever sends a text and deletes a message it
sent earlier.
"""

from __future__ import annotations

import re
from typing import Protocol, runtime_checkable

from rich.console import Console
from rich.markup import escape

# Chat Markdown emphasis: *bold*
_BOLD_RE = re.compile(r"\*([^*\n]+)\*")


@runtime_checkable
class ChatChannel(Protocol):
    """What the dispatcher needs from a chat transport."""

    async def send(self, text: str, *, markdown: bool = False) -> int | str:
        """Send *text* to the user and return the transport's message id."""
        ...

    async def delete(self, message_id: int | str) -> None:
        """Remove a previously sent message. May raise if the transport refuses."""
        ...


class ConsoleChannel:
    """Terminal channel used by ``placement-bot chat`` and ``check``.

    Chat Markdown is shown as rich bold text with the original line breaks.
    A terminal cannot take text back, so ``delete`` only records the id.
    """

    def __init__(self, console: Console | None = None, prefix: str = "[bold green]Bot:[/] ") -> None:
        self.console = console or Console()
        self.prefix = prefix
        self._next_id = 0
        self.deleted: list[int | str] = []

    async def send(self, text: str, *, markdown: bool = False) -> int:
        self._next_id += 1
        body = escape(text)
        if markdown:
            body = _BOLD_RE.sub(r"[bold]\1[/bold]", body)
        self.console.print(f"{self.prefix}{body}", highlight=False, soft_wrap=True)
        return self._next_id

    async def delete(self, message_id: int | str) -> None:
        self.deleted.append(message_id)

"""Placement bot CLI — drive the bot from a terminal.

Commands:
    placement-bot check     — Look up one admission number / ID (--insecure skips TLS checks)
    placement-bot chat      — Interactive session, one line = one chat message
    placement-bot about     — Print the /about text
    placement-bot version   — Print the version
"""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.panel import Panel

from placement_bot.utils import setup_logging

# Initialize logging on import
setup_logging()

app = typer.Typer(
    name="placement-bot",
    help="🎓 JU Placement Bot — check freshman placement results",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()

INSECURE_HELP = (
    "Skip TLS certificate checks on the portal (same as PORTAL_VERIFY_TLS=false). "
    "Use when the portal serves a self-signed or expired certificate."
)


def _dispatcher(insecure: bool):
    from placement_bot.bot.dispatcher import Dispatcher
    from placement_bot.portal.fetcher import PortalFetcher

    return Dispatcher(fetcher=PortalFetcher(verify=False if insecure else None))


# ── placement-bot check ───────────────────────────────────────


@app.command()
def check(
    identifier: str = typer.Argument(..., help="Admission number or ID"),
    insecure: bool = typer.Option(False, "--insecure", help=INSECURE_HELP),
):
    """🔍 Look up the placement for one admission number or ID."""
    asyncio.run(_check(identifier, insecure))


async def _check(identifier: str, insecure: bool = False):
    from placement_bot.bot.channel import ConsoleChannel
    from placement_bot.models.schemas import InboundMessage

    dispatcher = _dispatcher(insecure)
    channel = ConsoleChannel(console)
    try:
        await dispatcher.handle_text(InboundMessage(text=identifier, message_id=1), channel)
    finally:
        await dispatcher.close()


# ── placement-bot chat ────────────────────────────────────────


@app.command()
def chat(
    insecure: bool = typer.Option(False, "--insecure", help=INSECURE_HELP),
):
    """💬 Interactive session — each line is handled like a chat message."""
    asyncio.run(_chat(insecure))


async def _chat(insecure: bool = False):
    from placement_bot.bot.channel import ConsoleChannel
    from placement_bot.models.schemas import InboundMessage

    dispatcher = _dispatcher(insecure)
    channel = ConsoleChannel(console)

    console.print(Panel(
        "[bold green]JU Placement Bot[/]\n"
        "[dim]Send an admission number or ID, or [bold]/about[/bold]. "
        "Type [bold]exit[/bold] or [bold]quit[/bold] to end the session.[/]",
        border_style="green",
    ))
    await dispatcher.dispatch(InboundMessage(text="/start", message_id=0), channel)

    message_id = 0
    try:
        while True:
            try:
                text = console.input("\n[bold cyan]You:[/] ").strip()
            except (EOFError, KeyboardInterrupt):
                console.print("\n[dim]Session ended.[/]")
                break

            if not text:
                continue

            if text.lower() in ("exit", "quit", "bye", "q"):
                console.print("[dim]Goodbye.[/]")
                break

            message_id += 1
            await dispatcher.dispatch(InboundMessage(text=text, message_id=message_id), channel)
    finally:
        await dispatcher.close()

    console.print(f"[dim]{message_id} message(s) handled[/]")


# ── placement-bot about ───────────────────────────────────────


@app.command()
def about():
    """ℹ️ Show what the bot is and who runs it."""
    from placement_bot.bot.responder import about_reply
    console.print(about_reply().text, markup=False, highlight=False)


# ── placement-bot version ─────────────────────────────────────


@app.command()
def version():
    """📦 Show the bot version."""
    from placement_bot import __version__
    console.print(f"[bold cyan]🎓 JU Placement Bot[/] v{__version__}")


# ── Entry point ───────────────────────────────────────────────

if __name__ == "__main__":
    app()

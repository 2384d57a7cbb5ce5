"""Unit-test conftest — fake channel, fake fetcher, fake clock, HTML builders.

All fixtures here are available to every test under tests/unit/ without import.
"""

from __future__ import annotations

import asyncio

import pytest

from placement_bot.bot.dedup import DedupGuard
from placement_bot.bot.dispatcher import Dispatcher
from placement_bot.models.schemas import InboundMessage
from placement_bot.portal.fetcher import PortalFetcher


# ─────────────────────────────────────────────────────────────────────────────
# FakeChannel — records everything the dispatcher sends
# ─────────────────────────────────────────────────────────────────────────────

class FakeChannel:
    """In-memory ChatChannel.

    Args:
        delete_raises: If set, delete() raises this exception.
        send_raises:   If set, send() raises this exception.
    """

    def __init__(
        self,
        *,
        delete_raises: Exception | None = None,
        send_raises: Exception | None = None,
    ) -> None:
        self.delete_raises = delete_raises
        self.send_raises = send_raises
        self.sent: list[tuple[int, str, bool]] = []
        self.deleted: list[int | str] = []
        self._next_id = 100

    async def send(self, text: str, *, markdown: bool = False) -> int:
        if self.send_raises:
            raise self.send_raises
        self._next_id += 1
        self.sent.append((self._next_id, text, markdown))
        return self._next_id

    async def delete(self, message_id: int | str) -> None:
        if self.delete_raises:
            raise self.delete_raises
        self.deleted.append(message_id)

    @property
    def texts(self) -> list[str]:
        return [text for _, text, _ in self.sent]


# ─────────────────────────────────────────────────────────────────────────────
# FakeFetcher — PortalFetcher without the network
# ─────────────────────────────────────────────────────────────────────────────

class FakeFetcher(PortalFetcher):
    """PortalFetcher whose fetch() returns canned HTML or raises.

    Args:
        html:   Body returned by fetch().
        raises: If set, fetch() raises this exception.
        delay:  Seconds to sleep before answering.
    """

    def __init__(
        self,
        *,
        html: str = "",
        raises: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        super().__init__(base_url="https://portal.test")
        self.html = html
        self.raises = raises
        self.delay = delay
        self.fetch_calls: list[str] = []

    async def fetch(self, identifier: str) -> str:
        self.fetch_calls.append(identifier)
        if self.delay > 0:
            await asyncio.sleep(self.delay)
        if self.raises:
            raise self.raises
        return self.html


class FakeClock:
    """Manually advanced clock for DedupGuard."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def results_page(rows: list[tuple[str, str]], *, tbody: bool = True) -> str:
    """Portal-shaped HTML page with one two-column results table."""
    body = "".join(f"<tr><td>{label}</td><td>{value}</td></tr>" for label, value in rows)
    if tbody:
        body = f"<tbody>{body}</tbody>"
    return (
        "<html><head><title>Freshman Result</title></head><body>"
        f"<table class='table'>{body}</table>"
        "</body></html>"
    )


FULL_ROWS: list[tuple[str, str]] = [
    ("Admission Number", "12345"),
    ("ID No.", "RU/1234/17"),
    ("Full Name", "Jane Doe"),
    ("Program", "Software Engineering"),
    ("Section", "Section 4"),
    ("Campus Assigned", "Main Campus"),
    ("Dormitory", "Block   A   Room 12"),
    ("Cafeteria", "Cafe 2"),
]


def make_message(text: str, message_id: int | str | None = 1) -> InboundMessage:
    return InboundMessage(text=text, message_id=message_id, chat_id=42)


# ─────────────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def channel():
    """A fresh FakeChannel for each test."""
    return FakeChannel()


@pytest.fixture
def channel_factory():
    """The FakeChannel class, for tests that need a failing channel."""
    return FakeChannel


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def guard(clock):
    """A DedupGuard on the fake clock with the default 1 s window."""
    return DedupGuard(window=1.0, clock=clock)


@pytest.fixture
def page():
    """The results_page() builder, for tests that need custom rows."""
    return results_page


@pytest.fixture
def full_page():
    return results_page(FULL_ROWS)


@pytest.fixture
def message():
    """The make_message() builder."""
    return make_message


@pytest.fixture
def make_dispatcher(guard):
    """Factory: Dispatcher wired to a FakeFetcher and the fake-clock guard."""

    def _make(**fetcher_kwargs) -> tuple[Dispatcher, FakeFetcher]:
        fetcher = FakeFetcher(**fetcher_kwargs)
        return Dispatcher(fetcher=fetcher, guard=guard, min_length=3, max_length=20), fetcher

    return _make

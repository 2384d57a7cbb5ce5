"""Dedup guard — drops accidental re-deliveries of the same message.

Only true back-to-back duplicates are suppressed: the same message id seen
again within the window. A falsy id (``None``, ``""``, ``0``) counts as
missing and is never treated as a duplicate. The stored id is overwritten on every accepted
message, so a student repeating a query slowly is always answered.

The state is a last-writer-wins pair with no lock. Two distinct messages
racing to update it can at worst let a duplicate through.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from placement_bot.config import settings
from placement_bot.utils import get_logger
from placement_bot.utils.clock import monotonic

logger = get_logger("bot.dedup")


@dataclass
class DedupState:
    """Last accepted message id and when it was seen (clock seconds)."""

    last_message_id: int | str | None = None
    last_seen_at: float = 0.0


class DedupGuard:
    """Decides whether an inbound message should be processed.

    Args:
        window:  Seconds within which a repeated id is a duplicate.
        clock:   Zero-argument callable returning seconds; tests inject a fake.
        state:   Optional pre-built state, mostly for tests.
    """

    def __init__(
        self,
        window: float | None = None,
        clock: Callable[[], float] = monotonic,
        state: DedupState | None = None,
    ) -> None:
        self.window = window if window is not None else settings.dedup_window_seconds
        self.clock = clock
        self.state = state or DedupState()

    def should_process(self, message_id: int | str | None, now: float | None = None) -> bool:
        now = self.clock() if now is None else now

        if (
            message_id
            and message_id == self.state.last_message_id
            and now - self.state.last_seen_at < self.window
        ):
            logger.info("duplicate_message_skipped", message_id=message_id)
            return False

        self.state.last_message_id = message_id
        self.state.last_seen_at = now
        return True

"""Dispatcher — the per-message request handler.

Every inbound update goes through ``dispatch()``:
    1. DedupGuard         — silently drop back-to-back re-deliveries
    2. command routing    — /start, /about, anything else is a lookup
    3. handle_text        — validate → ack → fetch → extract → render

One processed message yields exactly one terminal reply, plus the transient
"processing" acknowledgment which is retracted best-effort. Nothing raised
while handling a message escapes ``dispatch()``.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field

import structlog

from placement_bot.bot import responder
from placement_bot.bot.channel import ChatChannel
from placement_bot.bot.dedup import DedupGuard
from placement_bot.config import settings
from placement_bot.models.errors import IdentifierValidationError
from placement_bot.models.schemas import InboundMessage, Reply
from placement_bot.portal.extractor import PlacementExtractor
from placement_bot.portal.fetcher import PortalFetcher
from placement_bot.utils import get_logger

logger = get_logger("bot.dispatcher")


@dataclass
class RetractResult:
    """Outcome of removing a transient message. Callers log it and move on."""

    message_id: int | str
    ok: bool
    error: str = field(default="")


async def retract_message(channel: ChatChannel, message_id: int | str) -> RetractResult:
    """Delete *message_id* from *channel*, reporting failure instead of raising."""
    try:
        await channel.delete(message_id)
    except Exception as e:
        return RetractResult(message_id=message_id, ok=False, error=str(e) or type(e).__name__)
    return RetractResult(message_id=message_id, ok=True)


def parse_command(text: str) -> str | None:
    """Return the bot command name of *text* (``"/about@JUBot x"`` → ``"about"``)."""
    stripped = text.strip()
    if not stripped.startswith("/"):
        return None
    head = stripped.split(maxsplit=1)[0][1:]
    name = head.split("@", 1)[0].lower()
    return name or None


class Dispatcher:
    """Sequences dedup, validation, fetch, extraction and the reply.

    All collaborators are injectable; defaults read from ``settings``.
    """

    def __init__(
        self,
        fetcher: PortalFetcher | None = None,
        extractor: PlacementExtractor | None = None,
        guard: DedupGuard | None = None,
        min_length: int | None = None,
        max_length: int | None = None,
    ) -> None:
        self.fetcher = fetcher or PortalFetcher()
        self.extractor = extractor or PlacementExtractor()
        self.guard = guard or DedupGuard()
        self.min_length = min_length if min_length is not None else settings.identifier_min_length
        self.max_length = max_length if max_length is not None else settings.identifier_max_length

    async def close(self) -> None:
        await self.fetcher.close()

    # ── Entry point ───────────────────────────────────────────────────────

    async def dispatch(self, message: InboundMessage, channel: ChatChannel) -> Reply | None:
        """Handle one inbound update. Returns the terminal reply, or None if skipped."""
        if not self.guard.should_process(message.message_id):
            return None

        start = time.perf_counter()
        structlog.contextvars.bind_contextvars(message_id=message.message_id)
        try:
            command = parse_command(message.text)
            if command == "start":
                reply = self.handle_start()
                await channel.send(reply.text, markdown=reply.markdown)
            elif command == "about":
                reply = self.handle_about()
                await channel.send(reply.text, markdown=reply.markdown)
            else:
                reply = await self.handle_text(message, channel)
        except Exception as e:
            logger.error("dispatch_error", error=str(e), error_type=type(e).__name__)
            reply = responder.error_reply_generic()
            try:
                await channel.send(reply.text, markdown=reply.markdown)
            except Exception as send_error:
                logger.error("error_reply_failed", error=str(send_error))
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            logger.info("dispatch_complete", duration_ms=duration_ms)
            structlog.contextvars.unbind_contextvars("message_id")

        return reply

    # ── Handlers ──────────────────────────────────────────────────────────

    def handle_start(self) -> Reply:
        return responder.start_reply()

    def handle_about(self) -> Reply:
        return responder.about_reply()

    def validate_identifier(self, identifier: str) -> str:
        """Return *identifier* if its length is acceptable.

        Digits-only is not enforced; IDs such as ``RU/1234/17`` are accepted.
        """
        if not self.min_length <= len(identifier) <= self.max_length:
            raise IdentifierValidationError(identifier, self.min_length, self.max_length)
        return identifier

    async def handle_text(self, message: InboundMessage, channel: ChatChannel) -> Reply:
        """Look up the identifier in *message* and send the result to *channel*."""
        identifier = message.identifier

        try:
            self.validate_identifier(identifier)
        except IdentifierValidationError as e:
            logger.info("identifier_rejected", length=len(identifier))
            reply = responder.error_reply(e)
            await channel.send(reply.text, markdown=reply.markdown)
            return reply

        url = self.fetcher.build_url(identifier)
        ack_id: int | str | None = None
        try:
            ack = responder.processing_reply()
            ack_id = await channel.send(ack.text, markdown=ack.markdown)
            html = await self.fetcher.fetch(identifier)
            record = self.extractor.extract(html)
            reply = responder.render(record, url)
            logger.info("lookup_complete", found=record.found)
        except Exception as e:
            logger.error("lookup_failed", error=str(e), error_type=type(e).__name__)
            reply = responder.error_reply(e)

        if ack_id is not None:
            result = await retract_message(channel, ack_id)
            if not result.ok:
                logger.warning(
                    "processing_message_not_deleted",
                    ack_id=result.message_id,
                    error=result.error,
                )

        await channel.send(reply.text, markdown=reply.markdown)
        return reply

"""Responder — every text the bot sends, and the error → text mapping."""

from __future__ import annotations

from placement_bot.models.errors import (
    IdentifierValidationError,
    PortalStatusError,
    PortalTimeoutError,
    PortalTransportError,
)
from placement_bot.models.schemas import PlacementRecord, Reply

WELCOME_TEXT = (
    "👋 Welcome to JU Placement Checker!\n\n"
    "Please send your *Admission Number* or *ID* to check your placement."
)

ABOUT_TEXT = """About
This bot is developed by JU Students Network 🚀

Features:
• Fast & simple access to placement results
• Official data directly fetched from JU portal
• Privacy-first: We do not store your personal info
• 24/7 bot availability

Our mission:
Help JU students receive important updates faster, easier, and stress-free.

For announcements and support, join our community:
📢 JU Students Network Channel
@JUStudentsNetwork
"""

PROCESSING_TEXT = "🔍 Checking your placement, please wait..."

INVALID_FORMAT_TEXT = (
    "⚠️ Please check your admission number format. It should be between 3-20 digits."
)
NOT_FOUND_TEXT = (
    "❌ Admission number not found or invalid. "
    "Please check your admission number and try again."
)
TIMEOUT_TEXT = (
    "⏰ Request timeout. The portal is taking too long to respond. Please try again later."
)
CONNECTION_TEXT = (
    "🌐 Cannot connect to JU portal. Please check your internet connection and try again."
)
PORTAL_UNAVAILABLE_TEXT = "🔧 JU portal is currently unavailable. Please try again later."
FETCH_ERROR_TEXT = "⚠️ Error fetching data. Please try again later."
GENERIC_ERROR_TEXT = "❌ An error occurred. Please try again later."

MISSING = "N/A"

RESULT_TEMPLATE = """🎓 *Jimma University Placement Result*

👤 *Name:* {name}
🆔 *ID:* {id_number}
📘 *Program:* {program}
🧩 *Section:* {section}
🏫 *Campus:* {campus}
🛏️ *Dormitory:* {dormitory}
🍽️ *Cafeteria:* {cafeteria}

*Check more on the portal:* {url}

*Get more information on @JUStudentsNetwork!*"""


def start_reply() -> Reply:
    return Reply(text=WELCOME_TEXT, markdown=True)


def about_reply() -> Reply:
    return Reply(text=ABOUT_TEXT)


def processing_reply() -> Reply:
    return Reply(text=PROCESSING_TEXT)


def render(record: PlacementRecord, url: str) -> Reply:
    """Result message for *record*, or the not-found text when it is not a hit.

    Empty fields of a hit are shown as ``N/A``; *url* is the portal page the
    record was scraped from.
    """
    if not record.found:
        return Reply(text=NOT_FOUND_TEXT)

    text = RESULT_TEMPLATE.format(
        name=record.full_name or MISSING,
        id_number=record.id_number or MISSING,
        program=record.program or MISSING,
        section=record.section or MISSING,
        campus=record.campus or MISSING,
        dormitory=record.dormitory or MISSING,
        cafeteria=record.cafeteria or MISSING,
        url=url,
    )
    return Reply(text=text, markdown=True)


def error_reply(error: BaseException) -> Reply:
    """Fixed user-facing text for a failed lookup."""
    if isinstance(error, IdentifierValidationError):
        return Reply(text=INVALID_FORMAT_TEXT)
    if isinstance(error, PortalTimeoutError):
        return Reply(text=TIMEOUT_TEXT)
    if isinstance(error, PortalTransportError):
        return Reply(text=CONNECTION_TEXT)
    if isinstance(error, PortalStatusError):
        return Reply(text=PORTAL_UNAVAILABLE_TEXT)
    return Reply(text=FETCH_ERROR_TEXT)


def error_reply_generic() -> Reply:
    """Last-resort text for anything that escaped a handler."""
    return Reply(text=GENERIC_ERROR_TEXT)

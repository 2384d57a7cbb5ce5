"""Error taxonomy for a placement lookup.

Only the dispatcher catches these; each class maps to one fixed reply text
in :mod:`placement_bot.bot.responder`.
"""

from __future__ import annotations


class PlacementBotError(Exception):
    """Base class for every error the bot raises on purpose."""


class IdentifierValidationError(PlacementBotError):
    """The identifier is outside the accepted length range."""

    def __init__(self, identifier: str, min_length: int, max_length: int) -> None:
        self.identifier = identifier
        self.min_length = min_length
        self.max_length = max_length
        super().__init__(
            f"Identifier length {len(identifier)} outside {min_length}-{max_length}"
        )


class PortalError(PlacementBotError):
    """The portal fetch failed."""


class PortalTimeoutError(PortalError):
    """The portal did not answer within the fetch timeout."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Request timeout after {timeout:g} seconds")


class PortalTransportError(PortalError):
    """DNS, connection-refused and other network-layer failures."""

    def __init__(self, message: str, tls_verify_failed: bool = False) -> None:
        self.tls_verify_failed = tls_verify_failed
        super().__init__(message)


class PortalStatusError(PortalError):
    """The portal answered with a non-2xx status."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"HTTP Error: {status_code}")

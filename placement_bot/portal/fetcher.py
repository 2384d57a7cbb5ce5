"""Async client for the JU results portal.

One request shape:
    Placement results:  GET /freshmanR?AdmissionNumber=...

Single attempt per lookup, no retries. Failures come back as the
:mod:`placement_bot.models.errors` portal errors so the dispatcher can pick
the reply text without looking at httpx types.
"""

from __future__ import annotations

import asyncio
import ssl

import httpx

from placement_bot.config import settings
from placement_bot.models.errors import (
    PortalStatusError,
    PortalTimeoutError,
    PortalTransportError,
)
from placement_bot.utils import get_logger

logger = get_logger("portal.fetcher")


def is_tls_verify_error(exc: BaseException) -> bool:
    """True when *exc* (or anything it wraps) is a certificate verification failure."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, ssl.SSLCertVerificationError):
            return True
        if "CERTIFICATE_VERIFY_FAILED" in str(current):
            return True
        current = current.__cause__ or current.__context__
    return False


class PortalFetcher:
    """Fetches the placement results page for one identifier.

    Holds a single lazily-created ``httpx.AsyncClient``; pass ``transport`` to
    swap the network layer out (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str | None = None,
        results_path: str | None = None,
        query_param: str | None = None,
        timeout: float | None = None,
        verify: bool | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.portal_base_url).rstrip("/")
        self.results_path = results_path or settings.portal_results_path
        self.query_param = query_param or settings.portal_query_param
        self.timeout = timeout if timeout is not None else settings.fetch_timeout_seconds
        self.verify = settings.portal_verify_tls if verify is None else verify
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def build_url(self, identifier: str) -> str:
        """Full results URL for *identifier*, with the identifier percent-encoded."""
        url = httpx.URL(
            f"{self.base_url}{self.results_path}",
            params={self.query_param: identifier},
        )
        return str(url)

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                verify=self.verify,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _get(self, url: str) -> httpx.Response:
        client = await self._get_client()
        return await client.get(url)

    async def fetch(self, identifier: str) -> str:
        """Fetch the results page body for *identifier*.

        Raises:
            PortalTimeoutError:   the whole request took longer than ``timeout``.
            PortalStatusError:    the portal answered with a non-2xx status.
            PortalTransportError: the connection could not be made or completed.
        """
        url = self.build_url(identifier)
        try:
            # httpx timeouts are per phase; wait_for bounds the request as a whole.
            response = await asyncio.wait_for(self._get(url), timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.warning("portal_fetch_timeout", url=url, timeout=self.timeout)
            raise PortalTimeoutError(self.timeout) from e
        except httpx.TransportError as e:
            error = str(e) or type(e).__name__
            tls_failed = self.verify and is_tls_verify_error(e)
            if tls_failed:
                logger.error(
                    "portal_tls_verify_failed",
                    url=url,
                    error=error,
                    hint="set PORTAL_VERIFY_TLS=false or pass --insecure",
                )
            else:
                logger.error("portal_fetch_failed", url=url, error=error)
            raise PortalTransportError(error, tls_verify_failed=tls_failed) from e

        if not response.is_success:
            logger.warning("portal_bad_status", url=url, status_code=response.status_code)
            raise PortalStatusError(response.status_code)

        logger.debug("portal_fetch_ok", url=url, chars=len(response.text))
        return response.text

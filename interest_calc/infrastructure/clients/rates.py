"""Exchange-rate HTTP client and rate-table refresher"""

import asyncio
import logging
import time
from typing import Callable, Optional

import httpx

from interest_calc.config import settings
from interest_calc.domain.currency import parse_rate_document
from interest_calc.domain.exceptions import RateSourceError
from interest_calc.domain.models import RateTable
from interest_calc.infrastructure.observability.logging import log_rate_refresh
from interest_calc.infrastructure.observability.metrics import (
    rate_fetch_failures_counter,
    rate_fetch_latency_histogram,
    record_rate_refresh,
)
from interest_calc.utils.cancellation import CancellationToken


class RatesClient:
    """Client for the external exchange-rate API"""

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url or settings.rates_api_url
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def get_rate_table(self) -> RateTable:
        """
        Fetch and parse the current exchange rates.

        Raises:
            RateSourceError: On timeout, HTTP errors, or an invalid document
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with rate_fetch_latency_histogram.time():
                    response = await client.get(self.url)
                response.raise_for_status()
                return parse_rate_document(response.json())

            except httpx.TimeoutException as e:
                raise RateSourceError(f"Rate API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise RateSourceError(f"Rate API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise RateSourceError(f"Rate API unreachable: {e}") from e
            except ValueError as e:
                raise RateSourceError(f"Invalid JSON from rate API: {e}") from e

    async def fetch_rates(self, token: CancellationToken | None = None) -> Optional[RateTable]:
        """
        Fetch rates, returning None instead of raising.

        None means the source failed or `token` was cancelled before the
        response arrived; in the latter case the request is aborted.
        """
        if token is not None and token.cancelled:
            return None

        fetch = asyncio.ensure_future(self.get_rate_table())
        cancelled = asyncio.ensure_future(token.wait()) if token is not None else None
        try:
            waiting = {fetch, cancelled} if cancelled is not None else {fetch}
            done, _ = await asyncio.wait(waiting, return_when=asyncio.FIRST_COMPLETED)
        finally:
            pending = [task for task in (fetch, cancelled) if task is not None and not task.done()]
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        if fetch not in done:
            logging.info("Rate fetch aborted", extra={"url": self.url})
            return None

        try:
            return fetch.result()
        except RateSourceError as e:
            rate_fetch_failures_counter.inc()
            logging.warning(f"Rate API error: {e}", extra={"url": self.url})
            return None


class RateTableRefresher:
    """
    Owns the rate-table snapshot and refreshes it from a RatesClient.

    Rules:
    - At most one fetch in flight; concurrent refresh() calls share it
    - A successful fetch replaces the snapshot whole and notifies `on_update`
    - A failed fetch keeps the previous snapshot (empty until the first success)
    - After cancel() the in-flight fetch is aborted and any late result ignored
    """

    def __init__(
        self,
        client: RatesClient,
        on_update: Optional[Callable[[RateTable], None]] = None,
    ):
        self.client = client
        self.on_update = on_update
        self.snapshot = RateTable()
        self._token = CancellationToken()
        self._in_flight: Optional[asyncio.Future] = None

    @property
    def in_flight(self) -> bool:
        return self._in_flight is not None and not self._in_flight.done()

    @property
    def cancelled(self) -> bool:
        return self._token.cancelled

    async def refresh(self) -> RateTable:
        """Start a refresh (or join the running one) and return the resulting snapshot"""
        if self._token.cancelled:
            return self.snapshot

        if not self.in_flight:
            self._in_flight = asyncio.ensure_future(self._run())

        # Shielded so one caller going away does not abort the shared fetch
        return await asyncio.shield(self._in_flight)

    def cancel(self) -> None:
        """Teardown hook: abort the in-flight fetch and ignore its result"""
        self._token.cancel()

    async def _run(self) -> RateTable:
        start_time = time.time()
        table = await self.client.fetch_rates(self._token)

        if self._token.cancelled:
            outcome = "cancelled"
        elif table is None:
            outcome = "unavailable"
        else:
            self.snapshot = table
            if self.on_update is not None:
                self.on_update(table)
            outcome = "updated"

        duration_ms = (time.time() - start_time) * 1000
        record_rate_refresh(outcome)
        log_rate_refresh(outcome, len(self.snapshot), duration_ms)
        return self.snapshot

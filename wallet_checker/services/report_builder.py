"""Wallet report aggregation.

Fans out the five marketplace facet queries for one wallet concurrently,
waits for all of them, and reduces the results into a WalletReport.
Facet failures are already contained by the gateway; only unexpected
errors reach this layer, and they are raised as WalletCheckFailed.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from ..config import ReportConfig
from ..exceptions import WalletCheckFailed
from ..marketplace.base import MarketplaceGateway
from ..marketplace.types import FetchResult
from ..models import WalletReport
from .filters import (
    dedupe_by_mint,
    filter_active_offers,
    filter_listed_tokens,
    filter_trading_activity,
    sum_offer_value,
)

logger = logging.getLogger(__name__)

FACETS = ("activity", "tokens", "escrow", "offers_made", "offers_received")


class WalletReportBuilder:
    """Builds one WalletReport per wallet address.

    Responsibilities:
    - Run the five facet queries concurrently
    - Apply the trading, listing and active-offer filters
    - Compute offer totals and record degraded facets
    """

    def __init__(
        self,
        gateway: MarketplaceGateway,
        config: ReportConfig,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the report builder.

        Args:
            gateway: Marketplace client.
            config: Report settings.
            clock: Time source for expiry checks and report timestamps.
        """
        self.gateway = gateway
        self.config = config
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def build_report(self, address: str) -> WalletReport:
        """Build the marketplace report for a wallet.

        Args:
            address: Wallet public key.

        Returns:
            Assembled WalletReport.

        Raises:
            WalletCheckFailed: If fetching or assembly fails unexpectedly, or it times out.
        """
        logger.info(f"Building wallet report for {address}")
        try:
            if self.config.report_timeout_seconds:
                results = await asyncio.wait_for(
                    self._fetch_facets(address), self.config.report_timeout_seconds
                )
            else:
                results = await self._fetch_facets(address)
            return self._assemble(address, results)
        except asyncio.TimeoutError as e:
            logger.error(f"Wallet report for {address} timed out")
            raise WalletCheckFailed(address, "timed out") from e
        except Exception as e:
            logger.error(f"Wallet report for {address} failed: {e}")
            raise WalletCheckFailed(address, e) from e

    async def _fetch_facets(self, address: str) -> list[FetchResult]:
        """Query all facets concurrently and wait for every one of them."""
        results = await asyncio.gather(
            self.gateway.fetch_activity(address),
            self.gateway.fetch_tokens(address),
            self.gateway.fetch_escrow_balance(address),
            self.gateway.fetch_offers_made(address),
            self.gateway.fetch_offers_received(address),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return list(results)

    def _assemble(self, address: str, results: list[FetchResult]) -> WalletReport:
        activity, tokens, escrow, offers_made, offers_received = results
        now = self._clock()

        trading = filter_trading_activity(activity.value, self.config.recent_activity_limit)
        listed = dedupe_by_mint(filter_listed_tokens(tokens.value))
        made = filter_active_offers(offers_made.value, now)
        received = filter_active_offers(offers_received.value, now)

        degraded = [facet for facet, result in zip(FACETS, results) if result.degraded]
        if degraded:
            logger.warning(f"Report for {address} built with degraded facets: {degraded}")

        return WalletReport(
            address=address,
            trading_count=trading.count,
            recent_activity=trading.recent,
            listed_tokens=listed,
            escrow_balance=escrow.value,
            offers_made=made,
            offers_made_total=sum_offer_value(made),
            offers_received=received,
            offers_received_total=sum_offer_value(received),
            degraded_facets=degraded,
            checked_at=now,
        )

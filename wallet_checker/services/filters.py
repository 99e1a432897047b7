"""Facet filters and reducers used to build wallet reports."""

from collections.abc import Iterable
from datetime import datetime, timezone
from decimal import Decimal
from typing import NamedTuple

from ..models import ActivityRecord, ActivityType, Offer, OfferStatus, TokenHolding

TRADING_TYPES = frozenset(
    {
        ActivityType.BUY_NOW,
        ActivityType.EXECUTE_SALE,
        ActivityType.ACCEPT_OFFER,
        ActivityType.LIST,
        ActivityType.PLACE_OFFER,
    }
)

TERMINAL_OFFER_STATUSES = frozenset(
    {OfferStatus.CANCELLED, OfferStatus.EXPIRED, OfferStatus.REJECTED}
)


class TradingActivity(NamedTuple):
    """Trading-relevant subset of wallet activity."""

    count: int
    recent: list[ActivityRecord]


def filter_active_offers(
    offers: Iterable[Offer | None], now: datetime | None = None
) -> list[Offer]:
    """Keep offers that are still open.

    An offer is active when it is present, has no cancellation time, is not
    past its expiry, and its status is absent or not terminal. Unrecognized
    statuses count as active.

    Args:
        offers: Normalized offers, possibly with None entries.
        now: Reference time, defaults to the current UTC time.

    Returns:
        Active offers in their original order.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    active: list[Offer] = []
    for offer in offers:
        if offer is None:
            continue
        if offer.cancelled_at is not None:
            continue
        if offer.expires_at is not None and offer.expires_at <= now:
            continue
        if offer.status in TERMINAL_OFFER_STATUSES:
            continue
        active.append(offer)
    return active


def filter_listed_tokens(tokens: Iterable[TokenHolding]) -> list[TokenHolding]:
    """Keep tokens with any listing signal."""
    return [token for token in tokens if token.listed]


def filter_trading_activity(
    activity: Iterable[ActivityRecord], recent_limit: int = 5
) -> TradingActivity:
    """Select buy, sell, list and offer records.

    Upstream returns activity newest first, so the first records are the
    most recent.

    Args:
        activity: Normalized activity records.
        recent_limit: How many records to keep in the recent subset.

    Returns:
        Count of all trading records and the capped recent subset.
    """
    trading = [record for record in activity if record.type in TRADING_TYPES]
    return TradingActivity(count=len(trading), recent=trading[:recent_limit])


def sum_offer_value(offers: Iterable[Offer]) -> Decimal:
    """Sum offer prices, counting a missing price as zero."""
    total = Decimal("0")
    for offer in offers:
        if offer.price is not None:
            total += offer.price
    return total


def dedupe_by_mint(*sources: Iterable[TokenHolding]) -> list[TokenHolding]:
    """Merge token sources keeping the first holding seen for each mint."""
    seen: set[str] = set()
    unique: list[TokenHolding] = []
    for source in sources:
        for token in source:
            if token.mint in seen:
                continue
            seen.add(token.mint)
            unique.append(token)
    return unique

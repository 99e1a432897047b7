"""Gateway protocol for marketplace wallet queries.

Defines the interface the report builder depends on, so the Magic Eden
client can be swapped for a fake in tests or another marketplace later.
"""

from decimal import Decimal
from typing import Protocol

from ..models import ActivityRecord, Offer, TokenHolding
from .types import FetchResult


class MarketplaceGateway(Protocol):
    """Read-only wallet queries against a marketplace.

    Every method contains its own failures: transport errors, bad statuses
    and undecodable payloads come back as a failed FetchResult holding the
    facet's default value, never as an exception.

    Methods:
        fetch_activity: Recent wallet activity, newest first.
        fetch_tokens: NFTs held by the wallet.
        fetch_escrow_balance: Marketplace escrow in SOL.
        fetch_offers_made: Offers placed by the wallet.
        fetch_offers_received: Offers on the wallet's NFTs.
    """

    async def fetch_activity(self, address: str) -> FetchResult[list[ActivityRecord]]:
        ...

    async def fetch_tokens(self, address: str) -> FetchResult[list[TokenHolding]]:
        ...

    async def fetch_escrow_balance(self, address: str) -> FetchResult[Decimal]:
        ...

    async def fetch_offers_made(self, address: str) -> FetchResult[list[Offer | None]]:
        ...

    async def fetch_offers_received(self, address: str) -> FetchResult[list[Offer | None]]:
        ...

"""Data models for the wallet checker application.

Defines Pydantic models for the wallet identifiers extracted from user
input, the marketplace entities produced by the normalizers, and the
aggregated wallet report. Raw upstream JSON never reaches these models
directly; it is mapped by wallet_checker.marketplace.normalizers first.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class WalletIdentifier(BaseModel):
    """Wallet reference classified from user input.

    Attributes:
        address: Base58 public key of the wallet.
        secret: Base58 private key as sent by the user, None for bare addresses.
    """

    model_config = ConfigDict(frozen=True)

    address: str
    secret: str | None = None

    @property
    def has_secret(self) -> bool:
        """Whether the identifier came from a private key."""
        return self.secret is not None


class ActivityType(str, Enum):
    """Marketplace activity kinds."""

    BUY_NOW = "buyNow"
    EXECUTE_SALE = "executeSale"
    ACCEPT_OFFER = "acceptOffer"
    LIST = "list"
    DELIST = "delist"
    PLACE_OFFER = "placeOffer"
    OTHER = "other"

    @classmethod
    def parse(cls, value: object) -> "ActivityType":
        """Map an upstream type string, falling back to OTHER."""
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


class OfferStatus(str, Enum):
    """Offer lifecycle states reported by the marketplace."""

    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    REJECTED = "rejected"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: object) -> "OfferStatus | None":
        """Map an upstream status string.

        Returns:
            None when the status is absent, UNKNOWN when it is not recognized.
        """
        if value is None:
            return None
        normalized = str(value).strip().lower()
        if normalized == "canceled":
            normalized = "cancelled"
        try:
            return cls(normalized)
        except ValueError:
            return cls.UNKNOWN


class ActivityRecord(BaseModel):
    """Single wallet activity entry."""

    type: ActivityType = ActivityType.OTHER
    price: Decimal | None = None
    token_mint: str = ""
    block_time: datetime | None = None
    collection: str | None = None


class TokenHolding(BaseModel):
    """NFT held by the wallet.

    Attributes:
        mint: Token mint address.
        name: Display name, if the marketplace knows it.
        collection: Collection symbol.
        listed: True when any listing signal was present upstream.
        price: Listing price in SOL.
    """

    mint: str
    name: str | None = None
    collection: str | None = None
    listed: bool = False
    price: Decimal | None = None


class Offer(BaseModel):
    """Bid made by or received by the wallet."""

    token_mint: str = ""
    price: Decimal | None = None
    status: OfferStatus | None = None
    cancelled_at: datetime | None = None
    expires_at: datetime | None = None
    name: str | None = None


class WalletReport(BaseModel):
    """Aggregated marketplace report for one wallet.

    Attributes:
        address: Wallet public key.
        trading_count: Number of trading-relevant activity records.
        recent_activity: Most recent trading records, bounded length.
        listed_tokens: Currently listed NFTs, unique by mint.
        escrow_balance: Marketplace escrow in SOL.
        offers_made: Active offers placed by the wallet.
        offers_made_total: Sum of offers_made prices.
        offers_received: Active offers on the wallet's NFTs.
        offers_received_total: Sum of offers_received prices.
        degraded_facets: Facets whose upstream query failed and were defaulted.
        checked_at: When the report was assembled.
    """

    address: str
    trading_count: int = 0
    recent_activity: list[ActivityRecord] = Field(default_factory=list)
    listed_tokens: list[TokenHolding] = Field(default_factory=list)
    escrow_balance: Decimal = Field(default=Decimal("0"), ge=0)
    offers_made: list[Offer] = Field(default_factory=list)
    offers_made_total: Decimal = Decimal("0")
    offers_received: list[Offer] = Field(default_factory=list)
    offers_received_total: Decimal = Decimal("0")
    degraded_facets: list[str] = Field(default_factory=list)
    checked_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def has_trading(self) -> bool:
        return self.trading_count > 0

    @property
    def listed_count(self) -> int:
        return len(self.listed_tokens)

    @property
    def has_listed(self) -> bool:
        return bool(self.listed_tokens)

    @property
    def offers_made_count(self) -> int:
        return len(self.offers_made)

    @property
    def has_offers_made(self) -> bool:
        return bool(self.offers_made)

    @property
    def offers_received_count(self) -> int:
        return len(self.offers_received)

    @property
    def has_offers_received(self) -> bool:
        return bool(self.offers_received)

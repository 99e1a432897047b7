"""Global test configuration and fixtures.

Provides shared fixtures for all test levels including environment setup,
report settings, a scriptable fake marketplace gateway, and sample upstream
payloads.
"""

import os
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import base58
import pytest
from solders.keypair import Keypair

from wallet_checker.config import MarketplaceConfig, ReportConfig
from wallet_checker.marketplace.types import FetchResult
from wallet_checker.models import ActivityRecord, ActivityType, Offer, TokenHolding

TEST_BOT_TOKEN = os.getenv("TEST_BOT_TOKEN", "test_bot_token_placeholder")
TEST_API_KEY = os.getenv("TEST_MAGIC_EDEN_API_KEY", "test_api_key_placeholder")

SAMPLE_ADDRESS = "9sBtLtMHWT1Srg1Q2wQMifuY6jrt14fPv7CTpyB6aHQE"
FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def test_environment(monkeypatch):
    """Setup test environment variables for all tests."""
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", TEST_BOT_TOKEN)
    monkeypatch.setenv("MAGIC_EDEN_API_KEY", TEST_API_KEY)
    monkeypatch.delenv("WEBHOOK_DOMAIN", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")


@pytest.fixture
def report_config():
    """Report settings without delays or deadlines."""
    return ReportConfig(
        recent_activity_limit=5,
        batch_max_wallets=5,
        batch_delay_seconds=0,
        report_timeout_seconds=None,
    )


@pytest.fixture
def marketplace_config():
    """Marketplace settings read from the test environment."""
    return MarketplaceConfig()


@pytest.fixture
def keypair():
    """Deterministic Solana keypair and its base58 secret."""
    kp = Keypair.from_seed(bytes(range(32)))
    return {
        "keypair": kp,
        "address": str(kp.pubkey()),
        "secret": base58.b58encode(bytes(kp)).decode(),
    }


class FakeGateway:
    """Marketplace gateway returning canned FetchResults.

    Any attribute set to an exception instance is raised when that facet is
    queried, simulating an uncontained failure.
    """

    def __init__(self, **facets):
        self.activity = facets.get("activity", FetchResult.ok([]))
        self.tokens = facets.get("tokens", FetchResult.ok([]))
        self.escrow = facets.get("escrow", FetchResult.ok(Decimal("0")))
        self.offers_made = facets.get("offers_made", FetchResult.ok([]))
        self.offers_received = facets.get("offers_received", FetchResult.ok([]))
        self.calls: list[tuple[str, str]] = []

    async def _answer(self, facet, address):
        self.calls.append((facet, address))
        value = getattr(self, facet)
        if isinstance(value, BaseException):
            raise value
        return value

    async def fetch_activity(self, address):
        return await self._answer("activity", address)

    async def fetch_tokens(self, address):
        return await self._answer("tokens", address)

    async def fetch_escrow_balance(self, address):
        return await self._answer("escrow", address)

    async def fetch_offers_made(self, address):
        return await self._answer("offers_made", address)

    async def fetch_offers_received(self, address):
        return await self._answer("offers_received", address)


@pytest.fixture
def populated_facets():
    """One FetchResult per facet with realistic content."""
    return {
        "activity": FetchResult.ok(
            [
                ActivityRecord(type=ActivityType.BUY_NOW, price=Decimal("1.2"), token_mint="M1"),
                ActivityRecord(type=ActivityType.DELIST, token_mint="M2"),
                ActivityRecord(type=ActivityType.LIST, price=Decimal("3"), token_mint="M2"),
            ]
        ),
        "tokens": FetchResult.ok(
            [
                TokenHolding(mint="M1", name="Degen #1", listed=True, price=Decimal("4")),
                TokenHolding(mint="M3", name="Quiet #3", listed=False),
            ]
        ),
        "escrow": FetchResult.ok(Decimal("2.5")),
        "offers_made": FetchResult.ok(
            [
                Offer(token_mint="M9", price=Decimal("1.5"), name="Target #9"),
                Offer(token_mint="M8", price=Decimal("9"), cancelled_at=FIXED_NOW - timedelta(days=1)),
            ]
        ),
        "offers_received": FetchResult.ok(
            [Offer(token_mint="M1", price=Decimal("0.75"), expires_at=FIXED_NOW + timedelta(days=2))]
        ),
    }


@pytest.fixture
def mock_update():
    """Mock Telegram update with a replyable message."""
    update = MagicMock()
    update.message.text = ""
    update.message.reply_text = AsyncMock()
    update.effective_chat.id = 777
    return update


@pytest.fixture
def mock_context():
    return MagicMock()


@pytest.fixture
def make_gateway():
    """Factory for FakeGateway instances."""
    return FakeGateway


@pytest.fixture
def fixed_now():
    return FIXED_NOW

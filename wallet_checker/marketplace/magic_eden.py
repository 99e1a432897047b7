"""Magic Eden API client for wallet facet queries.

Five independent reads against /wallets/{address}/..., each with the same
failure policy: any transport error, non-success status or decode error is
logged and turned into a failed FetchResult with the facet's default value.
One facet failing never prevents the others from being reported.
"""

import asyncio
import logging
from collections.abc import Callable
from decimal import Decimal
from typing import Any, TypeVar

import aiohttp

from ..config import MarketplaceConfig
from ..exceptions import MarketplaceAPIError
from ..models import ActivityRecord, Offer, TokenHolding
from .normalizers import (
    normalize_activity,
    normalize_escrow_balance,
    normalize_offers,
    normalize_tokens,
)
from .types import FetchResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


def create_session(config: MarketplaceConfig) -> aiohttp.ClientSession:
    """Create an aiohttp session authenticated for the Magic Eden API.

    Must be called from inside a running event loop.

    Args:
        config: Marketplace settings with API key and timeout.

    Returns:
        aiohttp.ClientSession: Configured HTTP session.
    """
    connector = aiohttp.TCPConnector(limit=100, limit_per_host=30)
    timeout = aiohttp.ClientTimeout(total=config.timeout)
    headers = {
        "Authorization": f"Bearer {config.api_key}",
        "Accept": "application/json",
        "User-Agent": "MagicEdenWalletChecker/1.0",
    }
    return aiohttp.ClientSession(connector=connector, timeout=timeout, headers=headers)


class MagicEdenGateway:
    """Client for the Magic Eden v2 wallet endpoints."""

    def __init__(
        self,
        config: MarketplaceConfig,
        escrow_subunit_threshold: float = 1_000_000,
        escrow_subunit_factor: float = 1_000_000_000,
        session: aiohttp.ClientSession | None = None,
    ):
        """Initialize the gateway.

        Args:
            config: Marketplace settings.
            escrow_subunit_threshold: Escrow values at or above this are lamports.
            escrow_subunit_factor: Lamports per SOL.
            session: Optional externally managed session; created lazily otherwise.
        """
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self.escrow_subunit_threshold = Decimal(str(escrow_subunit_threshold))
        self.escrow_subunit_factor = Decimal(str(escrow_subunit_factor))
        self._session = session
        self._owns_session = session is None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Lazy initialization of the HTTP session."""
        if self._session is None or self._session.closed:
            self._session = create_session(self.config)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this gateway created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def fetch_activity(self, address: str) -> FetchResult[list[ActivityRecord]]:
        return await self._fetch(
            "activity",
            f"wallets/{address}/activities",
            normalize_activity,
            default=[],
            params={"offset": 0, "limit": self.config.activity_page_size},
        )

    async def fetch_tokens(self, address: str) -> FetchResult[list[TokenHolding]]:
        return await self._fetch("tokens", f"wallets/{address}/tokens", normalize_tokens, default=[])

    async def fetch_escrow_balance(self, address: str) -> FetchResult[Decimal]:
        return await self._fetch(
            "escrow",
            f"wallets/{address}/escrow_balance",
            lambda payload: normalize_escrow_balance(
                payload, self.escrow_subunit_threshold, self.escrow_subunit_factor
            ),
            default=Decimal("0"),
        )

    async def fetch_offers_made(self, address: str) -> FetchResult[list[Offer | None]]:
        return await self._fetch(
            "offers_made", f"wallets/{address}/offers_made", normalize_offers, default=[]
        )

    async def fetch_offers_received(self, address: str) -> FetchResult[list[Offer | None]]:
        return await self._fetch(
            "offers_received", f"wallets/{address}/offers_received", normalize_offers, default=[]
        )

    async def _fetch(
        self,
        facet: str,
        endpoint: str,
        parse: Callable[[Any], T],
        default: T,
        params: dict[str, Any] | None = None,
    ) -> FetchResult[T]:
        """Query one facet and contain its failures.

        Args:
            facet: Facet name used in logs and error text.
            endpoint: Path relative to the API root.
            parse: Normalizer for the decoded JSON payload.
            default: Value returned when the facet degrades.
            params: Optional query parameters.

        Returns:
            Parsed value, or a failed result holding default.
        """
        try:
            payload = await self._get_json(endpoint, params)
            return FetchResult.ok(parse(payload))
        except MarketplaceAPIError as e:
            logger.warning(f"Magic Eden {facet} query degraded for {endpoint}: {e}")
            return FetchResult.failed(default, f"{facet}: {e}")

    async def _get_json(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        """Make GET request and decode JSON.

        Raises:
            MarketplaceAPIError: On transport failure, timeout, non-2xx status
                or undecodable body.
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        try:
            async with self.session.get(url, params=params) as response:
                if response.status >= 400:
                    error_text = await response.text(errors="replace")
                    raise MarketplaceAPIError(
                        f"HTTP {response.status}: {error_text[:200]}", response.status
                    )
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise MarketplaceAPIError(f"Invalid JSON: {e}", response.status) from e
        except asyncio.TimeoutError as e:
            raise MarketplaceAPIError("Request timed out") from e
        except aiohttp.ClientError as e:
            raise MarketplaceAPIError(f"Request failed: {e}") from e

"""Integration tests for the Magic Eden gateway against a local fake API."""

from decimal import Decimal

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from wallet_checker.config import MarketplaceConfig
from wallet_checker.marketplace.magic_eden import MagicEdenGateway
from wallet_checker.models import ActivityType, OfferStatus

ADDRESS = "9sBtLtMHWT1Srg1Q2wQMifuY6jrt14fPv7CTpyB6aHQE"


class FakeMagicEden:
    """Serves canned responses per endpoint and records incoming requests."""

    def __init__(self):
        self.responses: dict[str, web.Response] = {}
        self.requests: list[web.Request] = []

    def set_json(self, endpoint: str, payload, status: int = 200):
        self.responses[endpoint] = web.json_response(payload, status=status)

    def set_text(self, endpoint: str, body: str, status: int = 200):
        self.responses[endpoint] = web.Response(text=body, status=status)

    def set_bytes(self, endpoint: str, body: bytes, status: int = 200):
        self.responses[endpoint] = web.Response(body=body, status=status)

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append(request)
        endpoint = request.match_info["endpoint"]
        response = self.responses.pop(endpoint, None)
        if response is None:
            return web.json_response([])
        return response

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/v2/wallets/{address}/{endpoint}", self.handle)
        return app


@pytest.fixture
def fake_api():
    return FakeMagicEden()


@pytest_asyncio.fixture
async def gateway(fake_api, monkeypatch):
    server = TestServer(fake_api.app())
    await server.start_server()
    monkeypatch.setenv("MAGIC_EDEN_BASE_URL", str(server.make_url("/v2")))
    gateway = MagicEdenGateway(MarketplaceConfig())
    yield gateway
    await gateway.close()
    await server.close()


@pytest.mark.asyncio
async def test_all_facets_parse_successfully(gateway, fake_api):
    fake_api.set_json(
        "activities", [{"type": "buyNow", "price": 2, "tokenMint": "M1", "blockTime": 1704067200}]
    )
    fake_api.set_json("tokens", [{"mintAddress": "M1", "name": "Degen", "listStatus": "listed"}])
    fake_api.set_json("escrow_balance", {"balance": 1.25})
    fake_api.set_json("offers_made", {"results": [{"tokenMint": "M2", "price": 0.5, "status": "active"}]})
    fake_api.set_json("offers_received", [])

    activity = await gateway.fetch_activity(ADDRESS)
    tokens = await gateway.fetch_tokens(ADDRESS)
    escrow = await gateway.fetch_escrow_balance(ADDRESS)
    made = await gateway.fetch_offers_made(ADDRESS)
    received = await gateway.fetch_offers_received(ADDRESS)

    assert not any(r.degraded for r in (activity, tokens, escrow, made, received))
    assert activity.value[0].type is ActivityType.BUY_NOW
    assert tokens.value[0].listed is True
    assert escrow.value == Decimal("1.25")
    assert made.value[0].status is OfferStatus.ACTIVE
    assert received.value == []


@pytest.mark.asyncio
async def test_requests_carry_bearer_token_and_activity_page(gateway, fake_api):
    await gateway.fetch_activity(ADDRESS)

    [request] = fake_api.requests
    assert request.headers["Authorization"] == "Bearer test_api_key_placeholder"
    assert request.match_info["address"] == ADDRESS
    assert request.query["offset"] == "0"
    assert request.query["limit"] == "20"


@pytest.mark.asyncio
async def test_server_error_degrades_to_default(gateway, fake_api):
    fake_api.set_text("tokens", "upstream exploded", status=500)

    result = await gateway.fetch_tokens(ADDRESS)

    assert result.degraded
    assert result.value == []
    assert "HTTP 500" in result.error
    assert result.error.startswith("tokens:")


@pytest.mark.asyncio
async def test_undecodable_error_body_degrades_to_default(gateway, fake_api):
    fake_api.set_bytes("tokens", b"\xff\xfe\xfa gateway error", status=502)

    result = await gateway.fetch_tokens(ADDRESS)

    assert result.degraded
    assert result.value == []
    assert "HTTP 502" in result.error


@pytest.mark.asyncio
async def test_undecodable_success_body_degrades_to_default(gateway, fake_api):
    fake_api.set_bytes("activities", b"\xff\xfe not json")

    result = await gateway.fetch_activity(ADDRESS)

    assert result.degraded
    assert result.value == []


@pytest.mark.asyncio
async def test_invalid_json_degrades_to_default(gateway, fake_api):
    fake_api.set_text("escrow_balance", "<html>not json</html>")

    result = await gateway.fetch_escrow_balance(ADDRESS)

    assert result.degraded
    assert result.value == Decimal("0")


@pytest.mark.asyncio
async def test_unusable_shape_degrades_to_default(gateway, fake_api):
    fake_api.set_json("offers_received", {"message": "rate limited"})

    result = await gateway.fetch_offers_received(ADDRESS)

    assert result.degraded
    assert result.value == []


@pytest.mark.asyncio
async def test_lamport_escrow_is_scaled(gateway, fake_api):
    fake_api.set_json("escrow_balance", {"amount": 2500000000})

    result = await gateway.fetch_escrow_balance(ADDRESS)

    assert result.value == Decimal("2.5")


@pytest.mark.asyncio
async def test_connection_failure_degrades_to_default(monkeypatch):
    monkeypatch.setenv("MAGIC_EDEN_BASE_URL", "http://127.0.0.1:1/v2")
    gateway = MagicEdenGateway(MarketplaceConfig())
    try:
        result = await gateway.fetch_activity(ADDRESS)
    finally:
        await gateway.close()

    assert result.degraded
    assert result.value == []
    assert "Request failed" in result.error

"""Tests for mapping raw Magic Eden payloads into models."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from wallet_checker.exceptions import PayloadShapeError
from wallet_checker.marketplace.normalizers import (
    UNREADABLE_TIMESTAMP,
    coerce_decimal,
    extract_items,
    normalize_activity,
    normalize_escrow_balance,
    normalize_offers,
    normalize_tokens,
    parse_timestamp,
)
from wallet_checker.models import ActivityType, OfferStatus

THRESHOLD = Decimal("1000000")
FACTOR = Decimal("1000000000")


@pytest.mark.parametrize(
    "value,expected",
    [
        (1.5, Decimal("1.5")),
        ("2.0", Decimal("2.0")),
        (3, Decimal("3")),
        (None, None),
        ("abc", None),
        (True, None),
        (float("nan"), None),
        ({"price": 1}, None),
    ],
)
def test_coerce_decimal(value, expected):
    assert coerce_decimal(value) == expected


def test_parse_timestamp_accepts_seconds_millis_and_iso():
    expected = datetime(2024, 1, 1, tzinfo=timezone.utc)

    assert parse_timestamp(1704067200) == expected
    assert parse_timestamp(1704067200000) == expected
    assert parse_timestamp("2024-01-01T00:00:00Z") == expected
    assert parse_timestamp("2024-01-01T00:00:00") == expected


@pytest.mark.parametrize("value", [None, 0, -1, "", "not a date", True])
def test_parse_timestamp_unset_values(value):
    assert parse_timestamp(value) is None


def test_extract_items_unwraps_envelopes():
    assert extract_items([1, 2]) == [1, 2]
    assert extract_items({"results": [1]}) == [1]
    with pytest.raises(PayloadShapeError):
        extract_items({"message": "nope"})
    with pytest.raises(PayloadShapeError):
        extract_items(None)


def test_normalize_activity_maps_types_and_skips_junk():
    payload = [
        {"type": "buyNow", "price": 1.25, "tokenMint": "M1", "blockTime": 1704067200},
        {"type": "cancelBid", "price": "0.5", "tokenMint": "M2"},
        None,
        "garbage",
    ]

    records = normalize_activity(payload)

    assert len(records) == 2
    assert records[0].type is ActivityType.BUY_NOW
    assert records[0].price == Decimal("1.25")
    assert records[0].block_time == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert records[1].type is ActivityType.OTHER


@pytest.mark.parametrize(
    "raw,listed",
    [
        ({"mintAddress": "M", "listStatus": "listed"}, True),
        ({"mintAddress": "M", "listed": True}, True),
        ({"mintAddress": "M", "onMarket": True}, True),
        ({"mintAddress": "M", "price": 1.2}, True),
        ({"mintAddress": "M", "listPrice": "0.8"}, True),
        ({"mintAddress": "M", "listStatus": "unlisted", "price": 0}, False),
        ({"mintAddress": "M", "listed": "yes"}, False),
        ({"mintAddress": "M"}, False),
    ],
)
def test_normalize_tokens_listing_signals(raw, listed):
    [token] = normalize_tokens([raw])

    assert token.listed is listed


def test_normalize_tokens_aliases_and_missing_mint():
    tokens = normalize_tokens(
        [
            {"mint": "M1", "title": "Title Only", "listPrice": 2},
            {"name": "No mint"},
        ]
    )

    assert len(tokens) == 1
    assert tokens[0].mint == "M1"
    assert tokens[0].name == "Title Only"
    assert tokens[0].price == Decimal("2")


def test_normalize_offers_statuses_and_names():
    offers = normalize_offers(
        [
            {"tokenMint": "M1", "price": 1, "status": "active", "token": {"name": "Token One"}},
            {"tokenMint": "M2", "offerPrice": "2.5", "status": "Canceled"},
            {"tokenMint": "M3", "status": "pending-review", "collection": {"name": "Coll"}},
            None,
        ]
    )

    assert offers[0].status is OfferStatus.ACTIVE
    assert offers[0].name == "Token One"
    assert offers[1].status is OfferStatus.CANCELLED
    assert offers[1].price == Decimal("2.5")
    assert offers[2].status is OfferStatus.UNKNOWN
    assert offers[2].name == "Coll"
    assert offers[3] is None


def test_normalize_offers_timestamp_aliases():
    [offer] = normalize_offers(
        [{"tokenMint": "M", "canceledAt": "yes", "expiry": 1704067200, "status": None}]
    )

    assert offer.status is None
    assert offer.cancelled_at == UNREADABLE_TIMESTAMP
    assert offer.expires_at == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_escrow_lamport_scale_amount_is_converted():
    assert normalize_escrow_balance({"amount": 2500000000}, THRESHOLD, FACTOR) == Decimal("2.5")


@pytest.mark.parametrize(
    "payload,expected",
    [
        (1.75, Decimal("1.75")),
        ("0.5", Decimal("0.5")),
        ({"sol": 3}, Decimal("3")),
        ({"balance": 4.2}, Decimal("4.2")),
        ({"escrowBalance": 1}, Decimal("1")),
        ({"lamports": 500000000000}, Decimal("500")),
        (-3, Decimal("0")),
    ],
)
def test_escrow_payload_variants(payload, expected):
    assert normalize_escrow_balance(payload, THRESHOLD, FACTOR) == expected


@pytest.mark.parametrize("payload", [None, {"unexpected": 1}, [1, 2], "n/a"])
def test_escrow_unusable_payload_raises_shape_error(payload):
    with pytest.raises(PayloadShapeError):
        normalize_escrow_balance(payload, THRESHOLD, FACTOR)


@pytest.mark.parametrize("price", [0, "", None, False])
def test_offer_price_falls_through_to_offer_price_alias(price):
    [offer] = normalize_offers([{"tokenMint": "M", "price": price, "offerPrice": "0.8"}])

    assert offer.price == Decimal("0.8")


def test_offer_price_wins_over_alias_when_set():
    [offer] = normalize_offers([{"tokenMint": "M", "price": "1.5", "offerPrice": "0.8"}])

    assert offer.price == Decimal("1.5")

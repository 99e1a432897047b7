"""Mapping of raw Magic Eden JSON into typed entities.

The marketplace API does not guarantee its response shapes: fields go
missing, get renamed, or change type between number and object. Every
function here accepts the untyped payload and returns models from
wallet_checker.models, skipping entries it cannot use. Only a top-level
payload of the wrong shape raises, as PayloadShapeError.
"""

import logging
import math
from collections.abc import Mapping
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from ..exceptions import PayloadShapeError
from ..models import ActivityRecord, ActivityType, Offer, OfferStatus, TokenHolding

logger = logging.getLogger(__name__)

LIST_WRAPPER_KEYS = ("results", "data", "activities", "tokens", "offers")
ESCROW_AMOUNT_KEYS = ("sol", "balance", "amount", "escrowBalance", "escrow_balance", "lamports")

# Stands in for a timestamp field that is set but unreadable.
UNREADABLE_TIMESTAMP = datetime(1970, 1, 1, tzinfo=timezone.utc)


def coerce_decimal(value: Any) -> Decimal | None:
    """Convert a loosely typed numeric value to Decimal.

    Args:
        value: Number, numeric string, Decimal or anything else.

    Returns:
        Finite Decimal, or None for missing and non-numeric values.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value)) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            return None
        return result if result.is_finite() else None
    return None


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 string or unix seconds/milliseconds into UTC.

    Non-positive numbers mean "not set" and return None.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float, Decimal)):
        seconds = float(value)
        if not math.isfinite(seconds) or seconds <= 0:
            return None
        if seconds > 1e12:
            seconds /= 1000
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        numeric = coerce_decimal(text)
        if numeric is not None:
            return parse_timestamp(numeric)
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    return None


def _marker_timestamp(value: Any) -> datetime | None:
    """Parse a timestamp whose mere presence is meaningful.

    A truthy value that cannot be read as a time still counts as set:
    true, negative or out-of-range numbers and free text all map to the epoch.
    Zero, false and empty values mean unset.
    """
    parsed = parse_timestamp(value)
    if parsed is None and value:
        return UNREADABLE_TIMESTAMP
    return parsed


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    """Return the first non-None value among alias keys."""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, Mapping):
        value = value.get("name") or value.get("symbol")
        if value is None:
            return None
    text = str(value).strip()
    return text or None


def extract_items(payload: Any) -> list[Any]:
    """Return the list of entries in a list payload.

    Accepts a bare JSON array or an object wrapping the array under one of
    the common envelope keys.

    Raises:
        PayloadShapeError: If no list can be found.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        for key in LIST_WRAPPER_KEYS:
            items = payload.get(key)
            if isinstance(items, list):
                return items
    raise PayloadShapeError(f"Expected a list payload, got {type(payload).__name__}")


def normalize_activity(payload: Any) -> list[ActivityRecord]:
    """Map an activities payload to ActivityRecord entries, upstream order kept."""
    records: list[ActivityRecord] = []
    for raw in extract_items(payload):
        if not isinstance(raw, Mapping):
            continue
        records.append(
            ActivityRecord(
                type=ActivityType.parse(raw.get("type")),
                price=coerce_decimal(_first(raw, "price", "amount")),
                token_mint=str(_first(raw, "tokenMint", "mintAddress", "mint") or ""),
                block_time=parse_timestamp(_first(raw, "blockTime", "createdAt")),
                collection=_optional_str(_first(raw, "collection", "collectionSymbol")),
            )
        )
    return records


def is_listed_payload(raw: Mapping[str, Any]) -> bool:
    """Check the listing signals of a raw token entry.

    Any single signal qualifies: a "listed" list status, a true listed or
    onMarket flag, or a positive price or listPrice.
    """
    if str(raw.get("listStatus") or "").lower() == "listed":
        return True
    if raw.get("listed") is True or raw.get("onMarket") is True:
        return True
    for key in ("price", "listPrice"):
        price = coerce_decimal(raw.get(key))
        if price is not None and price > 0:
            return True
    return False


def normalize_tokens(payload: Any) -> list[TokenHolding]:
    """Map a tokens payload to TokenHolding entries.

    Entries without a mint address are dropped; the mint is the token's identity.
    """
    holdings: list[TokenHolding] = []
    for raw in extract_items(payload):
        if not isinstance(raw, Mapping):
            continue
        mint = _first(raw, "mintAddress", "mint", "tokenMint")
        if not mint:
            continue
        price = coerce_decimal(raw.get("price"))
        if price is None or price <= 0:
            price = coerce_decimal(raw.get("listPrice"))
        holdings.append(
            TokenHolding(
                mint=str(mint),
                name=_optional_str(_first(raw, "name", "title")),
                collection=_optional_str(_first(raw, "collection", "collectionName")),
                listed=is_listed_payload(raw),
                price=price,
            )
        )
    return holdings


def normalize_offers(payload: Any) -> list[Offer | None]:
    """Map an offers payload to Offer entries.

    Non-object entries are kept as None so the active-offer filter sees the
    payload as it arrived.
    """
    offers: list[Offer | None] = []
    for raw in extract_items(payload):
        if not isinstance(raw, Mapping):
            offers.append(None)
            continue
        token = raw.get("token")
        name = _optional_str(token) if isinstance(token, Mapping) else None
        if name is None:
            name = _optional_str(raw.get("collection"))
        offers.append(
            Offer(
                token_mint=str(_first(raw, "tokenMint", "mintAddress", "mint") or ""),
                price=coerce_decimal(raw.get("price") or raw.get("offerPrice")),
                status=OfferStatus.parse(raw.get("status")),
                cancelled_at=_marker_timestamp(_first(raw, "cancelledAt", "canceledAt")),
                expires_at=_marker_timestamp(_first(raw, "expiresAt", "expiry", "expiration")),
                name=name,
            )
        )
    return offers


def normalize_escrow_balance(
    payload: Any,
    subunit_threshold: Decimal,
    subunit_factor: Decimal,
) -> Decimal:
    """Extract the escrow balance in SOL.

    Args:
        payload: Bare number, numeric string, or object carrying the amount.
        subunit_threshold: Values at or above this are treated as lamports.
        subunit_factor: Lamports per SOL.

    Returns:
        Non-negative balance in SOL.

    Raises:
        PayloadShapeError: If no amount can be found.
    """
    if isinstance(payload, Mapping):
        amount = None
        for key in ESCROW_AMOUNT_KEYS:
            amount = coerce_decimal(payload.get(key))
            if amount is not None:
                break
    else:
        amount = coerce_decimal(payload)

    if amount is None:
        raise PayloadShapeError(f"No escrow amount in payload: {payload!r}")

    if amount >= subunit_threshold:
        logger.debug(f"Escrow amount {amount} looks like lamports, converting")
        amount = amount / subunit_factor

    return max(amount, Decimal("0"))

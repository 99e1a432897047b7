"""Bot utility functions for message rendering and delivery."""

import logging
from decimal import Decimal

from telegram.constants import MessageLimit
from telegram.helpers import escape_markdown

logger = logging.getLogger(__name__)


def format_sol(value: Decimal | None, places: int | None = None) -> str:
    """Format a SOL amount for display.

    Args:
        value: Amount in SOL, None renders as "0".
        places: Fixed number of decimals; None strips trailing zeros.

    Returns:
        Plain decimal string without exponent notation.
    """
    if value is None:
        value = Decimal("0")
    if places is not None:
        return f"{value:.{places}f}"
    normalized = value.normalize()
    if normalized == 0:
        return "0"
    return f"{normalized:f}"


def escape_name(text: str) -> str:
    """Escape upstream-provided text for legacy Markdown messages."""
    return escape_markdown(text, version=1)


def split_message(text: str, limit: int = MessageLimit.MAX_TEXT_LENGTH) -> list[str]:
    """Split a long message on line boundaries to fit Telegram's limit.

    Lines longer than the limit on their own are hard-wrapped.

    Args:
        text: Full message text.
        limit: Maximum characters per chunk.

    Returns:
        Non-empty chunks in order.
    """
    if len(text) <= limit:
        return [text]

    chunks: list[str] = []
    current = ""
    for line in text.split("\n"):
        while len(line) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:limit])
            line = line[limit:]

        candidate = f"{current}\n{line}" if current else line
        if len(candidate) > limit:
            chunks.append(current)
            current = line
        else:
            current = candidate

    if current:
        chunks.append(current)

    logger.debug("Split message of %d chars into %d chunks", len(text), len(chunks))
    return [chunk for chunk in chunks if chunk]

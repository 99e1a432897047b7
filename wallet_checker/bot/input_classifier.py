"""Wallet identifier extraction from free-form messages.

Recognizes Solana public addresses anywhere in the text and base58 private
keys sent on a line of their own. Key handling follows the Solana
convention of a 64-byte secret: 32-byte seed followed by the public key.
"""

from __future__ import annotations

import logging
import re
from typing import Final

import base58
from solders.keypair import Keypair

from ..models import WalletIdentifier

logger = logging.getLogger(__name__)

SECRET_KEY_LENGTH: Final[int] = 64
MIN_ADDRESS_LENGTH: Final[int] = 32
MAX_ADDRESS_LENGTH: Final[int] = 44


class InputClassifier:
    """Turns message text into wallet identifiers."""

    ADDRESS_PATTERN: Final[re.Pattern[str]] = re.compile(r"[1-9A-HJ-NP-Za-km-z]{32,44}")

    def decode_secret_key(self, candidate: str) -> WalletIdentifier | None:
        """Try to read a base58 64-byte secret key.

        The public half must match the key derived from the seed half.

        Args:
            candidate: Trimmed text that may be a private key.

        Returns:
            Identifier carrying the secret, or None if it is not a valid key.
        """
        try:
            secret = base58.b58decode(candidate)
        except ValueError:
            return None
        if len(secret) != SECRET_KEY_LENGTH:
            return None

        keypair = Keypair.from_seed(secret[:32])
        if bytes(keypair.pubkey()) != secret[32:]:
            logger.debug("Rejected 64-byte key whose public half does not match its seed")
            return None

        return WalletIdentifier(address=str(keypair.pubkey()), secret=candidate)

    def extract_identifiers(self, text: str | None) -> list[WalletIdentifier]:
        """Scan every line for addresses and private keys.

        A line can yield several identifiers: each address-shaped substring,
        plus the line itself when it decodes as a private key. Order follows
        the text and duplicates are kept.
        """
        if not text:
            return []

        identifiers: list[WalletIdentifier] = []
        for line in text.splitlines():
            trimmed = line.strip()
            if not trimmed:
                continue

            for address in self.ADDRESS_PATTERN.findall(trimmed):
                identifiers.append(WalletIdentifier(address=address))

            from_secret = self.decode_secret_key(trimmed)
            if from_secret is not None:
                identifiers.append(from_secret)

        logger.debug("Extracted %d wallet identifiers from text", len(identifiers))
        return identifiers

    def classify_single(self, text: str | None) -> WalletIdentifier | None:
        """Treat the whole text as one candidate.

        Tries the private-key decode first, then accepts any 32-44 character
        string as a bare address.
        """
        trimmed = (text or "").strip()
        if not trimmed:
            return None

        from_secret = self.decode_secret_key(trimmed)
        if from_secret is not None:
            return from_secret

        if MIN_ADDRESS_LENGTH <= len(trimmed) <= MAX_ADDRESS_LENGTH:
            return WalletIdentifier(address=trimmed)

        return None

    def classify(self, text: str | None) -> list[WalletIdentifier]:
        """Full classification pipeline used by message handlers.

        Returns:
            Identifiers in input order; an empty list means invalid input.
        """
        identifiers = self.extract_identifiers(text)
        if identifiers:
            return identifiers

        single = self.classify_single(text)
        return [single] if single is not None else []

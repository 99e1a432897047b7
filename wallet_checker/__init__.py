"""Magic Eden Wallet Checker Bot package.

A Telegram bot that accepts Solana wallet addresses or base58 private keys
and reports the wallet's Magic Eden activity: trading history, listed NFTs,
escrow balance and active offers made and received.

The application follows a modular architecture with separate concerns for:
- Bot handlers, input classification and message formatting
- Marketplace API access with per-facet failure containment
- Report aggregation, filtering and batch processing
"""

__version__ = "1.0.0"

"""Marketplace API access package.

Contains the Magic Eden client, the normalizers that map its loosely shaped
JSON into typed models, and the FetchResult type that makes per-facet
failure containment explicit.
"""

from .base import MarketplaceGateway
from .magic_eden import MagicEdenGateway, create_session
from .types import FetchResult

__all__ = ["FetchResult", "MagicEdenGateway", "MarketplaceGateway", "create_session"]

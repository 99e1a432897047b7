"""Sequential multi-wallet checking with a fixed pace."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field

from ..config import ReportConfig
from ..exceptions import WalletCheckFailed
from ..models import WalletIdentifier, WalletReport
from .report_builder import WalletReportBuilder

logger = logging.getLogger(__name__)


@dataclass
class BatchEntry:
    """Result for one wallet in a batch: a report or an error."""

    identifier: WalletIdentifier
    report: WalletReport | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.report is not None


@dataclass
class BatchOutcome:
    """All checked wallets plus how many were left out."""

    total: int
    entries: list[BatchEntry] = field(default_factory=list)

    @property
    def truncated(self) -> int:
        return max(self.total - len(self.entries), 0)


class BatchChecker:
    """Checks several wallets one after another.

    The cap and the delay between checks keep a single message from
    bursting the marketplace API.
    """

    def __init__(
        self,
        builder: WalletReportBuilder,
        config: ReportConfig,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.builder = builder
        self.max_wallets = config.batch_max_wallets
        self.delay_seconds = config.batch_delay_seconds
        self._sleep = sleep

    async def check_many(self, identifiers: Sequence[WalletIdentifier]) -> BatchOutcome:
        """Check up to max_wallets identifiers sequentially.

        A failed wallet becomes an error entry and the batch continues.

        Args:
            identifiers: Classified wallets in input order.

        Returns:
            BatchOutcome with one entry per checked wallet.
        """
        outcome = BatchOutcome(total=len(identifiers))
        selected = identifiers[: self.max_wallets]

        for index, identifier in enumerate(selected):
            try:
                report = await self.builder.build_report(identifier.address)
                outcome.entries.append(BatchEntry(identifier=identifier, report=report))
            except WalletCheckFailed as e:
                logger.warning(f"Batch check failed for {identifier.address}: {e.cause}")
                outcome.entries.append(BatchEntry(identifier=identifier, error=str(e.cause)))

            if index < len(selected) - 1:
                await self._sleep(self.delay_seconds)

        if outcome.truncated:
            logger.info(f"Batch truncated: checked {len(selected)} of {outcome.total} wallets")
        return outcome

"""Response formatting for wallet reports.

Turns WalletReport objects and batch outcomes into Markdown chat messages.
Names coming from the marketplace are escaped; addresses and keys are
base58 and go inside code spans as they are.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from ..config import ReportConfig
from ..models import ActivityRecord, Offer, TokenHolding, WalletIdentifier, WalletReport
from ..services.batch_checker import BatchOutcome
from .messages import (
    ADDRESS_LINE,
    BATCH_HEADER,
    BATCH_LOADING_MESSAGE,
    BATCH_OFFERS_LINE,
    BATCH_STATS_LINE,
    BATCH_TRUNCATED_NOTICE,
    BATCH_WALLET_ERROR_LINE,
    BATCH_WALLET_LINE,
    CHECKED_AT_FORMAT,
    CHECKED_AT_LINE,
    DEGRADED_LINE,
    ESCROW_LINE,
    FACET_NAMES,
    LISTED_LINE,
    LISTED_TOKENS_HEADER,
    MAGIC_EDEN_LINK,
    MARK_NO,
    MARK_YES,
    NO_PRICE,
    NUMBERED_ITEM_LINE,
    OFFERS_MADE_HEADER,
    OFFERS_MADE_LINE,
    OFFERS_RECEIVED_HEADER,
    OFFERS_RECEIVED_LINE,
    OFFERS_TOTAL_LINE,
    QUICK_LINKS_HEADER,
    RECENT_ACTIVITY_HEADER,
    REPORT_HEADER,
    RESULTS_HEADER,
    SECRET_KEY_LINE,
    SOLSCAN_LINK,
    TRADING_LINE,
    UNKNOWN_NAME,
)
from .utils import escape_name, format_sol

logger = logging.getLogger(__name__)

SHORT_ADDRESS_LENGTH = 12


def _mark(flag: bool) -> str:
    return MARK_YES if flag else MARK_NO


class ReportFormatter:
    """Formats bot responses for single wallet reports and batches."""

    def __init__(
        self,
        config: ReportConfig,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize report formatter.

        Args:
            config: Report settings, for the secret key display toggle.
            clock: Time source for the footer timestamp.
        """
        self.reveal_secret_keys = config.reveal_secret_keys
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def format_report(self, report: WalletReport, identifier: WalletIdentifier | None = None) -> str:
        """Format the full report for a single wallet.

        Args:
            report: Aggregated wallet report.
            identifier: Identifier the report was built for, used for the key line.

        Returns:
            Markdown message text.
        """
        sections: list[list[str]] = [
            [REPORT_HEADER],
            [ADDRESS_LINE.format(address=report.address)],
        ]

        if identifier is not None and identifier.has_secret and self.reveal_secret_keys:
            sections.append([SECRET_KEY_LINE.format(secret=identifier.secret)])

        sections.append(self._summary_lines(report))

        if report.recent_activity:
            sections.append(self._activity_lines(report.recent_activity))

        if report.listed_tokens:
            sections.append(self._listed_lines(report.listed_tokens))

        if report.offers_made:
            sections.append(
                self._offer_lines(
                    OFFERS_MADE_HEADER, report.offers_made, format_sol(report.offers_made_total, 4)
                )
            )

        if report.offers_received:
            sections.append(
                self._offer_lines(
                    OFFERS_RECEIVED_HEADER,
                    report.offers_received,
                    format_sol(report.offers_received_total, 4),
                )
            )

        sections.append(
            [
                QUICK_LINKS_HEADER,
                MAGIC_EDEN_LINK.format(address=report.address),
                SOLSCAN_LINK.format(address=report.address),
            ]
        )
        sections.append([self._timestamp_line(report.checked_at)])

        return "\n\n".join("\n".join(lines) for lines in sections)

    def format_batch(self, outcome: BatchOutcome) -> str:
        """Format the compact multi-wallet summary.

        Args:
            outcome: Result of BatchChecker.check_many.

        Returns:
            Markdown message text, ending with a truncation notice when
            some wallets were not checked.
        """
        blocks: list[str] = [BATCH_HEADER.format(count=outcome.total)]

        for index, entry in enumerate(outcome.entries, start=1):
            short_address = entry.identifier.address[:SHORT_ADDRESS_LENGTH]
            report = entry.report
            if report is None:
                blocks.append(
                    BATCH_WALLET_ERROR_LINE.format(index=index, short_address=short_address)
                )
                continue

            blocks.append(
                "\n".join(
                    [
                        BATCH_WALLET_LINE.format(index=index, short_address=short_address),
                        BATCH_STATS_LINE.format(
                            trading=report.trading_count,
                            listed=report.listed_count,
                            escrow=format_sol(report.escrow_balance),
                        ),
                        BATCH_OFFERS_LINE.format(
                            made_count=report.offers_made_count,
                            made_total=format_sol(report.offers_made_total, 2),
                            received_count=report.offers_received_count,
                            received_total=format_sol(report.offers_received_total, 2),
                        ),
                    ]
                )
            )

        if outcome.truncated:
            blocks.append(
                BATCH_TRUNCATED_NOTICE.format(
                    shown=len(outcome.entries),
                    total=outcome.total,
                    remaining=outcome.truncated,
                )
            )

        return "\n\n".join(blocks)

    def format_batch_loading(self, count: int) -> str:
        return BATCH_LOADING_MESSAGE.format(count=count)

    def _summary_lines(self, report: WalletReport) -> list[str]:
        lines = [
            RESULTS_HEADER,
            TRADING_LINE.format(mark=_mark(report.has_trading), count=report.trading_count),
            LISTED_LINE.format(mark=_mark(report.has_listed), count=report.listed_count),
            ESCROW_LINE.format(
                mark=_mark(report.escrow_balance > 0), balance=format_sol(report.escrow_balance)
            ),
            OFFERS_MADE_LINE.format(
                mark=_mark(report.has_offers_made),
                count=report.offers_made_count,
                total=format_sol(report.offers_made_total, 4),
            ),
            OFFERS_RECEIVED_LINE.format(
                mark=_mark(report.has_offers_received),
                count=report.offers_received_count,
                total=format_sol(report.offers_received_total, 4),
            ),
        ]
        if report.degraded_facets:
            facets = "، ".join(FACET_NAMES.get(f, f) for f in report.degraded_facets)
            lines.append(DEGRADED_LINE.format(facets=facets))
        return lines

    def _activity_lines(self, activity: list[ActivityRecord]) -> list[str]:
        lines = [RECENT_ACTIVITY_HEADER]
        for index, record in enumerate(activity, start=1):
            price = f"{format_sol(record.price)} SOL" if record.price is not None else NO_PRICE
            lines.append(NUMBERED_ITEM_LINE.format(index=index, name=record.type.value, price=price))
        return lines

    def _listed_lines(self, tokens: list[TokenHolding]) -> list[str]:
        lines = [LISTED_TOKENS_HEADER.format(count=len(tokens))]
        for index, token in enumerate(tokens, start=1):
            price = f"{format_sol(token.price)} SOL" if token.price is not None else NO_PRICE
            lines.append(
                NUMBERED_ITEM_LINE.format(
                    index=index,
                    name=escape_name(token.name or UNKNOWN_NAME),
                    price=price,
                )
            )
        return lines

    def _offer_lines(self, header: str, offers: list[Offer], total: str) -> list[str]:
        lines = [header.format(count=len(offers))]
        for index, offer in enumerate(offers, start=1):
            price = f"{format_sol(offer.price)} SOL" if offer.price is not None else NO_PRICE
            lines.append(
                NUMBERED_ITEM_LINE.format(
                    index=index,
                    name=escape_name(offer.name or UNKNOWN_NAME),
                    price=price,
                )
            )
        lines.append(OFFERS_TOTAL_LINE.format(total=total))
        return lines

    def _timestamp_line(self, checked_at: datetime | None) -> str:
        moment = checked_at or self._clock()
        return CHECKED_AT_LINE.format(
            timestamp=moment.astimezone(timezone.utc).strftime(CHECKED_AT_FORMAT)
        )

"""Telegram bot handlers.

Thin handlers that delegate to the input classifier, the report builder,
the batch checker and the report formatter. All collaborators are passed
in through the constructor; nothing here reads global configuration.
"""

import logging

from telegram import KeyboardButton, Message, ReplyKeyboardMarkup, Update
from telegram.constants import ParseMode
from telegram.ext import ContextTypes

from ..exceptions import WalletCheckFailed
from ..models import WalletIdentifier
from ..services.batch_checker import BatchChecker
from ..services.report_builder import WalletReportBuilder
from .input_classifier import InputClassifier
from .messages import (
    CHECK_FAILED_MESSAGE,
    CHECK_WALLET_BUTTON,
    INVALID_INPUT_MESSAGE,
    LOADING_MESSAGE,
    SEND_ADDRESS_PROMPT,
    START_MESSAGE,
)
from .response_formatter import ReportFormatter
from .utils import split_message

logger = logging.getLogger(__name__)


class WalletCheckHandlers:
    """Message and command handlers for the wallet checker bot."""

    def __init__(
        self,
        classifier: InputClassifier,
        builder: WalletReportBuilder,
        batch_checker: BatchChecker,
        formatter: ReportFormatter,
    ) -> None:
        self.classifier = classifier
        self.builder = builder
        self.batch_checker = batch_checker
        self.formatter = formatter

    async def start(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /start and /help commands.

        Sends usage instructions with a one-button reply keyboard.

        Args:
            update: Telegram update object containing message data.
            context: Bot context for accessing application instance.
        """
        if not update.message:
            return

        keyboard = ReplyKeyboardMarkup(
            [[KeyboardButton(CHECK_WALLET_BUTTON)]], resize_keyboard=True
        )
        await update.message.reply_text(
            START_MESSAGE, parse_mode=ParseMode.MARKDOWN, reply_markup=keyboard
        )

    async def handle_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle text messages containing wallet addresses or keys.

        Args:
            update: Telegram update object containing message data.
            context: Bot context for accessing application instance.
        """
        message = update.message
        if not message or not message.text:
            return

        text = message.text
        if text.strip() == CHECK_WALLET_BUTTON:
            await message.reply_text(SEND_ADDRESS_PROMPT)
            return

        chat_id = update.effective_chat.id if update.effective_chat else None
        logger.info(f"Wallet check requested in chat {chat_id}")

        await message.reply_text(LOADING_MESSAGE, parse_mode=ParseMode.MARKDOWN)

        identifiers = self.classifier.classify(text)
        if not identifiers:
            await message.reply_text(INVALID_INPUT_MESSAGE, parse_mode=ParseMode.MARKDOWN)
            return

        if len(identifiers) == 1:
            await self._check_single(message, identifiers[0])
        else:
            await self._check_batch(message, identifiers)

    async def _check_single(self, message: Message, identifier: WalletIdentifier) -> None:
        try:
            report = await self.builder.build_report(identifier.address)
        except WalletCheckFailed as e:
            logger.error(f"Single wallet check failed: {e}")
            await message.reply_text(CHECK_FAILED_MESSAGE, parse_mode=ParseMode.MARKDOWN)
            return

        await self._reply_chunks(message, self.formatter.format_report(report, identifier))

    async def _check_batch(self, message: Message, identifiers: list[WalletIdentifier]) -> None:
        await message.reply_text(
            self.formatter.format_batch_loading(len(identifiers)), parse_mode=ParseMode.MARKDOWN
        )
        outcome = await self.batch_checker.check_many(identifiers)
        await self._reply_chunks(message, self.formatter.format_batch(outcome))

    async def _reply_chunks(self, message: Message, text: str) -> None:
        for chunk in split_message(text):
            await message.reply_text(
                chunk, parse_mode=ParseMode.MARKDOWN, disable_web_page_preview=True
            )

    async def error_handler(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Log unhandled errors and tell the user something went wrong."""
        logger.error("Unhandled error while processing update", exc_info=context.error)

        if isinstance(update, Update) and update.effective_message:
            try:
                await update.effective_message.reply_text(
                    CHECK_FAILED_MESSAGE, parse_mode=ParseMode.MARKDOWN
                )
            except Exception as e:
                logger.warning(f"Failed to send error message: {e}")

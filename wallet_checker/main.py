"""Application entry point.

Main module that initializes and runs the Telegram bot application. Handles
both webhook mode (when a public domain is configured) and polling mode,
in which the HTTP status page is served on the same port setting.
Configures logging and registers bot handlers.
"""

import logging

from telegram.ext import Application, CommandHandler, MessageHandler, filters

from .config import Config, load_config
from .core.container import Container

logger = logging.getLogger(__name__)


def build_application(container: Container) -> Application:
    """Create the Telegram application with handlers and lifecycle hooks.

    Args:
        container: Wired application container.

    Returns:
        Configured python-telegram-bot Application.
    """
    config: Config = container.config()
    handlers = container.handlers()

    async def post_init(application: Application) -> None:
        if not config.bot.use_webhook:
            try:
                await container.health_server().start()
            except OSError as e:
                logger.warning(f"Health page could not start: {e}")

    async def post_shutdown(application: Application) -> None:
        await container.health_server().stop()
        await container.gateway().close()
        logger.info("Marketplace session closed")

    app = (
        Application.builder()
        .token(config.bot.bot_token)
        .post_init(post_init)
        .post_shutdown(post_shutdown)
        .build()
    )

    app.add_handler(CommandHandler(["start", "help"], handlers.start))
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handlers.handle_message))
    app.add_error_handler(handlers.error_handler)

    return app


def main() -> None:
    """Main application entry point.

    Loads configuration, wires components, and starts the bot in either
    webhook mode or polling mode.

    Raises:
        ConfigurationError: If TELEGRAM_BOT_TOKEN or MAGIC_EDEN_API_KEY is not set.
    """
    config = load_config()

    logging.basicConfig(
        format="%(asctime)s - %(levelname)s - %(message)s",
        level=config.bot.log_level.upper(),
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    container = Container(config=config)
    app = build_application(container)

    if config.bot.use_webhook:
        path = f"/{config.bot.bot_token}"
        webhook_url = f"https://{config.bot.webhook_domain}{path}"
        logger.info(f"Starting webhook at https://{config.bot.webhook_domain}/<token>")

        app.run_webhook(
            listen=config.bot.listen_host,
            port=config.bot.port,
            url_path=path,
            webhook_url=webhook_url,
        )
    else:
        logger.info("No webhook domain configured; using long polling")
        app.run_polling()


if __name__ == "__main__":
    main()

"""Configuration management for the wallet checker bot.

Handles all application configuration including environment variables, the
optional YAML report settings file, and default values. Provides structured
configuration classes for the bot, the marketplace API client and report
building. A single Config instance is built at startup by load_config() and
passed explicitly to the components that need it.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing or invalid."""


class BotConfig(BaseSettings):
    """Telegram bot configuration.

    Attributes:
        bot_token: Telegram bot API token from environment.
        port: Port for the health page (polling) or the webhook listener.
        listen_host: Interface the HTTP listener binds to.
        webhook_domain: Public domain for webhook mode, None for polling.
        log_level: Root logging level name.
    """

    bot_token: str = Field(..., validation_alias="TELEGRAM_BOT_TOKEN")
    port: int = Field(default=3000, validation_alias="PORT")
    listen_host: str = Field(default="0.0.0.0", validation_alias="BOT_LISTEN_HOST")
    webhook_domain: str | None = Field(default=None, validation_alias="WEBHOOK_DOMAIN")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @property
    def use_webhook(self) -> bool:
        """Determine if webhook mode should be used.

        Returns:
            True if webhook domain is configured, False for polling mode.
        """
        return bool(self.webhook_domain)


class MarketplaceConfig(BaseSettings):
    """Magic Eden API client settings.

    Attributes:
        api_key: Bearer token for the Magic Eden API.
        base_url: API root, without trailing slash.
        timeout: Per-request timeout in seconds.
        activity_page_size: Number of activity records requested per wallet.
    """

    api_key: str = Field(..., validation_alias="MAGIC_EDEN_API_KEY")
    base_url: str = Field(
        default="https://api-mainnet.magiceden.dev/v2",
        validation_alias="MAGIC_EDEN_BASE_URL",
    )
    timeout: float = Field(default=20.0, validation_alias="MAGIC_EDEN_TIMEOUT")
    activity_page_size: int = 20


class ReportConfig(BaseSettings):
    """Report building and batch processing parameters.

    Attributes:
        recent_activity_limit: How many trading records a report keeps.
        batch_max_wallets: Maximum wallets checked per message.
        batch_delay_seconds: Pause between successive wallet checks in a batch.
        report_timeout_seconds: Deadline for one wallet report, None disables it.
        escrow_subunit_threshold: Escrow values at or above this are lamports.
        escrow_subunit_factor: Lamports per SOL.
        reveal_secret_keys: Echo a supplied private key back in the report.
    """

    recent_activity_limit: int = 5
    batch_max_wallets: int = 5
    batch_delay_seconds: float = 0.5
    report_timeout_seconds: float | None = 60.0
    escrow_subunit_threshold: float = 1_000_000
    escrow_subunit_factor: float = 1_000_000_000
    reveal_secret_keys: bool = True


class Config:
    """Application configuration container.

    Loads the environment-backed sections and applies overrides from
    report.yml when it exists.
    """

    def __init__(self, config_dir: Path | None = None):
        """Initialize configuration.

        Args:
            config_dir: Directory holding report.yml, defaults to wallet_checker/config.

        Raises:
            ConfigurationError: If either environment-backed section is invalid.
        """
        if config_dir is None:
            config_dir = Path(__file__).parent / "config"

        self.config_dir = Path(config_dir)

        errors: list[ValidationError] = []
        self.bot = _load_section(BotConfig, errors)
        self.marketplace = _load_section(MarketplaceConfig, errors)
        if errors:
            raise _configuration_error(errors)

        self.report = ReportConfig(**self._load_report_overrides())

    def _load_report_overrides(self) -> dict[str, Any]:
        """Read report tuning values from report.yml.

        Returns:
            Mapping of ReportConfig field names to values, empty if no file.
        """
        report_path = self.config_dir / "report.yml"
        if not report_path.exists():
            return {}

        with open(report_path) as f:
            data = yaml.safe_load(f) or {}

        report_data = data.get("report", {})
        batch_data = data.get("batch", {})
        escrow_data = data.get("escrow", {})

        overrides: dict[str, Any] = {}
        if "recent_activity_limit" in report_data:
            overrides["recent_activity_limit"] = report_data["recent_activity_limit"]
        if "timeout_seconds" in report_data:
            overrides["report_timeout_seconds"] = report_data["timeout_seconds"]
        if "reveal_secret_keys" in report_data:
            overrides["reveal_secret_keys"] = report_data["reveal_secret_keys"]
        if "max_wallets" in batch_data:
            overrides["batch_max_wallets"] = batch_data["max_wallets"]
        if "delay_seconds" in batch_data:
            overrides["batch_delay_seconds"] = batch_data["delay_seconds"]
        if "subunit_threshold" in escrow_data:
            overrides["escrow_subunit_threshold"] = escrow_data["subunit_threshold"]
        if "subunit_factor" in escrow_data:
            overrides["escrow_subunit_factor"] = escrow_data["subunit_factor"]
        return overrides


def _load_section(section: type[BaseSettings], errors: list[ValidationError]) -> Any:
    """Build one environment-backed section, collecting its validation error."""
    try:
        return section()
    except ValidationError as e:
        errors.append(e)
        return None


def _configuration_error(errors: list[ValidationError]) -> ConfigurationError:
    missing = sorted(
        str(loc)
        for e in errors
        for error in e.errors()
        if error["type"] == "missing"
        for loc in error["loc"]
    )
    if missing:
        message = f"Set {' and '.join(missing)} environment variable(s)"
    else:
        message = "Invalid configuration: " + "; ".join(str(e) for e in errors)
    error = ConfigurationError(message)
    error.__cause__ = errors[0]
    return error


def load_config(config_dir: Path | None = None) -> Config:
    """Build the application configuration.

    Args:
        config_dir: Optional override for the report.yml directory.

    Returns:
        Fully populated Config.

    Raises:
        ConfigurationError: If TELEGRAM_BOT_TOKEN or MAGIC_EDEN_API_KEY is
            missing, or any setting is invalid.
    """
    try:
        return Config(config_dir)
    except ValidationError as e:
        raise _configuration_error([e]) from e

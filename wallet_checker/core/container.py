"""Dependency-injection container.

Wires the application's components together from a single Config object
built at startup, so no component looks up configuration on its own.
"""

from dependency_injector import containers, providers

from wallet_checker.bot.handlers import WalletCheckHandlers
from wallet_checker.bot.input_classifier import InputClassifier
from wallet_checker.bot.response_formatter import ReportFormatter
from wallet_checker.config import Config
from wallet_checker.health import HealthServer
from wallet_checker.marketplace.magic_eden import MagicEdenGateway
from wallet_checker.services.batch_checker import BatchChecker
from wallet_checker.services.report_builder import WalletReportBuilder


class Container(containers.DeclarativeContainer):
    """DI container for the application.

    This container holds the wiring for all the application's components.
    """

    config = providers.Dependency(instance_of=Config)

    # Services
    gateway = providers.Singleton(
        MagicEdenGateway,
        config=config.provided.marketplace,
        escrow_subunit_threshold=config.provided.report.escrow_subunit_threshold,
        escrow_subunit_factor=config.provided.report.escrow_subunit_factor,
    )
    report_builder = providers.Singleton(
        WalletReportBuilder, gateway=gateway, config=config.provided.report
    )
    batch_checker = providers.Singleton(
        BatchChecker, builder=report_builder, config=config.provided.report
    )
    health_server = providers.Singleton(
        HealthServer, host=config.provided.bot.listen_host, port=config.provided.bot.port
    )

    # Bot components
    input_classifier = providers.Singleton(InputClassifier)
    report_formatter = providers.Singleton(ReportFormatter, config=config.provided.report)
    handlers = providers.Singleton(
        WalletCheckHandlers,
        classifier=input_classifier,
        builder=report_builder,
        batch_checker=batch_checker,
        formatter=report_formatter,
    )

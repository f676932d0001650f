"""
RDS Failover - Point d'entrée CLI

Choisit le mode (monitor ou failover), charge la configuration puis lance
la boucle correspondante. Aucune boucle ne démarre sans configuration
valide ni avec un mode inconnu.

Codes de sortie:
    0  succès (récupération constatée ou surveillance arrêtée)
    1  erreur (configuration, control plane, instance introuvable)
    2  mode invalide
    3  récupération non constatée dans le délai imparti
"""

import argparse
import asyncio
import signal
import sys
import uuid
from enum import Enum
from typing import Callable, List, Optional, Sequence, Union

from rds_failover.core import DEFAULT_CONFIG_PATH, ConfigError, ConfigLoader, SimulationConfig
from rds_failover.ha import (
    ConsoleReporter,
    ControlPlaneError,
    FailoverError,
    FailoverOrchestrator,
    FailoverResult,
    IControlPlaneClient,
    InstanceMonitor,
    IReporter,
    PollResult,
    RecoveryTimeoutError,
    StatusPoller,
)
from rds_failover.logging import (
    IStructuredLogger,
    LogConfig,
    LogLevel,
    StructuredLogger,
    file_output_handler,
)
from rds_failover.network import (
    InvalidTimeoutError,
    ITimeoutManager,
    RdsControlPlaneClient,
    TimeoutConfig,
    TimeoutManager,
)


EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_RECOVERY_TIMEOUT = 3

ClientFactory = Callable[[ITimeoutManager, Optional[str], Optional[str]], IControlPlaneClient]


class Mode(Enum):
    """Modes d'exécution."""

    MONITOR = "monitor"
    FAILOVER = "failover"


class InvalidModeError(ValueError):
    """Mode inconnu."""

    def __init__(self, value: str) -> None:
        self.value = value
        expected = ", ".join(m.value for m in Mode)
        super().__init__(f"Invalid mode specified: {value!r} (expected one of: {expected})")


def parse_mode(value: str) -> Mode:
    """
    Résout le sélecteur de mode.

    Raises:
        InvalidModeError: Si la valeur n'est ni monitor ni failover.
    """
    try:
        return Mode(value.strip().lower())
    except (ValueError, AttributeError):
        raise InvalidModeError(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rds-failover",
        description="Observe or exercise the Multi-AZ failover of an RDS instance.",
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help="Path to configuration file (default: %(default)s)",
    )
    parser.add_argument(
        "--mode",
        default=Mode.MONITOR.value,
        help="Simulation mode: monitor or failover (default: %(default)s)",
    )
    parser.add_argument("--region", default=None, help="AWS region (overrides config)")
    parser.add_argument("--profile", default=None, help="AWS named profile")
    parser.add_argument("--log-file", default=None, help="Append JSON diagnostic logs to this file")
    parser.add_argument(
        "--log-level",
        default=LogLevel.INFO.value,
        help="Diagnostic log level: DEBUG, INFO, WARN, ERROR, CRITICAL (default: %(default)s)",
    )
    return parser


def build_logger(
    config: SimulationConfig,
    log_file: Optional[str] = None,
    log_level: str = LogLevel.INFO.value,
) -> StructuredLogger:
    """
    Crée le journal de diagnostic d'une exécution.

    Raises:
        ConfigError: Si le niveau de log est inconnu ou si le fichier de
            log ne peut pas être ouvert.
    """
    try:
        level = LogLevel.from_name(log_level)
    except ValueError as e:
        raise ConfigError(f"invalid log level: {log_level}") from e

    output_handler = None
    if log_file:
        try:
            output_handler = file_output_handler(log_file)
        except OSError as e:
            raise ConfigError(f"cannot open log file {log_file}: {e}") from e

    return StructuredLogger(
        "rds-failover",
        config=LogConfig(
            min_level=level,
            default_instance_id=config.target.db_identifier,
            default_correlation_id=str(uuid.uuid4()),
        ),
        output_handler=output_handler,
    )


def build_timeouts(config: SimulationConfig) -> TimeoutManager:
    """
    Raises:
        ConfigError: Si les timeouts dépassent les limites autorisées.
    """
    try:
        return TimeoutManager(
            TimeoutConfig(
                connection_timeout=config.polling.connect_timeout,
                request_timeout=config.polling.request_timeout,
            )
        )
    except InvalidTimeoutError as e:
        raise ConfigError(str(e)) from e


def _default_client_factory(
    timeouts: ITimeoutManager,
    region: Optional[str],
    profile: Optional[str],
) -> IControlPlaneClient:
    return RdsControlPlaneClient.from_session(timeouts, region=region, profile=profile)


def _install_stop_handlers(stop: Callable[[], None]) -> List[signal.Signals]:
    """
    Branche SIGINT/SIGTERM sur stop().

    Le premier signal arrête la boucle entre deux itérations; le handler
    est ensuite retiré, un second Ctrl+C interrompt normalement.
    """
    loop = asyncio.get_running_loop()
    installed: List[signal.Signals] = []

    for sig in (signal.SIGINT, signal.SIGTERM):

        def _handler(sig: signal.Signals = sig) -> None:
            stop()
            loop.remove_signal_handler(sig)

        try:
            loop.add_signal_handler(sig, _handler)
        except (NotImplementedError, RuntimeError):
            # Windows ou thread secondaire: arrêt par KeyboardInterrupt uniquement
            continue
        installed.append(sig)

    return installed


async def dispatch(
    mode: Mode,
    config: SimulationConfig,
    client: IControlPlaneClient,
    reporter: IReporter,
    logger: IStructuredLogger,
    poller: Optional[StatusPoller] = None,
    install_signal_handlers: bool = True,
) -> Union[PollResult, FailoverResult]:
    """
    Lance la boucle correspondant au mode.

    Args:
        mode: Mode validé.
        config: Configuration chargée (cible obligatoire).
        client: Control plane.
        reporter: Sortie opérateur.
        logger: Journal de diagnostic.
        poller: Boucle de polling (construite depuis config si None).
        install_signal_handlers: Brancher SIGINT/SIGTERM sur stop().
    """
    poller = poller or StatusPoller(
        reporter,
        logger,
        request_timeout=config.polling.request_timeout,
    )

    if mode == Mode.MONITOR:
        runner: Union[InstanceMonitor, FailoverOrchestrator] = InstanceMonitor(
            config.target,
            client,
            poller,
            reporter,
            logger,
            interval=config.polling.monitor_interval,
        )
    else:
        runner = FailoverOrchestrator(
            config.target,
            client,
            poller,
            reporter,
            logger,
            interval=config.polling.failover_interval,
            recovery_timeout=config.polling.recovery_timeout,
        )

    installed = _install_stop_handlers(runner.stop) if install_signal_handlers else []
    try:
        return await runner.run()
    finally:
        loop = asyncio.get_running_loop()
        for sig in installed:
            loop.remove_signal_handler(sig)


async def run(
    args: argparse.Namespace,
    reporter: IReporter,
    client_factory: ClientFactory = _default_client_factory,
    loader: Optional[ConfigLoader] = None,
) -> int:
    """
    Exécute l'outil à partir des arguments analysés.

    Returns:
        Code de sortie.
    """
    reporter.header("RDS Failover Simulation Tool")
    reporter.info(f"Mode: {args.mode}")

    try:
        mode = parse_mode(args.mode)
    except InvalidModeError as e:
        reporter.failure(str(e))
        return EXIT_USAGE

    try:
        config = await (loader or ConfigLoader()).load(args.config)
        timeouts = build_timeouts(config)
        logger = build_logger(config, args.log_file, args.log_level)
    except ConfigError as e:
        reporter.failure(f"Error loading configuration: {e}")
        return EXIT_ERROR

    region = args.region or config.polling.region

    try:
        client = client_factory(timeouts, region, args.profile)
        await dispatch(mode, config, client, reporter, logger)
    except RecoveryTimeoutError as e:
        reporter.failure(f"Error: {e}")
        return EXIT_RECOVERY_TIMEOUT
    except (FailoverError, ControlPlaneError) as e:
        reporter.failure(f"Error: {e}")
        return EXIT_ERROR

    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    reporter = ConsoleReporter()

    try:
        return asyncio.run(run(args, reporter))
    except KeyboardInterrupt:
        reporter.failure("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())

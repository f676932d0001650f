"""
Surveillance passive d'une instance RDS.

Interroge le statut à cadence fixe et restitue chaque observation.
Aucune terminaison naturelle: la boucle tourne jusqu'à stop() ou jusqu'à
la fin du processus. Aucune mutation de l'état distant.
"""

from rds_failover.core import InstanceTarget
from rds_failover.ha.interfaces import (
    IControlPlaneClient,
    IInstanceMonitor,
    InstanceSnapshot,
    IReporter,
    PollResult,
    StatusCategory,
)
from rds_failover.ha.poller import StatusPoller
from rds_failover.logging import IStructuredLogger


class InstanceMonitor(IInstanceMonitor):
    """Surveillance continue du statut d'une instance."""

    DEFAULT_INTERVAL: float = 5.0

    def __init__(
        self,
        target: InstanceTarget,
        client: IControlPlaneClient,
        poller: StatusPoller,
        reporter: IReporter,
        logger: IStructuredLogger,
        interval: float = DEFAULT_INTERVAL,
    ) -> None:
        """
        Initialise la surveillance.

        Args:
            target: Instance observée.
            client: Control plane (partagé, non possédé).
            poller: Boucle de polling.
            reporter: Sortie opérateur.
            logger: Journal de diagnostic.
            interval: Attente entre deux polls, en secondes.
        """
        self._target = target
        self._client = client
        self._poller = poller
        self._reporter = reporter
        self._logger = logger
        self._interval = interval

    @property
    def target(self) -> InstanceTarget:
        return self._target

    @property
    def interval(self) -> float:
        return self._interval

    async def _describe(self) -> InstanceSnapshot:
        return await self._client.describe_instance(self._target.db_identifier)

    @staticmethod
    def _keep_going(category: StatusCategory) -> bool:
        return True

    async def run(self) -> PollResult:
        """
        Surveille l'instance jusqu'à stop().

        Returns:
            PollResult avec outcome STOPPED.

        Raises:
            InstanceNotFoundError: Si l'identifiant ne correspond à aucune instance.
        """
        self._reporter.success("Starting RDS monitoring...")
        self._reporter.info(f"Instance: {self._target.db_identifier}")
        self._reporter.info(f"Endpoint: {self._target.address}")
        self._logger.info("monitor_started", interval=self._interval)

        result = await self._poller.poll(
            self._describe,
            interval=self._interval,
            should_continue=self._keep_going,
        )

        self._logger.info("monitor_stopped", polls=result.polls, outcome=result.outcome.value)
        return result

    def stop(self) -> None:
        self._poller.stop()

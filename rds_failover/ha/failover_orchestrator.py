"""
Exercice de failover forcé.

Déclenche un redémarrage avec basculement vers le standby Multi-AZ, puis
interroge le statut jusqu'au retour à HEALTHY.

États:
    IDLE → FAILOVER_REQUESTED → RECOVERING → RECOVERED
    RECOVERING → TIMED_OUT si le plafond de récupération est atteint
    RECOVERING → INTERRUPTED sur stop()
    * → FAILED si la demande échoue ou si l'instance n'existe pas
"""

from typing import Optional

from rds_failover.core import InstanceTarget
from rds_failover.ha.interfaces import (
    ControlPlaneError,
    FailoverResult,
    FailoverState,
    IControlPlaneClient,
    IFailoverOrchestrator,
    InstanceNotFoundError,
    InstanceSnapshot,
    IReporter,
    PollOutcome,
    StatusCategory,
)
from rds_failover.ha.poller import StatusPoller
from rds_failover.logging import IStructuredLogger


class FailoverError(Exception):
    """Erreur lors de l'exercice de failover."""

    pass


class FailoverTriggerError(FailoverError):
    """La demande de failover a été refusée ou n'a pas abouti."""

    pass


class RecoveryTimeoutError(FailoverError):
    """L'instance n'est pas revenue à HEALTHY dans le délai imparti."""

    def __init__(self, db_identifier: str, timeout: float, polls: int) -> None:
        self.db_identifier = db_identifier
        self.timeout = timeout
        self.polls = polls
        super().__init__(
            f"recovery of {db_identifier} timed out after {timeout:g}s ({polls} polls)"
        )


class FailoverOrchestrator(IFailoverOrchestrator):
    """
    Orchestration d'un failover forcé et de la récupération.

    Une instance d'orchestrateur ne sert qu'à un seul exercice.
    """

    DEFAULT_INTERVAL: float = 10.0
    DEFAULT_RECOVERY_TIMEOUT: float = 1800.0

    def __init__(
        self,
        target: InstanceTarget,
        client: IControlPlaneClient,
        poller: StatusPoller,
        reporter: IReporter,
        logger: IStructuredLogger,
        interval: float = DEFAULT_INTERVAL,
        recovery_timeout: Optional[float] = DEFAULT_RECOVERY_TIMEOUT,
    ) -> None:
        """
        Initialise l'orchestrateur.

        Args:
            target: Instance à faire basculer.
            client: Control plane (partagé, non possédé).
            poller: Boucle de polling.
            reporter: Sortie opérateur.
            logger: Journal de diagnostic.
            interval: Attente entre deux polls de récupération, en secondes.
            recovery_timeout: Plafond d'attente en secondes, None = non borné.
        """
        self._target = target
        self._client = client
        self._poller = poller
        self._reporter = reporter
        self._logger = logger
        self._interval = interval
        self._recovery_timeout = recovery_timeout
        self._state = FailoverState.IDLE

    @property
    def state(self) -> FailoverState:
        return self._state

    @property
    def recovery_timeout(self) -> Optional[float]:
        return self._recovery_timeout

    async def _describe(self) -> InstanceSnapshot:
        return await self._client.describe_instance(self._target.db_identifier)

    async def _request_failover(self) -> None:
        await self._client.force_failover(self._target.db_identifier)

    @staticmethod
    def _not_recovered(category: StatusCategory) -> bool:
        return category != StatusCategory.HEALTHY

    async def trigger(self) -> None:
        """
        Demande le failover au control plane.

        Raises:
            FailoverTriggerError: Si la demande échoue.
            FailoverError: Si un exercice a déjà été lancé.
        """
        if self._state != FailoverState.IDLE:
            raise FailoverError(f"Failover already started (state: {self._state.value})")

        self._reporter.warning("Initiating failover simulation...")
        self._reporter.info(f"Target instance: {self._target.db_identifier}")

        try:
            await self._poller.call(self._request_failover)
        except ControlPlaneError as e:
            self._state = FailoverState.FAILED
            self._logger.error("failover_trigger_failed", error=str(e))
            raise FailoverTriggerError(f"failed to trigger failover: {e}") from e

        self._state = FailoverState.FAILOVER_REQUESTED
        self._logger.info("failover_requested")
        self._reporter.success("Failover initiated successfully")

    async def run(self) -> FailoverResult:
        """
        Déclenche le failover puis attend la récupération.

        Returns:
            FailoverResult (recovered=True, ou outcome STOPPED si interrompu).

        Raises:
            FailoverTriggerError: Si la demande échoue (aucun poll effectué).
            RecoveryTimeoutError: Si le plafond de récupération est atteint.
            InstanceNotFoundError: Si l'instance disparaît pendant la récupération.
        """
        await self.trigger()

        self._state = FailoverState.RECOVERING
        self._reporter.header("Monitoring failover status...")

        try:
            result = await self._poller.poll(
                self._describe,
                interval=self._interval,
                should_continue=self._not_recovered,
                deadline=self._recovery_timeout,
            )
        except InstanceNotFoundError:
            self._state = FailoverState.FAILED
            raise

        if result.outcome == PollOutcome.TIMED_OUT:
            self._state = FailoverState.TIMED_OUT
            timeout = self._recovery_timeout or result.elapsed
            self._logger.error("recovery_timed_out", polls=result.polls, elapsed=result.elapsed)
            self._reporter.failure(f"Recovery timed out after {timeout:g}s")
            raise RecoveryTimeoutError(self._target.db_identifier, timeout, result.polls)

        if result.outcome == PollOutcome.STOPPED:
            self._state = FailoverState.INTERRUPTED
            self._logger.warn("recovery_interrupted", polls=result.polls)
            self._reporter.warning("Failover monitoring interrupted before recovery")
            return FailoverResult(
                recovered=False,
                outcome=result.outcome,
                polls=result.polls,
                elapsed=result.elapsed,
            )

        self._state = FailoverState.RECOVERED
        self._logger.info("failover_recovered", polls=result.polls, elapsed=result.elapsed)
        self._reporter.success("Failover completed successfully")
        return FailoverResult(
            recovered=True,
            outcome=result.outcome,
            polls=result.polls,
            elapsed=result.elapsed,
        )

    def stop(self) -> None:
        self._poller.stop()

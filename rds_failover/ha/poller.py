"""
Polling du control plane.

Primitive partagée par la surveillance et le failover: attendre
l'intervalle, interroger, classer, restituer, réévaluer le prédicat.

Deux modes d'échec par requête:
    - ControlPlaneError (réseau, auth, throttling, timeout): restitué,
      la boucle continue au tick suivant (pas de retry ni de backoff).
    - InstanceNotFoundError: terminal, la boucle s'arrête et l'erreur
      remonte à l'appelant.
"""

import asyncio
import time
from datetime import datetime
from typing import Awaitable, Callable, Optional, TypeVar

from rds_failover.ha.interfaces import (
    ControlPlaneError,
    ControlPlaneTimeoutError,
    InstanceNotFoundError,
    InstanceSnapshot,
    IReporter,
    PollOutcome,
    PollResult,
    StatusCategory,
)
from rds_failover.ha.status_classifier import StatusClassifier
from rds_failover.logging import IStructuredLogger

T = TypeVar("T")

SnapshotQuery = Callable[[], Awaitable[InstanceSnapshot]]
ContinuePredicate = Callable[[StatusCategory], bool]


class StatusPoller:
    """
    Boucle de polling interruptible.

    L'attente entre deux requêtes est le seul point de suspension hors
    appels réseau; stop() prend effet à la fin de l'attente en cours,
    jamais au milieu d'un appel. sleep et clock sont injectables pour
    les tests (horloge déterministe).

    Un poller sert une seule exécution: stop() est définitif, y compris
    s'il est appelé avant poll(). Tout poll() ultérieur retourne STOPPED
    sans interroger le control plane.
    """

    DEFAULT_REQUEST_TIMEOUT: float = 30.0

    def __init__(
        self,
        reporter: IReporter,
        logger: IStructuredLogger,
        classifier: Optional[StatusClassifier] = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        """
        Initialise le poller.

        Args:
            reporter: Sortie opérateur.
            logger: Journal de diagnostic.
            classifier: Table de classification (défaut si None).
            request_timeout: Durée max d'un appel au control plane.
            sleep: Attente personnalisée (tests). Par défaut, attente
                interrompue par stop().
            clock: Horloge monotone pour le plafond de durée.
            now: Horloge murale pour l'horodatage des lignes.

        Raises:
            ValueError: Si request_timeout n'est pas positif.
        """
        if request_timeout <= 0:
            raise ValueError("request_timeout must be positive")

        self._reporter = reporter
        self._logger = logger
        self._classifier = classifier or StatusClassifier()
        self._request_timeout = request_timeout
        self._sleep = sleep
        self._clock = clock
        self._now = now
        self._stop_event = asyncio.Event()

    @property
    def request_timeout(self) -> float:
        return self._request_timeout

    @property
    def stop_requested(self) -> bool:
        return self._stop_event.is_set()

    def stop(self) -> None:
        """Demande l'arrêt de la boucle entre deux itérations."""
        self._stop_event.set()

    async def _wait(self, interval: float) -> None:
        if self._sleep is not None:
            await self._sleep(interval)
            return

        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=interval)
        except asyncio.TimeoutError:
            pass

    async def call(self, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Exécute un appel au control plane borné par request_timeout.

        Raises:
            ControlPlaneTimeoutError: Si l'appel dépasse le délai.
        """
        try:
            return await asyncio.wait_for(operation(), timeout=self._request_timeout)
        except asyncio.TimeoutError as e:
            raise ControlPlaneTimeoutError(
                f"control plane call timed out after {self._request_timeout}s"
            ) from e

    async def poll(
        self,
        query: SnapshotQuery,
        interval: float,
        should_continue: ContinuePredicate,
        deadline: Optional[float] = None,
    ) -> PollResult:
        """
        Interroge le control plane jusqu'à ce que should_continue renvoie False.

        Args:
            query: Requête renvoyant un InstanceSnapshot.
            interval: Attente avant chaque requête, en secondes.
            should_continue: Prédicat sur la catégorie (True = continuer).
            deadline: Durée max en secondes, None = non bornée.

        Returns:
            PollResult (COMPLETED, STOPPED ou TIMED_OUT).

        Raises:
            InstanceNotFoundError: Si l'instance n'existe pas.
            ValueError: Si interval est négatif.
        """
        if interval < 0:
            raise ValueError("interval cannot be negative")

        started = self._clock()
        polls = 0
        last_category: Optional[StatusCategory] = None

        while True:
            await self._wait(interval)

            if self._stop_event.is_set():
                return PollResult(
                    outcome=PollOutcome.STOPPED,
                    polls=polls,
                    last_category=last_category,
                    elapsed=self._clock() - started,
                )

            polls += 1
            observed_at = self._now()

            try:
                snapshot = await self.call(query)
            except InstanceNotFoundError as e:
                self._reporter.poll_error(e, observed_at)
                self._logger.error("instance_not_found", error=str(e), poll=polls)
                raise
            except ControlPlaneError as e:
                self._reporter.poll_error(e, observed_at)
                self._logger.warn("poll_failed", error=str(e), poll=polls)
                category = StatusCategory.UNKNOWN
            else:
                category = self._classifier.classify(snapshot.status)
                self._reporter.snapshot(snapshot, category, observed_at)
                self._logger.debug(
                    "poll_completed",
                    status=snapshot.status,
                    availability_zone=snapshot.availability_zone,
                    category=category.value,
                    poll=polls,
                )

            last_category = category
            elapsed = self._clock() - started

            if not should_continue(category):
                return PollResult(
                    outcome=PollOutcome.COMPLETED,
                    polls=polls,
                    last_category=category,
                    elapsed=elapsed,
                )

            if deadline is not None and elapsed >= deadline:
                return PollResult(
                    outcome=PollOutcome.TIMED_OUT,
                    polls=polls,
                    last_category=category,
                    elapsed=elapsed,
                )

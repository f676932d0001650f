"""
Haute Disponibilité: Interfaces

Définit les contrats pour l'observation et l'exercice du failover
d'une instance RDS Multi-AZ: classification des statuts, control plane,
restitution console, surveillance et failover forcé.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class StatusCategory(Enum):
    """
    Catégorie opérateur dérivée du statut brut du control plane.

    Ensemble fermé: tout statut non reconnu (y compris vide) est UNKNOWN.
    """

    HEALTHY = "healthy"
    TRANSITIONAL = "transitional"
    UNKNOWN = "unknown"


class PollOutcome(Enum):
    """Raison de fin d'une boucle de polling."""

    COMPLETED = "completed"  # le prédicat de continuation est devenu faux
    STOPPED = "stopped"  # arrêt demandé entre deux itérations
    TIMED_OUT = "timed_out"  # plafond de durée atteint


class FailoverState(Enum):
    """États de l'orchestrateur de failover."""

    IDLE = "idle"
    FAILOVER_REQUESTED = "failover_requested"
    RECOVERING = "recovering"
    RECOVERED = "recovered"
    TIMED_OUT = "timed_out"
    INTERRUPTED = "interrupted"
    FAILED = "failed"


@dataclass(frozen=True)
class InstanceSnapshot:
    """
    Résultat d'une requête au control plane.

    Éphémère: produit à chaque poll, jamais conservé après restitution.
    """

    status: str
    availability_zone: str


@dataclass
class PollResult:
    """Bilan d'une boucle de polling."""

    outcome: PollOutcome
    polls: int
    last_category: Optional[StatusCategory]
    elapsed: float


@dataclass
class FailoverResult:
    """Bilan d'un exercice de failover."""

    recovered: bool
    outcome: PollOutcome
    polls: int
    elapsed: float


class ControlPlaneError(Exception):
    """Échec d'un appel au control plane (réseau, auth, throttling)."""

    pass


class ControlPlaneTimeoutError(ControlPlaneError):
    """Appel au control plane sans réponse dans le délai imparti."""

    pass


class InstanceNotFoundError(ControlPlaneError):
    """Aucune instance ne correspond à l'identifiant (erreur terminale)."""

    def __init__(self, db_identifier: str) -> None:
        self.db_identifier = db_identifier
        super().__init__(f"no DB instance found: {db_identifier}")


class IControlPlaneClient(ABC):
    """
    Interface control plane de la base managée.

    Les implémentations ne conservent aucun état entre deux appels.
    """

    @abstractmethod
    async def describe_instance(self, db_identifier: str) -> InstanceSnapshot:
        """
        Récupère le statut et la zone de disponibilité de l'instance.

        Raises:
            InstanceNotFoundError: Si aucune instance ne correspond.
            ControlPlaneError: Si l'appel échoue.
        """
        pass

    @abstractmethod
    async def force_failover(self, db_identifier: str) -> None:
        """
        Redémarre l'instance en forçant le basculement vers le standby.

        Raises:
            ControlPlaneError: Si l'appel échoue.
        """
        pass


class IReporter(ABC):
    """
    Interface de restitution opérateur.

    Porte seule le traitement visuel de chaque catégorie.
    """

    @abstractmethod
    def header(self, message: str) -> None:
        """Affiche un titre."""
        pass

    @abstractmethod
    def info(self, message: str) -> None:
        """Affiche une information."""
        pass

    @abstractmethod
    def success(self, message: str) -> None:
        """Affiche un succès."""
        pass

    @abstractmethod
    def warning(self, message: str) -> None:
        """Affiche un avertissement."""
        pass

    @abstractmethod
    def failure(self, message: str) -> None:
        """Affiche un échec (sortie d'erreur)."""
        pass

    @abstractmethod
    def snapshot(
        self,
        snapshot: InstanceSnapshot,
        category: StatusCategory,
        observed_at: datetime,
    ) -> None:
        """Affiche une ligne de statut horodatée."""
        pass

    @abstractmethod
    def poll_error(self, error: Exception, observed_at: datetime) -> None:
        """Affiche l'échec d'un poll, horodaté."""
        pass


class IInstanceMonitor(ABC):
    """Interface surveillance passive d'une instance."""

    @abstractmethod
    async def run(self) -> PollResult:
        """
        Surveille l'instance jusqu'à arrêt externe.

        Raises:
            InstanceNotFoundError: Si l'instance n'existe pas.
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Demande l'arrêt entre deux itérations."""
        pass


class IFailoverOrchestrator(ABC):
    """Interface exercice de failover forcé."""

    @abstractmethod
    async def run(self) -> FailoverResult:
        """
        Déclenche le failover puis attend le retour à HEALTHY.

        Raises:
            FailoverTriggerError: Si la demande de failover échoue.
            RecoveryTimeoutError: Si l'instance ne revient pas à temps.
            InstanceNotFoundError: Si l'instance n'existe pas.
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Demande l'arrêt entre deux itérations."""
        pass

    @property
    @abstractmethod
    def state(self) -> FailoverState:
        """État courant de l'orchestrateur."""
        pass

"""
Network - Interfaces

Timeouts des appels au control plane RDS.

Un appel bloqué ne doit jamais figer la boucle de polling: chaque requête
est bornée par un timeout de connexion et un timeout de requête.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class TimeoutType(Enum):
    """Types de timeout supportés."""

    CONNECTION = "connection"
    REQUEST = "request"


@dataclass(frozen=True)
class TimeoutConfig:
    """
    Configuration des timeouts.

    connection_timeout: établissement de la connexion HTTPS (max 10s)
    request_timeout: durée totale d'un appel API (max 60s)
    """

    connection_timeout: float = 10.0
    request_timeout: float = 30.0


class ITimeoutManager(ABC):
    """Timeouts validés des appels au control plane."""

    @abstractmethod
    def get_timeout(self, timeout_type: TimeoutType) -> float:
        """
        Retourne le timeout configuré, en secondes.

        Args:
            timeout_type: Type de timeout
        """
        pass

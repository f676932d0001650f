"""
Haute Disponibilité: observation et exercice du failover RDS Multi-AZ

- Classification des statuts du control plane (HEALTHY, TRANSITIONAL, UNKNOWN)
- Boucle de polling interruptible, bornée par un timeout par appel
- Surveillance passive (cadence 5s, sans fin)
- Failover forcé puis attente du retour à HEALTHY (cadence 10s, plafonnée)
"""
from .interfaces import (
    # Enums
    StatusCategory,
    PollOutcome,
    FailoverState,
    # Data classes
    InstanceSnapshot,
    PollResult,
    FailoverResult,
    # Interfaces
    IControlPlaneClient,
    IReporter,
    IInstanceMonitor,
    IFailoverOrchestrator,
    # Exceptions
    ControlPlaneError,
    ControlPlaneTimeoutError,
    InstanceNotFoundError,
)
from .status_classifier import StatusClassifier, classify
from .poller import StatusPoller
from .reporter import ConsoleReporter
from .instance_monitor import InstanceMonitor
from .failover_orchestrator import (
    FailoverOrchestrator,
    FailoverError,
    FailoverTriggerError,
    RecoveryTimeoutError,
)

__all__ = [
    # Enums
    "StatusCategory",
    "PollOutcome",
    "FailoverState",
    # Data classes
    "InstanceSnapshot",
    "PollResult",
    "FailoverResult",
    # Interfaces
    "IControlPlaneClient",
    "IReporter",
    "IInstanceMonitor",
    "IFailoverOrchestrator",
    # Implementations
    "StatusClassifier",
    "classify",
    "StatusPoller",
    "ConsoleReporter",
    "InstanceMonitor",
    "FailoverOrchestrator",
    # Exceptions
    "ControlPlaneError",
    "ControlPlaneTimeoutError",
    "InstanceNotFoundError",
    "FailoverError",
    "FailoverTriggerError",
    "RecoveryTimeoutError",
]

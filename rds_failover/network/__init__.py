"""
Network

Accès au control plane RDS:
- Timeouts de connexion (max 10s) et de requête (max 60s)
- Client boto3 sans retry automatique
"""

from .interfaces import (
    # Enums
    TimeoutType,
    # Dataclasses
    TimeoutConfig,
    # Interfaces
    ITimeoutManager,
)
from .timeout_manager import (
    TimeoutManager,
    # Exceptions
    InvalidTimeoutError,
)
from .rds_control_plane import (
    RdsControlPlaneClient,
    build_client_config,
    NOT_FOUND_ERROR_CODES,
)

__all__ = [
    # Enums
    "TimeoutType",
    # Dataclasses
    "TimeoutConfig",
    # Interfaces
    "ITimeoutManager",
    # Implementations
    "TimeoutManager",
    "RdsControlPlaneClient",
    "build_client_config",
    "NOT_FOUND_ERROR_CODES",
    # Exceptions
    "InvalidTimeoutError",
]

"""
Network - Timeout Manager

Gestion centralisée des timeouts du control plane.

Limites:
    Timeout connexion 10 secondes max
    Timeout requête 60 secondes max
"""

from typing import Optional

from .interfaces import ITimeoutManager, TimeoutConfig, TimeoutType


class InvalidTimeoutError(Exception):
    """Configuration timeout invalide."""

    pass


class TimeoutManager(ITimeoutManager):
    """Timeouts validés, partagés par tous les appels au control plane."""

    MAX_CONNECTION_TIMEOUT: float = 10.0
    MAX_REQUEST_TIMEOUT: float = 60.0

    def __init__(self, config: Optional[TimeoutConfig] = None) -> None:
        """
        Initialise le gestionnaire de timeouts.

        Args:
            config: Configuration des timeouts (défaut si None)

        Raises:
            InvalidTimeoutError: Si la configuration est invalide
        """
        self._config = config or TimeoutConfig()

        self._validate_config(self._config)

    def _validate_config(self, config: TimeoutConfig) -> None:
        """
        Valide une configuration complète.

        Raises:
            InvalidTimeoutError: Si configuration invalide
        """
        if config.connection_timeout <= 0:
            raise InvalidTimeoutError("connection_timeout must be positive")

        if config.connection_timeout > self.MAX_CONNECTION_TIMEOUT:
            raise InvalidTimeoutError(
                f"connection_timeout ({config.connection_timeout}s) exceeds "
                f"maximum ({self.MAX_CONNECTION_TIMEOUT}s)"
            )

        if config.request_timeout <= 0:
            raise InvalidTimeoutError("request_timeout must be positive")

        if config.request_timeout > self.MAX_REQUEST_TIMEOUT:
            raise InvalidTimeoutError(
                f"request_timeout ({config.request_timeout}s) exceeds "
                f"maximum ({self.MAX_REQUEST_TIMEOUT}s)"
            )

    def get_timeout(self, timeout_type: TimeoutType) -> float:
        """
        Retourne le timeout configuré.

        Args:
            timeout_type: Type de timeout demandé

        Returns:
            Valeur du timeout en secondes
        """
        if timeout_type == TimeoutType.CONNECTION:
            return self._config.connection_timeout
        elif timeout_type == TimeoutType.REQUEST:
            return self._config.request_timeout
        else:
            raise ValueError(f"Unknown timeout type: {timeout_type}")

"""
RDS Failover - Core Interfaces
Modèles de configuration et contrat du chargeur de configuration.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════════
# TYPES
# ══════════════════════════════════════════════════════════════════════════════


class InstanceTarget(BaseModel):
    """
    Instance RDS observée.

    Créée une seule fois depuis la configuration, jamais modifiée ensuite.
    endpoint et port sont descriptifs (bannières de démarrage uniquement).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    db_identifier: str = Field(alias="dbIdentifier", min_length=1)
    endpoint: str = ""
    port: Optional[int] = Field(default=None, ge=1, le=65535)

    @field_validator("db_identifier")
    @classmethod
    def _strip_identifier(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("dbIdentifier cannot be blank")
        return value

    @property
    def address(self) -> str:
        """Endpoint affiché dans les bannières (endpoint:port si port connu)."""
        if self.port:
            return f"{self.endpoint}:{self.port}"
        return self.endpoint


class PollingSettings(BaseModel):
    """Cadences de polling et timeouts du control plane."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    monitor_interval: float = Field(default=5.0, alias="monitorInterval", ge=0)
    failover_interval: float = Field(default=10.0, alias="failoverInterval", ge=0)
    # None = attente de récupération non bornée
    recovery_timeout: Optional[float] = Field(default=1800.0, alias="recoveryTimeout", ge=0)
    request_timeout: float = Field(default=30.0, alias="requestTimeout", gt=0)
    connect_timeout: float = Field(default=10.0, alias="connectTimeout", gt=0)
    region: Optional[str] = None

    @field_validator("recovery_timeout")
    @classmethod
    def _zero_means_unbounded(cls, value: Optional[float]) -> Optional[float]:
        if value == 0:
            return None
        return value


class SimulationConfig(BaseModel):
    """Configuration complète chargée depuis le fichier (cible + polling)."""

    model_config = ConfigDict(frozen=True)

    target: InstanceTarget
    polling: PollingSettings = Field(default_factory=PollingSettings)


# ══════════════════════════════════════════════════════════════════════════════
# INTERFACES
# ══════════════════════════════════════════════════════════════════════════════


class IConfigLoader(ABC):
    """Charge la configuration de simulation depuis un fichier."""

    @abstractmethod
    async def load(self, path: Union[str, Path]) -> SimulationConfig:
        """
        Charge et valide la configuration.

        Raises:
            ConfigError: Si fichier illisible, mal formé ou invalide
        """
        pass

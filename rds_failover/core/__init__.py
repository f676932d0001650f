"""
Core: configuration de la simulation.

Expose le chargeur de configuration et les modèles immuables
(InstanceTarget, PollingSettings, SimulationConfig).
"""
from .interfaces import (
    InstanceTarget,
    PollingSettings,
    SimulationConfig,
    IConfigLoader,
)
from .config_loader import ConfigLoader, ConfigError, DEFAULT_CONFIG_PATH

__all__ = [
    # Models
    "InstanceTarget",
    "PollingSettings",
    "SimulationConfig",
    # Interfaces
    "IConfigLoader",
    # Implementations
    "ConfigLoader",
    "DEFAULT_CONFIG_PATH",
    # Exceptions
    "ConfigError",
]

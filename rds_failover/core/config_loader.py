"""
RDS Failover - Config Loader Implementation
Charge la configuration de simulation et valide la cible.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import ValidationError

from .interfaces import IConfigLoader, InstanceTarget, PollingSettings, SimulationConfig


DEFAULT_CONFIG_PATH = "config.json"

YAML_SUFFIXES = (".yaml", ".yml")


class ConfigError(Exception):
    """Configuration absente, illisible ou invalide."""

    pass


class ConfigLoader(IConfigLoader):
    """
    Chargement de la configuration depuis un fichier JSON.

    Les fichiers .yaml et .yml passent par yaml.safe_load; tout autre
    fichier est décodé comme du JSON.
    """

    async def load(self, path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> SimulationConfig:
        """
        Charge la configuration.

        Args:
            path: Chemin du fichier de configuration

        Returns:
            Configuration validée (cible + réglages de polling)

        Raises:
            ConfigError: Si fichier inexistant, mal formé ou invalide
        """
        config_file = Path(path)

        if not config_file.is_file():
            raise ConfigError(f"Configuration file not found: {config_file}")

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                if config_file.suffix.lower() in YAML_SUFFIXES:
                    raw = yaml.safe_load(f)
                else:
                    raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise ConfigError(f"error parsing config file: {e}") from e
        except OSError as e:
            raise ConfigError(f"error reading config file: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigError("Configuration must be a JSON object")

        return self.parse(raw)

    def parse(self, raw: Dict[str, Any]) -> SimulationConfig:
        """
        Valide un dictionnaire de configuration déjà décodé.

        Raises:
            ConfigError: Si un champ obligatoire manque ou est invalide
        """
        try:
            target = InstanceTarget.model_validate(raw)
            polling = PollingSettings.model_validate(raw)
        except ValidationError as e:
            raise ConfigError(f"invalid configuration: {self._summarize(e)}") from e

        return SimulationConfig(target=target, polling=polling)

    @staticmethod
    def _summarize(error: ValidationError) -> str:
        """Résume les erreurs pydantic en une ligne (champ: message)."""
        parts = []
        for item in error.errors():
            location = ".".join(str(p) for p in item.get("loc", ())) or "config"
            parts.append(f"{location}: {item.get('msg', 'invalid value')}")
        return "; ".join(parts)

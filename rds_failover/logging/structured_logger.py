"""
Logging - Structured Logger

Logger JSON structuré avec champs obligatoires, utilisé pour le journal
de diagnostic des boucles de polling et du failover.
"""

import uuid
from collections import deque
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Deque, List, Optional, Union

from .interfaces import (
    IStructuredLogger,
    LogConfig,
    LogEntry,
    LogLevel,
)


class MissingRequiredFieldError(Exception):
    """Champ obligatoire manquant."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"Required field missing: {field_name}")


class StructuredLogger(IStructuredLogger):
    """
    Logger JSON structuré avec champs obligatoires.

    Les entrées sont conservées dans un tampon borné (MAX_CAPTURED_ENTRIES)
    afin qu'une surveillance sans fin ne fasse pas croître la mémoire.

    Example:
        logger = StructuredLogger(
            "rds-failover",
            config=LogConfig(default_instance_id="db-1"),
        )
        logger.info("poll_completed", status="available")
    """

    MAX_CAPTURED_ENTRIES: int = 500

    def __init__(
        self,
        name: str,
        config: Optional[LogConfig] = None,
        output_handler: Optional[Callable[[str], None]] = None,
    ) -> None:
        """
        Initialise le logger structuré.

        Args:
            name: Nom du logger (identifiant du composant)
            config: Configuration optionnelle
            output_handler: Handler recevant chaque ligne JSON

        Raises:
            ValueError: Si name vide
        """
        if not name or not name.strip():
            raise ValueError("Logger name cannot be empty")

        self._name = name.strip()
        self._config = config or LogConfig()
        self._output_handler = output_handler
        self._entries: Deque[LogEntry] = deque(maxlen=self.MAX_CAPTURED_ENTRIES)
        self._default_instance_id: Optional[str] = self._config.default_instance_id
        self._default_correlation_id: Optional[str] = self._config.default_correlation_id

    @property
    def name(self) -> str:
        """Retourne le nom du logger."""
        return self._name

    @property
    def config(self) -> LogConfig:
        """Retourne la configuration."""
        return self._config

    def log(
        self,
        level: LogLevel,
        message: str,
        correlation_id: Optional[str] = None,
        instance_id: Optional[str] = None,
        **extra: Any,
    ) -> Optional[LogEntry]:
        """
        Crée une entrée structurée.

        Processus:
            1. Vérifie niveau >= min_level
            2. Résout correlation_id et instance_id
            3. Crée LogEntry avec timestamp UTC
            4. Transmet la ligne JSON au handler

        Raises:
            MissingRequiredFieldError: Si instance_id ou message manquant
        """
        if not self._should_log(level):
            return None

        resolved_correlation = correlation_id or self._default_correlation_id
        if not resolved_correlation:
            resolved_correlation = self._generate_correlation_id()
            self._default_correlation_id = resolved_correlation

        resolved_instance = instance_id or self._default_instance_id
        if not resolved_instance:
            raise MissingRequiredFieldError("instance_id")

        if not message:
            raise MissingRequiredFieldError("message")

        entry = LogEntry(
            timestamp=self._generate_timestamp(),
            level=level,
            correlation_id=resolved_correlation,
            instance_id=resolved_instance,
            message=message,
            extra=dict(extra) if extra and self._config.include_extra else {},
            logger_name=self._name,
        )

        self._entries.append(entry)

        if self._output_handler:
            self._output_handler(entry.to_json())

        return entry

    def _generate_timestamp(self) -> str:
        """
        Génère un timestamp ISO 8601 UTC avec millisecondes.

        Format: 2024-12-04T14:30:00.123Z
        """
        now = datetime.now(timezone.utc)
        return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"

    def _generate_correlation_id(self) -> str:
        return str(uuid.uuid4())

    def _should_log(self, level: LogLevel) -> bool:
        return LogLevel.get_priority(level) >= LogLevel.get_priority(
            self._config.min_level
        )

    def debug(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau DEBUG."""
        return self.log(LogLevel.DEBUG, message, **extra)

    def info(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau INFO."""
        return self.log(LogLevel.INFO, message, **extra)

    def warn(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau WARN."""
        return self.log(LogLevel.WARN, message, **extra)

    def error(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau ERROR."""
        return self.log(LogLevel.ERROR, message, **extra)

    def critical(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau CRITICAL."""
        return self.log(LogLevel.CRITICAL, message, **extra)

    def get_entries(self) -> List[LogEntry]:
        """
        Retourne les entrées de log capturées.

        Returns:
            Liste des LogEntry (au plus MAX_CAPTURED_ENTRIES)
        """
        return list(self._entries)


def file_output_handler(path: Union[str, Path]) -> Callable[[str], None]:
    """
    Construit un handler qui ajoute chaque ligne JSON à un fichier.

    Le fichier est ouvert en ajout à chaque écriture: aucun descripteur
    ne reste ouvert entre deux polls. Il est créé dès la construction,
    un chemin inutilisable échoue avant le premier appel au control plane.

    Raises:
        OSError: Si le fichier ne peut pas être ouvert en ajout.
    """
    target = Path(path)
    with open(target, "a", encoding="utf-8"):
        pass

    def _write(line: str) -> None:
        with open(target, "a", encoding="utf-8") as f:
            f.write(line + "\n")

    return _write

"""
Restitution console des observations.

Seul composant qui associe une catégorie à un traitement visuel; la
classification reste une fonction pure (status_classifier).
"""

from datetime import datetime
from typing import Dict, Optional

from rich.console import Console
from rich.text import Text

from rds_failover.ha.interfaces import InstanceSnapshot, IReporter, StatusCategory


TIMESTAMP_FORMAT = "%H:%M:%S"

STATUS_WIDTH = 12

CATEGORY_STYLES: Dict[StatusCategory, str] = {
    StatusCategory.HEALTHY: "bold green",
    StatusCategory.TRANSITIONAL: "bold yellow",
    StatusCategory.UNKNOWN: "bold red",
}

SUCCESS_STYLE = "bold green"
WARNING_STYLE = "bold yellow"
FAILURE_STYLE = "bold red"
INFO_STYLE = "cyan"
HEADER_STYLE = "bold magenta"


class ConsoleReporter(IReporter):
    """
    Restitution ligne par ligne, horodatée HH:MM:SS.

    Les statuts bruts sont rendus en Text: aucun balisage rich n'est
    interprété dans une valeur venant du control plane.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        error_console: Optional[Console] = None,
    ) -> None:
        """
        Args:
            console: Sortie standard (défaut: stdout).
            error_console: Sortie d'erreur (défaut: stderr).
        """
        self._console = console or Console(highlight=False)
        self._error_console = error_console or Console(stderr=True, highlight=False)

    def header(self, message: str) -> None:
        self._console.print(Text(message, style=HEADER_STYLE))

    def info(self, message: str) -> None:
        self._console.print(Text(message, style=INFO_STYLE))

    def success(self, message: str) -> None:
        self._console.print(Text(message, style=SUCCESS_STYLE))

    def warning(self, message: str) -> None:
        self._console.print(Text(message, style=WARNING_STYLE))

    def failure(self, message: str) -> None:
        self._error_console.print(Text(message, style=FAILURE_STYLE))

    def snapshot(
        self,
        snapshot: InstanceSnapshot,
        category: StatusCategory,
        observed_at: datetime,
    ) -> None:
        """Ligne: [HH:MM:SS] <statut sur 12 colonnes> AZ: <zone>."""
        status = snapshot.status or "<empty>"
        line = Text.assemble(
            f"[{observed_at.strftime(TIMESTAMP_FORMAT)}] ",
            (status.ljust(STATUS_WIDTH), CATEGORY_STYLES[category]),
            (f" AZ: {snapshot.availability_zone or '-'}", INFO_STYLE),
        )
        self._console.print(line)

    def poll_error(self, error: Exception, observed_at: datetime) -> None:
        line = Text.assemble(
            f"[{observed_at.strftime(TIMESTAMP_FORMAT)}] ",
            (f"Error checking RDS: {error}", FAILURE_STYLE),
        )
        self._error_console.print(line)

"""
Classification des statuts RDS.

Traduit le vocabulaire ouvert du control plane (DBInstanceStatus) en
catégories opérateur fermées. Fonction totale: un statut inconnu donne
UNKNOWN, jamais une exception.
"""

from typing import Dict, Optional

from rds_failover.ha.interfaces import StatusCategory


HEALTHY_STATUSES = frozenset({"available"})

TRANSITIONAL_STATUSES = frozenset({"rebooting", "modifying", "failing-over"})


class StatusClassifier:
    """Table de correspondance statut brut → StatusCategory, extensible."""

    def __init__(self) -> None:
        self._mapping: Dict[str, StatusCategory] = {}
        for status in HEALTHY_STATUSES:
            self._mapping[status] = StatusCategory.HEALTHY
        for status in TRANSITIONAL_STATUSES:
            self._mapping[status] = StatusCategory.TRANSITIONAL

    def register(self, status: str, category: StatusCategory) -> None:
        """
        Associe un statut brut à une catégorie.

        Args:
            status: Valeur exacte renvoyée par le control plane.
            category: Catégorie opérateur.

        Raises:
            ValueError: Si status vide.
        """
        if not status:
            raise ValueError("status cannot be empty")
        self._mapping[status] = category

    def classify(self, raw_status: Optional[str]) -> StatusCategory:
        """
        Classe un statut brut (correspondance exacte).

        Returns:
            Catégorie, UNKNOWN pour tout statut non reconnu ou vide.
        """
        if not raw_status:
            return StatusCategory.UNKNOWN
        return self._mapping.get(raw_status, StatusCategory.UNKNOWN)


_default_classifier = StatusClassifier()


def classify(raw_status: Optional[str]) -> StatusCategory:
    """Classe un statut brut avec la table par défaut."""
    return _default_classifier.classify(raw_status)

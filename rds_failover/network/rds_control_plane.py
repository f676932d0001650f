"""
Network - Control plane RDS (boto3)

Implémentation de IControlPlaneClient sur l'API Amazon RDS:
    describe_instance → DescribeDBInstances
    force_failover    → RebootDBInstance(ForceFailover=True)

Les appels boto3 sont synchrones: ils s'exécutent dans un thread pour ne
pas bloquer la boucle asyncio. Les timeouts de connexion et de lecture
sont imposés au niveau du client botocore, sans retry automatique.
"""

import asyncio
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from rds_failover.ha.interfaces import (
    ControlPlaneError,
    IControlPlaneClient,
    InstanceNotFoundError,
    InstanceSnapshot,
)

from .interfaces import ITimeoutManager, TimeoutType


NOT_FOUND_ERROR_CODES = frozenset({"DBInstanceNotFound", "DBInstanceNotFoundFault"})


def build_client_config(timeouts: ITimeoutManager, region: Optional[str] = None) -> Config:
    """
    Construit la configuration botocore à partir des timeouts.

    Un seul essai par appel: la cadence de polling tient lieu de retry.
    """
    return Config(
        region_name=region,
        connect_timeout=timeouts.get_timeout(TimeoutType.CONNECTION),
        read_timeout=timeouts.get_timeout(TimeoutType.REQUEST),
        retries={"max_attempts": 1, "mode": "standard"},
    )


class RdsControlPlaneClient(IControlPlaneClient):
    """Control plane Amazon RDS, sans état entre deux appels."""

    def __init__(self, rds_client: Any) -> None:
        """
        Args:
            rds_client: Client boto3 "rds" déjà configuré.
        """
        self._rds = rds_client

    @classmethod
    def from_session(
        cls,
        timeouts: ITimeoutManager,
        region: Optional[str] = None,
        profile: Optional[str] = None,
    ) -> "RdsControlPlaneClient":
        """
        Crée un client depuis la chaîne de credentials par défaut de boto3.

        Args:
            timeouts: Timeouts de connexion et de requête.
            region: Région AWS (défaut: configuration de l'environnement).
            profile: Profil nommé (défaut: profil courant).

        Raises:
            ControlPlaneError: Si profil ou région introuvables.
        """
        try:
            session = boto3.Session(profile_name=profile, region_name=region)
            client = session.client("rds", config=build_client_config(timeouts, region))
        except BotoCoreError as e:
            raise ControlPlaneError(f"unable to load AWS config: {e}") from e
        return cls(client)

    @staticmethod
    def _error_code(error: ClientError) -> str:
        return error.response.get("Error", {}).get("Code", "")

    async def _invoke(self, operation: str, **params: Any) -> Dict[str, Any]:
        method = getattr(self._rds, operation)
        try:
            return await asyncio.to_thread(method, **params)
        except ClientError as e:
            if self._error_code(e) in NOT_FOUND_ERROR_CODES:
                raise InstanceNotFoundError(params.get("DBInstanceIdentifier", "")) from e
            raise ControlPlaneError(f"{operation} failed: {e}") from e
        except BotoCoreError as e:
            raise ControlPlaneError(f"{operation} failed: {e}") from e

    async def describe_instance(self, db_identifier: str) -> InstanceSnapshot:
        """
        Récupère statut et zone de disponibilité.

        Raises:
            InstanceNotFoundError: Si aucune instance ne correspond.
            ControlPlaneError: Si l'appel échoue.
        """
        response = await self._invoke(
            "describe_db_instances",
            DBInstanceIdentifier=db_identifier,
        )

        instances = response.get("DBInstances") or []
        if not instances:
            raise InstanceNotFoundError(db_identifier)

        instance = instances[0]
        return InstanceSnapshot(
            status=instance.get("DBInstanceStatus") or "",
            availability_zone=instance.get("AvailabilityZone") or "",
        )

    async def force_failover(self, db_identifier: str) -> None:
        """
        Redémarre l'instance avec basculement forcé vers le standby.

        Raises:
            ControlPlaneError: Si l'appel échoue.
        """
        await self._invoke(
            "reboot_db_instance",
            DBInstanceIdentifier=db_identifier,
            ForceFailover=True,
        )

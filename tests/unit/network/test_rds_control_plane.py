"""
Tests unitaires RdsControlPlaneClient

Correspondance avec l'API RDS (botocore Stubber):
    describe_instance → DescribeDBInstances
    force_failover    → RebootDBInstance(ForceFailover=True)
"""

from unittest.mock import Mock

import boto3
import pytest
from botocore.exceptions import EndpointConnectionError
from botocore.stub import Stubber

from rds_failover.ha.interfaces import (
    ControlPlaneError,
    IControlPlaneClient,
    InstanceNotFoundError,
    InstanceSnapshot,
)
from rds_failover.network import (
    RdsControlPlaneClient,
    TimeoutConfig,
    TimeoutManager,
    build_client_config,
)


@pytest.fixture
def rds():
    """Client boto3 rds hors ligne."""
    return boto3.client(
        "rds",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def stubber(rds):
    with Stubber(rds) as stub:
        yield stub
        stub.assert_no_pending_responses()


@pytest.fixture
def client(rds) -> RdsControlPlaneClient:
    return RdsControlPlaneClient(rds)


class TestDescribeInstance:
    """DescribeDBInstances."""

    def test_implements_interface(self, client):
        """RdsControlPlaneClient implémente IControlPlaneClient."""
        assert isinstance(client, IControlPlaneClient)

    @pytest.mark.asyncio
    async def test_returns_status_and_zone(self, client, stubber):
        """Statut et AZ de la première instance."""
        stubber.add_response(
            "describe_db_instances",
            {
                "DBInstances": [
                    {
                        "DBInstanceIdentifier": "db-1",
                        "DBInstanceStatus": "available",
                        "AvailabilityZone": "us-east-1a",
                    }
                ]
            },
            {"DBInstanceIdentifier": "db-1"},
        )

        snapshot = await client.describe_instance("db-1")

        assert snapshot == InstanceSnapshot(status="available", availability_zone="us-east-1a")

    @pytest.mark.asyncio
    async def test_missing_fields_become_empty(self, client, stubber):
        """Champs absents: chaînes vides (classées UNKNOWN)."""
        stubber.add_response(
            "describe_db_instances",
            {"DBInstances": [{"DBInstanceIdentifier": "db-1"}]},
            {"DBInstanceIdentifier": "db-1"},
        )

        snapshot = await client.describe_instance("db-1")

        assert snapshot == InstanceSnapshot(status="", availability_zone="")

    @pytest.mark.asyncio
    async def test_empty_list_is_not_found(self, client, stubber):
        """Liste vide: InstanceNotFoundError."""
        stubber.add_response("describe_db_instances", {"DBInstances": []}, {"DBInstanceIdentifier": "db-1"})

        with pytest.raises(InstanceNotFoundError) as exc:
            await client.describe_instance("db-1")

        assert exc.value.db_identifier == "db-1"

    @pytest.mark.asyncio
    async def test_not_found_error_code(self, client, stubber):
        """Code DBInstanceNotFound: InstanceNotFoundError."""
        stubber.add_client_error(
            "describe_db_instances",
            service_error_code="DBInstanceNotFound",
            service_message="DBInstance db-1 not found.",
            http_status_code=404,
        )

        with pytest.raises(InstanceNotFoundError):
            await client.describe_instance("db-1")

    @pytest.mark.asyncio
    async def test_other_client_error_is_transport(self, client, stubber):
        """Throttling: ControlPlaneError non terminal."""
        stubber.add_client_error(
            "describe_db_instances",
            service_error_code="Throttling",
            http_status_code=400,
        )

        with pytest.raises(ControlPlaneError) as exc:
            await client.describe_instance("db-1")

        assert not isinstance(exc.value, InstanceNotFoundError)

    @pytest.mark.asyncio
    async def test_connection_error_is_transport(self):
        """Erreur réseau botocore: ControlPlaneError."""
        rds = Mock()
        rds.describe_db_instances.side_effect = EndpointConnectionError(endpoint_url="https://rds.us-east-1.amazonaws.com")
        client = RdsControlPlaneClient(rds)

        with pytest.raises(ControlPlaneError) as exc:
            await client.describe_instance("db-1")

        assert not isinstance(exc.value, InstanceNotFoundError)


class TestForceFailover:
    """RebootDBInstance avec ForceFailover."""

    @pytest.mark.asyncio
    async def test_reboots_with_force_failover(self, client, stubber):
        """ForceFailover=True est envoyé."""
        stubber.add_response(
            "reboot_db_instance",
            {"DBInstance": {"DBInstanceIdentifier": "db-1", "DBInstanceStatus": "rebooting"}},
            {"DBInstanceIdentifier": "db-1", "ForceFailover": True},
        )

        await client.force_failover("db-1")

    @pytest.mark.asyncio
    async def test_invalid_state_raises(self, client, stubber):
        """Instance non Multi-AZ ou occupée: ControlPlaneError."""
        stubber.add_client_error(
            "reboot_db_instance",
            service_error_code="InvalidDBInstanceState",
            http_status_code=400,
        )

        with pytest.raises(ControlPlaneError):
            await client.force_failover("db-1")


class TestClientConfig:
    """Configuration botocore."""

    def test_timeouts_applied(self):
        """Les timeouts du manager sont appliqués, sans retry."""
        timeouts = TimeoutManager(TimeoutConfig(connection_timeout=5.0, request_timeout=20.0))

        config = build_client_config(timeouts, region="eu-west-1")

        assert config.connect_timeout == 5.0
        assert config.read_timeout == 20.0
        assert config.region_name == "eu-west-1"
        assert config.retries == {"max_attempts": 1, "mode": "standard"}

    def test_from_session_unknown_profile(self, tmp_path, monkeypatch):
        """Profil inconnu: ControlPlaneError."""
        monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "config"))
        monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "credentials"))

        with pytest.raises(ControlPlaneError):
            RdsControlPlaneClient.from_session(TimeoutManager(), region="us-east-1", profile="missing-profile")

    def test_from_session_builds_client(self):
        """Création d'un client avec région explicite."""
        client = RdsControlPlaneClient.from_session(TimeoutManager(), region="us-east-1")

        assert isinstance(client, RdsControlPlaneClient)

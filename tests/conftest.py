"""
RDS Failover - Pytest Configuration
Fixtures partagées pour tous les tests.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import List
from unittest.mock import AsyncMock, Mock

import pytest

from rds_failover.core import InstanceTarget, PollingSettings, SimulationConfig
from rds_failover.ha import IControlPlaneClient, IReporter, StatusPoller
from rds_failover.logging import IStructuredLogger


class FakeClock:
    """Horloge déterministe: sleep() avance le temps sans attendre."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: List[float] = []

    def monotonic(self) -> float:
        return self.now

    def wall(self) -> datetime:
        return datetime.fromtimestamp(self.now)

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    """Horloge déterministe."""
    return FakeClock()


@pytest.fixture
def target() -> InstanceTarget:
    """Instance observée."""
    return InstanceTarget(dbIdentifier="db-1", endpoint="x", port=3306)


@pytest.fixture
def simulation_config(target) -> SimulationConfig:
    """Configuration avec intervalles par défaut."""
    return SimulationConfig(target=target, polling=PollingSettings())


@pytest.fixture
def mock_reporter():
    """Reporter mocké."""
    return Mock(spec=IReporter)


@pytest.fixture
def mock_logger():
    """Logger structuré mocké."""
    return Mock(spec=IStructuredLogger)


@pytest.fixture
def mock_client():
    """Control plane mocké."""
    client = Mock(spec=IControlPlaneClient)
    client.describe_instance = AsyncMock()
    client.force_failover = AsyncMock()
    return client


@pytest.fixture
def poller(mock_reporter, mock_logger, fake_clock) -> StatusPoller:
    """StatusPoller sur horloge déterministe."""
    return StatusPoller(
        mock_reporter,
        mock_logger,
        request_timeout=5.0,
        sleep=fake_clock.sleep,
        clock=fake_clock.monotonic,
        now=fake_clock.wall,
    )


@pytest.fixture
def write_config(tmp_path: Path):
    """Écrit un fichier de configuration JSON et retourne son chemin."""

    def _write(content, name: str = "config.json") -> Path:
        path = tmp_path / name
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content), encoding="utf-8")
        return path

    return _write

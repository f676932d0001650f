"""
Tests unitaires pour Logging - Structured Logger

- Format JSON une ligne par entrée
- Champs obligatoires: timestamp, level, correlation_id, instance_id, message
- Timestamp ISO 8601 UTC avec millisecondes
- Filtrage par niveau
- Tampon de capture borné
"""

import json
import re

import pytest

from rds_failover.logging import (
    IStructuredLogger,
    LogConfig,
    LogLevel,
    MissingRequiredFieldError,
    StructuredLogger,
    file_output_handler,
)


@pytest.fixture
def logger() -> StructuredLogger:
    return StructuredLogger(
        "test",
        config=LogConfig(min_level=LogLevel.DEBUG, default_instance_id="db-1"),
    )


class TestJsonFormat:
    """Format JSON structuré."""

    def test_implements_interface(self, logger) -> None:
        """StructuredLogger implémente IStructuredLogger."""
        assert isinstance(logger, IStructuredLogger)

    def test_output_is_valid_json(self, logger) -> None:
        """Chaque entrée sérialise en JSON valide avec tous les champs."""
        entry = logger.info("poll_completed", status="available")
        assert entry is not None

        parsed = json.loads(entry.to_json())

        assert parsed["level"] == "INFO"
        assert parsed["instance_id"] == "db-1"
        assert parsed["message"] == "poll_completed"
        assert parsed["logger"] == "test"
        assert parsed["extra"] == {"status": "available"}
        assert "correlation_id" in parsed

    def test_timestamp_iso8601_utc(self, logger) -> None:
        """Timestamp ISO 8601 UTC avec millisecondes."""
        entry = logger.info("x")
        assert entry is not None

        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", entry.timestamp)

    def test_output_handler_receives_json(self) -> None:
        """Le handler reçoit chaque ligne JSON."""
        lines = []
        logger = StructuredLogger(
            "test",
            config=LogConfig(default_instance_id="db-1"),
            output_handler=lines.append,
        )

        logger.warn("poll_failed", error="Throttling")

        assert len(lines) == 1
        assert json.loads(lines[0])["level"] == "WARN"


class TestRequiredFields:
    """Champs obligatoires."""

    def test_missing_instance_raises(self) -> None:
        """Sans instance_id: MissingRequiredFieldError."""
        logger = StructuredLogger("test")

        with pytest.raises(MissingRequiredFieldError) as exc:
            logger.info("x")

        assert exc.value.field_name == "instance_id"

    def test_empty_message_raises(self, logger) -> None:
        """Message vide refusé."""
        with pytest.raises(MissingRequiredFieldError):
            logger.info("")

    def test_correlation_id_stable_within_run(self, logger) -> None:
        """Sans correlation_id fourni, un identifiant unique est réutilisé."""
        first = logger.info("a")
        second = logger.info("b")

        assert first.correlation_id == second.correlation_id

    def test_explicit_correlation_id(self, logger) -> None:
        """correlation_id explicite prioritaire."""
        entry = logger.log(LogLevel.INFO, "a", correlation_id="run-42")
        assert entry.correlation_id == "run-42"

    def test_empty_name_rejected(self) -> None:
        """Nom de logger vide refusé."""
        with pytest.raises(ValueError):
            StructuredLogger("  ")


class TestLevels:
    """Niveaux et filtrage."""

    def test_below_min_level_filtered(self) -> None:
        """DEBUG filtré quand min_level=INFO."""
        logger = StructuredLogger("test", config=LogConfig(default_instance_id="db-1"))

        assert logger.debug("poll_completed") is None
        assert logger.get_entries() == []

    def test_all_levels(self, logger) -> None:
        """Chaque méthode produit le niveau correspondant."""
        logger.debug("d")
        logger.info("i")
        logger.warn("w")
        logger.error("e")
        logger.critical("c")

        levels = [e.level for e in logger.get_entries()]
        assert levels == [LogLevel.DEBUG, LogLevel.INFO, LogLevel.WARN, LogLevel.ERROR, LogLevel.CRITICAL]

    @pytest.mark.parametrize(
        "name,expected",
        [("debug", LogLevel.DEBUG), ("WARNING", LogLevel.WARN), (" error ", LogLevel.ERROR)],
    )
    def test_from_name(self, name, expected) -> None:
        """Résolution des noms de niveau."""
        assert LogLevel.from_name(name) == expected

    def test_from_name_unknown(self) -> None:
        """Nom inconnu: ValueError."""
        with pytest.raises(ValueError):
            LogLevel.from_name("verbose")


class TestCapture:
    """Tampon de capture."""

    def test_capture_is_bounded(self, logger) -> None:
        """Le tampon ne dépasse jamais MAX_CAPTURED_ENTRIES."""
        for i in range(StructuredLogger.MAX_CAPTURED_ENTRIES + 50):
            logger.debug("poll_completed", poll=i)

        entries = logger.get_entries()
        assert len(entries) == StructuredLogger.MAX_CAPTURED_ENTRIES
        assert entries[-1].extra["poll"] == StructuredLogger.MAX_CAPTURED_ENTRIES + 49

    def test_file_output_handler_appends(self, tmp_path) -> None:
        """Le handler fichier ajoute une ligne JSON par entrée."""
        path = tmp_path / "diag.jsonl"
        logger = StructuredLogger(
            "test",
            config=LogConfig(default_instance_id="db-1"),
            output_handler=file_output_handler(path),
        )

        logger.info("monitor_started")
        logger.info("monitor_stopped")

        lines = path.read_text(encoding="utf-8").splitlines()
        assert [json.loads(line)["message"] for line in lines] == ["monitor_started", "monitor_stopped"]

    def test_file_output_handler_creates_file(self, tmp_path) -> None:
        """Le fichier existe dès la construction du handler."""
        path = tmp_path / "diag.jsonl"

        file_output_handler(path)

        assert path.exists()
        assert path.read_text(encoding="utf-8") == ""

    def test_file_output_handler_bad_path_raises(self, tmp_path) -> None:
        """Répertoire inexistant: OSError avant toute écriture."""
        with pytest.raises(OSError):
            file_output_handler(tmp_path / "missing" / "diag.jsonl")

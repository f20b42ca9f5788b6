"""Tests for logging setup."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from wtii.core.logging import configure_logging, get_logger, shutdown_logging


@pytest.fixture(autouse=True)
def close_handlers() -> Iterator[None]:
    yield
    shutdown_logging()


def file_handlers() -> list[logging.FileHandler]:
    return [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_events_written_to_file(self, tmp_path: Path) -> None:
        """Test structlog events land in the log file."""
        log_file = tmp_path / "logs" / "wtii.log"
        configure_logging(log_file=log_file)

        get_logger("wtii.tests").info("Combatant inserted", name="Goblin")
        file_handlers()[0].flush()

        text = log_file.read_text(encoding="utf-8")
        assert "Combatant inserted" in text
        assert "name=Goblin" in text

    def test_library_records_share_the_file(self, tmp_path: Path) -> None:
        """Test standard library records go through the same handler."""
        log_file = tmp_path / "wtii.log"
        configure_logging(log_file=log_file, json_format=True)

        logging.getLogger("urllib3").warning("Retrying connection")
        file_handlers()[0].flush()

        text = log_file.read_text(encoding="utf-8")
        assert '"event": "Retrying connection"' in text
        assert '"app": "wtii"' in text

    def test_level_filters_events(self, tmp_path: Path) -> None:
        """Test events below the level are dropped."""
        log_file = tmp_path / "wtii.log"
        configure_logging(level="WARNING", log_file=log_file)

        logger = get_logger("wtii.tests")
        logger.info("Too chatty")
        logger.warning("Worth keeping")
        file_handlers()[0].flush()

        text = log_file.read_text(encoding="utf-8")
        assert "Too chatty" not in text
        assert "Worth keeping" in text

    def test_reconfigure_closes_previous_file(self, tmp_path: Path) -> None:
        """Test a second call releases the first log file."""
        configure_logging(log_file=tmp_path / "first.log")
        (first,) = file_handlers()

        configure_logging(log_file=tmp_path / "second.log")
        (second,) = file_handlers()

        assert second is not first
        assert first.stream is None

        get_logger("wtii.tests").warning("Moved")
        second.flush()

        assert "Moved" in (tmp_path / "second.log").read_text(encoding="utf-8")
        assert "Moved" not in (tmp_path / "first.log").read_text(encoding="utf-8")


class TestShutdownLogging:
    """Tests for shutdown_logging."""

    def test_closes_file(self, tmp_path: Path) -> None:
        """Test the log file is closed and detached."""
        configure_logging(log_file=tmp_path / "wtii.log")
        (handler,) = file_handlers()

        shutdown_logging()

        assert handler.stream is None
        assert handler not in logging.getLogger().handlers

"""Tests for structlog configuration."""

from __future__ import annotations

import json

import pytest
import structlog

from volt_common.logging import configure_logging


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


class TestConfigureLogging:

    def test_json_output_with_service(self, capsys) -> None:
        configure_logging("INFO", json=True, service="alerter")
        structlog.get_logger().info("hello", key="svc-a")

        line = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert line["event"] == "hello"
        assert line["service"] == "alerter"
        assert line["key"] == "svc-a"
        assert line["level"] == "info"
        assert "timestamp" in line

    def test_level_filtering(self, capsys) -> None:
        configure_logging("WARNING", json=True)
        log = structlog.get_logger()
        log.info("dropped")
        log.warning("kept")

        out = capsys.readouterr().out
        assert "dropped" not in out
        assert "kept" in out

    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("LOUD")

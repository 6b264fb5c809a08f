"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from tokenledger.common.logging import configure_logging


@pytest.fixture
def restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.mark.unit
@pytest.mark.usefixtures("restore_logging")
class TestConfigureLogging:
    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("DEBUG", "json")
        structlog.stdlib.get_logger("tokenledger.test").info("converter.rates_replaced", base_currency="USD")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "converter.rates_replaced"
        assert record["base_currency"] == "USD"
        assert record["level"] == "info"

    def test_level_filters(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("WARNING", "console")
        structlog.stdlib.get_logger("tokenledger.test").info("resolver.catalog_replaced", entries=3)
        assert capsys.readouterr().out == ""
        assert logging.getLogger().level == logging.WARNING

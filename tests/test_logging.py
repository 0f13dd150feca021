"""
Tests for structured logging setup.
"""
import json
import logging

import pytest
import structlog

from podprobes.infrastructure.logging import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
    logging.getLogger().setLevel(logging.WARNING)


def test_json_output(capsys):
    configure_logging(level="INFO", json_output=True)

    structlog.get_logger("podprobes.test").info("probe_checked", probe="nmi_liveness")

    line = capsys.readouterr().err.strip().splitlines()[-1]
    entry = json.loads(line)
    assert entry["event"] == "probe_checked"
    assert entry["probe"] == "nmi_liveness"
    assert entry["level"] == "info"


def test_level_filters_debug(capsys):
    configure_logging(level="WARNING", json_output=True)

    structlog.get_logger("podprobes.test").info("probe_checked")

    assert capsys.readouterr().err == ""

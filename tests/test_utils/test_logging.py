"""Tests for subworth.utils.logging."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from subworth.config import LoggingConfig
from subworth.utils.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_lines_to_file(tmp_path: Path):
    log_file = tmp_path / "logs" / "subworth.log"
    configure_logging(LoggingConfig(level="INFO", log_file=str(log_file), json_format=True))

    logging.getLogger("subworth.test").info("scored %d platforms", 6, extra={"month": "2024-12"})
    for h in logging.getLogger().handlers:
        h.flush()

    record = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
    assert record["level"] == "INFO"
    assert record["logger"] == "subworth.test"
    assert record["msg"] == "scored 6 platforms"
    assert record["month"] == "2024-12"


def test_level_applied():
    configure_logging(LoggingConfig(level="WARNING"))
    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("httpx").level == logging.WARNING

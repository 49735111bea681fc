"""
Logging setup for SubWorth.

``configure_logging(config)`` is called once per CLI command, after the config
is loaded and before any catalog or TMDB work.  Library modules only ever do
``logger = logging.getLogger(__name__)``.

Console output goes to stderr so that tables and ``--json`` output on stdout
can be piped.  With ``json_format = true`` every record becomes one line::

    {"ts": "2024-12-01T09:00:00Z", "level": "INFO", "logger": "subworth.catalog.seed_loader",
     "msg": "Loaded 6 platforms (16 content items) from ..."}

Keys passed through ``extra=`` are added to the JSON object.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from subworth.config import LoggingConfig

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Third-party loggers that log every request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore")

_RESERVED = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class _JsonFormatter(logging.Formatter):
    """One JSON object per record: ts, level, logger, msg, plus extras."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        line = {
            "ts": ts.strftime(TIMESTAMP_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        line.update(
            (k, v) for k, v in vars(record).items()
            if k not in _RESERVED and not k.startswith("_")
        )
        if record.exc_info:
            line["exc"] = self.formatException(record.exc_info)
        return json.dumps(line, default=str)


def _build_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return _JsonFormatter()
    text = logging.Formatter(TEXT_FORMAT, datefmt=TIMESTAMP_FORMAT)
    text.converter = _utc_timetuple
    return text


def _utc_timetuple(secs: Optional[float]):
    return datetime.fromtimestamp(secs or 0, tz=timezone.utc).timetuple()


def _prepared(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_logging(config: "LoggingConfig", stream: Optional[IO[str]] = None) -> None:
    """Replace the root logger's handlers according to ``config``.

    Args:
        config: Validated ``LoggingConfig`` (level, optional file, JSON flag).
        stream: Console stream. Defaults to ``sys.stderr``.
    """
    level = logging.getLevelName(config.level)
    if not isinstance(level, int):
        level = logging.INFO
    formatter = _build_formatter(config.json_format)

    handlers = [_prepared(logging.StreamHandler(stream or sys.stderr), level, formatter)]
    if config.log_file:
        path = Path(config.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            _prepared(logging.FileHandler(path, encoding="utf-8"), level, formatter)
        )

    logging.basicConfig(level=level, handlers=handlers, force=True)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

"""quorumsim.core.logging

Logs go to stderr so the result table on stdout stays clean.

Messages are short event names; context travels in `extra`.
"""

from __future__ import annotations

import json
import logging
import sys

from quorumsim.core.config import LoggingConfig

# Attributes every LogRecord carries; anything else came in through `extra`.
_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


def _extras(record: logging.LogRecord) -> dict[str, object]:
    return {k: v for k, v in vars(record).items() if k not in _RESERVED}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        payload.update(_extras(record))
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, sort_keys=True)


class KeyValueFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = f"{record.levelname.lower()} {record.name}: {record.getMessage()}"
        extras = _extras(record)
        if extras:
            base += " " + " ".join(f"{k}={v}" for k, v in sorted(extras.items()))
        if record.exc_info:
            base += "\n" + self.formatException(record.exc_info)
        return base


def configure_logging(cfg: LoggingConfig, *, stream=None) -> logging.Logger:
    """Install a single stderr handler on the package logger. Idempotent."""

    logger = logging.getLogger("quorumsim")
    level = logging.getLevelName(cfg.level.upper())
    logger.setLevel(level if isinstance(level, int) else logging.INFO)

    for h in list(logger.handlers):
        if getattr(h, "_quorumsim", False):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter() if cfg.json_output else KeyValueFormatter())
    handler._quorumsim = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger

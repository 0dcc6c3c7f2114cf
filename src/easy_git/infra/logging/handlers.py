from __future__ import annotations

import logging
from pathlib import Path
from logging import Handler

from .formatters import JSONFormatter, HumanReadableFormatter
from ...shared.redact import redact


# Attributes every LogRecord has; anything else arrived through ``extra``.
_STANDARD_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {"message", "asctime"}


class RedactingFilter(logging.Filter):
    """Masks credentials in string-valued structured fields before any handler writes them."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in list(record.__dict__.items()):
            if key in _STANDARD_ATTRS:
                continue
            if isinstance(value, str):
                setattr(record, key, redact(value))
            elif isinstance(value, (list, tuple)):
                setattr(record, key, [redact(v) if isinstance(v, str) else v for v in value])
        return True


def build_json_file_handler(path: Path, level: int = logging.INFO) -> Handler:
    """JSON-lines handler appending to ``path``; the file is opened on first write."""
    path.parent.mkdir(parents=True, exist_ok=True)
    h = logging.FileHandler(path, encoding="utf-8", mode="a", delay=True)
    h.setLevel(level)
    h.setFormatter(JSONFormatter())
    h.addFilter(RedactingFilter())
    return h


def build_human_console_handler(level: int = logging.INFO) -> Handler:
    h = logging.StreamHandler()
    h.setLevel(level)
    h.setFormatter(HumanReadableFormatter())
    h.addFilter(RedactingFilter())
    return h

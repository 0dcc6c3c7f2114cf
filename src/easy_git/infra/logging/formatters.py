from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

from ...shared.redact import redact


class JSONFormatter(JsonFormatter):
    """JSON formatter using python-json-logger.

    Structured fields passed via ``extra`` become top-level keys.
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = self.formatTime(record)
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['message'] = redact(record.getMessage())


class HumanReadableFormatter(logging.Formatter):
    """Console formatter: timestamp, level, message and the event's error field if any."""

    def __init__(self) -> None:
        super().__init__(
            fmt='%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        error = getattr(record, "error", None)
        if error:
            line += f" ({redact(str(error))})"
        return line

from __future__ import annotations

from .logger import AppLogger
from .handlers import RedactingFilter, build_json_file_handler, build_human_console_handler
from .formatters import JSONFormatter, HumanReadableFormatter

__all__ = [
    "AppLogger",
    "RedactingFilter",
    "build_json_file_handler",
    "build_human_console_handler",
    "JSONFormatter",
    "HumanReadableFormatter",
]

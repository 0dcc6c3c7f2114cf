from __future__ import annotations

import logging
from pathlib import Path

from dependency_injector.resources import Resource

from .handlers import build_json_file_handler, build_human_console_handler


LOG_FILE_NAME = "easy_git.jsonl"


class AppLogger(Resource):
    """Structured logger shared by every easy_git operation.

    Keyword arguments to the log methods are attached as structured fields.
    Lifecycle is managed by the DI container (init/shutdown).
    """

    def init(
        self,
        *,
        logs_dir: Path,
        logger_name: str = "easy_git",
        file_output: bool = True,
        console_output: bool = False,
        level: str = "INFO",
    ) -> "AppLogger":
        """Initialize handlers.

        Args:
            logs_dir: Directory holding the JSONL log file
            logger_name: Logger name
            file_output: Append JSON lines to ``logs_dir/easy_git.jsonl``
            console_output: Whether to enable console output
            level: Logging level (DEBUG, INFO, WARNING, ERROR)

        Returns:
            Self for dependency_injector Resource pattern
        """
        numeric_level = logging._nameToLevel.get(level.upper(), logging.INFO)
        self._logger = logging.getLogger(logger_name)
        self._logger.setLevel(numeric_level)
        self._logger.propagate = False

        self._logger.handlers.clear()
        self._handlers = []

        if file_output:
            file_handler = build_json_file_handler(Path(logs_dir) / LOG_FILE_NAME, level=numeric_level)
            self._logger.addHandler(file_handler)
            self._handlers.append(file_handler)

        if console_output:
            console_handler = build_human_console_handler(level=numeric_level)
            self._logger.addHandler(console_handler)
            self._handlers.append(console_handler)

        return self

    def shutdown(self, resource: "AppLogger") -> None:
        """Flush and close handlers so the log file is released."""
        for handler in self._handlers:
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)
        self._handlers = []

    def debug(self, message: str, **kwargs) -> None:
        self._logger.debug(message, extra=kwargs or None)

    def info(self, message: str, **kwargs) -> None:
        self._logger.info(message, extra=kwargs or None)

    def warning(self, message: str, **kwargs) -> None:
        self._logger.warning(message, extra=kwargs or None)

    def error(self, message: str, exc_info: bool = False, **kwargs) -> None:
        self._logger.error(message, extra=kwargs or None, exc_info=exc_info)

    def exception(self, message: str, **kwargs) -> None:
        self._logger.exception(message, extra=kwargs or None)

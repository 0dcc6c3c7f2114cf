from __future__ import annotations

import webbrowser

from ..core.ports import LoggerPort


class SystemBrowser:
    """Opens URLs in the OS default browser. Failure is reported, never raised."""

    def __init__(self, *, logger: LoggerPort) -> None:
        self._logger = logger

    def open(self, url: str) -> bool:
        try:
            return webbrowser.open(url)
        except (webbrowser.Error, OSError) as e:
            self._logger.warning("browser_error", type="browser_error", error=str(e))
            return False

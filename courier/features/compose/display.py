"""Status line for compose feedback."""

from typing import List, Optional, Tuple

from rich.console import Console
from rich.text import Text

from courier.core.api.interfaces import SEVERITY_ERROR, SEVERITY_INFO
from courier.utils.logging import get_logger

logger = get_logger(__name__)


class StatusLine:
    """Records the latest user-visible status and mirrors it to the log.

    With a console, each status is also printed, which is how the session
    reports progress outside the full-screen interface.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console
        self.message = ""
        self.severity = SEVERITY_INFO
        self.history: List[Tuple[str, int]] = []

    def set_status(self, message: str, severity: int = SEVERITY_INFO) -> None:
        self.message = message
        self.severity = severity
        self.history.append((message, severity))

        if not message:
            return

        if severity >= SEVERITY_ERROR:
            logger.info(f"Status (error): {message}")
        else:
            logger.debug(f"Status: {message}")

        if self.console is not None:
            style = "red" if severity >= SEVERITY_ERROR else "cyan"
            self.console.print(Text(message, style=style))

    def clear(self) -> None:
        self.set_status("", SEVERITY_INFO)

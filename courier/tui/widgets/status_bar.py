from rich.text import Text
from textual.widgets import Static

from courier.core.api.interfaces import SEVERITY_ERROR, SEVERITY_INFO
from courier.utils.logging import get_logger

logger = get_logger(__name__)


class StatusBar(Static):
    """Bottom status line; serves as the compose session's notifier."""

    def __init__(self):
        super().__init__("", id="status-bar")
        self.message = ""
        self.severity = SEVERITY_INFO

    def set_status(self, message: str, severity: int = SEVERITY_INFO) -> None:
        self.message = message
        self.severity = severity
        if message:
            logger.debug(f"Status: {message}")
        self.set_class(severity >= SEVERITY_ERROR, "error")
        self.update(Text(message))

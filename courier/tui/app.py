from typing import Optional

from textual.app import App

from courier.core.api import MailApi
from courier.core.models import Draft, SentMessage, SourceMessage
from courier.features.compose import ComposeMode
from courier.utils.config import ConfigManager
from courier.utils.logging import get_logger

from .compose_screen import ComposeScreen

logger = get_logger(__name__)


class CourierApp(App, inherit_bindings=False):
    """Hosts a single compose screen; exits with the sent message or None.

    Quitting goes through the screen's discard binding.
    """

    TITLE = "Courier - Compose"
    ENABLE_COMMAND_PALETTE = False

    def __init__(
        self,
        api: MailApi,
        mode: ComposeMode = ComposeMode.NEW,
        source: Optional[SourceMessage] = None,
        draft: Optional[Draft] = None,
        config: Optional[ConfigManager] = None,
    ):
        super().__init__()
        self.api = api
        self.mode = mode
        self.source = source
        self.draft = draft
        self.config_manager = config

    def on_mount(self) -> None:
        screen = ComposeScreen(self.api, self.mode, self.source, self.draft, self.config_manager)
        self.push_screen(screen, callback=self._compose_finished)

    def _compose_finished(self, result: Optional[SentMessage]) -> None:
        if result is None:
            logger.info("Compose closed without sending")
        self.exit(result)

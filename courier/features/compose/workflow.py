"""Wiring of compose sessions from application configuration."""

from typing import Callable, Optional

from courier.core.api import MailApi, RateLimiter, StatusNotifier
from courier.core.models import Draft, SentMessage, SourceMessage
from courier.utils.config import ConfigManager
from courier.utils.logging import get_logger, log_call

from .session import ComposeSession
from .state import ComposeMode

logger = get_logger(__name__)


## Factory function


@log_call
def create_session(
    api: MailApi,
    mode: ComposeMode = ComposeMode.NEW,
    source: Optional[SourceMessage] = None,
    draft: Optional[Draft] = None,
    *,
    config: Optional[ConfigManager] = None,
    rate_limiter: Optional[RateLimiter] = None,
    notifier: Optional[StatusNotifier] = None,
    on_sent: Optional[Callable[[SentMessage], None]] = None,
    on_back: Optional[Callable[[], None]] = None,
) -> ComposeSession:
    """Create a compose session configured from the application settings.

    Args:
        api: Mail service client
        mode: Why the session is opened
        source: Message being replied to or forwarded
        draft: Stored draft when editing one
        config: Configuration manager (defaults to the shared instance)
        rate_limiter: Shared limiter; one is built from ``api.requests_per_second`` if omitted
        notifier: Status sink for user-visible feedback
        on_sent: Called with the sent message once sending succeeds
        on_back: Called when the session is left without sending

    Returns:
        A ComposeSession, not yet started
    """
    config = config or ConfigManager()
    settings = config.config

    if rate_limiter is None:
        rate_limiter = RateLimiter(settings.api.requests_per_second)

    if mode in (ComposeMode.REPLY, ComposeMode.REPLY_ALL, ComposeMode.FORWARD) and source is None:
        logger.warning(f"No source message for {mode.value}, starting empty")
    if mode is ComposeMode.EDIT_DRAFT and draft is None:
        logger.warning("No draft to edit, starting empty")

    return ComposeSession(
        api,
        mode,
        source,
        draft,
        rate_limiter=rate_limiter,
        notifier=notifier,
        config=settings.compose,
        on_sent=on_sent,
        on_back=on_back,
    )

"""Protocols for the collaborators a compose session depends on."""

from typing import Protocol

from courier.core.models import Draft, DraftRequest, SendRequest, SentMessage

SEVERITY_INFO = 0
SEVERITY_ERROR = 1


class MailApi(Protocol):
    """Remote draft and message operations. Every call may fail or stall."""

    async def create_draft(self, request: DraftRequest) -> Draft:
        ...

    async def update_draft(self, draft_id: str, request: DraftRequest) -> Draft:
        ...

    async def delete_draft(self, draft_id: str) -> None:
        ...

    async def send_message(self, request: SendRequest) -> SentMessage:
        ...


class Throttle(Protocol):
    """Gate awaited before every network call."""

    async def wait(self) -> None:
        ...


class StatusNotifier(Protocol):
    """Sink for user-visible status lines. Must not block."""

    def set_status(self, message: str, severity: int = SEVERITY_INFO) -> None:
        ...

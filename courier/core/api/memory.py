"""In-process mail backend used by the demo client and tests."""

import asyncio
import uuid
from typing import Dict, List, Optional

from courier.core.models import Draft, DraftRequest, SendRequest, SentMessage
from courier.core.validation import RecipientParser
from courier.utils.errors import (
    DraftSaveError,
    InvalidRecipientError,
    MissingRequiredFieldError,
    NetworkError,
    SendError,
)
from courier.utils.logging import async_log_call, get_logger

logger = get_logger(__name__)


class InMemoryMailApi:
    """Stores drafts and sent messages in dictionaries.

    Failures can be injected per operation with :meth:`fail_next`, and
    ``latency`` delays every call so in-flight behaviour can be observed.
    Requests are checked the way a remote service would: malformed
    participant addresses raise InvalidRecipientError and a missing draft
    id raises MissingRequiredFieldError.
    """

    OPERATIONS = ("create_draft", "update_draft", "delete_draft", "send_message")

    def __init__(self, latency: float = 0.0):
        self.latency = latency
        self.drafts: Dict[str, Draft] = {}
        self.sent: List[SentMessage] = []
        self.sent_requests: List[SendRequest] = []
        self.calls: List[str] = []
        self._failures: Dict[str, List[Exception]] = {op: [] for op in self.OPERATIONS}

    def fail_next(self, operation: str, error: Optional[Exception] = None) -> None:
        """Make the next call of ``operation`` raise ``error``."""
        if operation not in self._failures:
            raise ValueError(f"Unknown operation: {operation}")
        self._failures[operation].append(error or NetworkError())

    async def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        if self.latency:
            await asyncio.sleep(self.latency)
        if self._failures[operation]:
            raise self._failures[operation].pop(0)

    @staticmethod
    def _check_request(request: DraftRequest) -> None:
        for participant in (*request.to, *request.cc, *request.bcc):
            if not RecipientParser.is_valid_email(participant.email):
                raise InvalidRecipientError(f"Invalid recipient address: {participant.email}")

    @staticmethod
    def _require_id(draft_id: str) -> None:
        if not draft_id:
            raise MissingRequiredFieldError("Draft ID is required")

    @staticmethod
    def _new_id(prefix: str) -> str:
        return f"{prefix}-{uuid.uuid4().hex[:12]}"

    @async_log_call
    async def create_draft(self, request: DraftRequest) -> Draft:
        await self._enter("create_draft")
        self._check_request(request)
        draft = Draft(
            id=self._new_id("draft"),
            subject=request.subject,
            body=request.body,
            to=list(request.to),
            cc=list(request.cc),
            bcc=list(request.bcc),
        )
        self.drafts[draft.id] = draft
        logger.debug(f"Created draft {draft.id}")
        return draft

    @async_log_call
    async def update_draft(self, draft_id: str, request: DraftRequest) -> Draft:
        await self._enter("update_draft")
        self._require_id(draft_id)
        self._check_request(request)
        if draft_id not in self.drafts:
            raise DraftSaveError(f"Draft not found: {draft_id}")

        draft = self.drafts[draft_id]
        draft.subject = request.subject
        draft.body = request.body
        draft.to = list(request.to)
        draft.cc = list(request.cc)
        draft.bcc = list(request.bcc)
        logger.debug(f"Updated draft {draft_id}")
        return draft

    @async_log_call
    async def delete_draft(self, draft_id: str) -> None:
        await self._enter("delete_draft")
        self._require_id(draft_id)
        self.drafts.pop(draft_id, None)

    @async_log_call
    async def send_message(self, request: SendRequest) -> SentMessage:
        await self._enter("send_message")
        self._check_request(request)
        if not request.to:
            raise SendError("Message has no recipients")

        message = SentMessage(
            id=self._new_id("msg"),
            subject=request.subject,
            to=list(request.to),
        )
        self.sent.append(message)
        self.sent_requests.append(request)
        return message

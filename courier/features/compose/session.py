"""Compose session: field ownership, autosave state machine, send flow."""

import asyncio
from dataclasses import replace
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, Optional, Set

from courier.core.api.interfaces import (
    SEVERITY_ERROR,
    SEVERITY_INFO,
    MailApi,
    StatusNotifier,
    Throttle,
)
from courier.core.models import (
    Draft,
    DraftRequest,
    FieldSet,
    SendRequest,
    SentMessage,
    SourceMessage,
)
from courier.core.text import (
    build_forwarded_body,
    build_quoted_body,
    forward_subject,
    reply_subject,
)
from courier.core.validation import ComposeValidator, RecipientParser
from courier.utils.config import ComposeConfig
from courier.utils.errors import (
    DraftBindingError,
    ErrorHandler,
    RequestTimeoutError,
    format_error_message,
    truncate_message,
)
from courier.utils.logging import get_logger, log_event

from .autosave import AutosaveScheduler
from .display import StatusLine
from .events import (
    AutosaveTick,
    BackRequested,
    ComposeEvent,
    DiscardRequested,
    DraftSaved,
    FieldEdited,
    MessageSent,
    SaveRequested,
    SendFailed,
    SendRequested,
)
from .fingerprint import DirtyTracker, fingerprint
from .state import ComposeMode, ComposeStatus, DraftHandle, Focus, SaveStatus

logger = get_logger(__name__)

UNSAVED_CHANGES_MESSAGE = "Unsaved changes - save with Ctrl+S or discard with Ctrl+Q"


class ComposeSession:
    """Owns a message being composed and keeps its draft persisted.

    All inputs arrive as events through :meth:`handle`, one at a time on the
    event loop. Network calls run as tasks whose results come back as
    events, so session state is only ever touched from ``handle``.

    At most one draft save is in flight. The draft handle binds on the first
    successful save and every later save updates that draft.
    """

    def __init__(
        self,
        api: MailApi,
        mode: ComposeMode = ComposeMode.NEW,
        source: Optional[SourceMessage] = None,
        draft: Optional[Draft] = None,
        *,
        rate_limiter: Optional[Throttle] = None,
        notifier: Optional[StatusNotifier] = None,
        config: Optional[ComposeConfig] = None,
        on_sent: Optional[Callable[[SentMessage], None]] = None,
        on_back: Optional[Callable[[], None]] = None,
    ):
        self.api = api
        self.mode = mode
        self.source = source
        self.rate_limiter = rate_limiter
        self.notifier = notifier or StatusLine()
        self.config = config or ComposeConfig()
        self.on_sent = on_sent
        self.on_back = on_back

        self.draft = DraftHandle()
        self.focus = Focus.TO
        self.show_cc = False
        self.show_bcc = False

        self.save_status = SaveStatus.NONE
        self.saving_draft = False
        self.sending = False
        self.closed = False
        self.sent_message: Optional[SentMessage] = None
        self.last_saved_at: Optional[datetime] = None
        self.validation_errors: Dict[str, str] = {}

        self._tasks: Set[asyncio.Task] = set()
        self._fields = self._prefill(source, draft)
        self._tracker = DirtyTracker(self._fields)

        self.autosave: Optional[AutosaveScheduler] = None
        if self.config.autosave_enabled:
            self.autosave = AutosaveScheduler(
                self.config.autosave_interval, lambda: self.handle(AutosaveTick())
            )

        logger.debug(f"Compose session opened (mode: {mode.value}, draft: {self.draft.id})")

    ## Prefill

    def _prefill(self, source: Optional[SourceMessage], draft: Optional[Draft]) -> FieldSet:
        """Build the initial fields for the session's mode."""
        format_list = RecipientParser.format_participants
        values = dict(to="", cc="", bcc="", subject="", body="")

        if self.mode.is_reply and source is not None:
            values["subject"] = reply_subject(source.subject)
            if source.from_:
                values["to"] = source.from_[0].format()

            if self.mode is ComposeMode.REPLY_ALL and (source.to or source.cc):
                self.show_cc = True
                values["cc"] = format_list([*source.to, *source.cc])

            values["body"] = build_quoted_body(source)

        elif self.mode is ComposeMode.FORWARD and source is not None:
            values["subject"] = forward_subject(source.subject)
            values["body"] = build_forwarded_body(source)

        elif self.mode is ComposeMode.EDIT_DRAFT and draft is not None:
            if draft.id:
                self.draft.bind(draft.id)
            values["to"] = format_list(draft.to)
            if draft.cc:
                self.show_cc = True
                values["cc"] = format_list(draft.cc)
            if draft.bcc:
                self.show_bcc = True
                values["bcc"] = format_list(draft.bcc)
            values["subject"] = draft.subject
            values["body"] = draft.body

        return FieldSet(**{name: self._cap(name, value) for name, value in values.items()})

    def _cap(self, name: str, value: str) -> str:
        limit = self.config.body_char_limit if name == "body" else self.config.field_char_limit
        return value[:limit]

    ## Read-only views

    @property
    def fields(self) -> FieldSet:
        return self._fields

    @property
    def is_dirty(self) -> bool:
        return self._tracker.is_dirty

    @property
    def is_idle(self) -> bool:
        return not self.saving_draft and not self.sending

    def status(self) -> ComposeStatus:
        """Snapshot for rendering."""
        return ComposeStatus(
            mode=self.mode,
            save_status=self.save_status,
            sending=self.sending,
            saving=self.saving_draft,
            dirty=self.is_dirty,
            draft_id=self.draft.id,
            focus=self.focus,
            show_cc=self.show_cc,
            show_bcc=self.show_bcc,
            last_saved_at=self.last_saved_at,
            validation_errors=dict(self.validation_errors),
        )

    ## Lifecycle

    def start(self) -> None:
        """Start autosaving. Call from within the running event loop."""
        if self.autosave is not None and not self.closed:
            self.autosave.start()

    def close(self) -> None:
        """Stop autosaving. In-flight requests finish but their results are ignored."""
        if self.closed:
            return
        self.closed = True
        if self.autosave is not None:
            self.autosave.stop()
        logger.debug("Compose session closed")

    async def join(self) -> None:
        """Wait for every outstanding request, cleanup included."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    ## Convenience wrappers

    def edit(self, name: str, value: str) -> None:
        self.handle(FieldEdited(name, value))

    def save(self) -> None:
        self.handle(SaveRequested())

    def send(self) -> None:
        self.handle(SendRequested())

    def back(self) -> None:
        self.handle(BackRequested())

    def discard(self) -> None:
        self.handle(DiscardRequested())

    ## Dispatcher

    def handle(self, event: ComposeEvent) -> None:
        """Apply one event to the session."""
        match event:
            case FieldEdited(field=name, value=value):
                self._on_field_edited(name, value)
            case AutosaveTick():
                self._on_autosave_tick()
            case SaveRequested():
                self._on_save_requested()
            case DraftSaved():
                self._on_draft_saved(event)
            case SendRequested():
                self._on_send_requested()
            case MessageSent(message=message):
                self._on_message_sent(message)
            case SendFailed(error=error):
                self._on_send_failed(error)
            case BackRequested():
                self._on_back_requested()
            case DiscardRequested():
                self._on_discard_requested()
            case _:
                raise TypeError(f"Unknown compose event: {event!r}")

    ## Editing

    def _on_field_edited(self, name: str, value: str) -> None:
        if name not in FieldSet.NAMES:
            raise ValueError(f"Unknown compose field: {name}")
        if self.closed:
            return

        self._fields = replace(self._fields, **{name: self._cap(name, value)})
        dirty = self._tracker.update(self._fields)

        # An in-flight save keeps reporting SAVING until its result arrives
        if self.save_status is not SaveStatus.SAVING:
            self.save_status = SaveStatus.UNSAVED if dirty else self._clean_status()

    def _clean_status(self) -> SaveStatus:
        return SaveStatus.SAVED if self.last_saved_at is not None else SaveStatus.NONE

    ## Saving

    def _on_autosave_tick(self) -> None:
        if self.closed or not self.is_dirty or not self.is_idle:
            return
        logger.debug("Autosave triggered")
        self._start_save()

    def _on_save_requested(self) -> None:
        if self.closed or not self.is_idle:
            return
        self.notifier.set_status("Saving draft...", SEVERITY_INFO)
        self._start_save()

    def _start_save(self) -> None:
        snapshot = self._fields
        self.saving_draft = True
        self.save_status = SaveStatus.SAVING
        self._spawn(
            self._save_draft(self.draft.id, self._build_draft_request(snapshot), fingerprint(snapshot))
        )

    async def _save_draft(self, draft_id: Optional[str], request: DraftRequest, saved_fingerprint: str) -> None:
        try:
            if draft_id is None:
                draft = await self._call(lambda: self.api.create_draft(request), self.config.save_timeout)
            else:
                draft = await self._call(lambda: self.api.update_draft(draft_id, request), self.config.save_timeout)
        except Exception as e:
            self.handle(DraftSaved(saved_fingerprint, error=e))
            return

        self.handle(DraftSaved(saved_fingerprint, draft_id=draft.id if draft else None))

    def _on_draft_saved(self, event: DraftSaved) -> None:
        self.saving_draft = False
        if self.closed:
            self._clean_up_late_draft(event)
            return

        if event.error is not None:
            self._fail_save(format_error_message(event.error))
            return

        if not event.draft_id:
            self._fail_save("no draft ID returned")
            return

        try:
            self.draft.bind(event.draft_id)
        except DraftBindingError as e:
            ErrorHandler.handle(e, "Draft save", log_traceback=False)
            self._fail_save(e.message)
            return

        self._tracker.mark_saved(event.fingerprint)
        self.last_saved_at = datetime.now()
        self.save_status = SaveStatus.UNSAVED if self.is_dirty else SaveStatus.SAVED
        self.notifier.set_status("", SEVERITY_INFO)
        log_event("draft_saved", "Draft saved", draft_id=self.draft.id, mode=self.mode.value)

    def _clean_up_late_draft(self, event: DraftSaved) -> None:
        """Delete a draft created by a save that finished after the send."""
        if self.sent_message is None or event.error is not None or not event.draft_id:
            return
        # A draft bound before the send was already removed with it
        if event.draft_id == self.draft.id:
            return
        logger.debug(f"Removing draft {event.draft_id} saved after send")
        self._spawn(self._delete_draft(event.draft_id))

    def _fail_save(self, reason: str) -> None:
        self.save_status = SaveStatus.ERROR
        self.notifier.set_status(truncate_message(f"Draft save failed: {reason}"), SEVERITY_ERROR)
        log_event("draft_save_failed", f"Draft save failed: {reason}", level="WARNING", draft_id=self.draft.id)

    ## Sending

    def _on_send_requested(self) -> None:
        if self.closed or self.sending:
            return

        result = ComposeValidator.validate(self._fields)
        self.validation_errors = dict(result.errors)

        if not result.is_valid:
            reason = result.blocking.get("to")
            message = f"Cannot send: {reason}" if reason else "Please fix validation errors"
            self.notifier.set_status(message, SEVERITY_ERROR)
            return

        self.sending = True
        self.save_status = SaveStatus.NONE
        self.notifier.set_status("Sending message...", SEVERITY_INFO)
        self._spawn(self._send_message(self._build_send_request(self._fields)))

    async def _send_message(self, request: SendRequest) -> None:
        try:
            message = await self._call(lambda: self.api.send_message(request), self.config.send_timeout)
        except Exception as e:
            self.handle(SendFailed(e))
            return

        self.handle(MessageSent(message))

    def _on_message_sent(self, message: SentMessage) -> None:
        self.sending = False
        self.sent_message = message

        # The draft is now redundant whether or not anyone is still listening
        if self.draft.is_bound:
            self._spawn(self._delete_draft(self.draft.id))

        if self.closed:
            return

        self.notifier.set_status("Message sent successfully!", SEVERITY_INFO)
        log_event("message_sent", "Message sent", message_id=message.id, mode=self.mode.value)
        self.close()

        if self.on_sent is not None:
            self.on_sent(message)

    def _on_send_failed(self, error: BaseException) -> None:
        self.sending = False
        if self.closed:
            return

        self.save_status = SaveStatus.UNSAVED if self.is_dirty else self._clean_status()
        reason = format_error_message(error)
        self.notifier.set_status(truncate_message(f"Send failed: {reason}"), SEVERITY_ERROR)
        log_event("send_failed", f"Send failed: {reason}", level="WARNING", mode=self.mode.value)

    async def _delete_draft(self, draft_id: str) -> None:
        """Best-effort removal of the draft behind a sent message.

        The send already succeeded, so a failure here is only logged.
        """
        try:
            await self._call(lambda: self.api.delete_draft(draft_id), self.config.cleanup_timeout)
        except Exception as e:
            logger.debug(f"Draft cleanup failed for {draft_id}: {e}")

    ## Leaving

    def _on_back_requested(self) -> None:
        if self.closed:
            return
        if self.is_dirty:
            self.notifier.set_status(UNSAVED_CHANGES_MESSAGE, SEVERITY_ERROR)
            return

        self.close()
        if self.on_back is not None:
            self.on_back()

    def _on_discard_requested(self) -> None:
        if self.closed:
            return
        if self.is_dirty:
            logger.info("Discarding unsaved compose changes")

        self.close()
        if self.on_back is not None:
            self.on_back()

    ## Focus

    def _visible(self, focus: Focus) -> bool:
        if focus is Focus.CC:
            return self.show_cc
        if focus is Focus.BCC:
            return self.show_bcc
        return True

    def _cycle_focus(self, step: int) -> Focus:
        index = int(self.focus)
        for _ in range(len(Focus)):
            index = (index + step) % len(Focus)
            if self._visible(Focus(index)):
                break
        self.focus = Focus(index)
        return self.focus

    def focus_next(self) -> Focus:
        """Move focus to the next visible field."""
        return self._cycle_focus(1)

    def focus_previous(self) -> Focus:
        """Move focus to the previous visible field."""
        return self._cycle_focus(-1)

    def set_focus(self, focus: Focus) -> None:
        if not self._visible(focus):
            raise ValueError(f"Field {focus.name} is hidden")
        self.focus = focus

    def toggle_cc(self) -> bool:
        """Show or hide the Cc field; returns the new visibility."""
        self.show_cc = not self.show_cc
        if not self.show_cc and self.focus is Focus.CC:
            self.focus_next()
        return self.show_cc

    def toggle_bcc(self) -> bool:
        """Show or hide the Bcc field; returns the new visibility."""
        self.show_bcc = not self.show_bcc
        if not self.show_bcc and self.focus is Focus.BCC:
            self.focus_next()
        return self.show_bcc

    ## Requests

    def _recipients(self, snapshot: FieldSet) -> Dict[str, Any]:
        recipients: Dict[str, Any] = {"to": RecipientParser.parse(snapshot.to.strip())}
        if self.show_cc:
            recipients["cc"] = RecipientParser.parse(snapshot.cc.strip())
        if self.show_bcc:
            recipients["bcc"] = RecipientParser.parse(snapshot.bcc.strip())
        return recipients

    def _build_draft_request(self, snapshot: FieldSet) -> DraftRequest:
        return DraftRequest(
            subject=snapshot.subject.strip(),
            body=snapshot.body,
            **self._recipients(snapshot),
        )

    def _build_send_request(self, snapshot: FieldSet) -> SendRequest:
        reply_to = None
        if self.mode.is_reply and self.source is not None:
            reply_to = self.source.id

        return SendRequest(
            subject=snapshot.subject.strip(),
            body=snapshot.body,
            reply_to_message_id=reply_to,
            **self._recipients(snapshot),
        )

    ## Task plumbing

    async def _call(self, request: Callable[[], Awaitable[Any]], timeout: float) -> Any:
        """Throttle, then run ``request()`` with a timeout."""
        if self.rate_limiter is not None:
            await self.rate_limiter.wait()
        try:
            return await asyncio.wait_for(request(), timeout)
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(f"Request timed out after {timeout:g}s") from e

    def _spawn(self, coro: Awaitable[None]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            ErrorHandler.handle(error, "Compose background task")

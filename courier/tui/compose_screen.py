"""Full-screen compose view driving a ComposeSession."""

from typing import Dict, Optional

from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import Screen
from textual.widget import Widget
from textual.widgets import Input, Static, TextArea

from courier.core.api import MailApi
from courier.core.api.interfaces import SEVERITY_ERROR
from courier.core.models import Draft, SentMessage, SourceMessage
from courier.features.compose import ComposeMode, ComposeSession, Focus, SaveStatus, create_session
from courier.utils.config import ConfigManager
from courier.utils.logging import get_logger

from .widgets.hint_bar import HintBar
from .widgets.status_bar import StatusBar

logger = get_logger(__name__)

FIELD_IDS: Dict[Focus, str] = {
    Focus.TO: "to",
    Focus.CC: "cc",
    Focus.BCC: "bcc",
    Focus.SUBJECT: "subject",
    Focus.BODY: "body",
}

SAVE_LABELS = {
    SaveStatus.NONE: "",
    SaveStatus.SAVING: "Saving...",
    SaveStatus.SAVED: "Saved",
    SaveStatus.ERROR: "Save failed",
    SaveStatus.UNSAVED: "Unsaved changes",
}

MODE_TITLES = {
    ComposeMode.NEW: "New Message",
    ComposeMode.REPLY: "Reply",
    ComposeMode.REPLY_ALL: "Reply All",
    ComposeMode.FORWARD: "Forward",
    ComposeMode.EDIT_DRAFT: "Edit Draft",
}


class ComposeScreen(Screen):
    """Compose form. Dismisses with the sent message, or None when left."""

    DEFAULT_CSS = """
    ComposeScreen #compose-header { height: 1; padding: 0 1; text-style: bold; }
    ComposeScreen #body { height: 1fr; }
    ComposeScreen #status-bar { height: 1; padding: 0 1; }
    ComposeScreen #status-bar.error { color: $error; }
    ComposeScreen #hint-bar { height: 1; padding: 0 1; color: $text-muted; }
    """

    BINDINGS = [
        Binding("ctrl+s", "save", "Save", priority=True),
        Binding("ctrl+a", "send", "Send", priority=True),
        Binding("ctrl+t", "toggle_cc", "Cc", priority=True),
        Binding("ctrl+b", "toggle_bcc", "Bcc", priority=True),
        Binding("tab", "focus_next_field", "Next field", show=False, priority=True),
        Binding("shift+tab", "focus_previous_field", "Previous field", show=False, priority=True),
        Binding("escape", "back", "Back", priority=True),
        Binding("ctrl+q", "discard", "Discard", priority=True),
    ]

    def __init__(
        self,
        api: MailApi,
        mode: ComposeMode = ComposeMode.NEW,
        source: Optional[SourceMessage] = None,
        draft: Optional[Draft] = None,
        config: Optional[ConfigManager] = None,
    ):
        super().__init__()
        self.status_bar = StatusBar()
        self.session: ComposeSession = create_session(
            api,
            mode,
            source,
            draft,
            config=config,
            notifier=self.status_bar,
            on_sent=self._on_sent,
            on_back=self._on_back,
        )
        self.title_line = Static("", id="compose-header")

    def compose(self) -> ComposeResult:
        fields = self.session.fields
        limit = self.session.config.field_char_limit
        yield self.title_line
        yield Vertical(
            Input(fields.to, placeholder="To", id="to", max_length=limit),
            Input(fields.cc, placeholder="Cc", id="cc", max_length=limit),
            Input(fields.bcc, placeholder="Bcc", id="bcc", max_length=limit),
            Input(fields.subject, placeholder="Subject", id="subject", max_length=limit),
            id="compose-fields",
        )
        yield TextArea(fields.body, id="body")
        yield self.status_bar
        yield HintBar()

    # --- Lifecycle ---

    def on_mount(self) -> None:
        self.query_one("#body", TextArea).move_cursor((0, 0))
        self._sync_visibility()
        self._focus_widget(self.session.focus)
        self.session.start()
        self.refresh_header()
        self.set_interval(0.25, self.refresh_header)

    async def on_unmount(self) -> None:
        self.session.close()
        await self.session.join()

    def refresh_header(self) -> None:
        status = self.session.status()
        parts = [MODE_TITLES[status.mode]]
        if status.sending:
            parts.append("Sending...")
        elif SAVE_LABELS[status.save_status]:
            parts.append(SAVE_LABELS[status.save_status])
        self.title_line.update(" · ".join(parts))

    # --- Field edits ---

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id in FIELD_IDS.values():
            self.session.edit(event.input.id, event.value)
            self.refresh_header()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        text_area = event.text_area
        limit = self.session.config.body_char_limit
        if len(text_area.text) > limit:
            # TextArea has no max_length
            text_area.load_text(text_area.text[:limit])
            text_area.move_cursor(text_area.document.end)
            self.status_bar.set_status(f"Body is limited to {limit} characters", SEVERITY_ERROR)
        self.session.edit("body", text_area.text)
        self.refresh_header()

    def on_descendant_focus(self, event: events.DescendantFocus) -> None:
        focused = self.focused
        for focus, widget_id in FIELD_IDS.items():
            if focused is not None and focused.id == widget_id and self.session.focus is not focus:
                self.session.set_focus(focus)
                break

    # --- Actions ---

    def action_save(self) -> None:
        self.session.save()
        self.refresh_header()

    def action_send(self) -> None:
        self.session.send()
        self.refresh_header()

    def action_toggle_cc(self) -> None:
        self.session.toggle_cc()
        self._sync_visibility()
        self._focus_widget(self.session.focus)

    def action_toggle_bcc(self) -> None:
        self.session.toggle_bcc()
        self._sync_visibility()
        self._focus_widget(self.session.focus)

    def action_focus_next_field(self) -> None:
        self._focus_widget(self.session.focus_next())

    def action_focus_previous_field(self) -> None:
        self._focus_widget(self.session.focus_previous())

    def action_back(self) -> None:
        self.session.back()

    def action_discard(self) -> None:
        self.session.discard()

    # --- Helpers ---

    def _field_widget(self, focus: Focus) -> Widget:
        return self.query_one(f"#{FIELD_IDS[focus]}")

    def _sync_visibility(self) -> None:
        self._field_widget(Focus.CC).display = self.session.show_cc
        self._field_widget(Focus.BCC).display = self.session.show_bcc

    def _focus_widget(self, focus: Focus) -> None:
        self._field_widget(focus).focus()

    def _on_sent(self, message: SentMessage) -> None:
        logger.info(f"Compose finished, sent {message.id}")
        self.app.call_later(self.dismiss, message)

    def _on_back(self) -> None:
        self.app.call_later(self.dismiss, None)

"""Compose session state types."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Dict, Optional

from courier.utils.errors import DraftBindingError


class ComposeMode(Enum):
    """Why the session was opened; fixed for the session's lifetime."""

    NEW = "new"
    REPLY = "reply"
    REPLY_ALL = "reply-all"
    FORWARD = "forward"
    EDIT_DRAFT = "draft"

    @property
    def is_reply(self) -> bool:
        return self in (ComposeMode.REPLY, ComposeMode.REPLY_ALL)

    @classmethod
    def from_string(cls, value: str) -> "ComposeMode":
        """Create ComposeMode from its CLI name.

        Raises:
            ValueError: If the name is unknown.
        """
        try:
            return cls(value.lower())
        except ValueError:
            raise ValueError(f"Invalid compose mode: {value}")


class SaveStatus(Enum):
    """Draft persistence status shown to the user."""

    NONE = "none"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"
    UNSAVED = "unsaved"


class Focus(IntEnum):
    """Editable fields in tab order."""

    TO = 0
    CC = 1
    BCC = 2
    SUBJECT = 3
    BODY = 4


class DraftHandle:
    """The session's link to its server-side draft. Binds at most once."""

    def __init__(self, draft_id: Optional[str] = None):
        self._id = draft_id or None

    @property
    def id(self) -> Optional[str]:
        return self._id

    @property
    def is_bound(self) -> bool:
        return self._id is not None

    def bind(self, draft_id: str) -> None:
        """Bind to ``draft_id``; rebinding to the same id is a no-op.

        Raises:
            DraftBindingError: If already bound to a different id.
        """
        if not draft_id:
            raise DraftBindingError("Cannot bind an empty draft ID")
        if self._id is not None and self._id != draft_id:
            raise DraftBindingError(
                f"Draft already bound to {self._id}, refusing {draft_id}"
            )
        self._id = draft_id

    def __repr__(self) -> str:
        return f"DraftHandle(id={self._id!r})"


@dataclass(frozen=True)
class ComposeStatus:
    """Read-only snapshot of a session for rendering."""

    mode: ComposeMode
    save_status: SaveStatus
    sending: bool
    saving: bool
    dirty: bool
    draft_id: Optional[str]
    focus: Focus
    show_cc: bool
    show_bcc: bool
    last_saved_at: Optional[datetime] = None
    validation_errors: Dict[str, str] = field(default_factory=dict)

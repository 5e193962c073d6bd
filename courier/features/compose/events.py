"""Events consumed by ComposeSession.handle().

The set is closed: every input to the session, whether a keystroke-level
edit, a timer tick or a network result, arrives as one of these.
"""

from dataclasses import dataclass
from typing import Optional, Union

from courier.core.models import SentMessage


@dataclass(frozen=True)
class FieldEdited:
    field: str
    value: str


@dataclass(frozen=True)
class AutosaveTick:
    pass


@dataclass(frozen=True)
class SaveRequested:
    pass


@dataclass(frozen=True)
class DraftSaved:
    """Result of a create/update call.

    ``fingerprint`` identifies the snapshot that was sent, so edits made while
    the save was in flight stay dirty.
    """

    fingerprint: str
    draft_id: Optional[str] = None
    error: Optional[BaseException] = None


@dataclass(frozen=True)
class SendRequested:
    pass


@dataclass(frozen=True)
class MessageSent:
    message: SentMessage


@dataclass(frozen=True)
class SendFailed:
    error: BaseException


@dataclass(frozen=True)
class BackRequested:
    pass


@dataclass(frozen=True)
class DiscardRequested:
    pass


ComposeEvent = Union[
    FieldEdited,
    AutosaveTick,
    SaveRequested,
    DraftSaved,
    SendRequested,
    MessageSent,
    SendFailed,
    BackRequested,
    DiscardRequested,
]

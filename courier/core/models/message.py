"""Message domain models"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class Participant:
    """A sender or recipient. Identity is the address; the name is display-only."""

    email: str
    name: str = field(default="", compare=False)

    def format(self) -> str:
        """Render as ``Name <email>`` or the bare address."""
        if self.name:
            return f"{self.name} <{self.email}>"
        return self.email

    @property
    def display_name(self) -> str:
        return self.name or self.email

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True)
class SourceMessage:
    """A received message being replied to or forwarded. Never mutated."""

    id: str
    subject: str
    date: datetime
    from_: List[Participant] = field(default_factory=list)
    to: List[Participant] = field(default_factory=list)
    cc: List[Participant] = field(default_factory=list)
    body: str = ""
    snippet: str = ""

    @property
    def text(self) -> str:
        """Body to quote, falling back to the snippet when the body is empty."""
        return self.body or self.snippet


@dataclass
class Draft:
    """A server-persisted, not-yet-sent message."""

    id: str
    subject: str = ""
    body: str = ""
    to: List[Participant] = field(default_factory=list)
    cc: List[Participant] = field(default_factory=list)
    bcc: List[Participant] = field(default_factory=list)


@dataclass
class DraftRequest:
    """Payload for creating or updating a draft."""

    subject: str
    body: str
    to: List[Participant] = field(default_factory=list)
    cc: List[Participant] = field(default_factory=list)
    bcc: List[Participant] = field(default_factory=list)


@dataclass
class SendRequest(DraftRequest):
    """Payload for sending a message, threaded when replying."""

    reply_to_message_id: Optional[str] = None


@dataclass
class SentMessage:
    """Result of a successful send."""

    id: str
    subject: str
    to: List[Participant] = field(default_factory=list)


@dataclass(frozen=True)
class FieldSet:
    """Snapshot of the five editable compose fields."""

    to: str = ""
    cc: str = ""
    bcc: str = ""
    subject: str = ""
    body: str = ""

    NAMES = ("to", "cc", "bcc", "subject", "body")

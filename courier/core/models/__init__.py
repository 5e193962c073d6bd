"""Domain models shared by the compose feature and the mail API."""

from .message import (
    Draft,
    DraftRequest,
    FieldSet,
    Participant,
    SendRequest,
    SentMessage,
    SourceMessage,
)

__all__ = [
    "Draft",
    "DraftRequest",
    "FieldSet",
    "Participant",
    "SendRequest",
    "SentMessage",
    "SourceMessage",
]

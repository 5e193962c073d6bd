"""Message composition feature module.

This module provides the compose session behind the compose screen:
- Prefill for new messages, replies, reply-all, forwards and stored drafts
- Unsaved-change detection by content fingerprint
- Background autosave with a single save in flight
- Validation and sending, with cleanup of the draft once sent

Public API:
    create_session() - Build a session from application configuration
    ComposeSession - The session itself (for testing/customization)

Example:
    >>> from courier.features.compose import ComposeMode, create_session
    >>> session = create_session(api, ComposeMode.REPLY, source=message)
    >>> session.start()
    >>> session.edit("body", "Thanks!\\n" + session.fields.body)
    >>> session.send()
"""

from .autosave import AutosaveScheduler
from .display import StatusLine
from .fingerprint import DirtyTracker, fingerprint
from .session import ComposeSession
from .state import ComposeMode, ComposeStatus, DraftHandle, Focus, SaveStatus
from .workflow import create_session

__all__ = [
    "create_session",  # Main entry point
    "ComposeSession",  # Session orchestration
    "AutosaveScheduler",
    "ComposeMode",
    "ComposeStatus",
    "DirtyTracker",
    "DraftHandle",
    "Focus",
    "SaveStatus",
    "StatusLine",
    "fingerprint",
]

"""Content fingerprinting for unsaved-change detection."""

import hashlib
import json

from courier.core.models import FieldSet


def fingerprint(fields: FieldSet) -> str:
    """SHA-256 over an unambiguous encoding of the five fields.

    Fields are JSON-encoded as a list, so separators inside values can never
    make two different snapshots encode alike.
    """
    payload = json.dumps(
        [fields.to, fields.cc, fields.bcc, fields.subject, fields.body],
        ensure_ascii=False,
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class DirtyTracker:
    """Compares current content against the last saved baseline."""

    def __init__(self, fields: FieldSet):
        self.baseline = fingerprint(fields)
        self.current = self.baseline

    @property
    def is_dirty(self) -> bool:
        return self.current != self.baseline

    def update(self, fields: FieldSet) -> bool:
        """Record the latest content and return whether it differs from the baseline."""
        self.current = fingerprint(fields)
        return self.is_dirty

    def mark_saved(self, saved_fingerprint: str) -> None:
        """Move the baseline to the content that was persisted."""
        self.baseline = saved_fingerprint

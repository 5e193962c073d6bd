"""Prefilled bodies and subjects for reply and forward."""

from datetime import datetime

from courier.core.models import SourceMessage

from .reconstruct import html_to_text, strip_quotes, strip_signature

# Blank lines above quoted content so the cursor starts above the quote
CARET_SPACE = "\n\n\n"
FORWARD_BANNER = "---------- Forwarded message ---------"


def format_message_date(value: datetime) -> str:
    """Format like ``Mon, Jan 2, 2006 at 3:04 PM``."""
    hour = value.hour % 12 or 12
    return f"{value:%a, %b} {value.day}, {value.year} at {hour}:{value:%M %p}"


def _prefixed(subject: str, prefix: str) -> str:
    if subject.lower().startswith(prefix.lower()):
        return subject
    return f"{prefix} {subject}"


def reply_subject(subject: str) -> str:
    """Add ``Re:`` unless already present (case-insensitive)."""
    return _prefixed(subject, "Re:")


def forward_subject(subject: str) -> str:
    """Add ``Fwd:`` unless already present (case-insensitive)."""
    return _prefixed(subject, "Fwd:")


def build_quoted_body(source: SourceMessage) -> str:
    """Build a reply body: caret space, attribution line, quoted new content.

    Only the newest content of the source is quoted. Earlier quotes and
    attribution lines are stripped first so reply chains never nest.
    """
    sender = source.from_[0].display_name if source.from_ else "Unknown"

    text = html_to_text(source.text)
    text = strip_signature(text)
    text = strip_quotes(text)

    parts = [
        CARET_SPACE,
        f"On {format_message_date(source.date)}, {sender} wrote:\n",
    ]
    parts.extend(f"> {line}\n" for line in text.split("\n"))

    return "".join(parts)


def build_forwarded_body(source: SourceMessage) -> str:
    """Build a forward body: caret space, banner, headers, original text.

    The original is kept whole, earlier quotes included.
    """
    lines = [FORWARD_BANNER]

    if source.from_:
        lines.append(f"From: {source.from_[0].format()}")
    lines.append(f"Date: {format_message_date(source.date)}")
    lines.append(f"Subject: {source.subject}")
    if source.to:
        lines.append(f"To: {', '.join(p.format() for p in source.to)}")
    lines.append("")

    return CARET_SPACE + "\n".join(lines) + "\n" + html_to_text(source.text)

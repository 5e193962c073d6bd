"""Text reconstruction for quoting and forwarding."""

from .builders import (
    CARET_SPACE,
    FORWARD_BANNER,
    build_forwarded_body,
    build_quoted_body,
    format_message_date,
    forward_subject,
    reply_subject,
)
from .reconstruct import html_to_text, strip_quotes, strip_signature

__all__ = [
    "CARET_SPACE",
    "FORWARD_BANNER",
    "build_forwarded_body",
    "build_quoted_body",
    "format_message_date",
    "forward_subject",
    "html_to_text",
    "reply_subject",
    "strip_quotes",
    "strip_signature",
]

"""Pure text transforms applied to message bodies before quoting."""

import re

HTML_ENTITIES = (
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    # Last, so "&amp;lt;" decodes to "&lt;" and not "<"
    ("&amp;", "&"),
)

BLOCK_BREAKS = (
    ("<br>", "\n"),
    ("<br/>", "\n"),
    ("<br />", "\n"),
    ("</p>", "\n\n"),
    ("</div>", "\n"),
)

SIGNATURE_DELIMITERS = ("--", "-- ")

_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_LEADING_BLANK_LINES = re.compile(r"\A(?:[ \t]*\n)+")


def html_to_text(html: str) -> str:
    """Reduce an HTML body to plain text.

    Line-breaking tags become newlines, every other tag is dropped, the
    common entities are decoded and runs of blank lines collapse to one.
    """
    text = html
    for tag, replacement in BLOCK_BREAKS:
        text = text.replace(tag, replacement)

    chars = []
    in_tag = False
    for ch in text:
        if ch == "<":
            in_tag = True
        elif ch == ">":
            in_tag = False
        elif not in_tag:
            chars.append(ch)
    text = "".join(chars)

    for entity, replacement in HTML_ENTITIES:
        text = text.replace(entity, replacement)

    text = _EXCESS_NEWLINES.sub("\n\n", text)
    return text.strip()


def strip_signature(body: str) -> str:
    """Drop everything from the first ``--`` delimiter line onwards."""
    lines = body.split("\n")

    for index, line in enumerate(lines):
        if line.strip() in SIGNATURE_DELIMITERS:
            return "\n".join(lines[:index])

    return body


def is_attribution_line(line: str) -> bool:
    """True for ``On <date>, <sender> wrote:`` headers."""
    trimmed = line.strip()
    return trimmed.startswith("On ") and " wrote:" in trimmed


def strip_quotes(body: str) -> str:
    """Remove previously quoted lines and attribution headers.

    Quoted lines are those whose first character is ">"; an indented ">"
    is ordinary text. Keeps only the newest content of a reply chain so
    re-quoting never nests.

    Surrounding blank lines and trailing whitespace are trimmed, but the
    first line keeps its indentation so a second pass never sees a new
    quote marker. Idempotent.
    """
    kept = [
        line
        for line in body.split("\n")
        if not line.startswith(">") and not is_attribution_line(line)
    ]
    text = "\n".join(kept).rstrip()
    return _LEADING_BLANK_LINES.sub("", text)

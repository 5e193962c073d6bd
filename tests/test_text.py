"""
Tests for body reconstruction and reply/forward builders

Tests cover:
- HTML to text conversion
- Signature and quote stripping
- Subject prefixes and date formatting
- Quoted and forwarded body layout
"""
from datetime import datetime

import pytest

from courier.core.models import Participant, SourceMessage
from courier.core.text import (
    CARET_SPACE,
    FORWARD_BANNER,
    build_forwarded_body,
    build_quoted_body,
    format_message_date,
    forward_subject,
    html_to_text,
    reply_subject,
    strip_quotes,
    strip_signature,
)


class TestHtmlToText:
    """Tests for html_to_text"""

    def test_breaks_and_tags(self):
        """Test break tags become newlines and other tags vanish"""
        assert html_to_text("<p>Hello <b>there</b></p>Bye<br>now") == "Hello there\n\nBye\nnow"

    def test_entities(self):
        """Test common entities decode"""
        assert html_to_text("a&nbsp;&lt;b&gt; &quot;c&quot; &#39;d&#39; &amp; e") == "a <b> \"c\" 'd' & e"

    def test_ampersand_decoded_last(self):
        """Test an escaped entity is decoded only once"""
        assert html_to_text("&amp;lt;") == "&lt;"

    def test_blank_lines_collapse(self):
        """Test runs of newlines collapse to a single blank line"""
        assert html_to_text("one</p><br><br>two") == "one\n\ntwo"

    def test_plain_text_unchanged(self):
        """Test plain text passes through"""
        assert html_to_text("just text") == "just text"


class TestStripSignature:
    """Tests for strip_signature"""

    def test_cuts_at_delimiter(self):
        """Test everything from the delimiter line is removed"""
        assert strip_signature("Body\n-- \nJohn\nACME") == "Body"

    def test_bare_dashes(self):
        """Test '--' without a trailing space is a delimiter too"""
        assert strip_signature("Body\n--\nJohn") == "Body"

    def test_no_delimiter(self):
        """Test input without a delimiter is unchanged"""
        assert strip_signature("Line one\n---\nLine two") == "Line one\n---\nLine two"

    def test_delimiter_on_first_line(self):
        """Test a leading delimiter leaves nothing"""
        assert strip_signature("--\nsig only") == ""


class TestStripQuotes:
    """Tests for strip_quotes"""

    def test_reply_chain(self):
        """Test a nested reply chain strips to the newest text"""
        body = (
            "Reply 3\n"
            "On Dec 27, 2025 at 3:08 PM, User wrote:\n"
            "> Reply 2\n"
            "> On Dec 27, 2025 at 3:05 PM, User wrote:\n"
            "> > Reply 1"
        )
        assert strip_quotes(body) == "Reply 3"

    def test_no_quotes_unchanged(self):
        """Test text without quote markers is returned unchanged"""
        assert strip_quotes("Hello\n\nSee you soon") == "Hello\n\nSee you soon"

    def test_indented_marker_is_kept(self):
        """Test only a '>' in the first column marks a quoted line"""
        body = "Reply\n  > not a quote marker\n   x > y"
        assert strip_quotes(body) == body

    def test_indented_first_line_survives_trim(self):
        """Test trimming keeps the indentation of the first kept line"""
        body = "\n\n  > kept\n> dropped\n\n"
        assert strip_quotes(body) == "  > kept"
        assert strip_quotes(strip_quotes(body)) == "  > kept"

    @pytest.mark.parametrize(
        "body",
        [
            "",
            ">",
            "  > indented quote\nkept",
            " \t\n   > x\n>y",
            "On Monday, Bob wrote:\n> hi\n\n\nnew",
            "\n\n text \n> q\n",
            "a\n  >b\n > > c\nOn x wrote:",
        ],
    )
    def test_idempotent(self, body):
        """Test stripping twice equals stripping once"""
        once = strip_quotes(body)
        assert strip_quotes(once) == once


class TestSubjectsAndDates:
    """Tests for subject prefixes and date formatting"""

    def test_reply_subject(self):
        assert reply_subject("Hello") == "Re: Hello"
        assert reply_subject("RE: Hello") == "RE: Hello"

    def test_forward_subject(self):
        assert forward_subject("Hello") == "Fwd: Hello"
        assert forward_subject("fwd: Hello") == "fwd: Hello"

    def test_format_message_date(self):
        """Test the attribution date layout"""
        assert format_message_date(datetime(2006, 1, 2, 15, 4)) == "Mon, Jan 2, 2006 at 3:04 PM"

    def test_format_midnight(self):
        """Test midnight renders as 12 AM"""
        assert format_message_date(datetime(2025, 12, 27, 0, 5)) == "Sat, Dec 27, 2025 at 12:05 AM"


class TestBodyBuilders:
    """Tests for quoted and forwarded bodies"""

    def test_quoted_body(self, source_message):
        """Test caret space, attribution and quoted lines without signature"""
        body = build_quoted_body(source_message)
        assert body == (
            CARET_SPACE
            + "On Sat, Dec 27, 2025 at 3:08 PM, John Doe wrote:\n"
            + "> Hello there,\n"
            + "> See you tomorrow.\n"
        )

    def test_quoted_body_does_not_nest(self):
        """Test earlier quotes are not re-quoted"""
        source = SourceMessage(
            id="m",
            subject="s",
            date=datetime(2025, 12, 27, 15, 8),
            from_=[Participant("user@example.com")],
            body="Reply 2\nOn Dec 27, 2025 at 3:05 PM, User wrote:\n> Reply 1",
        )
        body = build_quoted_body(source)
        assert "> Reply 2\n" in body
        assert "Reply 1" not in body
        assert ", user@example.com wrote:" in body

    def test_quoted_body_unknown_sender_and_snippet(self):
        """Test missing sender and empty body fall back"""
        source = SourceMessage(
            id="m", subject="s", date=datetime(2025, 1, 1, 9, 0), snippet="preview text"
        )
        body = build_quoted_body(source)
        assert ", Unknown wrote:" in body
        assert "> preview text\n" in body

    def test_forwarded_body(self, source_message):
        """Test banner, headers and the whole original text"""
        body = build_forwarded_body(source_message)
        assert body == (
            CARET_SPACE
            + FORWARD_BANNER + "\n"
            + "From: John Doe <john@example.com>\n"
            + "Date: Sat, Dec 27, 2025 at 3:08 PM\n"
            + "Subject: Original Subject\n"
            + "To: Me <me@example.com>, Jane Roe <jane@example.com>\n"
            + "\n"
            + "Hello there,\nSee you tomorrow.\n--\nJohn"
        )

"""Recipient list parsing."""

import re
from typing import Iterable, List

from courier.core.models import Participant


class RecipientParser:
    """Turn free-text address lists into participants"""

    # "Name <address>" or a bare address without brackets, commas or spaces
    TOKEN_PATTERN = re.compile(r"^([^<>]+)<([^<>]+)>$|^([^<>,\s]+)$")
    ADDRESS_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

    @staticmethod
    def is_valid_email(email_address: str) -> bool:
        """Validate email address format"""
        if not email_address or not isinstance(email_address, str):
            return False

        return bool(RecipientParser.ADDRESS_PATTERN.match(email_address.strip()))

    @staticmethod
    def parse(text: str) -> List[Participant]:
        """Parse a comma-separated address list.

        Tokens that are neither ``Name <email>`` nor a bare address are
        dropped without error; callers judge validity by the number of
        participants returned. Order and duplicates are preserved.

        Args:
            text: Raw field value, e.g. ``"John Doe <john@example.com>, jane@example.com"``

        Returns:
            Parsed participants in input order
        """
        if not text:
            return []

        recipients = []

        for token in text.split(","):
            token = token.strip()
            if not token:
                continue

            match = RecipientParser.TOKEN_PATTERN.match(token)
            if match is None:
                continue

            name, bracketed, bare = match.groups()
            if bracketed is not None:
                address = bracketed.strip()
                name = name.strip()
            else:
                address = bare.strip()
                name = ""

            if RecipientParser.is_valid_email(address):
                recipients.append(Participant(email=address, name=name))

        return recipients

    @staticmethod
    def format_participants(participants: Iterable[Participant]) -> str:
        """Render participants back into an editable field value."""
        return ", ".join(p.format() for p in participants)

"""Demo conversation used to seed the in-memory backend."""

from datetime import datetime
from typing import Tuple

from courier.core.api import InMemoryMailApi
from courier.core.models import Draft, Participant, SourceMessage

ALICE = Participant("alice@example.com", "Alice Moreau")
BOB = Participant("bob@example.com", "Bob Chen")
CAROL = Participant("carol@example.com")
ME = Participant("me@example.com", "Me")


def demo_message() -> SourceMessage:
    return SourceMessage(
        id="msg-demo-1",
        subject="Quarterly planning",
        date=datetime(2026, 1, 2, 15, 4),
        from_=[ALICE],
        to=[ME, BOB],
        cc=[CAROL],
        body=(
            "Hi all,\n\n"
            "Can we meet Thursday to go over the plan?\n\n"
            "> Last quarter's notes are in the shared folder.\n\n"
            "--\n"
            "Alice Moreau\n"
            "Planning"
        ),
    )


def demo_draft() -> Draft:
    return Draft(
        id="draft-demo-1",
        subject="Offsite venue",
        body="Shortlist so far:\n- Harbour Hall\n- ",
        to=[BOB],
        cc=[ALICE],
    )


def seeded_api(latency: float = 0.3) -> Tuple[InMemoryMailApi, SourceMessage, Draft]:
    """In-memory backend holding the demo draft, plus the demo message."""
    api = InMemoryMailApi(latency=latency)
    draft = demo_draft()
    api.drafts[draft.id] = draft
    return api, demo_message(), draft

"""
Shared test fixtures and configuration for pytest
"""
import asyncio
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Dict, List

import pytest

from courier.utils.logging import init_logging

# Keep test runs out of ~/.courier/logs
init_logging("DEBUG", log_dir=Path(tempfile.mkdtemp(prefix="courier-logs-")))

from courier.core.api import InMemoryMailApi  # noqa: E402
from courier.core.models import Draft, Participant, SourceMessage  # noqa: E402
from courier.features.compose import ComposeMode, ComposeSession, StatusLine  # noqa: E402
from courier.utils.config import ComposeConfig, ConfigManager  # noqa: E402


class FakeMailApi(InMemoryMailApi):
    """In-memory API whose calls can be held open until released"""

    def __init__(self):
        super().__init__()
        self._gates: Dict[str, asyncio.Event] = {}
        self.started: List[str] = []

    def hold(self, operation: str) -> None:
        """Block calls of ``operation`` until :meth:`release`"""
        self._gates[operation] = asyncio.Event()

    def release(self, operation: str) -> None:
        gate = self._gates.pop(operation, None)
        if gate is not None:
            gate.set()

    def count(self, operation: str) -> int:
        return self.calls.count(operation)

    async def _enter(self, operation: str) -> None:
        self.started.append(operation)
        gate = self._gates.get(operation)
        if gate is not None:
            await gate.wait()
        await super()._enter(operation)


async def _settle(rounds: int = 10) -> None:
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path):
    """Fresh ConfigManager backed by a temporary file"""
    ConfigManager.reset()
    manager = ConfigManager(tmp_path / "config.json")
    yield manager
    ConfigManager.reset()


@pytest.fixture
def source_message():
    """Message from John Doe used for reply and forward tests"""
    return SourceMessage(
        id="msg-source-1",
        subject="Original Subject",
        date=datetime(2025, 12, 27, 15, 8),
        from_=[Participant("john@example.com", "John Doe")],
        to=[Participant("me@example.com", "Me"), Participant("jane@example.com", "Jane Roe")],
        cc=[Participant("team@example.com")],
        body="Hello there,\nSee you tomorrow.\n--\nJohn",
    )


@pytest.fixture
def stored_draft():
    """Draft already persisted on the server"""
    return Draft(
        id="draft-existing",
        subject="Plans",
        body="Draft body",
        to=[Participant("bob@example.com", "Bob")],
        bcc=[Participant("boss@example.com")],
    )


@pytest.fixture
def api():
    return FakeMailApi()


@pytest.fixture
def notifier():
    return StatusLine()


@pytest.fixture
def compose_config():
    """Compose settings with the autosave timer disabled"""
    return ComposeConfig(autosave_enabled=False)


@pytest.fixture
def make_session(api, notifier, compose_config):
    """Factory for sessions wired to the fake API and recording notifier"""

    def _make(mode=ComposeMode.NEW, source=None, draft=None, **kwargs):
        kwargs.setdefault("config", compose_config)
        return ComposeSession(api, mode, source, draft, notifier=notifier, **kwargs)

    return _make


@pytest.fixture
def settle():
    """Let spawned request tasks run up to their next blocking point"""
    return _settle

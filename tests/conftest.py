from __future__ import annotations

import os
from typing import Any, List, Optional, Tuple

import pytest

from src.core.config import AppConfig
from src.db.migrations import EnsureMigrated
from src.db.connection import Database
from src.db.models import TicketStatus
from src.services.persistence import TicketStore
from src.services.ticket_issuance import TicketDependencies
from src.services.ticket_state import TicketRecord


@pytest.fixture()
def temp_db_url(tmp_path_factory: pytest.TempPathFactory):
    # Create a unique temporary database path per test
    tmpdir = tmp_path_factory.mktemp("db")
    db_path = os.path.join(str(tmpdir), "tickets.db")
    yield f"sqlite:///{db_path}"
    # Cleanup file after test (SQLite creates -wal/-shm files as well)
    for suffix in ("", "-wal", "-shm"):
        p = db_path + suffix
        if os.path.exists(p):
            os.remove(p)


@pytest.fixture()
def db(temp_db_url: str):
    # Run migrations and return Database instance
    EnsureMigrated(temp_db_url)
    database = Database(temp_db_url)
    # Ensure ORM create_all is idempotent
    database.CreateTables()
    yield database
    database.Dispose()


@pytest.fixture()
def store(db: Database) -> TicketStore:
    """Ticket store bound to the temporary test database."""
    return TicketStore(db)


@pytest.fixture()
def config() -> AppConfig:
    return AppConfig(
        discord_token="aaaa.bbbb.cccc",
        mail_project_secret="secret",
        html_converter_api_key="user-1:key-1",
        database_url="sqlite://",
    )


class FakeMessenger:
    """Records DM channel creation and sent messages."""

    def __init__(self, dm_channel_id: int = 7000):
        self.dm_channel_id = dm_channel_id
        self.opened: List[int] = []
        self.sent: List[Tuple[str, str, Optional[str]]] = []

    async def open_dm_channel(self, user_id: int | str) -> int:
        self.opened.append(int(user_id))
        return self.dm_channel_id

    async def send_message(self, channel_id: int | str, content: str, image_url: Optional[str] = None) -> None:
        self.sent.append((str(channel_id), content, image_url))


class FakeRenderer:
    def __init__(self, url: str = "https://hcti.io/v1/image/abc123", error: Optional[Exception] = None):
        self.url = url
        self.error = error
        self.calls: List[Tuple[TicketRecord, Optional[str]]] = []

    async def render(self, ticket: TicketRecord, avatar_hash: Optional[str] = None) -> str:
        self.calls.append((ticket, avatar_hash))
        if self.error is not None:
            raise self.error
        return self.url


class FakeMailer:
    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.sent: List[TicketRecord] = []

    async def send_ticket(self, ticket: TicketRecord) -> Any:
        if self.error is not None:
            raise self.error
        self.sent.append(ticket)
        return {"status": "queued"}


class RecordingStore:
    """Wraps a TicketStore and records every write."""

    def __init__(self, inner: TicketStore):
        self.inner = inner
        self.writes: List[str] = []

    def find_by_user_id(self, discord_user_id: int | str) -> Optional[TicketRecord]:
        return self.inner.find_by_user_id(discord_user_id)

    def insert(self, discord_user_id: int | str, discord_dm_channel_id: int | str, username: str, name: Optional[str] = None) -> TicketRecord:
        self.writes.append("insert")
        return self.inner.insert(discord_user_id, discord_dm_channel_id, username, name)

    def update_by_user_id(self, discord_user_id: int | str, *, email_address: Optional[str] = None, ticket_link: Optional[str] = None, status: Optional[TicketStatus] = None) -> Optional[TicketRecord]:
        self.writes.append("update")
        return self.inner.update_by_user_id(discord_user_id, email_address=email_address, ticket_link=ticket_link, status=status)


@pytest.fixture()
def messenger() -> FakeMessenger:
    return FakeMessenger()


@pytest.fixture()
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture()
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture()
def recording_store(store: TicketStore) -> RecordingStore:
    return RecordingStore(store)


@pytest.fixture()
def deps(config: AppConfig, recording_store: RecordingStore, messenger: FakeMessenger,
         renderer: FakeRenderer, mailer: FakeMailer) -> TicketDependencies:
    return TicketDependencies(
        config=config,
        store=recording_store,
        messenger=messenger,
        renderer=renderer,
        mailer=mailer,
    )


class StubResponse:
    """Minimal stand-in for an aiohttp response context."""

    def __init__(self, status: int = 200, body: Any = None, text: str = ""):
        self.status = status
        self._body = body if body is not None else {}
        self._text = text

    async def json(self, content_type: Optional[str] = "application/json") -> Any:
        return self._body

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> "StubResponse":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None


class StubSession:
    """Minimal stand-in for aiohttp.ClientSession recording POST calls."""

    def __init__(self, response: StubResponse):
        self.response = response
        self.posts: List[Tuple[str, dict[str, Any]]] = []
        self.closed = False

    def post(self, url: str, **kwargs: Any) -> StubResponse:
        self.posts.append((url, kwargs))
        return self.response

    async def __aenter__(self) -> "StubSession":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.closed = True

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from conehub.core.config import Settings
from conehub.db.database import make_engine
from conehub.main import create_app
from conehub.repository.teams import SqlTeamStore
from conehub.services.teams import TeamService


class TickingClock:
    """Каждый вызов на секунду позже предыдущего, чтобы порядок created_at был детерминирован."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now = self.now + timedelta(seconds=1)
        return self.now


@pytest.fixture
async def store(tmp_path):
    engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'conehub.db'}")
    sql_store = SqlTeamStore(engine)
    await sql_store.create_all()
    yield sql_store
    await sql_store.aclose()


@pytest.fixture
def service(store) -> TeamService:
    return TeamService(store, clock=TickingClock())


@pytest.fixture
async def client(service):
    app = create_app(Settings(database_url="sqlite+aiosqlite://"), team_service=service)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

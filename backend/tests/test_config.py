import pytest

from conehub.core.config import Settings
from conehub.main import build_store
from conehub.repository.rest import RestTeamStore
from conehub.repository.teams import SqlTeamStore


def test_from_env(monkeypatch):
    monkeypatch.setenv("STORE_BACKEND", "REST")
    monkeypatch.setenv("STORE_URL", "https://conehub.example.co")
    monkeypatch.setenv("STORE_KEY", "anon-key")
    monkeypatch.setenv("REQUIRE_PASSWORD_ON_DELETE", "false")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5173, https://conehub.app")

    settings = Settings.from_env()

    assert settings.store_backend == "rest"
    assert settings.require_password_on_delete is False
    assert settings.cors_origins == ["http://localhost:5173", "https://conehub.app"]


def test_sql_backend_needs_database_url():
    with pytest.raises(RuntimeError, match="DATABASE_URL"):
        Settings(store_backend="sql", database_url=None).validate()


def test_rest_backend_needs_url_and_key():
    with pytest.raises(RuntimeError, match="STORE_KEY"):
        Settings(store_backend="rest", store_url="https://x.example.co").validate()


def test_unknown_backend():
    with pytest.raises(RuntimeError):
        Settings(store_backend="localstorage").validate()


@pytest.mark.asyncio
async def test_build_store_picks_backend(tmp_path):
    sql = build_store(Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'x.db'}"))
    rest = build_store(
        Settings(store_backend="rest", store_url="https://x.example.co", store_key="k")
    )
    try:
        assert isinstance(sql, SqlTeamStore)
        assert isinstance(rest, RestTeamStore)
    finally:
        await sql.aclose()
        await rest.aclose()

import json
from datetime import datetime, timezone

import httpx
import pytest
import respx

from conehub.core.errors import StoreConflictError, StoreError
from conehub.models.domain import TeamRecord
from conehub.repository.rest import RestTeamStore

STORE_URL = "https://conehub.example.co"
TEAMS_URL = f"{STORE_URL}/rest/v1/teams"
MEMBERS_URL = f"{STORE_URL}/rest/v1/Members"

ROW = {
    "id": "team-1",
    "name": "Alpha Shift",
    "lead_name": "John Smith",
    "password_hash": "a" * 64,
    "created_at": "2026-01-01T00:00:00+00:00",
}


def _record() -> TeamRecord:
    return TeamRecord(
        id="team-1",
        name="Alpha Shift",
        lead_name="John Smith",
        password_hash="a" * 64,
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
async def rest_store():
    store = RestTeamStore(STORE_URL, "anon-key", timeout=1.0)
    yield store
    await store.aclose()


@respx.mock
@pytest.mark.asyncio
async def test_insert_team_sends_key_and_row(rest_store):
    route = respx.post(TEAMS_URL).mock(return_value=httpx.Response(201, json=[ROW]))

    saved = await rest_store.insert_team(_record())

    assert saved.id == "team-1"
    assert saved.created_at == datetime(2026, 1, 1, tzinfo=timezone.utc)
    request = route.calls.last.request
    assert request.headers["apikey"] == "anon-key"
    assert request.headers["Authorization"] == "Bearer anon-key"
    assert request.headers["Prefer"] == "return=representation"
    assert json.loads(request.content)["password_hash"] == "a" * 64


@respx.mock
@pytest.mark.asyncio
async def test_insert_conflict(rest_store):
    respx.post(TEAMS_URL).mock(
        return_value=httpx.Response(409, json={"message": "duplicate key"})
    )

    with pytest.raises(StoreConflictError):
        await rest_store.insert_team(_record())


@respx.mock
@pytest.mark.asyncio
async def test_get_team_found_and_missing(rest_store):
    route = respx.get(TEAMS_URL).mock(
        side_effect=[httpx.Response(200, json=[ROW]), httpx.Response(200, json=[])]
    )

    found = await rest_store.get_team("team-1")
    assert found.lead_name == "John Smith"
    assert route.calls[0].request.url.params["id"] == "eq.team-1"

    assert await rest_store.get_team("team-2") is None


@respx.mock
@pytest.mark.asyncio
async def test_list_recent_query(rest_store):
    route = respx.get(TEAMS_URL).mock(return_value=httpx.Response(200, json=[ROW]))

    teams = await rest_store.list_recent(5)

    assert [t.id for t in teams] == ["team-1"]
    params = route.calls.last.request.url.params
    assert params["order"] == "created_at.desc,id.desc"
    assert params["limit"] == "5"


@respx.mock
@pytest.mark.asyncio
async def test_delete_team_removes_team_then_members(rest_store):
    members = respx.delete(MEMBERS_URL).mock(return_value=httpx.Response(204))
    teams = respx.delete(TEAMS_URL).mock(
        side_effect=[httpx.Response(200, json=[ROW]), httpx.Response(200, json=[])]
    )

    assert await rest_store.delete_team("team-1") is True
    assert [c.request.url.path for c in respx.calls] == [
        "/rest/v1/teams",
        "/rest/v1/Members",
    ]
    assert members.calls[0].request.url.params["team_id"] == "eq.team-1"

    # команды уже нет: участников второй раз не трогаем
    assert await rest_store.delete_team("team-1") is False
    assert teams.call_count == 2
    assert members.call_count == 1


@pytest.mark.asyncio
async def test_failed_team_delete_keeps_members(rest_store):
    with respx.mock(assert_all_called=False) as respx_mock:
        members = respx_mock.delete(MEMBERS_URL).mock(return_value=httpx.Response(204))
        respx_mock.delete(TEAMS_URL).mock(
            return_value=httpx.Response(500, text="db is down")
        )

        with pytest.raises(StoreError, match="db is down"):
            await rest_store.delete_team("team-1")

    assert not members.called


@respx.mock
@pytest.mark.asyncio
async def test_count_members(rest_store):
    respx.get(MEMBERS_URL).mock(
        return_value=httpx.Response(
            200, json=[{"team_id": "team-1"}, {"team_id": "team-1"}]
        )
    )

    counts = await rest_store.count_members(["team-1", "team-2"])
    assert counts == {"team-1": 2, "team-2": 0}


@respx.mock
@pytest.mark.asyncio
async def test_server_error_passes_message_through(rest_store):
    respx.get(TEAMS_URL).mock(return_value=httpx.Response(500, text="db is down"))

    with pytest.raises(StoreError, match="db is down"):
        await rest_store.get_team("team-1")


@respx.mock
@pytest.mark.asyncio
async def test_timeout_is_store_error(rest_store):
    respx.get(TEAMS_URL).mock(side_effect=httpx.ReadTimeout("slow"))

    with pytest.raises(StoreError, match="timed out"):
        await rest_store.get_team("team-1")


@respx.mock
@pytest.mark.asyncio
async def test_unreachable_is_store_error(rest_store):
    respx.get(TEAMS_URL).mock(side_effect=httpx.ConnectError("refused"))

    with pytest.raises(StoreError, match="unreachable"):
        await rest_store.get_team("team-1")

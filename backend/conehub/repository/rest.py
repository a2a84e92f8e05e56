"""
TeamStore over a hosted Postgres REST API (PostgREST dialect: /rest/v1/<table>).

Tables: teams(id, name, lead_name, password_hash, created_at) and
Members(id, team_id, name, last_duty_date, total_duties).
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import date, datetime

import httpx

from conehub.core.errors import StoreConflictError, StoreError
from conehub.models.domain import MemberRecord, TeamRecord
from conehub.repository.base import TeamStore

logger = logging.getLogger(__name__)

TEAMS_TABLE = "teams"
MEMBERS_TABLE = "Members"


def _team_from_row(row: dict) -> TeamRecord:
    return TeamRecord(
        id=row["id"],
        name=row["name"],
        lead_name=row["lead_name"],
        password_hash=row["password_hash"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )


def _member_from_row(row: dict) -> MemberRecord:
    last_duty = row.get("last_duty_date")
    return MemberRecord(
        id=row["id"],
        team_id=row["team_id"],
        name=row["name"],
        last_duty_date=date.fromisoformat(last_duty) if last_duty else None,
        total_duties=row.get("total_duties") or 0,
    )


class RestTeamStore(TeamStore):
    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.AsyncClient(
            base_url=f"{self.base_url}/rest/v1",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
        )

    async def _request(
        self,
        method: str,
        table: str,
        *,
        params: dict | None = None,
        json: dict | None = None,
        prefer: str | None = None,
    ) -> list[dict]:
        headers = {"Prefer": prefer} if prefer else None
        try:
            r = await self.client.request(
                method, f"/{table}", params=params, json=json, headers=headers
            )
            r.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning("%s /%s timed out", method, table)
            raise StoreError("Store request timed out") from e
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 409:
                raise StoreConflictError(e.response.text) from e
            logger.error(
                "%s /%s failed: %s %s",
                method,
                table,
                e.response.status_code,
                e.response.text,
            )
            raise StoreError(e.response.text or str(e)) from e
        except httpx.RequestError as e:
            logger.exception("%s /%s unreachable", method, table)
            raise StoreError(f"Store unreachable: {e}") from e

        if not r.content:
            return []
        return r.json()

    async def insert_team(self, record: TeamRecord) -> TeamRecord:
        rows = await self._request(
            "POST",
            TEAMS_TABLE,
            json={
                "id": record.id,
                "name": record.name,
                "lead_name": record.lead_name,
                "password_hash": record.password_hash,
                "created_at": record.created_at.isoformat(),
            },
            prefer="return=representation",
        )
        return _team_from_row(rows[0]) if rows else record

    async def get_team(self, team_id: str) -> TeamRecord | None:
        rows = await self._request(
            "GET", TEAMS_TABLE, params={"select": "*", "id": f"eq.{team_id}"}
        )
        return _team_from_row(rows[0]) if rows else None

    async def list_recent(self, limit: int) -> list[TeamRecord]:
        rows = await self._request(
            "GET",
            TEAMS_TABLE,
            params={
                "select": "*",
                "order": "created_at.desc,id.desc",
                "limit": str(limit),
            },
        )
        return [_team_from_row(row) for row in rows]

    async def delete_team(self, team_id: str) -> bool:
        # сначала команда: если она не удалилась, участников не трогаем
        rows = await self._request(
            "DELETE",
            TEAMS_TABLE,
            params={"id": f"eq.{team_id}"},
            prefer="return=representation",
        )
        if not rows:
            return False
        # обычно уже сделал ON DELETE CASCADE, это на случай схемы без каскада
        await self._request(
            "DELETE", MEMBERS_TABLE, params={"team_id": f"eq.{team_id}"}
        )
        return True

    async def count_members(self, team_ids: list[str]) -> dict[str, int]:
        if not team_ids:
            return {}
        rows = await self._request(
            "GET",
            MEMBERS_TABLE,
            params={
                "select": "team_id",
                "team_id": f"in.({','.join(team_ids)})",
            },
        )
        counted = Counter(row["team_id"] for row in rows)
        return {team_id: counted.get(team_id, 0) for team_id in team_ids}

    async def list_members(self, team_id: str) -> list[MemberRecord]:
        rows = await self._request(
            "GET",
            MEMBERS_TABLE,
            params={"select": "*", "team_id": f"eq.{team_id}", "order": "name.asc"},
        )
        return [_member_from_row(row) for row in rows]

    async def insert_member(self, record: MemberRecord) -> MemberRecord:
        rows = await self._request(
            "POST",
            MEMBERS_TABLE,
            json={
                "id": record.id,
                "team_id": record.team_id,
                "name": record.name,
                "last_duty_date": (
                    record.last_duty_date.isoformat() if record.last_duty_date else None
                ),
                "total_duties": record.total_duties,
            },
            prefer="return=representation",
        )
        return _member_from_row(rows[0]) if rows else record

    async def aclose(self) -> None:
        await self.client.aclose()


def make_rest_team_store(base_url: str, api_key: str, timeout: float) -> RestTeamStore:
    return RestTeamStore(base_url, api_key, timeout=timeout)

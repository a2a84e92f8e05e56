from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import TypeVar

from conehub.core.errors import (
    InvalidCredentialError,
    NotFoundError,
    StoreConflictError,
    StoreError,
    ValidationError,
    ValidationReason,
)
from conehub.core.security import hash_password, new_team_id, verify_password
from conehub.models.domain import MemberRecord, Team, TeamRecord
from conehub.repository.base import TeamStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

MIN_PASSWORD_LENGTH = 4
MAX_ID_ATTEMPTS = 5


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TeamService:
    def __init__(
        self,
        store: TeamStore,
        *,
        store_timeout: float = 10.0,
        max_list_limit: int = 100,
        require_password_on_delete: bool = True,
        id_factory: Callable[[], str] = new_team_id,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.store_timeout = store_timeout
        self.max_list_limit = max_list_limit
        self.require_password_on_delete = require_password_on_delete
        self.id_factory = id_factory
        self.clock = clock

    async def _call(self, op: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(op, timeout=self.store_timeout)
        except asyncio.TimeoutError as e:
            raise StoreError("Store operation timed out") from e

    async def register(
        self, name: str, lead_name: str, password: str, confirm_password: str
    ) -> Team:
        name = (name or "").strip()
        lead_name = (lead_name or "").strip()
        if not name or not lead_name:
            raise ValidationError(ValidationReason.MISSING_FIELD)
        if password != confirm_password:
            raise ValidationError(ValidationReason.PASSWORD_MISMATCH)
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(ValidationReason.PASSWORD_TOO_SHORT)

        password_hash = hash_password(password)

        last_err: StoreConflictError | None = None
        for _ in range(MAX_ID_ATTEMPTS):
            record = TeamRecord(
                id=self.id_factory(),
                name=name,
                lead_name=lead_name,
                password_hash=password_hash,
                created_at=self.clock(),
            )
            try:
                saved = await self._call(self.store.insert_team(record))
            except StoreConflictError as e:
                # коллизия id, пробуем ещё раз с новым
                logger.warning("Team id collision on %s, retrying", record.id)
                last_err = e
                continue
            logger.info("Registered team %s", saved.id)
            return Team.from_record(saved)

        raise StoreConflictError("Failed to generate unique team id") from last_err

    async def authenticate(self, team_id: str, password: str) -> Team:
        team_id = (team_id or "").strip()
        if not team_id or not password:
            raise ValidationError(ValidationReason.MISSING_FIELD)

        record = await self._verify(team_id, password)
        counts = await self._call(self.store.count_members([record.id]))
        return Team.from_record(record, counts.get(record.id, 0))

    async def _verify(self, team_id: str, password: str) -> TeamRecord:
        record = await self._call(self.store.get_team(team_id))
        if record is None:
            logger.warning("Authentication failed: unknown team %s", team_id)
            raise NotFoundError(team_id)
        if not verify_password(password, record.password_hash):
            logger.warning("Authentication failed: bad password for %s", team_id)
            raise InvalidCredentialError(team_id)
        return record

    async def list_recent(self, limit: int = 20) -> list[Team]:
        limit = max(1, min(limit, self.max_list_limit))
        records = await self._call(self.store.list_recent(limit))
        counts = await self._call(self.store.count_members([r.id for r in records]))
        return [Team.from_record(r, counts.get(r.id, 0)) for r in records]

    async def get_team(self, team_id: str) -> Team:
        record = await self._call(self.store.get_team(team_id))
        if record is None:
            raise NotFoundError(team_id)
        counts = await self._call(self.store.count_members([record.id]))
        return Team.from_record(record, counts.get(record.id, 0))

    async def list_members(self, team_id: str) -> list[MemberRecord]:
        if await self._call(self.store.get_team(team_id)) is None:
            raise NotFoundError(team_id)
        return await self._call(self.store.list_members(team_id))

    async def delete_team(self, team_id: str, password: str | None = None) -> None:
        team_id = (team_id or "").strip()
        if not team_id:
            raise ValidationError(ValidationReason.MISSING_FIELD)
        if self.require_password_on_delete:
            if not password:
                raise ValidationError(ValidationReason.MISSING_FIELD)
            await self._verify(team_id, password)

        removed = await self._call(self.store.delete_team(team_id))
        if not removed:
            # параллельное удаление уже успело
            raise NotFoundError(team_id)
        logger.info("Deleted team %s", team_id)


def make_team_service(store: TeamStore, **kwargs) -> TeamService:
    return TeamService(store, **kwargs)

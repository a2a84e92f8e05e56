from __future__ import annotations

import logging
from datetime import timezone

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from conehub.core.errors import StoreConflictError, StoreError
from conehub.db.base import Base
from conehub.db.database import make_sessionmaker
from conehub.models.domain import MemberRecord, TeamRecord
from conehub.models.member import Member
from conehub.models.team import Team
from conehub.repository.base import TeamStore

logger = logging.getLogger(__name__)

# драйвер (asyncpg/aiosqlite) отдаёт сетевые ошибки как OSError, мимо SQLAlchemyError
STORE_ERRORS = (SQLAlchemyError, OSError)


def _store_error(e: Exception) -> StoreError:
    return StoreError(str(e) or type(e).__name__)


def _to_record(team: Team) -> TeamRecord:
    created_at = team.created_at
    if created_at.tzinfo is None:
        # sqlite не хранит таймзону, пишем всегда UTC
        created_at = created_at.replace(tzinfo=timezone.utc)
    return TeamRecord(
        id=team.id,
        name=team.name,
        lead_name=team.lead_name,
        password_hash=team.password_hash,
        created_at=created_at,
    )


def _to_member_record(member: Member) -> MemberRecord:
    return MemberRecord(
        id=member.id,
        team_id=member.team_id,
        name=member.name,
        last_duty_date=member.last_duty_date,
        total_duties=member.total_duties,
    )


class SqlTeamStore(TeamStore):
    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.sessionmaker: async_sessionmaker[AsyncSession] = make_sessionmaker(engine)

    async def create_all(self) -> None:
        """Create tables directly (local runs and tests; prod uses alembic)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def insert_team(self, record: TeamRecord) -> TeamRecord:
        team = Team(
            id=record.id,
            name=record.name,
            lead_name=record.lead_name,
            password_hash=record.password_hash,
            created_at=record.created_at,
        )
        try:
            async with self.sessionmaker() as session:
                session.add(team)
                await session.commit()
        except IntegrityError as e:
            # не делаем SELECT на уникальность, полагаемся на PK в БД
            raise StoreConflictError(f"Team id already exists: {record.id}") from e
        except STORE_ERRORS as e:
            logger.exception("insert_team failed for %s", record.id)
            raise _store_error(e) from e
        return record

    async def get_team(self, team_id: str) -> TeamRecord | None:
        try:
            async with self.sessionmaker() as session:
                res = await session.execute(select(Team).where(Team.id == team_id))
                team = res.scalar_one_or_none()
        except STORE_ERRORS as e:
            logger.exception("get_team failed for %s", team_id)
            raise _store_error(e) from e
        return _to_record(team) if team else None

    async def list_recent(self, limit: int) -> list[TeamRecord]:
        try:
            async with self.sessionmaker() as session:
                res = await session.execute(
                    select(Team)
                    .order_by(Team.created_at.desc(), Team.id.desc())
                    .limit(limit)
                )
                teams = list(res.scalars().all())
        except STORE_ERRORS as e:
            logger.exception("list_recent failed")
            raise _store_error(e) from e
        return [_to_record(t) for t in teams]

    async def delete_team(self, team_id: str) -> bool:
        try:
            async with self.sessionmaker() as session:
                async with session.begin():
                    # участников удаляем явно в той же транзакции, не надеясь на каскад
                    await session.execute(delete(Member).where(Member.team_id == team_id))
                    res = await session.execute(delete(Team).where(Team.id == team_id))
        except STORE_ERRORS as e:
            logger.exception("delete_team failed for %s", team_id)
            raise _store_error(e) from e
        return res.rowcount > 0

    async def count_members(self, team_ids: list[str]) -> dict[str, int]:
        if not team_ids:
            return {}
        try:
            async with self.sessionmaker() as session:
                res = await session.execute(
                    select(Member.team_id, func.count(Member.id))
                    .where(Member.team_id.in_(team_ids))
                    .group_by(Member.team_id)
                )
                rows = res.all()
        except STORE_ERRORS as e:
            logger.exception("count_members failed")
            raise _store_error(e) from e
        counts = {team_id: 0 for team_id in team_ids}
        counts.update({team_id: int(n) for team_id, n in rows})
        return counts

    async def list_members(self, team_id: str) -> list[MemberRecord]:
        try:
            async with self.sessionmaker() as session:
                res = await session.execute(
                    select(Member)
                    .where(Member.team_id == team_id)
                    .order_by(Member.name.asc())
                )
                members = list(res.scalars().all())
        except STORE_ERRORS as e:
            logger.exception("list_members failed for %s", team_id)
            raise _store_error(e) from e
        return [_to_member_record(m) for m in members]

    async def insert_member(self, record: MemberRecord) -> MemberRecord:
        member = Member(
            id=record.id,
            team_id=record.team_id,
            name=record.name,
            last_duty_date=record.last_duty_date,
            total_duties=record.total_duties,
        )
        try:
            async with self.sessionmaker() as session:
                session.add(member)
                await session.commit()
        except IntegrityError as e:
            raise StoreConflictError(f"Member insert rejected: {record.id}") from e
        except STORE_ERRORS as e:
            logger.exception("insert_member failed for %s", record.id)
            raise _store_error(e) from e
        return record

    async def aclose(self) -> None:
        await self.engine.dispose()


def make_sql_team_store(engine: AsyncEngine) -> SqlTeamStore:
    return SqlTeamStore(engine)

from __future__ import annotations

import abc

from conehub.models.domain import MemberRecord, TeamRecord


class TeamStore(abc.ABC):
    """Per-record store for teams and their members.

    Implementations raise StoreError (StoreConflictError for a duplicate
    id) and never leak driver exceptions.
    """

    @abc.abstractmethod
    async def insert_team(self, record: TeamRecord) -> TeamRecord: ...

    @abc.abstractmethod
    async def get_team(self, team_id: str) -> TeamRecord | None: ...

    @abc.abstractmethod
    async def list_recent(self, limit: int) -> list[TeamRecord]:
        """Newest first by created_at, ties by id desc."""

    @abc.abstractmethod
    async def delete_team(self, team_id: str) -> bool:
        """Remove the team and its members. False if nothing was removed."""

    @abc.abstractmethod
    async def count_members(self, team_ids: list[str]) -> dict[str, int]: ...

    @abc.abstractmethod
    async def list_members(self, team_id: str) -> list[MemberRecord]: ...

    @abc.abstractmethod
    async def insert_member(self, record: MemberRecord) -> MemberRecord: ...

    async def aclose(self) -> None:
        return None

"""
Plain records passed across the store boundary.

TeamRecord is store-internal (carries the credential digest); Team is what
the service hands back to callers and has no digest field at all.
"""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class TeamRecord:
    id: str
    name: str
    lead_name: str
    password_hash: str
    created_at: datetime


@dataclass(frozen=True)
class Team:
    id: str
    name: str
    lead_name: str
    created_at: datetime
    member_count: int = 0

    @classmethod
    def from_record(cls, record: TeamRecord, member_count: int = 0) -> "Team":
        return cls(
            id=record.id,
            name=record.name,
            lead_name=record.lead_name,
            created_at=record.created_at,
            member_count=member_count,
        )


@dataclass(frozen=True)
class MemberRecord:
    id: str
    team_id: str
    name: str
    last_duty_date: date | None = None
    total_duties: int = 0

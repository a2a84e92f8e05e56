import logging
from datetime import date, datetime, timezone

from conehub.core.security import hash_password
from conehub.models.domain import MemberRecord, TeamRecord
from conehub.repository.base import TeamStore

logger = logging.getLogger(__name__)

# демо-команды из первой версии, пароли только в виде хэша
DEMO_TEAMS: list[dict] = [
    {
        "id": "team-alpha",
        "name": "Alpha Shift",
        "lead_name": "John Smith",
        "password": "alpha123",
        "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "members": [
            ("m1", "Alex Johnson", date(2024, 1, 15), 5),
            ("m2", "Maria Garcia", date(2024, 1, 10), 3),
            ("m3", "David Lee", date(2024, 1, 5), 4),
        ],
    },
    {
        "id": "team-bravo",
        "name": "Bravo Team",
        "lead_name": "Sarah Wilson",
        "password": "bravo123",
        "created_at": datetime(2024, 1, 2, tzinfo=timezone.utc),
        "members": [
            ("m4", "Michael Brown", date(2024, 1, 14), 6),
            ("m5", "Emma Davis", date(2024, 1, 8), 2),
        ],
    },
]


async def seed_demo_teams(store: TeamStore) -> int:
    """Insert demo teams that are not there yet. Returns how many were added."""
    added = 0
    for team in DEMO_TEAMS:
        if await store.get_team(team["id"]) is not None:
            continue
        await store.insert_team(
            TeamRecord(
                id=team["id"],
                name=team["name"],
                lead_name=team["lead_name"],
                password_hash=hash_password(team["password"]),
                created_at=team["created_at"],
            )
        )
        for member_id, name, last_duty, total in team["members"]:
            await store.insert_member(
                MemberRecord(
                    id=member_id,
                    team_id=team["id"],
                    name=name,
                    last_duty_date=last_duty,
                    total_duties=total,
                )
            )
        added += 1
    if added:
        logger.info("Seeded %d demo teams", added)
    return added

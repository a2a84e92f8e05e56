from conehub.models.member import Member
from conehub.models.team import Team

__all__ = ["Member", "Team"]

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from conehub.db.base import Base


class Member(Base):
    __tablename__ = "Members"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)

    team_id: Mapped[str] = mapped_column(
        ForeignKey("teams.id", ondelete="CASCADE"),
        index=True,
    )

    name: Mapped[str] = mapped_column(String(120))
    last_duty_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    total_duties: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    team: Mapped["Team"] = relationship("Team", back_populates="members")

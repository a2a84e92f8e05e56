from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from conehub.db.base import Base


class Team(Base):
    __tablename__ = "teams"

    # team-<unix ms>-<suffix>, генерируется сервисом, не БД
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    # название команды можно не уникальным
    name: Mapped[str] = mapped_column(String(120))
    lead_name: Mapped[str] = mapped_column(String(120))
    # sha256 hex, никогда не пароль
    password_hash: Mapped[str] = mapped_column(String(64))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    members: Mapped[list["Member"]] = relationship(
        "Member",
        back_populates="team",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

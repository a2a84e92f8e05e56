from datetime import date, datetime

from pydantic import BaseModel, Field


class TeamRegisterIn(BaseModel):
    # пустые значения и длину пароля проверяет сервис, чтобы отдать понятный код
    name: str = Field(default="", max_length=120)
    lead_name: str = Field(default="", max_length=120)
    password: str = Field(default="", max_length=256)
    confirm_password: str = Field(default="", max_length=256)


class TeamAuthIn(BaseModel):
    team_id: str = Field(default="", max_length=64)
    password: str = Field(default="", max_length=256)


class TeamDeleteIn(BaseModel):
    password: str | None = Field(default=None, max_length=256)


class TeamOut(BaseModel):
    id: str
    name: str
    lead_name: str
    created_at: datetime
    member_count: int = 0

    class Config:
        from_attributes = True


class MemberOut(BaseModel):
    id: str
    team_id: str
    name: str
    last_duty_date: date | None
    total_duties: int

    class Config:
        from_attributes = True

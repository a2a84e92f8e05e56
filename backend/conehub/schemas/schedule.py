from datetime import date, time

from pydantic import BaseModel


class ShiftSlotOut(BaseModel):
    name: str
    starts_at: time
    ends_at: time
    assignee: str | None = None

    class Config:
        from_attributes = True


class DayScheduleOut(BaseModel):
    day: date
    shifts: list[ShiftSlotOut]

    class Config:
        from_attributes = True


class WeekScheduleOut(BaseModel):
    """
    Сетка дежурств на неделю: 7 дней x 3 смены (00-08, 08-16, 16-00).

    assignee у всех смен пока null, назначений нет.
    """

    team_id: str
    week_start: date
    days: list[DayScheduleOut]

    class Config:
        from_attributes = True

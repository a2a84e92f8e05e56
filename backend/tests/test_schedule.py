from datetime import date, time

from conehub.services.schedule import SHIFTS, build_week, current_week_start


def test_current_week_start_is_monday():
    # 2026-10-18: воскресенье
    assert current_week_start(date(2026, 10, 18)) == date(2026, 10, 12)
    assert current_week_start(date(2026, 10, 12)) == date(2026, 10, 12)


def test_build_week_shape():
    week = build_week("team-1", date(2026, 10, 12))

    assert week.team_id == "team-1"
    assert [d.day for d in week.days][0] == date(2026, 10, 12)
    assert [d.day for d in week.days][-1] == date(2026, 10, 18)
    assert len(week.days) == 7
    for day in week.days:
        assert len(day.shifts) == len(SHIFTS) == 3
        assert day.shifts[0].starts_at == time(0, 0)
        assert day.shifts[2].ends_at == time(0, 0)
        assert all(s.assignee is None for s in day.shifts)


def test_build_week_defaults_to_current_monday():
    week = build_week("team-1")
    assert week.week_start.weekday() == 0

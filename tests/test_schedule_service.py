from datetime import date

import pytest

from app.core.exceptions import InvalidInput
from app.models import WeeklyRule, DateException
from app.services.availability.availability_resolver import AvailabilityResolver
from app.services.schedule.schedule_service import ScheduleService
from helpers import add_rule


def test_empty_schedule_lists_every_day_disabled(db):
    schedule = ScheduleService.get_schedule(db)

    assert list(schedule["weekly_schedule"].keys()) == [
        "sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday",
    ]
    assert all(not day["enabled"] for day in schedule["weekly_schedule"].values())
    assert schedule["date_exceptions"] == []


def test_replace_weekly_schedule(db):
    add_rule(db, 0, "10:00", "11:00")

    stored = ScheduleService.replace_weekly_schedule(db, {
        "monday": {"enabled": True, "slots": [
            {"start_time": "14:00", "end_time": "15:00"},
            {"start_time": "9:00", "end_time": "10:00"},
        ]},
        "tuesday": {"enabled": False, "slots": [{"start_time": "09:00", "end_time": "10:00"}]},
        "friday": {"enabled": True, "slots": []},
    })

    assert stored == 2
    schedule = ScheduleService.get_schedule(db)["weekly_schedule"]
    assert schedule["sunday"]["enabled"] is False
    assert schedule["tuesday"]["enabled"] is False
    assert schedule["friday"]["enabled"] is False
    assert schedule["monday"] == {
        "enabled": True,
        "slots": [
            {"start_time": "09:00", "end_time": "10:00"},
            {"start_time": "14:00", "end_time": "15:00"},
        ],
    }
    slots = AvailabilityResolver.for_session(db).resolve_day("2024-06-03")
    assert [s.time for s in slots] == ["09:00", "14:00"]


def test_invalid_weekly_slot_leaves_schedule_untouched(db):
    add_rule(db, 1, "09:00", "10:00")

    with pytest.raises(InvalidInput):
        ScheduleService.replace_weekly_schedule(db, {
            "monday": {"enabled": True, "slots": [{"start_time": "11:00", "end_time": "10:00"}]},
        })

    assert db.query(WeeklyRule).count() == 1


def test_unknown_day_is_rejected(db):
    with pytest.raises(InvalidInput):
        ScheduleService.replace_weekly_schedule(db, {"funday": {"enabled": True, "slots": []}})


def test_replace_date_exceptions(db):
    add_rule(db, 1, "09:00", "10:00")

    stored = ScheduleService.replace_date_exceptions(db, [
        {"date": "2024-06-03", "type": "closed", "slots": [{"start_time": "09:00", "end_time": "10:00"}]},
        {"date": "2024-06-05", "type": "custom", "reason": "Open studio",
         "slots": [{"start_time": "12:00", "end_time": "13:00"}]},
    ])

    assert stored == 2
    exceptions = ScheduleService.get_schedule(db)["date_exceptions"]
    assert exceptions == [
        {"date": "2024-06-03", "is_available": False, "slots": [], "reason": None},
        {"date": "2024-06-05", "is_available": True,
         "slots": [{"start_time": "12:00", "end_time": "13:00"}], "reason": "Open studio"},
    ]
    resolver = AvailabilityResolver.for_session(db)
    assert resolver.resolve_day("2024-06-03") == []
    assert [s.time for s in resolver.resolve_day("2024-06-05")] == ["12:00"]


def test_replacing_exceptions_drops_old_ones(db):
    db.add(DateException(date=date(2024, 6, 3), is_available=False, slots=[]))
    db.commit()

    ScheduleService.replace_date_exceptions(db, [])

    assert db.query(DateException).count() == 0


@pytest.mark.parametrize("entries", [
    [{"date": "2024-06-03", "type": "maybe"}],
    [{"date": "not-a-date", "type": "closed"}],
    [{"date": "2024-06-03", "type": "closed"}, {"date": "2024-06-03", "type": "closed"}],
    [{"date": "2024-06-03", "type": "custom", "slots": [{"start_time": "25:00", "end_time": "26:00"}]}],
])
def test_invalid_exceptions_are_rejected(db, entries):
    with pytest.raises(InvalidInput):
        ScheduleService.replace_date_exceptions(db, entries)

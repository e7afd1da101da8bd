from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import DataUnavailable
from app.models import Booking, DateException
from app.services.availability.availability_repository import AvailabilityRepository
from app.services.availability.availability_resolver import AvailabilityResolver
from helpers import add_rule

MONDAY = date(2024, 6, 3)


def _booking(db, on_date, time, status):
    entry = Booking(
        date=on_date,
        time=time,
        end_time="10:00",
        customer_name="Grace",
        customer_email="grace@example.com",
        status=status,
    )
    db.add(entry)
    db.commit()
    return entry


def test_weekly_rules_are_filtered_by_day(db):
    add_rule(db, 1, "09:00", "10:00")
    add_rule(db, 1, "14:00", "15:00")
    add_rule(db, 2, "09:00", "10:00")

    rules = AvailabilityRepository(db).get_weekly_rules(1)

    assert sorted(r.start_time for r in rules) == ["09:00", "14:00"]


def test_exception_lookup_by_date(db):
    db.add(DateException(date=MONDAY, is_available=False, slots=[], reason="Bank holiday"))
    db.commit()

    repo = AvailabilityRepository(db)

    assert repo.get_exception(MONDAY).reason == "Bank holiday"
    assert repo.get_exception(date(2024, 6, 4)) is None


def test_cancelled_bookings_do_not_block(db):
    add_rule(db, 1, "09:00", "10:00")
    _booking(db, MONDAY, "09:00", "cancelled")

    slots = AvailabilityResolver.for_session(db).resolve_day(MONDAY)

    assert slots[0].available is True
    assert AvailabilityRepository(db).get_active_bookings(MONDAY) == []


def test_active_bookings_can_exclude_one_booking(db):
    kept = _booking(db, MONDAY, "09:00", "confirmed")
    moved = _booking(db, MONDAY, "11:00", "rescheduled")

    bookings = AvailabilityRepository(db).get_active_bookings(MONDAY, exclude_booking_id=moved.id)

    assert [b.id for b in bookings] == [kept.id]


def test_database_errors_become_data_unavailable(db, monkeypatch):
    def broken_query(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    monkeypatch.setattr(db, "query", broken_query)
    repo = AvailabilityRepository(db)

    with pytest.raises(DataUnavailable):
        repo.get_exception(MONDAY)
    with pytest.raises(DataUnavailable):
        repo.get_weekly_rules(1)
    with pytest.raises(DataUnavailable):
        repo.get_active_bookings(MONDAY)
    assert AvailabilityResolver(repo).is_slot_free(MONDAY, "09:00") is False

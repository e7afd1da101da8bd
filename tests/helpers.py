"""Shared fakes and utilities for the test suite."""
from datetime import date, timedelta
from types import SimpleNamespace

from jose import jwt

from app.config.settings import get_settings
from app.models import WeeklyRule, DAY_NAMES, ACTIVE_BOOKING_STATUSES


def make_token(user_id, email, audience=None, secret=None):
    settings = get_settings()
    claims = {
        "sub": str(user_id),
        "email": email,
        "aud": audience or settings.AUTH_JWT_AUDIENCE,
    }
    return jwt.encode(claims, secret or settings.AUTH_JWT_SECRET, algorithm=settings.AUTH_JWT_ALGORITHM)


def auth_headers(user):
    return {"Authorization": f"Bearer {make_token(user.id, user.email)}"}


def next_weekday(weekday_sunday_indexed, after=None):
    """First date strictly after `after` (default today) on the given Sunday-indexed weekday"""
    current = (after or date.today()) + timedelta(days=1)
    while (current.weekday() + 1) % 7 != weekday_sunday_indexed:
        current += timedelta(days=1)
    return current


def add_rule(db, day_of_week, start_time, end_time):
    rule = WeeklyRule(
        day_of_week=day_of_week,
        day_name=DAY_NAMES[day_of_week],
        start_time=start_time,
        end_time=end_time,
    )
    db.add(rule)
    db.commit()
    return rule


def rule(day_of_week, start_time, end_time):
    return SimpleNamespace(day_of_week=day_of_week, start_time=start_time, end_time=end_time)


def exception(is_available, slots=()):
    return SimpleNamespace(
        is_available=is_available,
        slots=[{"start_time": s, "end_time": e} for s, e in slots],
    )


def booking(on_date, time, status="confirmed", booking_id=None):
    return SimpleNamespace(id=booking_id or object(), date=on_date, time=time, status=status)


class StubRepository:
    """In-memory stand-in for AvailabilityRepository"""

    def __init__(self, rules=(), exceptions=None, bookings=()):
        self.rules = list(rules)
        self.exceptions = dict(exceptions or {})
        self.bookings = list(bookings)
        self.calls = []

    def get_exception(self, target_date):
        self.calls.append(("exception", target_date))
        return self.exceptions.get(target_date)

    def get_weekly_rules(self, day_of_week):
        self.calls.append(("rules", day_of_week))
        return [r for r in self.rules if r.day_of_week == day_of_week]

    def get_active_bookings(self, target_date, exclude_booking_id=None):
        self.calls.append(("bookings", target_date))
        return [
            b for b in self.bookings
            if b.date == target_date
            and b.status in ACTIVE_BOOKING_STATUSES
            and b.id != exclude_booking_id
        ]


class FailingRepository:
    """Repository whose every query fails like an unreachable database"""

    def __init__(self, error):
        self.error = error

    def get_exception(self, target_date):
        raise self.error

    def get_weekly_rules(self, day_of_week):
        raise self.error

    def get_active_bookings(self, target_date, exclude_booking_id=None):
        raise self.error

# ============================================================================
# app/services/availability/availability_resolver.py
# Bookable slot computation: weekly rules, date exceptions, active bookings
# ============================================================================
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Optional, Union
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.exceptions import DataUnavailable, InvalidInput
from app.services.availability.availability_repository import AvailabilityRepository
from app.utils.validators import parse_date, normalize_time

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedSlot:
    time: str
    end_time: str
    available: bool

    def to_dict(self) -> Dict:
        return {"time": self.time, "endTime": self.end_time, "available": self.available}


def day_of_week(target_date: date) -> int:
    """Sunday-indexed weekday (0=Sunday, 6=Saturday)"""
    return (target_date.weekday() + 1) % 7


class AvailabilityResolver:
    """
    Computes bookable slots from the stored schedule.

    Every call re-reads the rows it needs; nothing is cached, so the result
    reflects the database at the moment of the read and the resolver is safe
    to share between concurrent requests.
    """

    def __init__(self, repository: AvailabilityRepository):
        self.repository = repository

    @classmethod
    def for_session(cls, db: Session) -> "AvailabilityResolver":
        return cls(AvailabilityRepository(db))

    def resolve_day(
            self,
            target_date: Union[date, str],
            exclude_booking_id: Optional[UUID] = None
    ) -> List[ResolvedSlot]:
        """
        Get the ordered slots for one date.

        Algorithm:
            1. A date exception replaces the weekly rules entirely; a closed
               exception (or one without slots) yields no slots
            2. Otherwise every weekly rule for the weekday is a slot, unmerged
            3. A slot is unavailable when an active booking starts at its time
            4. Sort by start time
        """
        target_date = parse_date(target_date)

        base_slots = self._base_slots(target_date)
        if not base_slots:
            return []

        bookings = self.repository.get_active_bookings(target_date, exclude_booking_id)
        booked_times = set()
        for booking in bookings:
            try:
                booked_times.add(normalize_time(booking.time))
            except InvalidInput:
                logger.warning(f"Booking {booking.id} has unreadable time '{booking.time}'")

        resolved = [
            ResolvedSlot(time=start, end_time=end, available=start not in booked_times)
            for start, end in base_slots
        ]
        resolved.sort(key=lambda slot: slot.time)
        return resolved

    def resolve_range(
            self,
            start_date: Union[date, str],
            end_date: Union[date, str],
            max_days: int
    ) -> Dict[str, List[ResolvedSlot]]:
        """
        Resolve each day from start_date to end_date inclusive.

        Only the first max_days days are computed. Days without a single
        available slot are left out of the result.
        """
        start_date = parse_date(start_date)
        end_date = parse_date(end_date)

        result = {}
        current_date = start_date
        days_resolved = 0

        while current_date <= end_date and days_resolved < max_days:
            slots = self.resolve_day(current_date)
            if any(slot.available for slot in slots):
                result[current_date.isoformat()] = slots
            days_resolved += 1
            current_date += timedelta(days=1)

        return result

    def is_slot_free(
            self,
            target_date: Union[date, str],
            time: str,
            exclude_booking_id: Optional[UUID] = None
    ) -> bool:
        """
        Check whether the slot starting at `time` is offered and unbooked.

        A time that is not in the resolved schedule counts as taken. Storage
        errors return False so a booking is never accepted on a guess.
        """
        try:
            slot = self.find_slot(target_date, time, exclude_booking_id)
        except DataUnavailable:
            logger.warning(f"Availability check for {target_date} {time} failed closed")
            return False

        return slot is not None and slot.available

    def find_slot(
            self,
            target_date: Union[date, str],
            time: str,
            exclude_booking_id: Optional[UUID] = None
    ) -> Optional[ResolvedSlot]:
        """Get the resolved slot starting at `time`, if the schedule offers one"""
        target_date = parse_date(target_date)
        time = normalize_time(time)
        slots = self.resolve_day(target_date, exclude_booking_id)
        return next((slot for slot in slots if slot.time == time), None)

    def _base_slots(self, target_date: date) -> List[tuple]:
        exception = self.repository.get_exception(target_date)

        if exception is not None:
            if not exception.is_available or not exception.slots:
                return []
            raw_slots = [(s.get("start_time"), s.get("end_time")) for s in exception.slots]
        else:
            rules = self.repository.get_weekly_rules(day_of_week(target_date))
            raw_slots = [(rule.start_time, rule.end_time) for rule in rules]

        base_slots = []
        for start, end in raw_slots:
            try:
                base_slots.append((normalize_time(start), normalize_time(end)))
            except InvalidInput:
                logger.warning(f"Skipping unreadable slot {start}-{end} on {target_date}")
        return base_slots

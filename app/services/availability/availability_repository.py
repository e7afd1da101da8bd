# ============================================================================
# app/services/availability/availability_repository.py
# Read-side queries the resolver depends on
# ============================================================================
import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import DataUnavailable
from app.models.availability import WeeklyRule, DateException
from app.models.booking import Booking, ACTIVE_BOOKING_STATUSES

logger = logging.getLogger(__name__)


class AvailabilityRepository:
    """Fetches weekly rules, date exceptions and active bookings for one session"""

    def __init__(self, db: Session):
        self.db = db

    def get_exception(self, target_date: date) -> Optional[DateException]:
        try:
            return self.db.query(DateException).filter(
                DateException.date == target_date
            ).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load date exception for {target_date}: {e}")
            raise DataUnavailable() from e

    def get_weekly_rules(self, day_of_week: int) -> List[WeeklyRule]:
        try:
            return self.db.query(WeeklyRule).filter(
                WeeklyRule.day_of_week == day_of_week
            ).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load weekly rules for day {day_of_week}: {e}")
            raise DataUnavailable() from e

    def get_active_bookings(
            self,
            target_date: date,
            exclude_booking_id: Optional[UUID] = None
    ) -> List[Booking]:
        try:
            query = self.db.query(Booking).filter(
                Booking.date == target_date,
                Booking.status.in_(ACTIVE_BOOKING_STATUSES)
            )
            if exclude_booking_id is not None:
                query = query.filter(Booking.id != exclude_booking_id)
            return query.all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load bookings for {target_date}: {e}")
            raise DataUnavailable() from e

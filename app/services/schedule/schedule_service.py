# ============================================================================
# app/services/schedule/schedule_service.py
# Admin maintenance of the weekly schedule and date exceptions
# ============================================================================
"""Service for reading and replacing the studio's availability settings"""
import logging
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import DataUnavailable, InvalidInput
from app.models.availability import WeeklyRule, DateException, DAY_NAMES
from app.utils.validators import parse_date, validate_time_range

logger = logging.getLogger(__name__)

EXCEPTION_TYPE_CUSTOM = "custom"
EXCEPTION_TYPE_CLOSED = "closed"


class ScheduleService:
    """Handles weekly schedule and date exception operations"""

    @staticmethod
    def get_schedule(db: Session) -> Dict[str, Any]:
        """Get the weekly schedule grouped by day name, plus all date exceptions"""
        try:
            rules = db.query(WeeklyRule).order_by(
                WeeklyRule.day_of_week, WeeklyRule.start_time
            ).all()
            exceptions = db.query(DateException).order_by(DateException.date).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load availability settings: {e}")
            raise DataUnavailable() from e

        weekly_schedule = {day: {"enabled": False, "slots": []} for day in DAY_NAMES}
        for rule in rules:
            day = weekly_schedule[DAY_NAMES[rule.day_of_week]]
            day["enabled"] = True
            day["slots"].append({"start_time": rule.start_time, "end_time": rule.end_time})

        return {
            "weekly_schedule": weekly_schedule,
            "date_exceptions": [exc.to_dict() for exc in exceptions],
        }

    @staticmethod
    def replace_weekly_schedule(db: Session, weekly_schedule: Dict[str, Dict[str, Any]]) -> int:
        """
        Replace every weekly rule with the given schedule.

        Args:
            weekly_schedule: {"monday": {"enabled": True, "slots": [{"start_time", "end_time"}]}, ...}

        Returns:
            Number of rules stored
        """
        unknown_days = set(weekly_schedule) - set(DAY_NAMES)
        if unknown_days:
            raise InvalidInput(f"Unknown day(s): {', '.join(sorted(unknown_days))}")

        entries = []
        for index, day in enumerate(DAY_NAMES):
            day_data = weekly_schedule.get(day) or {}
            if not day_data.get("enabled") or not day_data.get("slots"):
                continue
            for slot in day_data["slots"]:
                start, end = validate_time_range(slot.get("start_time"), slot.get("end_time"))
                entries.append(WeeklyRule(
                    day_of_week=index,
                    day_name=day,
                    start_time=start,
                    end_time=end,
                ))

        try:
            db.query(WeeklyRule).delete(synchronize_session=False)
            db.add_all(entries)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to replace weekly schedule: {e}")
            raise DataUnavailable("Unable to save the weekly schedule, please try again") from e

        logger.info(f"Weekly schedule replaced with {len(entries)} rule(s)")
        return len(entries)

    @staticmethod
    def replace_date_exceptions(db: Session, date_exceptions: List[Dict[str, Any]]) -> int:
        """
        Replace every date exception.

        Each entry is {"date", "type": "custom" | "closed", "slots", "reason"}.
        Only custom exceptions keep their slots.
        """
        entries = []
        seen_dates = set()
        for exception in date_exceptions:
            exception_date = parse_date(exception.get("date"))
            if exception_date in seen_dates:
                raise InvalidInput(f"Duplicate exception for {exception_date.isoformat()}")
            seen_dates.add(exception_date)

            exception_type = exception.get("type", EXCEPTION_TYPE_CLOSED)
            if exception_type not in (EXCEPTION_TYPE_CUSTOM, EXCEPTION_TYPE_CLOSED):
                raise InvalidInput(f"Unknown exception type '{exception_type}'")

            slots = []
            if exception_type == EXCEPTION_TYPE_CUSTOM:
                for slot in exception.get("slots") or []:
                    start, end = validate_time_range(slot.get("start_time"), slot.get("end_time"))
                    slots.append({"start_time": start, "end_time": end})

            entries.append(DateException(
                date=exception_date,
                is_available=exception_type == EXCEPTION_TYPE_CUSTOM,
                slots=slots,
                reason=exception.get("reason"),
            ))

        try:
            db.query(DateException).delete(synchronize_session=False)
            db.add_all(entries)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to replace date exceptions: {e}")
            raise DataUnavailable("Unable to save date exceptions, please try again") from e

        logger.info(f"Date exceptions replaced with {len(entries)} entr(ies)")
        return len(entries)

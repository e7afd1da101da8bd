# ============================================================================
# FILE: app/api/v1/public/availability.py
# Public slot listing - thin HTTP layer over AvailabilityResolver
# ============================================================================
import calendar
from datetime import date, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.config.settings import get_settings
from app.services.availability.availability_resolver import AvailabilityResolver

router = APIRouter(prefix="/availability", tags=["public-availability"])


@router.get("/time-slots")
async def get_time_slots(
        date: str = Query(..., description="Date in YYYY-MM-DD format"),
        db: Session = Depends(get_db)
):
    """
    Get every slot for a date, sorted by start time, with its availability.
    """
    slots = AvailabilityResolver.for_session(db).resolve_day(date)
    return {
        "date": date,
        "timeSlots": [slot.to_dict() for slot in slots]
    }


@router.get("/dates")
async def get_available_dates(
        year: int = Query(..., ge=1970, le=9999, description="Four digit year"),
        month: int = Query(..., ge=1, le=12, description="Month number (1-12)"),
        db: Session = Depends(get_db)
):
    """
    Get the dates of a month that still have at least one free slot.
    """
    days_in_month = calendar.monthrange(year, month)[1]
    month_start = date(year, month, 1)
    month_end = date(year, month, days_in_month)

    resolved = AvailabilityResolver.for_session(db).resolve_range(
        month_start, month_end, max_days=days_in_month
    )

    return {
        "year": year,
        "month": month,
        "availableDates": list(resolved.keys())
    }


@router.get("/next")
async def get_next_available_days(
        days: Optional[int] = Query(None, ge=1, description="How many days to look ahead"),
        db: Session = Depends(get_db)
):
    """
    Get the upcoming days that have free slots, starting today.
    The look-ahead is capped by AVAILABILITY_MAX_RANGE_DAYS.
    """
    settings = get_settings()
    days_ahead = min(days or settings.AVAILABILITY_LOOKAHEAD_DAYS, settings.AVAILABILITY_MAX_RANGE_DAYS)

    start_date = date.today()
    end_date = start_date + timedelta(days=days_ahead - 1)

    resolved = AvailabilityResolver.for_session(db).resolve_range(
        start_date, end_date, max_days=days_ahead
    )

    return {
        "start_date": start_date.isoformat(),
        "end_date": end_date.isoformat(),
        "days": {
            day: [slot.to_dict() for slot in slots]
            for day, slots in resolved.items()
        }
    }


@router.get("/check")
async def check_slot(
        date: str = Query(..., description="Date in YYYY-MM-DD format"),
        time: str = Query(..., description="Slot start time in HH:MM format"),
        db: Session = Depends(get_db)
):
    """
    Check whether one exact slot can currently be booked.
    Unknown times and storage errors both report unavailable.
    """
    available = AvailabilityResolver.for_session(db).is_slot_free(date, time)
    return {"date": date, "time": time, "available": available}

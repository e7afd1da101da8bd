# ============================================================================
# FILE: app/api/v1/admin/availability.py
# Schedule management - admin only
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.dependencies import require_admin
from app.config.database import get_db
from app.core.context import RequestContext
from app.schemas.availability import AvailabilitySettingsUpdate
from app.services.schedule.schedule_service import ScheduleService

router = APIRouter(prefix="/admin/availability", tags=["admin-availability"])


@router.get("")
async def get_availability_settings(
        _: RequestContext = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """
    Get the weekly schedule (grouped by day) and all date exceptions.
    """
    schedule = ScheduleService.get_schedule(db)
    return {
        "weeklySchedule": schedule["weekly_schedule"],
        "dateExceptions": schedule["date_exceptions"]
    }


@router.put("")
async def update_availability_settings(
        payload: AvailabilitySettingsUpdate,
        _: RequestContext = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """
    Replace the weekly schedule and/or the date exceptions.
    A section that is sent replaces every stored entry of that kind.
    """
    result = {"success": True}

    if payload.weekly_schedule is not None:
        result["weeklyRules"] = ScheduleService.replace_weekly_schedule(
            db, payload.model_dump(by_alias=False)["weekly_schedule"]
        )

    if payload.date_exceptions is not None:
        result["dateExceptions"] = ScheduleService.replace_date_exceptions(
            db, payload.model_dump(by_alias=False)["date_exceptions"]
        )

    return result

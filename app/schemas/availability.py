"""
Pydantic schemas for the admin availability settings
"""
from pydantic import BaseModel, Field
from typing import Dict, List, Literal, Optional


class SlotSchema(BaseModel):
    start_time: str
    end_time: str


class DayScheduleSchema(BaseModel):
    enabled: bool = False
    slots: List[SlotSchema] = Field(default_factory=list)


class DateExceptionSchema(BaseModel):
    date: str = Field(..., description="Date in YYYY-MM-DD format")
    type: Literal["custom", "closed"] = "closed"
    slots: List[SlotSchema] = Field(default_factory=list)
    reason: Optional[str] = None


class AvailabilitySettingsUpdate(BaseModel):
    """
    Either part may be omitted; a present part replaces all stored entries.
    """
    weekly_schedule: Optional[Dict[str, DayScheduleSchema]] = Field(None, alias="weeklySchedule")
    date_exceptions: Optional[List[DateExceptionSchema]] = Field(None, alias="dateExceptions")

    model_config = {"populate_by_name": True}

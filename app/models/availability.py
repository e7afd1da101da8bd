from sqlalchemy import Column, String, Integer, Boolean, Date, JSON, CheckConstraint
from app.models.base import Base

DAY_NAMES = ["sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]


class WeeklyRule(Base):
    """Recurring weekly availability window"""
    __tablename__ = "availability_weekly"

    id = Column(Integer, primary_key=True, autoincrement=True)

    day_of_week = Column(Integer, nullable=False, index=True)  # 0=Sunday, 6=Saturday
    day_name = Column(String(10), nullable=False)
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)  # HH:MM

    __table_args__ = (
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_availability_weekly_day"),
        CheckConstraint("start_time < end_time", name="ck_availability_weekly_range"),
    )

    def __repr__(self):
        return f"<WeeklyRule {self.day_name} {self.start_time}-{self.end_time}>"


class DateException(Base):
    """Specific date overrides (holidays, time-off, special hours)"""
    __tablename__ = "availability_exceptions"

    id = Column(Integer, primary_key=True, autoincrement=True)

    date = Column(Date, nullable=False, unique=True, index=True)
    is_available = Column(Boolean, nullable=False, default=False)  # False = day off
    slots = Column(JSON, nullable=False, default=list)  # [{"start_time": "HH:MM", "end_time": "HH:MM"}]
    reason = Column(String, nullable=True)  # "Holiday", "Workshop open day", etc.

    def to_dict(self):
        return {
            "date": self.date.isoformat(),
            "is_available": self.is_available,
            "slots": list(self.slots or []),
            "reason": self.reason,
        }

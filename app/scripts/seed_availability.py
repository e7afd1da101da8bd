# ===== seed_availability.py =====
# Usage: python -m app.scripts.seed_availability
from datetime import date, timedelta

from app.config.database import SessionLocal
from app.services.schedule.schedule_service import ScheduleService

WORKDAY_SLOTS = [
    {"start_time": "09:00", "end_time": "10:00"},
    {"start_time": "10:00", "end_time": "11:00"},
    {"start_time": "11:00", "end_time": "12:00"},
    {"start_time": "14:00", "end_time": "15:00"},
    {"start_time": "15:00", "end_time": "16:00"},
]


def seed_availability():
    db = SessionLocal()

    try:
        # 1. Mon–Fri workshop hours, weekends closed
        weekly_schedule = {
            day: {"enabled": True, "slots": WORKDAY_SLOTS}
            for day in ["monday", "tuesday", "wednesday", "thursday", "friday"]
        }
        rules = ScheduleService.replace_weekly_schedule(db, weekly_schedule)

        # 2. Example exceptions: a day off next week, a Saturday open morning the week after
        today = date.today()
        day_off = today + timedelta(days=7)
        open_morning = today + timedelta(days=(5 - today.weekday()) % 7 + 14)
        exceptions = ScheduleService.replace_date_exceptions(db, [
            {"date": day_off.isoformat(), "type": "closed", "reason": "Timber delivery"},
            {
                "date": open_morning.isoformat(),
                "type": "custom",
                "slots": [{"start_time": "10:00", "end_time": "11:00"}],
                "reason": "Showroom open morning",
            },
        ])

        print(f"✅ Seeded {rules} weekly slots and {exceptions} date exceptions")
    finally:
        db.close()


if __name__ == "__main__":
    seed_availability()

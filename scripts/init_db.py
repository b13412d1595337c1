"""
Create the availability tables and seed default business hours.

Default week: Monday-Friday open 09:00-17:00, weekend closed.
Existing business_hours rows are left untouched.
"""

from pathlib import Path

from sqlalchemy import text

from booking_api.database import SessionLocal, engine
from booking_api.models import Base, BusinessHours


# ======================================================
# DEFAULTS
# ======================================================

DEFAULT_START = "09:00:00"
DEFAULT_END = "17:00:00"
OPEN_WEEKDAYS = (1, 2, 3, 4, 5)


# ======================================================
# MAIN LOGIC
# ======================================================

def seed_business_hours(db) -> int:
    existing = {row.week_day for row in db.query(BusinessHours).all()}
    created = 0

    for week_day in range(1, 8):
        if week_day in existing:
            continue
        db.add(BusinessHours(
            week_day=week_day,
            start_time=DEFAULT_START,
            end_time=DEFAULT_END,
            is_open=1 if week_day in OPEN_WEEKDAYS else 0,
        ))
        created += 1

    db.commit()
    return created


def main():
    if engine.url.get_backend_name() == "sqlite" and engine.url.database:
        Path(engine.url.database).parent.mkdir(parents=True, exist_ok=True)

    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        print("DB OK:", db.execute(text("SELECT 1")).scalar())
        created = seed_business_hours(db)
        print(f"[INIT] business_hours rows created: {created}")
    finally:
        db.close()


if __name__ == "__main__":
    main()

"""
Seed script for the Barline development database.

- 1 admin login
- 9 employees: 3 cooks, 4 bartenders, 2 barbacks (one inactive bartender)
- "Default" weekly template: lighter Sun-Thu, heavier Fri/Sat closes
- Business hours 10:00-02:00 every day, Mountain time
- A few availability entries for the current week
- No schedules (clean slate for auto-generate)

Run with: python -m scripts.seed_data
"""

import json
import sys
from datetime import timedelta
from sqlalchemy import delete

from app.core.config import settings
from app.core.security import hash_password
from app.db.database import Base, SessionLocal, engine
from app.db.models import (
    AppSettings,
    EmployeeAvailability,
    EmployeeRole,
    Employees,
    Schedules,
    ShiftRequirements,
    ShiftType,
    Users,
    WeeklyScheduleTemplates,
    HOURS_KEY,
    TIMEZONE_KEY,
)
from app.services.scheduling.shift_times import business_hours_to_dict, default_business_hours
from app.services.scheduling.timezone import business_today, get_business_timezone


def clear_tables(db):
    """Delete all rows, children first."""
    print("Clearing tables...")

    for model in [
        Schedules,
        EmployeeAvailability,
        ShiftRequirements,
        WeeklyScheduleTemplates,
        AppSettings,
        Employees,
        Users,
    ]:
        db.execute(delete(model))

    db.commit()
    print("All tables cleared.")


def get_current_week_monday():
    # the bar's week, not the server's
    today = business_today(get_business_timezone(settings.COMPANY_TIMEZONE))
    return today - timedelta(days=today.weekday())


def seed_users(db):
    print("Seeding users...")
    db.add(Users(
        email="admin@barline.dev",
        name="Admin",
        password_hash=hash_password("admin12345"),
        is_active=True,
    ))
    db.commit()
    print("Seeded 1 user.")


def seed_employees(db):
    print("Seeding employees...")

    roster = [
        ("Ana Ortiz", EmployeeRole.COOK, 19.0, True),
        ("Ben Cho", EmployeeRole.COOK, 18.5, True),
        ("Cal Reyes", EmployeeRole.COOK, 21.0, True),
        ("Dee Park", EmployeeRole.BARTENDER, 12.0, True),
        ("Eli Brandt", EmployeeRole.BARTENDER, 12.0, True),
        ("Fay Moss", EmployeeRole.BARTENDER, 12.5, True),
        ("Gus Lind", EmployeeRole.BARTENDER, 12.0, False),
        ("Hal Ng", EmployeeRole.BARBACK, 15.0, True),
        ("Ivy Shaw", EmployeeRole.BARBACK, 15.0, True),
    ]

    employees = []
    for name, role, wage, active in roster:
        email = name.lower().replace(" ", ".") + "@barline.dev"
        employees.append(Employees(name=name, email=email, role=role, hourly_wage=wage, is_active=active))

    db.add_all(employees)
    db.commit()
    print(f"Seeded {len(employees)} employees.")
    return employees


def seed_weekly_template(db):
    """Default template. day_of_week 0=Sunday."""
    print("Seeding weekly template...")

    rows = []
    for day in range(7):
        weekend = day in (5, 6)
        rows.append(WeeklyScheduleTemplates(
            name="Default", day_of_week=day, shift_type=ShiftType.OPEN,
            cooks=1, bartenders=1, barbacks=0,
        ))
        rows.append(WeeklyScheduleTemplates(
            name="Default", day_of_week=day, shift_type=ShiftType.CLOSE,
            cooks=2 if weekend else 1, bartenders=3 if weekend else 2, barbacks=2 if weekend else 1,
        ))

    db.add_all(rows)
    db.commit()
    print(f"Seeded {len(rows)} template rows.")


def seed_settings(db):
    print("Seeding settings...")
    db.add(AppSettings(key=HOURS_KEY, value=json.dumps(business_hours_to_dict(default_business_hours()))))
    db.add(AppSettings(key=TIMEZONE_KEY, value=settings.COMPANY_TIMEZONE))
    db.commit()
    print("Seeded business hours and timezone.")


def seed_availability(db, employees):
    """Ben is off Monday, Dee can't close Friday."""
    print("Seeding availability...")

    monday = get_current_week_monday()
    by_name = {e.name: e for e in employees}
    entries = [
        EmployeeAvailability(employee_id=by_name["Ben Cho"].id, date=monday, shift_type=None, is_available=False),
        EmployeeAvailability(
            employee_id=by_name["Dee Park"].id, date=monday + timedelta(days=4),
            shift_type=ShiftType.CLOSE, is_available=False, notes="Class",
        ),
    ]

    db.add_all(entries)
    db.commit()
    print(f"Seeded {len(entries)} availability entries.")


def seed_requirements(db):
    """Saturday after next gets a private event override."""
    print("Seeding shift requirements...")

    saturday = get_current_week_monday() + timedelta(days=12)
    db.add(ShiftRequirements(
        date=saturday, shift_type=ShiftType.CLOSE,
        cooks=3, bartenders=3, barbacks=2, notes="Private event",
    ))
    db.commit()
    print("Seeded 1 shift requirement.")


def main():
    print("\n" + "=" * 50)
    print("Barline Database Seeder")
    print("=" * 50 + "\n")

    response = input("This will DELETE ALL EXISTING DATA. Continue? (yes/no): ")
    if response.lower() != "yes":
        print("Aborted.")
        sys.exit(0)

    Base.metadata.create_all(engine)
    db = SessionLocal()

    try:
        clear_tables(db)

        seed_users(db)
        employees = seed_employees(db)
        seed_weekly_template(db)
        seed_settings(db)
        seed_availability(db, employees)
        seed_requirements(db)

        print("\n" + "=" * 50)
        print("Seeding complete!")
        print("=" * 50)
        print("\nLogin: admin@barline.dev / admin12345")
        print(f"Week starting {get_current_week_monday()} is ready for POST /api/v1/schedules/auto-generate")
        print("=" * 50 + "\n")

    except Exception as e:
        db.rollback()
        print(f"\nError during seeding: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()

from app.db.database import Base

# Import models
from app.db.models.users import Users
from app.db.models.employees import Employees, EmployeeRole
from app.db.models.schedules import Schedules, ShiftType
from app.db.models.employee_availability import EmployeeAvailability
from app.db.models.shift_requirements import ShiftRequirements
from app.db.models.weekly_schedule_templates import WeeklyScheduleTemplates
from app.db.models.app_settings import AppSettings, HOURS_KEY, TIMEZONE_KEY

__all__ = [
    "Base",
    # Models
    "Users",
    "Employees",
    "Schedules",
    "EmployeeAvailability",
    "ShiftRequirements",
    "WeeklyScheduleTemplates",
    "AppSettings",
    # Enums
    "EmployeeRole",
    "ShiftType",
    # Setting keys
    "HOURS_KEY",
    "TIMEZONE_KEY",
]

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, parse_date_param
from app.db.models.employees import Employees
from app.db.models.schedules import Schedules
from app.db.models.users import Users
from app.schemas.schedules import (
    ScheduleCreate,
    ScheduleUpdate,
    ScheduleResponse,
    AutoGenerateRequest,
    AutoGenerateResponse,
)
from app.services.scheduling import (
    EmployeeRole,
    InvalidDateError,
    ShiftTimeError,
    ShiftType,
    calculate_shift_times,
    generate_schedule,
    get_business_timezone,
)
from app.services.scheduling.data_loader import load_business_hours, load_timezone_name

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedules", tags=["schedules"])


def _apply_shift_times(db: Session, schedule: Schedules, employee: Employees) -> None:
    """Set start/end from business hours for the schedule's date, shift and employee role."""
    try:
        times = calculate_shift_times(
            schedule.date,
            ShiftType(schedule.shift_type.value),
            EmployeeRole(employee.role.value),
            load_business_hours(db),
            get_business_timezone(load_timezone_name(db)),
        )
    except (ShiftTimeError, InvalidDateError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    schedule.start_time = times.start_time
    schedule.end_time = times.end_time


def _check_not_double_booked(db: Session, employee_id: int, schedule: Schedules) -> None:
    query = db.query(Schedules).filter(
        Schedules.employee_id == employee_id,
        Schedules.date == schedule.date,
        Schedules.shift_type == schedule.shift_type,
    )
    if schedule.id is not None:
        query = query.filter(Schedules.id != schedule.id)
    if query.first():
        raise HTTPException(status_code=400, detail="Employee already scheduled for this shift")


@router.post("/auto-generate", response_model=AutoGenerateResponse)
def auto_generate_schedules(
    payload: AutoGenerateRequest,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    start = parse_date_param(db, payload.start_date)
    end = parse_date_param(db, payload.end_date)
    if start > end:
        raise HTTPException(status_code=400, detail="start_date must be on or before end_date")

    try:
        summary = generate_schedule(
            db,
            start,
            end,
            template_name=payload.template_name,
            overwrite_existing=payload.overwrite_existing,
        )
    except (InvalidDateError, ShiftTimeError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"User {current_user.id} auto-generated schedules for {start}..{end}")

    return AutoGenerateResponse(
        success=summary.success,
        created=summary.created,
        skipped=summary.skipped,
        warnings=summary.warnings,
        schedules=summary.schedules,
    )


@router.post("", response_model=ScheduleResponse, status_code=status.HTTP_201_CREATED)
def create_schedule(
    payload: ScheduleCreate,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    employee = db.query(Employees).filter(Employees.id == payload.employee_id).first()
    if not employee or employee.deleted_at is not None:
        raise HTTPException(status_code=404, detail="Employee not found")

    schedule = Schedules(**{**payload.model_dump(), "date": parse_date_param(db, payload.date)})
    _check_not_double_booked(db, employee.id, schedule)
    _apply_shift_times(db, schedule, employee)

    db.add(schedule)
    db.commit()
    db.refresh(schedule)
    return schedule


@router.get("", response_model=List[ScheduleResponse])
def list_schedules(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    employee_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    query = db.query(Schedules)
    if start_date:
        query = query.filter(Schedules.date >= parse_date_param(db, start_date))
    if end_date:
        query = query.filter(Schedules.date <= parse_date_param(db, end_date))
    if employee_id:
        query = query.filter(Schedules.employee_id == employee_id)
    return query.order_by(Schedules.date, Schedules.shift_type, Schedules.start_time).all()


@router.get("/{schedule_id}", response_model=ScheduleResponse)
def get_schedule(
    schedule_id: int,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    schedule = db.query(Schedules).filter(Schedules.id == schedule_id).first()
    if not schedule:
        raise HTTPException(status_code=404, detail="Schedule not found")
    return schedule


@router.put("/{schedule_id}", response_model=ScheduleResponse)
def update_schedule(
    schedule_id: int,
    payload: ScheduleUpdate,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    schedule = db.query(Schedules).filter(Schedules.id == schedule_id).first()
    if not schedule:
        raise HTTPException(status_code=404, detail="Schedule not found")

    update_data = payload.model_dump(exclude_unset=True)
    if "date" in update_data:
        update_data["date"] = parse_date_param(db, update_data["date"])
    reslot = any(key in update_data for key in ("employee_id", "date", "shift_type"))

    employee = schedule.employee
    if "employee_id" in update_data:
        employee = db.query(Employees).filter(Employees.id == update_data["employee_id"]).first()
        if not employee or employee.deleted_at is not None:
            raise HTTPException(status_code=404, detail="Employee not found")

    for field, value in update_data.items():
        setattr(schedule, field, value)

    if reslot:
        _check_not_double_booked(db, employee.id, schedule)
        _apply_shift_times(db, schedule, employee)

    db.commit()
    db.refresh(schedule)
    return schedule


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_schedule(
    schedule_id: int,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    schedule = db.query(Schedules).filter(Schedules.id == schedule_id).first()
    if not schedule:
        raise HTTPException(status_code=404, detail="Schedule not found")

    db.delete(schedule)
    db.commit()

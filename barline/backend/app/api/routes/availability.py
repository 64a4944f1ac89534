from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, parse_date_param
from app.db.models.employee_availability import EmployeeAvailability
from app.db.models.employees import Employees
from app.db.models.schedules import ShiftType
from app.db.models.users import Users
from app.schemas.availability import AvailabilityCreate, AvailabilityUpdate, AvailabilityResponse

router = APIRouter(prefix="/availability", tags=["availability"])


@router.post("", response_model=AvailabilityResponse, status_code=status.HTTP_201_CREATED)
def set_availability(
    payload: AvailabilityCreate,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    """Create the entry, or update it if one exists for the same employee/date/shift."""
    day = parse_date_param(db, payload.date)
    employee = db.query(Employees).filter(Employees.id == payload.employee_id).first()
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")

    query = db.query(EmployeeAvailability).filter(
        EmployeeAvailability.employee_id == payload.employee_id,
        EmployeeAvailability.date == day,
    )
    if payload.shift_type is None:
        query = query.filter(EmployeeAvailability.shift_type.is_(None))
    else:
        query = query.filter(EmployeeAvailability.shift_type == payload.shift_type)
    entry = query.first()

    if entry:
        entry.is_available = payload.is_available
        entry.notes = payload.notes
    else:
        entry = EmployeeAvailability(**{**payload.model_dump(), "date": day})
        db.add(entry)

    db.commit()
    db.refresh(entry)
    return entry


@router.get("", response_model=List[AvailabilityResponse])
def list_availability(
    employee_id: Optional[int] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    shift_type: Optional[ShiftType] = None,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    query = db.query(EmployeeAvailability)
    if employee_id:
        query = query.filter(EmployeeAvailability.employee_id == employee_id)
    if start_date:
        query = query.filter(EmployeeAvailability.date >= parse_date_param(db, start_date))
    if end_date:
        query = query.filter(EmployeeAvailability.date <= parse_date_param(db, end_date))
    if shift_type:
        query = query.filter(EmployeeAvailability.shift_type == shift_type)
    return query.order_by(EmployeeAvailability.date, EmployeeAvailability.employee_id).all()


@router.get("/{availability_id}", response_model=AvailabilityResponse)
def get_availability(
    availability_id: int,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    entry = db.query(EmployeeAvailability).filter(EmployeeAvailability.id == availability_id).first()
    if not entry:
        raise HTTPException(status_code=404, detail="Availability entry not found")
    return entry


@router.put("/{availability_id}", response_model=AvailabilityResponse)
def update_availability(
    availability_id: int,
    payload: AvailabilityUpdate,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    entry = db.query(EmployeeAvailability).filter(EmployeeAvailability.id == availability_id).first()
    if not entry:
        raise HTTPException(status_code=404, detail="Availability entry not found")

    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(entry, field, value)

    db.commit()
    db.refresh(entry)
    return entry


@router.delete("/{availability_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_availability(
    availability_id: int,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    entry = db.query(EmployeeAvailability).filter(EmployeeAvailability.id == availability_id).first()
    if not entry:
        raise HTTPException(status_code=404, detail="Availability entry not found")

    db.delete(entry)
    db.commit()

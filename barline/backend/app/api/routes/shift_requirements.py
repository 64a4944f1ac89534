from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, parse_date_param
from app.db.models.shift_requirements import ShiftRequirements
from app.db.models.users import Users
from app.schemas.shift_requirements import (
    ShiftRequirementCreate,
    ShiftRequirementUpdate,
    ShiftRequirementResponse,
)

router = APIRouter(prefix="/shift-requirements", tags=["shift-requirements"])


@router.post("", response_model=ShiftRequirementResponse, status_code=status.HTTP_201_CREATED)
def create_shift_requirement(
    payload: ShiftRequirementCreate,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    day = parse_date_param(db, payload.date)
    existing = db.query(ShiftRequirements).filter(
        ShiftRequirements.date == day,
        ShiftRequirements.shift_type == payload.shift_type,
    ).first()
    if existing:
        raise HTTPException(status_code=400, detail="Shift requirement already exists for this date and shift type")

    requirement = ShiftRequirements(**{**payload.model_dump(), "date": day})
    db.add(requirement)
    db.commit()
    db.refresh(requirement)
    return requirement


@router.get("", response_model=List[ShiftRequirementResponse])
def list_shift_requirements(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    query = db.query(ShiftRequirements)
    if start_date:
        query = query.filter(ShiftRequirements.date >= parse_date_param(db, start_date))
    if end_date:
        query = query.filter(ShiftRequirements.date <= parse_date_param(db, end_date))
    return query.order_by(ShiftRequirements.date, ShiftRequirements.shift_type).all()


@router.get("/{requirement_id}", response_model=ShiftRequirementResponse)
def get_shift_requirement(
    requirement_id: int,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    requirement = db.query(ShiftRequirements).filter(ShiftRequirements.id == requirement_id).first()
    if not requirement:
        raise HTTPException(status_code=404, detail="Shift requirement not found")
    return requirement


@router.put("/{requirement_id}", response_model=ShiftRequirementResponse)
def update_shift_requirement(
    requirement_id: int,
    payload: ShiftRequirementUpdate,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    requirement = db.query(ShiftRequirements).filter(ShiftRequirements.id == requirement_id).first()
    if not requirement:
        raise HTTPException(status_code=404, detail="Shift requirement not found")

    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(requirement, field, value)

    db.commit()
    db.refresh(requirement)
    return requirement


@router.delete("/{requirement_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_shift_requirement(
    requirement_id: int,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    requirement = db.query(ShiftRequirements).filter(ShiftRequirements.id == requirement_id).first()
    if not requirement:
        raise HTTPException(status_code=404, detail="Shift requirement not found")

    db.delete(requirement)
    db.commit()

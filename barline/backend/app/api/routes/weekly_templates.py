from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.db.models.users import Users
from app.db.models.weekly_schedule_templates import WeeklyScheduleTemplates
from app.schemas.weekly_templates import WeeklyTemplateCreate, WeeklyTemplateUpdate, WeeklyTemplateResponse

router = APIRouter(prefix="/weekly-templates", tags=["weekly-templates"])


@router.post("", response_model=WeeklyTemplateResponse, status_code=status.HTTP_201_CREATED)
def create_weekly_template(
    payload: WeeklyTemplateCreate,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    existing = db.query(WeeklyScheduleTemplates).filter(
        WeeklyScheduleTemplates.name == payload.name,
        WeeklyScheduleTemplates.day_of_week == payload.day_of_week,
        WeeklyScheduleTemplates.shift_type == payload.shift_type,
    ).first()
    if existing:
        raise HTTPException(
            status_code=400,
            detail="Template entry already exists for this name, day and shift type",
        )

    template = WeeklyScheduleTemplates(**payload.model_dump())
    db.add(template)
    db.commit()
    db.refresh(template)
    return template


@router.get("", response_model=List[WeeklyTemplateResponse])
def list_weekly_templates(
    name: Optional[str] = None,
    active_only: bool = False,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    query = db.query(WeeklyScheduleTemplates)
    if name:
        query = query.filter(WeeklyScheduleTemplates.name == name)
    if active_only:
        query = query.filter(WeeklyScheduleTemplates.is_active == True)
    return query.order_by(
        WeeklyScheduleTemplates.name,
        WeeklyScheduleTemplates.day_of_week,
        WeeklyScheduleTemplates.shift_type,
    ).all()


@router.get("/{template_id}", response_model=WeeklyTemplateResponse)
def get_weekly_template(
    template_id: int,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    template = db.query(WeeklyScheduleTemplates).filter(WeeklyScheduleTemplates.id == template_id).first()
    if not template:
        raise HTTPException(status_code=404, detail="Template entry not found")
    return template


@router.put("/{template_id}", response_model=WeeklyTemplateResponse)
def update_weekly_template(
    template_id: int,
    payload: WeeklyTemplateUpdate,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    template = db.query(WeeklyScheduleTemplates).filter(WeeklyScheduleTemplates.id == template_id).first()
    if not template:
        raise HTTPException(status_code=404, detail="Template entry not found")

    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(template, field, value)

    db.commit()
    db.refresh(template)
    return template


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_weekly_template(
    template_id: int,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    template = db.query(WeeklyScheduleTemplates).filter(WeeklyScheduleTemplates.id == template_id).first()
    if not template:
        raise HTTPException(status_code=404, detail="Template entry not found")

    db.delete(template)
    db.commit()

import json
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.db.models.app_settings import AppSettings, HOURS_KEY, TIMEZONE_KEY
from app.db.models.users import Users
from app.schemas.settings import BusinessHoursPayload, TimezonePayload
from app.services.scheduling import InvalidDateError, ShiftTimeError, get_business_timezone
from app.services.scheduling.data_loader import load_business_hours, load_timezone_name
from app.services.scheduling.shift_times import business_hours_to_dict, parse_business_hours

router = APIRouter(prefix="/settings", tags=["settings"])


def _upsert_setting(db: Session, key: str, value: str) -> None:
    setting = db.query(AppSettings).filter(AppSettings.key == key).first()
    if setting:
        setting.value = value
    else:
        db.add(AppSettings(key=key, value=value))
    db.commit()


@router.get("/business-hours")
def get_business_hours(
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    try:
        hours = load_business_hours(db)
    except ShiftTimeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return business_hours_to_dict(hours)


@router.put("/business-hours")
def update_business_hours(
    payload: BusinessHoursPayload,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    raw = {day: hours.model_dump() for day, hours in payload.root.items()}
    try:
        hours = parse_business_hours(raw)
    except ShiftTimeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    normalised = business_hours_to_dict(hours)
    _upsert_setting(db, HOURS_KEY, json.dumps(normalised))
    return normalised


@router.get("/timezone", response_model=TimezonePayload)
def get_timezone(
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    return TimezonePayload(timezone=load_timezone_name(db))


@router.put("/timezone", response_model=TimezonePayload)
def update_timezone(
    payload: TimezonePayload,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    try:
        get_business_timezone(payload.timezone)
    except InvalidDateError as e:
        raise HTTPException(status_code=400, detail=str(e))

    _upsert_setting(db, TIMEZONE_KEY, payload.timezone)
    return payload

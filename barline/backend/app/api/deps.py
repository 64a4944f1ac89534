from datetime import date
from typing import Generator, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.db.database import SessionLocal
from app.core.security import read_access_token
from app.db.models.users import Users
from app.services.scheduling.data_loader import load_timezone_name
from app.services.scheduling.timezone import InvalidDateError, get_business_timezone, parse_business_date

security = HTTPBearer()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> Users:
    token_data = read_access_token(credentials.credentials)
    if token_data is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user = db.query(Users).filter(Users.id == token_data.user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account disabled")

    return user


def parse_date_param(db: Session, value: Optional[str]) -> date:
    """Date string from a query or body -> business-timezone date (400 if unparseable)"""
    try:
        return parse_business_date(value, get_business_timezone(load_timezone_name(db)))
    except InvalidDateError as e:
        raise HTTPException(status_code=400, detail=str(e))

from fastapi import APIRouter, Depends

from app.api.deps import get_current_user
from app.db.models.users import Users
from app.schemas.users import UserResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
def get_me(current_user: Users = Depends(get_current_user)):
    return current_user

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.schemas.user import UserPublic
from app.services.user import lookup_user

router = APIRouter(tags=["users"])


@router.get("/user/", response_model=UserPublic)
def get_user(
    user_id: str | None = Query(None, alias="id", description="User ID; takes precedence over email"),
    email: str | None = Query(None, description="User email"),
    db: Session = Depends(get_db),
):
    """
    Get a user by ID or email. Called by the product service.

    The password field is always empty.
    """
    return lookup_user(db, user_id=user_id, email=email)

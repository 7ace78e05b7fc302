from fastapi import APIRouter, Depends, Form
from sqlalchemy.orm import Session

from app.api.deps import get_app_settings, get_db
from app.core.config import Settings
from app.schemas.auth import LoginResponse, MessageResponse, RegisterResponse
from app.schemas.user import UserForm, UserPublic
from app.services import auth as auth_service

router = APIRouter(tags=["auth"])


@router.post("/register/", response_model=RegisterResponse)
def register(
    email: str = Form(""),
    password: str = Form(""),
    full_name: str = Form(""),
    address: str = Form(""),
    phone_number: str = Form(""),
    role: str = Form(""),
    db: Session = Depends(get_db),
):
    """Register a new user. Blank fields are reported one at a time, in form order."""
    form = UserForm(
        email=email,
        password=password,
        full_name=full_name,
        address=address,
        phone_number=phone_number,
        role=role,
    )
    return auth_service.register(db, form)


@router.post("/login/", response_model=LoginResponse)
def login(
    email: str = Form(""),
    password: str = Form(""),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """Login endpoint - returns a 30 minute token and replaces any earlier session."""
    form = UserForm(email=email, password=password)
    return auth_service.login(db, settings, form)


@router.post("/authorize/", response_model=UserPublic)
def authorize(
    token: str = Form(""),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """Resolve a token to its user for sibling services. The password field is always empty."""
    return auth_service.authorize(db, settings, token)


@router.post("/logout/", response_model=MessageResponse)
def logout(token: str = Form(""), db: Session = Depends(get_db)):
    auth_service.logout(db, token)
    return MessageResponse(message="User logged out")

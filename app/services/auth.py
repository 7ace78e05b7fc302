"""Auth service: register, login, authorize and logout."""

import logging

from sqlalchemy.orm import Session

import app.repositories.session as session_repo
import app.repositories.user as user_repo
from app.core.config import Settings
from app.core.security import (
    create_access_token,
    decode_token,
    get_password_hash,
    verify_password,
)
from app.errors import DomainValidationError, NotFoundError, UnauthorizedError
from app.schemas.auth import LoginResponse, RegisterResponse
from app.schemas.user import UserForm, UserPublic
from app.services.validation import validate_user_form

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Email or Password invalid"
INVALID_TOKEN = "Token not valid"
MISSING_TOKEN = "Token empty/not found"


def register(db: Session, form: UserForm) -> RegisterResponse:
    """
    Create a user from a register form.

    Raises:
        DomainValidationError: If a required field is blank.
        DuplicateResourceError: If the email is already registered.
        StorageError: If the insert fails for any other reason.
    """
    is_valid, error_message = validate_user_form(form, "register")
    if not is_valid:
        raise DomainValidationError(error_message)

    user = user_repo.create_user(
        db,
        email=form.email,
        password_hash=get_password_hash(form.password),
        full_name=form.full_name,
        address=form.address,
        phone_number=form.phone_number,
        role=form.role,
    )
    logger.info("Registered user id=%s", user.id)
    return RegisterResponse(id=user.id)


def login(db: Session, settings: Settings, form: UserForm) -> LoginResponse:
    """
    Authenticate by email and password and open the user's only session.

    An unknown email and a wrong password give the same error, so callers cannot
    tell which emails are registered. Any prior session of the user is evicted.

    Raises:
        DomainValidationError: If email or password is blank.
        UnauthorizedError: If email not found or password incorrect.
        StorageError: If the session cannot be stored.
    """
    is_valid, error_message = validate_user_form(form, "login")
    if not is_valid:
        raise DomainValidationError(error_message)

    try:
        user = user_repo.get_user(db, email=form.email)
    except NotFoundError:
        raise UnauthorizedError(INVALID_CREDENTIALS)
    if not verify_password(form.password, user.password_hash):
        raise UnauthorizedError(INVALID_CREDENTIALS)

    token = create_access_token(user.email, user.role, settings.jwt_secret_key)
    session_repo.create_session(db, user.id, token)
    logger.info("Opened session for user id=%s", user.id)
    return LoginResponse(token=token, role=user.role)


def authorize(db: Session, settings: Settings, token: str) -> UserPublic:
    """
    Exchange a token for the user it was issued to.

    The token must verify cryptographically (minted here, unexpired) and still be
    the user's stored session (not superseded by a later login, not logged out).

    Raises:
        DomainValidationError: If the token is blank.
        UnauthorizedError: If either check fails.
        NotFoundError: If a correctly signed token names a user that does not exist.
    """
    if not token.strip():
        raise DomainValidationError(MISSING_TOKEN)

    claims = decode_token(token, settings.jwt_secret_key)
    if claims is None:
        raise UnauthorizedError(INVALID_TOKEN)

    user = user_repo.get_user(db, email=claims["email"])
    if session_repo.get_session(db, token, user.id) is None:
        raise UnauthorizedError(INVALID_TOKEN)

    return UserPublic.model_validate(user)


def logout(db: Session, token: str) -> None:
    """
    Delete the session holding ``token``.

    The signature is not checked: holding the exact token string is enough to end
    its session, even if the signing secret has since been rotated.

    Raises:
        DomainValidationError: If the token is blank.
        StorageError: If the delete fails.
    """
    if not token.strip():
        raise DomainValidationError(MISSING_TOKEN)

    session_repo.delete_session(db, token)
    logger.info("Closed session")

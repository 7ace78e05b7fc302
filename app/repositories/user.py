from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.base import transaction
from app.db.models.user import User as UserModel
from app.errors import DuplicateResourceError, NotFoundError, StorageError

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def _is_unique_violation(exc: IntegrityError) -> bool:
    """Check the driver's structured error code, falling back to the message text."""
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == UNIQUE_VIOLATION
    if getattr(orig, "sqlite_errorname", None) == "SQLITE_CONSTRAINT_UNIQUE":
        return True
    message = str(orig).lower()
    return "duplicate" in message or "unique constraint" in message


def is_duplicate_email(exc: IntegrityError) -> bool:
    """True when the integrity error is the email uniqueness constraint firing."""
    if not _is_unique_violation(exc):
        return False
    diag = getattr(exc.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint:
        return "email" in constraint
    return "email" in str(exc.orig).lower()


def get_user_by_email(db: Session, email: str) -> UserModel | None:
    """Get a user by email."""
    return db.query(UserModel).filter(UserModel.email == email).first()


def get_user_by_id(db: Session, user_id: int) -> UserModel | None:
    """Get a user by ID."""
    return db.query(UserModel).filter(UserModel.id == user_id).first()


def get_user(db: Session, email: str = "", user_id: int = 0) -> UserModel:
    """
    Get a user by ID, or by email when ``user_id`` is 0.

    Raises:
        NotFoundError: If no row matches.
        StorageError: If the query fails.
    """
    try:
        if user_id == 0:
            user = get_user_by_email(db, email)
        else:
            user = get_user_by_id(db, user_id)
    except SQLAlchemyError as exc:
        raise StorageError("Failed to get user") from exc

    if user is None:
        raise NotFoundError("User not found")
    return user


def create_user(
    db: Session,
    email: str,
    password_hash: str,
    full_name: str,
    address: str,
    phone_number: str,
    role: str,
) -> UserModel:
    """Create a new user in the database. Stores the given digest as-is."""
    db_user = UserModel(
        email=email,
        password_hash=password_hash,
        full_name=full_name,
        address=address,
        phone_number=phone_number,
        role=role,
    )
    try:
        with transaction(db):
            db.add(db_user)
            db.flush()
    except IntegrityError as exc:
        if is_duplicate_email(exc):
            raise DuplicateResourceError(
                "Email already registered, please use another email"
            ) from exc
        raise StorageError("Failed to create user") from exc
    except SQLAlchemyError as exc:
        raise StorageError("Failed to create user") from exc

    db.refresh(db_user)
    return db_user


def delete_user(db: Session, email: str) -> None:
    """Delete a user by email; the database cascades the delete to its session."""
    user = get_user(db, email=email)
    try:
        with transaction(db):
            db.delete(user)
    except SQLAlchemyError as exc:
        raise StorageError("Failed to delete user") from exc

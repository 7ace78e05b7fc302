from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, contains_eager

from app.db.base import transaction
from app.db.models.session import UserSession as UserSessionModel
from app.db.models.user import User as UserModel
from app.errors import StorageError


def create_session(db: Session, user_id: int, token: str) -> UserSessionModel:
    """
    Replace the user's session with a new one holding ``token``.

    The delete and the insert commit together. Two concurrent logins for the same
    user are linearized by the unique user_id column: the loser's insert fails and
    its transaction rolls back.

    Raises:
        StorageError: If either statement or the commit fails.
    """
    db_session = UserSessionModel(token=token, user_id=user_id)
    try:
        with transaction(db):
            db.query(UserSessionModel).filter(
                UserSessionModel.user_id == user_id
            ).delete(synchronize_session="fetch")
            db.add(db_session)
            db.flush()
    except SQLAlchemyError as exc:
        raise StorageError("Failed to create session") from exc

    db.refresh(db_session)
    return db_session


def get_session(db: Session, token: str, user_id: int) -> UserSessionModel | None:
    """Get the session matching both token and user, with its user loaded. None if no match."""
    try:
        return (
            db.query(UserSessionModel)
            .join(UserSessionModel.user)
            .options(contains_eager(UserSessionModel.user))
            .filter(
                UserSessionModel.token == token,
                UserModel.id == user_id,
            )
            .first()
        )
    except SQLAlchemyError as exc:
        raise StorageError("Failed to get session") from exc


def delete_session(db: Session, token: str) -> None:
    """Delete the session holding ``token``. Succeeds whether or not a row matched."""
    try:
        with transaction(db):
            db.query(UserSessionModel).filter(
                UserSessionModel.token == token
            ).delete(synchronize_session="fetch")
    except SQLAlchemyError as exc:
        raise StorageError("Failed to delete session") from exc

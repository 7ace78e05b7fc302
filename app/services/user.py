import re

from sqlalchemy.orm import Session

import app.repositories.user as user_repo
from app.errors import DomainValidationError
from app.schemas.user import UserPublic

# Optional sign and ASCII digits only, no surrounding whitespace
_INTEGER_ID = re.compile(r"[+-]?[0-9]+")
MAX_ID = 2**63 - 1


def _parse_id(user_id: str) -> int:
    if _INTEGER_ID.fullmatch(user_id):
        parsed_id = int(user_id)
        if -MAX_ID - 1 <= parsed_id <= MAX_ID:
            return parsed_id
    raise DomainValidationError(f'id "{user_id}" is not a valid integer')


def lookup_user(db: Session, user_id: str | None, email: str | None) -> UserPublic:
    """
    Get a user by ID or by email for sibling services. ID takes precedence.

    Raises:
        DomainValidationError: If neither key is given, or the ID is not a 64-bit integer.
        NotFoundError: If no user matches.
        StorageError: If the query fails.
    """
    if user_id is not None and user_id.strip():
        user = user_repo.get_user(db, user_id=_parse_id(user_id))
    elif email is not None and email.strip():
        user = user_repo.get_user(db, email=email)
    else:
        raise DomainValidationError("email empty/not found")

    return UserPublic.model_validate(user)

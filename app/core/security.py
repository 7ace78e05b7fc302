import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from passlib.context import CryptContext
from passlib.exc import MissingBackendError

from app.errors import CryptoUnavailableError, DomainValidationError

ACCESS_TOKEN_EXPIRE_MINUTES = 30
ALGORITHM = "HS256"
# Only the HMAC family is accepted on decode; "none" and asymmetric algorithms are rejected.
ALLOWED_ALGORITHMS = ["HS256", "HS384", "HS512"]

# bcrypt only reads this many bytes of the secret
MAX_PASSWORD_BYTES = 72

# Password hashing context; truncate_error makes passlib refuse long secrets instead of cutting them
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=10,
    bcrypt__truncate_error=True,
)


def _too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password.

    A malformed stored digest or a password longer than bcrypt can read counts as a mismatch.
    """
    if _too_long(plain_password):
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except MissingBackendError as exc:
        raise CryptoUnavailableError("Password hashing is unavailable") from exc
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """Hash a password into a self-describing bcrypt digest ($2b$10$<salt><hash>).

    Raises:
        DomainValidationError: If the password is over 72 bytes once UTF-8 encoded.
        CryptoUnavailableError: If no bcrypt backend can be loaded.
    """
    if _too_long(password):
        raise DomainValidationError(f"password longer than {MAX_PASSWORD_BYTES} bytes")
    try:
        return pwd_context.hash(password)
    except MissingBackendError as exc:
        raise CryptoUnavailableError("Password hashing is unavailable") from exc


def create_access_token(
    email: str,
    role: str,
    secret_key: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token binding email and role, expiring 30 minutes from now."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode: dict[str, Any] = {
        "email": email,
        "role": role,
        "exp": datetime.now(timezone.utc) + expires_delta,
        # Distinguishes tokens minted for the same user within the same second
        "jti": secrets.token_urlsafe(6),
    }
    return jwt.encode(to_encode, secret_key, algorithm=ALGORITHM)


def decode_token(token: str, secret_key: str) -> dict[str, str] | None:
    """
    Decode and verify a JWT access token.

    Returns the ``email`` and ``role`` claims, or None when the token is malformed,
    signed with a non-HMAC algorithm, expired, signed under another secret, or
    carries a blank email or role.
    """
    try:
        payload = jwt.decode(
            token,
            secret_key,
            algorithms=ALLOWED_ALGORITHMS,
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None

    claims = {}
    for name in ("email", "role"):
        value = payload.get(name)
        if value is None or not str(value).strip():
            return None
        claims[name] = str(value)
    return claims

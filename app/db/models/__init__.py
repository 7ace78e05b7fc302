from app.db.models.user import User
from app.db.models.session import UserSession

__all__ = ["User", "UserSession"]

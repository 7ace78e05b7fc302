from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class UserSession(Base):
    __tablename__ = "account_usersession"

    id = Column(Integer, primary_key=True, index=True)
    token = Column(String(255), unique=True, nullable=False)
    # unique=True is what keeps a user to a single live session
    user_id = Column(
        Integer,
        ForeignKey("account_user.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    user = relationship("User", back_populates="session")

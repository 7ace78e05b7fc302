from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class User(Base):
    __tablename__ = "account_user"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(100), nullable=False)
    full_name = Column(String(50), nullable=False)
    address = Column(String(100), nullable=False)
    phone_number = Column(String(20), nullable=False)
    role = Column(String(20), nullable=False)

    # At most one session per user; it is deleted along with the user
    session = relationship(
        "UserSession",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

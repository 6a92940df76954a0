"""
User credential record. Only the password hash is stored.
"""

from sqlalchemy import Column, Integer, String

from music_booking.db.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    first_name = Column(String(100), nullable=False, default="")
    last_name = Column(String(100), nullable=False, default="")
    middle_name = Column(String(100), nullable=False, default="")
    phone_number = Column(String(50), nullable=False, default="")
    hashed_password = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"

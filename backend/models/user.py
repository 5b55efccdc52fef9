"""User model definitions."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String

from backend.database import Base

ROLE_STUDENT = "student"
ROLE_INSTRUCTOR = "instructor"
ROLES = (ROLE_STUDENT, ROLE_INSTRUCTOR)


class User(Base):
    """Represents a registered student or instructor."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(50), unique=True, index=True, nullable=False)
    username = Column(String(50), nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)  # student/instructor
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

"""Course model definitions."""

from sqlalchemy import Column, Float, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from backend.database import Base
from backend.models.user import User  # noqa: F401

# The composite primary key makes the roster a set: a second insert of the
# same (course, student) pair fails instead of duplicating the member.
course_students = Table(
    "course_students",
    Base.metadata,
    Column("course_id", Integer, ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True),
    Column("student_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Course(Base):
    """Represents a course owned by a single instructor."""
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(50), nullable=False, index=True)
    description = Column(String(50), nullable=False)
    price = Column(Float, nullable=False)
    instructor_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    instructor = relationship("User", lazy="joined")
    students = relationship(
        "User",
        secondary=course_students,
        order_by="User.id",
        passive_deletes=True,
    )

    @property
    def student_ids(self) -> list[int]:
        return [student.id for student in self.students]

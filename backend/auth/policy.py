"""Authorization rules for course transitions.

Every rule is a pure predicate over immutable snapshots of the caller and the
course, so the rules can be checked without a database session. The
``require_*`` helpers raise the matching service error when a rule fails.
"""

from dataclasses import dataclass

from backend.core import errors
from backend.models.user import ROLE_INSTRUCTOR


@dataclass(frozen=True)
class Caller:
    id: int
    role: str

    @classmethod
    def from_user(cls, user) -> "Caller":
        return cls(id=user.id, role=user.role)


@dataclass(frozen=True)
class CourseState:
    id: int
    instructor_id: int
    student_ids: frozenset[int]

    @classmethod
    def from_course(cls, course) -> "CourseState":
        return cls(
            id=course.id,
            instructor_id=course.instructor_id,
            student_ids=frozenset(course.student_ids),
        )


def can_create_course(caller: Caller) -> bool:
    return caller.role == ROLE_INSTRUCTOR


def can_update_course(caller: Caller, course: CourseState) -> bool:
    return caller.id == course.instructor_id


def can_delete_course(caller: Caller, course: CourseState) -> bool:
    return caller.id == course.instructor_id


def can_enroll(caller: Caller, course: CourseState) -> bool:
    return caller.id not in course.student_ids


def can_drop_out(caller: Caller, course: CourseState) -> bool:
    return caller.id in course.student_ids


def require_create_course(caller: Caller) -> None:
    if not can_create_course(caller):
        raise errors.AuthorizationError(
            'Only instructors can publish new courses. Log in with an instructor account.'
        )


def require_update_course(caller: Caller, course: CourseState) -> None:
    if not can_update_course(caller, course):
        raise errors.AuthorizationError('Only the instructor of this course can edit it.')


def require_delete_course(caller: Caller, course: CourseState) -> None:
    if not can_delete_course(caller, course):
        raise errors.AuthorizationError('Only the instructor of this course can delete it.')


def require_drop_out(caller: Caller, course: CourseState) -> None:
    if not can_drop_out(caller, course):
        raise errors.AuthorizationError('Only students enrolled in this course can drop it.')

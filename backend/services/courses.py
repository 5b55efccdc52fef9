"""Course lifecycle: creation, lookups, edits, deletion and roster changes.

Each operation runs against the request's session and applies the rules in
``backend.auth.policy`` before touching the store. Roster changes are single
``INSERT``/``DELETE`` statements on ``course_students`` so two concurrent
enrollments cannot overwrite each other.
"""

import logging

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import delete, insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth import policy
from backend.core import errors
from backend.models.course import Course, course_students
from backend.models.user import User
from backend.schemas.course import CourseFields, CourseResponse, CourseUpdateRequest
from backend.services.users import STORE_FAILURE_MESSAGE, first_error_message

logger = logging.getLogger(__name__)

ENROLL_SUCCESS = 'success'
ENROLL_FAILED = 'failed'
COURSE_NOT_FOUND_MESSAGE = 'Course not found.'
# Largest value a 64-bit INTEGER primary key can hold.
MAX_ID = 2**63 - 1


def _validate_fields(**fields) -> CourseFields:
    try:
        return CourseFields(**fields)
    except SchemaValidationError as exc:
        raise errors.ValidationError(first_error_message(exc)) from exc


def _is_storable_id(value: int) -> bool:
    return 1 <= value <= MAX_ID


def _query(db: Session, *criteria) -> list[Course]:
    try:
        return db.query(Course).filter(*criteria).order_by(Course.id).all()
    except SQLAlchemyError as exc:
        logger.exception('Course lookup failed')
        raise errors.StoreError(STORE_FAILURE_MESSAGE) from exc


def _get_course(db: Session, course_id: int) -> Course:
    if not _is_storable_id(course_id):
        raise errors.NotFoundError(COURSE_NOT_FOUND_MESSAGE)

    try:
        course = db.get(Course, course_id)
    except SQLAlchemyError as exc:
        logger.exception('Failed to load course %s', course_id)
        raise errors.StoreError(STORE_FAILURE_MESSAGE) from exc

    if course is None:
        raise errors.NotFoundError(COURSE_NOT_FOUND_MESSAGE)
    return course


def create_course(db: Session, owner: User, title: str, description: str, price: float) -> Course:
    fields = _validate_fields(title=title, description=description, price=price)
    policy.require_create_course(policy.Caller.from_user(owner))

    course = Course(
        title=fields.title,
        description=fields.description,
        price=fields.price,
        instructor_id=owner.id,
    )
    try:
        db.add(course)
        db.commit()
        db.refresh(course)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to create course %r for instructor %s', fields.title, owner.id)
        raise errors.StoreError('Unable to create the course.') from exc

    logger.info('Instructor %s created course %s', owner.id, course.id)
    return course


def list_courses(db: Session) -> list[Course]:
    return _query(db)


def find_by_instructor(db: Session, instructor_id: int) -> list[Course]:
    if not _is_storable_id(instructor_id):
        return []
    return _query(db, Course.instructor_id == instructor_id)


def find_by_student(db: Session, student_id: int) -> list[Course]:
    if not _is_storable_id(student_id):
        return []
    return _query(db, Course.students.any(User.id == student_id))


def find_by_title(db: Session, title: str) -> list[Course]:
    return _query(db, Course.title == title)


def find_by_id(db: Session, course_id: int) -> Course:
    return _get_course(db, course_id)


def update_course(db: Session, course_id: int, caller: User, patch: dict) -> Course:
    course = _get_course(db, course_id)
    policy.require_update_course(policy.Caller.from_user(caller), policy.CourseState.from_course(course))

    try:
        changes = CourseUpdateRequest(**patch).model_dump(exclude_none=True)
    except SchemaValidationError as exc:
        raise errors.ValidationError(first_error_message(exc)) from exc

    merged = _validate_fields(
        title=changes.get('title', course.title),
        description=changes.get('description', course.description),
        price=changes.get('price', course.price),
    )

    try:
        course.title = merged.title
        course.description = merged.description
        course.price = merged.price
        db.commit()
        db.refresh(course)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to update course %s', course_id)
        raise errors.StoreError(STORE_FAILURE_MESSAGE) from exc

    logger.info('Instructor %s updated course %s', caller.id, course_id)
    return course


def delete_course(db: Session, course_id: int, caller: User) -> CourseResponse:
    """Delete a course and return what it looked like just before removal."""
    course = _get_course(db, course_id)
    policy.require_delete_course(policy.Caller.from_user(caller), policy.CourseState.from_course(course))

    snapshot = CourseResponse.model_validate(course)
    try:
        db.delete(course)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to delete course %s', course_id)
        raise errors.StoreError(STORE_FAILURE_MESSAGE) from exc

    logger.info('Instructor %s deleted course %s', caller.id, course_id)
    return snapshot


def enroll(db: Session, course_id: int, student: User) -> str:
    """Add ``student`` to the roster.

    Enrolling twice is not an error: the second call leaves the roster alone
    and reports ``failed``.
    """
    course = _get_course(db, course_id)
    if not policy.can_enroll(policy.Caller.from_user(student), policy.CourseState.from_course(course)):
        logger.info('User %s is already enrolled in course %s', student.id, course_id)
        return ENROLL_FAILED

    try:
        db.execute(insert(course_students).values(course_id=course_id, student_id=student.id))
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info('User %s was enrolled in course %s concurrently', student.id, course_id)
        return ENROLL_FAILED
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to enroll user %s in course %s', student.id, course_id)
        raise errors.StoreError(STORE_FAILURE_MESSAGE) from exc

    db.expire(course, ['students'])
    logger.info('User %s enrolled in course %s', student.id, course_id)
    return ENROLL_SUCCESS


def drop_out(db: Session, course_id: int, student: User) -> Course:
    course = _get_course(db, course_id)
    policy.require_drop_out(policy.Caller.from_user(student), policy.CourseState.from_course(course))

    try:
        result = db.execute(
            delete(course_students).where(
                course_students.c.course_id == course_id,
                course_students.c.student_id == student.id,
            )
        )
        if result.rowcount == 0:
            # Another request dropped the same membership first.
            db.rollback()
            raise errors.AuthorizationError('Only students enrolled in this course can drop it.')
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to drop user %s from course %s', student.id, course_id)
        raise errors.StoreError(STORE_FAILURE_MESSAGE) from exc

    db.expire(course, ['students'])
    logger.info('User %s dropped course %s', student.id, course_id)
    return course

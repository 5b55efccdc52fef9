import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from backend.auth.dependencies import get_current_user
from backend.core import errors
from backend.database import get_db
from backend.models.user import User
from backend.schemas.course import CourseFields, CourseResponse, CourseUpdateRequest
from backend.services import courses

logger = logging.getLogger(__name__)


def log_course_request(request: Request) -> None:
    logger.info('Handling course request %s %s', request.method, request.url.path)


router = APIRouter(
    tags=['courses'],
    dependencies=[Depends(log_course_request), Depends(get_current_user)],
)


def _course_list(message: str, found: list) -> dict:
    return {'message': message, 'courses': [CourseResponse.model_validate(course) for course in found]}


@router.get('/')
def list_courses(db: Session = Depends(get_db)):
    return _course_list('All courses.', courses.list_courses(db))


@router.get('/instructor/{instructor_id}')
def list_instructor_courses(instructor_id: int, db: Session = Depends(get_db)):
    return _course_list('Courses taught by this instructor.', courses.find_by_instructor(db, instructor_id))


@router.get('/student/{student_id}')
def list_student_courses(student_id: int, db: Session = Depends(get_db)):
    return _course_list('Courses this student is enrolled in.', courses.find_by_student(db, student_id))


@router.get('/findbyname/{name}')
def find_courses_by_name(name: str, db: Session = Depends(get_db)):
    return _course_list('Courses with this title.', courses.find_by_title(db, name))


@router.get('/{course_id}')
def get_course(course_id: int, db: Session = Depends(get_db)):
    course = courses.find_by_id(db, course_id)
    return {'message': 'Course found.', 'course': CourseResponse.model_validate(course)}


@router.post('/')
def create_course(
    data: CourseFields,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        course = courses.create_course(
            db,
            owner=current_user,
            title=data.title,
            description=data.description,
            price=data.price,
        )
    except errors.AuthorizationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc

    return {'message': 'Course saved.', 'course': CourseResponse.model_validate(course)}


@router.post('/enroll/{course_id}')
def enroll(
    course_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return {'result': courses.enroll(db, course_id, current_user)}


@router.patch('/dropOut/{course_id}')
def drop_out(
    course_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    course = courses.drop_out(db, course_id, current_user)
    return {'message': 'Dropped the course.', 'course': CourseResponse.model_validate(course)}


@router.patch('/{course_id}')
def update_course(
    course_id: int,
    data: CourseUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    course = courses.update_course(db, course_id, current_user, data.model_dump(exclude_none=True))
    return {'message': 'Course updated.', 'course': CourseResponse.model_validate(course)}


@router.delete('/{course_id}')
def delete_course(
    course_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    deleted = courses.delete_course(db, course_id, current_user)
    return {'message': 'Course deleted.', 'course': deleted}

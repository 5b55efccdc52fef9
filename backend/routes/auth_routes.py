import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from backend.core import errors
from backend.database import get_db
from backend.schemas.user import LoginRequest, RegisterRequest, UserResponse
from backend.services import users

logger = logging.getLogger(__name__)


def log_auth_request(request: Request) -> None:
    logger.info('Handling auth request %s %s', request.method, request.url.path)


router = APIRouter(tags=['auth'], dependencies=[Depends(log_auth_request)])


@router.get('/testAPI')
def test_api():
    return {'message': 'Auth route is connected.'}


@router.post('/register')
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    user = users.register(
        db,
        email=data.email,
        username=data.username,
        password=data.password,
        role=data.role,
    )
    return {'msg': 'User saved.', 'user': UserResponse.model_validate(user)}


@router.post('/login')
def login(data: LoginRequest, db: Session = Depends(get_db)):
    try:
        token, user = users.login(db, email=data.email, password=data.password)
    except errors.NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=exc.message) from exc

    return {
        'msg': 'Logged in.',
        'token': token,
        'token_type': 'bearer',
        'user': UserResponse.model_validate(user),
    }

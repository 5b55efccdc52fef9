"""Registration, login and token resolution."""

import logging

import jwt
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth import jwt_handler
from backend.auth.passwords import hash_password, verify_password
from backend.core import errors
from backend.models.user import User
from backend.schemas.user import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

STORE_FAILURE_MESSAGE = 'Database unavailable. Verify DATABASE_URL and database credentials.'


def first_error_message(exc: SchemaValidationError) -> str:
    error = exc.errors()[0]
    message = error.get('msg', 'Invalid input.')
    return message.removeprefix('Value error, ')


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def register(db: Session, email: str, username: str, password: str, role: str) -> User:
    try:
        data = RegisterRequest(email=email, username=username, password=password, role=role)
    except SchemaValidationError as exc:
        raise errors.ValidationError(first_error_message(exc)) from exc

    try:
        if get_user_by_email(db, data.email) is not None:
            raise errors.ConflictError('This email has already been registered.')

        user = User(
            email=data.email,
            username=data.username,
            hashed_password=hash_password(data.password),
            role=data.role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError as exc:
        # Lost a race with a concurrent registration of the same email.
        db.rollback()
        raise errors.ConflictError('This email has already been registered.') from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to save user %s', data.email)
        raise errors.StoreError(STORE_FAILURE_MESSAGE) from exc

    logger.info('Registered %s account %s', user.role, user.email)
    return user


def login(db: Session, email: str, password: str) -> tuple[str, User]:
    try:
        data = LoginRequest(email=email, password=password)
    except SchemaValidationError as exc:
        raise errors.ValidationError(first_error_message(exc)) from exc

    try:
        user = get_user_by_email(db, data.email)
    except SQLAlchemyError as exc:
        logger.exception('Failed to look up user %s', data.email)
        raise errors.StoreError(STORE_FAILURE_MESSAGE) from exc

    if user is None:
        raise errors.NotFoundError('This email has not been registered.')
    if not verify_password(data.password, user.hashed_password):
        logger.info('Rejected login for %s: wrong password', user.email)
        raise errors.AuthError('Incorrect password.')

    token = jwt_handler.create_access_token(user_id=user.id, email=user.email)
    return token, user


def authenticate(db: Session, token: str | None) -> User:
    if not token:
        raise errors.AuthError('Not authenticated')

    try:
        payload = jwt_handler.decode_access_token(token)
    except jwt.PyJWTError as exc:
        raise errors.AuthError('Invalid token') from exc

    try:
        user_id = int(payload['sub'])
    except (KeyError, TypeError, ValueError) as exc:
        raise errors.AuthError('Invalid token subject') from exc

    try:
        user = db.get(User, user_id)
    except SQLAlchemyError as exc:
        logger.exception('Failed to resolve token subject %s', user_id)
        raise errors.StoreError(STORE_FAILURE_MESSAGE) from exc

    if user is None:
        raise errors.AuthError('User not found')
    return user

import re

from pydantic import BaseModel, field_validator

from backend.models.user import ROLES

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_EMAIL_LENGTH = 6
MAX_EMAIL_LENGTH = 50
MIN_USERNAME_LENGTH = 3
MAX_USERNAME_LENGTH = 50
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_LENGTH = 255


def normalize_email(value: str) -> str:
    normalized = value.strip().lower()
    if not MIN_EMAIL_LENGTH <= len(normalized) <= MAX_EMAIL_LENGTH:
        raise ValueError(f'Email must be between {MIN_EMAIL_LENGTH} and {MAX_EMAIL_LENGTH} characters.')
    if not EMAIL_PATTERN.match(normalized):
        raise ValueError('Email must be a valid email address.')
    return normalized


def check_password(value: str) -> str:
    if not MIN_PASSWORD_LENGTH <= len(value) <= MAX_PASSWORD_LENGTH:
        raise ValueError(f'Password must be between {MIN_PASSWORD_LENGTH} and {MAX_PASSWORD_LENGTH} characters.')
    return value


class RegisterRequest(BaseModel):
    email: str
    username: str
    password: str
    role: str

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator('username')
    @classmethod
    def validate_username(cls, value: str) -> str:
        normalized = value.strip()
        if not MIN_USERNAME_LENGTH <= len(normalized) <= MAX_USERNAME_LENGTH:
            raise ValueError(
                f'Username must be between {MIN_USERNAME_LENGTH} and {MAX_USERNAME_LENGTH} characters.'
            )
        return normalized

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password(value)

    @field_validator('role')
    @classmethod
    def validate_role(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in ROLES:
            raise ValueError('Role must be either student or instructor.')
        return normalized


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password(value)


class UserResponse(BaseModel):
    id: int
    email: str
    username: str
    role: str

    class Config:
        from_attributes = True


class UserSummary(BaseModel):
    id: int
    username: str
    email: str

    class Config:
        from_attributes = True

from pydantic import BaseModel, field_validator

from backend.schemas.user import UserSummary

MIN_TITLE_LENGTH = 1
MAX_TITLE_LENGTH = 50
MIN_DESCRIPTION_LENGTH = 6
MAX_DESCRIPTION_LENGTH = 50
MIN_PRICE = 10
MAX_PRICE = 9999


def check_title(value: str) -> str:
    normalized = value.strip()
    if not MIN_TITLE_LENGTH <= len(normalized) <= MAX_TITLE_LENGTH:
        raise ValueError(f'Title must be between {MIN_TITLE_LENGTH} and {MAX_TITLE_LENGTH} characters.')
    return normalized


def check_description(value: str) -> str:
    normalized = value.strip()
    if not MIN_DESCRIPTION_LENGTH <= len(normalized) <= MAX_DESCRIPTION_LENGTH:
        raise ValueError(
            f'Description must be between {MIN_DESCRIPTION_LENGTH} and {MAX_DESCRIPTION_LENGTH} characters.'
        )
    return normalized


def check_price(value: float) -> float:
    if not MIN_PRICE <= value <= MAX_PRICE:
        raise ValueError(f'Price must be between {MIN_PRICE} and {MAX_PRICE}.')
    return value


class CourseFields(BaseModel):
    title: str
    description: str
    price: float

    @field_validator('title')
    @classmethod
    def validate_title(cls, value: str) -> str:
        return check_title(value)

    @field_validator('description')
    @classmethod
    def validate_description(cls, value: str) -> str:
        return check_description(value)

    @field_validator('price')
    @classmethod
    def validate_price(cls, value: float) -> float:
        return check_price(value)


class CourseUpdateRequest(BaseModel):
    """Partial course edit. The instructor and roster are not editable."""
    title: str | None = None
    description: str | None = None
    price: float | None = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, value: str | None) -> str | None:
        return None if value is None else check_title(value)

    @field_validator('description')
    @classmethod
    def validate_description(cls, value: str | None) -> str | None:
        return None if value is None else check_description(value)

    @field_validator('price')
    @classmethod
    def validate_price(cls, value: float | None) -> float | None:
        return None if value is None else check_price(value)


class CourseResponse(BaseModel):
    id: int
    title: str
    description: str
    price: float
    instructor: UserSummary
    students: list[int]

    class Config:
        from_attributes = True

    @field_validator('students', mode='before')
    @classmethod
    def flatten_students(cls, value):
        return [getattr(student, 'id', student) for student in value]

from datetime import datetime, timedelta, timezone

import jwt

from backend.core import config


def create_access_token(user_id: int, email: str, expires_minutes: int | None = None) -> str:
    now = datetime.now(timezone.utc)
    payload = {"sub": str(user_id), "email": email, "iat": now}
    expire_minutes = expires_minutes or config.JWT_EXPIRES_MINUTES
    if expire_minutes:
        payload["exp"] = now + timedelta(minutes=expire_minutes)
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    return jwt.decode(
        token,
        config.JWT_SECRET_KEY,
        algorithms=[config.JWT_ALGORITHM],
        options={"require": ["sub", "iat"]},
    )

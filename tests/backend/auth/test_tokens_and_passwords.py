import jwt
import pytest

from backend.auth import jwt_handler
from backend.auth.passwords import hash_password, verify_password
from backend.core import config


def test_access_token_binds_user_id_and_email() -> None:
    token = jwt_handler.create_access_token(user_id=7, email='alice@example.edu')

    payload = jwt_handler.decode_access_token(token)

    assert payload['sub'] == '7'
    assert payload['email'] == 'alice@example.edu'
    assert 'exp' not in payload


def test_access_token_expiry_is_opt_in() -> None:
    token = jwt_handler.create_access_token(user_id=7, email='alice@example.edu', expires_minutes=5)

    assert 'exp' in jwt_handler.decode_access_token(token)


def test_decode_rejects_token_signed_with_another_secret() -> None:
    forged = jwt.encode({'sub': '7', 'iat': 0}, 'not-the-secret', algorithm=config.JWT_ALGORITHM)

    with pytest.raises(jwt.InvalidSignatureError):
        jwt_handler.decode_access_token(forged)


def test_password_hash_is_not_plaintext_and_verifies() -> None:
    hashed = hash_password('secret123')

    assert hashed != 'secret123'
    assert verify_password('secret123', hashed)
    assert not verify_password('wrong-password', hashed)


def test_verify_password_returns_false_for_malformed_hash() -> None:
    assert not verify_password('secret123', 'not-a-hash')

import pytest

from hagwon.app.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


def test_password_hashing_not_plain():
    plain = "password123"
    hashed = get_password_hash(plain)
    assert hashed and hashed != plain


def test_verify_password():
    hashed = get_password_hash("secret")
    assert verify_password("secret", hashed)
    assert not verify_password("wrong", hashed)


def test_create_and_decode_token_contains_sub_and_exp():
    token = create_access_token("user-123")
    assert isinstance(token, str) and token
    payload = decode_access_token(token)
    assert payload.get("sub") == "user-123"
    assert "exp" in payload


def test_create_token_from_claims_dict():
    token = create_access_token({"sub": "user-456"})
    assert decode_access_token(token)["sub"] == "user-456"


def test_expired_token_raises_value_error():
    token = create_access_token("expired", expires_minutes=-1)
    with pytest.raises(ValueError, match="Expired token"):
        decode_access_token(token)


def test_invalid_token_raises_value_error():
    with pytest.raises(ValueError, match="Invalid token"):
        decode_access_token("invalid.token.value")

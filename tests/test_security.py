from __future__ import annotations

import jwt
import pytest

from auth import security

SECRET = "test-secret-that-is-long-enough-for-hs256"


def test_password_hash_round_trip():
    hashed = security.hash_password("correct horse")
    assert hashed != "correct horse"
    assert security.verify_password("correct horse", hashed)
    assert not security.verify_password("wrong horse", hashed)


def test_verify_password_rejects_empty_and_garbage():
    assert not security.verify_password("", "x")
    assert not security.verify_password("pw", "")
    assert not security.verify_password("pw", "not-a-bcrypt-hash")


def test_hash_password_rejects_empty():
    with pytest.raises(security.AuthSecurityError):
        security.hash_password("")


def test_access_token_round_trip(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", SECRET)
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MIN", "5")

    token, expires_in = security.build_access_token(user_id=3, username="jane")
    payload = security.decode_access_token(token)

    assert expires_in == 300
    assert payload["sub"] == "3"
    assert payload["username"] == "jane"
    assert payload["exp"] - payload["iat"] == 300


def test_expired_token_is_rejected(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", SECRET)
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MIN", "-1")

    token, _ = security.build_access_token(user_id=3, username="jane")
    with pytest.raises(security.AuthSecurityError, match="expired"):
        security.decode_access_token(token)


def test_token_with_wrong_secret_is_rejected(monkeypatch):
    token = jwt.encode({"sub": "1", "type": "access"}, "another-secret-that-is-long-enough-for-hs256", algorithm="HS256")
    monkeypatch.setenv("JWT_SECRET", SECRET)
    with pytest.raises(security.AuthSecurityError, match="Invalid access token"):
        security.decode_access_token(token)


def test_non_access_token_is_rejected(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", SECRET)
    token = jwt.encode({"sub": "1", "type": "refresh"}, SECRET, algorithm="HS256")
    with pytest.raises(security.AuthSecurityError, match="not an access token"):
        security.decode_access_token(token)

"""
Auth business logic.
"""

from __future__ import annotations

from fastapi import HTTPException, status

from users import repository

from . import schemas, security


def to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=int(user_row["id"]),
        username=str(user_row["username"]),
        email=str(user_row["email"]),
        admin=bool(user_row["admin"]),
        created=user_row["created"],
    )


async def register(payload: schemas.RegisterRequest) -> schemas.UserResponse:
    existing = await repository.find_conflicting_user(username=payload.username, email=payload.email)
    if existing is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username or email is already registered.",
        )

    password_hash = security.hash_password(payload.password)
    user_row = await repository.create_user(
        username=payload.username,
        email=payload.email,
        password_hash=password_hash,
    )
    return to_user_response(user_row)


async def login(payload: schemas.LoginRequest) -> schemas.LoginResponse:
    user_row = await repository.get_user_by_username(payload.username)
    if user_row is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
        )

    is_valid = security.verify_password(payload.password, str(user_row.get("password") or ""))
    if not is_valid:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
        )

    token, expires_in = security.build_access_token(
        user_id=int(user_row["id"]),
        username=str(user_row["username"]),
    )
    return schemas.LoginResponse(
        user=to_user_response(user_row),
        token=token,
        expires_in=expires_in,
    )


async def get_user_from_access_token(access_token: str) -> dict:
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject.isdigit():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid access token subject.",
        )

    user_row = await repository.get_user_by_id(int(subject))
    if user_row is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found.",
        )
    return user_row

"""
Registration and login endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from . import schemas, service

router = APIRouter()


@router.post("/users/register", status_code=status.HTTP_201_CREATED)
async def register(payload: schemas.RegisterRequest) -> schemas.UserResponse:
    return await service.register(payload)


@router.post("/users/login")
async def login(payload: schemas.LoginRequest) -> schemas.LoginResponse:
    return await service.login(payload)

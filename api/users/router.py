"""
User endpoints. Listing and admin changes require an admin.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from auth import dependencies as auth_dependencies
from auth import security
from auth.service import to_user_response

from . import repository, schemas

router = APIRouter()


@router.get("/users")
async def list_users(
    offset: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await repository.list_users(offset=offset, limit=limit)


@router.get("/users/me")
async def me(
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return to_user_response(current_user).model_dump()


@router.patch("/users/me")
async def update_current_user(
    request: schemas.UpdateMeRequest,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    password_hash = security.hash_password(request.password) if request.password else None
    row = await repository.update_user(
        int(current_user["id"]),
        email=request.email,
        password_hash=password_hash,
    )
    if row is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Nothing to update.")
    return to_user_response(row).model_dump()


@router.get("/users/{user_id}")
async def get_user(
    user_id: int,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    row = await repository.get_user_by_id(user_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
    return to_user_response(row).model_dump()


@router.patch("/users/{user_id}")
async def update_user(
    user_id: int,
    request: schemas.UpdateAdminRequest,
    current_user: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    if user_id == int(current_user["id"]) and not request.admin:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Admins cannot remove their own admin rights.",
        )

    row = await repository.set_admin(user_id, request.admin)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
    return to_user_response(row).model_dump()

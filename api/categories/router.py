"""
Category endpoints. Reads are public, writes require an admin.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from auth import dependencies as auth_dependencies

from . import repository, schemas

router = APIRouter()


@router.get("/categories")
async def list_categories(
    offset: str | None = Query(default=None),
    limit: str | None = Query(default=None),
) -> dict:
    return await repository.list_categories(offset=offset, limit=limit)


@router.post("/categories", status_code=status.HTTP_201_CREATED)
async def create_category(
    request: schemas.CategoryRequest,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    if await repository.get_category_by_name(request.name) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Category already exists.")
    return await repository.create_category(request.name)


@router.get("/categories/{category_id}")
async def get_category(category_id: int) -> dict:
    row = await repository.get_category(category_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found.")
    return row


@router.patch("/categories/{category_id}")
async def update_category(
    category_id: int,
    request: schemas.CategoryRequest,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    row = await repository.update_category(category_id, request.name)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found.")
    return row


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int,
    _: dict = Depends(auth_dependencies.require_admin),
) -> None:
    if not await repository.delete_category(category_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found.")

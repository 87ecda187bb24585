"""
Product endpoints. Reads are public, writes require an admin.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from auth import dependencies as auth_dependencies
from categories import repository as categories_repository

from . import repository, schemas

router = APIRouter()


@router.get("/products")
async def list_products(
    search: str = Query(default="", max_length=500),
    category: str = Query(default="", max_length=128),
    offset: str | None = Query(default=None),
    limit: str | None = Query(default=None),
) -> dict:
    return await repository.list_products(
        search=search,
        category=category,
        offset=offset,
        limit=limit,
    )


@router.post("/products", status_code=status.HTTP_201_CREATED)
async def create_product(
    request: schemas.CreateProductRequest,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    if await categories_repository.get_category(request.category) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category does not exist.")

    return await repository.create_product(
        name=request.name,
        price=request.price,
        description=request.description,
        image=request.image,
        category_id=request.category,
    )


@router.get("/products/{product_id}")
async def get_product(product_id: int) -> dict:
    row = await repository.get_product(product_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found.")
    return row


@router.patch("/products/{product_id}")
async def update_product(
    product_id: int,
    request: schemas.UpdateProductRequest,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    changes = request.changes()
    if not changes:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Nothing to update.")

    row = await repository.update_product(product_id, changes)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found.")
    return row


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: int,
    _: dict = Depends(auth_dependencies.require_admin),
) -> None:
    if not await repository.delete_product(product_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found.")

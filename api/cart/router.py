"""
Cart endpoints for the authenticated user.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter()


@router.get("/cart")
async def get_cart(
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.get_cart(int(current_user["id"]))


@router.post("/cart", status_code=status.HTTP_201_CREATED)
async def add_to_cart(
    request: schemas.AddToCartRequest,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.add_to_cart(
        int(current_user["id"]),
        product_id=request.product,
        quantity=request.quantity,
    )


@router.get("/cart/line/{line_id}")
async def get_cart_line(
    line_id: int,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.get_line(int(current_user["id"]), line_id)


@router.patch("/cart/line/{line_id}")
async def update_cart_line(
    line_id: int,
    request: schemas.UpdateLineRequest,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.update_line(int(current_user["id"]), line_id, quantity=request.quantity)


@router.delete("/cart/line/{line_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cart_line(
    line_id: int,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> None:
    await service.delete_line(int(current_user["id"]), line_id)

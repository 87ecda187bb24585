"""
Order endpoints for the authenticated user.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter()


@router.get("/orders")
async def list_orders(
    offset: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.list_orders(current_user, offset=offset, limit=limit)


@router.post("/orders", status_code=status.HTTP_201_CREATED)
async def create_order(
    request: schemas.CreateOrderRequest,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.create_order(current_user, name=request.name, address=request.address)


@router.get("/orders/{order_id}")
async def get_order(
    order_id: int,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.get_order(current_user, order_id)

"""
Order business logic.
"""

from __future__ import annotations

from fastapi import HTTPException, status

from cart import repository as cart_repository
from cart.service import with_lines

from . import repository


def _scope(current_user: dict) -> int | None:
    # Admins see every order.
    return None if bool(current_user.get("admin", False)) else int(current_user["id"])


async def list_orders(current_user: dict, *, offset=None, limit=None) -> dict:
    return await repository.list_orders(user_id=_scope(current_user), offset=offset, limit=limit)


async def create_order(current_user: dict, *, name: str, address: str) -> dict:
    cart = await cart_repository.get_cart(int(current_user["id"]))
    lines = await cart_repository.list_lines(int(cart["id"])) if cart is not None else []
    if not lines:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cart is empty.")

    order = await repository.place_order(int(cart["id"]), name=name, address=address)
    if order is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Cart was already ordered.")
    return with_lines(order, lines)


async def get_order(current_user: dict, order_id: int) -> dict:
    order = await repository.get_order(order_id, user_id=_scope(current_user))
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found.")
    lines = await cart_repository.list_lines(order_id)
    return with_lines(order, lines)

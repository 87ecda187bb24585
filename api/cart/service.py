"""
Cart business logic.
"""

from __future__ import annotations

from decimal import Decimal

from fastapi import HTTPException, status

from products import repository as products_repository

from . import repository


def with_lines(order_row: dict, lines: list[dict]) -> dict:
    total = sum((Decimal(line["total"]) for line in lines), Decimal("0"))
    return {**order_row, "lines": lines, "total": total}


async def get_cart(user_id: int) -> dict:
    cart = await repository.get_cart(user_id)
    if cart is None:
        return {"id": None, "user_id": user_id, "lines": [], "total": Decimal("0")}
    lines = await repository.list_lines(int(cart["id"]))
    return with_lines(cart, lines)


async def add_to_cart(user_id: int, *, product_id: int, quantity: int) -> dict:
    if await products_repository.get_product(product_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Product does not exist.")

    cart = await repository.get_cart(user_id)
    if cart is None:
        cart = await repository.create_cart(user_id)

    return await repository.add_line(
        order_id=int(cart["id"]),
        product_id=product_id,
        quantity=quantity,
    )


async def get_line(user_id: int, line_id: int) -> dict:
    line = await repository.get_cart_line(line_id, user_id=user_id)
    if line is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cart line not found.")
    return line


async def update_line(user_id: int, line_id: int, *, quantity: int) -> dict:
    await get_line(user_id, line_id)
    row = await repository.update_line_quantity(line_id, quantity)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cart line not found.")
    return row


async def delete_line(user_id: int, line_id: int) -> None:
    await get_line(user_id, line_id)
    if not await repository.delete_line(line_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cart line not found.")

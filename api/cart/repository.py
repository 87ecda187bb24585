"""
Cart persistence (raw SQL).

A cart is an `orders` row with `is_order = false`; each user has at most one.
"""

from __future__ import annotations

from typing import Any

from core import db

ORDER_COLUMNS = "id, user_id, is_order, name, address, created, updated"


async def get_cart(user_id: int) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {ORDER_COLUMNS}
        FROM orders
        WHERE user_id = $1
          AND is_order = false
        """,
        user_id,
    )


async def create_cart(user_id: int) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO orders (user_id, is_order)
        VALUES ($1, false)
        RETURNING {ORDER_COLUMNS}
        """,
        user_id,
    )
    if row is None:
        raise RuntimeError("Failed to create cart.")
    return row


async def list_lines(order_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT
          l.id,
          l.product_id,
          p.name,
          p.price,
          p.image,
          l.quantity,
          p.price * l.quantity AS total
        FROM order_lines l
        JOIN products p ON p.id = l.product_id
        WHERE l.order_id = $1
        ORDER BY l.id ASC
        """,
        order_id,
    )


async def add_line(*, order_id: int, product_id: int, quantity: int) -> dict:
    """
    Add a product to the cart; adding the same product again sums quantities.
    """
    row = await db.fetch_one(
        """
        INSERT INTO order_lines (order_id, product_id, quantity)
        VALUES ($1, $2, $3)
        ON CONFLICT (order_id, product_id) DO UPDATE
        SET quantity = order_lines.quantity + EXCLUDED.quantity
        RETURNING id, order_id, product_id, quantity
        """,
        order_id,
        product_id,
        quantity,
    )
    if row is None:
        raise RuntimeError("Failed to add cart line.")
    return row


async def get_cart_line(line_id: int, *, user_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT
          l.id,
          l.order_id,
          l.product_id,
          p.name,
          p.price,
          p.image,
          l.quantity,
          p.price * l.quantity AS total
        FROM order_lines l
        JOIN orders o ON o.id = l.order_id
        JOIN products p ON p.id = l.product_id
        WHERE l.id = $1
          AND o.user_id = $2
          AND o.is_order = false
        """,
        line_id,
        user_id,
    )


async def update_line_quantity(line_id: int, quantity: int) -> dict | None:
    result = await db.conditional_update("order_lines", line_id, ["quantity"], [quantity])
    if not result or not result.rows:
        return None
    return result.rows[0]


async def delete_line(line_id: int) -> bool:
    deleted = await db.execute(
        """
        DELETE FROM order_lines
        WHERE id = $1
        """,
        line_id,
    )
    return deleted > 0

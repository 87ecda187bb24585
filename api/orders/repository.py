"""
Order persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from cart.repository import ORDER_COLUMNS
from core import db


async def list_orders(*, user_id: int | None, offset: Any = None, limit: Any = None) -> dict[str, Any]:
    """
    Placed orders, newest first. `user_id=None` lists every user's orders.
    """
    if user_id is None:
        return await db.paged_query(
            f"""
            SELECT {ORDER_COLUMNS}
            FROM orders
            WHERE is_order = true
            ORDER BY created DESC, id DESC
            """,
            [],
            offset=offset,
            limit=limit,
        )

    return await db.paged_query(
        f"""
        SELECT {ORDER_COLUMNS}
        FROM orders
        WHERE is_order = true
          AND user_id = $1
        ORDER BY created DESC, id DESC
        """,
        [user_id],
        offset=offset,
        limit=limit,
    )


async def get_order(order_id: int, *, user_id: int | None) -> dict | None:
    if user_id is None:
        return await db.fetch_one(
            f"""
            SELECT {ORDER_COLUMNS}
            FROM orders
            WHERE id = $1
              AND is_order = true
            """,
            order_id,
        )

    return await db.fetch_one(
        f"""
        SELECT {ORDER_COLUMNS}
        FROM orders
        WHERE id = $1
          AND user_id = $2
          AND is_order = true
        """,
        order_id,
        user_id,
    )


async def place_order(cart_id: int, *, name: str, address: str) -> dict | None:
    """
    Turn a cart into an order. Returns None if the cart was already placed.
    """
    return await db.fetch_one(
        f"""
        UPDATE orders
        SET is_order = true,
            name = $2,
            address = $3,
            created = now(),
            updated = now()
        WHERE id = $1
          AND is_order = false
        RETURNING {ORDER_COLUMNS}
        """,
        cart_id,
        name.strip(),
        address.strip(),
    )

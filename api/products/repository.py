"""
Product persistence (raw SQL).
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from core import db

PRODUCT_SELECT = """
        SELECT
          p.id,
          p.name,
          p.price,
          p.description,
          p.image,
          p.category_id,
          c.name AS category,
          p.created,
          p.updated
        FROM products p
        JOIN categories c ON c.id = p.category_id
"""


async def list_products(
    *,
    search: str = "",
    category: str = "",
    offset: Any = None,
    limit: Any = None,
) -> dict[str, Any]:
    """
    Newest first, optionally filtered by free-text search and category name.
    """
    where: list[str] = []
    values: list[Any] = []

    search = (search or "").strip()
    if search:
        values.append(f"%{search}%")
        where.append(f"(p.name ILIKE ${len(values)} OR p.description ILIKE ${len(values)})")

    category = (category or "").strip()
    if category:
        values.append(category)
        where.append(f"lower(c.name) = lower(${len(values)})")

    wh = ("WHERE " + " AND ".join(where)) if where else ""
    return await db.paged_query(
        f"""
        {PRODUCT_SELECT}
        {wh}
        ORDER BY p.created DESC, p.id DESC
        """,
        values,
        offset=offset,
        limit=limit,
    )


async def get_product(product_id: int) -> dict | None:
    return await db.fetch_one(
        f"""
        {PRODUCT_SELECT}
        WHERE p.id = $1
        """,
        product_id,
    )


async def create_product(
    *,
    name: str,
    price: Decimal,
    description: str,
    image: str | None,
    category_id: int,
) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO products (name, price, description, image, category_id)
        VALUES ($1, $2, $3, $4, $5)
        RETURNING id, name, price, description, image, category_id, created, updated
        """,
        name.strip(),
        price,
        description,
        image,
        category_id,
    )
    if row is None:
        raise RuntimeError("Failed to create product.")
    return row


async def update_product(product_id: int, changes: dict[str, Any]) -> dict | None:
    """
    Apply the given column changes. Returns the updated row, or None if the
    product does not exist or nothing was given.
    """
    if not changes:
        return None

    fields = [*changes.keys(), "updated"]
    values = [*changes.values(), datetime.now(timezone.utc)]
    result = await db.conditional_update("products", product_id, fields, values)
    if not result or not result.rows:
        return None
    return result.rows[0]


async def delete_product(product_id: int) -> bool:
    deleted = await db.execute(
        """
        DELETE FROM products
        WHERE id = $1
        """,
        product_id,
    )
    return deleted > 0

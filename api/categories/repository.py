"""
Category persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db


async def list_categories(*, offset: Any = None, limit: Any = None) -> dict[str, Any]:
    return await db.paged_query(
        """
        SELECT id, name, created
        FROM categories
        ORDER BY id ASC
        """,
        [],
        offset=offset,
        limit=limit,
    )


async def get_category(category_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, name, created
        FROM categories
        WHERE id = $1
        """,
        category_id,
    )


async def get_category_by_name(name: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, name, created
        FROM categories
        WHERE lower(name) = lower($1)
        """,
        (name or "").strip(),
    )


async def create_category(name: str) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO categories (name)
        VALUES ($1)
        RETURNING id, name, created
        """,
        name.strip(),
    )
    if row is None:
        raise RuntimeError("Failed to create category.")
    return row


async def update_category(category_id: int, name: str) -> dict | None:
    result = await db.conditional_update("categories", category_id, ["name"], [name.strip()])
    if not result or not result.rows:
        return None
    return result.rows[0]


async def delete_category(category_id: int) -> bool:
    deleted = await db.execute(
        """
        DELETE FROM categories
        WHERE id = $1
        """,
        category_id,
    )
    return deleted > 0

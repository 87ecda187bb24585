"""
User persistence (raw SQL).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from core import db

# Never select the password hash into public listings.
PUBLIC_COLUMNS = "id, username, email, admin, created, updated"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def create_user(*, username: str, email: str, password_hash: str) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO users (username, email, password)
        VALUES ($1, $2, $3)
        RETURNING {PUBLIC_COLUMNS}
        """,
        username.strip(),
        normalize_email(email),
        password_hash,
    )
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def get_user_by_username(username: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {PUBLIC_COLUMNS}, password
        FROM users
        WHERE username = $1
        """,
        (username or "").strip(),
    )


async def find_conflicting_user(*, username: str, email: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {PUBLIC_COLUMNS}
        FROM users
        WHERE username = $1
           OR lower(email) = lower($2)
        LIMIT 1
        """,
        (username or "").strip(),
        normalize_email(email),
    )


async def get_user_by_id(user_id: int) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {PUBLIC_COLUMNS}
        FROM users
        WHERE id = $1
        """,
        user_id,
    )


async def list_users(*, offset: Any = None, limit: Any = None) -> dict[str, Any]:
    return await db.paged_query(
        f"""
        SELECT {PUBLIC_COLUMNS}
        FROM users
        ORDER BY id ASC
        """,
        [],
        offset=offset,
        limit=limit,
    )


async def update_user(user_id: int, *, email: str | None, password_hash: str | None) -> dict | None:
    """
    Update email and/or password. Returns None if nothing was given.
    """
    if not email and not password_hash:
        return None

    fields = ["email", "password", "updated"]
    values = [
        normalize_email(email) if email else None,
        password_hash,
        datetime.now(timezone.utc),
    ]
    # Drop the missing pairs so names and values stay aligned.
    pairs = [(f, v) for f, v in zip(fields, values) if v is not None]
    result = await db.conditional_update(
        "users",
        user_id,
        [f for f, _ in pairs],
        [v for _, v in pairs],
    )
    if not result or not result.rows:
        return None
    row = dict(result.rows[0])
    row.pop("password", None)
    return row


async def set_admin(user_id: int, admin: bool) -> dict | None:
    return await db.fetch_one(
        f"""
        UPDATE users
        SET admin = $2,
            updated = now()
        WHERE id = $1
        RETURNING {PUBLIC_COLUMNS}
        """,
        user_id,
        admin,
    )

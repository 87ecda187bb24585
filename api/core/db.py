"""
Async database access helpers (raw SQL) using asyncpg.

Every call opens its own connection and closes it before returning; there is
no pool. `DATABASE_URL` is read on each call.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Sequence
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from .diagnostics import QueryStats, format_elapsed
from .validation import is_bindable_value, is_field_name, to_non_negative_int_or_default

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0

# Identifiers are interpolated into SQL, so only these may be updated.
UPDATABLE_COLUMNS: dict[str, frozenset[str]] = {
    "users": frozenset({"email", "password", "updated"}),
    "categories": frozenset({"name"}),
    "products": frozenset({"name", "price", "description", "image", "category_id", "updated"}),
    "order_lines": frozenset({"quantity"}),
}

stats = QueryStats()


@dataclass
class QueryResult:
    rows: list[dict[str, Any]] = field(default_factory=list)
    rowcount: int = 0


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def reset_stats() -> None:
    """
    Called once on startup so the query counter starts from zero.
    """
    stats.reset()


async def _open_connection() -> asyncpg.Connection:
    return await asyncpg.connect(dsn=database_url())


@asynccontextmanager
async def connection() -> AsyncIterator[asyncpg.Connection]:
    conn = await _open_connection()
    try:
        yield conn
    finally:
        await conn.close()


def _parse_rowcount(status: str | None) -> int:
    # Command tags look like "SELECT 3", "UPDATE 1" or "INSERT 0 1".
    if not status:
        return 0
    last = status.rsplit(" ", 1)[-1]
    return int(last) if last.isdigit() else 0


def _log_query(sql: str, values: Sequence[Any]) -> None:
    number, elapsed = stats.tick()
    logger.info(
        "query count: %s - time since last query: %s\n%s\nvalues: %r",
        number,
        format_elapsed(elapsed),
        sql.strip(),
        list(values),
    )


async def query(sql: str, values: Sequence[Any] | None = None) -> QueryResult:
    """
    Execute one statement on a fresh connection and return its rows.

    Database errors are raised unchanged.
    """
    values = list(values or [])
    _log_query(sql, values)

    async with connection() as conn:
        statement = await conn.prepare(sql)
        records = await statement.fetch(*values)
        status = statement.get_statusmsg()

    return QueryResult(rows=[dict(r) for r in records], rowcount=_parse_rowcount(status))


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    result = await query(sql, args)
    return result.rows[0] if result.rows else None


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    result = await query(sql, args)
    return result.rows


async def execute(sql: str, *args: Any) -> int:
    """
    Run a statement (INSERT/UPDATE/DELETE). Returns the affected row count.
    """
    result = await query(sql, args)
    return result.rowcount


async def paged_query(
    sql: str,
    values: Sequence[Any] | None = None,
    *,
    offset: Any = None,
    limit: Any = None,
) -> dict[str, Any]:
    """
    Run `sql` with LIMIT/OFFSET placeholders appended after `values`.

    Invalid or negative offset/limit fall back to 0/10; zero is kept.
    """
    if values is None:
        values = []
    if not isinstance(values, (list, tuple)):
        raise TypeError("values should be a list")

    limit_position = len(values) + 1
    offset_position = len(values) + 2
    paged_sql = f"{sql} LIMIT ${limit_position} OFFSET ${offset_position}"

    limit_value = to_non_negative_int_or_default(limit, DEFAULT_LIMIT)
    offset_value = to_non_negative_int_or_default(offset, DEFAULT_OFFSET)

    result = await query(paged_sql, [*values, limit_value, offset_value])

    return {
        "limit": limit_value,
        "offset": offset_value,
        "items": result.rows,
    }


def _check_identifiers(table: str, fields: Sequence[str]) -> None:
    allowed = UPDATABLE_COLUMNS.get(table)
    if allowed is None:
        raise ValueError(f"table {table!r} is not updatable")
    unknown = [f for f in fields if f not in allowed]
    if unknown:
        raise ValueError(f"columns {unknown!r} are not updatable on {table!r}")


async def conditional_update(
    table: str,
    record_id: Any,
    fields: Sequence[Any],
    values: Sequence[Any],
) -> QueryResult | bool:
    """
    Update only the candidate fields/values that are primitives.

    Field names and values are filtered independently, not pairwise, so a
    dropped entry on one side shifts the other side out of alignment; the
    length check below is the only guard.

    Returns False when no field survives (nothing executed).
    """
    filtered_fields = [f for f in fields if is_field_name(f)]
    filtered_values = [v for v in values if is_bindable_value(v)]

    if not filtered_fields:
        return False

    if len(filtered_fields) != len(filtered_values):
        raise ValueError("fields and values must be of equal length")

    _check_identifiers(table, filtered_fields)

    # id is $1
    updates = [f"{name} = ${i + 2}" for i, name in enumerate(filtered_fields)]

    sql = f"""
        UPDATE {table}
          SET {', '.join(updates)}
        WHERE
          id = $1
        RETURNING *
        """
    query_values = [record_id, *filtered_values]

    logger.debug("conditional update %s %r", sql.strip(), query_values)

    return await query(sql, query_values)

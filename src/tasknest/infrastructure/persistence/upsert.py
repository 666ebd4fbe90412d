"""Atomic "insert if absent" across the supported dialects."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession


async def insert_if_absent(
    session: AsyncSession,
    model: type,
    values: dict[str, Any],
) -> bool:
    """Insert a row unless its primary key already exists.

    Uses ``ON CONFLICT DO NOTHING`` on SQLite and PostgreSQL so concurrent
    callers cannot both insert. Other dialects fall back to a read-then-insert.

    Returns:
        True if a row was inserted.
    """
    dialect = session.get_bind().dialect.name
    if dialect in ("sqlite", "postgresql"):
        insert = sqlite.insert if dialect == "sqlite" else postgresql.insert
        stmt = insert(model).values(**values).on_conflict_do_nothing()
        result = await session.execute(stmt)
        return result.rowcount > 0

    key_columns = [column.name for column in model.__table__.primary_key.columns]
    stmt = select(model).where(*(getattr(model, name) == values[name] for name in key_columns))
    if (await session.execute(stmt)).scalar_one_or_none() is not None:
        return False
    session.add(model(**values))
    await session.flush()
    return True

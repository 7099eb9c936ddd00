from datetime import date

from sqlalchemy import Column, Integer, String, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from core.sku import format_day, format_sku, generate_sku, parse_sku
from .database import Base
from .recipe import Recipe


class SkuSequence(Base):
    """Per-day recipe SKU counter. ``day`` is formatted YYYYMMDD."""

    __tablename__ = "sku_sequences"

    day = Column(String(8), primary_key=True)
    last_value = Column(Integer, nullable=False, default=0)


def _insert_for(db: AsyncSession):
    dialect = db.bind.dialect.name if db.bind is not None else "postgresql"
    if dialect == "sqlite":
        return sqlite_insert
    return pg_insert


async def allocate_sku(db: AsyncSession, today: date) -> str:
    """
    Reserve the next SKU for ``today`` with a single atomic upsert.

    The first reservation of a day is seeded from the most recent recipe so
    sequences that predate the counter table carry on where they left off.
    Runs inside the caller's transaction.
    """
    latest = (
        await db.execute(
            select(Recipe).order_by(Recipe.created_at.desc(), Recipe.id.desc()).limit(1)
        )
    ).scalar_one_or_none()
    # A fresh counter row starts from what the recipes alone would yield
    _, seed = parse_sku(generate_sku(today, latest))

    insert = _insert_for(db)
    table = SkuSequence.__table__
    stmt = (
        insert(table)
        .values(day=format_day(today), last_value=seed)
        .on_conflict_do_update(
            index_elements=[table.c.day],
            set_={"last_value": table.c.last_value + 1},
        )
        .returning(table.c.last_value)
    )
    sequence = (await db.execute(stmt)).scalar_one()
    return format_sku(today, sequence)

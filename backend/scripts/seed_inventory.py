import argparse
import asyncio
import logging
import sys
from pathlib import Path

"""
Seed the reference coffee-shop inventory catalog.

Prices are per `quantity` of the item's unit (kg, liter or pcs), e.g. Coffee
Bean costs 400000 per 1 kg.

Run from the repo root:
  python backend/scripts/seed_inventory.py --overwrite
"""

# Allow running from repo root by ensuring `backend/` is on sys.path
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from sqlalchemy import select  # noqa: E402

from db.database import async_session_maker, create_db_and_tables  # noqa: E402
from db.inventory.item import InventoryItem  # noqa: E402

logger = logging.getLogger("seed_inventory")

REFERENCE_CATALOG = [
    {"item_name": "Aren Sugar", "quantity": 1, "uom": "kg", "price_per_qty": 60000},
    {"item_name": "Milk", "quantity": 1, "uom": "liter", "price_per_qty": 20000},
    {"item_name": "Ice Cube", "quantity": 1, "uom": "kg", "price_per_qty": 5000},
    {"item_name": "Plastic Cup", "quantity": 25, "uom": "pcs", "price_per_qty": 12500},
    {"item_name": "Coffee Bean", "quantity": 1, "uom": "kg", "price_per_qty": 400000},
    {"item_name": "Mineral Water", "quantity": 1, "uom": "liter", "price_per_qty": 15000},
]


async def seed_inventory(overwrite: bool, dry_run: bool):
    await create_db_and_tables()

    async with async_session_maker() as session:
        res = await session.execute(select(InventoryItem))
        existing = {item.item_name: item for item in res.scalars().all()}

        created = 0
        updated = 0
        for row in REFERENCE_CATALOG:
            item = existing.get(row["item_name"])
            if item is None:
                session.add(InventoryItem(**row))
                created += 1
            elif overwrite:
                item.quantity = row["quantity"]
                item.uom = row["uom"]
                item.price_per_qty = row["price_per_qty"]
                updated += 1

        if dry_run:
            await session.rollback()
            logger.info(f"DRY RUN: would create {created} and update {updated} items")
            return

        await session.commit()
        logger.info(f"Created {created} items, updated {updated} items")


def main():
    logging.basicConfig(level=logging.INFO, format="[%(name)s] %(message)s")

    p = argparse.ArgumentParser()
    p.add_argument("--overwrite", action="store_true", help="Reset price and quantity of existing items")
    p.add_argument("--dry-run", action="store_true", help="Do not commit, just report what would change")
    args = p.parse_args()

    asyncio.run(seed_inventory(overwrite=args.overwrite, dry_run=args.dry_run))


if __name__ == "__main__":
    main()

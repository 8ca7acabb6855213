"""
Seed opening stock for a few demo resort products.

This script:
- Creates the ledger tables if they are missing.
- Records one IN movement per product id through the regular writer, so the
  stock counters and the log stay in step.

Run:
  python -m glamping_inventory.scripts.seed_inventory_demo

Optional env vars:
- SEED_PRODUCT_IDS (default: 1,2,3)
- SEED_OPENING_QTY (default: 20)
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import List

from glamping_inventory.core.log import configure_logging
from glamping_inventory.db.database import async_session_maker, create_db_and_tables
from glamping_inventory.db.inventory.store import LedgerStore
from glamping_inventory.services.inventory_service import InventoryService

logger = logging.getLogger("glamping_inventory.scripts.seed_inventory_demo")


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)).strip())
    except ValueError:
        return default


def _env_ids(name: str, default: str) -> List[int]:
    raw = os.getenv(name, default)
    return [int(part) for part in raw.split(",") if part.strip()]


async def main() -> None:
    configure_logging()
    product_ids = _env_ids("SEED_PRODUCT_IDS", "1,2,3")
    opening_qty = _env_int("SEED_OPENING_QTY", 20)

    await create_db_and_tables()
    service = InventoryService(LedgerStore(async_session_maker))

    for product_id in product_ids:
        result = await service.create_transaction(
            product_id,
            "IN",
            opening_qty,
            note="Opening stock",
            reference="SEED",
        )
        logger.info("Product %s seeded, stock is now %s", product_id, result.stock_after)


if __name__ == "__main__":
    asyncio.run(main())

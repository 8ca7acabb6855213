"""Database migration utilities"""
import logging

from sqlalchemy import case, func, select, update
from sqlalchemy.ext.asyncio import AsyncEngine

from glamping_inventory.db.inventory import InventoryStock, InventoryTransaction
from glamping_inventory.db.inventory.store import dialect_insert
from glamping_inventory.schemas.inventory import MOVEMENT_SIGN

logger = logging.getLogger(__name__)


async def sync_inventory_stock(engine: AsyncEngine) -> int:
    """Rebuild the materialized inventory_stock counters from the ledger.

    Needed once for ledgers that predate the counter table; afterwards every
    insert keeps the counter in step. Counter rows are upserted, never
    deleted, so a writer creating its lock row at the same time does not
    collide with the rebuild. Returns the number of products written.
    """
    signed_quantity = case(
        *[(InventoryTransaction.type == mtype, InventoryTransaction.quantity * sign)
          for mtype, sign in MOVEMENT_SIGN.items()],
        else_=0,
    )
    insert = dialect_insert(engine.dialect.name)

    async with engine.begin() as conn:
        result = await conn.execute(
            select(InventoryTransaction.product_id, func.sum(signed_quantity))
            .group_by(InventoryTransaction.product_id)
        )
        rows = [{"product_id": pid, "quantity": int(total or 0)} for pid, total in result.all()]

        # Counters with no ledger rows behind them are stale
        stale = update(InventoryStock).values(quantity=0)
        if rows:
            stale = stale.where(InventoryStock.product_id.not_in([r["product_id"] for r in rows]))
        await conn.execute(stale)

        if rows:
            stmt = insert(InventoryStock)
            stmt = stmt.on_conflict_do_update(
                index_elements=[InventoryStock.product_id],
                set_={"quantity": stmt.excluded.quantity},
            )
            await conn.execute(stmt, rows)

    logger.info("Rebuilt inventory_stock counters for %d products", len(rows))
    return len(rows)

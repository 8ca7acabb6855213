"""
SQLAlchemy-backed transaction store.

``LedgerStore`` hands out two kinds of scopes:

- ``read()``: one transaction for consistent reads (no locks taken).
- ``exclusive(product_id)``: one transaction holding a row lock on the
  product's ``inventory_stock`` row until commit/rollback. Writers for the
  same product queue up behind it; readers are never blocked.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Sequence, Tuple

from sqlalchemy import func, or_, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from glamping_inventory.schemas.inventory import (
    MOVEMENT_SIGN,
    InventoryTransactionFilters,
    InventoryTransactionRead,
    UserSummary,
)

from ..users import User
from .stock import InventoryStock
from .transaction import InventoryTransaction

logger = logging.getLogger(__name__)

_DIALECT_INSERT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def dialect_insert(dialect: str):
    """``insert`` construct with ``ON CONFLICT`` support for ``dialect``."""
    try:
        return _DIALECT_INSERT[dialect]
    except KeyError:
        raise RuntimeError(f"Inventory ledger does not support the {dialect!r} dialect") from None


def _to_read(row: InventoryTransaction) -> InventoryTransactionRead:
    return InventoryTransactionRead(
        id=row.id,
        product_id=row.product_id,
        type=row.type,
        quantity=row.quantity,
        note=row.note,
        reference=row.reference,
        created_at=row.created_at,
        created_by_id=row.created_by_id,
        created_by=UserSummary(**row.created_by.to_schema) if row.created_by else None,
    )


def _apply_filters(stmt, product_id: int, filters: InventoryTransactionFilters):
    stmt = stmt.where(InventoryTransaction.product_id == product_id)
    if filters.type:
        stmt = stmt.where(InventoryTransaction.type == filters.type)
    if filters.search:
        term = filters.search
        stmt = stmt.outerjoin(User, InventoryTransaction.created_by_id == User.id).where(
            or_(
                InventoryTransaction.note.icontains(term, autoescape=True),
                InventoryTransaction.reference.icontains(term, autoescape=True),
                User.first_name.icontains(term, autoescape=True),
                User.last_name.icontains(term, autoescape=True),
                User.email.icontains(term, autoescape=True),
            )
        )
    return stmt


class LedgerScope:
    """Store operations bound to one open session/transaction."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def sum_quantities(self, product_ids: Sequence[int]) -> List[Tuple[int, str, int]]:
        """Return ``(product_id, type, summed quantity)`` per group."""
        if not product_ids:
            return []
        res = await self.session.execute(
            select(
                InventoryTransaction.product_id,
                InventoryTransaction.type,
                func.sum(InventoryTransaction.quantity),
            )
            .where(InventoryTransaction.product_id.in_(list(product_ids)))
            .group_by(InventoryTransaction.product_id, InventoryTransaction.type)
        )
        return [(int(pid), mtype, int(total or 0)) for pid, mtype, total in res.all()]

    async def insert_transaction(
        self,
        *,
        product_id: int,
        type: str,
        quantity: int,
        note: Optional[str] = None,
        reference: Optional[str] = None,
        created_by_id: Optional[int] = None,
    ) -> InventoryTransactionRead:
        row = InventoryTransaction(
            product_id=product_id,
            type=type,
            quantity=quantity,
            note=note,
            reference=reference,
            created_by_id=created_by_id,
        )
        self.session.add(row)
        await self.session.flush()
        await self.session.refresh(row, attribute_names=["created_by"])

        await self.session.execute(
            update(InventoryStock)
            .where(InventoryStock.product_id == product_id)
            .values(quantity=InventoryStock.quantity + MOVEMENT_SIGN[type] * quantity)
        )
        return _to_read(row)

    async def count_transactions(self, product_id: int, filters: InventoryTransactionFilters) -> int:
        stmt = _apply_filters(select(func.count(InventoryTransaction.id)), product_id, filters)
        res = await self.session.execute(stmt)
        return int(res.scalar_one() or 0)

    async def fetch_transactions(
        self,
        product_id: int,
        filters: InventoryTransactionFilters,
        offset: int,
        limit: int,
    ) -> List[InventoryTransactionRead]:
        stmt = (
            _apply_filters(select(InventoryTransaction), product_id, filters)
            .options(selectinload(InventoryTransaction.created_by))
            .order_by(InventoryTransaction.created_at.desc(), InventoryTransaction.id.desc())
            .offset(offset)
            .limit(limit)
        )
        res = await self.session.execute(stmt)
        return [_to_read(row) for row in res.scalars().all()]

    async def lock_product(self, product_id: int) -> None:
        """Take the row lock serializing writers of ``product_id``.

        The counter row is created on first use; concurrent creators wait on
        the unique key and then fall through to ``FOR UPDATE``.
        """
        insert = dialect_insert(self.session.get_bind().dialect.name)

        await self.session.execute(
            insert(InventoryStock)
            .values(product_id=product_id, quantity=0)
            .on_conflict_do_nothing(index_elements=[InventoryStock.product_id])
        )
        await self.session.execute(
            select(InventoryStock.product_id)
            .where(InventoryStock.product_id == product_id)
            .with_for_update()
        )


class LedgerStore:
    def __init__(self, session_maker: async_sessionmaker):
        self.session_maker = session_maker

    @asynccontextmanager
    async def read(self) -> AsyncIterator[LedgerScope]:
        async with self.session_maker() as session:
            async with session.begin():
                yield LedgerScope(session)

    @asynccontextmanager
    async def exclusive(self, product_id: int) -> AsyncIterator[LedgerScope]:
        async with self.session_maker() as session:
            async with session.begin():
                scope = LedgerScope(session)
                await scope.lock_product(product_id)
                logger.debug("Locked inventory stock row for product %s", product_id)
                yield scope

from typing import Dict, Iterable, Optional

from glamping_inventory.schemas.inventory import (
    InventoryTransactionFilters,
    PaginatedInventoryTransactions,
    TransactionResult,
)
from glamping_inventory.services import ledger_query, transaction_writer
from glamping_inventory.services.stock_aggregator import stock_for_product, stock_for_products


class InventoryService:
    """Inventory ledger operations over an injected store."""

    def __init__(self, store):
        self.store = store

    async def compute_stock(self, product_ids: Iterable[int]) -> Dict[int, int]:
        ids = set(product_ids)
        if not ids:
            return {}
        async with self.store.read() as scope:
            return await stock_for_products(scope, ids)

    async def compute_stock_one(self, product_id: int) -> int:
        async with self.store.read() as scope:
            return await stock_for_product(scope, product_id)

    async def create_transaction(
        self,
        product_id: int,
        type: str,
        quantity,
        note: Optional[str] = None,
        reference: Optional[str] = None,
        actor_id: Optional[int] = None,
    ) -> TransactionResult:
        return await transaction_writer.create_transaction(
            self.store,
            product_id,
            type,
            quantity,
            note=note,
            reference=reference,
            actor_id=actor_id,
        )

    async def list_transactions(
        self,
        product_id: int,
        page: int,
        page_size: int,
        filters: Optional[InventoryTransactionFilters] = None,
    ) -> PaginatedInventoryTransactions:
        return await ledger_query.list_transactions(self.store, product_id, page, page_size, filters)

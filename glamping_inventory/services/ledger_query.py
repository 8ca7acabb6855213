import math
from typing import Optional

from glamping_inventory.schemas.inventory import (
    InventoryTransactionFilters,
    PaginatedInventoryTransactions,
)


def clamp_page(page: int, total_pages: int) -> int:
    """0 when there are no pages, else ``page`` bounded to ``[1, total_pages]``."""
    if total_pages == 0:
        return 0
    return min(max(page, 1), total_pages)


async def list_transactions(
    store,
    product_id: int,
    page: int,
    page_size: int,
    filters: Optional[InventoryTransactionFilters] = None,
) -> PaginatedInventoryTransactions:
    """Newest-first movement history of one product, one page at a time.

    A page past the end is clamped to the last page and returns its items.
    """
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    filters = filters or InventoryTransactionFilters()

    async with store.read() as scope:
        total_count = await scope.count_transactions(product_id, filters)
        total_pages = 0 if total_count == 0 else math.ceil(total_count / page_size)
        current_page = clamp_page(page, total_pages)
        if current_page == 0:
            items = []
        else:
            items = await scope.fetch_transactions(
                product_id,
                filters,
                offset=(current_page - 1) * page_size,
                limit=page_size,
            )

    return PaginatedInventoryTransactions(
        items=items,
        total_pages=total_pages,
        current_page=current_page,
    )

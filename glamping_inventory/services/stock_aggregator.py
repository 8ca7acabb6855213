"""
Stock is never stored as the source of truth: it is replayed from the
ledger as ``sum(sign(type) * quantity)`` per product.
"""

from typing import Dict, Iterable, Sequence, Tuple

from glamping_inventory.schemas.inventory import MOVEMENT_SIGN


def fold_stock(groups: Iterable[Tuple[int, str, int]], product_ids: Iterable[int]) -> Dict[int, int]:
    """Fold grouped ``(product_id, type, quantity)`` sums into net stock.

    Every id in ``product_ids`` is present in the result; products without
    movements map to 0.
    """
    stock: Dict[int, int] = {}
    for product_id, movement_type, quantity in groups:
        stock[product_id] = stock.get(product_id, 0) + MOVEMENT_SIGN[movement_type] * (quantity or 0)

    for product_id in product_ids:
        stock.setdefault(product_id, 0)
    return stock


async def stock_for_products(scope, product_ids: Iterable[int]) -> Dict[int, int]:
    ids: Sequence[int] = sorted(set(product_ids))
    if not ids:
        return {}
    return fold_stock(await scope.sum_quantities(ids), ids)


async def stock_for_product(scope, product_id: int) -> int:
    stock = await stock_for_products(scope, [product_id])
    return stock[product_id]

import logging
import math
from typing import Optional

from glamping_inventory.core.exceptions import InsufficientStock, InvalidQuantity
from glamping_inventory.schemas.inventory import MOVEMENT_SIGN, TransactionResult
from glamping_inventory.services.stock_aggregator import stock_for_product

logger = logging.getLogger(__name__)


def normalize_quantity(quantity) -> int:
    """Return ``abs(quantity)`` as an int, or raise :class:`InvalidQuantity`."""
    if isinstance(quantity, bool):
        raise InvalidQuantity(quantity)
    try:
        magnitude = abs(quantity)
        finite = math.isfinite(magnitude)
    except (TypeError, ValueError, OverflowError):
        raise InvalidQuantity(quantity) from None

    if not finite or magnitude <= 0 or magnitude != int(magnitude):
        raise InvalidQuantity(quantity)
    return int(magnitude)


async def create_transaction(
    store,
    product_id: int,
    type: str,
    quantity,
    note: Optional[str] = None,
    reference: Optional[str] = None,
    actor_id: Optional[int] = None,
) -> TransactionResult:
    """Append one movement to the ledger and return it with the new stock.

    The stock check and the insert run inside ``store.exclusive(product_id)``,
    so concurrent withdrawals of the same product are applied one at a time
    and stock never goes negative. Any failure leaves the ledger untouched.
    """
    if type not in MOVEMENT_SIGN:
        raise ValueError(f"Unknown inventory movement type: {type!r}")
    quantity = normalize_quantity(quantity)

    async with store.exclusive(product_id) as scope:
        current_stock = await stock_for_product(scope, product_id)

        if type == "OUT" and current_stock < quantity:
            logger.warning(
                "Rejected OUT of %s for product %s: only %s in stock",
                quantity, product_id, current_stock,
            )
            raise InsufficientStock(product_id, requested=quantity, available=current_stock)

        record = await scope.insert_transaction(
            product_id=product_id,
            type=type,
            quantity=quantity,
            note=note,
            reference=reference,
            created_by_id=actor_id,
        )
        stock_after = current_stock + MOVEMENT_SIGN[type] * quantity

    logger.info(
        "Recorded %s %s for product %s (transaction %s), stock %s -> %s",
        type, quantity, product_id, record.id, current_stock, stock_after,
    )
    return TransactionResult(transaction=record, stock_after=stock_after)

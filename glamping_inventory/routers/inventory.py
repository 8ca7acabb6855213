import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from glamping_inventory.core.config import settings
from glamping_inventory.core.exceptions import InventoryError
from glamping_inventory.db.database import async_session_maker
from glamping_inventory.db.inventory.store import LedgerStore
from glamping_inventory.schemas.inventory import (
    MOVEMENT_TYPES,
    InventoryTransactionCreate,
    InventoryTransactionCreated,
    InventoryTransactionFilters,
    PaginatedInventoryTransactions,
    ProductStock,
    StockMap,
)
from glamping_inventory.services.inventory_service import InventoryService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_inventory_service() -> InventoryService:
    return InventoryService(LedgerStore(async_session_maker))


def _parse_movement_type(value: Optional[str]) -> Optional[str]:
    # Unknown types are ignored rather than rejected
    if value in MOVEMENT_TYPES:
        return value
    return None


@router.get("/stock", response_model=StockMap)
async def get_stock_for_products(
    product_ids: List[int] = Query([]),
    service: InventoryService = Depends(get_inventory_service),
):
    stocks = await service.compute_stock(product_ids)
    return StockMap(stocks=stocks)


@router.get("/{product_id}/stock", response_model=ProductStock)
async def get_product_stock(
    product_id: int = Path(gt=0),
    service: InventoryService = Depends(get_inventory_service),
):
    stock = await service.compute_stock_one(product_id)
    return ProductStock(product_id=product_id, stock=stock)


@router.get("/{product_id}/transactions", response_model=PaginatedInventoryTransactions)
async def get_product_transactions(
    product_id: int = Path(gt=0),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.inventory_default_page_size, ge=1, le=settings.inventory_max_page_size),
    type: Optional[str] = None,
    search: Optional[str] = None,
    service: InventoryService = Depends(get_inventory_service),
):
    filters = InventoryTransactionFilters(type=_parse_movement_type(type), search=search)
    try:
        return await service.list_transactions(product_id, page, page_size, filters)
    except Exception:
        logger.exception("Failed to fetch inventory ledger for product %s", product_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="error.failedToFetchInventoryLedger",
        )


@router.post("/transactions", response_model=InventoryTransactionCreated, status_code=status.HTTP_201_CREATED)
async def create_inventory_transaction(
    payload: InventoryTransactionCreate,
    service: InventoryService = Depends(get_inventory_service),
):
    try:
        result = await service.create_transaction(
            payload.product_id,
            payload.type,
            payload.quantity,
            note=payload.note,
            reference=payload.reference,
            actor_id=payload.created_by_id,
        )
    except InventoryError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message_key)
    except Exception:
        logger.exception("Failed to create inventory transaction for product %s", payload.product_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="error.failedToCreateInventoryTransaction",
        )

    return InventoryTransactionCreated(
        message="message.inventoryTransactionCreated",
        transaction=result.transaction,
        stock=result.stock_after,
    )

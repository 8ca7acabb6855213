from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


InventoryMovementType = Literal["IN", "OUT", "ADJUSTMENT"]

MOVEMENT_TYPES = ("IN", "OUT", "ADJUSTMENT")

MOVEMENT_SIGN: Dict[str, int] = {
    "IN": 1,
    "OUT": -1,
    "ADJUSTMENT": 1,
}


class InventoryTransactionCreate(BaseModel):
    product_id: int = Field(gt=0)
    type: InventoryMovementType
    quantity: int = Field(gt=0)
    note: Optional[str] = Field(default=None, max_length=255)
    reference: Optional[str] = Field(default=None, max_length=255)
    created_by_id: Optional[int] = None

    @field_validator("note", "reference", mode="before")
    @classmethod
    def _strip_nullable(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = str(v).strip()
        return v or None


class InventoryTransactionFilters(BaseModel):
    type: Optional[InventoryMovementType] = None
    search: Optional[str] = None

    @field_validator("search")
    @classmethod
    def _strip_search(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class UserSummary(BaseModel):
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None


class InventoryTransactionRead(BaseModel):
    id: int
    product_id: int
    type: InventoryMovementType
    quantity: int
    note: Optional[str] = None
    reference: Optional[str] = None
    created_at: datetime
    created_by_id: Optional[int] = None
    created_by: Optional[UserSummary] = None


class TransactionResult(BaseModel):
    transaction: InventoryTransactionRead
    stock_after: int


class PaginatedInventoryTransactions(BaseModel):
    items: List[InventoryTransactionRead]
    total_pages: int
    current_page: int


class InventoryTransactionCreated(BaseModel):
    message: str
    transaction: InventoryTransactionRead
    stock: int


class ProductStock(BaseModel):
    product_id: int
    stock: int


class StockMap(BaseModel):
    stocks: Dict[int, int]

"""
Inventory ledger.

Models:
- InventoryTransaction (append-only movements; stock is replayed from these)
- InventoryStock (materialized quantity per product, also the writer's lock row)
"""

from .stock import InventoryStock
from .transaction import InventoryTransaction

__all__ = ["InventoryStock", "InventoryTransaction"]

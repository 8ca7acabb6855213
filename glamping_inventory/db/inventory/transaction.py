from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from ..database import Base
from ..users import User  # noqa: F401


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InventoryTransaction(Base):
    __tablename__ = "inventory_transactions"
    __table_args__ = (
        Index("ix_inventory_transactions_product_created", "product_id", "created_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Catalog product id, not validated here
    product_id = Column(Integer, nullable=False, index=True)

    type = Column(Text, nullable=False)  # 'IN' | 'OUT' | 'ADJUSTMENT'
    quantity = Column(Integer, nullable=False)  # always > 0
    note = Column(String(255), nullable=True)
    reference = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    created_by_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    created_by = relationship("User")

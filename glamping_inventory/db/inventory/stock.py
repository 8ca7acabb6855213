from sqlalchemy import Column, Integer

from ..database import Base


class InventoryStock(Base):
    __tablename__ = "inventory_stock"

    product_id = Column(Integer, primary_key=True, autoincrement=False)
    quantity = Column(Integer, nullable=False, default=0)

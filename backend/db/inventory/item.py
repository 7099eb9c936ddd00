from datetime import datetime

from sqlalchemy import Column, DateTime, Float, Integer, String

from ..database import Base


class InventoryItem(Base):
    """Catalog entry priced per ``quantity`` of ``uom`` (kg, liter or pcs)."""

    __tablename__ = "inventory"

    id = Column(Integer, primary_key=True, index=True)
    item_name = Column(String, nullable=False, unique=True, index=True)
    quantity = Column(Float, nullable=False, default=0)
    uom = Column(String, nullable=False)
    price_per_qty = Column(Float, nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    @property
    def to_schema(self):
        """Convert InventoryItem model to schema dictionary format"""
        return {
            "id": self.id,
            "item_name": self.item_name,
            "quantity": self.quantity,
            "uom": self.uom,
            "price_per_qty": self.price_per_qty,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

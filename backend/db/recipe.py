from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Float, Integer, String

from .database import Base


class Recipe(Base):
    """Recipe with its ingredient measurements and the COGS computed from inventory"""
    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    sku = Column(String, nullable=False, unique=True, index=True)
    number_of_cups = Column(Integer, nullable=False)
    # {"<inventory item name>": {"amount": 15, "unit": "g"}, ...}
    ingredients = Column(JSON, nullable=False, default=dict)
    cogs = Column(Float, nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    @property
    def to_schema(self):
        """Convert Recipe model to schema dictionary format"""
        return {
            "id": self.id,
            "sku": self.sku,
            "number_of_cups": self.number_of_cups,
            "ingredients": self.ingredients,
            "cogs": self.cogs,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @property
    def to_summary(self):
        return {
            "sku": self.sku,
            "cogs": self.cogs,
            "number_of_cups": self.number_of_cups,
        }

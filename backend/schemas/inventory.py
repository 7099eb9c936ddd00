from typing import Optional

from pydantic import BaseModel, Field, field_validator


class InventoryItemCreate(BaseModel):
    item_name: str
    quantity: float = Field(ge=0)
    uom: str
    price_per_qty: float = Field(ge=0)

    @field_validator("item_name", "uom")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("field is required")
        return v


class InventoryItemUpdate(BaseModel):
    item_name: Optional[str] = None
    quantity: Optional[float] = Field(default=None, ge=0)
    uom: Optional[str] = None
    price_per_qty: Optional[float] = Field(default=None, ge=0)

    @field_validator("item_name", "uom")
    @classmethod
    def _strip_optional(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("field must not be blank")
        return v

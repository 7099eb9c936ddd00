from typing import Dict

from pydantic import BaseModel, Field, field_validator


class Measurement(BaseModel):
    amount: float = Field(ge=0)
    unit: str  # g, kg, ml, liter, pcs


class RecipeInput(BaseModel):
    number_of_cups: int = Field(gt=0)
    ingredients: Dict[str, Measurement]

    @field_validator("ingredients")
    @classmethod
    def _not_empty(cls, v: Dict[str, Measurement]) -> Dict[str, Measurement]:
        if not v:
            raise ValueError("at least one ingredient is required")
        return v

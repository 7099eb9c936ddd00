"""
Recipe COGS calculation.

Inventory items are priced per ``quantity`` of their big unit (kg, liter or
pcs). Recipe measurements may use the matching small unit (g, ml), which is
converted with a factor of 1000 before pricing.
"""

import logging
from enum import Enum
from typing import Callable, Mapping, Optional, Protocol

from core.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class Unit(str, Enum):
    GRAM = "g"
    KILOGRAM = "kg"
    MILLILITER = "ml"
    LITER = "liter"
    PIECES = "pcs"


SMALL_UNITS = {Unit.GRAM, Unit.MILLILITER}
BIG_UNITS = {Unit.KILOGRAM, Unit.LITER}


class PricedItem(Protocol):
    item_name: str
    quantity: float
    price_per_qty: float


class MeasurementLike(Protocol):
    amount: float
    unit: str


CatalogLookup = Callable[[str], Optional[PricedItem]]


def normalize_unit(unit: str) -> Unit:
    """Map a free-text unit onto a supported Unit, case-insensitively."""
    try:
        return Unit((unit or "").strip().lower())
    except ValueError:
        raise ValidationError("invalid unit", field="unit")


def price_ingredient(amount: float, unit: str, item: PricedItem) -> float:
    """Cost of ``amount`` ``unit`` of ``item`` for a single produced unit."""
    normalized = normalize_unit(unit)
    quantity = item.quantity or 0
    price = item.price_per_qty or 0

    if normalized in SMALL_UNITS:
        if quantity == 0:
            raise ValidationError(
                f"item {item.item_name} has no quantity to price {normalized.value} against",
                field="quantity",
            )
        return amount * (price / (quantity * 1000))
    if normalized in BIG_UNITS:
        return amount * price
    # pcs
    if quantity > 0:
        return amount * (price / quantity)
    return 0.0


def compute_cogs(
    ingredients: Mapping[str, MeasurementLike],
    units_produced: int,
    lookup: CatalogLookup,
) -> float:
    """
    Total cost of producing ``units_produced`` units of a recipe.

    Args:
        ingredients: inventory item name -> measurement (amount + unit)
        units_produced: number of cups/units the recipe makes
        lookup: returns the InventoryItem for a name, or None if absent

    Raises:
        NotFoundError: an ingredient name is not in the catalog
        ValidationError: a measurement uses an unsupported unit
    """
    if units_produced < 1:
        raise ValidationError("number_of_cups must be a positive integer", field="number_of_cups")

    total = 0.0
    for name, measurement in ingredients.items():
        item = lookup(name)
        if item is None:
            raise NotFoundError(f"item {name} not found", field=name)

        item_cost = price_ingredient(measurement.amount, measurement.unit, item)
        logger.debug(f"{name}: {measurement.amount} {measurement.unit} -> {item_cost}")
        total += item_cost * units_produced

    return total


def catalog_lookup(items) -> CatalogLookup:
    """Build an exact-name lookup over already-loaded inventory items."""
    by_name = {item.item_name: item for item in items}
    return by_name.get

"""Tests for recipe COGS calculation."""

import pytest

from core.costing import Unit, catalog_lookup, compute_cogs, normalize_unit, price_ingredient
from core.errors import NotFoundError, ValidationError
from db.inventory.item import InventoryItem
from schemas.recipe import Measurement


def _item(name, quantity, uom, price):
    return InventoryItem(item_name=name, quantity=quantity, uom=uom, price_per_qty=price)


@pytest.fixture
def catalog(reference_catalog):
    return catalog_lookup([InventoryItem(**row) for row in reference_catalog])


@pytest.fixture
def coffee_ingredients(coffee_recipe):
    return {
        name: Measurement(**m) for name, m in coffee_recipe["ingredients"].items()
    }


def test_grams_and_kilograms_price_the_same():
    item = _item("Coffee Bean", 1, "kg", 100000)

    assert price_ingredient(1000, "g", item) == pytest.approx(100000)
    assert price_ingredient(1, "kg", item) == pytest.approx(100000)


def test_milliliters_and_liters_price_the_same():
    item = _item("Milk", 1, "liter", 20000)

    assert price_ingredient(500, "ml", item) == pytest.approx(10000)
    assert price_ingredient(0.5, "liter", item) == pytest.approx(10000)


def test_small_units_divide_by_inventory_quantity():
    item = _item("Sugar", 2, "kg", 30000)

    # 30000 per 2 kg -> 15 per gram
    assert price_ingredient(10, "g", item) == pytest.approx(150)


def test_pieces_use_price_per_piece():
    item = _item("Plastic Cup", 25, "pcs", 12500)

    assert price_ingredient(2, "pcs", item) == pytest.approx(1000)


def test_pieces_with_zero_quantity_cost_nothing():
    item = _item("Straw", 0, "pcs", 5000)

    assert price_ingredient(3, "pcs", item) == 0


def test_small_unit_with_zero_quantity_is_rejected():
    item = _item("Empty Jar", 0, "kg", 5000)

    with pytest.raises(ValidationError):
        price_ingredient(10, "g", item)


@pytest.mark.parametrize("raw,expected", [
    ("g", Unit.GRAM),
    ("KG", Unit.KILOGRAM),
    (" Ml ", Unit.MILLILITER),
    ("Liter", Unit.LITER),
    ("PCS", Unit.PIECES),
])
def test_normalize_unit_is_case_insensitive(raw, expected):
    assert normalize_unit(raw) == expected


@pytest.mark.parametrize("raw", ["oz", "litre", "", "cups"])
def test_normalize_unit_rejects_unknown_units(raw):
    with pytest.raises(ValidationError) as exc_info:
        normalize_unit(raw)
    assert exc_info.value.message == "invalid unit"


def test_reference_recipe_costs_13250(catalog, coffee_ingredients):
    assert compute_cogs(coffee_ingredients, 1, catalog) == pytest.approx(13250)


def test_doubling_cups_doubles_cogs(catalog, coffee_ingredients):
    assert compute_cogs(coffee_ingredients, 2, catalog) == pytest.approx(26500)


@pytest.mark.parametrize("cups", [1, 3, 7, 20])
def test_cogs_is_linear_in_units_produced(catalog, coffee_ingredients, cups):
    single = compute_cogs(coffee_ingredients, cups, catalog)
    double = compute_cogs(coffee_ingredients, cups * 2, catalog)

    assert double == pytest.approx(2 * single)


def test_unknown_ingredient_raises_not_found(catalog):
    ingredients = {
        "Milk": Measurement(amount=100, unit="ml"),
        "Vanilla Syrup": Measurement(amount=10, unit="ml"),
    }

    with pytest.raises(NotFoundError) as exc_info:
        compute_cogs(ingredients, 1, catalog)
    assert exc_info.value.message == "item Vanilla Syrup not found"


def test_invalid_unit_raises_validation_error(catalog):
    ingredients = {"Milk": Measurement(amount=1, unit="cup")}

    with pytest.raises(ValidationError):
        compute_cogs(ingredients, 1, catalog)


def test_lookup_is_exact_name_match(catalog):
    ingredients = {"milk": Measurement(amount=100, unit="ml")}

    with pytest.raises(NotFoundError):
        compute_cogs(ingredients, 1, catalog)


def test_zero_priced_catalog_yields_zero():
    lookup = catalog_lookup([_item("Water", 1, "liter", 0)])

    assert compute_cogs({"Water": Measurement(amount=200, unit="ml")}, 4, lookup) == 0


def test_units_produced_must_be_positive(catalog, coffee_ingredients):
    with pytest.raises(ValidationError):
        compute_cogs(coffee_ingredients, 0, catalog)

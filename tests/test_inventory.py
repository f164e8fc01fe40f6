"""Inventory item operations and category attribute validation."""

from __future__ import annotations

from decimal import Decimal

import pytest

from core.exceptions import ItemNotFound, ValidationError
from inventory.models import InventoryItem
from inventory.services.items import create_item, delete_item, item_as_dict, list_items
from inventory.specs import ElectronicsSpecs, FmcgSpecs, GrocerySpecs, OtherSpecs, parse_specs

from tests.helpers import D


def test_parse_fmcg_specs_coerces_numbers():
    specs = parse_specs("FMCG", {"cartons": "12", "items_per_carton": 24})

    assert specs == FmcgSpecs(cartons=12, items_per_carton=24)


def test_parse_grocery_specs_uses_decimal_weight():
    specs = parse_specs("Grocery", {"bags": 3, "weight_per_bag": "25.5"})

    assert specs == GrocerySpecs(bags=3, weight_per_bag=Decimal("25.5"))


def test_electronics_accepts_legacy_warranty_key():
    assert parse_specs("Electronics", {"brand": "Voltas", "warranty": "12"}) == ElectronicsSpecs("Voltas", 12)


def test_other_keeps_arbitrary_attributes():
    assert parse_specs("Other", {"colour": "red"}) == OtherSpecs({"colour": "red"})


@pytest.mark.parametrize(
    "category, raw",
    [
        ("Garments", {"warranty_months": 6}),
        ("FMCG", {"cartons": "many"}),
        ("FMCG", {"cartons": -1}),
        ("Grocery", {"weight_per_bag": "x"}),
        ("Toys", {}),
        ("Other", ["not", "a", "map"]),
    ],
)
def test_parse_specs_rejects_bad_shapes(category, raw):
    with pytest.raises(ValidationError):
        parse_specs(category, raw)


@pytest.mark.django_db
def test_create_item_sets_opening_quantity_and_specs():
    item = create_item(
        item_name="Biscuits",
        category="FMCG",
        hsn_sac="1905",
        quantity="40",
        rate="12.50",
        specs={"cartons": "2", "items_per_carton": "20"},
    )

    stored = InventoryItem.objects.get(pk=item.pk)
    assert stored.quantity == stored.opening_quantity == D("40.00")
    assert stored.specs == {"cartons": 2, "items_per_carton": 20}
    assert stored.typed_specs == FmcgSpecs(2, 20)


@pytest.mark.django_db
def test_create_item_allows_zero_opening_stock():
    item = create_item(item_name="New line", category="Other", quantity=0, rate="1")

    assert item.quantity == D("0")


@pytest.mark.django_db
@pytest.mark.parametrize("missing", ["item_name", "category", "quantity", "rate"])
def test_create_item_requires_fields(missing):
    kwargs = {"item_name": "Soap", "category": "FMCG", "quantity": "1", "rate": "1"}
    kwargs[missing] = None

    with pytest.raises(ValidationError) as excinfo:
        create_item(**kwargs)

    assert missing in excinfo.value.fields
    assert InventoryItem.objects.count() == 0


@pytest.mark.django_db
def test_list_items_expands_specs(make_item):
    make_item("Kurta", category="Garments", specs={"type": "Cotton", "rack": "A1"})

    [data] = [item_as_dict(item) for item in list_items()]

    assert data["item_name"] == "Kurta"
    assert data["specs"] == {"type": "Cotton", "rack": "A1"}


@pytest.mark.django_db
def test_delete_unknown_item():
    with pytest.raises(ItemNotFound):
        delete_item(31337)

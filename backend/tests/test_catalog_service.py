"""
Tests for the catalog and inventory indexes.
"""

import json

import pytest

from conftest import make_item
from mixlab.models.recommendation import InventoryRecord
from mixlab.services.catalog_service import Catalog, CatalogError, InventorySnapshot
from mixlab.utils.constants import CATEGORIES


# ==================== Built-in catalog ====================

def test_default_catalog_contents(default_catalog):
    assert len(default_catalog) == 58
    assert len(default_catalog.recipes) == 15
    assert set(default_catalog.categories()) <= set(CATEGORIES)
    assert default_catalog.brands()[0] == "Musthave"


def test_default_catalog_ids_are_unique(default_catalog):
    ids = [item.id for item in default_catalog]
    assert len(ids) == len(set(ids))


def test_strongest_item_is_present(default_catalog):
    assert "ds1" in default_catalog
    assert default_catalog.get("ds1").brand == "Darkside"


# ==================== Lookups ====================

def test_lookups(fixture_catalog):
    berry1 = fixture_catalog.get("berry1")
    assert fixture_catalog.find("alpha", " berry1 ") is berry1
    assert fixture_catalog.find_by_flavor("Berry1") is berry1
    assert fixture_catalog.get("nope") is None
    assert fixture_catalog.find("Beta", "BERRY1") is None


def test_resolve_requires_exact_brand_when_given(fixture_catalog):
    assert fixture_catalog.resolve("CITRUS2", "Beta").id == "citrus2"
    assert fixture_catalog.resolve("CITRUS2", "Alpha") is None
    assert fixture_catalog.resolve("CITRUS2").id == "citrus2"


def test_by_category_keeps_catalog_order(fixture_catalog):
    assert [i.id for i in fixture_catalog.by_category("mint")] == ["mint1", "mint2"]
    assert fixture_catalog.by_category("tropical") == ()


def test_recipe_lookup(fixture_catalog):
    assert fixture_catalog.recipe("r-fresh").name == "Fresh Berry"
    assert fixture_catalog.recipe("r-missing") is None


def test_duplicate_ids_rejected():
    with pytest.raises(CatalogError):
        Catalog([make_item("a", "berry"), make_item("a", "mint")])


def test_invalid_record_rejected():
    with pytest.raises(CatalogError):
        Catalog.from_records([{"id": "x", "brand": "B", "flavor": "F"}], [])


# ==================== JSON files ====================

def test_from_json(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({
        "tobaccos": [
            {"id": "a1", "brand": "A", "flavor": "Apple", "strength": 3,
             "heat_resistance": 4, "category": "fruit", "pairs_with": ["mint"]},
            {"id": "m1", "brand": "A", "flavor": "Mint", "strength": 6,
             "heat_resistance": 7, "category": "mint", "pairs_with": ["fruit"]},
        ],
        "recipes": [],
    }))
    catalog = Catalog.from_json(str(path))
    assert len(catalog) == 2
    assert catalog.get("m1").category == "mint"


@pytest.mark.parametrize("content", ["not json", json.dumps([]), json.dumps({"recipes": []})])
def test_from_json_rejects_bad_files(tmp_path, content):
    path = tmp_path / "catalog.json"
    path.write_text(content)
    with pytest.raises(CatalogError):
        Catalog.from_json(str(path))


def test_from_json_missing_file(tmp_path):
    with pytest.raises(CatalogError):
        Catalog.from_json(str(tmp_path / "missing.json"))


# ==================== Inventory ====================

def test_inventory_lookup_by_id_then_name(fixture_catalog):
    snapshot = InventorySnapshot([
        InventoryRecord(item_id="berry1", brand="Alpha", flavor="BERRY1", quantity_grams=40),
        InventoryRecord(brand="alpha", flavor="citrus1", quantity_grams=15),
    ])
    assert snapshot.quantity_for(fixture_catalog.get("berry1")) == 40
    assert snapshot.quantity_for(fixture_catalog.get("citrus1")) == 15
    assert snapshot.quantity_for(fixture_catalog.get("mint1")) == 0
    assert snapshot.in_stock(fixture_catalog.get("citrus1"))
    assert not snapshot.in_stock(fixture_catalog.get("mint1"))
    assert not snapshot.has_record(fixture_catalog.get("mint1"))


def test_inventory_sums_repeated_records(fixture_catalog):
    snapshot = InventorySnapshot([
        InventoryRecord(item_id="berry1", brand="Alpha", flavor="BERRY1", quantity_grams=40),
        InventoryRecord(item_id="berry1", brand="Alpha", flavor="BERRY1", quantity_grams=10),
    ])
    assert snapshot.quantity_for(fixture_catalog.get("berry1")) == 50


def test_from_optional():
    assert InventorySnapshot.from_optional(None) is None
    empty = InventorySnapshot.from_optional([])
    assert empty is not None and len(empty) == 0
    assert InventorySnapshot.from_optional(empty) is empty

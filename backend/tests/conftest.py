"""
Pytest configuration and shared fixtures.

Fixtures are reusable test setup that can be injected into tests.
"""

import pytest

from mixlab.models.blend import BlendItem
from mixlab.models.catalog import CatalogItem, PresetRecipe
from mixlab.models.recommendation import InventoryRecord
from mixlab.services.blend_normalizer import BlendNormalizer, CapTable
from mixlab.services.catalog_service import Catalog
from mixlab.services.compatibility_scorer import CompatibilityScorer
from mixlab.services.profile_aggregator import ProfileAggregator
from mixlab.services.setup_advisor import SetupAdvisor


def make_item(item_id, category, strength=5, heat=5, pairs=(), brand="Test", flavor=None):
    """Hand-written catalog tobacco."""
    return CatalogItem(
        id=item_id,
        brand=brand,
        flavor=flavor or item_id.upper(),
        strength=strength,
        heat_resistance=heat,
        category=category,
        pairs_with=list(pairs),
    )


@pytest.fixture
def default_catalog():
    """Catalog built from the built-in reference data."""
    return Catalog.default()


@pytest.fixture
def fixture_items():
    """
    Small catalog covering every pairing relationship.

    - berry/citrus items list each other (mutual)
    - dessert lists berry but not the other way round (one way)
    - spice and citrus ignore each other (clash)
    - two mint items, one of them also under the strong-item cap
    """
    return [
        make_item("berry1", "berry", strength=5, heat=6, pairs=["citrus", "mint"], brand="Alpha"),
        make_item("berry2", "berry", strength=4, heat=5, pairs=["citrus", "mint"], brand="Beta"),
        make_item("citrus1", "citrus", strength=6, heat=7, pairs=["berry", "mint"], brand="Alpha"),
        make_item("citrus2", "citrus", strength=8, heat=8, pairs=["berry"], brand="Beta"),
        make_item("mint1", "mint", strength=7, heat=8, pairs=["berry", "citrus"], brand="Alpha"),
        make_item("mint2", "mint", strength=9, heat=9, pairs=["berry", "citrus"], brand="Beta"),
        make_item("dessert1", "dessert", strength=2, heat=3, pairs=["berry"], brand="Alpha"),
        make_item("spice1", "spice", strength=9, heat=9, pairs=["dessert"], brand="Gamma"),
    ]


@pytest.fixture
def fixture_recipes():
    return [
        PresetRecipe(
            id="r-fresh",
            name="Fresh Berry",
            ingredients=[
                {"flavor": "BERRY1", "brand": "Alpha", "percent": 50, "category": "berry"},
                {"flavor": "CITRUS1", "brand": "Alpha", "percent": 30, "category": "citrus"},
                {"flavor": "MINT1", "brand": "Alpha", "percent": 20, "category": "mint"},
            ],
            popularity=5,
        ),
        PresetRecipe(
            id="r-dessert",
            name="Spiced Dessert",
            ingredients=[
                {"flavor": "DESSERT1", "brand": "Alpha", "percent": 60, "category": "dessert"},
                {"flavor": "SPICE1", "brand": "Gamma", "percent": 40, "category": "spice"},
            ],
            popularity=2,
        ),
        PresetRecipe(
            id="r-ghost",
            name="Discontinued",
            ingredients=[
                {"flavor": "Ghost Berry", "brand": "Nobody", "percent": 70, "category": "berry"},
                {"flavor": "CITRUS2", "brand": "Beta", "percent": 30, "category": "citrus"},
            ],
            popularity=3,
        ),
    ]


@pytest.fixture
def fixture_catalog(fixture_items, fixture_recipes):
    """Small hand-written catalog."""
    return Catalog(fixture_items, fixture_recipes)


@pytest.fixture
def caps():
    """Mint capped at 25%, mint2 additionally capped at 10%."""
    return CapTable(categories={"mint": 25}, items={"mint2": 10})


@pytest.fixture
def normalizer(caps):
    return BlendNormalizer(caps)


@pytest.fixture
def scorer():
    return CompatibilityScorer(max_details=10)


@pytest.fixture
def aggregator():
    return ProfileAggregator()


@pytest.fixture
def advisor():
    return SetupAdvisor()


@pytest.fixture
def blend_of(fixture_catalog):
    """
    Build a blend from (id, percent) pairs.

    Usage in tests:
        def test_something(blend_of):
            blend = blend_of(("berry1", 60), ("citrus1", 40))
    """
    def _build(*pairs):
        return [BlendItem(item=fixture_catalog.get(i), percent=p) for i, p in pairs]
    return _build


@pytest.fixture
def inventory_of():
    """
    Build inventory records for catalog items.

    Usage in tests:
        records = inventory_of(catalog, {"berry1": 100, "citrus1": 0})
    """
    def _build(catalog, quantities):
        records = []
        for item_id, grams in quantities.items():
            item = catalog.get(item_id)
            records.append(InventoryRecord(
                item_id=item_id,
                brand=item.brand,
                flavor=item.flavor,
                quantity_grams=grams,
            ))
        return records
    return _build

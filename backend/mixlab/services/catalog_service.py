"""
Catalog and inventory lookup structures.

The catalog is built once at startup and passed into every engine service,
so nothing in the engine reads module-level reference data directly. It
indexes tobaccos by id, by brand+flavor, by flavor and by category.

InventorySnapshot wraps the inventory collaborator's records in the same
way: a read-only index queried by catalog id first, then by brand+flavor.
"""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from mixlab.models.catalog import CatalogItem, PresetRecipe
from mixlab.models.recommendation import InventoryRecord
from mixlab.utils.constants import MIX_RECIPES, TOBACCOS
from mixlab.utils.helpers import brand_flavor_key, normalize_name

# Configure logging
logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when catalog content is invalid."""


class Catalog:
    """
    Immutable, indexed catalog of tobaccos and preset recipes.

    Attributes:
        items: Tobaccos in catalog order
        recipes: Preset recipes in catalog order
    """

    def __init__(
        self,
        items: Iterable[CatalogItem],
        recipes: Iterable[PresetRecipe] = ()
    ):
        """
        Build the catalog indexes.

        Args:
            items: Catalog tobaccos, in display order
            recipes: Preset recipes, in display order

        Raises:
            CatalogError: On duplicate tobacco or recipe ids
        """
        self._items: Tuple[CatalogItem, ...] = tuple(items)
        self._recipes: Tuple[PresetRecipe, ...] = tuple(recipes)

        by_id: Dict[str, CatalogItem] = {}
        by_brand_flavor: Dict[Tuple[str, str], CatalogItem] = {}
        by_flavor: Dict[str, List[CatalogItem]] = {}
        by_category: Dict[str, List[CatalogItem]] = {}

        for item in self._items:
            if item.id in by_id:
                raise CatalogError(f"Duplicate catalog id: {item.id}")
            by_id[item.id] = item
            # First entry wins for a repeated brand+flavor
            by_brand_flavor.setdefault(brand_flavor_key(item.brand, item.flavor), item)
            by_flavor.setdefault(normalize_name(item.flavor), []).append(item)
            by_category.setdefault(item.category, []).append(item)

        recipes_by_id: Dict[str, PresetRecipe] = {}
        for recipe in self._recipes:
            if recipe.id in recipes_by_id:
                raise CatalogError(f"Duplicate recipe id: {recipe.id}")
            recipes_by_id[recipe.id] = recipe

        self._by_id: Mapping[str, CatalogItem] = MappingProxyType(by_id)
        self._by_brand_flavor = MappingProxyType(by_brand_flavor)
        self._by_flavor = MappingProxyType({k: tuple(v) for k, v in by_flavor.items()})
        self._by_category = MappingProxyType({k: tuple(v) for k, v in by_category.items()})
        self._recipes_by_id = MappingProxyType(recipes_by_id)

        logger.info(
            f"Catalog built with {len(self._items)} tobaccos, "
            f"{len(self._recipes)} recipes, {len(self._by_category)} categories"
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_records(cls, tobaccos: List[Dict], recipes: List[Dict]) -> "Catalog":
        """
        Build a catalog from raw dictionaries, validating every record.

        Raises:
            CatalogError: If any record fails validation
        """
        try:
            items = [CatalogItem(**record) for record in tobaccos]
            presets = [PresetRecipe(**record) for record in recipes]
        except ValidationError as e:
            raise CatalogError(f"Invalid catalog record: {e}") from e
        return cls(items, presets)

    @classmethod
    def default(cls) -> "Catalog":
        """Catalog built from the built-in reference data."""
        return cls.from_records(TOBACCOS, MIX_RECIPES)

    @classmethod
    def from_json(cls, path: str) -> "Catalog":
        """
        Load a catalog from a JSON file.

        Expected format:
            {"tobaccos": [...], "recipes": [...]}

        Raises:
            CatalogError: If the file is missing, malformed or invalid
        """
        logger.info(f"Loading catalog from {path}")
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(f"Cannot read catalog file {path}: {e}") from e

        if not isinstance(data, dict) or "tobaccos" not in data:
            raise CatalogError(f"Catalog file {path} must contain a 'tobaccos' list")

        return cls.from_records(data.get("tobaccos", []), data.get("recipes", []))

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def items(self) -> Tuple[CatalogItem, ...]:
        return self._items

    @property
    def recipes(self) -> Tuple[PresetRecipe, ...]:
        return self._recipes

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[CatalogItem]:
        return iter(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._by_id

    def get(self, item_id: str) -> Optional[CatalogItem]:
        """Tobacco by catalog id, or None."""
        return self._by_id.get(item_id)

    def find(self, brand: str, flavor: str) -> Optional[CatalogItem]:
        """Tobacco by case-insensitive brand and flavor, or None."""
        return self._by_brand_flavor.get(brand_flavor_key(brand, flavor))

    def find_by_flavor(self, flavor: str) -> Optional[CatalogItem]:
        """First tobacco (catalog order) with this flavor name, or None."""
        matches = self._by_flavor.get(normalize_name(flavor), ())
        return matches[0] if matches else None

    def resolve(self, flavor: str, brand: Optional[str] = None) -> Optional[CatalogItem]:
        """
        Resolve a name-based ingredient descriptor to a tobacco.

        With a brand, only an exact brand+flavor match counts; without one,
        the first tobacco with that flavor name is used.
        """
        if brand:
            return self.find(brand, flavor)
        return self.find_by_flavor(flavor)

    def by_category(self, category: str) -> Tuple[CatalogItem, ...]:
        """Tobaccos of one flavor family, in catalog order."""
        return self._by_category.get(category, ())

    def recipe(self, recipe_id: str) -> Optional[PresetRecipe]:
        return self._recipes_by_id.get(recipe_id)

    def brands(self) -> List[str]:
        """Brand names in order of first appearance."""
        seen: List[str] = []
        for item in self._items:
            if item.brand not in seen:
                seen.append(item.brand)
        return seen

    def categories(self) -> List[str]:
        """Flavor families in order of first appearance."""
        return list(self._by_category.keys())


class InventorySnapshot:
    """
    Read-only index over the inventory collaborator's records.

    Quantities are looked up by catalog id first and by brand+flavor
    second. A tobacco with no record has zero grams on hand.
    """

    def __init__(self, records: Iterable[InventoryRecord]):
        self._records: Tuple[InventoryRecord, ...] = tuple(records)

        by_id: Dict[str, float] = {}
        by_brand_flavor: Dict[Tuple[str, str], float] = {}
        for record in self._records:
            if record.item_id:
                by_id[record.item_id] = by_id.get(record.item_id, 0.0) + record.quantity_grams
            key = brand_flavor_key(record.brand, record.flavor)
            by_brand_flavor[key] = by_brand_flavor.get(key, 0.0) + record.quantity_grams

        self._by_id = MappingProxyType(by_id)
        self._by_brand_flavor = MappingProxyType(by_brand_flavor)

        logger.debug(f"Inventory snapshot with {len(self._records)} records")

    @classmethod
    def from_optional(
        cls,
        records: Optional[Iterable[InventoryRecord]]
    ) -> Optional["InventorySnapshot"]:
        """Wrap records, keeping None as "inventory not supplied"."""
        if records is None:
            return None
        if isinstance(records, InventorySnapshot):
            return records
        return cls(records)

    def __len__(self) -> int:
        return len(self._records)

    def has_record(self, item: CatalogItem) -> bool:
        return (
            item.id in self._by_id
            or brand_flavor_key(item.brand, item.flavor) in self._by_brand_flavor
        )

    def quantity_by_id(self, item_id: str) -> Optional[float]:
        """Grams recorded under a catalog id, or None if no such record."""
        return self._by_id.get(item_id)

    def quantity_by_name(self, brand: str, flavor: str) -> Optional[float]:
        """Grams recorded under a brand+flavor, or None if no such record."""
        return self._by_brand_flavor.get(brand_flavor_key(brand, flavor))

    def quantity_for(self, item: CatalogItem) -> float:
        """Grams on hand for a tobacco (id first, then brand+flavor, else 0)."""
        quantity = self.quantity_by_id(item.id)
        if quantity is None:
            quantity = self.quantity_by_name(item.brand, item.flavor)
        return quantity if quantity is not None else 0.0

    def in_stock(self, item: CatalogItem) -> bool:
        return self.quantity_for(item) > 0

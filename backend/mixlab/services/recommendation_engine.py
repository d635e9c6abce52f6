"""
Guest recommendation engine.

Ranks single catalog tobaccos and preset recipes against a guest's stated
preferences, and classifies recipe availability against live inventory.

Item score (capped at 100):
- Strength tier proximity: exact 40, adjacent 20, opposite 5
- Flavor tags: +30 per requested tag covering the item's family (stacks)
- Pairing potential: +5 per requested family the item pairs with (max 20)

Recipe score: percent-weighted average of its ingredients' item scores.
Ingredients that resolve to no catalog tobacco contribute zero.

Ranking is stable, so ties keep catalog order.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple, Union

from mixlab.models.catalog import CatalogItem, PresetRecipe
from mixlab.models.recommendation import (
    GuestPreferences,
    InventoryRecord,
    RecommendationResult,
    RecommendedItem,
    RecommendedRecipe,
)
from mixlab.services.catalog_service import Catalog, InventorySnapshot
from mixlab.utils.constants import (
    FLAVOR_PROFILE_LABELS,
    FLAVOR_TAG_POINTS,
    MATCH_SCORE_MAX,
    PAIRING_POINTS_MAX,
    PAIRING_POINTS_PER_CATEGORY,
    POPULAR_RECIPE_THRESHOLD,
    STRENGTH_LABELS,
    STRENGTH_MATCH_POINTS,
)
from mixlab.utils.helpers import categories_for_tags, strength_tier_for, tier_distance

# Configure logging
logger = logging.getLogger(__name__)

InventoryInput = Optional[Union[InventorySnapshot, Iterable[InventoryRecord]]]


@dataclass
class ItemScore:
    """
    Score of one catalog tobacco against a guest's preferences.

    Attributes:
        score: Match score (0-100)
        reasons: Why the tobacco matches
        strength_distance: Tier steps from the requested strength
    """
    score: float
    reasons: List[str] = field(default_factory=list)
    strength_distance: int = 0


class RecommendationEngine:
    """
    Ranks catalog tobaccos and preset recipes for a guest.

    All entry points are pure with respect to their inputs: the catalog is
    read-only and inventory is only queried.

    Attributes:
        catalog: Catalog of tobaccos and recipes
        max_reasons: Display cap on recipe match reasons
    """

    def __init__(self, catalog: Catalog, max_reasons: int = 3):
        """
        Initialize the engine.

        Args:
            catalog: Catalog of tobaccos and recipes
            max_reasons: Maximum number of match reasons per recipe
        """
        self.catalog = catalog
        self.max_reasons = max_reasons

        logger.info(
            f"RecommendationEngine initialized with {len(catalog)} tobaccos, "
            f"{len(catalog.recipes)} recipes, max_reasons={max_reasons}"
        )

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def recommend_items(
        self,
        preferences: GuestPreferences,
        inventory: InventoryInput = None,
        limit: Optional[int] = None
    ) -> List[RecommendedItem]:
        """
        Rank every catalog tobacco for a guest.

        Tobaccos are never dropped for being out of stock; with inventory
        they are annotated with in_stock and stock_quantity instead.

        Args:
            preferences: Guest preferences
            inventory: Inventory snapshot or records (None = ignore stock)
            limit: Optional maximum number of results

        Returns:
            List[RecommendedItem]: Sorted by match score, best first
        """
        snapshot = InventorySnapshot.from_optional(inventory)
        scores = self._score_catalog(preferences)

        results = []
        for item in self.catalog.items:
            item_score = scores[item.id]
            quantity = snapshot.quantity_for(item) if snapshot is not None else None
            results.append(RecommendedItem(
                item=item,
                match_score=round(item_score.score, 2),
                match_reasons=item_score.reasons,
                in_stock=quantity > 0 if quantity is not None else None,
                stock_quantity=quantity
            ))

        # sorted() is stable: equal scores keep catalog order
        results = sorted(results, key=lambda r: -r.match_score)
        if limit is not None:
            results = results[:limit]

        logger.info(
            f"Ranked {len(self.catalog)} tobaccos for strength={preferences.strength}, "
            f"tags={preferences.flavor_profiles}; returning {len(results)}"
        )
        return results

    def recommend_recipes(
        self,
        preferences: GuestPreferences,
        inventory: InventoryInput = None,
        limit: Optional[int] = None
    ) -> List[RecommendedRecipe]:
        """
        Rank preset recipes for a guest and classify their availability.

        Algorithm:
        1. Resolve each ingredient to a catalog tobacco by brand+flavor
           (flavor only when no brand is given)
        2. match_score = sum(item score * percent / 100) over resolved
           ingredients
        3. availability: full when every ingredient resolves to an in-stock
           tobacco (any catalog tobacco when inventory is absent), partial
           when some do, none when none do
        4. For every missing or out-of-stock ingredient, propose the best
           in-stock tobacco of the same family not already in the recipe

        Args:
            preferences: Guest preferences
            inventory: Inventory snapshot or records (None = assume available)
            limit: Optional maximum number of results

        Returns:
            List[RecommendedRecipe]: Sorted by match score, best first
        """
        snapshot = InventorySnapshot.from_optional(inventory)
        scores = self._score_catalog(preferences)

        results = [
            self._score_recipe(recipe, preferences, scores, snapshot)
            for recipe in self.catalog.recipes
        ]
        results = sorted(results, key=lambda r: -r.match_score)
        if limit is not None:
            results = results[:limit]

        logger.info(
            f"Ranked {len(self.catalog.recipes)} recipes "
            f"(inventory={'yes' if snapshot is not None else 'no'}); "
            f"returning {len(results)}"
        )
        return results

    def recommend(
        self,
        preferences: GuestPreferences,
        inventory: InventoryInput = None,
        item_limit: Optional[int] = None,
        recipe_limit: Optional[int] = None
    ) -> RecommendationResult:
        """Ranked tobaccos and recipes in one result."""
        snapshot = InventorySnapshot.from_optional(inventory)
        return RecommendationResult(
            items=self.recommend_items(preferences, snapshot, item_limit),
            recipes=self.recommend_recipes(preferences, snapshot, recipe_limit),
            has_inventory=snapshot is not None
        )

    # ------------------------------------------------------------------
    # Item scoring
    # ------------------------------------------------------------------

    def score_item(self, item: CatalogItem, preferences: GuestPreferences) -> ItemScore:
        """
        Score a single tobacco against a guest's preferences.

        Args:
            item: Catalog tobacco
            preferences: Guest preferences

        Returns:
            ItemScore: score (0-100), reasons and strength distance
        """
        tag_categories = categories_for_tags(preferences.flavor_profiles)
        return self._score_item(item, preferences, tag_categories)

    def _score_catalog(self, preferences: GuestPreferences) -> Dict[str, ItemScore]:
        tag_categories = categories_for_tags(preferences.flavor_profiles)
        return {
            item.id: self._score_item(item, preferences, tag_categories)
            for item in self.catalog.items
        }

    @staticmethod
    def _score_item(
        item: CatalogItem,
        preferences: GuestPreferences,
        tag_categories: Dict[str, List[str]]
    ) -> ItemScore:
        reasons: List[str] = []

        tier = strength_tier_for(item.strength)
        distance = tier_distance(tier, preferences.strength)
        score = STRENGTH_MATCH_POINTS[distance]
        if distance == 0:
            reasons.append(f"{STRENGTH_LABELS[tier]} strength")

        for tag, categories in tag_categories.items():
            if item.category in categories:
                score += FLAVOR_TAG_POINTS
                reasons.append(FLAVOR_PROFILE_LABELS.get(tag, tag.capitalize()))

        requested: Set[str] = {c for categories in tag_categories.values() for c in categories}
        pairing_hits = sum(1 for category in requested if item.pairs_with_category(category))
        score += min(pairing_hits * PAIRING_POINTS_PER_CATEGORY, PAIRING_POINTS_MAX)
        if pairing_hits >= 2:
            reasons.append("Pairs well")

        score = min(score, MATCH_SCORE_MAX)
        logger.debug(f"Item {item.id}: score={score}, reasons={reasons}")
        return ItemScore(score=score, reasons=reasons, strength_distance=distance)

    # ------------------------------------------------------------------
    # Recipe scoring
    # ------------------------------------------------------------------

    def _score_recipe(
        self,
        recipe: PresetRecipe,
        preferences: GuestPreferences,
        scores: Dict[str, ItemScore],
        inventory: Optional[InventorySnapshot]
    ) -> RecommendedRecipe:
        weighted = 0.0
        exact_strength_percent = 0
        missing: List[str] = []
        needs_substitute: List[Tuple[str, Optional[str]]] = []
        used_ids: Set[str] = set()
        families: List[str] = []
        in_stock_count = 0

        for ingredient in recipe.ingredients:
            item = self.catalog.resolve(ingredient.flavor, ingredient.brand)
            if item is None:
                logger.debug(f"Recipe {recipe.id}: '{ingredient.display_name}' not in catalog")
                missing.append(ingredient.display_name)
                needs_substitute.append((ingredient.display_name, ingredient.category))
                continue

            used_ids.add(item.id)
            families.append(item.category)
            item_score = scores[item.id]
            weighted += item_score.score * ingredient.percent / 100
            if item_score.strength_distance == 0:
                exact_strength_percent += ingredient.percent

            if inventory is None or inventory.in_stock(item):
                in_stock_count += 1
            else:
                missing.append(ingredient.display_name)
                needs_substitute.append(
                    (ingredient.display_name, ingredient.category or item.category)
                )

        availability = self._classify_availability(in_stock_count, len(recipe.ingredients))
        replacements = self._find_replacements(needs_substitute, used_ids, scores, inventory)
        reasons = self._recipe_reasons(recipe, preferences, exact_strength_percent, families)

        logger.debug(
            f"Recipe {recipe.id}: score={weighted:.2f}, availability={availability}, "
            f"missing={missing}, replacements={list(replacements)}"
        )

        return RecommendedRecipe(
            recipe=recipe,
            match_score=round(weighted, 2),
            match_reasons=reasons,
            availability=availability,
            missing_ingredients=missing,
            replacements=replacements
        )

    @staticmethod
    def _classify_availability(in_stock_count: int, total: int) -> str:
        """Without inventory every resolved ingredient counts as in stock."""
        if in_stock_count == total:
            return "full"
        if in_stock_count > 0:
            return "partial"
        return "none"

    def _find_replacements(
        self,
        needs_substitute: List[Tuple[str, Optional[str]]],
        used_ids: Set[str],
        scores: Dict[str, ItemScore],
        inventory: Optional[InventorySnapshot]
    ) -> Dict[str, CatalogItem]:
        """Best same-family tobacco per missing ingredient, never reused."""
        replacements: Dict[str, CatalogItem] = {}
        taken = set(used_ids)

        for name, category in needs_substitute:
            if not category:
                continue
            candidates = [
                item for item in self.catalog.by_category(category)
                if item.id not in taken
                and (inventory is None or inventory.in_stock(item))
            ]
            if not candidates:
                logger.warning(f"No {category} substitute available for '{name}'")
                continue

            best = sorted(candidates, key=lambda item: -scores[item.id].score)[0]
            replacements[name] = best
            taken.add(best.id)
            logger.info(f"Substituting '{name}' with {best.display_name}")

        return replacements

    def _recipe_reasons(
        self,
        recipe: PresetRecipe,
        preferences: GuestPreferences,
        exact_strength_percent: int,
        families: List[str]
    ) -> List[str]:
        reasons: List[str] = []

        if exact_strength_percent >= 50:
            reasons.append(
                f"Matches your {STRENGTH_LABELS[preferences.strength].lower()} strength preference"
            )

        for tag, categories in categories_for_tags(preferences.flavor_profiles).items():
            if any(family in categories for family in families):
                label = FLAVOR_PROFILE_LABELS.get(tag, tag.capitalize())
                reasons.append(f"Contains requested {label.lower()} flavors")

        if recipe.popularity >= POPULAR_RECIPE_THRESHOLD:
            reasons.append("Popular mix")

        if not reasons:
            reasons.append("Curated preset")

        return reasons[:self.max_reasons]

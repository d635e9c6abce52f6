"""
Repeat a guest's saved blend against current stock.

A BlendSnapshot is recorded when a blend is saved. Repeating it later
re-resolves every ingredient against the current catalog and inventory:

1. Catalog tobacco by saved id, else by brand+flavor, else by flavor
2. Stock by catalog id, else by brand+flavor (skipped without inventory)
3. Out of stock: best in-stock tobacco of the same family, within the
   saved strength tier when possible, preferring the same brand, then the
   closest strength, then catalog order
4. No substitute: the ingredient is unavailable and gets no grams

The repeat fails only when no snapshot is given or when not a single
ingredient can be used.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Set, Union

from mixlab.models.blend import BlendItem
from mixlab.models.catalog import CatalogItem
from mixlab.models.recommendation import InventoryRecord
from mixlab.models.repeat import (
    BlendSnapshot,
    RepeatResult,
    RepeatWarning,
    ResolvedIngredient,
    SnapshotIngredient,
)
from mixlab.services.catalog_service import Catalog, InventorySnapshot
from mixlab.services.profile_aggregator import weighted_attribute
from mixlab.services.setup_advisor import SetupAdvisor
from mixlab.utils.constants import STRENGTH_RANGES
from mixlab.utils.helpers import round_half_up, strength_tier_for
from mixlab.utils.validators import validate_total_grams

# Configure logging
logger = logging.getLogger(__name__)

InventoryInput = Optional[Union[InventorySnapshot, Iterable[InventoryRecord]]]


class RepeatResolver:
    """
    Resolves saved blend snapshots against the current catalog and stock.

    Attributes:
        catalog: Catalog of tobaccos
        advisor: Setup advisor used for the snapshot heat setup
        renormalize: When True, surviving ingredients are rescaled so the
                     allocated grams sum to the saved bowl weight
        default_total_grams: Bowl weight used when a snapshot is created
                             without one
    """

    def __init__(
        self,
        catalog: Catalog,
        advisor: SetupAdvisor,
        renormalize: bool = False,
        default_total_grams: int = 20
    ):
        self.catalog = catalog
        self.advisor = advisor
        self.renormalize = renormalize
        self.default_total_grams = default_total_grams

        logger.info(
            f"RepeatResolver initialized with renormalize={renormalize}, "
            f"default_total_grams={default_total_grams}"
        )

    def resolve(
        self,
        snapshot: Optional[BlendSnapshot],
        inventory: InventoryInput = None
    ) -> RepeatResult:
        """
        Re-resolve a saved blend.

        Args:
            snapshot: Saved blend (None when the guest has none)
            inventory: Current inventory (None = skip stock checks)

        Returns:
            RepeatResult: Resolved ingredients, warnings and gram allocation.
                          success=False with error NO_SNAPSHOT or
                          ALL_UNAVAILABLE when the blend cannot be repeated.

        Example:
            result = resolver.resolve(snapshot, inventory_records)
            for resolved in result.resolved_items:
                print(resolved.ingredient.flavor, resolved.grams_used)
        """
        if snapshot is None:
            logger.info("Repeat requested without a saved snapshot")
            return RepeatResult(
                success=False,
                error="NO_SNAPSHOT",
                message="No saved blend to repeat"
            )

        stock = InventorySnapshot.from_optional(inventory)
        warnings: List[RepeatWarning] = []
        resolved: List[ResolvedIngredient] = []
        taken: Set[str] = {ing.item_id for ing in snapshot.ingredients}

        for ingredient in snapshot.ingredients:
            entry = self._resolve_ingredient(ingredient, snapshot, stock, taken, warnings)
            if entry.replacement is not None:
                taken.add(entry.replacement.id)
            resolved.append(entry)

        resolved = self._allocate_grams(resolved, snapshot.total_grams)
        allocated = sum(r.grams_used or 0 for r in resolved)

        if not any(r.resolved for r in resolved):
            logger.warning(f"Snapshot {snapshot.id}: every ingredient is unavailable")
            return RepeatResult(
                success=False,
                snapshot=snapshot,
                resolved_items=resolved,
                warnings=warnings,
                total_grams_allocated=0,
                error="ALL_UNAVAILABLE",
                message="Every tobacco in the saved blend is unavailable"
            )

        logger.info(
            f"Repeated snapshot {snapshot.id}: "
            f"{sum(1 for r in resolved if r.resolved)}/{len(resolved)} ingredients usable, "
            f"{len(warnings)} warning(s), {allocated}g of {snapshot.total_grams}g allocated"
        )

        return RepeatResult(
            success=True,
            snapshot=snapshot,
            resolved_items=resolved,
            warnings=warnings,
            total_grams_allocated=allocated
        )

    def create_snapshot(
        self,
        items: Sequence[BlendItem],
        total_grams: Optional[int] = None,
        strength: Optional[str] = None,
        compatibility_score: Optional[int] = None,
        bowl_type: Optional[str] = None
    ) -> BlendSnapshot:
        """
        Record an immutable snapshot of a finalized blend.

        Args:
            items: Blend items (validated upstream)
            total_grams: Bowl weight (default_total_grams when omitted)
            strength: Strength tier (derived from the blend when omitted)
            compatibility_score: Score to store alongside
            bowl_type: Bowl to store alongside

        Returns:
            BlendSnapshot: Snapshot with id, timestamp and heat setup

        Raises:
            ValueError: If the bowl weight is out of range
        """
        grams = total_grams if total_grams is not None else self.default_total_grams
        validate_total_grams(grams)

        tier = strength or strength_tier_for(weighted_attribute(items, "strength"))
        heat_setup = self.advisor.heat_recommendation_from_strength(tier, grams)

        snapshot = BlendSnapshot(
            id=f"snap_{uuid.uuid4().hex[:12]}",
            ingredients=tuple(
                SnapshotIngredient(
                    item_id=bi.item.id,
                    brand=bi.item.brand,
                    flavor=bi.item.flavor,
                    percent=bi.percent,
                    color=bi.item.color
                )
                for bi in items
            ),
            total_grams=grams,
            strength=tier,
            compatibility_score=compatibility_score,
            bowl_type=bowl_type,
            heat_setup=heat_setup,
            created_at=datetime.now(timezone.utc)
        )
        logger.info(f"Created snapshot {snapshot.id} ({len(items)} tobaccos, {grams}g, {tier})")
        return snapshot

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _lookup(self, ingredient: SnapshotIngredient) -> Optional[CatalogItem]:
        return (
            self.catalog.get(ingredient.item_id)
            or self.catalog.find(ingredient.brand, ingredient.flavor)
            or self.catalog.find_by_flavor(ingredient.flavor)
        )

    @staticmethod
    def _stock_for(
        ingredient: SnapshotIngredient,
        item: Optional[CatalogItem],
        stock: InventorySnapshot
    ) -> float:
        quantity = stock.quantity_by_id(ingredient.item_id)
        if quantity is None and item is not None:
            quantity = stock.quantity_by_id(item.id)
        if quantity is None:
            quantity = stock.quantity_by_name(ingredient.brand, ingredient.flavor)
        return quantity if quantity is not None else 0.0

    def _resolve_ingredient(
        self,
        ingredient: SnapshotIngredient,
        snapshot: BlendSnapshot,
        stock: Optional[InventorySnapshot],
        taken: Set[str],
        warnings: List[RepeatWarning]
    ) -> ResolvedIngredient:
        item = self._lookup(ingredient)
        name = f"{ingredient.brand} {ingredient.flavor}"

        if item is not None:
            taken.add(item.id)
        if item is not None and item.id != ingredient.item_id:
            # Saved id is gone from the catalog; matched by name instead
            warnings.append(RepeatWarning(
                type="REPLACED",
                item_id=ingredient.item_id,
                message=f"{name} is now listed as {item.display_name}",
                replacement=item,
                reason="Matched by name"
            ))

        if stock is None:
            if item is None:
                logger.warning(f"{name} not found in catalog")
                warnings.append(RepeatWarning(
                    type="UNAVAILABLE",
                    item_id=ingredient.item_id,
                    message=f"{name} is no longer in the catalog"
                ))
                return ResolvedIngredient(
                    ingredient=ingredient, item=None, percent=ingredient.percent, available=False
                )
            return ResolvedIngredient(
                ingredient=ingredient, item=item, percent=ingredient.percent, available=True
            )

        grams_needed = snapshot.total_grams * ingredient.percent / 100
        quantity = self._stock_for(ingredient, item, stock)

        if quantity > 0:
            if quantity < grams_needed:
                warnings.append(RepeatWarning(
                    type="LOW_STOCK",
                    item_id=ingredient.item_id,
                    message=f"{name}: {quantity:g}g left ({round_half_up(grams_needed)}g needed)"
                ))
            return ResolvedIngredient(
                ingredient=ingredient,
                item=item,
                percent=ingredient.percent,
                available=True,
                stock_grams=quantity
            )

        replacement = self._find_substitute(ingredient, item, stock, taken, snapshot.strength)
        if replacement is not None:
            logger.warning(f"{name} out of stock; substituting {replacement.display_name}")
            warnings.append(RepeatWarning(
                type="OUT_OF_STOCK",
                item_id=ingredient.item_id,
                message=f"{name} is out of stock",
                replacement=replacement,
                reason=f"Same {replacement.category} family: {replacement.display_name}"
            ))
        else:
            logger.warning(f"{name} unavailable and no substitute in stock")
            warnings.append(RepeatWarning(
                type="UNAVAILABLE",
                item_id=ingredient.item_id,
                message=f"{name} is unavailable and no substitute was found"
            ))

        return ResolvedIngredient(
            ingredient=ingredient,
            item=item,
            percent=ingredient.percent,
            available=False,
            stock_grams=quantity,
            replacement=replacement
        )

    def _find_substitute(
        self,
        ingredient: SnapshotIngredient,
        item: Optional[CatalogItem],
        stock: InventorySnapshot,
        taken: Set[str],
        strength: str
    ) -> Optional[CatalogItem]:
        """
        In-stock tobacco of the same family: same brand, closest strength, catalog order.

        Candidates within the snapshot's strength tier are preferred; the
        whole family is searched only when the tier has none in stock.
        """
        if item is None:
            return None

        candidates = [
            candidate for candidate in self.catalog.by_category(item.category)
            if candidate.id not in taken
            and candidate.id != item.id
            and stock.in_stock(candidate)
        ]
        low, high = STRENGTH_RANGES[strength]
        in_tier = [c for c in candidates if low <= c.strength <= high]
        candidates = in_tier or candidates
        if not candidates:
            return None

        brand = ingredient.brand.lower()
        return sorted(
            candidates,
            key=lambda c: (c.brand.lower() != brand, abs(c.strength - item.strength))
        )[0]

    def _allocate_grams(
        self,
        resolved: List[ResolvedIngredient],
        total_grams: int
    ) -> List[ResolvedIngredient]:
        """
        Grams per usable ingredient.

        Default: round(total * percent / 100) per ingredient, keeping saved
        proportions even when the sum falls short of total_grams. With
        renormalize, surviving percents are rescaled to 100 and grams sum to
        total_grams exactly (rounding remainder to the first survivor).
        """
        usable = [i for i, r in enumerate(resolved) if r.resolved]
        if not usable:
            return resolved

        updates = {}
        if not self.renormalize:
            for i in usable:
                updates[i] = {"grams_used": round_half_up(total_grams * resolved[i].percent / 100)}
        else:
            surviving = sum(resolved[i].percent for i in usable)
            grams = {i: round_half_up(total_grams * resolved[i].percent / surviving) for i in usable}
            percents = {i: round_half_up(100 * resolved[i].percent / surviving) for i in usable}
            grams[usable[0]] += total_grams - sum(grams.values())
            percents[usable[0]] += 100 - sum(percents.values())
            for i in usable:
                updates[i] = {"grams_used": grams[i], "percent": percents[i]}

        return [
            r.model_copy(update=updates[i]) if i in updates else r
            for i, r in enumerate(resolved)
        ]

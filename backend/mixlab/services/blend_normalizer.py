"""
Blend percentage normalizer.

Keeps a blend's percentages summing to exactly 100 while the guest moves a
slider or adds/removes a tobacco. Some tobaccos are capped: a whole flavor
family (mint) or a single unusually strong item. Capped items keep their
own value; only uncapped items absorb the remainder.

Caps are declarative (CapTable), so constraining another tobacco is a
configuration change.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from mixlab.config import Settings
from mixlab.models.blend import BlendItem
from mixlab.models.catalog import CatalogItem
from mixlab.utils.constants import CAPPED_CATEGORY
from mixlab.utils.helpers import clamp, round_half_up

# Configure logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CapTable:
    """
    Maximum percent per flavor family and per catalog id.

    Attributes:
        categories: Flavor family -> max percent
        items: Catalog id -> max percent
    """
    categories: Dict[str, int] = field(default_factory=dict)
    items: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CapTable":
        return cls(
            categories={CAPPED_CATEGORY: settings.MINT_CAP_PERCENT},
            items={settings.STRONG_ITEM_ID: settings.STRONG_ITEM_CAP_PERCENT},
        )

    def cap_for(self, item: CatalogItem) -> Optional[int]:
        """Tightest cap that applies to the item, or None if uncapped."""
        applicable = []
        if item.category in self.categories:
            applicable.append(self.categories[item.category])
        if item.id in self.items:
            applicable.append(self.items[item.id])
        return min(applicable) if applicable else None

    def is_capped(self, item: CatalogItem) -> bool:
        return self.cap_for(item) is not None


class BlendNormalizer:
    """
    Maintains a valid percentage distribution across a blend.

    All operations return a new list of BlendItems; inputs are not mutated.
    Every result sums to exactly 100 and respects the caps, provided at
    least one item is uncapped. When every item is capped the sum wins: the
    residual goes to the first item and validation rejects the blend.

    Attributes:
        caps: Cap table applied to every operation
    """

    def __init__(self, caps: CapTable):
        self.caps = caps
        logger.info(
            f"BlendNormalizer initialized with category caps={caps.categories}, "
            f"item caps={caps.items}"
        )

    def normalize(
        self,
        blend: Sequence[BlendItem],
        changed_id: str,
        new_percent: float
    ) -> List[BlendItem]:
        """
        Apply a slider change and redistribute the rest.

        Algorithm:
        1. Clamp the new value to [0, 100], then to the item's own cap,
           then to what the other capped items leave free
        2. remaining = 100 - sum(other capped items) - new value
        3. One other uncapped item: it takes all of remaining
        4. Two or more: split remaining by their current shares, rounding
           down, with the rounding remainder going to the first of them

        Args:
            blend: Current blend
            changed_id: Catalog id of the item whose slider moved
            new_percent: Requested value

        Returns:
            List[BlendItem]: New blend summing to 100

        Raises:
            ValueError: If the blend is empty or changed_id is not in it
        """
        if not blend:
            raise ValueError("Cannot normalize an empty blend")

        ids = [bi.item.id for bi in blend]
        if changed_id not in ids:
            raise ValueError(f"Item {changed_id} is not part of the blend")

        index = ids.index(changed_id)
        caps = [self.caps.cap_for(bi.item) for bi in blend]
        current = [bi.percent for bi in blend]
        percents = list(current)

        other_capped = [i for i in range(len(blend)) if i != index and caps[i] is not None]
        capped_total = self._fit_capped(other_capped, percents, caps, budget=100)

        value = int(clamp(round_half_up(new_percent), 0, 100))
        if caps[index] is not None:
            value = min(value, caps[index])
        value = min(value, 100 - capped_total)
        percents[index] = value

        remaining = 100 - capped_total - value
        uncapped_others = [i for i in range(len(blend)) if i != index and caps[i] is None]

        if not uncapped_others:
            if caps[index] is None:
                # The changed item is the only uncapped slot
                percents[index] += remaining
            else:
                self._absorb_residual(blend, percents, remaining)
        elif len(uncapped_others) == 1:
            percents[uncapped_others[0]] = remaining
        else:
            self._distribute_proportionally(uncapped_others, current, percents, remaining)

        logger.debug(f"Normalized {changed_id} -> {value}: {dict(zip(ids, percents))}")
        return self._apply(blend, percents)

    def rebalance(self, blend: Sequence[BlendItem]) -> List[BlendItem]:
        """
        Redistribute after a membership change.

        Capped items keep their current value (clamped to their cap); the
        rest is split equally across uncapped items, rounding remainder to
        the first uncapped item.

        Args:
            blend: Blend whose membership just changed

        Returns:
            List[BlendItem]: New blend summing to 100

        Raises:
            ValueError: If the blend is empty
        """
        if not blend:
            raise ValueError("Cannot rebalance an empty blend")

        caps = [self.caps.cap_for(bi.item) for bi in blend]
        percents = [bi.percent for bi in blend]

        capped = [i for i in range(len(blend)) if caps[i] is not None]
        uncapped = [i for i in range(len(blend)) if caps[i] is None]
        capped_total = self._fit_capped(capped, percents, caps, budget=100)
        remaining = 100 - capped_total

        if uncapped:
            base = remaining // len(uncapped)
            for i in uncapped:
                percents[i] = base
            percents[uncapped[0]] += remaining - base * len(uncapped)
        else:
            self._absorb_residual(blend, percents, remaining)

        logger.debug(
            f"Rebalanced blend: "
            f"{dict(zip([bi.item.id for bi in blend], percents))}"
        )
        return self._apply(blend, percents)

    def add_item(self, blend: Sequence[BlendItem], item: CatalogItem) -> List[BlendItem]:
        """
        Add a tobacco and rebalance.

        A capped tobacco enters at its cap; adding a tobacco already in the
        blend changes nothing.
        """
        if any(bi.item.id == item.id for bi in blend):
            logger.debug(f"Item {item.id} already in blend, nothing to add")
            return list(blend)

        cap = self.caps.cap_for(item)
        entry = BlendItem(item=item, percent=cap if cap is not None else 0)
        logger.info(f"Adding {item.display_name} to blend of {len(blend)}")
        return self.rebalance(list(blend) + [entry])

    def remove_item(self, blend: Sequence[BlendItem], item_id: str) -> List[BlendItem]:
        """Remove a tobacco and rebalance the rest (no-op if absent)."""
        remaining = [bi for bi in blend if bi.item.id != item_id]
        if len(remaining) == len(blend):
            return list(blend)
        logger.info(f"Removing {item_id} from blend of {len(blend)}")
        if not remaining:
            return []
        return self.rebalance(remaining)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _fit_capped(
        indices: List[int],
        percents: List[int],
        caps: List[Optional[int]],
        budget: int
    ) -> int:
        """Clamp capped items to their caps and to the budget, in order."""
        total = 0
        for i in indices:
            value = int(clamp(percents[i], 0, caps[i]))
            value = min(value, budget - total)
            percents[i] = value
            total += value
        return total

    @staticmethod
    def _distribute_proportionally(
        targets: List[int],
        current: List[int],
        percents: List[int],
        remaining: int
    ) -> None:
        share_total = sum(current[i] for i in targets)
        if share_total <= 0:
            base = remaining // len(targets)
            for i in targets:
                percents[i] = base
        else:
            for i in targets:
                percents[i] = (current[i] * remaining) // share_total
        percents[targets[0]] += remaining - sum(percents[i] for i in targets)

    @staticmethod
    def _absorb_residual(
        blend: Sequence[BlendItem],
        percents: List[int],
        remaining: int
    ) -> None:
        # Every item is capped: keep the sum, relax the first item's cap
        if remaining:
            logger.warning(
                f"No uncapped tobacco to absorb {remaining}%; "
                f"assigning it to {blend[0].item.display_name}"
            )
        percents[0] += remaining

    @staticmethod
    def _apply(blend: Sequence[BlendItem], percents: List[int]) -> List[BlendItem]:
        return [
            bi.model_copy(update={"percent": p}) for bi, p in zip(blend, percents)
        ]

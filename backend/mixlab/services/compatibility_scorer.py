"""
Rule-based compatibility scoring for tobacco blends.

A blend's score is built from pairwise category-pairing rules declared on
each catalog tobacco. Every rule is explicit, so the score can always be
explained line by line.

Scoring:
- Baseline: 70 points
- Mean pair contribution over all unordered pairs:
    mutual pairing +25, one-way pairing +12, same family +5, clash -30
- Mint present: +5
- Clamped to 0-100 and rounded half up

Level bands: perfect >= 90, good >= 70, okay >= 50, else poor.
"""

import logging
from itertools import combinations
from typing import List, Sequence, Tuple

from mixlab.models.blend import BlendItem, CompatibilityResult
from mixlab.models.catalog import CatalogItem
from mixlab.utils.constants import (
    CAPPED_CATEGORY,
    COMPATIBILITY_BASELINE,
    COMPATIBILITY_LEVELS,
    MINT_BONUS,
    PAIR_CONTRIBUTIONS,
    STRENGTH_GAP_WARNING,
)
from mixlab.utils.helpers import clamp, round_half_up

# Configure logging
logger = logging.getLogger(__name__)


PAIR_LABELS = {
    "mutual": "excellent pairing",
    "one_way": "good pairing",
    "same_family": "same flavor family",
    "clash": "flavors may clash",
}


def level_for(score: float) -> str:
    """Map a 0-100 score to its level band."""
    for level, threshold in COMPATIBILITY_LEVELS:
        if score >= threshold:
            return level
    return COMPATIBILITY_LEVELS[-1][0]


def classify_pair(a: CatalogItem, b: CatalogItem) -> str:
    """
    Classify the relationship between two tobaccos.

    Same family is checked first: two berries are safe together whatever
    their pairing lists say.

    Returns:
        str: "same_family", "mutual", "one_way" or "clash"
    """
    if a.category == b.category:
        return "same_family"

    a_likes_b = a.pairs_with_category(b.category)
    b_likes_a = b.pairs_with_category(a.category)
    if a_likes_b and b_likes_a:
        return "mutual"
    if a_likes_b or b_likes_a:
        return "one_way"
    return "clash"


class CompatibilityScorer:
    """
    Scores how well the tobaccos of a blend combine.

    The score depends only on each tobacco's category and pairing list,
    never on percentages, so swapping a tobacco for another of the same
    family with the same pairing list leaves the score unchanged.

    Attributes:
        max_details: Maximum number of detail lines returned
    """

    def __init__(self, max_details: int = 5):
        self.max_details = max_details
        logger.info(
            f"CompatibilityScorer initialized with baseline={COMPATIBILITY_BASELINE}, "
            f"max_details={self.max_details}"
        )

    def score(self, blend: Sequence[BlendItem]) -> CompatibilityResult:
        """
        Score a validated blend.

        Args:
            blend: Blend of 2-3 items (validated upstream)

        Returns:
            CompatibilityResult: score, level and explanation lines

        Example:
            scorer = CompatibilityScorer()
            result = scorer.score(blend)
            print(f"{result.score} ({result.level})")
        """
        items = [bi.item for bi in blend]
        details: List[str] = []

        mint_items = [item for item in items if item.category == CAPPED_CATEGORY]
        mint_bonus = MINT_BONUS if mint_items else 0.0
        if mint_items:
            details.append(f"{mint_items[0].flavor} adds freshness to any mix")

        pair_total, pair_details = self._score_pairs(items)
        details.extend(pair_details)
        pair_count = len(pair_details)
        pair_mean = pair_total / pair_count if pair_count else 0.0

        details.extend(self._advisories(items))

        raw = COMPATIBILITY_BASELINE + pair_mean + mint_bonus
        final = round_half_up(clamp(raw, 0.0, 100.0))
        level = level_for(final)

        logger.info(
            f"Compatibility for {[item.id for item in items]}: {final} ({level}); "
            f"pair mean={pair_mean:.2f}, mint bonus={mint_bonus}"
        )

        return CompatibilityResult(
            score=final,
            level=level,
            details=details[:self.max_details]
        )

    def _score_pairs(self, items: List[CatalogItem]) -> Tuple[float, List[str]]:
        """Sum pair contributions in blend order, one detail line per pair."""
        total = 0.0
        lines: List[str] = []
        for a, b in combinations(items, 2):
            kind = classify_pair(a, b)
            contribution = PAIR_CONTRIBUTIONS[kind]
            total += contribution
            lines.append(f"{a.flavor} + {b.flavor}: {PAIR_LABELS[kind]} ({contribution:+g})")
            logger.debug(f"Pair {a.id}/{b.id}: {kind} {contribution:+g}")
        return total, lines

    @staticmethod
    def _advisories(items: List[CatalogItem]) -> List[str]:
        """Score-neutral hints about the blend as a whole."""
        lines: List[str] = []
        if not items:
            return lines

        strongest = max(items, key=lambda item: item.strength)
        lightest = min(items, key=lambda item: item.strength)
        if strongest.strength - lightest.strength > STRENGTH_GAP_WARNING:
            lines.append(
                f"Large strength gap between {strongest.flavor} and {lightest.flavor}: "
                f"the lighter tobacco may get lost"
            )

        families = {item.category for item in items}
        if len(items) > 1 and len(families) == 1:
            lines.append(f"All tobaccos are {items[0].category}: safe but one-dimensional")

        return lines

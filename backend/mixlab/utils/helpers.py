"""
Common utility helper functions.

This module provides reusable helpers for rounding, name matching, and
band lookups used throughout the blend engine.
"""

import math
import re
import logging
from typing import Dict, Iterable, List, Tuple

from mixlab.utils.constants import (
    HEAT_BANDS,
    PROFILE_TO_CATEGORIES,
    STRENGTH_RANGES,
    STRENGTH_TIERS,
)

# Configure logging
logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero.

    Python's built-in round() uses banker's rounding (round(2.5) == 2),
    which would make 50/50 splits and gram allocations drift.

    Example:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(7.45)
        7
    """
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value into [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def normalize_name(name: str) -> str:
    """
    Standardize a brand or flavor name for matching.

    Lowercases, trims, and collapses internal whitespace so that
    "Black  Burn " and "black burn" match.

    Example:
        >>> normalize_name("  Foreplay On The  Peach ")
        "foreplay on the peach"
    """
    if not name:
        return ""
    return re.sub(r'\s+', ' ', name.strip().lower())


def brand_flavor_key(brand: str, flavor: str) -> Tuple[str, str]:
    """Case-insensitive (brand, flavor) lookup key."""
    return (normalize_name(brand), normalize_name(flavor))


def strength_tier_for(strength: float) -> str:
    """
    Map a numeric 1-10 strength onto its coarse tier.

    Values between ranges (e.g. 4.5 from an aggregate) are rounded first;
    anything outside 1-10 falls into the nearest end tier.

    Example:
        >>> strength_tier_for(6)
        "medium"
    """
    rounded = round_half_up(strength)
    for tier in STRENGTH_TIERS:
        low, high = STRENGTH_RANGES[tier]
        if low <= rounded <= high:
            return tier
    return STRENGTH_TIERS[0] if rounded < STRENGTH_RANGES[STRENGTH_TIERS[0]][0] else STRENGTH_TIERS[-1]


def heat_band_for(heat_resistance: float) -> str:
    """Map a numeric 1-10 heat resistance onto low/medium/high."""
    rounded = round_half_up(heat_resistance)
    bands = list(HEAT_BANDS.items())
    for band, (low, high) in bands:
        if low <= rounded <= high:
            return band
    return bands[0][0] if rounded < bands[0][1][0] else bands[-1][0]


def tier_distance(tier_a: str, tier_b: str) -> int:
    """Number of steps between two strength tiers (0, 1 or 2)."""
    return abs(STRENGTH_TIERS.index(tier_a) - STRENGTH_TIERS.index(tier_b))


def categories_for_tag(tag: str) -> List[str]:
    """
    Resolve a guest flavor tag to catalog categories.

    A tag is either a flavor profile ("fruity" -> fruit, berry, tropical)
    or a raw category name, which maps to itself.
    """
    normalized = normalize_name(tag)
    if normalized in PROFILE_TO_CATEGORIES:
        return list(PROFILE_TO_CATEGORIES[normalized])
    return [normalized]


def categories_for_tags(tags: Iterable[str]) -> Dict[str, List[str]]:
    """Map each tag to its categories, preserving tag order."""
    mapping: Dict[str, List[str]] = {}
    for tag in tags:
        mapping[normalize_name(tag)] = categories_for_tag(tag)
    logger.debug(f"Resolved flavor tags: {mapping}")
    return mapping

"""
Input validation utilities.

This module provides validation functions for blends before they reach the
compatibility scorer, profile aggregator and setup advisor.
"""

import logging
from typing import TYPE_CHECKING, Optional, Sequence

from mixlab.models.blend import BlendItem, BlendValidation
from mixlab.utils.constants import MAX_BLEND_ITEMS, MIN_BLEND_ITEMS

if TYPE_CHECKING:
    from mixlab.services.blend_normalizer import CapTable

# Configure logging
logger = logging.getLogger(__name__)


def validate_blend(
    items: Sequence[BlendItem],
    caps: Optional["CapTable"] = None
) -> BlendValidation:
    """
    Validate a finalized blend.

    Ensures the blend:
    - Has 2-3 items
    - Uses each tobacco once
    - Sums to exactly 100
    - Gives every item a positive share
    - Has at least one uncapped tobacco (when a cap table is given)
    - Respects the cap table (when given)

    Args:
        items: Blend items in blend order
        caps: Cap table to check against

    Returns:
        BlendValidation: ok=True, or ok=False with the first failing reason
    """
    error = _first_error(items, caps)
    if error:
        logger.debug(f"Blend rejected: {error}")
        return BlendValidation(ok=False, error=error)
    return BlendValidation(ok=True)


def _first_error(items: Sequence[BlendItem], caps: Optional["CapTable"]) -> Optional[str]:
    if not MIN_BLEND_ITEMS <= len(items) <= MAX_BLEND_ITEMS:
        return f"Select {MIN_BLEND_ITEMS}–{MAX_BLEND_ITEMS} tobaccos."

    seen = set()
    for bi in items:
        if bi.item.id in seen:
            return f"{bi.item.display_name} is already in the blend."
        seen.add(bi.item.id)

    if sum(bi.percent for bi in items) != 100:
        return "Percents must sum to 100."

    if any(bi.percent <= 0 for bi in items):
        return "Each percent must be > 0."

    if caps is not None:
        if all(caps.is_capped(bi.item) for bi in items):
            return "Blend needs at least one uncapped tobacco"

        for bi in items:
            cap = caps.cap_for(bi.item)
            if cap is not None and bi.percent > cap:
                return f"{bi.item.display_name} is limited to {cap}%."

    return None


def validate_total_grams(total_grams: int) -> bool:
    """
    Validate a bowl weight.

    Raises:
        ValueError: If the weight is outside 1-100 grams
    """
    if not 1 <= total_grams <= 100:
        raise ValueError(f"Bowl weight must be between 1 and 100 grams (got {total_grams})")
    return True

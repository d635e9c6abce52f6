"""
Blend strength and heat profile.

Strength and heat load are percentage-weighted averages of the tobaccos'
1-10 attributes. Heat-resistant blends forgive aggressive heat, so a high
heat load means a low overheating risk.
"""

import logging
from typing import Sequence

from mixlab.models.blend import BlendItem, BlendProfile
from mixlab.utils.constants import OVERHEATING_RISK_BANDS
from mixlab.utils.helpers import round_half_up

# Configure logging
logger = logging.getLogger(__name__)


def weighted_attribute(blend: Sequence[BlendItem], attribute: str) -> float:
    """
    Percentage-weighted value of a numeric tobacco attribute.

    Args:
        blend: Blend items
        attribute: CatalogItem attribute name ("strength", "heat_resistance")

    Returns:
        float: Sum of attribute * percent / 100
    """
    return sum(getattr(bi.item, attribute) * bi.percent / 100 for bi in blend)


def overheating_risk_for(heat_load: float) -> str:
    """Map a heat load onto low/medium/high overheating risk."""
    for risk, threshold in OVERHEATING_RISK_BANDS:
        if heat_load >= threshold:
            return risk
    return OVERHEATING_RISK_BANDS[-1][0]


class ProfileAggregator:
    """Computes the strength/heat profile of a validated blend."""

    def aggregate(self, blend: Sequence[BlendItem]) -> BlendProfile:
        """
        Aggregate a blend into its profile.

        Args:
            blend: Blend summing to 100 (validated upstream)

        Returns:
            BlendProfile: Rounded strength, rounded heat load and risk
        """
        final_strength = round_half_up(weighted_attribute(blend, "strength"))
        final_heat_load = round_half_up(weighted_attribute(blend, "heat_resistance"))
        risk = overheating_risk_for(final_heat_load)

        logger.debug(
            f"Profile: strength={final_strength}, heat_load={final_heat_load}, risk={risk}"
        )

        return BlendProfile(
            final_strength=final_strength,
            final_heat_load=final_heat_load,
            overheating_risk=risk
        )

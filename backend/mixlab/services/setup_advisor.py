"""
Physical setup advice.

Both lookups read the same tables in constants: STRENGTH_SETUP_TABLE gives
the base row per strength tier and HEAT_SETUP_ADJUSTMENTS shifts coals and
heat-up time by heat-resistance band.

- recommend(profile): full advice for a blend whose profile is known
- heat_recommendation_from_strength(tier, grams): coarse coals/packing when
  only a strength tier and a bowl weight are known (repeating a saved blend)

For a medium heat band and a standard 15-25 g bowl both lookups agree on
coals and packing.
"""

import logging

from mixlab.models.blend import BlendProfile, HeatSetup, SetupRecommendation
from mixlab.utils.constants import (
    COAL_LIMITS,
    HEAT_SETUP_ADJUSTMENTS,
    STANDARD_BOWL_GRAMS,
    STRENGTH_SETUP_TABLE,
)
from mixlab.utils.helpers import clamp, heat_band_for, strength_tier_for

# Configure logging
logger = logging.getLogger(__name__)

# Heat band assumed when only a strength tier is known
DEFAULT_HEAT_BAND = "medium"


def _clamp_coals(coals: int) -> int:
    return int(clamp(coals, COAL_LIMITS[0], COAL_LIMITS[1]))


class SetupAdvisor:
    """Table-driven bowl, packing, coal and heat-up advice."""

    def recommend(self, profile: BlendProfile) -> SetupRecommendation:
        """
        Recommend a setup for a blend profile.

        Algorithm:
        1. Strength tier of final_strength selects the base row
           (bowl type, packing, coals, heat-up time)
        2. Heat band of final_heat_load adjusts coals and heat-up time
        3. Coals are clamped to the allowed range

        Args:
            profile: Aggregated blend profile

        Returns:
            SetupRecommendation: bowl type, packing, coals, heat-up minutes
        """
        tier = strength_tier_for(profile.final_strength)
        band = heat_band_for(profile.final_heat_load)
        row = STRENGTH_SETUP_TABLE[tier]
        adjustment = HEAT_SETUP_ADJUSTMENTS[band]

        setup = SetupRecommendation(
            bowl_type=row["bowl_type"],
            packing=row["packing"],
            coals=_clamp_coals(row["coals"] + adjustment["coals"]),
            heat_up_minutes=row["heat_up_minutes"] + adjustment["heat_up_minutes"]
        )
        logger.debug(f"Setup for tier={tier}, heat band={band}: {setup}")
        return setup

    def heat_recommendation_from_strength(self, strength: str, total_grams: int) -> HeatSetup:
        """
        Coarse heat setup from a strength tier and bowl weight.

        Bowls heavier than the standard range get one more coal, lighter
        ones one fewer.

        Args:
            strength: Strength tier (light/medium/strong)
            total_grams: Bowl weight in grams

        Returns:
            HeatSetup: coals and packing

        Raises:
            ValueError: If strength is not a known tier
        """
        if strength not in STRENGTH_SETUP_TABLE:
            raise ValueError(f"Unknown strength tier: {strength}")

        row = STRENGTH_SETUP_TABLE[strength]
        coals = row["coals"] + HEAT_SETUP_ADJUSTMENTS[DEFAULT_HEAT_BAND]["coals"]

        low_grams, high_grams = STANDARD_BOWL_GRAMS
        if total_grams > high_grams:
            coals += 1
        elif total_grams < low_grams:
            coals -= 1

        return HeatSetup(coals=_clamp_coals(coals), packing=row["packing"])

"""
Tests for the profile aggregator, setup advisor, validation and the
build-a-blend pipeline.
"""

import pytest

from mixlab.models.blend import BlendProfile
from mixlab.services.blend_calculator import BlendCalculator
from mixlab.services.profile_aggregator import overheating_risk_for
from mixlab.utils.constants import STRENGTH_RANGES, STRENGTH_TIERS
from mixlab.utils.validators import validate_blend


def profile(strength, heat):
    return BlendProfile(
        final_strength=strength,
        final_heat_load=heat,
        overheating_risk=overheating_risk_for(heat)
    )


# ==================== Profile aggregator ====================

def test_weighted_profile(aggregator, blend_of):
    result = aggregator.aggregate(blend_of(("berry1", 60), ("citrus1", 40)))
    assert result.final_strength == 5      # 5*0.6 + 6*0.4 = 5.4
    assert result.final_heat_load == 6     # 6*0.6 + 7*0.4 = 6.4
    assert result.overheating_risk == "medium"


def test_profile_rounds_halves_up(aggregator, blend_of):
    result = aggregator.aggregate(blend_of(("berry1", 50), ("citrus1", 50)))
    assert result.final_strength == 6      # 5.5
    assert result.final_heat_load == 7     # 6.5


def test_heat_resistant_blend_is_low_risk(aggregator, blend_of):
    result = aggregator.aggregate(blend_of(("spice1", 60), ("mint1", 40)))
    assert result.final_strength == 8
    assert result.final_heat_load == 9
    assert result.overheating_risk == "low"


def test_delicate_blend_is_high_risk(aggregator, blend_of):
    result = aggregator.aggregate(blend_of(("dessert1", 80), ("berry2", 20)))
    assert result.final_strength == 2
    assert result.final_heat_load == 3
    assert result.overheating_risk == "high"


# ==================== Setup advisor ====================

def test_strong_heat_resistant_setup(advisor):
    setup = advisor.recommend(profile(8, 9))
    assert setup.bowl_type == "phunnel"
    assert setup.packing == "dense"
    assert setup.coals == 4
    assert setup.heat_up_minutes == 6


def test_light_delicate_setup(advisor):
    setup = advisor.recommend(profile(2, 3))
    assert setup.bowl_type == "turka"
    assert setup.packing == "fluffy"
    assert setup.coals == 3
    assert setup.heat_up_minutes == 6


def test_more_strength_never_means_more_coals(advisor):
    for heat in (3, 6, 9):
        coals = [advisor.recommend(profile(s, heat)).coals for s in (2, 6, 9)]
        assert coals == sorted(coals, reverse=True)


def test_more_heat_resistance_means_more_coals_and_less_waiting(advisor):
    for strength in (2, 6, 9):
        setups = [advisor.recommend(profile(strength, h)) for h in (3, 6, 9)]
        coals = [s.coals for s in setups]
        minutes = [s.heat_up_minutes for s in setups]
        assert coals == sorted(coals)
        assert minutes == sorted(minutes, reverse=True)


@pytest.mark.parametrize("tier,grams,coals,packing", [
    ("strong", 20, 3, "dense"),
    ("medium", 20, 3, "semi-dense"),
    ("light", 20, 4, "fluffy"),
    ("light", 30, 5, "fluffy"),
    ("medium", 10, 2, "semi-dense"),
])
def test_heat_recommendation_from_strength(advisor, tier, grams, coals, packing):
    heat = advisor.heat_recommendation_from_strength(tier, grams)
    assert heat.coals == coals
    assert heat.packing == packing


def test_heat_recommendation_rejects_unknown_tier(advisor):
    with pytest.raises(ValueError):
        advisor.heat_recommendation_from_strength("extreme", 20)


def test_coarse_lookup_agrees_with_full_advisor(advisor):
    # Medium heat band, standard bowl weight
    for tier in STRENGTH_TIERS:
        low, high = STRENGTH_RANGES[tier]
        for strength in range(low, high + 1):
            for heat in (5, 6, 7):
                full = advisor.recommend(profile(strength, heat))
                for grams in (15, 20, 25):
                    coarse = advisor.heat_recommendation_from_strength(tier, grams)
                    assert (coarse.coals, coarse.packing) == (full.coals, full.packing)


# ==================== Validation ====================

def test_validation_messages(blend_of, caps):
    cases = [
        (blend_of(("berry1", 100)), "Select 2–3 tobaccos."),
        (blend_of(("berry1", 25), ("citrus1", 25), ("dessert1", 25), ("spice1", 25)),
         "Select 2–3 tobaccos."),
        (blend_of(("berry1", 60), ("citrus1", 30)), "Percents must sum to 100."),
        (blend_of(("berry1", 100), ("citrus1", 0)), "Each percent must be > 0."),
    ]
    for blend, message in cases:
        validation = validate_blend(blend, caps)
        assert not validation.ok
        assert validation.error == message


def test_validation_rejects_duplicates_and_cap_violations(blend_of, caps):
    duplicate = validate_blend(blend_of(("berry1", 50), ("berry1", 50)), caps)
    assert not duplicate.ok
    assert "already in the blend" in duplicate.error

    over_cap = validate_blend(blend_of(("mint1", 30), ("berry1", 70)), caps)
    assert not over_cap.ok
    assert "limited to 25%" in over_cap.error


def test_valid_blend(blend_of, caps):
    assert validate_blend(blend_of(("mint1", 25), ("berry1", 75)), caps).ok


# ==================== Pipeline ====================

def test_analyze_valid_blend(caps, scorer, aggregator, advisor, blend_of):
    calculator = BlendCalculator(caps, scorer, aggregator, advisor)
    analysis = calculator.analyze(blend_of(("berry1", 60), ("citrus1", 40)))
    assert analysis.ok
    assert analysis.compatibility.score == 95
    assert analysis.profile.final_strength == 5
    assert analysis.setup.packing == "semi-dense"


def test_analyze_refuses_invalid_blend(caps, scorer, aggregator, advisor, blend_of):
    calculator = BlendCalculator(caps, scorer, aggregator, advisor)
    analysis = calculator.analyze(blend_of(("berry1", 60), ("citrus1", 30)))
    assert not analysis.ok
    assert analysis.error == "Percents must sum to 100."
    assert analysis.compatibility is None
    assert analysis.profile is None
    assert analysis.setup is None

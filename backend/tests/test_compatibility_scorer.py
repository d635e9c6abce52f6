"""
Tests for the compatibility scorer.
"""

from itertools import combinations

import pytest

from mixlab.models.blend import BlendItem
from mixlab.services.compatibility_scorer import (
    CompatibilityScorer,
    classify_pair,
    level_for,
)


def even_blend(items):
    """Blend of the given catalog items; percents do not affect the score."""
    share = 100 // len(items)
    blend = [BlendItem(item=item, percent=share) for item in items]
    return blend


def test_mutual_pairing_is_perfect(scorer, blend_of):
    result = scorer.score(blend_of(("berry1", 50), ("citrus1", 50)))
    assert result.score == 95
    assert result.level == "perfect"
    assert result.details == ["BERRY1 + CITRUS1: excellent pairing (+25)"]


def test_one_way_pairing(scorer, blend_of):
    result = scorer.score(blend_of(("berry1", 50), ("dessert1", 50)))
    assert result.score == 82
    assert result.level == "good"
    assert "BERRY1 + DESSERT1: good pairing (+12)" in result.details


def test_clash_is_poor(scorer, blend_of):
    result = scorer.score(blend_of(("citrus1", 50), ("spice1", 50)))
    assert result.score == 40
    assert result.level == "poor"
    assert result.details == ["CITRUS1 + SPICE1: flavors may clash (-30)"]


def test_same_family_gets_small_bonus_and_advisory(scorer, blend_of):
    result = scorer.score(blend_of(("berry1", 50), ("berry2", 50)))
    assert result.score == 75
    assert result.details[0] == "BERRY1 + BERRY2: same flavor family (+5)"
    assert any("All tobaccos are berry" in line for line in result.details)


def test_mint_bonus_and_freshness_line(scorer, blend_of):
    result = scorer.score(blend_of(("berry1", 75), ("mint1", 25)))
    assert result.score == 100
    assert result.details[0] == "MINT1 adds freshness to any mix"


def test_strength_gap_advisory_does_not_change_score(scorer, blend_of):
    result = scorer.score(blend_of(("dessert1", 50), ("spice1", 50)))
    assert result.score == 82
    assert any("strength gap" in line for line in result.details)


def test_three_item_score_uses_pair_mean(scorer, blend_of):
    # mutual +25, clash -30, clash -30 -> mean -11.67 -> 58.33
    result = scorer.score(blend_of(("berry1", 40), ("citrus1", 30), ("spice1", 30)))
    assert result.score == 58
    assert result.level == "okay"
    assert len([line for line in result.details if " + " in line]) == 3


def test_details_are_capped(blend_of):
    scorer = CompatibilityScorer(max_details=2)
    result = scorer.score(blend_of(("berry1", 40), ("citrus1", 35), ("mint1", 25)))
    assert len(result.details) == 2


def test_classify_pair_checks_family_first(fixture_catalog):
    get = fixture_catalog.get
    assert classify_pair(get("mint1"), get("mint2")) == "same_family"
    assert classify_pair(get("berry1"), get("citrus1")) == "mutual"
    assert classify_pair(get("citrus2"), get("mint1")) == "one_way"
    assert classify_pair(get("spice1"), get("berry1")) == "clash"


@pytest.mark.parametrize("score,level", [
    (100, "perfect"), (90, "perfect"), (89, "good"), (70, "good"),
    (69, "okay"), (50, "okay"), (49, "poor"), (0, "poor"),
])
def test_level_bands(score, level):
    assert level_for(score) == level


def test_score_is_deterministic(scorer, blend_of):
    blend = blend_of(("berry1", 40), ("citrus1", 35), ("mint1", 25))
    assert scorer.score(blend).model_dump() == scorer.score(blend).model_dump()


def test_same_family_same_pairs_swap_keeps_score(scorer, blend_of):
    # berry1 and berry2 share a family and a pairing list
    with_first = scorer.score(blend_of(("berry1", 50), ("citrus1", 30), ("dessert1", 20)))
    with_second = scorer.score(blend_of(("berry2", 50), ("citrus1", 30), ("dessert1", 20)))
    assert with_first.score == with_second.score


def test_score_bounds_fixture_catalog(scorer, fixture_catalog):
    for size in (2, 3):
        for combo in combinations(fixture_catalog.items, size):
            result = scorer.score(even_blend(combo))
            assert 0 <= result.score <= 100
            assert result.level == level_for(result.score)


def test_score_bounds_default_catalog_pairs(scorer, default_catalog):
    for combo in combinations(default_catalog.items, 2):
        result = scorer.score(even_blend(combo))
        assert 0 <= result.score <= 100

"""
Tests for the blend normalizer and cap table.
"""

import random

import pytest

from mixlab.config import Settings
from mixlab.services.blend_normalizer import CapTable
from mixlab.utils.validators import validate_blend


def percents(blend):
    return [bi.percent for bi in blend]


def ids(blend):
    return [bi.item.id for bi in blend]


# ==================== CapTable ====================

def test_cap_table_from_settings(default_catalog):
    caps = CapTable.from_settings(Settings(MINT_CAP_PERCENT=25, STRONG_ITEM_CAP_PERCENT=10))
    assert caps.cap_for(default_catalog.get("tg1")) == 25      # Cane Mint
    assert caps.cap_for(default_catalog.get("ds1")) == 10      # Supernova: mint and hard cap
    assert caps.cap_for(default_catalog.get("mh1")) is None


def test_cap_table_takes_tightest_entry(fixture_catalog, caps):
    assert caps.cap_for(fixture_catalog.get("mint1")) == 25
    assert caps.cap_for(fixture_catalog.get("mint2")) == 10
    assert not caps.is_capped(fixture_catalog.get("berry1"))


# ==================== normalize ====================

def test_two_item_slider(normalizer, blend_of):
    blend = blend_of(("berry1", 60), ("citrus1", 40))
    result = normalizer.normalize(blend, "berry1", 80)
    assert percents(result) == [80, 20]


def test_proportional_split_across_two_uncapped(normalizer, blend_of):
    blend = blend_of(("berry1", 50), ("citrus1", 30), ("dessert1", 20))
    result = normalizer.normalize(blend, "berry1", 20)
    assert percents(result) == [20, 48, 32]


def test_rounding_remainder_goes_to_first_uncapped(normalizer, blend_of):
    blend = blend_of(("berry1", 40), ("citrus1", 35), ("dessert1", 25))
    result = normalizer.normalize(blend, "berry1", 33)
    # 67 split 35:25 -> 39.08 / 27.92, floored to 39 / 27, remainder 1 to citrus1
    assert percents(result) == [33, 40, 27]
    assert sum(percents(result)) == 100


def test_zero_shares_split_equally(normalizer, blend_of):
    blend = blend_of(("berry1", 100), ("citrus1", 0), ("dessert1", 0))
    result = normalizer.normalize(blend, "berry1", 40)
    assert percents(result) == [40, 30, 30]


def test_new_value_clamped_to_range(normalizer, blend_of):
    blend = blend_of(("berry1", 60), ("citrus1", 40))
    assert percents(normalizer.normalize(blend, "berry1", 150)) == [100, 0]
    assert percents(normalizer.normalize(blend, "berry1", -10)) == [0, 100]


def test_capped_item_slider_stops_at_cap(normalizer, blend_of):
    blend = blend_of(("mint1", 20), ("berry1", 80))
    result = normalizer.normalize(blend, "mint1", 60)
    assert percents(result) == [25, 75]


def test_capped_items_untouched_by_redistribution(normalizer, blend_of):
    blend = blend_of(("mint1", 25), ("berry1", 40), ("citrus1", 35))
    result = normalizer.normalize(blend, "berry1", 60)
    assert percents(result) == [25, 60, 15]


def test_over_cap_input_is_pulled_back(normalizer, blend_of):
    blend = blend_of(("mint2", 30), ("berry1", 40), ("citrus1", 30))
    result = normalizer.normalize(blend, "berry1", 50)
    assert percents(result) == [10, 50, 40]


def test_single_uncapped_slot_absorbs_remaining(normalizer, blend_of):
    blend = blend_of(("mint1", 25), ("berry1", 75))
    result = normalizer.normalize(blend, "berry1", 50)
    assert percents(result) == [25, 75]


def test_normalize_does_not_mutate_input(normalizer, blend_of):
    blend = blend_of(("berry1", 60), ("citrus1", 40))
    normalizer.normalize(blend, "berry1", 10)
    assert percents(blend) == [60, 40]


def test_normalize_rejects_empty_blend(normalizer):
    with pytest.raises(ValueError):
        normalizer.normalize([], "berry1", 50)


def test_normalize_rejects_unknown_item(normalizer, blend_of):
    blend = blend_of(("berry1", 60), ("citrus1", 40))
    with pytest.raises(ValueError, match="not part of the blend"):
        normalizer.normalize(blend, "spice1", 50)


# ==================== rebalance / add / remove ====================

def test_add_item_next_to_capped_mint(normalizer, blend_of, fixture_catalog):
    blend = blend_of(("mint1", 25), ("berry1", 40), ("citrus1", 35))
    result = normalizer.add_item(blend, fixture_catalog.get("dessert1"))
    assert ids(result) == ["mint1", "berry1", "citrus1", "dessert1"]
    assert percents(result) == [25, 25, 25, 25]


def test_rebalance_remainder_to_first_uncapped(normalizer, blend_of):
    blend = blend_of(("mint1", 25), ("mint2", 10), ("berry1", 0), ("citrus1", 0))
    result = normalizer.rebalance(blend)
    assert percents(result) == [25, 10, 33, 32]


def test_capped_item_enters_at_cap(normalizer, blend_of, fixture_catalog):
    blend = blend_of(("berry1", 50), ("citrus1", 50))
    result = normalizer.add_item(blend, fixture_catalog.get("mint1"))
    assert percents(result) == [38, 37, 25]


def test_add_existing_item_is_noop(normalizer, blend_of, fixture_catalog):
    blend = blend_of(("berry1", 70), ("citrus1", 30))
    result = normalizer.add_item(blend, fixture_catalog.get("berry1"))
    assert percents(result) == [70, 30]


def test_remove_item_rebalances(normalizer, blend_of):
    blend = blend_of(("berry1", 38), ("citrus1", 37), ("mint1", 25))
    result = normalizer.remove_item(blend, "citrus1")
    assert ids(result) == ["berry1", "mint1"]
    assert percents(result) == [75, 25]


def test_remove_absent_and_last_item(normalizer, blend_of):
    blend = blend_of(("berry1", 100))
    assert percents(normalizer.remove_item(blend, "spice1")) == [100]
    assert normalizer.remove_item(blend, "berry1") == []


def test_all_capped_blend_keeps_sum_and_fails_validation(normalizer, blend_of, caps):
    blend = blend_of(("mint1", 25), ("mint2", 10))
    result = normalizer.rebalance(blend)
    assert sum(percents(result)) == 100
    validation = validate_blend(result, caps)
    assert not validation.ok
    assert validation.error == "Blend needs at least one uncapped tobacco"


# ==================== Invariants ====================

def test_sum_and_cap_invariants_over_edit_sequence(normalizer, fixture_catalog, caps):
    rng = random.Random(1234)
    pool = ["berry1", "citrus1", "dessert1", "mint1", "mint2"]
    blend = normalizer.add_item([], fixture_catalog.get("berry1"))

    for _ in range(500):
        current = ids(blend)
        action = rng.choice(["slide", "slide", "add", "remove"])

        if action == "add" and len(current) < 3:
            candidate = rng.choice([i for i in pool if i not in current])
            blend = normalizer.add_item(blend, fixture_catalog.get(candidate))
        elif action == "remove" and len(current) > 1:
            victim = rng.choice(current)
            rest = [bi for bi in blend if bi.item.id != victim]
            # Keep at least one uncapped tobacco in the blend
            if any(not caps.is_capped(bi.item) for bi in rest):
                blend = normalizer.remove_item(blend, victim)
        else:
            blend = normalizer.normalize(blend, rng.choice(current), rng.randint(-20, 130))

        assert sum(percents(blend)) == 100
        assert all(p >= 0 for p in percents(blend))
        for bi in blend:
            cap = caps.cap_for(bi.item)
            if cap is not None:
                assert bi.percent <= cap

"""Tests for tiered outfit assembly."""
from __future__ import annotations

import random
import sys
from pathlib import Path
from typing import List

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.compatibility import CompatibilityGate
from logic.outfit_assembler import AssemblerSettings, OutfitAssembler, generate
from logic.outfit_scoring import BASE_SCORES, STYLE_PREFERENCE_BONUS, USER_UPLOAD_BONUS
from models.garment import Garment
from models.outfit import TIER_FALLBACK, TIER_POLICY, TIER_STRICT

UPLOAD_TOP = "https://abc.supabase.co/storage/v1/object/public/closet/top.png"


def _g(item_id: str, category: str, image_ref: str) -> Garment:
    return Garment(item_id=item_id, image_ref=image_ref, category=category)


def _essentials() -> List[Garment]:
    return [
        _g("1", "Tops", "plain_white_tee"),
        _g("2", "Bottoms", "black_jeans"),
        _g("3", "Shoes", "white_sneaker"),
    ]


def _big_closet() -> List[Garment]:
    return [
        _g("tee", "Tops", "plain_white_tee"),
        _g("graphic", "Tops", "black_graphic_tee"),
        _g("polo", "Tops", "navy_polo_cotton"),
        _g("oxford", "Tops", "white_oxford_shirt"),
        _g("hoodie", "Tops", "black_tech_hoodie"),
        _g("jeans", "Bottoms", "black_jeans"),
        _g("cargo", "Bottoms", "olive_cargo_pants"),
        _g("chino", "Bottoms", "beige_chino"),
        _g("trouser", "Bottoms", "grey_wool_trouser"),
        _g("jogger", "Bottoms", "grey_jogger"),
        _g("sneaker", "Shoes", "white_sneaker"),
        _g("loafer", "Shoes", "brown_suede_loafer"),
        _g("runner", "Shoes", "grey_runner_shoe"),
        _g("watch", "Accessories", "silver_seiko_watch"),
        _g("coat", "Outerwear", "camel_wool_overcoat"),
    ]


def _assembler(seed: int = 3, **settings) -> OutfitAssembler:
    return OutfitAssembler(rng=random.Random(seed), settings=AssemblerSettings(**settings))


def test_casual_essentials_produce_complete_outfit() -> None:
    outfits = _assembler().generate(_essentials(), "Casual")
    assert outfits
    first = outfits[0]
    assert {"1", "2"}.issubset(first.item_ids)
    assert set(first.item_ids).issubset({"1", "2", "3"})
    assert first.is_fallback is False
    assert first.missing_category_warning is None
    assert first.score >= 0.9


def test_role_order_is_top_layer_bottom_shoes_accessory() -> None:
    closet = _essentials() + [_g("4", "Accessories", "black_cap"), _g("5", "Outerwear", "denim_jacket")]
    outfits = _assembler().generate(closet, "Casual", weather="Cold")
    order = {"Tops": 0, "Outerwear": 1, "Bottoms": 2, "Shoes": 3, "Accessories": 4}
    for outfit in outfits:
        ranks = [order[item.category] for item in outfit.items]
        assert ranks == sorted(ranks)
    assert any("5" in outfit.item_ids for outfit in outfits)


def test_hot_weather_skips_layer() -> None:
    closet = _essentials() + [_g("5", "Outerwear", "denim_jacket")]
    outfits = _assembler().generate(closet, "Casual", weather="Hot")
    assert outfits
    assert all("5" not in outfit.item_ids for outfit in outfits)


def test_work_with_streetwear_closet_returns_empty() -> None:
    assert _assembler().generate(_essentials(), "Work") == []


def test_formal_zero_inventory_has_reason() -> None:
    result = _assembler().generate_with_diagnostics(_essentials(), "Dinner")
    assert result.outfits == []
    assert result.diagnostics["reason"] == "no_compatible_items"
    assert TIER_FALLBACK not in result.diagnostics["tiers"]


def test_dinner_with_single_top_yields_partial_fallback() -> None:
    outfits = _assembler().generate([_g("1", "Tops", "navy_polo_cotton")], "Dinner")
    assert len(outfits) == 1
    outfit = outfits[0]
    assert outfit.is_fallback is True
    assert outfit.tier == TIER_FALLBACK
    assert outfit.item_ids == ("1",)
    assert "bottoms" in outfit.missing_category_warning
    assert outfit.title == "Dinner Look (Partial)"
    assert outfit.score == BASE_SCORES[TIER_FALLBACK]


def test_bottom_only_fallback_names_missing_tops() -> None:
    outfits = _assembler().generate([_g("2", "Bottoms", "black_jeans"), _g("3", "Shoes", "white_sneaker")], "Casual")
    assert outfits
    assert all(outfit.is_fallback for outfit in outfits)
    assert "tops" in outfits[0].missing_category_warning


def test_shoes_only_closet_returns_empty() -> None:
    assert _assembler().generate([_g("3", "Shoes", "white_sneaker")], "Casual") == []


def test_empty_closet_returns_empty() -> None:
    assert _assembler().generate([], "Casual") == []
    assert _assembler().generate([], "Work") == []


def test_sport_never_includes_trousers() -> None:
    for seed in range(10):
        outfits = _assembler(seed).generate(_big_closet(), "Sport")
        assert outfits
        for outfit in outfits:
            assert "trouser" not in outfit.item_ids
            assert "jeans" not in outfit.item_ids
            assert "chino" not in outfit.item_ids
            assert "cargo" not in outfit.item_ids


@pytest.mark.parametrize("occasion", ["Casual", "Work", "Party", "Date", "Dinner", "Sport", "Mystery"])
def test_outfits_are_unique_sorted_and_compatible(occasion: str) -> None:
    gate = CompatibilityGate()
    for seed in range(5):
        outfits = _assembler(seed).generate(_big_closet(), occasion)
        keys = [outfit.id_key for outfit in outfits]
        assert len(keys) == len(set(keys))
        scores = [outfit.score for outfit in outfits]
        assert scores == sorted(scores, reverse=True)
        assert len(outfits) <= 5
        for outfit in outfits:
            assert all(gate.is_compatible(item, occasion) for item in outfit.items)


@pytest.mark.parametrize("occasion", ["Casual", "Dinner", "Sport", "Work"])
def test_no_fallback_when_complete_outfit_exists(occasion: str) -> None:
    outfits = _assembler().generate(_big_closet(), occasion)
    assert outfits
    assert not any(outfit.is_fallback for outfit in outfits)


def test_strict_tier_is_capped_and_tagged() -> None:
    result = _assembler().generate_with_diagnostics(_big_closet(), "Dinner")
    strict = [outfit for outfit in result.outfits if outfit.tier == TIER_STRICT]
    assert 1 <= len(strict) <= 3
    for outfit in strict:
        assert outfit.moodboard_id in {"om-riviera", "om-city"}
        assert outfit.style_tag == "Old Money"
        assert outfit.score == BASE_SCORES[TIER_STRICT]
    assert result.diagnostics["tiers"][TIER_STRICT]["accepted"] == len(strict)


def test_work_uses_policy_tier_only() -> None:
    outfits = _assembler().generate(_big_closet(), "Work")
    assert outfits
    assert {outfit.tier for outfit in outfits} == {TIER_POLICY}
    assert all(outfit.style_tag == "Business Casual" for outfit in outfits)
    assert all(outfit.title == "Work Look" for outfit in outfits)


def test_user_upload_bonus_and_style_preference_bonus() -> None:
    closet = [_g("up", "Tops", UPLOAD_TOP), _g("jeans", "Bottoms", "black_jeans")]
    outfits = _assembler().generate(closet, "Party", style_preferences=["streetwear", "nonsense"])
    assert outfits
    assert outfits[0].score == pytest.approx(BASE_SCORES[TIER_POLICY] + USER_UPLOAD_BONUS)

    outfits = _assembler().generate(closet, "Party", style_preferences=["casual"])
    assert outfits[0].score == pytest.approx(min(1.0, BASE_SCORES[TIER_POLICY] + USER_UPLOAD_BONUS + STYLE_PREFERENCE_BONUS))


def test_seeded_runs_are_reproducible() -> None:
    first = _assembler(seed=42).generate(_big_closet(), "Casual")
    second = _assembler(seed=42).generate(_big_closet(), "Casual")
    assert [outfit.outfit_id for outfit in first] == [outfit.outfit_id for outfit in second]
    assert [outfit.item_ids for outfit in first] == [outfit.item_ids for outfit in second]


def test_random_sampling_path_for_large_pools() -> None:
    tops = [_g(f"t{i}", "Tops", f"plain_white_shirt_{i}") for i in range(12)]
    bottoms = [_g(f"b{i}", "Bottoms", f"black_jeans_{i}") for i in range(12)]
    outfits = _assembler(exhaustive_limit=4, max_attempts=10).generate(tops + bottoms, "Party")
    assert 1 <= len(outfits) <= 2
    assert len({outfit.id_key for outfit in outfits}) == len(outfits)


def test_stale_pool_entries_are_rejected_at_selection() -> None:
    class FlakyGate(CompatibilityGate):
        def is_compatible(self, garment, occasion):
            if garment.item_id == "2":
                return False
            return super().is_compatible(garment, occasion)

    assembler = OutfitAssembler(gate=FlakyGate(), rng=random.Random(1))
    assert assembler.generate(_essentials(), "Casual") == []


def test_module_level_generate() -> None:
    outfits = generate(_essentials(), "Casual", rng=random.Random(5))
    assert outfits and outfits[0].score >= 0.9


@pytest.mark.parametrize("weather", ["Cold", "Rainy"])
def test_required_layer_without_outerwear_is_reported(weather: str) -> None:
    result = _assembler().generate_with_diagnostics(_essentials(), "Casual", weather=weather)
    assert result.outfits
    assert result.diagnostics["layer_policy"] == "required"
    assert weather in result.diagnostics["layer_warning"]


def test_required_layer_is_filled_when_available() -> None:
    closet = _essentials() + [_g("5", "Outerwear", "denim_jacket")]
    result = _assembler().generate_with_diagnostics(closet, "Casual", weather="Cold")
    assert result.diagnostics["layer_warning"] is None
    assert all("5" in outfit.item_ids for outfit in result.outfits)


@pytest.mark.parametrize("weather", [None, "Sunny", "Hot"])
def test_optional_or_avoided_layer_never_warns(weather) -> None:
    result = _assembler().generate_with_diagnostics(_essentials(), "Casual", weather=weather)
    assert result.diagnostics["layer_warning"] is None

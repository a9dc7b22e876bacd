"""Collage layout and swap behaviour."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.collage import generate_collage_spec
from models.garment import Garment
from models.moodboards import DEFAULT_BACKGROUND
from models.outfit import TIER_FALLBACK, Outfit


def _outfit(**overrides) -> Outfit:
    values = dict(
        outfit_id="o1",
        items=(
            Garment("1", "navy_polo_linen", "Tops"),
            Garment("2", "beige_chino", "Bottoms"),
            Garment("3", "brown_loafer", "Shoes"),
        ),
        title="Riviera Evening Look",
        score=0.95,
        style_tag="Old Money",
        moodboard_id="om-riviera",
    )
    values.update(overrides)
    return Outfit(**values)


def test_collage_uses_moodboard_background_and_banner() -> None:
    result = generate_collage_spec(_outfit())
    collage = result.collage
    assert collage["title"] == "Riviera Evening Look"
    assert collage["background_color"] == "#F3EDE2"
    assert collage["banner"] == "Styled after the Riviera Evening moodboard (Old Money)."
    assert [sticker["role"] for sticker in collage["stickers"]] == ["Tops", "Bottoms", "Shoes"]
    assert [entry["item_id"] for entry in result.diagnostics["layout"]] == ["1", "2", "3"]


def test_collage_without_moodboard_uses_default_background() -> None:
    collage = generate_collage_spec(_outfit(moodboard_id=None, style_tag="Business Casual")).collage
    assert collage["background_color"] == DEFAULT_BACKGROUND
    assert collage["banner"] == "Picked for Business Casual."


def test_fallback_collage_shows_warning() -> None:
    warning = "No compatible bottoms found for Dinner; showing a partial look."
    outfit = _outfit(
        items=(Garment("1", "navy_polo_cotton", "Tops"),),
        moodboard_id=None,
        is_fallback=True,
        tier=TIER_FALLBACK,
        missing_category_warning=warning,
    )
    collage = generate_collage_spec(outfit).collage
    assert collage["banner"] == warning
    assert collage["is_fallback"] is True


def test_repeated_roles_do_not_overlap() -> None:
    outfit = _outfit(items=(Garment("a", "watch", "Accessories"), Garment("b", "cap", "Accessories")))
    stickers = generate_collage_spec(outfit).collage["stickers"]
    assert (stickers[0]["x"], stickers[0]["y"]) != (stickers[1]["x"], stickers[1]["y"])
    assert all(0 <= sticker["x"] <= 0.9 and 0 <= sticker["y"] <= 0.9 for sticker in stickers)


def test_swap_returns_new_outfit() -> None:
    outfit = _outfit()
    swapped = outfit.with_swapped_item("2", Garment("9", "navy_linen_trouser", "Bottoms"))
    assert swapped.item_ids == ("1", "9", "3")
    assert outfit.item_ids == ("1", "2", "3")
    assert swapped.outfit_id == outfit.outfit_id

    with pytest.raises(KeyError):
        outfit.with_swapped_item("missing", Garment("9", "x", "Bottoms"))

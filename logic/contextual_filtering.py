"""Deterministic weather filtering applied before outfit assembly."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from logic.compatibility import FilteringResult
from models.garment import Garment
from models.taxonomy import keyword_hit, normalize_weather

LAYER_REQUIRED = "required"
LAYER_OPTIONAL = "optional"
LAYER_AVOID = "avoid"

# weather -> ((categories, keywords or None for any item, reason), ...)
_WEATHER_RULES: Dict[str, Tuple[Tuple[Tuple[str, ...], Optional[Tuple[str, ...]], str], ...]] = {
    "Rainy": ((("Shoes",), ("suede", "canvas"), "not suitable for precipitation"),),
    "Cold": (
        (("Tops", "Bottoms"), ("linen", "short", "tank"), "too light for cold weather"),
    ),
    "Hot": (
        (("Outerwear",), None, "outer layer skipped in heat"),
        (("Tops", "Bottoms"), ("wool", "fleece", "knit"), "too warm for hot weather"),
    ),
}

_LAYER_POLICY = {
    "Cold": LAYER_REQUIRED,
    "Rainy": LAYER_REQUIRED,
    "Hot": LAYER_AVOID,
    "Sunny": LAYER_OPTIONAL,
}


def layer_policy(weather: Optional[str]) -> str:
    """Outerwear slot policy for ``weather``.

    ``required`` and ``optional`` both fill the slot when a layer is available;
    a required layer that the closet cannot supply is reported as a warning.
    """

    return _LAYER_POLICY.get(normalize_weather(weather) or "", LAYER_OPTIONAL)


def filter_by_weather(items: Sequence[Garment], weather: Optional[str]) -> FilteringResult:
    """Filter garments using weather-derived rules."""

    canonical = normalize_weather(weather)
    rules = _WEATHER_RULES.get(canonical or "", ())
    removed: Dict[str, str] = {}
    kept: List[Garment] = []

    for item in items:
        reason = None
        text = item.search_text
        for categories, keywords, rule_reason in rules:
            if item.category in categories and (keywords is None or keyword_hit(text, keywords)):
                reason = rule_reason
                break
        if reason:
            removed[item.item_id] = reason
        else:
            kept.append(item)

    debug = {
        "input_count": len(items),
        "kept_count": len(kept),
        "removed_count": len(removed),
        "weather": canonical,
        "layer_policy": layer_policy(canonical),
    }
    return FilteringResult(items=kept, removed=removed, debug=debug)


__all__ = ["filter_by_weather", "layer_policy", "LAYER_REQUIRED", "LAYER_OPTIONAL", "LAYER_AVOID"]

"""Canonical taxonomy definitions for garments, vibes and occasions.

This module centralises the closed label sets used across the rule engine.
Helper functions keep normalisation consistent across the classifier, the
compatibility gate and the outfit assembler.
"""

import logging
from typing import Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a lookup key."""

    return " ".join(str(value).strip().lower().replace("_", " ").split())


CATEGORIES: List[str] = ["Tops", "Bottoms", "Shoes", "Outerwear", "Accessories", "Other"]

SPORTY = "Sporty"
CASUAL = "Casual"
STREETWEAR = "Streetwear"
SMART_CASUAL = "Smart Casual"
OLD_MONEY = "Old Money"
BUSINESS = "Business"
FORMAL = "Formal"
PARTY = "Party"

VIBES: List[str] = [SPORTY, CASUAL, STREETWEAR, SMART_CASUAL, OLD_MONEY, BUSINESS, FORMAL, PARTY]

OCCASIONS: List[str] = ["Casual", "Work", "Party", "Date", "Dinner", "Sport"]
DEFAULT_OCCASION = "Casual"

OCCASION_ALIASES: Dict[str, str] = {
    "athleisure": "Sport",
    "old money": "Dinner",
    "streetwear": "Casual",
}

WEATHERS: List[str] = ["Sunny", "Rainy", "Cold", "Hot"]

STYLE_THEMES: Dict[str, str] = {
    "Casual": "Streetwear & Comfort",
    "Work": "Business Casual",
    "Party": "Glam & Chic",
    "Date": "Romantic & Elegant",
    "Dinner": "Old Money",
    "Sport": "Athleisure",
}
DEFAULT_STYLE_THEME = "Smart Casual"

_CATEGORY_LOOKUP = {_normalize_key(category): category for category in CATEGORIES}
_CATEGORY_LOOKUP.update({"top": "Tops", "bottom": "Bottoms", "accessory": "Accessories"})
_OCCASION_LOOKUP = {_normalize_key(occasion): occasion for occasion in OCCASIONS}
_VIBE_LOOKUP = {_normalize_key(vibe): vibe for vibe in VIBES}
_WEATHER_LOOKUP = {_normalize_key(weather): weather for weather in WEATHERS}


def validate_category(value: str) -> str:
    """Validate and normalise a garment category.

    Raises a :class:`ValueError` if the category is not part of the closed
    category set.
    """

    key = _normalize_key(value or "")
    if key not in _CATEGORY_LOOKUP:
        raise ValueError(f"Unsupported category '{value}'. Allowed: {CATEGORIES}")
    return _CATEGORY_LOOKUP[key]


def normalize_occasion(value: Optional[str]) -> str:
    """Resolve an occasion key, defaulting to ``Casual`` for unknown values."""

    key = _normalize_key(value or "")
    if key in _OCCASION_LOOKUP:
        return _OCCASION_LOOKUP[key]
    if key in OCCASION_ALIASES:
        return OCCASION_ALIASES[key]
    logger.info("Unknown occasion '%s', defaulting to %s", value, DEFAULT_OCCASION)
    return DEFAULT_OCCASION


def normalize_weather(value: Optional[str]) -> Optional[str]:
    """Return the canonical weather label or ``None`` when unrecognised."""

    if not value:
        return None
    weather = _WEATHER_LOOKUP.get(_normalize_key(value))
    if weather is None:
        logger.info("Unknown weather '%s', ignoring weather rules", value)
    return weather


def normalise_vibes(values: Iterable[str], limit: Optional[int] = None) -> List[str]:
    """Normalise and deduplicate vibe names, dropping anything unknown."""

    normalised: List[str] = []
    for value in values:
        vibe = _VIBE_LOOKUP.get(_normalize_key(value))
        if vibe and vibe not in normalised:
            normalised.append(vibe)
        if limit is not None and len(normalised) >= limit:
            break
    return normalised


def style_theme_for(occasion: Optional[str]) -> str:
    """Map an occasion to the style theme shown alongside generated outfits."""

    return STYLE_THEMES.get(normalize_occasion(occasion), DEFAULT_STYLE_THEME)


def keyword_hit(text: str, keywords: Iterable[str]) -> bool:
    """Return ``True`` when any keyword occurs as a substring of ``text``."""

    return any(keyword in text for keyword in keywords)


__all__ = [
    "CATEGORIES",
    "VIBES",
    "OCCASIONS",
    "WEATHERS",
    "STYLE_THEMES",
    "SPORTY",
    "CASUAL",
    "STREETWEAR",
    "SMART_CASUAL",
    "OLD_MONEY",
    "BUSINESS",
    "FORMAL",
    "PARTY",
    "validate_category",
    "normalize_occasion",
    "normalize_weather",
    "normalise_vibes",
    "style_theme_for",
    "keyword_hit",
]

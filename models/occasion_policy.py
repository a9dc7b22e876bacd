"""Per-occasion rule table consumed by the compatibility gate."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Tuple

from models.taxonomy import (
    BUSINESS,
    CASUAL,
    DEFAULT_OCCASION,
    FORMAL,
    OLD_MONEY,
    SMART_CASUAL,
    SPORTY,
    STREETWEAR,
    normalize_occasion,
)


@dataclass(frozen=True)
class OccasionPolicy:
    """Static rules describing what an occasion accepts.

    ``banned_keywords`` are category-level vetoes checked against the raw
    garment text independently of the vibe system.
    """

    name: str
    target_formality: int
    required_vibes: FrozenSet[str]
    banned_vibes: FrozenSet[str]
    strict_sport: bool = False
    banned_keywords: Tuple[str, ...] = ()
    formal_class: bool = False


_SPORT = OccasionPolicy(
    name="Sport",
    target_formality=2,
    required_vibes=frozenset({SPORTY}),
    banned_vibes=frozenset({BUSINESS, FORMAL, OLD_MONEY, SMART_CASUAL}),
    strict_sport=True,
    banned_keywords=("pant", "trouser", "jeans", "chino", "slack"),
)

_EVENING = dict(
    target_formality=8,
    required_vibes=frozenset({OLD_MONEY, SMART_CASUAL, BUSINESS, FORMAL}),
    banned_vibes=frozenset({SPORTY, STREETWEAR}),
    formal_class=True,
)

_OCCASION_POLICIES: Dict[str, OccasionPolicy] = {
    "Sport": _SPORT,
    "Dinner": OccasionPolicy(name="Dinner", **_EVENING),
    "Date": OccasionPolicy(name="Date", **_EVENING),
    "Work": OccasionPolicy(
        name="Work",
        target_formality=9,
        required_vibes=frozenset({BUSINESS, SMART_CASUAL}),
        banned_vibes=frozenset({SPORTY}),
        formal_class=True,
    ),
    "Party": OccasionPolicy(
        name="Party",
        target_formality=5,
        required_vibes=frozenset({STREETWEAR, CASUAL, SMART_CASUAL}),
        banned_vibes=frozenset({SPORTY}),
    ),
    "Casual": OccasionPolicy(
        name="Casual",
        target_formality=4,
        required_vibes=frozenset({CASUAL, STREETWEAR}),
        banned_vibes=frozenset({FORMAL}),
    ),
}


def get_occasion_policy(occasion: Optional[str]) -> OccasionPolicy:
    """Return the policy for ``occasion``; unknown keys get the Casual policy."""

    return _OCCASION_POLICIES.get(normalize_occasion(occasion), _OCCASION_POLICIES[DEFAULT_OCCASION])


def all_policies() -> Dict[str, OccasionPolicy]:
    return dict(_OCCASION_POLICIES)


__all__ = ["OccasionPolicy", "get_occasion_policy", "all_policies"]

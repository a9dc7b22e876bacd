"""Deterministic scoring for assembled outfits."""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence

from logic.garment_classifier import GarmentClassifier
from models.garment import Garment
from models.outfit import TIER_FALLBACK, TIER_POLICY, TIER_STRICT

BASE_SCORES = {
    TIER_STRICT: 0.95,
    TIER_POLICY: 0.9,
    TIER_FALLBACK: 0.5,
}
USER_UPLOAD_BONUS = 0.05
STYLE_PREFERENCE_BONUS = 0.05


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def score_outfit(
    items: Sequence[Garment],
    tier: str,
    classifier: GarmentClassifier,
    style_preferences: Optional[Iterable[str]] = None,
) -> Dict[str, object]:
    """Calculate the outfit score and the bonuses that produced it.

    Looks containing the user's own photos rank higher, as do looks that share a
    vibe with the user's chosen styles.
    """

    base = BASE_SCORES.get(tier, BASE_SCORES[TIER_FALLBACK])
    has_upload = any(item.is_user_upload for item in items)
    preferred = set(style_preferences or ())
    preference_hit = bool(preferred) and any(
        classifier.classify(item).vibes & preferred for item in items
    )

    score = base
    if has_upload:
        score += USER_UPLOAD_BONUS
    if preference_hit:
        score += STYLE_PREFERENCE_BONUS

    return {
        "score": round(_clamp(score), 4),
        "base": base,
        "user_upload_bonus": USER_UPLOAD_BONUS if has_upload else 0.0,
        "style_preference_bonus": STYLE_PREFERENCE_BONUS if preference_hit else 0.0,
    }


__all__ = ["score_outfit", "BASE_SCORES", "USER_UPLOAD_BONUS", "STYLE_PREFERENCE_BONUS"]

"""Occasion gatekeeper: decides whether a garment may be worn to an occasion."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from logic.garment_classifier import GarmentClassifier, classify
from models.garment import Garment
from models.occasion_policy import OccasionPolicy, get_occasion_policy
from models.style_profile import StyleProfile
from models.taxonomy import keyword_hit

logger = logging.getLogger(__name__)

# strict-sport events accept garments up to this many points above the target
FORMALITY_TOLERANCE = 4


@dataclass(frozen=True)
class CompatibilityVerdict:
    allowed: bool
    reason: Optional[str] = None


@dataclass(frozen=True)
class FilteringResult:
    """Captures the outcome of a single filtering step."""

    items: List[Garment]
    removed: Dict[str, str]
    debug: Dict[str, object]


def evaluate(profile: StyleProfile, policy: OccasionPolicy, text: str = "") -> CompatibilityVerdict:
    """Apply ``policy`` to an already computed profile.

    Keyword bans run first and apply to ambiguous uploads as well; everything
    after the banned-vibe veto is skipped for ambiguous uploads.
    """

    if policy.banned_keywords and keyword_hit(text, policy.banned_keywords):
        return CompatibilityVerdict(False, f"category banned for {policy.name}")
    banned = profile.vibes & policy.banned_vibes
    if banned:
        return CompatibilityVerdict(False, f"banned vibe {sorted(banned)[0]} for {policy.name}")
    if policy.strict_sport and not profile.ambiguous:
        if profile.formality > policy.target_formality + FORMALITY_TOLERANCE:
            return CompatibilityVerdict(False, f"formality {profile.formality} too high for {policy.name}")
    if profile.ambiguous:
        return CompatibilityVerdict(True, "ambiguous upload accepted")
    if profile.vibes & policy.required_vibes:
        return CompatibilityVerdict(True)
    return CompatibilityVerdict(False, f"no vibe in common with {policy.name}")


class CompatibilityGate:
    """Binds a classifier to the static occasion policy table."""

    def __init__(self, classifier: Optional[GarmentClassifier] = None) -> None:
        self.classifier = classifier or GarmentClassifier()

    def check(self, garment: Garment, occasion: Optional[str]) -> CompatibilityVerdict:
        policy = get_occasion_policy(occasion)
        return evaluate(self.classifier.classify(garment), policy, garment.search_text)

    def is_compatible(self, garment: Garment, occasion: Optional[str]) -> bool:
        return self.check(garment, occasion).allowed

    def filter_compatible(self, garments: Iterable[Garment], occasion: Optional[str]) -> FilteringResult:
        policy = get_occasion_policy(occasion)
        garments = list(garments)
        kept: List[Garment] = []
        removed: Dict[str, str] = {}
        for garment in garments:
            verdict = self.check(garment, policy.name)
            if verdict.allowed:
                kept.append(garment)
            else:
                removed[garment.item_id] = verdict.reason or "incompatible"
        logger.info("Occasion %s kept %s of %s garments", policy.name, len(kept), len(garments))
        debug = {
            "occasion": policy.name,
            "input_count": len(garments),
            "kept_count": len(kept),
            "removed_count": len(removed),
        }
        return FilteringResult(items=kept, removed=removed, debug=debug)


def is_compatible(garment: Garment, occasion: Optional[str]) -> bool:
    """Module-level gate using the default classifier."""

    policy = get_occasion_policy(occasion)
    return evaluate(classify(garment), policy, garment.search_text).allowed


__all__ = [
    "CompatibilityGate",
    "CompatibilityVerdict",
    "FilteringResult",
    "FORMALITY_TOLERANCE",
    "evaluate",
    "is_compatible",
]

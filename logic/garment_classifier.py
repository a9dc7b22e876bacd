"""Rule-based garment classifier producing a formality score and vibe tags.

Rules are evaluated top to bottom against the garment's text. Each rule has a
mode that fixes how it combines with what earlier rules decided:

``lock``
    Sets the profile and stops evaluation. Athletic wear uses this so later
    rules can never dress a jogger up.
``replace``
    Sets the formality band and replaces the vibe set.
``extend``
    Sets the formality band and adds vibes to the current set.
``support``
    Raises formality with ``max()`` and adds vibes, never replacing the set.

When structured vision attributes are present their flattened tags are read
first. The image reference still acts as a proxy: an athletic keyword there
locks the profile, and it supplies the rules when the vision tags match
nothing. Inline payloads and object URLs contribute no keywords.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Sequence, Set, Tuple

from models.garment import Garment
from models.style_profile import NEUTRAL_FORMALITY, StyleProfile, neutral_profile
from models.taxonomy import (
    BUSINESS,
    CASUAL,
    FORMAL,
    OLD_MONEY,
    SMART_CASUAL,
    SPORTY,
    STREETWEAR,
    keyword_hit,
)

logger = logging.getLogger(__name__)

LOCK = "lock"
REPLACE = "replace"
EXTEND = "extend"
SUPPORT = "support"

DRESS_SHIRT_MARKERS = ("dress shirt", "dress_shirt", "oxford", "button", "collar")


@dataclass(frozen=True)
class ClassificationRule:
    name: str
    keywords: Tuple[str, ...]
    formality: int
    vibes: FrozenSet[str]
    mode: str = REPLACE
    excludes: Tuple[str, ...] = ()

    def matches(self, text: str) -> bool:
        if not keyword_hit(text, self.keywords):
            return False
        return not keyword_hit(text, self.excludes)


DEFAULT_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule(
        name="athletic",
        keywords=(
            "hoodie",
            "sweats",
            "sweatpant",
            "jogger",
            "track",
            "running",
            "runner",
            "gym",
            "athletic",
            "legging",
            "trainer",
            "activewear",
            "tech",
        ),
        formality=2,
        vibes=frozenset({SPORTY}),
        mode=LOCK,
        excludes=DRESS_SHIRT_MARKERS,
    ),
    ClassificationRule(
        name="streetwear",
        keywords=("graphic", "tee", "t-shirt", "oversize", "cargo", "baggy", "denim", "jordan", "dunk", "cap", "sneaker"),
        formality=3,
        # tees double as gym wear
        vibes=frozenset({STREETWEAR, CASUAL, SPORTY}),
    ),
    ClassificationRule(
        name="essentials",
        keywords=("plain", "basic", "cotton", "jeans", "white", "blue"),
        formality=4,
        vibes=frozenset({CASUAL}),
        mode=EXTEND,
    ),
    ClassificationRule(
        name="smart_casual",
        keywords=(
            "polo",
            "linen",
            "chino",
            "beige",
            "khaki",
            "loafer",
            "boat",
            "knit",
            "sweater",
            "button",
            "collar",
            "dress shirt",
            "dress_shirt",
            "oxford",
        ),
        formality=7,
        vibes=frozenset({OLD_MONEY, SMART_CASUAL}),
    ),
    ClassificationRule(
        name="business",
        keywords=("suit", "blazer", "trouser", "tuxedo", "leather", "tie", "formal", "slack", "dress pant"),
        formality=9,
        vibes=frozenset({BUSINESS, FORMAL, OLD_MONEY}),
    ),
    ClassificationRule(
        name="timepiece",
        keywords=("watch", "rolex", "timex", "seiko"),
        formality=8,
        vibes=frozenset({OLD_MONEY, BUSINESS}),
        mode=SUPPORT,
    ),
)

VISION_SIGNAL_BANDS = {
    "casual": (4, frozenset({CASUAL})),
    "smart-casual": (7, frozenset({SMART_CASUAL, OLD_MONEY})),
    "formal": (9, frozenset({FORMAL, BUSINESS})),
}


class GarmentClassifier:
    """Maps a garment to a :class:`StyleProfile`. Pure, total and deterministic."""

    def __init__(self, rules: Sequence[ClassificationRule] = DEFAULT_RULES) -> None:
        self.rules = tuple(rules)

    def _evaluate(self, text: str) -> Tuple[int, Set[str], List[str], bool]:
        formality = NEUTRAL_FORMALITY
        vibes = {CASUAL}
        matched: List[str] = []
        for rule in self.rules:
            if not rule.matches(text):
                continue
            matched.append(rule.name)
            if rule.mode == LOCK:
                return rule.formality, set(rule.vibes), matched, True
            if rule.mode == SUPPORT:
                formality = max(formality, rule.formality)
                vibes |= rule.vibes
            elif rule.mode == EXTEND:
                formality = rule.formality
                vibes |= rule.vibes
            else:
                formality, vibes = rule.formality, set(rule.vibes)
        return formality, vibes, matched, False

    def classify(self, garment: Garment) -> StyleProfile:
        is_user_upload = garment.is_user_upload
        vision_text = garment.vision_text

        if vision_text is None:
            formality, vibes, matched, _ = self._evaluate(garment.proxy_text)
        else:
            # precedence: vision lock, proxy lock, vision rules and signal, proxy rules
            formality, vibes, matched, locked = self._evaluate(vision_text)
            if not locked:
                proxy = self._evaluate(garment.proxy_text)
                band = VISION_SIGNAL_BANDS.get(garment.vision_attributes.formality_signal or "")
                if proxy[3]:
                    formality, vibes, matched, _ = proxy
                elif band is not None:
                    formality, vibes = band[0], set(band[1])
                    matched.append("vision_signal")
                elif not matched:
                    formality, vibes, matched, _ = proxy

        if not matched:
            ambiguous = is_user_upload and vision_text is None
            if ambiguous:
                logger.debug("No keyword signal for uploaded item %s, marking ambiguous", garment.item_id)
            return neutral_profile(is_user_upload=is_user_upload, ambiguous=ambiguous)

        return StyleProfile(
            formality=formality,
            vibes=frozenset(vibes),
            is_user_upload=is_user_upload,
            matched_rules=tuple(matched),
        )


_DEFAULT_CLASSIFIER = GarmentClassifier()


def classify(garment: Garment, classifier: Optional[GarmentClassifier] = None) -> StyleProfile:
    """Classify ``garment`` with the default rule set unless a classifier is given."""

    return (classifier or _DEFAULT_CLASSIFIER).classify(garment)


__all__ = [
    "ClassificationRule",
    "DEFAULT_RULES",
    "GarmentClassifier",
    "classify",
    "LOCK",
    "REPLACE",
    "EXTEND",
    "SUPPORT",
]

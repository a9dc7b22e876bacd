"""Derived style profile attached to a garment during one generation call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple

from models.taxonomy import CASUAL

MIN_FORMALITY = 1
MAX_FORMALITY = 10
NEUTRAL_FORMALITY = 5


@dataclass(frozen=True)
class StyleProfile:
    """Formality score and vibe tags computed for a garment.

    Profiles are ephemeral: they are recomputed on every call and never stored.
    ``ambiguous`` marks user uploads that carried no usable keyword signal.
    """

    formality: int = NEUTRAL_FORMALITY
    vibes: FrozenSet[str] = field(default_factory=lambda: frozenset({CASUAL}))
    is_user_upload: bool = False
    ambiguous: bool = False
    matched_rules: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "formality", max(MIN_FORMALITY, min(MAX_FORMALITY, int(self.formality))))
        vibes = frozenset(self.vibes)
        object.__setattr__(self, "vibes", vibes or frozenset({CASUAL}))
        object.__setattr__(self, "matched_rules", tuple(self.matched_rules))

    def to_dict(self) -> dict:
        return {
            "formality": self.formality,
            "vibes": sorted(self.vibes),
            "is_user_upload": self.is_user_upload,
            "ambiguous": self.ambiguous,
            "matched_rules": list(self.matched_rules),
        }


def neutral_profile(is_user_upload: bool = False, ambiguous: bool = False) -> StyleProfile:
    return StyleProfile(is_user_upload=is_user_upload, ambiguous=ambiguous)


__all__ = ["StyleProfile", "neutral_profile", "NEUTRAL_FORMALITY", "MIN_FORMALITY", "MAX_FORMALITY"]

"""Tiered outfit assembly with transparent diagnostics.

Assembly runs through three successively more permissive tiers:

1. strict: garments must pass the occasion gate and fit one of the
   occasion's moodboards;
2. policy: only the occasion gate applies;
3. fallback: partial looks from whatever passes the gate, flagged with a
   warning naming the missing slot.

A formal-class occasion with no compatible garment at all yields an empty list
instead of a fabricated look. An empty list is a normal result, not an error.
"""
from __future__ import annotations

import itertools
import logging
import random
import uuid
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from logic.compatibility import CompatibilityGate
from logic.contextual_filtering import LAYER_AVOID, LAYER_REQUIRED, filter_by_weather, layer_policy
from logic.moodboard_matching import match_score
from logic.outfit_scoring import score_outfit
from models.garment import Garment
from models.moodboards import Moodboard, get_moodboards
from models.occasion_policy import OccasionPolicy, get_occasion_policy
from models.outfit import TIER_FALLBACK, TIER_POLICY, TIER_STRICT, Outfit
from models.taxonomy import normalise_vibes, style_theme_for

logger = logging.getLogger(__name__)

ROLE_CATEGORIES = ("Tops", "Outerwear", "Bottoms", "Shoes", "Accessories")
MAX_STYLE_PREFERENCES = 5


@dataclass(frozen=True)
class AssemblerSettings:
    max_attempts: int = 10
    per_pool_cap: int = 2
    strict_tier_cap: int = 3
    target_outfit_count: int = 5
    exhaustive_limit: int = 64


@dataclass
class GenerationResult:
    outfits: List[Outfit]
    diagnostics: Dict[str, object] = field(default_factory=dict)


def _group_by_role(pool: Iterable[Garment]) -> Dict[str, List[Garment]]:
    grouped: Dict[str, List[Garment]] = {category: [] for category in ROLE_CATEGORIES}
    for item in pool:
        if item.category in grouped:
            grouped[item.category].append(item)
    for values in grouped.values():
        values.sort(key=lambda item: item.item_id)
    return grouped


class OutfitAssembler:
    """Builds outfits for an occasion from a caller-supplied garment list.

    ``rng`` is the only source of non-determinism; pass a seeded
    :class:`random.Random` for reproducible output.
    """

    def __init__(
        self,
        gate: Optional[CompatibilityGate] = None,
        rng: Optional[random.Random] = None,
        settings: Optional[AssemblerSettings] = None,
    ) -> None:
        self.gate = gate or CompatibilityGate()
        self.rng = rng or random.Random()
        self.settings = settings or AssemblerSettings()

    def generate(
        self,
        garments: Sequence[Garment],
        occasion: Optional[str],
        weather: Optional[str] = None,
        style_preferences: Optional[Iterable[str]] = None,
    ) -> List[Outfit]:
        return self.generate_with_diagnostics(garments, occasion, weather, style_preferences).outfits

    def generate_with_diagnostics(
        self,
        garments: Sequence[Garment],
        occasion: Optional[str],
        weather: Optional[str] = None,
        style_preferences: Optional[Iterable[str]] = None,
    ) -> GenerationResult:
        policy = get_occasion_policy(occasion)
        preferences = normalise_vibes(style_preferences or (), limit=MAX_STYLE_PREFERENCES)
        weather_result = filter_by_weather(list(garments), weather)
        layers = layer_policy(weather)
        include_layer = layers != LAYER_AVOID
        compatible = self.gate.filter_compatible(weather_result.items, policy.name)
        pool = compatible.items
        layer_warning = None
        if layers == LAYER_REQUIRED and not any(item.category == "Outerwear" for item in pool):
            layer_warning = (
                f"No outerwear in the closet suits {weather_result.debug['weather']} weather; add a layer before heading out."
            )
            logger.info("Layer required for %s weather but no outerwear is available", weather_result.debug["weather"])

        tiers: Dict[str, object] = {}
        diagnostics: Dict[str, object] = {
            "occasion": policy.name,
            "initial_count": len(garments),
            "weather": weather_result.debug,
            "weather_removed": weather_result.removed,
            "compatibility_removed": compatible.removed,
            "compatible_count": len(pool),
            "style_preferences": preferences,
            "layer_policy": layers,
            "layer_warning": layer_warning,
            "tiers": tiers,
        }
        outfits: List[Outfit] = []
        seen: Set[Tuple[str, ...]] = set()

        strict: List[Outfit] = []
        boards = get_moodboards(policy.name)
        self.rng.shuffle(boards)
        for board in boards:
            remaining = self.settings.strict_tier_cap - len(strict)
            if remaining <= 0:
                break
            board_pool = [item for item in pool if match_score(item, board) > 0]
            logger.info("Moodboard %s admitted %s of %s garments", board.id, len(board_pool), len(pool))
            strict.extend(
                self._assemble_complete(
                    board_pool, policy, TIER_STRICT, seen, min(self.settings.per_pool_cap, remaining),
                    include_layer, preferences, board,
                )
            )
        outfits.extend(strict)
        tiers[TIER_STRICT] = {"moodboards": [board.id for board in boards], "accepted": len(strict)}

        if len(outfits) < self.settings.target_outfit_count:
            cap = min(self.settings.per_pool_cap, self.settings.target_outfit_count - len(outfits))
            relaxed = self._assemble_complete(pool, policy, TIER_POLICY, seen, cap, include_layer, preferences)
            outfits.extend(relaxed)
            tiers[TIER_POLICY] = {"accepted": len(relaxed)}

        if not outfits:
            if policy.formal_class and not pool:
                logger.info("No garment fits formal occasion %s, returning no outfits", policy.name)
                diagnostics["reason"] = "no_compatible_items"
            else:
                partial = self._assemble_partial(pool, policy, seen, include_layer, preferences)
                outfits.extend(partial)
                tiers[TIER_FALLBACK] = {"accepted": len(partial)}
                if not partial:
                    diagnostics["reason"] = "no_tops_or_bottoms"

        outfits.sort(key=lambda outfit: outfit.score, reverse=True)
        diagnostics["outfit_count"] = len(outfits)
        logger.info("Generated %s outfits for %s", len(outfits), policy.name)
        return GenerationResult(outfits=outfits, diagnostics=diagnostics)

    def _candidate_pairs(
        self, tops: Sequence[Optional[Garment]], bottoms: Sequence[Optional[Garment]]
    ) -> List[Tuple[Optional[Garment], Optional[Garment]]]:
        """Every top/bottom pair in random order, or bounded random draws for big pools."""

        if len(tops) * len(bottoms) <= self.settings.exhaustive_limit:
            pairs = list(itertools.product(tops, bottoms))
            self.rng.shuffle(pairs)
            return pairs
        return [
            (self.rng.choice(tops), self.rng.choice(bottoms)) for _ in range(self.settings.max_attempts)
        ]

    def _assemble_complete(
        self,
        pool: Sequence[Garment],
        policy: OccasionPolicy,
        tier: str,
        seen: Set[Tuple[str, ...]],
        cap: int,
        include_layer: bool,
        preferences: Sequence[str],
        board: Optional[Moodboard] = None,
    ) -> List[Outfit]:
        grouped = _group_by_role(pool)
        if not grouped["Tops"] or not grouped["Bottoms"]:
            logger.info("Pool for %s tier lacks a top or a bottom", tier)
            return []
        pairs = self._candidate_pairs(grouped["Tops"], grouped["Bottoms"])
        return self._accept(pairs, grouped, policy, tier, seen, cap, include_layer, preferences, board)

    def _assemble_partial(
        self,
        pool: Sequence[Garment],
        policy: OccasionPolicy,
        seen: Set[Tuple[str, ...]],
        include_layer: bool,
        preferences: Sequence[str],
    ) -> List[Outfit]:
        grouped = _group_by_role(pool)
        tops: List[Optional[Garment]] = list(grouped["Tops"]) or [None]
        bottoms: List[Optional[Garment]] = list(grouped["Bottoms"]) or [None]
        if tops == [None] and bottoms == [None]:
            logger.info("No tops or bottoms compatible with %s, nothing to assemble", policy.name)
            return []
        pairs = self._candidate_pairs(tops, bottoms)
        return self._accept(
            pairs, grouped, policy, TIER_FALLBACK, seen, self.settings.per_pool_cap, include_layer, preferences
        )

    def _accept(
        self,
        pairs: Sequence[Tuple[Optional[Garment], Optional[Garment]]],
        grouped: Dict[str, List[Garment]],
        policy: OccasionPolicy,
        tier: str,
        seen: Set[Tuple[str, ...]],
        cap: int,
        include_layer: bool,
        preferences: Sequence[str],
        board: Optional[Moodboard] = None,
    ) -> List[Outfit]:
        accepted: List[Outfit] = []
        for top, bottom in pairs:
            if len(accepted) >= cap:
                break
            layer = self.rng.choice(grouped["Outerwear"]) if include_layer and grouped["Outerwear"] else None
            shoes = self.rng.choice(grouped["Shoes"]) if grouped["Shoes"] else None
            accessory = self.rng.choice(grouped["Accessories"]) if grouped["Accessories"] else None
            items = tuple(item for item in (top, layer, bottom, shoes, accessory) if item is not None)

            key = tuple(sorted(item.item_id for item in items))
            if key in seen:
                continue
            rejected = [item.item_id for item in items if not self.gate.is_compatible(item, policy.name)]
            if rejected:
                logger.warning("Dropping combination %s: items %s failed re-validation", key, rejected)
                continue

            seen.add(key)
            accepted.append(self._build_outfit(items, top, bottom, policy, tier, preferences, board))
        logger.info("Tier %s accepted %s outfits for %s", tier, len(accepted), policy.name)
        return accepted

    def _build_outfit(
        self,
        items: Tuple[Garment, ...],
        top: Optional[Garment],
        bottom: Optional[Garment],
        policy: OccasionPolicy,
        tier: str,
        preferences: Sequence[str],
        board: Optional[Moodboard],
    ) -> Outfit:
        scored = score_outfit(items, tier, self.gate.classifier, preferences)
        warning = None
        if tier == TIER_FALLBACK:
            missing = [name for name, item in (("tops", top), ("bottoms", bottom)) if item is None]
            if missing:
                warning = f"No compatible {' or '.join(missing)} found for {policy.name}; showing a partial look."
        if board is not None:
            title, style_tag = f"{board.name} Look", board.style_category
        else:
            suffix = " (Partial)" if tier == TIER_FALLBACK else ""
            title, style_tag = f"{policy.name} Look{suffix}", style_theme_for(policy.name)
        return Outfit(
            outfit_id=uuid.UUID(int=self.rng.getrandbits(128), version=4).hex,
            items=items,
            title=title,
            score=float(scored["score"]),
            style_tag=style_tag,
            is_fallback=tier == TIER_FALLBACK,
            missing_category_warning=warning,
            tier=tier,
            moodboard_id=board.id if board else None,
        )


def generate(
    garments: Sequence[Garment],
    occasion: Optional[str],
    weather: Optional[str] = None,
    style_preferences: Optional[Iterable[str]] = None,
    rng: Optional[random.Random] = None,
) -> List[Outfit]:
    """Convenience wrapper building a one-off assembler."""

    return OutfitAssembler(rng=rng).generate(garments, occasion, weather, style_preferences)


__all__ = ["OutfitAssembler", "AssemblerSettings", "GenerationResult", "generate", "ROLE_CATEGORIES"]

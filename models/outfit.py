"""Outfit schema returned to the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

from models.garment import Garment

TIER_STRICT = "strict"
TIER_POLICY = "policy"
TIER_FALLBACK = "fallback"


@dataclass(frozen=True)
class Outfit:
    """An assembled look. Items are stored in role order (top, layer, bottom, shoes, accessory)."""

    outfit_id: str
    items: Tuple[Garment, ...]
    title: str
    score: float
    style_tag: str
    is_fallback: bool = False
    missing_category_warning: Optional[str] = None
    tier: str = TIER_POLICY
    moodboard_id: Optional[str] = None

    @property
    def item_ids(self) -> Tuple[str, ...]:
        return tuple(item.item_id for item in self.items)

    @property
    def id_key(self) -> Tuple[str, ...]:
        return tuple(sorted(self.item_ids))

    def with_swapped_item(self, old_item_id: str, new_item: Garment) -> "Outfit":
        """Return a copy with ``old_item_id`` replaced by ``new_item``."""

        if old_item_id not in self.item_ids:
            raise KeyError(f"Item '{old_item_id}' is not part of outfit '{self.outfit_id}'")
        items = tuple(new_item if item.item_id == old_item_id else item for item in self.items)
        return replace(self, items=items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.outfit_id,
            "items": [item.to_dict() for item in self.items],
            "title": self.title,
            "score": self.score,
            "style_tag": self.style_tag,
            "is_fallback": self.is_fallback,
            "missing_category_warning": self.missing_category_warning,
            "tier": self.tier,
            "moodboard_id": self.moodboard_id,
        }


__all__ = ["Outfit", "TIER_STRICT", "TIER_POLICY", "TIER_FALLBACK"]

"""Deterministic collage layout for rendering an outfit card."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from models.moodboards import DEFAULT_BACKGROUND, Moodboard, get_moodboard
from models.outfit import Outfit

logger = logging.getLogger(__name__)

# (x, y, scale) anchor per garment role
_ROLE_SLOTS: Dict[str, tuple] = {
    "Tops": (0.35, 0.22, 0.8),
    "Outerwear": (0.7, 0.25, 0.75),
    "Bottoms": (0.35, 0.58, 0.8),
    "Shoes": (0.35, 0.88, 0.5),
    "Accessories": (0.75, 0.65, 0.4),
    "Other": (0.75, 0.85, 0.4),
}


@dataclass(frozen=True)
class CollageSpecResult:
    collage: Dict[str, object]
    diagnostics: Dict[str, object]


def _banner(outfit: Outfit, board: Optional[Moodboard]) -> str:
    if outfit.missing_category_warning:
        return outfit.missing_category_warning
    if board is not None:
        return f"Styled after the {board.name} moodboard ({outfit.style_tag})."
    return f"Picked for {outfit.style_tag}."


def generate_collage_spec(outfit: Outfit) -> CollageSpecResult:
    """Place each garment at its role anchor; repeated roles shift down and right."""

    board = get_moodboard(outfit.moodboard_id) if outfit.moodboard_id else None
    background = board.background_color if board else DEFAULT_BACKGROUND
    stickers: List[Dict[str, object]] = []
    layout_trace = []
    role_counts: Dict[str, int] = {}
    for item in outfit.items:
        x, y, scale = _ROLE_SLOTS.get(item.category, _ROLE_SLOTS["Other"])
        offset = role_counts.get(item.category, 0) * 0.08
        role_counts[item.category] = role_counts.get(item.category, 0) + 1
        sticker = {
            "image_ref": item.image_ref,
            "x": round(min(x + offset, 0.9), 2),
            "y": round(min(y + offset, 0.9), 2),
            "scale": scale,
            "role": item.category,
        }
        stickers.append(sticker)
        layout_trace.append({"item_id": item.item_id, "x": sticker["x"], "y": sticker["y"]})
    collage = {
        "title": outfit.title,
        "background_color": background,
        "banner": _banner(outfit, board),
        "is_fallback": outfit.is_fallback,
        "stickers": stickers,
    }
    logger.info("Generated collage with %s stickers", len(stickers))
    return CollageSpecResult(collage=collage, diagnostics={"layout": layout_trace, "background_color": background})


__all__ = ["generate_collage_spec", "CollageSpecResult"]

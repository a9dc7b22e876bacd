"""Curated moodboards: visual themes that bias assembly toward a cohesive look."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from models.taxonomy import normalize_occasion

logger = logging.getLogger(__name__)

DEFAULT_BACKGROUND = "#F5F5F5"


@dataclass(frozen=True)
class Moodboard:
    """A visual aesthetic within a broad style.

    "Old Money" is the style category, "Riviera Evening" is the moodboard
    (navy, white and linen).
    """

    id: str
    name: str
    description: str
    style_category: str
    colors: Tuple[str, ...]
    fabrics: Tuple[str, ...]
    required_item_keywords: Tuple[str, ...]
    banned_item_keywords: Tuple[str, ...]
    background_color: str = DEFAULT_BACKGROUND


_RIVIERA = Moodboard(
    id="om-riviera",
    name="Riviera Evening",
    description="Mediterranean luxury. Navy, white, beige. Linen textures.",
    style_category="Old Money",
    colors=("navy", "white", "cream", "beige", "blue", "brown"),
    fabrics=("linen", "cotton"),
    required_item_keywords=("shirt", "polo", "chino", "loafer"),
    banned_item_keywords=("hoodie", "sneaker", "graphic", "nylon"),
    background_color="#F3EDE2",
)

_CITY = Moodboard(
    id="om-city",
    name="City Gentleman",
    description="Sharp urban dinner. Grey, black, crisp white.",
    style_category="Old Money",
    colors=("grey", "black", "white", "charcoal"),
    fabrics=("wool", "cotton"),
    required_item_keywords=("blazer", "trouser", "shirt", "boot", "watch"),
    banned_item_keywords=("sneaker", "short"),
    background_color="#DDE1E4",
)

_STEALTH = Moodboard(
    id="sport-stealth",
    name="Stealth Tech",
    description="All black and grey technical gear. Sleek and modern.",
    style_category="Athleisure",
    colors=("black", "grey", "charcoal", "navy"),
    fabrics=("tech", "nylon", "spandex"),
    required_item_keywords=("hoodie", "jogger", "sneaker"),
    banned_item_keywords=("jeans", "chino", "watch", "leather"),
    background_color="#1F1F1F",
)

_RUNNER = Moodboard(
    id="sport-runner",
    name="Morning Run",
    description="Practical running gear. Shorts and tees.",
    style_category="Athleisure",
    colors=("blue", "green", "grey", "white"),
    fabrics=("mesh", "tech"),
    required_item_keywords=("short", "tee", "runner"),
    banned_item_keywords=("blazer", "loafer"),
    background_color="#E4F2E7",
)

_ESSENTIALS = Moodboard(
    id="street-essentials",
    name="Modern Essentials",
    description="Clean lines, neutral tones, high quality basics.",
    style_category="Casual",
    colors=("black", "white", "grey", "denim", "olive"),
    fabrics=("cotton", "denim"),
    required_item_keywords=("tee", "jeans", "sneaker", "hoodie"),
    banned_item_keywords=("suit", "tuxedo"),
    background_color="#E1E8FF",
)

_MOODBOARDS_BY_OCCASION: Dict[str, Tuple[Moodboard, ...]] = {
    "Dinner": (_RIVIERA, _CITY),
    "Date": (_RIVIERA, _CITY),
    "Sport": (_STEALTH, _RUNNER),
    "Casual": (_ESSENTIALS,),
}


def get_moodboards(occasion: Optional[str]) -> List[Moodboard]:
    """Return the moodboards registered for ``occasion`` (possibly empty)."""

    key = normalize_occasion(occasion)
    boards = list(_MOODBOARDS_BY_OCCASION.get(key, ()))
    logger.debug("Resolved %s moodboards for occasion %s", len(boards), key)
    return boards


def get_moodboard(moodboard_id: str) -> Optional[Moodboard]:
    for boards in _MOODBOARDS_BY_OCCASION.values():
        for board in boards:
            if board.id == moodboard_id:
                return board
    return None


__all__ = ["Moodboard", "get_moodboards", "get_moodboard", "DEFAULT_BACKGROUND"]

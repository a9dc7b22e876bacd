"""Moodboard fit scoring: a coarse ranking signal, thresholded by callers at ``> 0``."""

from __future__ import annotations

from typing import List, Optional

from models.garment import Garment
from models.moodboards import Moodboard, get_moodboards
from models.taxonomy import keyword_hit

BANNED_SCORE = -100
USER_UPLOAD_SCORE = 100
COLOR_WEIGHT = 3
FABRIC_WEIGHT = 2
REQUIRED_ITEM_WEIGHT = 5


def match_score(garment: Garment, moodboard: Moodboard) -> int:
    """Score how well ``garment`` fits ``moodboard``.

    Uploaded photos cannot be read through keywords, so they are trusted unless a
    banned keyword is present.
    """

    text = garment.search_text
    if keyword_hit(text, moodboard.banned_item_keywords):
        return BANNED_SCORE
    if garment.is_user_upload:
        return USER_UPLOAD_SCORE

    score = 0
    if keyword_hit(text, moodboard.colors):
        score += COLOR_WEIGHT
    if keyword_hit(text, moodboard.fabrics):
        score += FABRIC_WEIGHT
    if keyword_hit(text, moodboard.required_item_keywords):
        score += REQUIRED_ITEM_WEIGHT
    return score


def matches_moodboard(garment: Garment, moodboard: Moodboard) -> bool:
    return match_score(garment, moodboard) > 0


def moodboards_for(occasion: Optional[str]) -> List[Moodboard]:
    return get_moodboards(occasion)


__all__ = [
    "match_score",
    "matches_moodboard",
    "moodboards_for",
    "BANNED_SCORE",
    "USER_UPLOAD_SCORE",
    "COLOR_WEIGHT",
    "FABRIC_WEIGHT",
    "REQUIRED_ITEM_WEIGHT",
]

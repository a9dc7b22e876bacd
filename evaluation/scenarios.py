"""Evaluation scenarios covering occasions, weather and sparse closets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class EvaluationScenario:
    name: str
    description: str
    occasion: str
    closet: List[Dict[str, object]]
    expectations: Dict[str, object]
    weather: Optional[str] = None
    style_preferences: List[str] = field(default_factory=list)


def _essentials_closet() -> List[Dict[str, object]]:
    return [
        {"id": "1", "category": "Tops", "image": "plain_white_tee"},
        {"id": "2", "category": "Bottoms", "image": "black_jeans"},
        {"id": "3", "category": "Shoes", "image": "white_sneaker"},
    ]


def _riviera_closet() -> List[Dict[str, object]]:
    return [
        {"id": "polo", "category": "Tops", "image": "navy_polo_cotton"},
        {"id": "oxford", "category": "Tops", "image": "white_oxford_shirt"},
        {"id": "chino", "category": "Bottoms", "image": "beige_chino"},
        {"id": "trouser", "category": "Bottoms", "image": "grey_wool_trouser"},
        {"id": "loafer", "category": "Shoes", "image": "brown_suede_loafer"},
        {"id": "watch", "category": "Accessories", "image": "silver_seiko_watch"},
        {"id": "hoodie", "category": "Tops", "image": "black_tech_hoodie"},
    ]


def _gym_closet() -> List[Dict[str, object]]:
    return [
        {"id": "hoodie", "category": "Tops", "image": "black_tech_hoodie"},
        {"id": "jogger", "category": "Bottoms", "image": "grey_jogger"},
        {"id": "trousers", "category": "Bottoms", "image": "navy_trousers"},
        {"id": "runner", "category": "Shoes", "image": "grey_runner_shoe"},
    ]


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="casual_essentials",
        description="Tee, jeans and sneakers make a complete casual look.",
        occasion="Casual",
        closet=_essentials_closet(),
        expectations={"min_outfits": 1, "no_fallback": True, "contains": ["1", "2"], "min_score": 0.9},
    ),
    EvaluationScenario(
        name="work_without_business_wear",
        description="Streetwear only closet cannot dress for work.",
        occasion="Work",
        closet=_essentials_closet(),
        expectations={"max_outfits": 0},
    ),
    EvaluationScenario(
        name="dinner_top_only",
        description="A lone polo yields a partial dinner look warning about bottoms.",
        occasion="Dinner",
        closet=[{"id": "1", "category": "Tops", "image": "navy_polo_cotton"}],
        expectations={"min_outfits": 1, "fallback_warning": "bottoms"},
    ),
    EvaluationScenario(
        name="dinner_riviera",
        description="Old money pieces form complete dinner looks without the hoodie.",
        occasion="Dinner",
        closet=_riviera_closet(),
        expectations={"min_outfits": 2, "no_fallback": True, "excludes": ["hoodie"]},
    ),
    EvaluationScenario(
        name="sport_bans_trousers",
        description="Trousers never make it into a sport look.",
        occasion="Sport",
        closet=_gym_closet(),
        expectations={"min_outfits": 1, "no_fallback": True, "excludes": ["trousers"]},
    ),
    EvaluationScenario(
        name="rainy_casual",
        description="Canvas shoes are skipped when it rains.",
        occasion="Casual",
        weather="Rainy",
        closet=_essentials_closet() + [{"id": "4", "category": "Shoes", "image": "white_canvas_sneaker"}],
        expectations={"min_outfits": 1, "excludes": ["4"]},
    ),
]

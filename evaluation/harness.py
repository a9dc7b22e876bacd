"""Lightweight evaluation harness for deterministic scenarios."""

from __future__ import annotations

import random
from typing import Dict, List

from evaluation.scenarios import EvaluationScenario, SCENARIOS
from stylist_app.app import StylistApp
from stylist_app.config import StylistConfig


def _evaluate_expectations(expectations: Dict[str, object], outfits: List[Dict[str, object]]) -> Dict[str, object]:
    checks: Dict[str, bool] = {}
    item_sets = [{item["item_id"] for item in outfit.get("items", [])} for outfit in outfits]
    if "min_outfits" in expectations:
        checks["min_outfits"] = len(outfits) >= int(expectations["min_outfits"])
    if "max_outfits" in expectations:
        checks["max_outfits"] = len(outfits) <= int(expectations["max_outfits"])
    if expectations.get("no_fallback"):
        checks["no_fallback"] = not any(outfit.get("is_fallback") for outfit in outfits)
    if expectations.get("contains"):
        wanted = set(expectations["contains"])
        checks["contains"] = any(wanted.issubset(ids) for ids in item_sets)
    if expectations.get("excludes"):
        banned = set(expectations["excludes"])
        checks["excludes"] = not any(banned & ids for ids in item_sets)
    if "min_score" in expectations:
        checks["min_score"] = bool(outfits) and all(
            float(outfit["score"]) >= float(expectations["min_score"]) for outfit in outfits
        )
    if expectations.get("fallback_warning"):
        needle = str(expectations["fallback_warning"])
        checks["fallback_warning"] = bool(outfits) and all(
            outfit.get("is_fallback") and needle in (outfit.get("missing_category_warning") or "")
            for outfit in outfits
        )
    return {"passed": all(checks.values()), "checks": checks}


def run_scenario(scenario: EvaluationScenario, seed: int = 7) -> Dict[str, object]:
    config = StylistConfig.from_env()
    app = StylistApp(config=config, rng=random.Random(seed))
    response = app.generate_outfits(
        scenario.closet,
        occasion=scenario.occasion,
        weather=scenario.weather,
        style_preferences=scenario.style_preferences,
    )
    outfits = response.get("outfits", [])
    evaluation = _evaluate_expectations(scenario.expectations, outfits)
    return {
        "scenario": scenario.name,
        "passed": evaluation["passed"],
        "checks": evaluation["checks"],
        "outfit_count": len(outfits),
        "response": response,
    }


def run_evaluation_suite() -> List[Dict[str, object]]:
    return [run_scenario(scenario) for scenario in SCENARIOS]


def run_smoke_checks() -> List[str]:
    results = run_evaluation_suite()
    return [f"{result['scenario']}: {'passed' if result['passed'] else 'failed'}" for result in results]


__all__ = ["run_evaluation_suite", "run_scenario", "run_smoke_checks"]

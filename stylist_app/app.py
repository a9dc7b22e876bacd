"""Stylist app bootstrap: wires config, logging and the rule engine together."""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import ValidationError

from logic.collage import generate_collage_spec
from logic.compatibility import CompatibilityGate
from logic.garment_classifier import GarmentClassifier
from logic.outfit_assembler import OutfitAssembler
from logic.validation import OutfitRequest, OutfitResponse, validation_failure
from models.garment import Garment, from_raw_metadata
from models.occasion_policy import get_occasion_policy
from models.outfit import Outfit
from stylist_app.config import StylistConfig
from stylist_app.logging_config import configure_logging, get_logger, log_event, operation_context
from stylist_app.observability import instrument_operation

LOGGER = get_logger(__name__)


def coerce_garments(raw_items: Iterable[Mapping[str, Any] | Garment]) -> List[Garment]:
    """Build garments from loose records, skipping entries that fail validation."""

    garments: List[Garment] = []
    for raw in raw_items:
        if isinstance(raw, Garment):
            garments.append(raw)
            continue
        try:
            garments.append(from_raw_metadata(raw))
        except ValueError as exc:
            LOGGER.warning("Skipping closet entry due to validation error: %s", exc)
    return garments


class StylistApp:
    """Entry point used by the HTTP layer and the evaluation harness."""

    def __init__(self, config: StylistConfig | None = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or StylistConfig.from_env()
        configure_logging(self.config.log_level)
        self.classifier = GarmentClassifier()
        self.gate = CompatibilityGate(self.classifier)
        self.assembler = OutfitAssembler(
            gate=self.gate,
            rng=rng or random.Random(self.config.random_seed),
            settings=self.config.assembler_settings(),
        )

    @instrument_operation("classify")
    def classify(self, garment: Mapping[str, Any] | Garment) -> Dict[str, Any]:
        item = garment if isinstance(garment, Garment) else from_raw_metadata(garment)
        return {"item_id": item.item_id, **self.classifier.classify(item).to_dict()}

    @instrument_operation("check_compatibility")
    def check_compatibility(self, garment: Mapping[str, Any] | Garment, occasion: str) -> Dict[str, Any]:
        item = garment if isinstance(garment, Garment) else from_raw_metadata(garment)
        policy = get_occasion_policy(occasion)
        verdict = self.gate.check(item, policy.name)
        return {
            "item_id": item.item_id,
            "occasion": policy.name,
            "compatible": verdict.allowed,
            "reason": verdict.reason,
        }

    def generate_outfits(
        self,
        garments: Iterable[Mapping[str, Any] | Garment],
        occasion: str = "Casual",
        weather: Optional[str] = None,
        style_preferences: Optional[Iterable[str]] = None,
    ) -> Dict[str, Any]:
        """Return outfits plus a user-facing summary. An empty list means no outfit was found."""

        with operation_context("stylist.generate_outfits", occasion=occasion) as correlation_id:
            log_event(
                LOGGER,
                level=logging.INFO,
                event="generation_started",
                correlation_id=correlation_id,
                occasion=occasion,
                weather=weather,
            )
            items = coerce_garments(garments)
            result = self.assembler.generate_with_diagnostics(items, occasion, weather, style_preferences)
            policy_name = result.diagnostics["occasion"]
            outfits = result.outfits

            if not outfits:
                summary = f"No outfit found for {policy_name}. Add more items that suit the occasion."
            elif any(outfit.is_fallback for outfit in outfits):
                summary = f"Only partial looks are possible for {policy_name} with the current closet."
            else:
                summary = f"Generated {len(outfits)} {policy_name} outfits."
            layer_warning = result.diagnostics.get("layer_warning")
            if layer_warning:
                summary = f"{summary} {layer_warning}"

            log_event(
                LOGGER,
                level=logging.INFO,
                event="generation_completed",
                correlation_id=correlation_id,
                occasion=policy_name,
                outfit_count=len(outfits),
                fallback=any(outfit.is_fallback for outfit in outfits),
            )
            response = {
                "status": "ok" if outfits else "no_outfit",
                "occasion": policy_name,
                "outfits": [self._present(outfit) for outfit in outfits],
                "user_facing_summary": summary,
                "layer_warning": layer_warning,
                "debug_summary": result.diagnostics,
            }
            try:
                OutfitResponse.model_validate(response)
            except ValidationError as exc:
                log_event(
                    LOGGER,
                    level=logging.WARNING,
                    event="response_invalid",
                    details=str(exc),
                    correlation_id=correlation_id,
                )
                return validation_failure("Outfit response failed schema checks", exc)
            return response

    def handle_request(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Validate a raw request body and generate outfits for it."""

        try:
            request = OutfitRequest.model_validate(payload)
        except ValidationError as exc:
            log_event(LOGGER, level=logging.WARNING, event="request_invalid", details=str(exc))
            return validation_failure("Invalid outfit request payload", exc)
        response = self.generate_outfits(
            [garment.to_garment() for garment in request.garments],
            occasion=request.occasion,
            weather=request.weather,
            style_preferences=request.style_preferences,
        )
        if not request.include_diagnostics and "debug_summary" in response:
            response["debug_summary"] = None
        return response

    def swap_item(self, outfit: Outfit, old_item_id: str, new_item: Mapping[str, Any] | Garment) -> Outfit:
        """Replace one garment; the original outfit is left untouched."""

        replacement = new_item if isinstance(new_item, Garment) else from_raw_metadata(new_item)
        return outfit.with_swapped_item(old_item_id, replacement)

    @instrument_operation("render_collage")
    def render_collage(self, outfit: Outfit) -> Dict[str, Any]:
        return generate_collage_spec(outfit).collage

    def _present(self, outfit: Outfit) -> Dict[str, Any]:
        payload = outfit.to_dict()
        payload["collage"] = generate_collage_spec(outfit).collage
        return payload


__all__ = ["StylistApp", "coerce_garments"]

"""Pydantic schemas and helpers for validating stylist requests and responses."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from models.garment import Garment, from_raw_metadata
from models.taxonomy import validate_category


class VisionAttributesPayload(BaseModel):
    """Vision model output as sent by the client (camelCase or snake_case)."""

    model_config = ConfigDict(populate_by_name=True)

    sub_category: Optional[str] = Field(None, alias="subCategory")
    primary_color: Optional[str] = Field(None, alias="primaryColor")
    secondary_colors: List[str] = Field(default_factory=list, alias="secondaryColors")
    fabric_appearance: Optional[str] = Field(None, alias="fabricAppearance")
    fit_appearance: Optional[str] = Field(None, alias="fitAppearance")
    formality_signal: Optional[str] = Field(None, alias="formalitySignal")
    patterns: List[str] = Field(default_factory=list)

    @field_validator("patterns", "secondary_colors", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value


class GarmentPayload(BaseModel):
    """Input contract for a single closet item."""

    model_config = ConfigDict(populate_by_name=True)

    item_id: str = Field(min_length=1, alias="id")
    image_ref: str = Field("", alias="image")
    category: str
    vision_attributes: Optional[VisionAttributesPayload] = Field(None, alias="visionAttributes")
    user_upload: Optional[bool] = Field(None, alias="isUserUpload")

    @field_validator("item_id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @field_validator("category")
    @classmethod
    def _validate_category(cls, value: str) -> str:
        return validate_category(value)

    def to_garment(self) -> Garment:
        return from_raw_metadata(self.model_dump())


class CompatibilityRequest(BaseModel):
    garment: GarmentPayload
    occasion: str = "Casual"


class OutfitRequest(BaseModel):
    """Shared envelope for outfit generation."""

    garments: List[GarmentPayload]
    occasion: str = "Casual"
    weather: Optional[str] = None
    style_preferences: List[str] = Field(default_factory=list)
    include_diagnostics: bool = False


class OutfitResponse(BaseModel):
    """Structure returned for outfit generation. ``no_outfit`` is not an error."""

    status: Literal["ok", "no_outfit"]
    occasion: str
    outfits: List[Dict[str, Any]] = []
    user_facing_summary: Optional[str] = None
    layer_warning: Optional[str] = None
    debug_summary: Optional[Dict[str, Any]] = None


class ValidationResult(BaseModel):
    """Wrapper returned when validation fails."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload."""

    return ValidationResult(message=message, details=exc.errors(include_url=False)).model_dump()


__all__ = [
    "VisionAttributesPayload",
    "GarmentPayload",
    "CompatibilityRequest",
    "OutfitRequest",
    "OutfitResponse",
    "ValidationResult",
    "validation_failure",
]

"""Garment data model and helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from models.taxonomy import validate_category

_UNKNOWN_VALUES = {"", "unknown", "none", "n/a"}
_USER_UPLOAD_MARKERS = ("supabase", "base64", "processed-image")
# inline image payloads and object URLs carry no readable description
_OPAQUE_PREFIXES = ("data:", "blob:")
_RAW_BASE64 = re.compile(r"[A-Za-z0-9+/]{200,}={0,2}")


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if text.lower() in _UNKNOWN_VALUES:
        return None
    return text


@dataclass(frozen=True)
class VisionAttributes:
    """Structured attributes extracted from a garment photo by a vision model."""

    sub_category: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_colors: Tuple[str, ...] = ()
    fabric_appearance: Optional[str] = None
    fit_appearance: Optional[str] = None
    formality_signal: Optional[str] = None
    patterns: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for name in ("sub_category", "primary_color", "fabric_appearance", "fit_appearance", "formality_signal"):
            object.__setattr__(self, name, _clean(getattr(self, name)))
        object.__setattr__(
            self, "secondary_colors", tuple(c for c in map(_clean, _ensure_list(self.secondary_colors)) if c)
        )
        object.__setattr__(self, "patterns", tuple(p for p in map(_clean, _ensure_list(self.patterns)) if p))
        if self.formality_signal:
            object.__setattr__(self, "formality_signal", self.formality_signal.lower().replace("_", "-").replace(" ", "-"))

    def is_empty(self) -> bool:
        return not any(
            [
                self.sub_category,
                self.primary_color,
                self.secondary_colors,
                self.fabric_appearance,
                self.formality_signal,
                self.patterns,
            ]
        )

    def tag_text(self) -> str:
        """Flatten the attributes into the keyword text the classifier reads."""

        tags = [self.primary_color, self.sub_category, self.fabric_appearance, self.formality_signal]
        tags.extend(self.secondary_colors)
        tags.extend(self.patterns)
        return " ".join(tag for tag in tags if tag).lower()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "VisionAttributes":
        def pick(*keys: str) -> Any:
            for key in keys:
                if key in raw:
                    return raw[key]
            return None

        return cls(
            sub_category=pick("sub_category", "subCategory"),
            primary_color=pick("primary_color", "primaryColor"),
            secondary_colors=_ensure_list(pick("secondary_colors", "secondaryColors")),
            fabric_appearance=pick("fabric_appearance", "fabricAppearance"),
            fit_appearance=pick("fit_appearance", "fitAppearance"),
            formality_signal=pick("formality_signal", "formalitySignal"),
            patterns=_ensure_list(pick("patterns")),
        )


@dataclass(frozen=True)
class Garment:
    """A wardrobe item as seen by the outfit rule engine.

    ``image_ref`` is an opaque string (filename, URL or description) that doubles
    as the keyword source when no structured vision attributes are available.
    ``user_upload`` overrides upload detection from the image reference.
    """

    item_id: str
    image_ref: str
    category: str
    vision_attributes: Optional[VisionAttributes] = None
    user_upload: Optional[bool] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "item_id", str(self.item_id))
        object.__setattr__(self, "image_ref", str(self.image_ref or ""))
        object.__setattr__(self, "category", validate_category(self.category))
        if self.vision_attributes is not None and self.vision_attributes.is_empty():
            object.__setattr__(self, "vision_attributes", None)

    @property
    def is_user_upload(self) -> bool:
        if self.user_upload is not None:
            return self.user_upload
        ref = self.image_ref.lower()
        return self.has_opaque_ref or any(marker in ref for marker in _USER_UPLOAD_MARKERS)

    @property
    def has_opaque_ref(self) -> bool:
        """True when ``image_ref`` is an inline payload or object URL rather than a name."""

        ref = self.image_ref.strip()
        if ref.lower().startswith(_OPAQUE_PREFIXES) or ";base64," in ref.lower():
            return True
        return _RAW_BASE64.fullmatch(ref) is not None

    @property
    def proxy_text(self) -> str:
        """Keyword text derived from the image reference; opaque payloads contribute only the category."""

        if self.has_opaque_ref:
            return self.category.lower()
        return f"{self.image_ref} {self.category}".lower()

    @property
    def search_text(self) -> str:
        """Proxy text plus any vision tags, used for keyword bans and moodboard matching."""

        vision_text = self.vision_text
        return self.proxy_text if vision_text is None else f"{self.proxy_text} {vision_text}"

    @property
    def vision_text(self) -> Optional[str]:
        if self.vision_attributes is None:
            return None
        return f"{self.vision_attributes.tag_text()} {self.category}".lower()

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "item_id": self.item_id,
            "image_ref": self.image_ref,
            "category": self.category,
            "is_user_upload": self.is_user_upload,
        }
        if self.vision_attributes is not None:
            attrs = self.vision_attributes
            payload["vision_attributes"] = {
                "sub_category": attrs.sub_category,
                "primary_color": attrs.primary_color,
                "secondary_colors": list(attrs.secondary_colors),
                "fabric_appearance": attrs.fabric_appearance,
                "fit_appearance": attrs.fit_appearance,
                "formality_signal": attrs.formality_signal,
                "patterns": list(attrs.patterns),
            }
        return payload


def from_raw_metadata(metadata: Mapping[str, Any]) -> Garment:
    """Factory to build a :class:`Garment` from loose closet metadata.

    Accepts both the snake_case keys used internally and the camelCase keys the
    mobile client sends (``id``, ``image``, ``imageRef``, ``visionAttributes``).
    """

    item_id = metadata.get("item_id", metadata.get("id"))
    category = metadata.get("category")
    missing = [name for name, value in (("item_id", item_id), ("category", category)) if value in (None, "")]
    if missing:
        raise ValueError(f"Missing required fields for Garment: {missing}")

    image_ref = metadata.get("image_ref") or metadata.get("imageRef") or metadata.get("image") or ""
    raw_vision = metadata.get("vision_attributes") or metadata.get("visionAttributes")
    vision = VisionAttributes.from_raw(raw_vision) if isinstance(raw_vision, Mapping) else None
    user_upload = metadata.get("user_upload", metadata.get("isUserUpload"))

    return Garment(
        item_id=str(item_id),
        image_ref=str(image_ref),
        category=str(category),
        vision_attributes=vision,
        user_upload=None if user_upload is None else bool(user_upload),
    )


__all__ = ["Garment", "VisionAttributes", "from_raw_metadata"]

"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.garment import Garment, VisionAttributes, from_raw_metadata
from models.outfit import Outfit
from models.style_profile import StyleProfile

__all__ = ["Garment", "VisionAttributes", "from_raw_metadata", "Outfit", "StyleProfile"]

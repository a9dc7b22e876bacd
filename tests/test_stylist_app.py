"""App wiring, configuration and structured logging."""
from __future__ import annotations

import json
import logging
import random
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from stylist_app.app import StylistApp, coerce_garments
from stylist_app.config import StylistConfig
from stylist_app.logging_config import JsonFormatter, correlation_context, redact_for_log

ESSENTIALS = [
    {"id": "1", "category": "Tops", "image": "plain_white_tee"},
    {"id": "2", "category": "Bottoms", "image": "black_jeans"},
    {"id": "3", "category": "Shoes", "image": "white_sneaker"},
]

_CONFIG_KEYS = (
    "APP_ENV",
    "APP_CONFIG_PATH",
    "STYLIST_CONFIG_DIR",
    "STYLIST_RANDOM_SEED",
    "STYLIST_MAX_ATTEMPTS",
    "STYLIST_PER_POOL_CAP",
    "STYLIST_STRICT_TIER_CAP",
    "STYLIST_TARGET_OUTFIT_COUNT",
    "STYLIST_EXHAUSTIVE_LIMIT",
    "LOG_LEVEL",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in _CONFIG_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def _app(seed: int = 11) -> StylistApp:
    return StylistApp(config=StylistConfig(), rng=random.Random(seed))


def test_config_defaults(clean_env: pytest.MonkeyPatch) -> None:
    config = StylistConfig.from_env()
    assert config.random_seed is None
    assert config.max_attempts == 10
    assert config.target_outfit_count == 5
    assert config.log_level == "INFO"
    assert config.environment is None


def test_config_env_overrides_yaml(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / "staging.yaml").write_text(
        "# staging\nstylist_random_seed: 42\nstylist_max_attempts: \"25\"\nlog_level: debug\n"
    )
    clean_env.setenv("APP_ENV", "staging")
    clean_env.setenv("STYLIST_CONFIG_DIR", str(tmp_path))
    clean_env.setenv("STYLIST_MAX_ATTEMPTS", "30")

    config = StylistConfig.from_env()
    assert config.environment == "staging"
    assert config.random_seed == 42
    assert config.max_attempts == 30
    assert config.log_level == "DEBUG"
    assert config.assembler_settings().max_attempts == 30


def test_config_rejects_non_integer(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("STYLIST_PER_POOL_CAP", "two")
    with pytest.raises(ValueError, match="stylist_per_pool_cap"):
        StylistConfig.from_env()


def test_coerce_garments_skips_invalid_entries(caplog: pytest.LogCaptureFixture) -> None:
    raw = ESSENTIALS + [{"id": "4", "category": "Hats", "image": "x"}, {"category": "Tops"}]
    with caplog.at_level(logging.WARNING):
        garments = coerce_garments(raw)
    assert [garment.item_id for garment in garments] == ["1", "2", "3"]
    assert "Skipping closet entry" in caplog.text


def test_generate_outfits_response_shape() -> None:
    response = _app().generate_outfits(ESSENTIALS, occasion="casual")
    assert response["status"] == "ok"
    assert response["occasion"] == "Casual"
    assert response["user_facing_summary"].startswith("Generated")
    outfit = response["outfits"][0]
    assert {"id", "items", "title", "score", "style_tag", "is_fallback", "collage"} <= set(outfit)
    assert outfit["collage"]["stickers"]
    assert response["debug_summary"]["compatible_count"] == 3


def test_generate_outfits_no_outfit_is_not_an_error() -> None:
    response = _app().generate_outfits(ESSENTIALS, occasion="Work")
    assert response["status"] == "no_outfit"
    assert response["outfits"] == []
    assert "No outfit found for Work" in response["user_facing_summary"]


def test_partial_summary_mentions_partial_looks() -> None:
    response = _app().generate_outfits([{"id": "1", "category": "Tops", "image": "navy_polo_cotton"}], "Dinner")
    assert response["outfits"][0]["is_fallback"] is True
    assert "partial" in response["user_facing_summary"]


def test_classify_and_check_compatibility() -> None:
    app = _app()
    profile = app.classify({"id": "h", "category": "Tops", "image": "black_tech_hoodie"})
    assert profile["item_id"] == "h"
    assert profile["formality"] == 2
    assert profile["vibes"] == ["Sporty"]

    verdict = app.check_compatibility({"id": "t", "category": "Bottoms", "image": "navy_trousers"}, "athleisure")
    assert verdict == {"item_id": "t", "occasion": "Sport", "compatible": False, "reason": "category banned for Sport"}


def test_swap_and_render_collage() -> None:
    app = _app()
    result = app.assembler.generate(coerce_garments(ESSENTIALS), "Casual")
    outfit = result[0]
    swapped = app.swap_item(outfit, "2", {"id": "9", "category": "Bottoms", "image": "olive_cargo_pants"})
    assert "9" in swapped.item_ids and "2" not in swapped.item_ids
    assert "2" in outfit.item_ids
    collage = app.render_collage(swapped)
    assert len(collage["stickers"]) == len(swapped.items)


def test_redaction_masks_images_and_emails() -> None:
    payload = {
        "image_ref": "blob:abc",
        "note": "contact me at a@b.com",
        "link": "https://abc.supabase.co/x.png",
        "nested": [{"email": "a@b.com"}],
        "count": 3,
    }
    scrubbed = redact_for_log(payload)
    assert scrubbed["image_ref"] == "[redacted]"
    assert scrubbed["note"] == "contact me at [redacted-email]"
    assert scrubbed["link"] == "[redacted-url]"
    assert scrubbed["nested"] == [{"email": "[redacted]"}]
    assert scrubbed["count"] == 3


def test_json_formatter_includes_correlation_id() -> None:
    record = logging.LogRecord("stylist", logging.INFO, __file__, 1, "generation_started", None, None)
    record.occasion = "Dinner"
    with correlation_context("corr-123"):
        payload = json.loads(JsonFormatter().format(record))
    assert payload["correlation_id"] == "corr-123"
    assert payload["event"] == "generation_started"
    assert payload["occasion"] == "Dinner"


def test_handle_request_validates_payload() -> None:
    app = _app()
    rejected = app.handle_request({"garments": [{"id": "1", "category": "Hats"}], "occasion": "Casual"})
    assert rejected["status"] == "needs_review"
    assert rejected["message"] == "Invalid outfit request payload"
    assert rejected["details"]

    accepted = app.handle_request({"garments": ESSENTIALS, "occasion": "Casual"})
    assert accepted["status"] == "ok"
    assert accepted["debug_summary"] is None


def test_cold_weather_summary_asks_for_a_layer() -> None:
    response = _app().generate_outfits(ESSENTIALS, occasion="Casual", weather="cold")
    assert response["status"] == "ok"
    assert response["layer_warning"].startswith("No outerwear")
    assert response["user_facing_summary"].endswith("add a layer before heading out.")

    warm = _app().generate_outfits(ESSENTIALS, occasion="Casual", weather="Sunny")
    assert warm["layer_warning"] is None

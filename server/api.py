"""FastAPI server exposing the stylist rule engine."""

from typing import Union

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from logic.validation import CompatibilityRequest, GarmentPayload, OutfitRequest, OutfitResponse, ValidationResult
from models.outfit import Outfit
from stylist_app.app import StylistApp
from stylist_app.logging_config import configure_logging

configure_logging()

stylist_app = StylistApp()
app = FastAPI(title="Closet Stylist", version="0.1.0")


class CollageRequest(BaseModel):
    """Render request for an outfit previously returned by ``/outfits``."""

    id: str
    items: list[GarmentPayload]
    title: str
    score: float = 0.0
    style_tag: str = ""
    is_fallback: bool = False
    missing_category_warning: str | None = None
    moodboard_id: str | None = None


@app.get("/healthz")
async def healthcheck() -> dict:
    """Lightweight readiness probe."""

    return {
        "status": "ok",
        "service": "closet-stylist",
        "environment": stylist_app.config.environment or "local",
    }


@app.post("/classify")
async def classify(request: GarmentPayload) -> dict:
    """Return the style profile computed for one garment."""

    return stylist_app.classify(request.to_garment())


@app.post("/compatibility")
async def compatibility(request: CompatibilityRequest) -> dict:
    """Check whether a garment may be worn to an occasion."""

    return stylist_app.check_compatibility(request.garment.to_garment(), request.occasion)


@app.post("/outfits", response_model=Union[OutfitResponse, ValidationResult])
async def outfits(request: OutfitRequest) -> dict:
    """Generate outfits.

    An empty result comes back as ``status: no_outfit`` and a response that fails
    its schema check as ``status: needs_review``; neither is an HTTP error.
    """

    return stylist_app.handle_request(request.model_dump(by_alias=True))


@app.post("/collage")
async def collage(request: CollageRequest) -> dict:
    """Lay out an outfit (for example after an item swap) for rendering."""

    if not request.items:
        raise HTTPException(status_code=400, detail="outfit has no items")
    outfit = Outfit(
        outfit_id=request.id,
        items=tuple(item.to_garment() for item in request.items),
        title=request.title,
        score=request.score,
        style_tag=request.style_tag,
        is_fallback=request.is_fallback,
        missing_category_warning=request.missing_category_warning,
        moodboard_id=request.moodboard_id,
    )
    return stylist_app.render_collage(outfit)


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=int("8080"), reload=False)

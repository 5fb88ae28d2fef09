from __future__ import annotations

"""
FastAPI application for the shoefit recommender.

- The request carries everything the engine needs (already-extracted
  table rows, dropdown labels, fit context); nothing is fetched or stored
- An engine ``None`` (bad foot length, unusable size table) maps to 422
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .config import HealthResponse, RecommendRequest, RecommendResponse
from .engine import recommend_shoe_size
from .mapping import to_api_response

app = FastAPI(title="shoefit")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="healthy")


@app.post("/recommend", response_model=RecommendResponse)
def recommend(req: RecommendRequest) -> RecommendResponse:
    if not req.rows:
        raise HTTPException(status_code=422, detail="At least one size table row is required")
    rec = recommend_shoe_size(req.foot_length, req.rows, req.dropdown_sizes, req.context)
    if rec is None:
        logger.warning("No recommendation for foot length {!r} ({} rows)", req.foot_length, len(req.rows))
        raise HTTPException(status_code=422, detail="Could not compute a shoe size recommendation")
    return to_api_response(rec)

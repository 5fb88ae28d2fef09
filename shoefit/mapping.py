from __future__ import annotations

"""
Mapping utilities for the shoefit API.

Converts the engine's frozen :class:`~shoefit.engine.Recommendation`
into the strict Pydantic response defined in :mod:`shoefit.config`.
Keeping the conversion here keeps ``api.py`` and ``cli.py`` simple.
"""

from typing import Dict, List

from .config import DiagnosticItem, RecommendResponse
from .diagnostics import DiagnosticEvent
from .engine import Recommendation
from .resolver import OverrideSource


def to_diagnostic_items(events: tuple[DiagnosticEvent, ...]) -> List[DiagnosticItem]:
    return [DiagnosticItem(code=e.code.value, message=e.message, size=e.size) for e in events]


def to_api_response(rec: Recommendation) -> RecommendResponse:
    override = None if rec.override_source == OverrideSource.NONE else rec.override_source.value
    return RecommendResponse(
        size=rec.primary_size,
        secondary_size=rec.secondary_size,
        technical_size=rec.technical_size,
        is_dual=rec.is_dual,
        is_stor_adjusted=rec.is_stor_adjusted,
        is_border_case=rec.is_border_case,
        override_source=override,
        category=rec.category.value,
        fit_band=rec.fit_band.value,
        confidence=rec.confidence,
        fit_note=rec.fit_note,
        user_foot_length_cm=rec.user_foot_length_cm,
        target_length_cm=rec.target_length_cm,
        matched_foot_length_cm=rec.matched_foot_length_cm,
        buffer_applied_cm=rec.buffer_applied_cm,
        fit_buffer_cm=rec.fit_buffer_cm,
        matched_row_index=rec.matched_row_index,
        is_interpolated=rec.is_interpolated,
        store_recommendation=rec.store_recommendation,
        store_recommendation_note=rec.store_recommendation_note,
        diagnostics=to_diagnostic_items(rec.diagnostics),
    )


def to_table_row(foot_length: str, rec: Recommendation | None) -> Dict[str, str]:
    """One batch-output row; an unanswerable foot length gets empty cells."""
    if rec is None:
        return {"foot_length": foot_length, "primary_size": "", "secondary_size": "", "fit_note": ""}
    return {
        "foot_length": foot_length,
        "primary_size": rec.primary_size,
        "secondary_size": rec.secondary_size or "",
        "fit_note": rec.fit_note,
    }

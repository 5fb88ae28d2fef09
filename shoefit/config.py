from __future__ import annotations
"""
Configuration for the shoefit size recommender.

Tuning constants for the footwear decision engine live here so the
engine modules never hardcode numbers, together with the pydantic
schemas shared by the HTTP API and the engine's input layer.
"""

import os
import re
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

# Construction buffer policies (cm).  Buffer = shoe foot length - user foot length.
CHELSEA_STRETCH_ADJUSTMENT_CM = 0.0
CHELSEA_MIN_BUFFER_CM = -0.3
CHELSEA_MAX_BUFFER_CM = 0.4

LOAFER_STRETCH_ADJUSTMENT_CM = -0.3
LOAFER_MIN_BUFFER_CM = -0.5
LOAFER_MAX_BUFFER_CM = 0.2

LACED_STRETCH_ADJUSTMENT_CM = 0.0
LACED_MIN_BUFFER_CM = -0.2
LACED_MAX_BUFFER_CM = 0.4

# Fit hint overlay
FIT_HINT_STOR_ADJUSTMENT_CM = -0.3
FIT_HINT_LITEN_ADJUSTMENT_CM = 0.2

# Priority resolver
EXPERT_MAX_DISTANCE_CM = float(os.getenv("SHOEFIT_EXPERT_MAX_DISTANCE_CM", "1.0"))

# Border case / dual view
NEAR_TIE_THRESHOLD_CM = 0.3
SLIP_ON_DUAL_MIN_GAP_CM = 0.5
SLIP_ON_DUAL_MIN_BUFFER_CM = -0.3
SLIP_ON_DUAL_MAX_BUFFER_CM = 0.5

# Roominess bands: upper bounds (inclusive) for "snug" and "ideal"
LACED_SNUG_MAX_BUFFER_CM = 0.2
LACED_IDEAL_MAX_BUFFER_CM = 0.4
LOAFER_SNUG_MAX_BUFFER_CM = 0.0
LOAFER_IDEAL_MAX_BUFFER_CM = 0.2

CONFIDENCE_SLIP_ON = 0.90
CONFIDENCE_DEFAULT = 0.95

DEFAULT_MATERIAL = "leather"

# Numeric precision
LENGTH_DECIMALS = 2       # interpolated foot lengths and size keys
COMPARE_DECIMALS = 6      # buffers/distances before comparison

# Display fractions: fractional part -> suffix
DISPLAY_FRACTIONS: Dict[str, float] = {
    "1/4": 0.25,
    "1/3": 1 / 3,
    "1/2": 0.5,
    "2/3": 2 / 3,
    "3/4": 0.75,
}
DISPLAY_FRACTION_TOLERANCE = 0.02

# Unicode vulgar fractions seen in dropdowns
VULGAR_FRACTIONS: Dict[str, str] = {
    "½": " 1/2",
    "⅓": " 1/3",
    "⅔": " 2/3",
    "¼": " 1/4",
    "¾": " 3/4",
}

# Size table column detection (CSV/XLSX exports vary per store)
COLUMN_CANDIDATES: Dict[str, List[str]] = {
    "label": [
        "label",
        "size",
        "Size",
        "EU",
        "EU size",
        "Størrelse",
        "Storlek",
        "int_size",
    ],
    "foot_length_cm": [
        "foot_length_cm",
        "foot_length",
        "Foot length",
        "Foot length (cm)",
        "Fotlengde",
        "Fotlengde (cm)",
        "Fotlängd",
        "cm",
    ],
    "row_index": ["row_index", "rowIndex", "row"],
}

LOG_LEVEL = os.getenv("SHOEFIT_LOG_LEVEL", "INFO")

# Free-text fit hints (Norwegian/Swedish)
_FIT_HINT_LITEN_RE = re.compile(r"\b(?:liten|små)\b")
_FIT_HINT_STOR_RE = re.compile(r"\b(?:stor|stort|store)\b")


# Pydantic schemas
class MeasuredRow(BaseModel):
    label: str
    foot_length_cm: Optional[float] = None
    row_index: Optional[int] = Field(default=None, ge=0)


class FitContext(BaseModel):
    is_moccasin: bool = False
    is_leather_boot: bool = False
    has_laces: bool = False
    manual_override: bool = False
    material_info: Optional[str] = None
    store_recommendation: Optional[str] = None
    recommended_size_from_text: Optional[str] = None
    fit_hint: Optional[Literal["liten", "stor"]] = None

    @field_validator("fit_hint", mode="before")
    @classmethod
    def _normalize_fit_hint(cls, value):
        # Page text such as "Varen er stor" collapses to the bare hint.
        # Whole words only: "storlek"/"størrelse" mean "size", not "large".
        if value is None:
            return None
        text = str(value).strip().lower()
        if _FIT_HINT_LITEN_RE.search(text):
            return "liten"
        if _FIT_HINT_STOR_RE.search(text):
            return "stor"
        return None

    @field_validator("store_recommendation", "recommended_size_from_text", "material_info", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if value is None:
            return None
        text = str(value).strip()
        return text or None


class RecommendRequest(BaseModel):
    foot_length: Union[str, float]
    rows: List[MeasuredRow] = Field(default_factory=list)
    dropdown_sizes: List[str] = Field(default_factory=list)
    context: FitContext = Field(default_factory=FitContext)


class DiagnosticItem(BaseModel):
    code: str
    message: str
    size: Optional[str] = None


class RecommendResponse(BaseModel):
    size: str
    secondary_size: Optional[str] = None
    technical_size: Optional[str] = None
    is_dual: bool = False
    is_stor_adjusted: bool = False
    is_border_case: bool = False
    override_source: Optional[Literal["store", "expert"]] = None
    category: str
    fit_band: str
    confidence: float = Field(ge=0.0, le=1.0)
    fit_note: str
    user_foot_length_cm: float
    target_length_cm: float
    matched_foot_length_cm: float
    buffer_applied_cm: float
    fit_buffer_cm: float
    matched_row_index: Optional[int] = None
    is_interpolated: bool = False
    store_recommendation: Optional[str] = None
    store_recommendation_note: Optional[str] = None
    diagnostics: List[DiagnosticItem] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str

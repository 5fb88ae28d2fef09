from __future__ import annotations

"""
Fit note composition.

:func:`compose_fit_note` is a pure function of the recommendation's
fields: the same recommendation always yields the same text.
"""

import math
from enum import Enum
from typing import TYPE_CHECKING, List

from .config import (
    LACED_IDEAL_MAX_BUFFER_CM,
    LACED_SNUG_MAX_BUFFER_CM,
    LOAFER_IDEAL_MAX_BUFFER_CM,
    LOAFER_SNUG_MAX_BUFFER_CM,
)
from .construction import BUFFER_POLICIES, ConstructionCategory
from .normalize import format_size_for_display, size_key
from .resolver import OverrideSource

if TYPE_CHECKING:
    from .engine import Recommendation


class FitBand(str, Enum):
    SNUG = "snug"
    IDEAL = "ideal"
    ROOMY = "roomy"


def fit_band_for(category: ConstructionCategory, buffer_cm: float) -> FitBand:
    if category == ConstructionCategory.LOAFER_MOCCASIN:
        snug_max, ideal_max = LOAFER_SNUG_MAX_BUFFER_CM, LOAFER_IDEAL_MAX_BUFFER_CM
    else:
        snug_max, ideal_max = LACED_SNUG_MAX_BUFFER_CM, LACED_IDEAL_MAX_BUFFER_CM
    if buffer_cm <= snug_max:
        return FitBand.SNUG
    if buffer_cm <= ideal_max:
        return FitBand.IDEAL
    return FitBand.ROOMY


def band_label(category: ConstructionCategory, band: FitBand) -> str:
    # Snug is the goal for laced shoes and boots, so it reads as "PERFECT".
    if band == FitBand.SNUG and category != ConstructionCategory.LOAFER_MOCCASIN:
        return "PERFECT"
    return band.value.upper()


def _main_line(rec: "Recommendation") -> str:
    primary = format_size_for_display(rec.primary_size)

    if rec.override_source == OverrideSource.STORE:
        return f"Following store recommendation: size {primary}"
    if rec.override_source == OverrideSource.EXPERT:
        line = f"Following expert recommendation: size {primary}"
        if rec.technical_size:
            line += f" (calculated match: {format_size_for_display(rec.technical_size)})"
        return line
    if rec.is_stor_adjusted and rec.technical_size:
        return f"Item runs large - recommending {primary} (technical match: {format_size_for_display(rec.technical_size)})"
    if rec.is_dual and rec.secondary_size:
        return (
            f"Slip-on {rec.material_info} stretches over time - "
            f"snug fit {primary}, comfort fit {format_size_for_display(rec.secondary_size)}"
        )

    band = f"{band_label(rec.category, rec.fit_band)} fit ({rec.fit_buffer_cm:+.1f}cm)"
    if rec.category == ConstructionCategory.LOAFER_MOCCASIN:
        if rec.fit_hint == "stor":
            line = f"Recommending {primary} as slip-on {rec.material_info} stretches significantly"
            key = size_key(rec.primary_size)
            if key is not None:
                next_size = format_size_for_display(math.floor(key) + 1)
                line += f". Since the item also runs large, {next_size} will quickly become too loose"
            return f"{line} - {band}"
        return f"Chose {primary} as slip-on {rec.material_info} stretches and would otherwise cause heel slip - {band}"
    if rec.fit_hint == "stor":
        return "Item runs large - sized down accordingly"
    return f"{BUFFER_POLICIES[rec.category].note} - {band}"


def compose_fit_note(rec: "Recommendation") -> str:
    lines: List[str] = []
    if rec.boundary_warning:
        lines.append(rec.boundary_warning)
    if rec.store_recommendation_note and rec.override_source != OverrideSource.STORE:
        lines.append(rec.store_recommendation_note)
    lines.append(_main_line(rec))
    return "\n".join(lines)

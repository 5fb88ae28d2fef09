from __future__ import annotations

"""
Footwear size recommendation engine.

Entry point for the decision pipeline::

    rows + dropdown -> size ladder
    context         -> construction category + buffer policy
    ladder + policy -> priority resolver (store -> computed -> expert)
    match           -> border case / dual view
    recommendation  -> fit note

The engine is pure: it reads already-extracted inputs, keeps no state
between calls and returns either a :class:`Recommendation` or ``None``
when the foot length or the size ladder is unusable.

Example::

    from shoefit.config import FitContext, MeasuredRow
    from shoefit.engine import recommend_shoe_size

    rec = recommend_shoe_size(
        "28,0",
        [MeasuredRow(label="43", foot_length_cm=28.3)],
        context=FitContext(has_laces=True),
    )
    rec.primary_size, rec.fit_note

"""

from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple, Union

from loguru import logger

from .config import (
    COMPARE_DECIMALS,
    CONFIDENCE_DEFAULT,
    CONFIDENCE_SLIP_ON,
    DEFAULT_MATERIAL,
    FitContext,
    MeasuredRow,
)
from .construction import ConstructionCategory, resolve_fit_policy
from .diagnostics import DiagnosticEvent
from .dual import apply_border_rules
from .fit_note import FitBand, compose_fit_note, fit_band_for
from .ladder import build_size_ladder
from .normalize import parse_foot_length
from .resolver import OverrideSource, boundary_warning, resolve_match


@dataclass(frozen=True)
class Recommendation:
    primary_size: str
    secondary_size: Optional[str]
    is_dual: bool
    technical_size: Optional[str]
    is_stor_adjusted: bool
    is_border_case: bool
    override_source: OverrideSource
    category: ConstructionCategory
    fit_hint: Optional[str]
    material_info: str
    fit_band: FitBand
    confidence: float
    user_foot_length_cm: float
    target_length_cm: float
    matched_foot_length_cm: float
    buffer_applied_cm: float
    fit_buffer_cm: float
    matched_row_index: Optional[int]
    is_interpolated: bool
    store_recommendation: Optional[str] = None
    store_recommendation_note: Optional[str] = None
    boundary_warning: Optional[str] = None
    fit_note: str = ""
    diagnostics: Tuple[DiagnosticEvent, ...] = ()


def recommend_shoe_size(
    foot_length: Union[str, float, None],
    rows: Sequence[MeasuredRow],
    dropdown_sizes: Sequence[str] = (),
    context: Optional[FitContext] = None,
) -> Optional[Recommendation]:
    """Recommend a shoe size, or return None when no answer is possible."""
    user_foot = parse_foot_length(foot_length)
    if user_foot is None:
        logger.warning("No usable foot length ({!r}); skipping shoe recommendation", foot_length)
        return None

    context = context or FitContext()
    ladder = build_size_ladder(rows, dropdown_sizes)
    if len(ladder) == 0:
        logger.warning("No valid shoe sizes found ({} rows, {} dropdown sizes)", len(rows), len(dropdown_sizes))
        return None

    policy = resolve_fit_policy(user_foot, context)
    match = resolve_match(ladder, policy, context)
    if match is None:
        return None
    decision = apply_border_rules(match, policy)

    chosen = decision.primary
    rec = Recommendation(
        primary_size=chosen.label,
        secondary_size=decision.secondary.label if decision.secondary else None,
        is_dual=decision.is_dual,
        technical_size=decision.technical_size,
        is_stor_adjusted=decision.is_stor_adjusted,
        is_border_case=decision.is_border_case,
        override_source=match.override_source,
        category=policy.category,
        fit_hint=policy.fit_hint,
        material_info=context.material_info or DEFAULT_MATERIAL,
        fit_band=fit_band_for(policy.category, chosen.buffer_cm),
        confidence=CONFIDENCE_SLIP_ON if policy.category == ConstructionCategory.LOAFER_MOCCASIN else CONFIDENCE_DEFAULT,
        user_foot_length_cm=user_foot,
        target_length_cm=round(policy.target_length_cm, COMPARE_DECIMALS),
        matched_foot_length_cm=chosen.foot_length_cm,
        buffer_applied_cm=round(policy.total_adjustment_cm, COMPARE_DECIMALS),
        fit_buffer_cm=chosen.buffer_cm,
        matched_row_index=chosen.entry.source_row_index,
        is_interpolated=chosen.entry.interpolated,
        store_recommendation=context.store_recommendation,
        store_recommendation_note=match.store_note,
        # Fallback warning describes the final size, after the border rules.
        boundary_warning=None if match.constrained else boundary_warning(chosen, policy),
        diagnostics=ladder.events + match.events + decision.events,
    )
    rec = replace(rec, fit_note=compose_fit_note(rec))
    logger.info(
        "Shoe recommendation: {}{} for {:.1f}cm foot ({})",
        rec.primary_size,
        f" / {rec.secondary_size}" if rec.secondary_size else "",
        user_foot,
        policy.category.value,
    )
    return rec

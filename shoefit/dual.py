from __future__ import annotations

"""
Border-case and dual-recommendation rules.

Applied to a computed match only: a store or expert override passes
through untouched.  Rules, in order:

1. Loafer/moccasin near-tie: prefer the smaller of the two closest sizes
   (a slip-on with room to spare slips at the heel).
2. "Runs large" dual view: the store says the item is big, so show the
   smaller size as the recommendation and the larger as the technical
   match.
3. Loafer/moccasin dual view: the two closest sizes are far apart, so
   offer the smaller as snug fit and the larger as comfort fit.

Rules 2 and 3 are mutually exclusive; the first applicable one wins.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .config import (
    COMPARE_DECIMALS,
    NEAR_TIE_THRESHOLD_CM,
    SLIP_ON_DUAL_MAX_BUFFER_CM,
    SLIP_ON_DUAL_MIN_BUFFER_CM,
    SLIP_ON_DUAL_MIN_GAP_CM,
)
from .construction import ConstructionCategory, FitPolicy
from .diagnostics import DiagnosticCode, DiagnosticEvent
from .resolver import MatchResult, OverrideSource
from .search import Candidate


@dataclass(frozen=True)
class DualDecision:
    primary: Candidate
    secondary: Optional[Candidate] = None
    technical_size: Optional[str] = None
    is_dual: bool = False
    is_stor_adjusted: bool = False
    is_border_case: bool = False
    events: Tuple[DiagnosticEvent, ...] = field(default=(), compare=False)


def _smaller_larger(a: Candidate, b: Candidate) -> Tuple[Candidate, Candidate]:
    # Equal lengths keep the current primary as the "smaller".
    if b.foot_length_cm < a.foot_length_cm:
        return b, a
    return a, b


def apply_border_rules(match: MatchResult, policy: FitPolicy) -> DualDecision:
    if match.override_source != OverrideSource.NONE:
        return DualDecision(primary=match.primary, technical_size=match.technical_size)

    primary = match.primary
    runner_up = match.runner_up
    is_slip_on = policy.category == ConstructionCategory.LOAFER_MOCCASIN
    events: List[DiagnosticEvent] = []
    is_border_case = False
    swapped = False

    if is_slip_on and runner_up is not None:
        if abs(primary.distance_cm - runner_up.distance_cm) < NEAR_TIE_THRESHOLD_CM:
            is_border_case = True
            smaller, larger = _smaller_larger(primary, runner_up)
            if smaller is not primary:
                primary, runner_up = smaller, larger
                swapped = True
            events.append(DiagnosticEvent(
                DiagnosticCode.BORDER_CASE,
                f"Near-tie between {smaller.label} and {larger.label}; choosing the smaller size",
                primary.label,
            ))

    if policy.fit_hint == "stor" and match.technical_size is None and runner_up is not None:
        smaller, larger = _smaller_larger(primary, runner_up)
        events.append(DiagnosticEvent(
            DiagnosticCode.DUAL_RUNS_LARGE,
            f"Item runs large: recommending {smaller.label}, technical match {larger.label}",
            smaller.label,
        ))
        return DualDecision(
            primary=smaller,
            secondary=larger,
            technical_size=larger.label,
            is_dual=True,
            is_stor_adjusted=True,
            is_border_case=is_border_case,
            events=tuple(events),
        )

    if is_slip_on and not swapped and runner_up is not None:
        smaller, larger = _smaller_larger(primary, runner_up)
        gap = round(larger.foot_length_cm - smaller.foot_length_cm, COMPARE_DECIMALS)
        if gap > SLIP_ON_DUAL_MIN_GAP_CM and SLIP_ON_DUAL_MIN_BUFFER_CM <= larger.buffer_cm <= SLIP_ON_DUAL_MAX_BUFFER_CM:
            events.append(DiagnosticEvent(
                DiagnosticCode.DUAL_SLIP_ON,
                f"Snug fit {smaller.label}, comfort fit {larger.label} (gap {gap:.2f}cm)",
                smaller.label,
            ))
            return DualDecision(
                primary=smaller,
                secondary=larger,
                is_dual=True,
                is_border_case=is_border_case,
                events=tuple(events),
            )

    return DualDecision(primary=primary, is_border_case=is_border_case, events=tuple(events))

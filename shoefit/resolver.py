from __future__ import annotations

"""
Priority resolver: store recommendation, then computed best match, then
expert text recommendation.

Resolution is a single linear pass.  ``override_source`` records which
step decided the primary size; once it is set, later steps (and the
border/dual logic downstream) leave the result alone.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from loguru import logger

from .config import COMPARE_DECIMALS, EXPERT_MAX_DISTANCE_CM, FitContext
from .construction import FitPolicy
from .diagnostics import DiagnosticCode, DiagnosticEvent
from .ladder import SizeLadder
from .normalize import format_size_for_display
from .search import Candidate, SearchResult, find_best_match, measure


class OverrideSource(str, Enum):
    NONE = "none"
    STORE = "store"
    EXPERT = "expert"


@dataclass(frozen=True)
class MatchResult:
    primary: Candidate
    runner_up: Optional[Candidate]
    override_source: OverrideSource = OverrideSource.NONE
    technical_size: Optional[str] = None
    store_note: Optional[str] = None
    constrained: bool = True
    events: Tuple[DiagnosticEvent, ...] = field(default=(), compare=False)


@dataclass(frozen=True)
class StoreCheck:
    candidate: Optional[Candidate]
    accepted: bool
    note: Optional[str]
    event: DiagnosticEvent


def check_store_recommendation(label: str, ladder: SizeLadder, policy: FitPolicy) -> StoreCheck:
    entry = ladder.find(label)
    if entry is None:
        return StoreCheck(None, False, None, DiagnosticEvent(
            DiagnosticCode.STORE_NOT_FOUND,
            f"Store recommendation {label} is not in the size list",
            label,
        ))

    candidate = measure(entry, policy)
    shown = format_size_for_display(entry.label)
    buffer_cm = candidate.buffer_cm
    limits = policy.buffer
    if limits.accepts(buffer_cm):
        note = f"Store recommendation ({shown}) is safe"
        return StoreCheck(candidate, True, note, DiagnosticEvent(DiagnosticCode.STORE_ACCEPTED, note, entry.label))
    if buffer_cm > limits.max_buffer_cm:
        note = (
            f"Store suggests {shown}, but it's TOO LARGE "
            f"({buffer_cm:+.1f}cm buffer exceeds max {limits.max_buffer_cm}cm)"
        )
    else:
        note = f"Store suggests {shown}, but it may be too small ({buffer_cm:+.1f}cm buffer)"
    return StoreCheck(candidate, False, note, DiagnosticEvent(DiagnosticCode.STORE_REJECTED, note, entry.label))


def boundary_warning(candidate: Candidate, policy: FitPolicy) -> Optional[str]:
    """Warning line for a size outside the buffer policy, or None when it fits."""
    limits = policy.buffer
    if candidate.buffer_cm > limits.max_buffer_cm:
        return (
            f"WARNING: Buffer of {candidate.buffer_cm:+.1f}cm exceeds "
            f"recommended max ({limits.max_buffer_cm}cm)"
        )
    if candidate.buffer_cm < limits.min_buffer_cm:
        return (
            f"WARNING: Size {format_size_for_display(candidate.label)} may be too small "
            f"({candidate.buffer_cm:.1f}cm under foot length, min: {limits.min_buffer_cm}cm)"
        )
    return None


def resolve_match(ladder: SizeLadder, policy: FitPolicy, context: FitContext) -> Optional[MatchResult]:
    events: List[DiagnosticEvent] = []
    store_note: Optional[str] = None

    # 1) Store recommendation
    if context.store_recommendation:
        check = check_store_recommendation(context.store_recommendation, ladder, policy)
        events.append(check.event)
        store_note = check.note
        if check.accepted and check.candidate is not None:
            logger.debug("Store recommendation {} accepted", check.candidate.label)
            return MatchResult(
                primary=check.candidate,
                runner_up=None,
                override_source=OverrideSource.STORE,
                store_note=store_note,
                events=tuple(events),
            )

    # 2) Computed best match
    search: Optional[SearchResult] = find_best_match(ladder, policy)
    if search is None:
        return None
    if not search.constrained:
        events.append(DiagnosticEvent(
            DiagnosticCode.BUFFER_FALLBACK,
            "No size satisfied the buffer policy; using the closest size",
            search.primary.label,
        ))

    # 3) Expert text recommendation
    expert_label = context.recommended_size_from_text
    if expert_label:
        entry = ladder.find(expert_label)
        if entry is None:
            events.append(DiagnosticEvent(
                DiagnosticCode.EXPERT_NOT_FOUND,
                f"Expert recommendation {expert_label} is not in the size list",
                expert_label,
            ))
        else:
            distance = round(abs(entry.foot_length_cm - policy.user_foot_length_cm), COMPARE_DECIMALS)
            if distance <= EXPERT_MAX_DISTANCE_CM:
                events.append(DiagnosticEvent(
                    DiagnosticCode.EXPERT_ACCEPTED,
                    f"Expert recommendation {entry.label} is within {distance:.1f}cm of the foot",
                    entry.label,
                ))
                return MatchResult(
                    primary=measure(entry, policy),
                    runner_up=None,
                    override_source=OverrideSource.EXPERT,
                    technical_size=search.primary.label,
                    store_note=store_note,
                    constrained=search.constrained,
                    events=tuple(events),
                )
            events.append(DiagnosticEvent(
                DiagnosticCode.EXPERT_TOO_FAR,
                f"Expert recommendation {entry.label} is {distance:.1f}cm from the foot; ignored",
                entry.label,
            ))

    return MatchResult(
        primary=search.primary,
        runner_up=search.runner_up,
        store_note=store_note,
        constrained=search.constrained,
        events=tuple(events),
    )

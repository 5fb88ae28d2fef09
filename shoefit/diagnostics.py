from __future__ import annotations

"""
Structured diagnostic events emitted by the decision engine.

The engine does not narrate its decisions through log statements that
only a developer console would see.  Each step instead returns a tuple
of :class:`DiagnosticEvent` values next to its result; the engine
concatenates them onto the final recommendation and the presentation
layer decides what to show.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DiagnosticCode(str, Enum):
    ROW_DROPPED = "row_dropped"
    DUPLICATE_SIZE = "duplicate_size"
    LABEL_UNPARSABLE = "label_unparsable"
    SIZE_INTERPOLATED = "size_interpolated"
    SIZE_NOT_INTERPOLATED = "size_not_interpolated"
    STORE_ACCEPTED = "store_accepted"
    STORE_REJECTED = "store_rejected"
    STORE_NOT_FOUND = "store_not_found"
    EXPERT_ACCEPTED = "expert_accepted"
    EXPERT_TOO_FAR = "expert_too_far"
    EXPERT_NOT_FOUND = "expert_not_found"
    BUFFER_FALLBACK = "buffer_fallback"
    BORDER_CASE = "border_case"
    DUAL_RUNS_LARGE = "dual_runs_large"
    DUAL_SLIP_ON = "dual_slip_on"


@dataclass(frozen=True)
class DiagnosticEvent:
    code: DiagnosticCode
    message: str
    size: Optional[str] = None

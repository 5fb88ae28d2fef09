from __future__ import annotations

"""
Best-match search over a size ladder.

The search is a single fold over the ladder keeping the two entries
closest to the target length.  Entries whose buffer falls outside the
construction's policy are left out; when that leaves nothing, the fold
is repeated without the constraint so the caller always gets a
best-effort answer (flagged through ``constrained=False``).
"""

from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Optional, Tuple

from .config import COMPARE_DECIMALS
from .construction import FitPolicy
from .ladder import SizeEntry, SizeLadder


@dataclass(frozen=True)
class Candidate:
    entry: SizeEntry
    buffer_cm: float
    distance_cm: float

    @property
    def label(self) -> str:
        return self.entry.label

    @property
    def foot_length_cm(self) -> float:
        return self.entry.foot_length_cm


@dataclass(frozen=True)
class SearchResult:
    primary: Candidate
    runner_up: Optional[Candidate]
    constrained: bool = True


TopTwo = Tuple[Optional[Candidate], Optional[Candidate]]


def measure(entry: SizeEntry, policy: FitPolicy) -> Candidate:
    """Buffer and distance to target, rounded so float noise cannot flip a comparison."""
    buffer_cm = round(entry.foot_length_cm - policy.user_foot_length_cm, COMPARE_DECIMALS)
    distance_cm = round(abs(entry.foot_length_cm - policy.target_length_cm), COMPARE_DECIMALS)
    return Candidate(entry, buffer_cm, distance_cm)


def _keep_closest(acc: TopTwo, candidate: Candidate) -> TopTwo:
    best, second = acc
    if best is None or candidate.distance_cm < best.distance_cm:
        return candidate, best
    if second is None or candidate.distance_cm < second.distance_cm:
        return best, candidate
    return acc


def top_two(candidates: Iterable[Candidate]) -> TopTwo:
    """
    Closest and runner-up by distance.  Ties go to the earlier candidate;
    a later equal distance can only take the runner-up slot.
    """
    return reduce(_keep_closest, candidates, (None, None))


def find_best_match(ladder: SizeLadder, policy: FitPolicy) -> Optional[SearchResult]:
    candidates = [measure(entry, policy) for entry in ladder]
    allowed = [c for c in candidates if policy.buffer.accepts(c.buffer_cm)]

    best, second = top_two(allowed)
    if best is not None:
        return SearchResult(best, second, constrained=True)

    best, second = top_two(candidates)
    if best is None:
        return None
    return SearchResult(best, second, constrained=False)

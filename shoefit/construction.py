from __future__ import annotations

"""
Construction classifier and buffer policies.

How much room a shoe may have depends on what holds the foot in place:
laces lock it, a Chelsea boot's shaft holds the ankle, and a loafer or
moccasin has nothing but its own snugness (and leather that stretches).
The classifier resolves the context flags once into a
:class:`ConstructionCategory`, and :func:`resolve_fit_policy` overlays
the store's fit hint to produce the target length for the search.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from loguru import logger

from .config import (
    CHELSEA_MAX_BUFFER_CM,
    CHELSEA_MIN_BUFFER_CM,
    CHELSEA_STRETCH_ADJUSTMENT_CM,
    FIT_HINT_LITEN_ADJUSTMENT_CM,
    FIT_HINT_STOR_ADJUSTMENT_CM,
    LACED_MAX_BUFFER_CM,
    LACED_MIN_BUFFER_CM,
    LACED_STRETCH_ADJUSTMENT_CM,
    LOAFER_MAX_BUFFER_CM,
    LOAFER_MIN_BUFFER_CM,
    LOAFER_STRETCH_ADJUSTMENT_CM,
    FitContext,
)


class ConstructionCategory(str, Enum):
    CHELSEA = "chelsea"
    LOAFER_MOCCASIN = "loafer_moccasin"
    LACED = "laced"


@dataclass(frozen=True)
class BufferPolicy:
    stretch_adjustment_cm: float
    min_buffer_cm: float
    max_buffer_cm: float
    note: str

    def accepts(self, buffer_cm: float) -> bool:
        """Inclusive on both ends."""
        return self.min_buffer_cm <= buffer_cm <= self.max_buffer_cm


BUFFER_POLICIES: Dict[ConstructionCategory, BufferPolicy] = {
    ConstructionCategory.CHELSEA: BufferPolicy(
        CHELSEA_STRETCH_ADJUSTMENT_CM,
        CHELSEA_MIN_BUFFER_CM,
        CHELSEA_MAX_BUFFER_CM,
        "Chelsea boot (high shaft provides secure fit)",
    ),
    ConstructionCategory.LOAFER_MOCCASIN: BufferPolicy(
        LOAFER_STRETCH_ADJUSTMENT_CM,
        LOAFER_MIN_BUFFER_CM,
        LOAFER_MAX_BUFFER_CM,
        "Loafer/Moccasin (must fit snugly to prevent heel slip)",
    ),
    ConstructionCategory.LACED: BufferPolicy(
        LACED_STRETCH_ADJUSTMENT_CM,
        LACED_MIN_BUFFER_CM,
        LACED_MAX_BUFFER_CM,
        "Laced (laces provide secure fit)",
    ),
}


@dataclass(frozen=True)
class FitPolicy:
    category: ConstructionCategory
    buffer: BufferPolicy
    fit_hint: Optional[str]
    user_foot_length_cm: float
    total_adjustment_cm: float

    @property
    def target_length_cm(self) -> float:
        return self.user_foot_length_cm + self.total_adjustment_cm


def classify_construction(context: FitContext) -> ConstructionCategory:
    """First match wins: Chelsea, then loafer/moccasin, then laced."""
    if context.is_leather_boot and not context.has_laces:
        return ConstructionCategory.CHELSEA
    if context.is_moccasin or context.manual_override:
        return ConstructionCategory.LOAFER_MOCCASIN
    return ConstructionCategory.LACED


def fit_hint_adjustment(fit_hint: Optional[str]) -> float:
    if fit_hint == "stor":
        return FIT_HINT_STOR_ADJUSTMENT_CM
    if fit_hint == "liten":
        return FIT_HINT_LITEN_ADJUSTMENT_CM
    return 0.0


def resolve_fit_policy(user_foot_length_cm: float, context: FitContext) -> FitPolicy:
    category = classify_construction(context)
    policy = BUFFER_POLICIES[category]
    adjustment = policy.stretch_adjustment_cm + fit_hint_adjustment(context.fit_hint)
    fit = FitPolicy(
        category=category,
        buffer=policy,
        fit_hint=context.fit_hint,
        user_foot_length_cm=user_foot_length_cm,
        total_adjustment_cm=adjustment,
    )
    logger.debug(
        "Construction {}: target {:.2f}cm, buffer range [{}, {}]",
        category.value,
        fit.target_length_cm,
        policy.min_buffer_cm,
        policy.max_buffer_cm,
    )
    return fit

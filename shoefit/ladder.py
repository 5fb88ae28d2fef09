from __future__ import annotations

"""
Size ladder construction.

Size tables on product pages usually list whole sizes only, while the
size dropdown also sells the in-between ones ("43 1/3", "43,5").  This
module merges both into one ascending ladder of :class:`SizeEntry`
values, estimating the foot length of dropdown-only sizes by linear
interpolation between the two measured sizes that bracket them.

Example::

    from shoefit.config import MeasuredRow
    from shoefit.ladder import build_size_ladder

    ladder = build_size_ladder(
        [MeasuredRow(label="43", foot_length_cm=27.0), MeasuredRow(label="44", foot_length_cm=27.7)],
        ["43", "43 1/3", "44"],
    )
    [(e.label, e.foot_length_cm) for e in ladder]
    # [('43', 27.0), ('43 1/3', 27.23), ('44', 27.7)]

"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from .config import LENGTH_DECIMALS, MeasuredRow
from .diagnostics import DiagnosticCode, DiagnosticEvent
from .normalize import clean_size_label, size_key


@dataclass(frozen=True)
class SizeEntry:
    label: str
    key: float
    foot_length_cm: float
    interpolated: bool = False
    source_row_index: Optional[int] = None


@dataclass(frozen=True)
class SizeLadder:
    """Ascending, key-unique sequence of sizes for one product."""

    entries: Tuple[SizeEntry, ...] = ()
    events: Tuple[DiagnosticEvent, ...] = field(default=(), compare=False)

    def __iter__(self) -> Iterator[SizeEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> SizeEntry:
        return self.entries[index]

    def find(self, label: Optional[str]) -> Optional[SizeEntry]:
        """Entry whose numeric key matches ``label``, or None."""
        if not label:
            return None
        key = size_key(label)
        if key is None:
            return None
        for entry in self.entries:
            if entry.key == key:
                return entry
        return None

    @property
    def labels(self) -> List[str]:
        return [e.label for e in self.entries]


def _measured_entries(rows: Sequence[MeasuredRow]) -> Tuple[List[SizeEntry], List[DiagnosticEvent]]:
    """Valid measured rows as entries, ascending by key, first row wins on duplicates."""
    events: List[DiagnosticEvent] = []
    by_key: dict[float, SizeEntry] = {}
    for position, row in enumerate(rows):
        label = clean_size_label(row.label)
        length = row.foot_length_cm
        if length is None or not np.isfinite(length) or length <= 0:
            events.append(DiagnosticEvent(
                DiagnosticCode.ROW_DROPPED,
                f"Size {label or '?'} dropped: no usable foot length",
                label or None,
            ))
            continue
        key = size_key(label)
        if key is None:
            events.append(DiagnosticEvent(
                DiagnosticCode.LABEL_UNPARSABLE,
                f"Size label '{label}' could not be parsed",
                label or None,
            ))
            continue
        if key in by_key:
            events.append(DiagnosticEvent(
                DiagnosticCode.DUPLICATE_SIZE,
                f"Size {label} duplicates {by_key[key].label}; keeping the first row",
                label,
            ))
            continue
        row_index = row.row_index if row.row_index is not None else position
        by_key[key] = SizeEntry(label=label, key=key, foot_length_cm=float(length), source_row_index=row_index)
    return sorted(by_key.values(), key=lambda e: e.key), events


def interpolate_foot_length(key: float, measured: Sequence[SizeEntry]) -> Optional[float]:
    """
    Foot length for ``key`` interpolated between the bracketing measured
    sizes, rounded to two decimals.  ``measured`` must be ascending by key.
    Returns None with fewer than two measured sizes or outside their range.
    """
    if len(measured) < 2:
        return None
    keys = np.array([e.key for e in measured], dtype=float)
    lengths = np.array([e.foot_length_cm for e in measured], dtype=float)
    if key < keys[0] or key > keys[-1]:
        return None
    return round(float(np.interp(key, keys, lengths)), LENGTH_DECIMALS)


def build_size_ladder(rows: Sequence[MeasuredRow], dropdown_labels: Sequence[str] = ()) -> SizeLadder:
    """Merge measured rows and dropdown-only sizes into a :class:`SizeLadder`."""
    measured, events = _measured_entries(rows)
    known = {e.key for e in measured}
    interpolated: List[SizeEntry] = []

    for raw in dropdown_labels:
        label = clean_size_label(raw)
        key = size_key(label)
        if key is None:
            events.append(DiagnosticEvent(
                DiagnosticCode.LABEL_UNPARSABLE,
                f"Dropdown size '{label}' could not be parsed",
                label or None,
            ))
            continue
        if key in known:
            continue
        length = interpolate_foot_length(key, measured)
        if length is None:
            events.append(DiagnosticEvent(
                DiagnosticCode.SIZE_NOT_INTERPOLATED,
                f"Dropdown size {label} is outside the measured range",
                label,
            ))
            continue
        known.add(key)
        interpolated.append(SizeEntry(label=label, key=key, foot_length_cm=length, interpolated=True))
        events.append(DiagnosticEvent(
            DiagnosticCode.SIZE_INTERPOLATED,
            f"Size {label} interpolated to {length:.2f}cm",
            label,
        ))

    entries = tuple(sorted(measured + interpolated, key=lambda e: e.key))
    logger.debug("Built size ladder: {} sizes ({} interpolated)", len(entries), len(interpolated))
    return SizeLadder(entries=entries, events=tuple(events))

from __future__ import annotations

"""
Size label and measurement normalization used across shoefit.

Stores print the same shoe size in several ways ("43 1/3", "43⅓",
"43,5", "EU 43.5").  Everything that compares sizes goes through
:func:`size_key` so that labels from the size table, the dropdown and
free-text recommendations line up on one numeric scale.  The reverse
direction, :func:`format_size_for_display`, turns numeric sizes back
into the fraction notation shoppers recognise.
"""

import math
import re
import unicodedata
from typing import Optional, Union

from .config import (
    DISPLAY_FRACTIONS,
    DISPLAY_FRACTION_TOLERANCE,
    LENGTH_DECIMALS,
    VULGAR_FRACTIONS,
)


# ---------------------------
# Basic helpers
# ---------------------------

def normalize_unicode(text: str) -> str:
    """
    Canonicalize unicode (NFC) and expand vulgar fraction glyphs into
    "whole numerator/denominator" notation.  NFKC turns "43⅓" into
    "431⁄3", which no longer parses.
    """
    if not text:
        return ""
    text = unicodedata.normalize("NFC", text)
    for glyph, replacement in VULGAR_FRACTIONS.items():
        text = text.replace(glyph, replacement)
    return text


def normalize_whitespace(text: str) -> str:
    """
    Collapse all whitespace runs into a single space and strip edges.
    """
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def clean_size_label(label: str) -> str:
    """Unicode + whitespace cleanup for a raw size label."""
    if label is None:
        return ""
    return normalize_whitespace(normalize_unicode(str(label)))


# ---------------------------
# Parsing
# ---------------------------

# Optional sizing-system prefix ("EU", "Str.", "UK") before the number.
_PREFIX_RE = re.compile(r"^[^\W\d_]+\.?\s*")
_FRACTION_RE = re.compile(r"^(\d+)\s+(\d+)\s*/\s*(\d+)$")
_DECIMAL_RE = re.compile(r"^\d+(?:[.,]\d+)?$")


def size_key(label: str) -> Optional[float]:
    """
    Numeric key for a size label, rounded to two decimals.

    "43 1/3" -> 43.33, "43,5" -> 43.5, "EU 44" -> 44.0.  Returns None for
    labels that do not describe a single size ("43/44", "M", "").
    """
    text = clean_size_label(label)
    if not text:
        return None
    text = _PREFIX_RE.sub("", text)

    m = _FRACTION_RE.match(text)
    if m:
        whole, numerator, denominator = (int(g) for g in m.groups())
        if denominator == 0:
            return None
        return round(whole + numerator / denominator, LENGTH_DECIMALS)

    if _DECIMAL_RE.match(text):
        return round(float(text.replace(",", ".")), LENGTH_DECIMALS)
    return None


def parse_foot_length(value: Union[str, float, int, None]) -> Optional[float]:
    """
    Parse the profile foot length (cm).  Comma decimal separators are
    accepted.  Anything that is not a finite number above zero yields None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = normalize_whitespace(str(value)).replace(",", ".")
        try:
            number = float(text)
        except ValueError:
            return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


# ---------------------------
# Display
# ---------------------------

def format_size_for_display(size: Union[str, float]) -> str:
    """
    Format a size for display with fraction notation.

    43.33 -> "43 1/3", 43.67 -> "43 2/3", 43.5 -> "43 1/2", 43.0 -> "43".
    Strings already in fraction notation are returned as-is; other
    strings are parsed first and returned unchanged when unparsable.
    """
    if isinstance(size, str):
        cleaned = clean_size_label(size)
        if _FRACTION_RE.match(_PREFIX_RE.sub("", cleaned)):
            return cleaned
        value = size_key(cleaned)
        if value is None:
            return cleaned
    else:
        value = float(size)

    whole = math.floor(value)
    decimal = value - whole
    if decimal < DISPLAY_FRACTION_TOLERANCE:
        return str(whole)
    if decimal > 1 - DISPLAY_FRACTION_TOLERANCE:
        return str(whole + 1)
    for suffix, fraction in DISPLAY_FRACTIONS.items():
        if abs(decimal - fraction) < DISPLAY_FRACTION_TOLERANCE:
            return f"{whole} {suffix}"
    return f"{value:.2f}".rstrip("0").rstrip(".")

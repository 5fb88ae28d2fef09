from __future__ import annotations

"""
Loading measured size tables from CSV/XLSX exports.

Stores label their columns differently ("Size", "EU", "Størrelse";
"Foot length (cm)", "Fotlengde"), so columns are mapped onto a
canonical schema through ``COLUMN_CANDIDATES`` before rows are turned
into :class:`~shoefit.config.MeasuredRow` objects.  All cells are read
as text so labels like "43 1/3" and decimal commas survive intact.
"""

from pathlib import Path
from typing import Dict, List

import pandas as pd
from loguru import logger

from .config import COLUMN_CANDIDATES, MeasuredRow
from .normalize import clean_size_label, parse_foot_length


def _standardise_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Rename columns to the canonical schema (label, foot_length_cm,
    row_index).  Exact names win over case-insensitive ones.
    """
    col_map: Dict[str, str] = {}
    lower_to_original = {str(c).strip().lower(): c for c in df.columns}

    for canon, candidates in COLUMN_CANDIDATES.items():
        for candidate in candidates:
            if candidate in df.columns:
                col_map[candidate] = canon
                break
            cand_lower = candidate.lower()
            if cand_lower in lower_to_original:
                col_map[lower_to_original[cand_lower]] = canon
                break

    logger.info("Standardising size table columns with map: {}", col_map)
    return df.rename(columns=col_map)


def _delimiter(path: Path) -> str:
    # Nordic exports use ";" because "," is the decimal separator.
    with open(path, "r", encoding="utf-8-sig") as f:
        header = f.readline()
    for sep in (";", "\t", ","):
        if sep in header:
            return sep
    # Single column: anything but "," keeps "27,5" in one cell.
    return ";"


def read_table(path: Path) -> pd.DataFrame:
    """Read a CSV (comma, semicolon or tab separated) or Excel file with every cell as text."""
    ext = path.suffix.lower()
    if ext in {".xlsx", ".xls"}:
        df = pd.read_excel(path, dtype=str)
    else:
        df = pd.read_csv(path, dtype=str, sep=_delimiter(path), encoding="utf-8-sig")
    logger.info("Loaded {} rows from {}", len(df), path)
    return df


def rows_from_frame(df: pd.DataFrame) -> List[MeasuredRow]:
    df_std = _standardise_columns(df)
    missing = [c for c in ("label", "foot_length_cm") if c not in df_std.columns]
    if missing:
        raise ValueError(f"Size table is missing {missing} columns. Found: {list(df.columns)}")

    rows: List[MeasuredRow] = []
    for position, record in enumerate(df_std.to_dict(orient="records")):
        label = record.get("label")
        if label is None or pd.isna(label):
            continue
        raw_index = record.get("row_index")
        row_index = position
        if raw_index is not None and not pd.isna(raw_index):
            try:
                row_index = int(str(raw_index).strip())
            except ValueError:
                logger.warning("Ignoring non-integer row index {!r} for size {}", raw_index, label)
        length = record.get("foot_length_cm")
        rows.append(MeasuredRow(
            label=clean_size_label(str(label)),
            foot_length_cm=None if length is None or pd.isna(length) else parse_foot_length(length),
            row_index=max(0, row_index),
        ))
    return rows


def load_size_table(path: Path) -> List[MeasuredRow]:
    """Measured rows from a size table file."""
    return rows_from_frame(read_table(path))


def load_foot_lengths(path: Path) -> List[str]:
    """
    Foot lengths for a batch run, kept as the raw text so the engine does
    the parsing (and rejects bad values) exactly as for a single run.
    """
    df = read_table(path)
    lower = {str(c).strip().lower(): c for c in df.columns}
    col = None
    for candidate in COLUMN_CANDIDATES["foot_length_cm"]:
        if candidate.lower() in lower:
            col = lower[candidate.lower()]
            break
    if col is None:
        raise ValueError(f"Expected a foot length column in {path}. Found: {list(df.columns)}")
    return ["" if pd.isna(v) else str(v).strip() for v in df[col].tolist()]

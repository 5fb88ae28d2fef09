# shoefit/cli.py
"""
Command line runner for the shoefit recommender.

Single mode prints one recommendation; batch mode runs every foot length
from a file against the same product and writes a CSV.

- Reads the measured size table once (CSV/XLSX, flexible headers)
- De-duplicates identical foot lengths (runs once, fans out)
- Batch output always has the columns: foot_length, primary_size, secondary_size, fit_note
"""

from __future__ import annotations
import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
from loguru import logger

from shoefit.config import LOG_LEVEL, FitContext, MeasuredRow
from shoefit.engine import Recommendation, recommend_shoe_size
from shoefit.mapping import to_api_response, to_table_row
from shoefit.size_table import load_foot_lengths, load_size_table


def _configure_logging(level: str = LOG_LEVEL) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def _dedup_preserve_order(seq: List[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for s in seq:
        if s not in seen:
            seen.add(s)
            out.append(s)
    return out


def build_context(args: argparse.Namespace) -> FitContext:
    return FitContext(
        is_moccasin=args.moccasin,
        is_leather_boot=args.leather_boot,
        has_laces=args.laces,
        manual_override=args.manual_override,
        material_info=args.material,
        store_recommendation=args.store_size,
        recommended_size_from_text=args.expert_size,
        fit_hint=args.fit_hint,
    )


def write_predictions_csv(
    foot_lengths: List[str],
    rows: List[MeasuredRow],
    dropdown: List[str],
    context: FitContext,
    out_path: Path,
) -> int:
    """
    Recommend once per unique foot length and write one row per input
    foot length, in input order.  Returns the number of answered rows.
    """
    unique_recs: Dict[str, Optional[Recommendation]] = {}
    for foot in _dedup_preserve_order(foot_lengths):
        unique_recs[foot] = recommend_shoe_size(foot, rows, dropdown, context)

    records = [to_table_row(foot, unique_recs[foot]) for foot in foot_lengths]
    df = pd.DataFrame(records, columns=["foot_length", "primary_size", "secondary_size", "fit_note"])
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_path, index=False)
    return sum(1 for r in records if r["primary_size"])


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="shoefit", description="Recommend a shoe size from a measured size table")
    ap.add_argument("--table", required=True, type=Path, help="size table (CSV/XLSX) with size + foot length columns")
    who = ap.add_mutually_exclusive_group(required=True)
    who.add_argument("--foot", type=str, help="foot length in cm (comma or dot decimals)")
    who.add_argument("--feet", type=Path, help="file with a foot length column for a batch run")
    ap.add_argument("--dropdown", nargs="*", default=[], help="sizes sold in the dropdown, e.g. '43' '43 1/3'")
    ap.add_argument("--moccasin", action="store_true")
    ap.add_argument("--leather-boot", action="store_true")
    ap.add_argument("--laces", action="store_true")
    ap.add_argument("--manual-override", action="store_true", help="treat as slip-on regardless of detection")
    ap.add_argument("--material", type=str, default=None)
    ap.add_argument("--store-size", type=str, default=None, help="size the store recommends")
    ap.add_argument("--expert-size", type=str, default=None, help="size recommended in the product text")
    ap.add_argument("--fit-hint", type=str, default=None, help="'liten' or 'stor' (free text accepted)")
    ap.add_argument("--out", type=Path, default=Path("artifacts/shoe_predictions.csv"), help="batch output CSV")
    ap.add_argument("--json", action="store_true", help="print the full recommendation as JSON")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    _configure_logging()
    args = build_parser().parse_args(argv)

    rows = load_size_table(args.table)
    context = build_context(args)
    print(f"Loaded {len(rows)} size rows from {args.table}")

    if args.feet is not None:
        feet = load_foot_lengths(args.feet)
        answered = write_predictions_csv(feet, rows, args.dropdown, context, args.out)
        print(f"Wrote {len(feet)} rows ({answered} answered) to {args.out}")
        return 0

    rec = recommend_shoe_size(args.foot, rows, args.dropdown, context)
    if rec is None:
        logger.warning("No recommendation could be computed for foot length {!r}", args.foot)
        return 1
    if args.json:
        print(json.dumps(to_api_response(rec).model_dump(), ensure_ascii=False, indent=2))
    else:
        sizes = rec.primary_size if not rec.secondary_size else f"{rec.primary_size} / {rec.secondary_size}"
        print(f"Recommended size: {sizes}")
        print(rec.fit_note)
    return 0


if __name__ == "__main__":
    sys.exit(main())

from dataclasses import replace

import pytest
from conftest import rows_from

from shoefit.config import FitContext
from shoefit.construction import ConstructionCategory
from shoefit.engine import recommend_shoe_size
from shoefit.fit_note import FitBand, band_label, compose_fit_note, fit_band_for

LADDER = [("42", 27.5), ("43", 28.3), ("44", 29.0), ("45", 29.6)]


@pytest.mark.parametrize(
    "category,buffer_cm,band",
    [
        (ConstructionCategory.LOAFER_MOCCASIN, -0.3, FitBand.SNUG),
        (ConstructionCategory.LOAFER_MOCCASIN, 0.0, FitBand.SNUG),
        (ConstructionCategory.LOAFER_MOCCASIN, 0.2, FitBand.IDEAL),
        (ConstructionCategory.LOAFER_MOCCASIN, 0.3, FitBand.ROOMY),
        (ConstructionCategory.LACED, 0.2, FitBand.SNUG),
        (ConstructionCategory.LACED, 0.4, FitBand.IDEAL),
        (ConstructionCategory.CHELSEA, 0.5, FitBand.ROOMY),
    ],
)
def test_fit_bands(category, buffer_cm, band):
    assert fit_band_for(category, buffer_cm) == band


def test_snug_reads_as_perfect_outside_slip_ons():
    assert band_label(ConstructionCategory.LACED, FitBand.SNUG) == "PERFECT"
    assert band_label(ConstructionCategory.LOAFER_MOCCASIN, FitBand.SNUG) == "SNUG"


def test_rejected_store_note_precedes_main_line():
    rec = recommend_shoe_size(28.0, rows_from(LADDER), context=FitContext(has_laces=True, store_recommendation="45"))
    first, second = rec.fit_note.split("\n")
    assert "TOO LARGE" in first
    assert second == "Laced (laces provide secure fit) - IDEAL fit (+0.3cm)"


def test_boundary_warning_comes_first():
    rec = recommend_shoe_size(28.0, rows_from([("45", 29.0)]), context=FitContext(has_laces=True))
    assert rec.fit_note.split("\n")[0].startswith("WARNING:")


def test_accepted_store_note_is_not_repeated():
    rec = recommend_shoe_size(28.0, rows_from(LADDER), context=FitContext(store_recommendation="43"))
    assert rec.fit_note == "Following store recommendation: size 43"


def test_expert_note_mentions_calculated_match():
    rec = recommend_shoe_size(28.0, rows_from(LADDER), context=FitContext(recommended_size_from_text="44"))
    assert rec.fit_note == "Following expert recommendation: size 44 (calculated match: 43)"


def test_slip_on_dual_note_uses_default_material():
    rec = recommend_shoe_size(25.0, rows_from([("38", 24.6), ("39", 25.2)]), context=FitContext(is_moccasin=True))
    assert rec.fit_note == "Slip-on leather stretches over time - snug fit 38, comfort fit 39"


def test_runs_large_single_size_note():
    rec = recommend_shoe_size(26.0, rows_from([("41", 25.8), ("42", 26.6)]), context=FitContext(fit_hint="stor"))
    assert rec.fit_note == "Item runs large - sized down accordingly"


def test_fractional_sizes_are_displayed_as_fractions():
    rec = recommend_shoe_size(
        27.5,
        rows_from([("43", 27.0), ("44", 27.7)]),
        ["43", "43 1/3", "43 2/3", "44"],
        context=FitContext(store_recommendation="43 2/3"),
    )
    assert rec.fit_note == "Following store recommendation: size 43 2/3"


def test_composition_is_a_function_of_the_record():
    rec = recommend_shoe_size(28.0, rows_from(LADDER), context=FitContext(store_recommendation="45"))
    assert compose_fit_note(rec) == rec.fit_note
    assert compose_fit_note(replace(rec, fit_note="")) == rec.fit_note


def test_slip_on_runs_large_note_warns_about_next_size():
    rec = recommend_shoe_size(
        25.0,
        rows_from([("38", 24.6), ("39", 25.3)]),
        context=FitContext(is_moccasin=True, fit_hint="stor"),
    )
    assert rec.fit_note == (
        "Recommending 38 as slip-on leather stretches significantly. "
        "Since the item also runs large, 39 will quickly become too loose - SNUG fit (-0.4cm)"
    )

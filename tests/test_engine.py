import pytest
from conftest import rows_from

from shoefit.config import FitContext, MeasuredRow
from shoefit.construction import ConstructionCategory
from shoefit.diagnostics import DiagnosticCode
from shoefit.engine import recommend_shoe_size
from shoefit.fit_note import FitBand
from shoefit.resolver import OverrideSource


def test_laced_shoe_with_ideal_buffer(laced_rows):
    rec = recommend_shoe_size("28,0", laced_rows, context=FitContext(has_laces=True))
    assert rec.primary_size == "43"
    assert rec.secondary_size is None and not rec.is_dual
    assert rec.category == ConstructionCategory.LACED
    assert rec.fit_band == FitBand.IDEAL
    assert rec.fit_buffer_cm == 0.3
    assert rec.buffer_applied_cm == 0.0
    assert rec.matched_foot_length_cm == 28.3
    assert rec.matched_row_index == 1
    assert rec.confidence == 0.95
    assert rec.override_source == OverrideSource.NONE


def test_moccasin_near_tie_without_dual():
    rec = recommend_shoe_size(25.0, rows_from([("38", 24.5), ("39", 24.9)]), context=FitContext(is_moccasin=True))
    assert rec.primary_size == "38"
    assert rec.is_border_case
    assert not rec.is_dual
    assert rec.buffer_applied_cm == -0.3
    assert rec.target_length_cm == 24.7
    assert rec.confidence == 0.9
    assert rec.material_info == "leather"


def test_rejected_store_recommendation(laced_rows):
    rows = laced_rows + rows_from([("45", 29.6)])
    rec = recommend_shoe_size(28.0, rows, context=FitContext(has_laces=True, store_recommendation="45"))
    assert rec.primary_size == "43"
    assert rec.override_source == OverrideSource.NONE
    assert rec.store_recommendation == "45"
    assert "TOO LARGE" in rec.store_recommendation_note
    assert "TOO LARGE" in rec.fit_note


def test_runs_large_dual_recommendation():
    rows = rows_from([("40", 26.1), ("41", 26.4), ("42", 26.8)])
    rec = recommend_shoe_size(26.5, rows, context=FitContext(fit_hint="Varen er stor i størrelsen"))
    assert rec.technical_size == "42"
    assert rec.primary_size == "41"
    assert rec.secondary_size == "42"
    assert rec.is_dual and rec.is_stor_adjusted
    assert rec.fit_hint == "stor"
    assert rec.fit_note == "Item runs large - recommending 41 (technical match: 42)"


def test_interpolated_match_has_no_row_index():
    rec = recommend_shoe_size(
        27.2,
        rows_from([("43", 26.8), ("44", 27.7)]),
        ["43", "43 1/2", "44"],
        context=FitContext(has_laces=True),
    )
    assert rec.primary_size == "43 1/2"
    assert rec.is_interpolated
    assert rec.matched_row_index is None
    assert rec.matched_foot_length_cm == 27.25
    assert DiagnosticCode.SIZE_INTERPOLATED in [e.code for e in rec.diagnostics]


def test_identical_inputs_give_identical_results(laced_rows):
    context = FitContext(is_moccasin=True, store_recommendation="44")
    first = recommend_shoe_size(28.0, laced_rows, ["42", "42 1/2", "43"], context)
    second = recommend_shoe_size(28.0, laced_rows, ["42", "42 1/2", "43"], context)
    assert first == second


def test_default_context_is_laced(laced_rows):
    rec = recommend_shoe_size(28.0, laced_rows)
    assert rec.category == ConstructionCategory.LACED
    assert rec.primary_size == "43"


@pytest.mark.parametrize("foot", [None, "", "abc", 0, -27.0, float("nan")])
def test_unusable_foot_length_gives_no_answer(foot, laced_rows):
    assert recommend_shoe_size(foot, laced_rows) is None


def test_no_usable_rows_gives_no_answer():
    assert recommend_shoe_size(28.0, []) is None
    rows = [MeasuredRow(label="43", foot_length_cm=None), MeasuredRow(label="size?", foot_length_cm=28.0)]
    assert recommend_shoe_size(28.0, rows, ["43"]) is None


def test_single_out_of_policy_size_still_answers():
    rec = recommend_shoe_size(28.0, rows_from([("46", 30.0)]))
    assert rec.primary_size == "46"
    assert rec.boundary_warning.startswith("WARNING:")
    assert rec.fit_band == FitBand.ROOMY


def test_fallback_warning_follows_near_tie_swap():
    # Nothing fits the slip-on policy; the near-tie moves the answer to 37.
    rows = rows_from([("37", 24.0), ("39", 25.3)])
    rec = recommend_shoe_size(25.0, rows, context=FitContext(is_moccasin=True))
    assert rec.primary_size == "37"
    assert rec.is_border_case and not rec.is_dual
    assert rec.fit_buffer_cm == -1.0
    assert rec.boundary_warning == "WARNING: Size 37 may be too small (-1.0cm under foot length, min: -0.5cm)"
    assert rec.fit_note.split("\n")[0] == rec.boundary_warning
    assert "exceeds" not in rec.fit_note


def test_fallback_warning_follows_runs_large_dual():
    rows = rows_from([("41", 26.8), ("44", 28.5)])
    rec = recommend_shoe_size(28.0, rows, context=FitContext(fit_hint="stor"))
    assert (rec.primary_size, rec.secondary_size, rec.technical_size) == ("41", "44", "44")
    assert rec.is_dual and rec.is_stor_adjusted
    assert rec.fit_note == (
        "WARNING: Size 41 may be too small (-1.2cm under foot length, min: -0.2cm)\n"
        "Item runs large - recommending 41 (technical match: 44)"
    )


def test_no_boundary_warning_when_policy_is_met(laced_rows):
    rec = recommend_shoe_size(28.0, laced_rows)
    assert rec.boundary_warning is None
    assert not rec.fit_note.startswith("WARNING")

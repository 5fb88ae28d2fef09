import pytest

from shoefit.config import MeasuredRow


def rows_from(sizes):
    """[("43", 28.3), ...] -> MeasuredRow list, row_index = position."""
    return [MeasuredRow(label=label, foot_length_cm=length) for label, length in sizes]


@pytest.fixture
def laced_rows():
    # Scenario ladder: 42 too small, 43 ideal, 44 too large for a 28.0cm foot
    return rows_from([("42", 27.5), ("43", 28.3), ("44", 29.0)])

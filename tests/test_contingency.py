"""Tests for ContingencyTable."""

from __future__ import annotations

import numpy as np
import pytest

from alea.core.errors import DimensionMismatchError, InvalidArgumentError
from alea.stats import ContingencyTable, degrees_of_freedom_for
from tests.conftest import DICE_FREQUENCIES, REFERENCE_GRID


@pytest.fixture
def reference() -> ContingencyTable:
    return ContingencyTable.from_grid(REFERENCE_GRID)


class TestShapeAndTotals:
    def test_dimensions(self, reference):
        assert reference.width == 4
        assert reference.height == 3

    def test_cell_addressing_is_column_then_row(self, reference):
        assert reference.cell(0, 0) == 90
        assert reference.cell(3, 0) == 95
        assert reference.cell(0, 2) == 30
        assert reference.cell(2, 1) == 51

    def test_totals(self, reference):
        assert reference.grand_total == 650
        assert reference.column_totals.tolist() == [150, 150, 200, 150]
        assert reference.row_totals.tolist() == [349, 151, 150]

    def test_totals_are_consistent(self, reference):
        assert reference.column_totals.sum() == reference.grand_total
        assert reference.row_totals.sum() == reference.grand_total

    def test_degrees_of_freedom(self, reference):
        assert reference.degrees_of_freedom == 6


class TestExpectedValues:
    def test_independence(self, reference):
        assert reference.expected_value(0, 0) == pytest.approx(80.54, abs=0.005)
        assert reference.expected_value(2, 1) == pytest.approx(200 * 151 / 650)

    def test_expected_margins_match_observed(self, reference):
        expected = reference.expected_values()
        np.testing.assert_allclose(expected.sum(axis=0), reference.column_totals)
        np.testing.assert_allclose(expected.sum(axis=1), reference.row_totals)

    def test_single_row_is_uniform(self):
        table = ContingencyTable.from_frequencies(DICE_FREQUENCIES)
        assert table.height == 1
        assert table.width == 6
        assert all(table.expected_value(x, 0) == 10.0 for x in range(6))

    def test_single_column_is_uniform(self):
        table = ContingencyTable.from_vectors([2, 4, 6])
        assert (table.width, table.height) == (1, 3)
        assert table.expected_values().ravel().tolist() == [4.0, 4.0, 4.0]
        assert table.degrees_of_freedom == 2

    def test_zero_total_gives_zero(self):
        table = ContingencyTable.from_grid([[0, 0], [0, 0]])
        assert table.expected_value(1, 1) == 0.0


@pytest.mark.parametrize(
    "width, height, expected",
    [(1, 5, 4), (6, 1, 5), (4, 3, 6), (2, 2, 1), (1, 1, 0)],
)
def test_degrees_of_freedom_for(width, height, expected):
    assert degrees_of_freedom_for(width, height) == expected


class TestConstruction:
    def test_from_vectors_stacks_columns(self):
        table = ContingencyTable.from_vectors([1, 2, 3], [4, 5, 6])
        assert (table.width, table.height) == (2, 3)
        assert table.cell(1, 0) == 4
        assert table.cell(0, 2) == 3

    def test_from_vectors_length_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            ContingencyTable.from_vectors([1, 2, 3], [4, 5])

    def test_ragged_grid(self):
        with pytest.raises(DimensionMismatchError):
            ContingencyTable.from_grid([[1, 2, 3], [4, 5]])

    def test_dimension_mismatch_is_invalid_argument(self):
        assert issubclass(DimensionMismatchError, InvalidArgumentError)
        assert issubclass(DimensionMismatchError, ValueError)

    def test_from_grid_accepts_ndarray(self):
        table = ContingencyTable.from_grid(np.array(REFERENCE_GRID))
        assert table == ContingencyTable.from_grid(REFERENCE_GRID)

    @pytest.mark.parametrize(
        "build",
        [
            lambda: ContingencyTable.from_grid([]),
            lambda: ContingencyTable.from_grid(None),
            lambda: ContingencyTable.from_grid([[]]),
            lambda: ContingencyTable.from_frequencies([]),
            lambda: ContingencyTable.from_frequencies(None),
            lambda: ContingencyTable.from_vectors(),
            lambda: ContingencyTable.from_vectors([1, 2], None),
            lambda: ContingencyTable.from_grid([[1, -2], [3, 4]]),
            lambda: ContingencyTable.from_grid([[1, float("nan")], [3, 4]]),
            lambda: ContingencyTable.from_frequencies([1, float("inf")]),
            lambda: ContingencyTable.from_frequencies(["a", "b"]),
        ],
    )
    def test_invalid_input(self, build):
        with pytest.raises(InvalidArgumentError):
            build()


class TestImmutability:
    def test_cells_are_read_only(self, reference):
        with pytest.raises(ValueError):
            reference.cells[0, 0] = 1

    def test_totals_are_read_only(self, reference):
        with pytest.raises(ValueError):
            reference.row_totals[0] = 1

    def test_input_is_copied(self):
        grid = np.array([[1.0, 2.0], [3.0, 4.0]])
        table = ContingencyTable.from_grid(grid)
        grid[0, 0] = 100.0
        assert table.cell(0, 0) == 1.0

    def test_with_cell_returns_new_table(self, reference):
        changed = reference.with_cell(0, 0, 100)
        assert changed.cell(0, 0) == 100
        assert changed.grand_total == 660
        assert reference.cell(0, 0) == 90
        assert changed != reference

    def test_with_cell_validates_value(self, reference):
        with pytest.raises(InvalidArgumentError):
            reference.with_cell(0, 0, -1)

    def test_no_attribute_assignment(self, reference):
        with pytest.raises(AttributeError):
            reference.extra = 1

    def test_unhashable(self, reference):
        with pytest.raises(TypeError):
            hash(reference)


@pytest.mark.parametrize("x, y", [(-1, 0), (4, 0), (0, 3), (0, -1)])
def test_cell_out_of_range(reference, x, y):
    with pytest.raises(InvalidArgumentError):
        reference.cell(x, y)


def test_to_rows_round_trips(reference):
    assert reference.to_rows() == [[float(v) for v in row] for row in REFERENCE_GRID]


def test_repr(reference):
    assert repr(reference) == "ContingencyTable(width=4, height=3, grand_total=650)"

"""Tests for ChiSquaredEngine."""

from __future__ import annotations

import pytest
from scipy import stats as sps

from alea.core.errors import DegenerateDistributionError, InvalidArgumentError
from alea.core.models import ChiSquaredResult
from alea.stats import ChiSquaredEngine, ContingencyTable
from tests.conftest import DICE_FREQUENCIES, REFERENCE_GRID


class TestReferenceTable:
    @pytest.fixture
    def engine(self) -> ChiSquaredEngine:
        return ChiSquaredEngine.from_grid(REFERENCE_GRID)

    def test_statistic(self, engine):
        assert engine.statistic == pytest.approx(24.57, abs=0.005)

    def test_statistic_matches_scipy(self, engine):
        expected = sps.chi2_contingency(REFERENCE_GRID, correction=False)[0]
        assert engine.statistic == pytest.approx(expected, rel=1e-9)

    def test_degrees_of_freedom(self, engine):
        assert engine.degrees_of_freedom == 6

    def test_p_value(self, engine):
        assert engine.p_value == pytest.approx(sps.chi2.sf(engine.statistic, 6), abs=1e-6)
        assert engine.p_value == pytest.approx(0.0004, abs=0.00005)

    def test_expected_value_delegates(self, engine):
        assert engine.expected_value(0, 0) == pytest.approx(80.54, abs=0.005)


class TestGoodnessOfFit:
    def test_dice_statistic_is_exact(self):
        engine = ChiSquaredEngine.from_frequencies(DICE_FREQUENCIES)
        assert engine.statistic == 13.4
        assert engine.degrees_of_freedom == 5
        assert 0.01 <= engine.p_value <= 0.025

    def test_perfectly_uniform(self):
        engine = ChiSquaredEngine.from_frequencies([10, 10, 10, 10])
        assert engine.statistic == 0.0
        assert engine.p_value == 1.0

    def test_single_column_matches_single_row(self):
        row = ChiSquaredEngine.from_frequencies(DICE_FREQUENCIES)
        column = ChiSquaredEngine(ContingencyTable.from_vectors(DICE_FREQUENCIES))
        assert column.statistic == row.statistic
        assert column.degrees_of_freedom == row.degrees_of_freedom

    def test_matches_scipy_chisquare(self):
        observed = [18, 22, 25, 15, 20]
        expected = sps.chisquare(observed)
        engine = ChiSquaredEngine.from_frequencies(observed)
        assert engine.statistic == pytest.approx(expected.statistic, rel=1e-9)
        assert engine.p_value == pytest.approx(expected.pvalue, abs=1e-5)


class TestDegenerate:
    @pytest.mark.parametrize(
        "grid",
        [
            [[0, 0, 0], [1, 2, 3]],
            [[0, 1], [0, 2]],
            [[0, 0, 0, 0]],
        ],
    )
    def test_zero_expected_value_raises(self, grid):
        with pytest.raises(DegenerateDistributionError):
            ChiSquaredEngine.from_grid(grid)

    def test_degenerate_is_arithmetic_error(self):
        with pytest.raises(ArithmeticError):
            ChiSquaredEngine.from_frequencies([0, 0])

    def test_message_names_cell(self):
        with pytest.raises(DegenerateDistributionError, match=r"\(1, 0\)"):
            ChiSquaredEngine.from_grid([[1, 0], [1, 0]])


def test_to_result():
    result = ChiSquaredEngine.from_frequencies(DICE_FREQUENCIES).to_result(alpha=0.05)
    assert isinstance(result, ChiSquaredResult)
    assert (result.width, result.height) == (6, 1)
    assert result.observed == [[5.0, 8.0, 9.0, 8.0, 10.0, 20.0]]
    assert result.expected == [[10.0] * 6]
    assert result.significant is True
    assert ChiSquaredEngine.from_frequencies(DICE_FREQUENCIES).to_result(0.01).significant is False


def test_repr_contains_statistic():
    assert "13.4" in repr(ChiSquaredEngine.from_frequencies(DICE_FREQUENCIES))


@pytest.mark.parametrize("alpha", [0.0, 1.0, 1.5])
def test_to_result_rejects_bad_alpha(alpha):
    with pytest.raises(InvalidArgumentError):
        ChiSquaredEngine.from_frequencies(DICE_FREQUENCIES).to_result(alpha)

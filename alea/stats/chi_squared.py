"""
Chi-Squared Engine
===================

Pearson's chi-squared test on a :class:`ContingencyTable`:

.. math::

    \\chi^2 = \\sum_{x,y} \\frac{(O_{xy} - E_{xy})^2}{E_{xy}}

with :math:`E_{xy}` from :meth:`ContingencyTable.expected_value` and the
p-value from :func:`~alea.stats.pvalue.chi_squared_p_value`.

The statistic, degrees of freedom and p-value are computed once, at
construction, and never change.

Reference:
    Pearson, K. (1900). On the Criterion that a Given System of
    Deviations from the Probable ... Philosophical Magazine, 50(302),
    157-175.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

import numpy as np

from alea.core.errors import DegenerateDistributionError, InvalidArgumentError
from alea.core.models import ChiSquaredResult
from alea.stats.contingency import ContingencyTable
from alea.stats.pvalue import chi_squared_p_value


class ChiSquaredEngine:
    """Read-only chi-squared computation bound to one table.

    Usage::

        engine = ChiSquaredEngine(ContingencyTable.from_frequencies([5, 8, 9, 8, 10, 20]))
        engine.statistic            # 13.4
        engine.degrees_of_freedom   # 5
        engine.p_value              # ~0.0199

    Raises:
        DegenerateDistributionError: If any expected value is zero, i.e.
            some row or column total is zero.
    """

    __slots__ = ("_table", "_expected", "_statistic", "_degrees_of_freedom", "_p_value")

    def __init__(self, table: ContingencyTable) -> None:
        expected = table.expected_values()
        zero_cells = np.argwhere(expected <= 0.0)
        if zero_cells.size:
            y, x = (int(v) for v in zero_cells[0])
            raise DegenerateDistributionError(
                f"expected value of cell ({x}, {y}) is zero; "
                "a row or column total is zero"
            )

        contributions = (table.cells - expected) ** 2 / expected
        expected.setflags(write=False)

        self._table = table
        self._expected = expected
        self._statistic = math.fsum(contributions.ravel().tolist())
        self._degrees_of_freedom = table.degrees_of_freedom
        self._p_value = chi_squared_p_value(self._statistic, self._degrees_of_freedom)

    @classmethod
    def from_frequencies(cls, values: Iterable[float]) -> ChiSquaredEngine:
        """Goodness-of-fit test of *values* against the uniform distribution."""
        return cls(ContingencyTable.from_frequencies(values))

    @classmethod
    def from_grid(cls, rows: Sequence[Sequence[float]]) -> ChiSquaredEngine:
        """Independence test on a rectangular list of rows."""
        return cls(ContingencyTable.from_grid(rows))

    @property
    def table(self) -> ContingencyTable:
        return self._table

    @property
    def statistic(self) -> float:
        return self._statistic

    @property
    def degrees_of_freedom(self) -> int:
        return self._degrees_of_freedom

    @property
    def p_value(self) -> float:
        return self._p_value

    def expected_value(self, x: int, y: int) -> float:
        return self._table.expected_value(x, y)

    def to_result(self, alpha: float = 0.05) -> ChiSquaredResult:
        """Package the computation as a :class:`ChiSquaredResult`."""
        if not 0.0 < alpha < 1.0:
            raise InvalidArgumentError(f"alpha must be in (0, 1), got {alpha}")
        return ChiSquaredResult(
            width=self._table.width,
            height=self._table.height,
            observed=self._table.to_rows(),
            expected=self._expected.tolist(),
            statistic=self._statistic,
            degrees_of_freedom=self._degrees_of_freedom,
            p_value=self._p_value,
            alpha=alpha,
            significant=self._p_value < alpha,
        )

    def __repr__(self) -> str:
        return (
            f"ChiSquaredEngine(statistic={self._statistic:.6g}, "
            f"df={self._degrees_of_freedom}, p_value={self._p_value:.6g})"
        )

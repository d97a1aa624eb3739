"""
Contingency Table
==================

Immutable grid of observed counts with marginal totals derived once at
construction.  Cell ``(x, y)`` is column *x* of row *y*; nested-list input
is always a list of rows, so the backing array has shape
``(height, width)``.

Degenerate shapes (one row or one column) hold a single categorical
frequency distribution tested against the uniform distribution;
anything larger is tested for independence of rows and columns.

References:
    - Pearson, K. (1900). On the Criterion that a Given System of
      Deviations from the Probable in the Case of a Correlated System of
      Variables is Such that it Can Be Reasonably Supposed to Have Arisen
      from Random Sampling. Philosophical Magazine, 50(302), 157-175.
    - Agresti, A. (2013). Categorical Data Analysis (3rd ed.). Wiley,
      Section 3.2.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from alea.core.errors import DimensionMismatchError, InvalidArgumentError

FloatArray = NDArray[np.float64]


def degrees_of_freedom_for(width: int, height: int) -> int:
    """Degrees of freedom of a ``width x height`` table.

    One column or one row: ``categories - 1`` (goodness of fit).
    Otherwise ``(width - 1) * (height - 1)`` (independence).
    """
    if width == 1:
        return height - 1
    if height == 1:
        return width - 1
    return (width - 1) * (height - 1)


def _as_vector(values: Any, name: str) -> FloatArray:
    if values is None:
        raise InvalidArgumentError(f"{name} cannot be None")
    try:
        arr = np.array(values, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"{name} must be numeric") from exc
    if arr.ndim != 1:
        raise InvalidArgumentError(f"{name} must be one-dimensional")
    if arr.size == 0:
        raise InvalidArgumentError(f"{name} cannot be empty")
    return arr


class ContingencyTable:
    """Frozen ``width x height`` table of non-negative observed counts.

    Construct through :meth:`from_frequencies`, :meth:`from_grid` or
    :meth:`from_vectors`.  Values and totals never change; use
    :meth:`with_cell` to derive a modified table.

    Usage::

        table = ContingencyTable.from_grid([[90, 60, 104, 95],
                                            [30, 50, 51, 20],
                                            [30, 40, 45, 35]])
        table.expected_value(0, 0)   # ~80.54
    """

    __slots__ = ("_cells", "_grand_total", "_column_totals", "_row_totals")

    def __init__(self, cells: FloatArray) -> None:
        arr = np.array(cells, dtype=np.float64)
        if arr.ndim != 2 or arr.shape[0] == 0 or arr.shape[1] == 0:
            raise InvalidArgumentError(
                f"table must be a non-empty 2-D grid, got shape {arr.shape}"
            )
        if not np.all(np.isfinite(arr)):
            raise InvalidArgumentError("table values must be finite")
        if np.any(arr < 0):
            raise InvalidArgumentError("table values must be non-negative")

        arr.setflags(write=False)
        self._cells = arr

        column_totals = arr.sum(axis=0)
        row_totals = arr.sum(axis=1)
        column_totals.setflags(write=False)
        row_totals.setflags(write=False)
        self._column_totals = column_totals
        self._row_totals = row_totals
        self._grand_total = float(arr.sum())

    # ------------------------------------------------------------------ #
    #  Construction
    # ------------------------------------------------------------------ #

    @classmethod
    def from_frequencies(cls, values: Iterable[float]) -> ContingencyTable:
        """Build a one-row table from a frequency vector."""
        vector = _as_vector(
            list(values) if values is not None else None, "frequencies"
        )
        return cls(vector.reshape(1, -1))

    @classmethod
    def from_grid(cls, rows: Sequence[Sequence[float]]) -> ContingencyTable:
        """Build a table from a rectangular list of rows.

        Raises:
            InvalidArgumentError: On ``None`` or empty input.
            DimensionMismatchError: If the rows differ in length.
        """
        if rows is None:
            raise InvalidArgumentError("grid cannot be None")
        if isinstance(rows, np.ndarray):
            return cls(rows)
        if len(rows) == 0:
            raise InvalidArgumentError("grid cannot be empty")

        vectors = [_as_vector(row, f"row {i}") for i, row in enumerate(rows)]
        width = vectors[0].size
        for i, vector in enumerate(vectors):
            if vector.size != width:
                raise DimensionMismatchError(
                    f"row {i} has {vector.size} values, expected {width}"
                )
        return cls(np.vstack(vectors))

    @classmethod
    def from_vectors(cls, *vectors: Sequence[float]) -> ContingencyTable:
        """Combine equal-length vectors, one per column.

        Raises:
            InvalidArgumentError: On missing or empty vectors.
            DimensionMismatchError: If the vectors differ in length.
        """
        if not vectors:
            raise InvalidArgumentError("at least one vector is required")

        columns = [_as_vector(v, f"vector {i}") for i, v in enumerate(vectors)]
        height = columns[0].size
        for i, column in enumerate(columns):
            if column.size != height:
                raise DimensionMismatchError(
                    "input vectors should all have the same length: "
                    f"vector {i} has {column.size}, expected {height}"
                )
        return cls(np.column_stack(columns))

    def with_cell(self, x: int, y: int, value: float) -> ContingencyTable:
        """Return a copy of this table with cell ``(x, y)`` replaced."""
        self._check_index(x, y)
        cells = self._cells.copy()
        cells[y, x] = value
        return ContingencyTable(cells)

    # ------------------------------------------------------------------ #
    #  Accessors
    # ------------------------------------------------------------------ #

    @property
    def width(self) -> int:
        return int(self._cells.shape[1])

    @property
    def height(self) -> int:
        return int(self._cells.shape[0])

    @property
    def cells(self) -> FloatArray:
        """Read-only ``(height, width)`` array of observed counts."""
        return self._cells

    @property
    def grand_total(self) -> float:
        return self._grand_total

    @property
    def column_totals(self) -> FloatArray:
        """Read-only array; entry *x* sums column *x*."""
        return self._column_totals

    @property
    def row_totals(self) -> FloatArray:
        """Read-only array; entry *y* sums row *y*."""
        return self._row_totals

    @property
    def degrees_of_freedom(self) -> int:
        return degrees_of_freedom_for(self.width, self.height)

    def cell(self, x: int, y: int) -> float:
        self._check_index(x, y)
        return float(self._cells[y, x])

    def expected_value(self, x: int, y: int) -> float:
        """Expected count of cell ``(x, y)`` under the null hypothesis.

        - One column: ``grand_total / height`` (uniform over rows).
        - One row:    ``grand_total / width`` (uniform over columns).
        - Otherwise:  ``column_total[x] * row_total[y] / grand_total``.

        A zero grand total gives 0.0 rather than NaN.
        """
        self._check_index(x, y)
        return float(self.expected_values()[y, x])

    def expected_values(self) -> FloatArray:
        """``(height, width)`` array of expected counts, see :meth:`expected_value`."""
        shape = self._cells.shape
        if self.width == 1:
            return np.full(shape, self._grand_total / self.height)
        if self.height == 1:
            return np.full(shape, self._grand_total / self.width)
        if self._grand_total == 0.0:
            return np.zeros(shape)
        return np.outer(self._row_totals, self._column_totals) / self._grand_total

    def to_rows(self) -> list[list[float]]:
        return self._cells.tolist()

    def _check_index(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise InvalidArgumentError(
                f"cell ({x}, {y}) outside {self.width}x{self.height} table"
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContingencyTable):
            return NotImplemented
        return np.array_equal(self._cells, other._cells)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"ContingencyTable(width={self.width}, height={self.height}, "
            f"grand_total={self._grand_total:g})"
        )

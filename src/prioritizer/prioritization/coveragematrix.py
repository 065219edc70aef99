#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides an immutable boolean coverage matrix."""

from __future__ import annotations

from typing import TYPE_CHECKING

from prioritizer.utils.exceptions import InvalidArgumentError


if TYPE_CHECKING:
    from collections.abc import Iterable
    from collections.abc import Iterator
    from collections.abc import Sequence


class CoverageMatrix:
    """A rectangular boolean grid relating test cases to the code units they cover.

    Rows correspond to test cases, columns to code units.  A cell is ``True`` if the
    test case of its row covers the code unit of its column.  The matrix cannot be
    changed after construction.
    """

    def __init__(self, rows: Iterable[Sequence[bool]], num_code_units: int | None = None):
        """Creates a new coverage matrix.

        Args:
            rows: The rows of the matrix, one per test case
            num_code_units: The number of columns; only required to describe a matrix
                without rows but with columns.  Taken from the first row otherwise.

        Raises:
            InvalidArgumentError: If the rows are of different lengths or do not match
                the given number of code units
        """
        self._rows: tuple[tuple[bool, ...], ...] = tuple(
            tuple(bool(cell) for cell in row) for row in rows
        )
        if num_code_units is None:
            num_code_units = len(self._rows[0]) if self._rows else 0
        if num_code_units < 0:
            raise InvalidArgumentError(f"Negative number of code units: {num_code_units}")
        for index, row in enumerate(self._rows):
            if len(row) != num_code_units:
                raise InvalidArgumentError(
                    f"Coverage matrix is not rectangular: row {index} has {len(row)} "
                    f"columns, expected {num_code_units}"
                )
        self._num_code_units = num_code_units
        self._covered_columns = tuple(any(column) for column in zip(*self._rows))

    @property
    def num_test_cases(self) -> int:
        """Provides the number of rows.

        Returns:
            The number of test cases
        """
        return len(self._rows)

    @property
    def num_code_units(self) -> int:
        """Provides the number of columns.

        Returns:
            The number of code units
        """
        return self._num_code_units

    @property
    def rows(self) -> tuple[tuple[bool, ...], ...]:
        """Provides the rows of the matrix.

        Returns:
            The rows of the matrix
        """
        return self._rows

    def row(self, test_case: int) -> tuple[bool, ...]:
        """Provides the coverage of a single test case.

        Args:
            test_case: The index of the test case

        Returns:
            The row of the test case
        """
        return self._rows[test_case]

    def covered_units(self, test_case: int) -> frozenset[int]:
        """Provides the indices of the code units a test case covers.

        Args:
            test_case: The index of the test case

        Returns:
            The indices of the covered columns
        """
        return frozenset(
            unit for unit, covered in enumerate(self._rows[test_case]) if covered
        )

    def is_dead_column(self, code_unit: int) -> bool:
        """Tells whether a code unit is covered by no test case at all.

        Args:
            code_unit: The index of the code unit

        Returns:
            Whether no row covers the code unit
        """
        if not self._covered_columns:
            return True
        return not self._covered_columns[code_unit]

    def num_dead_columns(self) -> int:
        """Counts the code units that are covered by no test case.

        Returns:
            The number of dead columns
        """
        return sum(1 for unit in range(self._num_code_units) if self.is_dead_column(unit))

    def num_live_columns(self) -> int:
        """Counts the code units that are covered by at least one test case.

        Returns:
            The number of columns that are not dead
        """
        return self._num_code_units - self.num_dead_columns()

    def __iter__(self) -> Iterator[tuple[bool, ...]]:
        return iter(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, CoverageMatrix):
            return False
        return self._num_code_units == other._num_code_units and self._rows == other._rows

    def __hash__(self):
        return hash((self._num_code_units, self._rows))

    def __repr__(self) -> str:
        return f"CoverageMatrix({self.num_test_cases}x{self.num_code_units})"

#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Computes the Average Percentage of Lines Covered (APLC) of a test-case ordering.

For an ordering of ``n`` test cases over ``m`` code units, let ``S`` be the sum of the
numbers of code units each test case covers first, weighted by its 1-indexed position
in the ordering, and let ``u`` be the number of code units no test case covers.  Then

* the maximising form is ``1 - S / (n * (m - u)) + 1 / (2n)``, and
* the minimising form is ``S / (n * (m - u)) + 1 / (2n)``.

Code units covered by no test case neither contribute to ``S`` nor to the
denominator.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prioritizer.metaheuristics.fitnessfunction import FitnessDirection
from prioritizer.utils.exceptions import DegenerateInputError
from prioritizer.utils.exceptions import InvalidArgumentError


if TYPE_CHECKING:
    from collections.abc import Sequence

    from prioritizer.prioritization.coveragematrix import CoverageMatrix


def check_ordering(ordering: Sequence[int], num_test_cases: int) -> None:
    """Checks that an ordering is a permutation of ``range(num_test_cases)``.

    Args:
        ordering: The ordering to check
        num_test_cases: The number of test cases

    Raises:
        InvalidArgumentError: If the ordering has the wrong length or is not a
            permutation
    """
    if len(ordering) != num_test_cases:
        raise InvalidArgumentError(
            f"Ordering has length {len(ordering)}, but there are {num_test_cases} test cases"
        )
    if sorted(ordering) != list(range(num_test_cases)):
        raise InvalidArgumentError(
            f"Ordering {list(ordering)} is not a permutation of 0..{num_test_cases - 1}"
        )


def parse_ordering(value: str) -> list[int]:
    """Parses a colon-separated ordering such as ``"1:2:0"``.

    Args:
        value: The textual representation

    Returns:
        The test-case indices in the given order

    Raises:
        InvalidArgumentError: If the value contains something other than integers
    """
    value = value.strip()
    if not value:
        return []
    try:
        return [int(part) for part in value.split(":")]
    except ValueError as error:
        raise InvalidArgumentError(f"Malformed ordering: {value}") from error


def weighted_coverage_sum(matrix: CoverageMatrix, ordering: Sequence[int]) -> int:
    """Computes the position-weighted sum of newly covered code units.

    Args:
        matrix: The coverage matrix
        ordering: A permutation of the matrix's test-case indices

    Returns:
        The weighted sum ``S``
    """
    covered: set[int] = set()
    total = 0
    for position, test_case in enumerate(ordering, start=1):
        newly_covered = matrix.covered_units(test_case) - covered
        covered |= newly_covered
        total += position * len(newly_covered)
    return total


def compute_aplc(
    matrix: CoverageMatrix,
    ordering: Sequence[int],
    direction: FitnessDirection = FitnessDirection.MAXIMIZING,
) -> float:
    """Computes the APLC of an ordering.

    Args:
        matrix: The coverage matrix
        ordering: A permutation of the matrix's test-case indices
        direction: Whether to compute the maximising or the minimising form

    Returns:
        The APLC of the ordering

    Raises:
        InvalidArgumentError: If the ordering is not a permutation of the test cases
        DegenerateInputError: If no test case covers any code unit
    """
    check_ordering(ordering, matrix.num_test_cases)
    live_columns = matrix.num_live_columns()
    if live_columns == 0:
        raise DegenerateInputError(
            "APLC is undefined for a coverage matrix without covered code units"
        )
    num_test_cases = matrix.num_test_cases
    rate = weighted_coverage_sum(matrix, ordering) / (num_test_cases * live_columns)
    offset = 1 / (2 * num_test_cases)
    match direction:
        case FitnessDirection.MAXIMIZING:
            return 1 - rate + offset
        case FitnessDirection.MINIMIZING:
            return rate + offset

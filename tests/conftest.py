#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
import pytest

import prioritizer.configuration as config

from prioritizer.prioritization.coveragematrix import CoverageMatrix
from prioritizer.utils.randomness import Random


XX = True
__ = False

REGULAR_ROWS = [
    # 1  2   3   4   5   6   7   8   9  10
    [XX, __, XX, __, __, __, __, __, __, __],
    [XX, XX, XX, __, XX, __, __, __, __, __],
    [XX, XX, XX, XX, XX, XX, __, __, __, __],
    [__, XX, __, XX, __, __, __, __, __, __],
    [__, __, __, __, __, __, XX, XX, XX, XX],
]


@pytest.fixture(autouse=True)
def reset_configuration():
    """Automatically reset the configuration singleton."""
    config.configuration = config.Configuration(matrix_path="")
    config.configuration.seeding.seed = 42


@pytest.fixture
def regular_matrix() -> CoverageMatrix:
    """A matrix without empty rows or columns, n = 5, m = 10."""
    return CoverageMatrix(REGULAR_ROWS)


@pytest.fixture
def matrix_with_dead_column() -> CoverageMatrix:
    return CoverageMatrix([[*row, __] for row in REGULAR_ROWS])


@pytest.fixture
def matrix_with_empty_test_case() -> CoverageMatrix:
    return CoverageMatrix([*REGULAR_ROWS, [__] * 10])


@pytest.fixture
def matrix_with_dead_column_and_empty_test_case() -> CoverageMatrix:
    return CoverageMatrix([[*row, __] for row in REGULAR_ROWS] + [[__] * 11])


@pytest.fixture
def rng() -> Random:
    return Random(42)

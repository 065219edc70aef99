#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides access to the coverage matrix of a test suite.

A recorded coverage matrix is read from a file in one of two formats:

* JSON, either a plain list of rows or an object of the form
  ``{"test_cases": ["t0", "t1"], "coverage": [[true, false], [false, true]]}``;
* CSV, with a header row naming the code units, and one row per test case whose
  first cell is the test-case name and whose remaining cells are ``1``/``0`` or
  ``true``/``false``.

Instrumenting and executing the code under test is out of the scope of this module.
"""

from __future__ import annotations

import csv
import json
import logging

from abc import ABC
from abc import abstractmethod
from pathlib import Path

from prioritizer.prioritization.coveragematrix import CoverageMatrix
from prioritizer.utils.exceptions import CoverageAcquisitionError


_LOGGER = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"1", "true", "x", "yes"})
_FALSE_VALUES = frozenset({"0", "false", "", "-", "no"})


class CoverageTracker(ABC):
    """Provides the coverage matrix of a test suite and the names of its test cases."""

    @abstractmethod
    def get_coverage_matrix(self) -> CoverageMatrix:
        """Provides the coverage matrix.

        Returns:
            The coverage matrix, one row per test case  # noqa: DAR202

        Raises:
            CoverageAcquisitionError: If the coverage could not be acquired  # noqa: DAR402
        """

    @abstractmethod
    def get_test_cases(self) -> list[str]:
        """Provides the names of the test cases, parallel to the matrix rows.

        Returns:
            The test-case names  # noqa: DAR202

        Raises:
            CoverageAcquisitionError: If the coverage could not be acquired  # noqa: DAR402
        """

    @property
    @abstractmethod
    def subject(self) -> str:
        """Provides a short name of the subject whose coverage is tracked.

        Returns:
            The name of the subject  # noqa: DAR202
        """


class RecordedCoverageTracker(CoverageTracker):
    """Loads a previously recorded coverage matrix from a JSON or CSV file.

    The file is read lazily on first access and cached afterwards.
    """

    def __init__(self, path: str | Path) -> None:
        """Creates a tracker for a recorded coverage matrix.

        Args:
            path: The path to the JSON or CSV file
        """
        self._path = Path(path)
        self._matrix: CoverageMatrix | None = None
        self._test_cases: list[str] | None = None

    @property
    def path(self) -> Path:
        """Provides the path of the recorded matrix.

        Returns:
            The path
        """
        return self._path

    @property
    def subject(self) -> str:  # noqa: D102
        return self._path.stem

    def get_coverage_matrix(self) -> CoverageMatrix:  # noqa: D102
        self._load()
        assert self._matrix is not None
        return self._matrix

    def get_test_cases(self) -> list[str]:  # noqa: D102
        self._load()
        assert self._test_cases is not None
        return list(self._test_cases)

    def _load(self) -> None:
        if self._matrix is not None:
            return
        _LOGGER.debug("Loading coverage matrix from %s", self._path)
        try:
            content = self._path.read_text(encoding="utf-8")
        except OSError as error:
            raise CoverageAcquisitionError(
                f"Cannot read coverage matrix {self._path}: {error}"
            ) from error
        try:
            if self._path.suffix.lower() == ".csv":
                names, rows, width = _parse_csv(content)
            else:
                names, rows = _parse_json(content)
                width = None
            matrix = CoverageMatrix(rows, width)
        except (ValueError, TypeError) as error:
            raise CoverageAcquisitionError(
                f"Malformed coverage matrix {self._path}: {error}"
            ) from error
        if names is None:
            names = [f"test_{index}" for index in range(matrix.num_test_cases)]
        if len(names) != matrix.num_test_cases:
            raise CoverageAcquisitionError(
                f"Malformed coverage matrix {self._path}: {len(names)} test-case names "
                f"for {matrix.num_test_cases} rows"
            )
        _LOGGER.info(
            "Loaded coverage of %d test cases over %d code units",
            matrix.num_test_cases,
            matrix.num_code_units,
        )
        self._matrix = matrix
        self._test_cases = names


def _parse_cell(value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in {0, 1}:
            return bool(value)
        raise ValueError(f"Not a coverage value: {value}")
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"Not a coverage value: {value!r}")


def _parse_json(content: str) -> tuple[list[str] | None, list[list[bool]]]:
    data = json.loads(content)
    names: list[str] | None = None
    if isinstance(data, dict):
        if "coverage" not in data:
            raise ValueError("Missing key 'coverage'")
        if "test_cases" in data:
            names = [str(name) for name in data["test_cases"]]
        data = data["coverage"]
    if not isinstance(data, list) or not all(isinstance(row, list) for row in data):
        raise ValueError("Coverage must be a list of rows")
    return names, [[_parse_cell(cell) for cell in row] for row in data]


def _parse_csv(content: str) -> tuple[list[str], list[list[bool]], int]:
    lines = [line for line in csv.reader(content.splitlines()) if line]
    if not lines:
        raise ValueError("Empty CSV file")
    names: list[str] = []
    rows: list[list[bool]] = []
    for line in lines[1:]:
        names.append(line[0].strip())
        rows.append([_parse_cell(cell) for cell in line[1:]])
    return names, rows, len(lines[0]) - 1

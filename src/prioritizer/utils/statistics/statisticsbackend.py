#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides backends to export the APLC values of all repetitions."""

from __future__ import annotations

import csv
import logging

from abc import ABC
from abc import abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Sequence

    from prioritizer.utils.report import AlgorithmResults


@dataclass(frozen=True)
class ResultRow:
    """One exported row: the APLC values of all repetitions of an algorithm."""

    algorithm: str
    values: tuple[float, ...]

    @classmethod
    def from_results(cls, results: AlgorithmResults) -> ResultRow:
        """Creates a row from the results of an algorithm.

        Args:
            results: The results of all repetitions of the algorithm

        Returns:
            The row, labelled with the algorithm's abbreviation
        """
        return cls(results.algorithm.abbreviation, tuple(results.aplc_values))


class AbstractStatisticsBackend(ABC):
    """An interface for a statistics writer."""

    @abstractmethod
    def write_data(self, rows: Sequence[ResultRow]) -> bool:
        """Write the APLC values of every algorithm.

        Args:
            rows: the rows to write

        Returns:
            Whether writing succeeded  # noqa: DAR202
        """


class CSVStatisticsBackend(AbstractStatisticsBackend):
    """A statistics backend writing one row per algorithm to a CSV file.

    The header is ``Algorithm,1,2,...,r`` for ``r`` repetitions.
    """

    _logger = logging.getLogger(__name__)

    def __init__(self, report_dir: str | Path, subject: str) -> None:
        """Create a new CSV backend.

        Args:
            report_dir: The directory to write the file to
            subject: The name of the subject, used as prefix of the file name
        """
        self._output_file = Path(report_dir).resolve() / f"{subject}-results.csv"

    @property
    def output_file(self) -> Path:
        """Provides the file the data is written to.

        Returns:
            The path of the CSV file
        """
        return self._output_file

    def write_data(self, rows: Sequence[ResultRow]) -> bool:  # noqa: D102
        repetitions = max((len(row.values) for row in rows), default=0)
        try:
            self._output_file.parent.mkdir(parents=True, exist_ok=True)
            with self._output_file.open(mode="w", newline="", encoding="utf-8") as csv_file:
                csv_writer = csv.writer(csv_file)
                csv_writer.writerow(["Algorithm", *range(1, repetitions + 1)])
                for row in rows:
                    csv_writer.writerow([row.algorithm, *row.values])
        except OSError as error:
            self._logger.exception("Error while writing statistics: %s", error)
            return False
        self._logger.info("Written results to %s", self._output_file)
        return True

#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
import csv

import pytest

import prioritizer.configuration as config

from prioritizer.utils.report import AlgorithmResults
from prioritizer.utils.report import RepetitionResult
from prioritizer.utils.statistics.statisticsbackend import CSVStatisticsBackend
from prioritizer.utils.statistics.statisticsbackend import ResultRow


@pytest.fixture
def rows() -> list[ResultRow]:
    return [ResultRow("SA", (0.5, 0.75)), ResultRow("RS", (0.25, 0.5))]


def test_row_from_results():
    results = AlgorithmResults(config.Algorithm.RANDOM_WALK)
    results.add(RepetitionResult(1, (0,), ("test_a",), 0.5, 10))
    assert ResultRow.from_results(results) == ResultRow("RW", (0.5,))


def test_csv_output_file(tmp_path):
    backend = CSVStatisticsBackend(tmp_path, "subject")
    assert backend.output_file == tmp_path.resolve() / "subject-results.csv"


def test_csv_write_data(tmp_path, rows):
    backend = CSVStatisticsBackend(tmp_path / "report", "subject")
    assert backend.write_data(rows)
    with backend.output_file.open(encoding="utf-8", newline="") as csv_file:
        written = list(csv.reader(csv_file))
    assert written == [
        ["Algorithm", "1", "2"],
        ["SA", "0.5", "0.75"],
        ["RS", "0.25", "0.5"],
    ]


def test_csv_overwrites(tmp_path, rows):
    backend = CSVStatisticsBackend(tmp_path, "subject")
    backend.write_data(rows)
    backend.write_data(rows[:1])
    content = backend.output_file.read_text(encoding="utf-8")
    assert "RS" not in content


def test_csv_write_failure(tmp_path, rows):
    occupied = tmp_path / "occupied"
    occupied.write_text("", encoding="utf-8")
    backend = CSVStatisticsBackend(occupied, "subject")
    assert not backend.write_data(rows)

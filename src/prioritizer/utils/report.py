#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides the records of the search results and renders a summary of them."""

from __future__ import annotations

import dataclasses
import importlib.resources
import statistics
import typing

from jinja2 import Template


if typing.TYPE_CHECKING:
    from pathlib import Path

    import prioritizer.configuration as config

_NANOS_PER_SECOND = 1_000_000_000


@dataclasses.dataclass(frozen=True)
class RepetitionResult:
    """The outcome of one independent search."""

    index: int
    """The 1-indexed number of the repetition."""

    ordering: tuple[int, ...]
    """The best ordering found, as test-case indices."""

    test_cases: tuple[str, ...]
    """The names of all test cases, indexed like the coverage matrix rows."""

    aplc: float
    """The APLC of the best ordering in its maximising form."""

    elapsed_ns: int
    """The wall time the search took."""

    @property
    def ordered_test_cases(self) -> list[str]:
        """Provides the names of the test cases in the best ordering.

        Returns:
            The ordered test-case names
        """
        return [self.test_cases[test_case] for test_case in self.ordering]

    @property
    def elapsed_seconds(self) -> float:
        """Provides the wall time the search took in seconds.

        Returns:
            The elapsed time in seconds
        """
        return self.elapsed_ns / _NANOS_PER_SECOND


@dataclasses.dataclass
class AlgorithmResults:
    """The outcomes of all repetitions of one algorithm."""

    algorithm: config.Algorithm

    repetitions: list[RepetitionResult] = dataclasses.field(default_factory=list)

    def add(self, result: RepetitionResult) -> None:
        """Records the outcome of another repetition.

        Args:
            result: The outcome to record
        """
        self.repetitions.append(result)

    @property
    def aplc_values(self) -> list[float]:
        """Provides the APLC values of all repetitions in order.

        Returns:
            The APLC values
        """
        return [repetition.aplc for repetition in self.repetitions]

    @property
    def minimum(self) -> float:
        """Provides the lowest APLC value over all repetitions.

        Returns:
            The minimum, NaN if there are no repetitions
        """
        return min(self.aplc_values, default=float("nan"))

    @property
    def average(self) -> float:
        """Provides the mean APLC value over all repetitions.

        Returns:
            The average, NaN if there are no repetitions
        """
        values = self.aplc_values
        return statistics.fmean(values) if values else float("nan")

    @property
    def maximum(self) -> float:
        """Provides the highest APLC value over all repetitions.

        Returns:
            The maximum, NaN if there are no repetitions
        """
        return max(self.aplc_values, default=float("nan"))


@dataclasses.dataclass
class ResultSummary:
    """The results of all algorithms on one subject."""

    subject: str

    seed: int

    results: list[AlgorithmResults] = dataclasses.field(default_factory=list)


def render_summary(summary: ResultSummary) -> str:
    """Renders a human-readable summary of the search results.

    Args:
        summary: The results to render

    Returns:
        The summary text
    """
    template = Template(
        importlib.resources.files("prioritizer.resources")
        .joinpath("summary-template.txt")
        .read_text(encoding="utf-8"),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    return template.render(summary=summary)


def write_summary(text: str, summary_path: Path) -> None:
    """Writes a rendered summary to the given file.

    Args:
        text: The rendered summary
        summary_path: The file the summary is written to
    """
    summary_path.parent.mkdir(parents=True, exist_ok=True)
    summary_path.write_text(text, encoding="utf-8")

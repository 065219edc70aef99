#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Prioritizer orders the test cases of a test suite by their code coverage.

Given a coverage matrix of the test suite, the prioritizer searches for an ordering
of the test cases that covers the code as early as possible, as measured by the
Average Percentage of Lines Covered (APLC).  Random Search, Random Walk, and
Simulated Annealing are available as search algorithms; each of them is repeated
several times to compare their results.  Alternatively, the APLC of a manually given
ordering can be computed.

The prioritizer is supposed to be used as a standalone command-line application but
it can also be used as a library by calling `run_prioritizer` directly.
"""

from __future__ import annotations

import enum
import logging
import time

from pathlib import Path
from typing import TYPE_CHECKING

import prioritizer.configuration as config

from prioritizer.algorithmfactory import SearchAlgorithmFactory
from prioritizer.prioritization.aplc import compute_aplc
from prioritizer.prioritization.aplc import parse_ordering
from prioritizer.prioritization.coveragetracker import CoverageTracker
from prioritizer.prioritization.coveragetracker import RecordedCoverageTracker
from prioritizer.utils.exceptions import ConfigurationException
from prioritizer.utils.exceptions import CoverageAcquisitionError
from prioritizer.utils.exceptions import DegenerateInputError
from prioritizer.utils.exceptions import InvalidArgumentError
from prioritizer.utils.randomness import Random
from prioritizer.utils.report import AlgorithmResults
from prioritizer.utils.report import RepetitionResult
from prioritizer.utils.report import ResultSummary
from prioritizer.utils.report import render_summary
from prioritizer.utils.report import write_summary
from prioritizer.utils.statistics.statisticsbackend import CSVStatisticsBackend
from prioritizer.utils.statistics.statisticsbackend import ResultRow


if TYPE_CHECKING:
    from prioritizer.prioritization.coveragematrix import CoverageMatrix


@enum.unique
class ReturnCode(enum.IntEnum):
    """Return codes for the prioritizer to signal result."""

    OK = 0
    """Symbolises that the execution ended as expected."""

    SETUP_FAILED = 1
    """Symbolises that the execution failed in the setup phase."""

    INVALID_INPUT = 2
    """Symbolises that the coverage matrix or the manual ordering is not usable."""

    EXPORT_FAILED = 3
    """Symbolises that the results could not be written."""


_LOGGER = logging.getLogger(__name__)


def set_configuration(configuration: config.Configuration) -> None:
    """Initialises the prioritizer with the given configuration.

    Args:
        configuration: The configuration to use.
    """
    config.configuration = configuration


def run_prioritizer(tracker: CoverageTracker | None = None) -> ReturnCode:
    """Run the test-case prioritization.

    The result of the prioritization is indicated by the resulting ReturnCode.

    Args:
        tracker: Provides the coverage matrix; a tracker for the configured matrix
            file if omitted.

    Returns:
        See ReturnCode.
    """
    try:
        _LOGGER.info("Start test-case prioritization…")
        return _run(tracker)
    finally:
        _LOGGER.info("Stop test-case prioritization…")


def _verify_config() -> None:
    """Verify the configuration and raise an exception if something is invalid.

    Raises:
        ConfigurationException: In case the configuration is illegal
    """
    if config.configuration.repetitions < 0:
        raise ConfigurationException(
            f"Negative number of repetitions: {config.configuration.repetitions}"
        )
    if not config.configuration.algorithms and not config.configuration.ordering:
        raise ConfigurationException("No search algorithm selected")


def _setup_tracker(tracker: CoverageTracker | None) -> CoverageTracker | None:
    if tracker is not None:
        return tracker
    if not config.configuration.matrix_path:
        _LOGGER.error("No coverage matrix given")
        return None
    return RecordedCoverageTracker(config.configuration.matrix_path)


def _setup_report_dir() -> bool:
    report_dir = Path(config.configuration.output.report_dir).absolute()
    try:
        report_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        _LOGGER.exception("Cannot create report dir %s", config.configuration.output.report_dir)
        return False
    return True


def _setup_random_number_generator() -> Random:
    """Setup RNG.

    Returns:
        The source of randomness for all searches of this run
    """
    _LOGGER.info("Using seed %d", config.configuration.seeding.seed)
    return Random(config.configuration.seeding.seed)


def _run(tracker: CoverageTracker | None) -> ReturnCode:
    try:
        _verify_config()
    except ConfigurationException:
        _LOGGER.exception("Invalid configuration")
        return ReturnCode.SETUP_FAILED
    if (tracker := _setup_tracker(tracker)) is None:
        return ReturnCode.SETUP_FAILED
    try:
        coverage_matrix = tracker.get_coverage_matrix()
        test_cases = tracker.get_test_cases()
    except CoverageAcquisitionError:
        _LOGGER.exception("Failed to acquire the coverage matrix")
        return ReturnCode.SETUP_FAILED

    try:
        if config.configuration.ordering:
            return _run_manual_ordering(
                tracker.subject, coverage_matrix, parse_ordering(config.configuration.ordering)
            )
        summary = _run_searches(tracker.subject, coverage_matrix, test_cases)
    except (InvalidArgumentError, DegenerateInputError):
        _LOGGER.exception("Cannot prioritize the test cases of %s", tracker.subject)
        return ReturnCode.INVALID_INPUT
    return _write_results(summary)


def _run_manual_ordering(
    subject: str, coverage_matrix: CoverageMatrix, ordering: list[int]
) -> ReturnCode:
    aplc = compute_aplc(coverage_matrix, ordering)
    _LOGGER.info("APLC of the given ordering: %f", aplc)
    if config.configuration.output.quiet:
        if not _setup_report_dir():
            return ReturnCode.EXPORT_FAILED
        aplc_file = Path(config.configuration.output.report_dir) / f"aplc-{subject}.txt"
        try:
            write_summary(f"{aplc}\n", aplc_file)
        except OSError:
            _LOGGER.exception("Failed to write %s", aplc_file)
            return ReturnCode.EXPORT_FAILED
    else:
        print(aplc)  # noqa: T201
    return ReturnCode.OK


def _run_searches(
    subject: str, coverage_matrix: CoverageMatrix, test_cases: list[str]
) -> ResultSummary:
    rng = _setup_random_number_generator()
    summary = ResultSummary(subject=subject, seed=rng.get_seed())
    factory = SearchAlgorithmFactory(coverage_matrix, rng)
    algorithms = [
        factory.resolve_algorithm(algorithm) for algorithm in config.configuration.algorithms
    ]
    for algorithm in algorithms:
        _LOGGER.info("Executing %s", algorithm.full_name)
        results = AlgorithmResults(algorithm)
        for index in range(1, config.configuration.repetitions + 1):
            search = factory.get_search_algorithm(algorithm)
            start_time = time.time_ns()
            best = search.find_solution()
            elapsed = time.time_ns() - start_time
            aplc = compute_aplc(coverage_matrix, best.ordering)
            _LOGGER.info(
                "Repetition %i of %s: APLC %f after %.3fs",
                index,
                algorithm.abbreviation,
                aplc,
                elapsed / 1e9,
            )
            if search.stopping_condition.search_must_stop():
                _LOGGER.debug("Stopping condition reached: %s", search.stopping_condition)
            else:
                _LOGGER.debug("Algorithm stopped before using all resources.")
            results.add(
                RepetitionResult(
                    index=index,
                    ordering=best.ordering,
                    test_cases=tuple(test_cases),
                    aplc=aplc,
                    elapsed_ns=elapsed,
                )
            )
        summary.results.append(results)
    return summary


def _write_results(summary: ResultSummary) -> ReturnCode:
    output = config.configuration.output
    if (output.quiet or output.export_csv) and not _setup_report_dir():
        return ReturnCode.EXPORT_FAILED

    text = render_summary(summary)
    if output.quiet:
        summary_file = Path(output.report_dir) / f"results-{summary.subject}.txt"
        try:
            write_summary(text, summary_file)
        except OSError:
            _LOGGER.exception("Failed to write %s", summary_file)
            return ReturnCode.EXPORT_FAILED
        _LOGGER.info("Written summary to %s", summary_file)
    else:
        print(text)  # noqa: T201

    if output.export_csv:
        backend = CSVStatisticsBackend(output.report_dir, summary.subject)
        if not backend.write_data([ResultRow.from_results(results) for results in summary.results]):
            return ReturnCode.EXPORT_FAILED
    return ReturnCode.OK

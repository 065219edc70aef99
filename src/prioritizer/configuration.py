#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides a configuration interface for the test-case prioritizer."""

import dataclasses
import enum
import time


class Algorithm(str, enum.Enum):
    """Different search algorithms supported by the prioritizer."""

    RANDOM_SEARCH = "RANDOM_SEARCH"
    """Samples independent random orderings and keeps the best one."""

    RANDOM_WALK = "RANDOM_WALK"
    """Walks from a random ordering from neighbour to neighbour and keeps the best
    ordering seen on the way."""

    SIMULATED_ANNEALING = "SIMULATED_ANNEALING"
    """Simulated Annealing with a linear cooling schedule (cf. Kirkpatrick et al.
    Optimization by Simulated Annealing.  Science vol. 220 issue 4598)."""

    @property
    def abbreviation(self) -> str:
        """Provides the short name of the algorithm, e.g., ``SA``.

        Returns:
            The short name
        """
        return _ABBREVIATIONS[self]

    @property
    def full_name(self) -> str:
        """Provides a human-readable name of the algorithm.

        Returns:
            The human-readable name
        """
        return self.value.replace("_", " ").title()


_ABBREVIATIONS = {
    Algorithm.RANDOM_SEARCH: "RS",
    Algorithm.RANDOM_WALK: "RW",
    Algorithm.SIMULATED_ANNEALING: "SA",
}


@dataclasses.dataclass
class StoppingConfiguration:
    """Configuration related to when a search shall stop.

    If no budget is set, every search may use 1000 fitness evaluations.  If both
    budgets are set, a search stops as soon as one of them is exhausted.
    """

    maximum_fitness_evaluations: int = -1
    """Maximum number of fitness evaluations per search."""

    maximum_search_time: str = ""
    """Time that can be used per search, either in seconds or as HH:MM:SS."""


@dataclasses.dataclass
class AnnealingConfiguration:
    """Configuration of the Simulated Annealing algorithm."""

    max_step: int = 500
    """Number of steps after which the cooling schedule ends."""

    acceptance_threshold: float = 0.2
    """A neighbour becomes the current ordering if its acceptance probability exceeds
    this threshold."""

    minimum_temperature: float = 0.01
    """The lowest temperature of the linear cooling schedule."""


@dataclasses.dataclass
class SeedingConfiguration:
    """Configuration related to seeding."""

    seed: int = time.time_ns()
    """A predefined seed value for the random number generator that is used."""


@dataclasses.dataclass
class OutputConfiguration:
    """Configuration related to the output of the results."""

    report_dir: str = "prioritizer-report"
    """Directory in which to put the CSV export and the result summary."""

    quiet: bool = False
    """Write the result summary to a file in the report directory instead of the
    console."""

    export_csv: bool = True
    """Export the APLC values of all repetitions to a CSV file."""


@dataclasses.dataclass
class Configuration:
    """General configuration for the test-case prioritizer."""

    matrix_path: str
    """Path to the recorded coverage matrix, a JSON or CSV file."""

    algorithms: list[Algorithm] = dataclasses.field(
        default_factory=lambda: [Algorithm.SIMULATED_ANNEALING, Algorithm.RANDOM_SEARCH]
    )
    """The search algorithms to compare."""

    repetitions: int = 30
    """The number of independent searches per algorithm."""

    ordering: str = ""
    """A manual ordering of the test cases, e.g., 1:2:0.  If given, no search is
    performed and only the APLC of the ordering is reported."""

    stopping: StoppingConfiguration = dataclasses.field(default_factory=StoppingConfiguration)
    """Stopping configuration."""

    annealing: AnnealingConfiguration = dataclasses.field(
        default_factory=AnnealingConfiguration
    )
    """Simulated Annealing configuration."""

    seeding: SeedingConfiguration = dataclasses.field(default_factory=SeedingConfiguration)
    """Seeding configuration."""

    output: OutputConfiguration = dataclasses.field(default_factory=OutputConfiguration)
    """Output configuration."""


# Singleton instance of the configuration.
configuration = Configuration(matrix_path="")

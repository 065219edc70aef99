#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides the test-case prioritization problem for the metaheuristic search.

A solution of the problem is an ordering of the test cases, i.e., a permutation of
their indices.  :class:`TestCaseOrderingProblem` binds all roles the search algorithms
need to one object: it generates random orderings, derives neighbours of orderings,
rates them by their APLC, and delegates budget accounting to a stopping condition.
"""

from __future__ import annotations

import logging

from typing import TYPE_CHECKING

from prioritizer.configuration import Algorithm
from prioritizer.metaheuristics.configurations import Configuration
from prioritizer.metaheuristics.configurations import ConfigurationGenerator
from prioritizer.metaheuristics.configurations import ElementaryTransformation
from prioritizer.metaheuristics.fitnessfunction import FitnessDirection
from prioritizer.metaheuristics.fitnessfunction import FitnessFunction
from prioritizer.metaheuristics.stoppingcondition import MaxFitnessEvaluationsStoppingCondition
from prioritizer.metaheuristics.stoppingcondition import StoppingCondition
from prioritizer.prioritization.aplc import check_ordering
from prioritizer.prioritization.aplc import compute_aplc


if TYPE_CHECKING:
    from collections.abc import Sequence

    from prioritizer.prioritization.coveragematrix import CoverageMatrix
    from prioritizer.utils.randomness import Random

DEFAULT_MAX_FITNESS_EVALUATIONS = 1000

_LOGGER = logging.getLogger(__name__)


def fitness_direction_for(algorithm: Algorithm) -> FitnessDirection:
    """Selects the fitness direction an algorithm searches in.

    Args:
        algorithm: The search algorithm

    Returns:
        The direction of the APLC used together with the algorithm
    """
    match algorithm:
        case Algorithm.SIMULATED_ANNEALING:
            return FitnessDirection.MINIMIZING
        case Algorithm.RANDOM_SEARCH | Algorithm.RANDOM_WALK:
            return FitnessDirection.MAXIMIZING


class TestCaseOrdering(Configuration["TestCaseOrdering"]):
    """An ordering of the test cases of a coverage matrix.

    Orderings are never changed after construction; two orderings are equal if they
    list the same test cases in the same order.
    """

    __test__ = False

    def __init__(
        self,
        ordering: Sequence[int],
        coverage_matrix: CoverageMatrix,
        elementary_transformation: ElementaryTransformation[TestCaseOrdering] | None = None,
    ):
        """Creates a new ordering.

        Args:
            ordering: A permutation of the test-case indices of the matrix
            coverage_matrix: The coverage matrix the ordering refers to
            elementary_transformation: The transformation deriving neighbours

        Raises:
            InvalidArgumentError: If the ordering is not a permutation of the test-case
                indices
        """
        super().__init__(elementary_transformation)
        check_ordering(ordering, coverage_matrix.num_test_cases)
        self._ordering: tuple[int, ...] = tuple(ordering)
        self._coverage_matrix = coverage_matrix

    @property
    def ordering(self) -> tuple[int, ...]:
        """Provides the test-case indices in order.

        Returns:
            The ordering
        """
        return self._ordering

    @property
    def coverage_matrix(self) -> CoverageMatrix:
        """Provides the coverage matrix this ordering refers to.

        Returns:
            The coverage matrix
        """
        return self._coverage_matrix

    def copy(self) -> TestCaseOrdering:  # noqa: D102
        return TestCaseOrdering(
            self._ordering, self._coverage_matrix, self.elementary_transformation
        )

    def degrees_of_freedom(self) -> int:  # noqa: D102
        return len(self._ordering)

    def __len__(self) -> int:
        return len(self._ordering)

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, TestCaseOrdering):
            return False
        return self._ordering == other._ordering

    def __hash__(self):
        return hash(self._ordering)

    def __str__(self) -> str:
        return ":".join(str(test_case) for test_case in self._ordering)

    def __repr__(self) -> str:
        return f"TestCaseOrdering({list(self._ordering)})"


class TestCaseOrderingProblem(
    ConfigurationGenerator[TestCaseOrdering],
    ElementaryTransformation[TestCaseOrdering],
    FitnessFunction[TestCaseOrdering],
    StoppingCondition,
):
    """The test-case prioritization problem for one search algorithm.

    The problem object acts as configuration generator, elementary transformation,
    fitness function, and stopping condition at once, such that an algorithm is
    built by passing the problem three times, e.g.,
    ``SimulatedAnnealingAlgorithm(problem, problem, problem)``.

    The elementary transformation discards the given ordering and draws a completely
    new, uniformly random one.  Every ordering is thus reachable in a single step.
    """

    __test__ = False

    def __init__(
        self,
        coverage_matrix: CoverageMatrix,
        algorithm: Algorithm,
        rng: Random,
        stopping_condition: StoppingCondition | None = None,
    ):
        """Creates the problem.

        Args:
            coverage_matrix: The coverage matrix of the test suite
            algorithm: The algorithm that will search the problem; it determines the
                fitness direction
            rng: The source of randomness for generating orderings
            stopping_condition: The stopping condition to delegate to; a budget of
                1000 fitness evaluations if omitted
        """
        self._coverage_matrix = coverage_matrix
        self._algorithm = algorithm
        self._direction = fitness_direction_for(algorithm)
        self._rng = rng
        if stopping_condition is None:
            stopping_condition = MaxFitnessEvaluationsStoppingCondition(
                DEFAULT_MAX_FITNESS_EVALUATIONS
            )
        self._stopping_condition = stopping_condition

    @property
    def coverage_matrix(self) -> CoverageMatrix:
        """Provides the coverage matrix of the problem.

        Returns:
            The coverage matrix
        """
        return self._coverage_matrix

    @property
    def algorithm(self) -> Algorithm:
        """Provides the algorithm the problem was set up for.

        Returns:
            The algorithm
        """
        return self._algorithm

    @property
    def delegate(self) -> StoppingCondition:
        """Provides the stopping condition budget accounting is delegated to.

        Returns:
            The stopping condition
        """
        return self._stopping_condition

    def create(self, ordering: Sequence[int]) -> TestCaseOrdering:
        """Creates an ordering that uses this problem as its transformation.

        Args:
            ordering: A permutation of the test-case indices

        Returns:
            The ordering
        """
        return TestCaseOrdering(ordering, self._coverage_matrix, self)

    # Configuration generator

    def get(self) -> TestCaseOrdering:  # noqa: D102
        return self.create(self._rng.next_permutation(self._coverage_matrix.num_test_cases))

    # Elementary transformation

    def transform(self, configuration: TestCaseOrdering) -> TestCaseOrdering:  # noqa: D102
        length = len(configuration)
        if length < 2:  # noqa: PLR2004
            # A single permutation exists, there is no neighbour to move to.
            return configuration.copy()
        while True:
            neighbour = self._rng.next_permutation(length)
            if tuple(neighbour) != configuration.ordering:
                return self.create(neighbour)

    # Fitness function

    def compute_fitness(self, individual: TestCaseOrdering) -> float:  # noqa: D102
        return compute_aplc(self._coverage_matrix, individual.ordering, self._direction)

    @property
    def direction(self) -> FitnessDirection:  # noqa: D102
        return self._direction

    # Stopping condition

    def notify_search_started(self) -> None:  # noqa: D102
        _LOGGER.debug("Search with %s started", self._algorithm.full_name)
        self._stopping_condition.notify_search_started()

    def notify_fitness_evaluations(self, evaluations: int) -> None:  # noqa: D102
        self._stopping_condition.notify_fitness_evaluations(evaluations)

    def search_must_stop(self) -> bool:  # noqa: D102
        return self._stopping_condition.search_must_stop()

    def progress(self) -> float:  # noqa: D102
        return self._stopping_condition.progress()

    def __str__(self):
        return (
            f"TestCaseOrderingProblem({self._algorithm.value}, {self._direction.value}, "
            f"{self._stopping_condition})"
        )

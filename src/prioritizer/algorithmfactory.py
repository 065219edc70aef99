#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides a factory for the search algorithms."""

from __future__ import annotations

import logging

from typing import TYPE_CHECKING
from typing import ClassVar

import prioritizer.configuration as config
import prioritizer.metaheuristics.searchobserver as so

from prioritizer.metaheuristics.algorithms.randomsearchalgorithm import RandomSearchAlgorithm
from prioritizer.metaheuristics.algorithms.randomwalkalgorithm import RandomWalkAlgorithm
from prioritizer.metaheuristics.algorithms.simulatedannealingalgorithm import (
    SimulatedAnnealingAlgorithm,
)
from prioritizer.metaheuristics.stoppingcondition import MaxFitnessEvaluationsStoppingCondition
from prioritizer.metaheuristics.stoppingcondition import MaxSearchTimeStoppingCondition
from prioritizer.metaheuristics.stoppingcondition import OneOfStoppingCondition
from prioritizer.metaheuristics.stoppingcondition import StoppingCondition
from prioritizer.metaheuristics.stoppingcondition import parse_search_time
from prioritizer.prioritization.testcaseordering import DEFAULT_MAX_FITNESS_EVALUATIONS
from prioritizer.prioritization.testcaseordering import TestCaseOrderingProblem
from prioritizer.utils.exceptions import InvalidArgumentError


if TYPE_CHECKING:
    from prioritizer.metaheuristics.algorithms.searchalgorithm import SearchAlgorithm
    from prioritizer.prioritization.coveragematrix import CoverageMatrix
    from prioritizer.prioritization.testcaseordering import TestCaseOrdering
    from prioritizer.utils.randomness import Random


class SearchAlgorithmFactory:
    """Builds search algorithms for the test-case prioritization problem.

    The stopping budgets and algorithm parameters are taken from the configuration.
    All algorithms built by one factory share its source of randomness.
    """

    _logger = logging.getLogger(__name__)

    _strategies: ClassVar[dict[config.Algorithm, type[SearchAlgorithm]]] = {
        config.Algorithm.RANDOM_SEARCH: RandomSearchAlgorithm,
        config.Algorithm.RANDOM_WALK: RandomWalkAlgorithm,
        config.Algorithm.SIMULATED_ANNEALING: SimulatedAnnealingAlgorithm,
    }

    def __init__(self, coverage_matrix: CoverageMatrix, rng: Random):
        """Initializes the factory.

        Args:
            coverage_matrix: The coverage matrix to prioritize the test cases of
            rng: The source of randomness for all built algorithms
        """
        self._coverage_matrix = coverage_matrix
        self._rng = rng

    @classmethod
    def resolve_algorithm(cls, algorithm: config.Algorithm | str) -> config.Algorithm:
        """Maps an algorithm tag to a supported algorithm.

        Args:
            algorithm: The algorithm or its name

        Returns:
            The algorithm

        Raises:
            InvalidArgumentError: If no algorithm is available for the given tag
        """
        try:
            resolved = config.Algorithm(algorithm)
        except ValueError as error:
            raise InvalidArgumentError(
                f"No suitable search algorithm found for {algorithm}"
            ) from error
        if resolved not in cls._strategies:
            raise InvalidArgumentError(f"No suitable search algorithm found for {algorithm}")
        return resolved

    def get_stopping_condition(self) -> StoppingCondition:
        """Instantiates the stopping condition depending on the configuration settings.

        A maximum of -1 fitness evaluations means that no evaluation budget is set.

        Returns:
            A stopping condition

        Raises:
            InvalidArgumentError: If a budget is negative or malformed
        """
        stopping = config.configuration.stopping
        if stopping.maximum_fitness_evaluations < -1:
            raise InvalidArgumentError(
                "Negative number of fitness evaluations: "
                f"{stopping.maximum_fitness_evaluations}"
            )
        conditions: list[StoppingCondition] = []
        if (max_evaluations := stopping.maximum_fitness_evaluations) >= 0:
            conditions.append(MaxFitnessEvaluationsStoppingCondition(max_evaluations))
        if search_time := stopping.maximum_search_time.strip():
            conditions.append(MaxSearchTimeStoppingCondition(parse_search_time(search_time)))
        if len(conditions) == 0:
            self._logger.info("No stopping condition configured!")
            self._logger.info(
                "Using fallback budget of %i fitness evaluations",
                DEFAULT_MAX_FITNESS_EVALUATIONS,
            )
            return MaxFitnessEvaluationsStoppingCondition(DEFAULT_MAX_FITNESS_EVALUATIONS)
        if len(conditions) == 1:
            return conditions[0]
        return OneOfStoppingCondition(*conditions)

    def get_problem(self, algorithm: config.Algorithm) -> TestCaseOrderingProblem:
        """Sets up the prioritization problem for the given algorithm.

        Args:
            algorithm: The algorithm that will search the problem

        Returns:
            The problem with a fresh stopping condition
        """
        return TestCaseOrderingProblem(
            self._coverage_matrix, algorithm, self._rng, self.get_stopping_condition()
        )

    def get_search_algorithm(
        self, algorithm: config.Algorithm | str
    ) -> SearchAlgorithm[TestCaseOrdering]:
        """Initialises and sets up the search algorithm to use.

        Args:
            algorithm: The algorithm to build

        Returns:
            A fully configured search algorithm

        Raises:
            InvalidArgumentError: If no algorithm is available for the given tag
        """
        algorithm = self.resolve_algorithm(algorithm)
        problem = self.get_problem(algorithm)
        strategy: SearchAlgorithm[TestCaseOrdering]
        if algorithm is config.Algorithm.SIMULATED_ANNEALING:
            annealing = config.configuration.annealing
            strategy = SimulatedAnnealingAlgorithm(
                problem,
                problem,
                problem,
                max_step=annealing.max_step,
                acceptance_threshold=annealing.acceptance_threshold,
                minimum_temperature=annealing.minimum_temperature,
            )
        else:
            strategy = self._strategies[algorithm](problem, problem, problem)
        strategy.add_search_observer(so.LogSearchObserver())
        self._logger.info("Chosen search algorithm: %s", algorithm.full_name)
        self._logger.info("Using stopping condition: %s", problem.delegate)
        return strategy

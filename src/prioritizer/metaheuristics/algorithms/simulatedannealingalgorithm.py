#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides a Simulated Annealing search with a linear cooling schedule."""

from __future__ import annotations

import logging
import math

from typing import TYPE_CHECKING

from prioritizer.metaheuristics.algorithms.searchalgorithm import C
from prioritizer.metaheuristics.algorithms.searchalgorithm import SearchAlgorithm
from prioritizer.metaheuristics.fitnessfunction import FitnessDirection
from prioritizer.utils.exceptions import InvalidArgumentError


if TYPE_CHECKING:
    from prioritizer.metaheuristics.configurations import ConfigurationGenerator
    from prioritizer.metaheuristics.fitnessfunction import FitnessFunction
    from prioritizer.metaheuristics.stoppingcondition import StoppingCondition

DEFAULT_MAX_STEP = 500
DEFAULT_ACCEPTANCE_THRESHOLD = 0.2
DEFAULT_MINIMUM_TEMPERATURE = 0.01


class SimulatedAnnealingAlgorithm(SearchAlgorithm[C]):
    """Simulated Annealing.

    Starting from a random configuration, the algorithm draws one neighbour per step.
    The neighbour becomes the current configuration if its acceptance probability
    exceeds a fixed threshold.  The temperature decreases linearly with the number of
    steps, with a floor that avoids a division by zero.  The search continues while
    both the stopping condition and the step cap allow it.
    """

    _logger = logging.getLogger(__name__)

    def __init__(  # noqa: PLR0917
        self,
        generator: ConfigurationGenerator[C],
        fitness_function: FitnessFunction[C],
        stopping_condition: StoppingCondition,
        max_step: int = DEFAULT_MAX_STEP,
        acceptance_threshold: float = DEFAULT_ACCEPTANCE_THRESHOLD,
        minimum_temperature: float = DEFAULT_MINIMUM_TEMPERATURE,
    ) -> None:
        """Initializes the algorithm.

        Args:
            generator: Generator for random configurations
            fitness_function: Function with which to compute the fitness
            stopping_condition: The stopping condition to use
            max_step: The number of steps after which the cooling schedule ends
            acceptance_threshold: A neighbour is accepted if its acceptance
                probability exceeds this value
            minimum_temperature: The lowest temperature of the cooling schedule

        Raises:
            InvalidArgumentError: If one of the parameters is out of range
        """
        super().__init__(generator, fitness_function, stopping_condition)
        if max_step <= 0:
            raise InvalidArgumentError(f"Maximum step must be positive: {max_step}")
        if not 0.0 <= acceptance_threshold <= 1.0:
            raise InvalidArgumentError(
                f"Acceptance threshold must be in [0, 1]: {acceptance_threshold}"
            )
        if not 0.0 < minimum_temperature <= 1.0:
            raise InvalidArgumentError(
                f"Minimum temperature must be in (0, 1]: {minimum_temperature}"
            )
        self._max_step = max_step
        self._acceptance_threshold = acceptance_threshold
        self._minimum_temperature = minimum_temperature

    @property
    def max_step(self) -> int:
        """Provides the step cap of the cooling schedule.

        Returns:
            The maximum number of steps
        """
        return self._max_step

    @property
    def acceptance_threshold(self) -> float:
        """Provides the threshold a neighbour's acceptance probability has to exceed.

        Returns:
            The acceptance threshold
        """
        return self._acceptance_threshold

    def find_solution(self) -> C:  # noqa: D102
        self.before_search_start()
        current = self.generate()
        best = current
        self.before_first_search_iteration(best)

        step = 1
        while self.search_can_continue() and step < self._max_step:
            temperature = self.temperature(step / self._max_step)
            neighbour = self.step(current)
            step += 1
            if (
                self.acceptance_probability(current.fitness, neighbour.fitness, temperature)
                > self._acceptance_threshold
            ):
                current = neighbour
                if self.is_better(current, best):
                    best = current
            self.after_search_iteration(best)

        self.after_search_finish()
        return best.configuration

    def temperature(self, fraction: float) -> float:
        """Computes the temperature of the linear cooling schedule.

        Args:
            fraction: The fraction of the schedule that has passed

        Returns:
            ``1 - fraction``, clamped to ``[minimum_temperature, 1]``
        """
        return max(self._minimum_temperature, min(1.0, 1.0 - fraction))

    def acceptance_probability(
        self, fitness: float, neighbour_fitness: float, temperature: float
    ) -> float:
        """Computes the probability of moving to a neighbour.

        Args:
            fitness: The fitness of the current configuration
            neighbour_fitness: The fitness of the neighbour
            temperature: The current temperature

        Returns:
            One if the neighbour is strictly better, otherwise the Boltzmann factor of
            the fitness deterioration.
        """
        direction = self._fitness_function.direction
        if direction.is_better(neighbour_fitness, fitness):
            return 1.0
        if direction is FitnessDirection.MINIMIZING:
            deterioration = neighbour_fitness - fitness
        else:
            deterioration = fitness - neighbour_fitness
        return math.exp(-deterioration / temperature)

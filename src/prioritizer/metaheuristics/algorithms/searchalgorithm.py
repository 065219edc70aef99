#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides an abstract base class for a search algorithm."""

from __future__ import annotations

import dataclasses
import logging
import time

from abc import ABC
from abc import abstractmethod
from typing import TYPE_CHECKING
from typing import Generic
from typing import TypeVar

from prioritizer.metaheuristics.configurations import Configuration
from prioritizer.utils.exceptions import MissingCollaboratorError


if TYPE_CHECKING:
    import prioritizer.metaheuristics.searchobserver as so

    from prioritizer.metaheuristics.configurations import ConfigurationGenerator
    from prioritizer.metaheuristics.fitnessfunction import FitnessFunction
    from prioritizer.metaheuristics.stoppingcondition import StoppingCondition

C = TypeVar("C", bound=Configuration)


@dataclasses.dataclass(frozen=True)
class ScoredConfiguration(Generic[C]):
    """A configuration along with its fitness value."""

    configuration: C
    fitness: float


class SearchAlgorithm(ABC, Generic[C]):
    """Provides an abstract base class for a search algorithm.

    A search algorithm orchestrates a configuration generator, a fitness function, and
    a stopping condition.  Every call of :meth:`find_solution` performs a new search
    that is independent of previous ones.
    """

    _logger = logging.getLogger(__name__)

    def __init__(
        self,
        generator: ConfigurationGenerator[C],
        fitness_function: FitnessFunction[C],
        stopping_condition: StoppingCondition,
    ) -> None:
        """Initializes the search algorithm.

        Args:
            generator: Generator for random configurations
            fitness_function: Function with which to compute the fitness
            stopping_condition: The stopping condition to use

        Raises:
            MissingCollaboratorError: If one of the collaborators is None
        """
        if generator is None:
            raise MissingCollaboratorError("configuration generator")
        if fitness_function is None:
            raise MissingCollaboratorError("fitness function")
        if stopping_condition is None:
            raise MissingCollaboratorError("stopping condition")
        self._generator = generator
        self._fitness_function = fitness_function
        self._stopping_condition = stopping_condition
        self._search_observers: list[so.SearchObserver] = []

    @property
    def generator(self) -> ConfigurationGenerator[C]:
        """Provides the configuration generator.

        Returns:
            The configuration generator
        """
        return self._generator

    @property
    def fitness_function(self) -> FitnessFunction[C]:
        """Provides the fitness function.

        Returns:
            The fitness function
        """
        return self._fitness_function

    @property
    def stopping_condition(self) -> StoppingCondition:
        """Provides the used stopping condition.

        Returns:
            The used stopping condition
        """
        return self._stopping_condition

    @abstractmethod
    def find_solution(self) -> C:
        """Runs one independent, budget-bounded search.

        Returns:
            The best configuration found  # noqa: DAR202
        """

    def add_search_observer(self, observer: so.SearchObserver) -> None:
        """Add the given observer.

        Args:
            observer: The observer to add.
        """
        self._search_observers.append(observer)

    def before_search_start(self) -> None:
        """Has to be called when the search starts.

        Resets the stopping condition before notifying the observers.
        """
        self._stopping_condition.notify_search_started()
        start = time.time_ns()
        for obs in self._search_observers:
            obs.before_search_start(start)

    def before_first_search_iteration(self, initial: ScoredConfiguration[C]) -> None:
        """Has to be called once before the very first iteration of the search.

        Args:
            initial: The initially generated configuration.
        """
        for obs in self._search_observers:
            obs.before_first_search_iteration(initial)

    def after_search_iteration(self, best: ScoredConfiguration[C]) -> None:
        """Has to be called after every iteration of the search algorithm.

        Args:
            best: The currently best configuration.
        """
        for obs in self._search_observers:
            obs.after_search_iteration(best)

    def after_search_finish(self) -> None:
        """Has to be called when the search has finished."""
        for obs in self._search_observers:
            obs.after_search_finish()

    def search_can_continue(self) -> bool:
        """Checks if there is search budget left.

        Returns:
            Whether the search can continue
        """
        return self._stopping_condition.search_can_continue()

    def search_must_stop(self) -> bool:
        """Checks if the search budget is exhausted.

        Returns:
            Whether the search must stop
        """
        return self._stopping_condition.search_must_stop()

    def progress(self) -> float:
        """Provides the progress of the search.

        Returns:
            A value in [0,1].
        """
        return self._stopping_condition.progress()

    def evaluate(self, configuration: C) -> ScoredConfiguration[C]:
        """Computes the fitness of a configuration and accounts for it in the budget.

        Every call is exactly one fitness evaluation.

        Args:
            configuration: The configuration to evaluate

        Returns:
            The configuration along with its fitness
        """
        self._stopping_condition.notify_fitness_evaluation()
        return ScoredConfiguration(
            configuration, configuration.get_fitness_by(self._fitness_function)
        )

    def generate(self) -> ScoredConfiguration[C]:
        """Generates and evaluates a random configuration.

        Returns:
            The random configuration along with its fitness
        """
        return self.evaluate(self._generator.get())

    def step(self, current: ScoredConfiguration[C]) -> ScoredConfiguration[C]:
        """Draws and evaluates a random neighbour of the given configuration.

        Args:
            current: The configuration to start from

        Returns:
            A random neighbour along with its fitness
        """
        return self.evaluate(current.configuration.transform())

    def is_better(self, candidate: ScoredConfiguration[C], other: ScoredConfiguration[C]) -> bool:
        """Tells whether a candidate is strictly better than another configuration.

        Args:
            candidate: The candidate
            other: The configuration to compare against

        Returns:
            Whether the candidate's fitness is strictly better
        """
        return self._fitness_function.direction.is_better(candidate.fitness, other.fitness)

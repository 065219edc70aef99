#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides an interface for fitness functions and their comparison operators."""

from __future__ import annotations

import enum

from abc import ABC
from abc import abstractmethod
from typing import TYPE_CHECKING
from typing import Generic
from typing import TypeVar


if TYPE_CHECKING:
    from collections.abc import Callable


C = TypeVar("C")


@enum.unique
class FitnessDirection(str, enum.Enum):
    """Tells whether lower or higher fitness values characterise better solutions."""

    MINIMIZING = "MINIMIZING"
    """Lower fitness values are better."""

    MAXIMIZING = "MAXIMIZING"
    """Higher fitness values are better."""

    def is_better(self, fitness: float, other: float) -> bool:
        """Tells whether a fitness value is strictly better than another one.

        Args:
            fitness: The fitness value to check
            other: The fitness value to compare against

        Returns:
            Whether ``fitness`` is strictly better than ``other``
        """
        if self is FitnessDirection.MINIMIZING:
            return fitness < other
        return fitness > other

    def compare(self, fitness: float, other: float) -> int:
        """Compares two fitness values, taking the direction into account.

        Args:
            fitness: A fitness value
            other: Another fitness value

        Returns:
            A positive integer if ``fitness`` is better than ``other``, zero if both
            are equally good, and a negative integer otherwise.
        """
        if self.is_better(fitness, other):
            return 1
        if self.is_better(other, fitness):
            return -1
        return 0


class FitnessFunction(ABC, Generic[C]):
    """Maps a solution encoding to a numeric value representing its goodness.

    Implementations must always return finite, non-negative values.  Equal solutions
    should be rated with equal values.
    """

    @abstractmethod
    def compute_fitness(self, individual: C) -> float:
        """Calculate the fitness value.

        Args:
            individual: the solution to compute the fitness for.

        Returns:
            the new fitness  # noqa: DAR202
        """

    @property
    @abstractmethod
    def direction(self) -> FitnessDirection:
        """Provides the optimisation direction of this function.

        Returns:
            Whether this function is minimising or maximising  # noqa: DAR202
        """

    def is_minimizing(self) -> bool:
        """Do we need to minimise this function?

        Returns:
            Whether this is a minimising function
        """
        return self.direction is FitnessDirection.MINIMIZING

    def is_maximisation_function(self) -> bool:
        """Do we need to maximise this function?

        Returns:
            Whether this is a maximising function
        """
        return self.direction is FitnessDirection.MAXIMIZING

    def compare(self, individual: C, other: C) -> int:
        """Compares two solutions by their fitness.

        Without caching in the solutions this entails two fitness evaluations.

        Args:
            individual: A solution
            other: Another solution

        Returns:
            A positive integer if ``individual`` is better than ``other``, zero if both
            are equally good, and a negative integer otherwise.
        """
        return self.direction.compare(self.compute_fitness(individual), self.compute_fitness(other))

    def best(self, individual: C, other: C) -> C:
        """Determines the better of two solutions.

        Args:
            individual: A solution
            other: Another solution

        Returns:
            The better solution, ``individual`` if both are equally good
        """
        return other if self.compare(other, individual) > 0 else individual

    def and_then(self, after: Callable[[float], float]) -> FitnessFunction[C]:
        """Composes this function with a function applied to its results.

        The composed function keeps the direction of this function.

        Args:
            after: The function applied to every fitness value

        Returns:
            The composed fitness function
        """
        return _ComposedFitnessFunction(self, after)


class _ComposedFitnessFunction(FitnessFunction[C]):
    def __init__(self, before: FitnessFunction[C], after: Callable[[float], float]) -> None:
        self._before = before
        self._after = after

    def compute_fitness(self, individual: C) -> float:  # noqa: D102
        return self._after(self._before.compute_fitness(individual))

    @property
    def direction(self) -> FitnessDirection:  # noqa: D102
        return self._before.direction

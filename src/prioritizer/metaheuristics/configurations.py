#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides the abstractions of a solution encoding and its neighbourhood.

A *configuration* (the term stems from Simulated Annealing) encodes a candidate
solution of the problem at hand.  An *elementary transformation* derives one random
neighbour of a configuration; together with a fitness function it defines the fitness
landscape the search algorithms traverse.

All roles are generic in the configuration type ``C``, which is bound to
:class:`Configuration` itself.  A type checker thereby ensures that a configuration
of type ``C`` can only be transformed into a configuration of the same type ``C``.
"""

from __future__ import annotations

from abc import ABC
from abc import abstractmethod
from typing import TYPE_CHECKING
from typing import Generic
from typing import TypeVar


if TYPE_CHECKING:
    from prioritizer.metaheuristics.fitnessfunction import FitnessFunction


C = TypeVar("C", bound="Configuration")


class ElementaryTransformation(ABC, Generic[C]):
    """Derives a neighbour of a given configuration.

    Implementations must never violate the following contract: if the given
    configuration is a valid admissible solution, then the returned configuration
    must be a valid admissible solution as well.

    Furthermore, a transformation should

    * not have fixed points, i.e., no configuration is its own neighbour,
    * allow reaching every admissible configuration in a finite number of steps,
    * choose a random neighbour among all admissible ones on every invocation,
    * not have side effects on the given configuration.
    """

    @abstractmethod
    def transform(self, configuration: C) -> C:
        """Performs an elementary transformation of the given configuration.

        Args:
            configuration: the configuration to transform

        Returns:
            A new configuration derived from the given one  # noqa: DAR202
        """


class IdentityTransformation(ElementaryTransformation[C]):
    """The identity transformation, returns a copy of the given configuration.

    Mainly useful in tests, when an algorithm is exercised independently of a
    particular neighbourhood definition.
    """

    def transform(self, configuration: C) -> C:  # noqa: D102
        return configuration.copy()

    def __str__(self) -> str:
        return "Identity"


class Configuration(ABC, Generic[C]):
    """An abstract base class for solution encodings."""

    def __init__(self, elementary_transformation: ElementaryTransformation[C] | None = None):
        """Initializes the configuration.

        Args:
            elementary_transformation: The transformation that derives neighbours of
                this configuration; the identity transformation if omitted.
        """
        if elementary_transformation is None:
            elementary_transformation = IdentityTransformation()
        self._elementary_transformation = elementary_transformation

    @property
    def elementary_transformation(self) -> ElementaryTransformation[C]:
        """Provides the elementary transformation used by this configuration.

        Returns:
            The elementary transformation
        """
        return self._elementary_transformation

    def transform(self: C) -> C:
        """Performs an elementary transformation of this configuration.

        Returns:
            The transformed configuration
        """
        return self._elementary_transformation.transform(self)

    @abstractmethod
    def copy(self) -> C:
        """Create a copy of this configuration.

        Returns:
            The copy  # noqa: DAR202
        """

    @abstractmethod
    def degrees_of_freedom(self) -> int:
        """Provides the number of variables that can be freely changed in the encoding.

        Returns:
            The non-negative number of degrees of freedom  # noqa: DAR202
        """

    def get_fitness_by(self: C, fitness_function: FitnessFunction[C]) -> float:
        """Computes the fitness of this configuration by the given function.

        Subclasses may override this to cache fitness values, as long as
        ``c.get_fitness_by(ff) == ff.compute_fitness(c)`` holds.

        Args:
            fitness_function: The function with which to compute the fitness

        Returns:
            The fitness of this configuration
        """
        return fitness_function.compute_fitness(self)

    @abstractmethod
    def __eq__(self, other):
        pass

    @abstractmethod
    def __hash__(self):
        pass


class ConfigurationGenerator(ABC, Generic[C]):
    """Generates random configurations."""

    @abstractmethod
    def get(self) -> C:
        """Creates a random configuration.

        The configuration must be a valid and admissible solution of the problem.

        Returns:
            A random configuration  # noqa: DAR202
        """

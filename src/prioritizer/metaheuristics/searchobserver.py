#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides an observer to observe the search."""

from __future__ import annotations

import logging

from abc import ABC
from abc import abstractmethod
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from prioritizer.metaheuristics.algorithms.searchalgorithm import ScoredConfiguration


class SearchObserver(ABC):
    """Observes the execution of a search algorithm."""

    @abstractmethod
    def before_search_start(self, start_time_ns: int) -> None:
        """Called when the search starts.

        Args:
            start_time_ns: time since epoch in ns when the search started.
        """

    @abstractmethod
    def before_first_search_iteration(self, initial: ScoredConfiguration) -> None:
        """Called once before the very first iteration of the search algorithm.

        Args:
            initial: The initially generated configuration and its fitness.
        """

    @abstractmethod
    def after_search_iteration(self, best: ScoredConfiguration) -> None:
        """Called after every iteration of the search algorithm.

        Args:
            best: The currently best configuration and its fitness.
        """

    @abstractmethod
    def after_search_finish(self) -> None:
        """Called when the search has finished."""


class LogSearchObserver(SearchObserver):
    """Observes the search and creates some log output."""

    _logger = logging.getLogger(__name__)

    def __init__(self):  # noqa: D107
        self.iteration = 0

    def before_search_start(self, start_time_ns: int) -> None:  # noqa: D102
        self.iteration = 0

    def before_first_search_iteration(  # noqa: D102
        self, initial: ScoredConfiguration
    ) -> None:
        self._logger.debug("Initial configuration, Fitness: %5f", initial.fitness)

    def after_search_iteration(  # noqa: D102
        self, best: ScoredConfiguration
    ) -> None:
        self.iteration += 1
        self._logger.debug("Iteration: %7i, Best fitness: %5f", self.iteration, best.fitness)

    def after_search_finish(self) -> None:  # noqa: D102
        self._logger.debug("Search finished after %i iterations", self.iteration)

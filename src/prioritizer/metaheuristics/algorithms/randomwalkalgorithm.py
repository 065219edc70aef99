#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides a random walk through the search space."""

from __future__ import annotations

import logging

from typing import TYPE_CHECKING

from prioritizer.metaheuristics.algorithms.searchalgorithm import C
from prioritizer.metaheuristics.algorithms.searchalgorithm import SearchAlgorithm


if TYPE_CHECKING:
    from collections.abc import Iterator

    from prioritizer.metaheuristics.algorithms.searchalgorithm import ScoredConfiguration


class RandomWalkAlgorithm(SearchAlgorithm[C]):
    """Walks through the search space by consecutive elementary transformations.

    The walk starts at a random configuration and repeatedly steps to a random
    neighbour of the current configuration until the budget is exhausted.  The best
    configuration encountered on the way is the solution; among equally good
    configurations the most recently visited one wins.
    """

    _logger = logging.getLogger(__name__)

    def find_solution(self) -> C:  # noqa: D102
        best: ScoredConfiguration[C] | None = None
        for current in self._walk():
            if best is None:
                self.before_first_search_iteration(current)
                best = current
            else:
                if not self.is_better(best, current):
                    best = current
                self.after_search_iteration(best)
        self.after_search_finish()
        assert best is not None
        return best.configuration

    def fitness_values(self) -> list[float]:
        """Performs a random walk and collects the fitness of every visited configuration.

        Returns:
            The fitness values in the order of the walk
        """
        values = [current.fitness for current in self._walk()]
        self.after_search_finish()
        return values

    def _walk(self) -> Iterator[ScoredConfiguration[C]]:
        self.before_search_start()
        current = self.generate()
        yield current
        while self.search_can_continue():
            current = self.step(current)
            yield current

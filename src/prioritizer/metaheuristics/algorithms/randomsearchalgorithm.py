#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides a random search that samples independent random configurations."""

from __future__ import annotations

import logging

from prioritizer.metaheuristics.algorithms.searchalgorithm import C
from prioritizer.metaheuristics.algorithms.searchalgorithm import SearchAlgorithm


class RandomSearchAlgorithm(SearchAlgorithm[C]):
    """Repeatedly generates fresh random configurations and keeps the best one.

    Candidates are independent of each other; a candidate replaces the incumbent only
    if it is strictly better.
    """

    _logger = logging.getLogger(__name__)

    def find_solution(self) -> C:  # noqa: D102
        self.before_search_start()
        best = self.generate()
        self.before_first_search_iteration(best)
        while self.search_can_continue():
            candidate = self.generate()
            if self.is_better(candidate, best):
                best = candidate
            self.after_search_iteration(best)
        self.after_search_finish()
        return best.configuration

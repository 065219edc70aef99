#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides a source of randomness that can be seeded and queried for its seed.

Components that need random numbers receive a :class:`Random` through their
constructor.
"""

from __future__ import annotations

import random
import time


class Random(random.Random):  # noqa: S311
    """Override Random to allow querying for the seed value.

    It generates a seed if none was given from `time.time_ns()`.  This is NOT
    cryptographically safe, and this random-number generator should not be used for
    anything related to cryptography.  For our case, however, it is good enough to
    use the current time stamp in nano seconds as seed.
    """

    def __init__(self, x=None) -> None:  # noqa: D107
        self._current_seed: int | None = None
        super().__init__(x)

    def seed(self, a=None, version: int = 2) -> None:  # noqa: D102
        if a is None:
            a = time.time_ns()

        self._current_seed = a
        super().seed(a, version)

    def get_seed(self) -> int:
        """Provides the used seed for random-number generation.

        Returns:
            Provides the used seed
        """
        assert self._current_seed is not None
        return self._current_seed

    def next_permutation(self, length: int) -> list[int]:
        """Draw a uniformly distributed permutation of ``range(length)``.

        The permutation is built by sampling without replacement.

        Args:
            length: The number of elements, must be non-negative

        Returns:
            A list containing every integer of ``[0, length)`` exactly once
        """
        return self.sample(range(length), length)

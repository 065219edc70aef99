#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides an interface for a stopping condition of a search algorithm."""

from __future__ import annotations

import time

from abc import ABC
from abc import abstractmethod
from typing import TYPE_CHECKING

from prioritizer.utils.exceptions import InvalidArgumentError


if TYPE_CHECKING:
    from collections.abc import Callable

_NANOS_PER_SECOND = 1_000_000_000


class StoppingCondition(ABC):
    """Tracks the consumed search budget and tells whether a search must halt.

    A stopping condition is idle until :meth:`notify_search_started` is called, which
    also resets its budget counters.  The search algorithm that owns the condition
    notifies it about every fitness evaluation and polls :meth:`search_must_stop`.
    """

    @abstractmethod
    def notify_search_started(self) -> None:
        """Notifies the condition that the search has started."""

    @abstractmethod
    def notify_fitness_evaluations(self, evaluations: int) -> None:
        """Notifies the condition that the given number of fitness evaluations took place.

        Args:
            evaluations: The number of evaluations, must not be negative

        Raises:
            InvalidArgumentError: If the number of evaluations is negative
        """

    def notify_fitness_evaluation(self) -> None:
        """Notifies the condition that one fitness evaluation took place."""
        self.notify_fitness_evaluations(1)

    @abstractmethod
    def search_must_stop(self) -> bool:
        """Tells whether the search budget is exhausted.

        Returns:
            True if the search must stop, False otherwise  # noqa: DAR202
        """

    def search_can_continue(self) -> bool:
        """Tells whether the search may continue, the opposite of `search_must_stop`.

        Returns:
            True if the search can continue, False otherwise
        """
        return not self.search_must_stop()

    @abstractmethod
    def progress(self) -> float:
        """Provides the fraction of the budget consumed so far.

        Returns:
            A value in [0, 1]  # noqa: DAR202
        """

    @abstractmethod
    def __str__(self):
        pass


def _check_evaluations(evaluations: int) -> None:
    if evaluations < 0:
        raise InvalidArgumentError(f"Negative number of evaluations: {evaluations}")


class MaxFitnessEvaluationsStoppingCondition(StoppingCondition):
    """A stopping condition that limits the number of fitness evaluations."""

    def __init__(self, max_fitness_evaluations: int):
        """Create new MaxFitnessEvaluationsStoppingCondition.

        Args:
            max_fitness_evaluations: the maximum number of allowed fitness evaluations.

        Raises:
            InvalidArgumentError: If the budget is negative
        """
        if max_fitness_evaluations < 0:
            raise InvalidArgumentError(
                f"Negative number of fitness evaluations: {max_fitness_evaluations}"
            )
        self._max_fitness_evaluations = max_fitness_evaluations
        self._num_fitness_evaluations = 0

    def current_value(self) -> int:
        """Provide how many fitness evaluations were used.

        Returns:
            The number of consumed fitness evaluations
        """
        return self._num_fitness_evaluations

    def limit(self) -> int:
        """Get the maximum number of fitness evaluations.

        Returns:
            The limit
        """
        return self._max_fitness_evaluations

    def reset(self) -> None:
        """Reset the number of consumed fitness evaluations."""
        self._num_fitness_evaluations = 0

    def notify_search_started(self) -> None:  # noqa: D102
        self.reset()

    def notify_fitness_evaluations(self, evaluations: int) -> None:  # noqa: D102
        _check_evaluations(evaluations)
        self._num_fitness_evaluations += evaluations

    def search_must_stop(self) -> bool:  # noqa: D102
        return self._num_fitness_evaluations > self._max_fitness_evaluations

    def progress(self) -> float:  # noqa: D102
        if self._max_fitness_evaluations == 0:
            return 1.0 if self._num_fitness_evaluations > 0 else 0.0
        # An algorithm may use one evaluation more than allotted before it polls again.
        return min(self._num_fitness_evaluations / self._max_fitness_evaluations, 1.0)

    def __str__(self):
        return f"Fitness evaluations: {self.current_value()}/{self.limit()}"


class MaxSearchTimeStoppingCondition(StoppingCondition):
    """Stop search after a predefined amount of wall time."""

    def __init__(
        self,
        max_seconds: float,
        time_supplier: Callable[[], int] | None = None,
    ):
        """Create new MaxSearchTimeStoppingCondition.

        Args:
            max_seconds: the maximum time (in seconds) that can be used for the search.
            time_supplier: supplies the current time in nanoseconds, `time.time_ns`
                if omitted.

        Raises:
            InvalidArgumentError: If the budget is negative
        """
        if max_seconds < 0:
            raise InvalidArgumentError(f"Negative search time: {max_seconds}")
        self._max_nanos = int(max_seconds * _NANOS_PER_SECOND)
        self._time_supplier = time_supplier if time_supplier is not None else time.time_ns
        self._start_time: int | None = None

    @classmethod
    def seconds(cls, seconds: int) -> MaxSearchTimeStoppingCondition:
        """Create a condition with a budget of the given number of seconds.

        Args:
            seconds: the budget in seconds

        Returns:
            A new stopping condition
        """
        return cls(seconds)

    @classmethod
    def minutes(cls, minutes: int) -> MaxSearchTimeStoppingCondition:
        """Create a condition with a budget of the given number of minutes.

        Args:
            minutes: the budget in minutes

        Returns:
            A new stopping condition
        """
        return cls.seconds(minutes * 60)

    @classmethod
    def hours(cls, hours: int) -> MaxSearchTimeStoppingCondition:
        """Create a condition with a budget of the given number of hours.

        Args:
            hours: the budget in hours

        Returns:
            A new stopping condition
        """
        return cls.minutes(hours * 60)

    @classmethod
    def hms(cls, hours: int, minutes: int, seconds: int) -> MaxSearchTimeStoppingCondition:
        """Create a condition with a budget given in hours, minutes and seconds.

        Args:
            hours: the hours
            minutes: the minutes, in [0, 60)
            seconds: the seconds, in [0, 60)

        Returns:
            A new stopping condition

        Raises:
            InvalidArgumentError: If the arguments do not represent a valid time
        """
        if not (0 <= seconds < 60 and 0 <= minutes < 60 and hours >= 0):  # noqa: PLR2004
            raise InvalidArgumentError(f"Invalid time {hours}:{minutes}:{seconds}")
        return cls.hours(hours).plus(cls.minutes(minutes)).plus(cls.seconds(seconds))

    def plus(self, other: MaxSearchTimeStoppingCondition) -> MaxSearchTimeStoppingCondition:
        """Sums up the budgets of this and another condition.

        Args:
            other: the other condition

        Returns:
            A new condition using the sum of both budgets and this time supplier
        """
        return MaxSearchTimeStoppingCondition(
            (self._max_nanos + other._max_nanos) / _NANOS_PER_SECOND,  # noqa: SLF001
            self._time_supplier,
        )

    def current_value(self) -> int:
        """Provide the elapsed search time in seconds.

        Returns:
            The elapsed full seconds since the search started
        """
        return self._elapsed_nanos() // _NANOS_PER_SECOND

    def limit(self) -> int:
        """Get the search time budget in seconds.

        Returns:
            The budget in full seconds
        """
        return self._max_nanos // _NANOS_PER_SECOND

    def reset(self) -> None:
        """Restart measuring the search time."""
        self._start_time = self._time_supplier()

    def notify_search_started(self) -> None:  # noqa: D102
        self.reset()

    def notify_fitness_evaluations(self, evaluations: int) -> None:  # noqa: D102
        # Evaluations do not consume time budget, but the argument is still checked.
        _check_evaluations(evaluations)

    def search_must_stop(self) -> bool:  # noqa: D102
        return self._elapsed_nanos() > self._max_nanos

    def progress(self) -> float:  # noqa: D102
        elapsed = self._elapsed_nanos()
        if self._max_nanos == 0:
            return 1.0 if elapsed > 0 else 0.0
        return min(elapsed / self._max_nanos, 1.0)

    def _elapsed_nanos(self) -> int:
        if self._start_time is None:
            return 0
        return self._time_supplier() - self._start_time

    def __str__(self):
        return f"Used search time: {self.current_value()}/{self.limit()}"


class OneOfStoppingCondition(StoppingCondition):
    """The logical disjunction of stopping conditions.

    The search must stop as soon as one of the wrapped conditions says so.  Wrapped
    conditions are kept as given, nested disjunctions are not flattened.
    """

    def __init__(
        self,
        first: StoppingCondition,
        second: StoppingCondition,
        *others: StoppingCondition,
    ):
        """Create a new disjunction of at least two stopping conditions.

        Args:
            first: a condition
            second: another condition
            *others: the remaining conditions

        Raises:
            InvalidArgumentError: If one of the conditions is None
        """
        conditions = (first, second, *others)
        if any(condition is None for condition in conditions):
            raise InvalidArgumentError("Stopping conditions must not be None")
        self._conditions: tuple[StoppingCondition, ...] = conditions

    @property
    def conditions(self) -> tuple[StoppingCondition, ...]:
        """Provides the wrapped stopping conditions.

        Returns:
            The wrapped stopping conditions
        """
        return self._conditions

    def notify_search_started(self) -> None:  # noqa: D102
        for condition in self._conditions:
            condition.notify_search_started()

    def notify_fitness_evaluations(self, evaluations: int) -> None:  # noqa: D102
        _check_evaluations(evaluations)
        for condition in self._conditions:
            condition.notify_fitness_evaluations(evaluations)

    def search_must_stop(self) -> bool:  # noqa: D102
        return any(condition.search_must_stop() for condition in self._conditions)

    def progress(self) -> float:  # noqa: D102
        return max(condition.progress() for condition in self._conditions)

    def __str__(self):
        return f"OneOf({', '.join(str(condition) for condition in self._conditions)})"


def parse_search_time(value: str) -> int:
    """Parses a search time given in seconds or as ``HH:MM:SS``.

    Args:
        value: The textual representation of the time

    Returns:
        The time in seconds

    Raises:
        InvalidArgumentError: If the value is not a valid time
    """
    parts = value.strip().split(":")
    try:
        numbers = [int(part) for part in parts]
    except ValueError as error:
        raise InvalidArgumentError(f"Invalid time format: {value}") from error
    if len(numbers) == 1:
        if numbers[0] < 0:
            raise InvalidArgumentError(f"Negative search time: {value}")
        return numbers[0]
    if len(numbers) == 3:  # noqa: PLR2004
        hours, minutes, seconds = numbers
        return MaxSearchTimeStoppingCondition.hms(hours, minutes, seconds).limit()
    raise InvalidArgumentError(f"Invalid time format: {value}")

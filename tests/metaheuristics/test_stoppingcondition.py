#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
import hypothesis.strategies as st
import pytest

from hypothesis import given

from prioritizer.metaheuristics.stoppingcondition import MaxFitnessEvaluationsStoppingCondition
from prioritizer.metaheuristics.stoppingcondition import MaxSearchTimeStoppingCondition
from prioritizer.metaheuristics.stoppingcondition import OneOfStoppingCondition
from prioritizer.metaheuristics.stoppingcondition import parse_search_time
from prioritizer.utils.exceptions import InvalidArgumentError


NANOS = 1_000_000_000


class FakeClock:
    def __init__(self, now: int = 0):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += int(seconds * NANOS)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(5 * NANOS)


@pytest.fixture
def evaluations() -> MaxFitnessEvaluationsStoppingCondition:
    return MaxFitnessEvaluationsStoppingCondition(10)


def test_evaluations_limit(evaluations):
    assert evaluations.limit() == 10


def test_evaluations_negative_limit():
    with pytest.raises(InvalidArgumentError):
        MaxFitnessEvaluationsStoppingCondition(-1)


def test_evaluations_negative_notification(evaluations):
    with pytest.raises(InvalidArgumentError):
        evaluations.notify_fitness_evaluations(-1)


def test_evaluations_notify_search_started_resets(evaluations):
    evaluations.notify_fitness_evaluations(5)
    assert evaluations.current_value() == 5
    evaluations.notify_search_started()
    assert evaluations.current_value() == 0


@given(st.integers(min_value=0, max_value=200))
def test_evaluations_stop_after_limit_plus_one(limit):
    condition = MaxFitnessEvaluationsStoppingCondition(limit)
    condition.notify_search_started()
    for _ in range(limit):
        condition.notify_fitness_evaluation()
        assert condition.search_can_continue()
    condition.notify_fitness_evaluation()
    assert condition.search_must_stop()


def test_evaluations_progress_is_clamped(evaluations):
    evaluations.notify_search_started()
    evaluations.notify_fitness_evaluations(5)
    assert evaluations.progress() == pytest.approx(0.5)
    evaluations.notify_fitness_evaluations(6)
    assert evaluations.progress() == 1.0


def test_evaluations_progress_zero_budget():
    condition = MaxFitnessEvaluationsStoppingCondition(0)
    assert condition.progress() == 0.0
    condition.notify_fitness_evaluation()
    assert condition.progress() == 1.0


def test_evaluations_str(evaluations):
    evaluations.notify_fitness_evaluations(3)
    assert str(evaluations) == "Fitness evaluations: 3/10"


def test_time_idle_does_not_stop(clock):
    condition = MaxSearchTimeStoppingCondition(1, clock)
    clock.advance(10)
    assert condition.search_can_continue()
    assert condition.progress() == 0.0


def test_time_current_value(clock):
    condition = MaxSearchTimeStoppingCondition(600, clock)
    condition.notify_search_started()
    clock.advance(1)
    assert condition.current_value() == 1


def test_time_stops_after_budget(clock):
    condition = MaxSearchTimeStoppingCondition(2, clock)
    condition.notify_search_started()
    clock.advance(2)
    assert condition.search_can_continue()
    assert condition.progress() == 1.0
    clock.advance(0.5)
    assert condition.search_must_stop()
    assert condition.progress() == 1.0


def test_time_reset_on_search_start(clock):
    condition = MaxSearchTimeStoppingCondition(2, clock)
    condition.notify_search_started()
    clock.advance(3)
    assert condition.search_must_stop()
    condition.notify_search_started()
    assert condition.search_can_continue()


def test_time_evaluations_do_not_count(clock):
    condition = MaxSearchTimeStoppingCondition(2, clock)
    condition.notify_search_started()
    condition.notify_fitness_evaluations(1000)
    assert condition.search_can_continue()


def test_time_negative_notification(clock):
    condition = MaxSearchTimeStoppingCondition(2, clock)
    with pytest.raises(InvalidArgumentError):
        condition.notify_fitness_evaluations(-3)


def test_time_negative_budget():
    with pytest.raises(InvalidArgumentError):
        MaxSearchTimeStoppingCondition(-1)


def test_time_limit():
    assert MaxSearchTimeStoppingCondition(600).limit() == 600


def test_time_factories():
    assert MaxSearchTimeStoppingCondition.seconds(30).limit() == 30
    assert MaxSearchTimeStoppingCondition.minutes(2).limit() == 120
    assert MaxSearchTimeStoppingCondition.hours(1).limit() == 3600
    assert MaxSearchTimeStoppingCondition.hms(1, 2, 3).limit() == 3723


def test_time_plus(clock):
    condition = MaxSearchTimeStoppingCondition(10, clock).plus(
        MaxSearchTimeStoppingCondition(5)
    )
    assert condition.limit() == 15
    condition.notify_search_started()
    clock.advance(16)
    assert condition.search_must_stop()


@pytest.mark.parametrize(
    "hours, minutes, seconds",
    [
        pytest.param(-1, 0, 0),
        pytest.param(0, 60, 0),
        pytest.param(0, 0, 60),
        pytest.param(0, -1, 0),
    ],
)
def test_time_hms_invalid(hours, minutes, seconds):
    with pytest.raises(InvalidArgumentError):
        MaxSearchTimeStoppingCondition.hms(hours, minutes, seconds)


def test_time_str(clock):
    condition = MaxSearchTimeStoppingCondition(60, clock)
    assert str(condition) == "Used search time: 0/60"


def test_one_of_requires_conditions():
    with pytest.raises(InvalidArgumentError):
        OneOfStoppingCondition(MaxFitnessEvaluationsStoppingCondition(1), None)


def test_one_of_fans_out_notifications():
    first = MaxFitnessEvaluationsStoppingCondition(3)
    second = MaxFitnessEvaluationsStoppingCondition(5)
    condition = OneOfStoppingCondition(first, second)
    condition.notify_search_started()
    condition.notify_fitness_evaluations(2)
    assert first.current_value() == 2
    assert second.current_value() == 2


def test_one_of_stops_with_first_child():
    first = MaxFitnessEvaluationsStoppingCondition(3)
    second = MaxFitnessEvaluationsStoppingCondition(5)
    condition = OneOfStoppingCondition(first, second)
    condition.notify_search_started()
    condition.notify_fitness_evaluations(3)
    assert condition.search_can_continue()
    condition.notify_fitness_evaluation()
    assert condition.search_must_stop()
    assert first.search_must_stop()
    assert not second.search_must_stop()


def test_one_of_progress_is_maximum(clock):
    evaluations = MaxFitnessEvaluationsStoppingCondition(10)
    time_budget = MaxSearchTimeStoppingCondition(10, clock)
    condition = OneOfStoppingCondition(evaluations, time_budget)
    condition.notify_search_started()
    condition.notify_fitness_evaluations(2)
    clock.advance(5)
    assert condition.progress() == pytest.approx(0.5)


def test_one_of_is_not_flattened():
    inner = OneOfStoppingCondition(
        MaxFitnessEvaluationsStoppingCondition(1), MaxFitnessEvaluationsStoppingCondition(2)
    )
    outer = OneOfStoppingCondition(inner, MaxFitnessEvaluationsStoppingCondition(3))
    assert len(outer.conditions) == 2
    assert outer.conditions[0] is inner


def test_one_of_negative_notification():
    condition = OneOfStoppingCondition(
        MaxFitnessEvaluationsStoppingCondition(1), MaxFitnessEvaluationsStoppingCondition(2)
    )
    with pytest.raises(InvalidArgumentError):
        condition.notify_fitness_evaluations(-1)


def test_one_of_str():
    condition = OneOfStoppingCondition(
        MaxFitnessEvaluationsStoppingCondition(1), MaxFitnessEvaluationsStoppingCondition(2)
    )
    assert str(condition) == "OneOf(Fitness evaluations: 0/1, Fitness evaluations: 0/2)"


@pytest.mark.parametrize(
    "value, expected",
    [
        pytest.param("90", 90),
        pytest.param(" 0 ", 0),
        pytest.param("01:30:00", 5400),
        pytest.param("00:00:59", 59),
    ],
)
def test_parse_search_time(value, expected):
    assert parse_search_time(value) == expected


@pytest.mark.parametrize("value", ["", "abc", "-5", "1:30", "00:60:00", "1:2:3:4"])
def test_parse_search_time_invalid(value):
    with pytest.raises(InvalidArgumentError):
        parse_search_time(value)

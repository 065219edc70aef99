#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
from unittest.mock import MagicMock

import hypothesis.strategies as st
import pytest

from hypothesis import given

import prioritizer.configuration as config

from prioritizer.metaheuristics.fitnessfunction import FitnessDirection
from prioritizer.metaheuristics.stoppingcondition import MaxFitnessEvaluationsStoppingCondition
from prioritizer.metaheuristics.stoppingcondition import StoppingCondition
from prioritizer.prioritization.aplc import compute_aplc
from prioritizer.prioritization.coveragematrix import CoverageMatrix
from prioritizer.prioritization.testcaseordering import DEFAULT_MAX_FITNESS_EVALUATIONS
from prioritizer.prioritization.testcaseordering import TestCaseOrdering
from prioritizer.prioritization.testcaseordering import TestCaseOrderingProblem
from prioritizer.prioritization.testcaseordering import fitness_direction_for
from prioritizer.utils.exceptions import InvalidArgumentError
from prioritizer.utils.randomness import Random


@pytest.fixture
def problem(regular_matrix, rng) -> TestCaseOrderingProblem:
    return TestCaseOrderingProblem(regular_matrix, config.Algorithm.RANDOM_SEARCH, rng)


@pytest.mark.parametrize(
    "algorithm, direction",
    [
        pytest.param(config.Algorithm.SIMULATED_ANNEALING, FitnessDirection.MINIMIZING),
        pytest.param(config.Algorithm.RANDOM_SEARCH, FitnessDirection.MAXIMIZING),
        pytest.param(config.Algorithm.RANDOM_WALK, FitnessDirection.MAXIMIZING),
    ],
)
def test_direction_per_algorithm(regular_matrix, rng, algorithm, direction):
    problem = TestCaseOrderingProblem(regular_matrix, algorithm, rng)
    assert fitness_direction_for(algorithm) is direction
    assert problem.direction is direction
    assert problem.is_minimizing() == (direction is FitnessDirection.MINIMIZING)


def test_ordering_rejects_non_permutation(regular_matrix):
    with pytest.raises(InvalidArgumentError):
        TestCaseOrdering([0, 0, 1, 2, 3], regular_matrix)


def test_ordering_eq_and_hash(regular_matrix, problem):
    first = TestCaseOrdering([0, 1, 2, 3, 4], regular_matrix)
    second = problem.create([0, 1, 2, 3, 4])
    assert first == second
    assert hash(first) == hash(second)
    assert first != problem.create([1, 0, 2, 3, 4])


def test_ordering_not_eq_other_type(regular_matrix):
    assert TestCaseOrdering([0, 1, 2, 3, 4], regular_matrix) != (0, 1, 2, 3, 4)


def test_ordering_copy(problem):
    ordering = problem.create([4, 3, 2, 1, 0])
    copy = ordering.copy()
    assert copy == ordering
    assert copy is not ordering
    assert copy.elementary_transformation is problem


def test_ordering_str_and_degrees_of_freedom(problem):
    ordering = problem.create([1, 2, 0, 4, 3])
    assert str(ordering) == "1:2:0:4:3"
    assert ordering.degrees_of_freedom() == 5


def test_generator_produces_permutation(problem):
    ordering = problem.get()
    assert sorted(ordering.ordering) == [0, 1, 2, 3, 4]
    assert ordering.elementary_transformation is problem


def test_transform_has_no_fixed_point(problem):
    ordering = problem.get()
    for _ in range(50):
        neighbour = ordering.transform()
        assert neighbour != ordering
        assert sorted(neighbour.ordering) == [0, 1, 2, 3, 4]
        ordering = neighbour


def test_transform_does_not_change_input(problem):
    ordering = problem.create([0, 1, 2, 3, 4])
    problem.transform(ordering)
    assert ordering.ordering == (0, 1, 2, 3, 4)


def test_transform_single_test_case(rng):
    matrix = CoverageMatrix([[True]])
    problem = TestCaseOrderingProblem(matrix, config.Algorithm.RANDOM_WALK, rng)
    ordering = problem.get()
    assert problem.transform(ordering) == ordering


def test_transform_reaches_every_permutation(rng):
    matrix = CoverageMatrix([[True, False], [False, True], [True, True]])
    problem = TestCaseOrderingProblem(matrix, config.Algorithm.RANDOM_WALK, rng)
    ordering = problem.get()
    seen = {ordering.ordering}
    for _ in range(300):
        ordering = ordering.transform()
        seen.add(ordering.ordering)
    assert len(seen) == 6


@given(st.integers(min_value=0, max_value=8), st.integers())
def test_generator_closure(num_test_cases, seed):
    matrix = CoverageMatrix([[True] for _ in range(num_test_cases)], num_code_units=1)
    problem = TestCaseOrderingProblem(matrix, config.Algorithm.RANDOM_SEARCH, Random(seed))
    ordering = problem.get()
    neighbour = ordering.transform()
    assert sorted(ordering.ordering) == list(range(num_test_cases))
    assert sorted(neighbour.ordering) == list(range(num_test_cases))


def test_compute_fitness_maximizing(regular_matrix, problem):
    ordering = problem.create([0, 1, 2, 3, 4])
    assert problem.compute_fitness(ordering) == pytest.approx(0.46)
    assert ordering.get_fitness_by(problem) == problem.compute_fitness(ordering)


def test_compute_fitness_minimizing(regular_matrix, rng):
    problem = TestCaseOrderingProblem(
        regular_matrix, config.Algorithm.SIMULATED_ANNEALING, rng
    )
    ordering = problem.create([0, 1, 2, 3, 4])
    assert problem.compute_fitness(ordering) == pytest.approx(
        compute_aplc(regular_matrix, ordering.ordering, FitnessDirection.MINIMIZING)
    )


def test_default_stopping_condition(problem):
    assert isinstance(problem.delegate, MaxFitnessEvaluationsStoppingCondition)
    assert problem.delegate.limit() == DEFAULT_MAX_FITNESS_EVALUATIONS


def test_stopping_condition_budget(regular_matrix, rng):
    problem = TestCaseOrderingProblem(
        regular_matrix,
        config.Algorithm.RANDOM_SEARCH,
        rng,
        MaxFitnessEvaluationsStoppingCondition(2),
    )
    problem.notify_search_started()
    problem.notify_fitness_evaluation()
    problem.notify_fitness_evaluation()
    assert problem.search_can_continue()
    problem.notify_fitness_evaluation()
    assert problem.search_must_stop()
    assert problem.progress() == 1.0


def test_stopping_condition_delegates(regular_matrix, rng):
    delegate = MagicMock(StoppingCondition)
    delegate.search_must_stop.return_value = True
    delegate.progress.return_value = 0.5
    problem = TestCaseOrderingProblem(
        regular_matrix, config.Algorithm.RANDOM_SEARCH, rng, delegate
    )
    problem.notify_search_started()
    problem.notify_fitness_evaluations(3)
    delegate.notify_search_started.assert_called_once()
    delegate.notify_fitness_evaluations.assert_called_once_with(3)
    assert problem.search_must_stop()
    assert problem.progress() == 0.5


def test_problem_str(problem):
    assert str(problem).startswith("TestCaseOrderingProblem(RANDOM_SEARCH, MAXIMIZING")

#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
import pytest

import prioritizer.configuration as config

from prioritizer.metaheuristics.configurations import Configuration
from prioritizer.metaheuristics.configurations import ConfigurationGenerator
from prioritizer.metaheuristics.configurations import ElementaryTransformation
from prioritizer.metaheuristics.fitnessfunction import FitnessDirection
from prioritizer.metaheuristics.fitnessfunction import FitnessFunction
from prioritizer.metaheuristics.stoppingcondition import MaxFitnessEvaluationsStoppingCondition
from prioritizer.prioritization.testcaseordering import TestCaseOrderingProblem
from prioritizer.utils.randomness import Random


class RecordingFitnessFunction(FitnessFunction):
    """Records every fitness value computed by the wrapped function."""

    def __init__(self, delegate: FitnessFunction):
        self.delegate = delegate
        self.values: list[float] = []

    def compute_fitness(self, individual) -> float:
        fitness = self.delegate.compute_fitness(individual)
        self.values.append(fitness)
        return fitness

    @property
    def direction(self) -> FitnessDirection:
        return self.delegate.direction


class Step(Configuration["Step"]):
    """A configuration that only knows its position in a sequence."""

    def __init__(self, index: int, elementary_transformation=None):
        super().__init__(elementary_transformation)
        self.index = index

    def copy(self) -> "Step":
        return Step(self.index, self.elementary_transformation)

    def degrees_of_freedom(self) -> int:
        return 1

    def __eq__(self, other):
        return isinstance(other, Step) and self.index == other.index

    def __hash__(self):
        return hash(self.index)


class NextStep(ElementaryTransformation[Step]):
    def transform(self, configuration: Step) -> Step:
        return Step(configuration.index + 1, self)


class StepGenerator(ConfigurationGenerator[Step]):
    def __init__(self):
        self.generated = 0

    def get(self) -> Step:
        step = Step(self.generated, NextStep())
        self.generated += 1
        return step


class ConstantFitness(FitnessFunction[Step]):
    def __init__(self, direction: FitnessDirection = FitnessDirection.MAXIMIZING):
        self._direction = direction

    def compute_fitness(self, individual: Step) -> float:
        return 0.5

    @property
    def direction(self) -> FitnessDirection:
        return self._direction


@pytest.fixture
def problem_factory(regular_matrix):
    """Creates a prioritization problem along with a recording fitness function."""

    def factory(algorithm: config.Algorithm, budget: int, seed: int = 7):
        problem = TestCaseOrderingProblem(
            regular_matrix,
            algorithm,
            Random(seed),
            MaxFitnessEvaluationsStoppingCondition(budget),
        )
        return problem, RecordingFitnessFunction(problem)

    return factory


@pytest.fixture
def step_generator() -> StepGenerator:
    return StepGenerator()


@pytest.fixture
def constant_fitness() -> ConstantFitness:
    return ConstantFitness()

"""
treegp/problems/regression.py - Symbolic regression of y = 0.5 * x**2
"""
import math
from typing import List, NamedTuple, Sequence, Tuple

from ..ast_nodes import ASTNode, EvaluationContext
from ..config import GenerationMethod, RunConfig, SelectionMethod
from ..engine import Problem
from ..primitives import FunctionSpec, TerminalSpec

# A case counts as a hit when the error is below this
HIT_TOLERANCE = 0.01
# Largest error charged for one case, also used for inf and nan outputs
MAX_CASE_ERROR = 1e30


class FitnessCase(NamedTuple):
    independent_variable: float
    target: float


class RegressionProblem:
    """Fit a program of x to 0.5 * x**2 on evenly spaced points in [0, 1)"""

    def __init__(self, number_of_fitness_cases: int = 10):
        self.number_of_fitness_cases = number_of_fitness_cases

    def define_function_set(self) -> List[FunctionSpec]:
        return [FunctionSpec('add', 2), FunctionSpec('sub', 2), FunctionSpec('mul', 2),
                FunctionSpec('div', 2), FunctionSpec('sin', 1)]

    def define_terminal_set(self) -> List[TerminalSpec]:
        return [TerminalSpec.variables('x'), TerminalSpec.float_constant(),
                TerminalSpec.int_constant()]

    def define_fitness_cases(self) -> List[FitnessCase]:
        cases = []
        for index in range(self.number_of_fitness_cases):
            x = index / self.number_of_fitness_cases
            cases.append(FitnessCase(x, 0.5 * x * x))
        return cases

    def evaluate_standardized_fitness(self, program: ASTNode,
                                      fitness_cases: Sequence[FitnessCase]) -> Tuple[float, int]:
        """Sum of absolute errors over the fitness cases, and the number of hits"""
        raw_fitness = 0.0
        hits = 0
        for case in fitness_cases:
            context = EvaluationContext({'x': case.independent_variable})
            difference = abs(case.target - program.evaluate(context))
            if not math.isfinite(difference) or difference > MAX_CASE_ERROR:
                difference = MAX_CASE_ERROR
            raw_fitness += difference
            if difference < HIT_TOLERANCE:
                hits += 1
        return raw_fitness, hits

    def define_parameters(self) -> RunConfig:
        return RunConfig(
            max_depth_for_new_individuals=6,
            max_depth_for_individuals_after_crossover=17,
            max_depth_for_new_subtrees_in_mutants=4,
            fitness_proportionate_reproduction_fraction=0.1,
            crossover_at_any_point_fraction=0.2,
            crossover_at_function_point_fraction=0.7,
            method_of_selection=SelectionMethod.FITNESS_PROPORTIONATE,
            method_of_generation=GenerationMethod.RAMPED_HALF_AND_HALF,
            number_of_fitness_cases=self.number_of_fitness_cases,
        )

    def define_termination_criterion(self, current_generation: int, maximum_generations: int,
                                     best_standardized_fitness: float, best_hits: int) -> bool:
        return current_generation < maximum_generations and best_hits < self.number_of_fitness_cases

    def as_problem(self) -> Problem:
        return Problem(self.define_function_set,
                       self.define_terminal_set,
                       self.define_fitness_cases,
                       self.evaluate_standardized_fitness,
                       self.define_parameters,
                       self.define_termination_criterion)


def regression(number_of_fitness_cases: int = 10) -> Problem:
    """Problem factory for the bundled regression problem"""
    return RegressionProblem(number_of_fitness_cases).as_problem()

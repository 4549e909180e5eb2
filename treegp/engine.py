"""
treegp/engine.py - The generational evolution loop

A problem is supplied as six functions (see `Problem`). The engine resolves
them once, builds generation 0 and then alternates breeding and evaluation
until the problem's termination predicate says to stop, keeping track of the
best individual seen on any generation.
"""
import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence

import numpy as np
from loguru import logger

from .ast_nodes import ASTNode
from .config import GenerationMethod, RunConfig, SelectionMethod
from .errors import ConfigurationError
from .generator import ProgramGenerator
from .individual import Individual
from .population import FitnessFunction, Population
from .primitives import FunctionSpec, TerminalSpec
from .report import LoggingReporter, Reporter


class Problem(NamedTuple):
    """The problem-specific functions driving a run"""
    function_set_factory: Callable[[], Sequence[FunctionSpec]]
    terminal_set_factory: Callable[[], Sequence[TerminalSpec]]
    fitness_cases_factory: Callable[[], Any]
    fitness_function: FitnessFunction
    parameter_definer: Callable[[], RunConfig]
    # (generation, maximum_generations, best_standardized_fitness, best_hits) -> keep going
    termination_predicate: Callable[[int, int, float, int], bool]


@dataclass
class BestOfRun:
    individual: Individual = field(default_factory=Individual.sentinel)
    generation: int = 0


@dataclass
class RunResult:
    population: Population
    fitness_cases: Any
    best_of_run: BestOfRun
    generations: int = 0
    best_fitness_history: List[float] = field(default_factory=list)


class EvolutionEngine:
    """Runs genetic programming on one problem"""

    def __init__(self, problem_factory: Callable[[], Problem], seed: int,
                 maximum_generations: int, population_size: int,
                 seeded_programs: Sequence[ASTNode] = (),
                 reporter: Optional[Reporter] = None,
                 config_overrides: Optional[Dict[str, Any]] = None):
        if maximum_generations < 0:
            raise ConfigurationError(
                f"Maximum generations must be a non-negative integer, not {maximum_generations}")
        if population_size <= 0:
            raise ConfigurationError(
                f"Size of population must be a positive integer, not {population_size}")

        self.maximum_generations = maximum_generations
        self.population_size = population_size
        self.reporter = reporter if reporter is not None else LoggingReporter()

        self.problem = problem_factory()
        self.config = self._resolve_config(self.problem.parameter_definer(), seed,
                                           config_overrides or {})
        self.config.validate()
        self.config.check_population_size(population_size)

        self.rng = np.random.default_rng(self.config.seed)
        self.best_of_run = BestOfRun()
        self.generation = 0
        self.best_fitness_history: List[float] = []

        self.reporter.describe_parameters(self.config, maximum_generations, population_size)

        self.generator = ProgramGenerator(self.problem.function_set_factory(),
                                          self.problem.terminal_set_factory(),
                                          self.config, self.rng)
        self.population = Population.create(population_size, self.generator, seeded_programs)
        self.fitness_cases = self.problem.fitness_cases_factory()

    @staticmethod
    def _resolve_config(config: RunConfig, seed: int, overrides: Dict[str, Any]) -> RunConfig:
        config = dataclasses.replace(config, seed=seed, **overrides)
        try:
            return dataclasses.replace(
                config,
                method_of_selection=SelectionMethod(config.method_of_selection),
                method_of_generation=GenerationMethod(config.method_of_generation))
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    def run_generation(self) -> None:
        """Breed (after generation 0), evaluate, rank and record the best"""
        if self.generation > 0:
            self.population.breed(self.generator, self.config, self.rng)

        self.population.evaluate_generation(self.problem.fitness_function, self.fitness_cases)

        best_of_generation = self.population.best
        if best_of_generation.standardized_fitness < self.best_of_run.individual.standardized_fitness:
            self.best_of_run = BestOfRun(best_of_generation.copy(), self.generation)
            logger.debug(f"New best-of-run on generation {self.generation}: "
                         f"{best_of_generation.standardized_fitness:g}")
        self.best_fitness_history.append(best_of_generation.standardized_fitness)

        self.reporter.report_on_generation(self.generation, self.population)
        self.generation += 1

    def should_continue(self) -> bool:
        best = self.population.best
        return self.problem.termination_predicate(self.generation, self.maximum_generations,
                                                  best.standardized_fitness, best.hits)

    def run(self) -> RunResult:
        """Loop until the termination predicate says to stop"""
        while self.should_continue():
            self.run_generation()

        self.reporter.report_on_run(self.best_of_run)
        return RunResult(population=self.population,
                         fitness_cases=self.fitness_cases,
                         best_of_run=self.best_of_run,
                         generations=self.generation,
                         best_fitness_history=list(self.best_fitness_history))


def run_genetic_programming_system(problem_factory: Callable[[], Problem], seed: int,
                                   maximum_generations: int, population_size: int,
                                   seeded_programs: Sequence[ASTNode] = (),
                                   reporter: Optional[Reporter] = None,
                                   config_overrides: Optional[Dict[str, Any]] = None) -> RunResult:
    """Build an engine for the problem and run it to completion"""
    engine = EvolutionEngine(problem_factory, seed, maximum_generations, population_size,
                             seeded_programs, reporter, config_overrides)
    return engine.run()

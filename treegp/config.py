"""
treegp/config.py - Run parameters
"""
from dataclasses import dataclass
from enum import Enum

from .errors import ConfigurationError

# Over-selection needs a large population for its elite slice to make sense
OVER_SELECTION_MIN_POPULATION = 1000


class SelectionMethod(str, Enum):
    TOURNAMENT = 'tournament'
    FITNESS_PROPORTIONATE = 'fitness_proportionate'
    OVER_SELECTION = 'over_selection'


class GenerationMethod(str, Enum):
    GROW = 'grow'
    FULL = 'full'
    RAMPED_HALF_AND_HALF = 'ramped'


@dataclass(frozen=True)
class RunConfig:
    """Parameters of one run, fixed once the problem has defined them"""
    max_depth_for_new_individuals: int = 6
    max_depth_for_individuals_after_crossover: int = 17
    max_depth_for_new_subtrees_in_mutants: int = 4
    fitness_proportionate_reproduction_fraction: float = 0.1
    crossover_at_any_point_fraction: float = 0.2
    crossover_at_function_point_fraction: float = 0.7
    method_of_selection: SelectionMethod = SelectionMethod.FITNESS_PROPORTIONATE
    method_of_generation: GenerationMethod = GenerationMethod.RAMPED_HALF_AND_HALF
    seed: int = 0
    number_of_fitness_cases: int = 10

    @property
    def crossover_fraction(self) -> float:
        return self.crossover_at_function_point_fraction + self.crossover_at_any_point_fraction

    def validate(self) -> None:
        """Raise ConfigurationError if the parameters cannot drive a run"""
        for name in ('max_depth_for_new_individuals',
                     'max_depth_for_individuals_after_crossover',
                     'max_depth_for_new_subtrees_in_mutants'):
            if getattr(self, name) < 1:
                raise ConfigurationError(f"{name} must be at least 1, not {getattr(self, name)}")

        fractions = (self.fitness_proportionate_reproduction_fraction,
                     self.crossover_at_any_point_fraction,
                     self.crossover_at_function_point_fraction)
        for value in fractions:
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"Operation fractions must lie in [0, 1], got {value}")
        if sum(fractions) > 1.0 + 1e-9:
            raise ConfigurationError(f"Operation fractions sum to {sum(fractions)}, more than 1")

        if self.number_of_fitness_cases < 0:
            raise ConfigurationError("number_of_fitness_cases must be non-negative")

        # Enum(value) accepts members and their string values alike
        try:
            SelectionMethod(self.method_of_selection)
            GenerationMethod(self.method_of_generation)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    def check_population_size(self, population_size: int) -> None:
        if population_size <= 0:
            raise ConfigurationError(
                f"Size of population must be a positive integer, not {population_size}")
        if (self.method_of_selection == SelectionMethod.OVER_SELECTION
                and population_size < OVER_SELECTION_MIN_POPULATION):
            raise ConfigurationError(
                f"A population size of {population_size} is too small for over-selection")

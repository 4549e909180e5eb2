"""
treegp/population.py - Population management, fitness pipeline and breeding
"""
import math
from typing import Any, Callable, Dict, Iterator, List, Sequence, Tuple

import numpy as np

from .ast_nodes import ASTNode
from .config import RunConfig
from .errors import EvaluationError
from .generator import ProgramGenerator
from .individual import Individual
from .operators import crossover_at_any_points, crossover_at_function_points, mutate
from .selection import select

FitnessFunction = Callable[[ASTNode, Any], Tuple[float, int]]


class Population:
    """A fixed-size sequence of individuals; after ranking index 0 is the best"""

    def __init__(self, individuals: List[Individual]):
        self.individuals = individuals
        self.size = len(individuals)

    @classmethod
    def create(cls, size: int, generator: ProgramGenerator,
               seeded_programs: Sequence[ASTNode] = ()) -> 'Population':
        """Create generation 0"""
        programs = generator.create_population(size, seeded_programs)
        return cls([Individual(program) for program in programs])

    def __len__(self) -> int:
        return len(self.individuals)

    def __getitem__(self, index: int) -> Individual:
        return self.individuals[index]

    def __iter__(self) -> Iterator[Individual]:
        return iter(self.individuals)

    @property
    def best(self) -> Individual:
        return self.individuals[0]

    # Fitness pipeline. The steps must run in this order each generation:
    # selection relies on normalized, ranked individuals.

    def zeroize(self) -> None:
        """Clean out the fitness measures left over from the previous programs"""
        for individual in self.individuals:
            individual.zeroize()

    def evaluate(self, fitness_function: FitnessFunction, fitness_cases: Any) -> None:
        """Record the standardized fitness and hits of every individual"""
        for individual in self.individuals:
            standardized_fitness, hits = fitness_function(individual.program, fitness_cases)
            standardized_fitness = float(standardized_fitness)
            if not 0.0 <= standardized_fitness < math.inf:
                raise EvaluationError(
                    f"Standardized fitness must be finite and non-negative, got "
                    f"{standardized_fitness} for {individual.program}")
            if hits < 0:
                raise EvaluationError(f"Hits must be non-negative, got {hits} for {individual.program}")
            individual.standardized_fitness = standardized_fitness
            individual.hits = int(hits)

    def normalize(self) -> None:
        """Compute adjusted fitness, then normalized fitness summing to 1"""
        sum_of_adjusted_fitnesses = 0.0
        for individual in self.individuals:
            individual.adjusted_fitness = 1.0 / (1.0 + individual.standardized_fitness)
            sum_of_adjusted_fitnesses += individual.adjusted_fitness
        for individual in self.individuals:
            individual.normalized_fitness = individual.adjusted_fitness / sum_of_adjusted_fitnesses

    def rank(self) -> None:
        """Sort by descending normalized fitness"""
        self.individuals.sort(key=lambda individual: individual.normalized_fitness, reverse=True)

    def evaluate_generation(self, fitness_function: FitnessFunction, fitness_cases: Any) -> None:
        self.zeroize()
        self.evaluate(fitness_function, fitness_cases)
        self.normalize()
        self.rank()

    def breed(self, generator: ProgramGenerator, config: RunConfig, rng: np.random.Generator) -> None:
        """Replace every program using crossover, reproduction and mutation.

        Operations are applied in order until the fraction of the new
        population they account for reaches their configured share. New
        programs are staged and only committed once all have been bred, so
        selection always sees the previous generation.
        """
        population_size = self.size
        new_programs: List[ASTNode] = []
        fraction = 0.0

        while len(new_programs) < population_size:
            individual_1 = select(self.individuals, config.method_of_selection, rng)
            remaining = population_size - len(new_programs)

            if remaining > 1 and fraction < config.crossover_fraction:
                if fraction < config.crossover_at_function_point_fraction:
                    operation = crossover_at_function_points
                else:
                    operation = crossover_at_any_points
                individual_2 = select(self.individuals, config.method_of_selection, rng)
                new_male, new_female = operation(individual_1, individual_2, config, rng)
                new_programs.append(new_male)
                new_programs.append(new_female)
            elif fraction < (config.fitness_proportionate_reproduction_fraction
                             + config.crossover_fraction):
                new_programs.append(individual_1)
            else:
                new_programs.append(mutate(individual_1, generator, config, rng))

            fraction = len(new_programs) / population_size

        # Fitness measures are stale until the next evaluation
        for individual, program in zip(self.individuals, new_programs):
            individual.program = program.copy()

    def get_stats(self) -> Dict[str, Dict[str, float]]:
        """Get population statistics"""
        if not self.individuals:
            return {}

        columns = {
            'standardized_fitness': [i.standardized_fitness for i in self.individuals],
            'hits': [i.hits for i in self.individuals],
            'depth': [i.program.get_depth() for i in self.individuals],
            'size': [i.program.size() for i in self.individuals],
        }
        return {
            name: {
                'min': float(np.min(values)),
                'max': float(np.max(values)),
                'mean': float(np.mean(values)),
                'std': float(np.std(values)),
            }
            for name, values in columns.items()
        }

"""
treegp/selection.py - Parent selection over a ranked population
"""
from typing import Sequence

import numpy as np

from .ast_nodes import ASTNode
from .config import OVER_SELECTION_MIN_POPULATION, SelectionMethod
from .errors import ConfigurationError
from .individual import Individual

# Share of draws that land in the over-selected elite slice
OVER_SELECTION_BIAS = 0.8
# Number of individuals' worth of normalized fitness in the elite slice
OVER_SELECTION_ELITE = 320.0


def tournament_selection(population: Sequence[Individual], rng: np.random.Generator) -> ASTNode:
    """Pick two individuals at random and return the program of the better one"""
    individual_a = population[int(rng.integers(len(population)))]
    individual_b = population[int(rng.integers(len(population)))]
    if individual_a.standardized_fitness < individual_b.standardized_fitness:
        return individual_a.program
    return individual_b.program


def fitness_proportionate_selection(population: Sequence[Individual], after_this_fitness: float) -> ASTNode:
    """Roulette wheel over the normalized fitnesses, in population order.

    Returns the first individual whose normalized fitness carries the running
    sum past `after_this_fitness`, or the last individual if rounding keeps
    the sum from getting there.
    """
    sum_of_fitness = 0.0
    for individual in population:
        sum_of_fitness += individual.normalized_fitness
        if sum_of_fitness > after_this_fitness:
            return individual.program
    return population[-1].program


def over_selection_target(population_size: int, rng: np.random.Generator) -> float:
    """A number in [0, 1) biased towards the start of a ranked population"""
    if population_size < OVER_SELECTION_MIN_POPULATION:
        raise ConfigurationError(
            f"A population size of {population_size} is too small for over-selection")
    boundary = OVER_SELECTION_ELITE / population_size
    if rng.random() < OVER_SELECTION_BIAS:
        return boundary * rng.random()
    return boundary + (1.0 - boundary) * rng.random()


def select(population: Sequence[Individual], method: SelectionMethod,
           rng: np.random.Generator) -> ASTNode:
    """Find a parent program with the configured selection method"""
    if method == SelectionMethod.TOURNAMENT:
        return tournament_selection(population, rng)
    if method == SelectionMethod.OVER_SELECTION:
        return fitness_proportionate_selection(population, over_selection_target(len(population), rng))
    return fitness_proportionate_selection(population, rng.random())

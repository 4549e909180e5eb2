"""
treegp/operators.py - Subtree crossover and mutation with depth control
"""
from typing import Tuple

import numpy as np
from loguru import logger

from .ast_nodes import (ASTNode, CountFunction, count_any_points, count_function_points,
                        get_subtree, replace)
from .config import RunConfig
from .errors import StructuralError
from .generator import ProgramGenerator


def _random_point(count_points: CountFunction, program: ASTNode, rng: np.random.Generator) -> int:
    points = count_points(program)
    if points <= 0:
        raise StructuralError(f"Program {program} has no points to choose from")
    return int(rng.integers(points))


def validate_crossover(male: ASTNode, new_male: ASTNode, female: ASTNode, new_female: ASTNode,
                       max_depth: int) -> Tuple[ASTNode, ASTNode]:
    """Keep an offspring only if it is neither a bare terminal nor deeper than max_depth.

    A rejected offspring is replaced by its own parent.
    """
    offspring = []
    for parent, child in ((male, new_male), (female, new_female)):
        depth = child.get_depth()
        if depth == 1 or depth > max_depth:
            logger.debug(f"Rejected crossover offspring of depth {depth}")
            offspring.append(parent)
        else:
            offspring.append(child)
    return offspring[0], offspring[1]


def crossover(count_points: CountFunction, male: ASTNode, female: ASTNode,
              config: RunConfig, rng: np.random.Generator) -> Tuple[ASTNode, ASTNode]:
    """Exchange randomly chosen subtrees between two programs"""
    male_point = _random_point(count_points, male, rng)
    female_point = _random_point(count_points, female, rng)

    male_fragment = get_subtree(count_points, male, male_point)
    female_fragment = get_subtree(count_points, female, female_point)

    new_male = replace(count_points, male, female_fragment, male_point)
    new_female = replace(count_points, female, male_fragment, female_point)

    return validate_crossover(male, new_male, female, new_female,
                              config.max_depth_for_individuals_after_crossover)


def crossover_at_function_points(male: ASTNode, female: ASTNode,
                                 config: RunConfig, rng: np.random.Generator) -> Tuple[ASTNode, ASTNode]:
    return crossover(count_function_points, male, female, config, rng)


def crossover_at_any_points(male: ASTNode, female: ASTNode,
                            config: RunConfig, rng: np.random.Generator) -> Tuple[ASTNode, ASTNode]:
    return crossover(count_any_points, male, female, config, rng)


def mutate(program: ASTNode, generator: ProgramGenerator,
           config: RunConfig, rng: np.random.Generator) -> ASTNode:
    """Replace a random subtree with a brand new grown one.

    The argument is left untouched; a new program is returned.
    """
    mutation_point = _random_point(count_any_points, program, rng)
    new_subtree = generator.create_subtree(config.max_depth_for_new_subtrees_in_mutants)
    return replace(count_any_points, program, new_subtree, mutation_point)

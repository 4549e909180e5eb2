import numpy as np
import pytest

from treegp.ast_nodes import IntConstant
from treegp.config import GenerationMethod, RunConfig, SelectionMethod
from treegp.generator import ProgramGenerator

from .helpers import ARITHMETIC, TERMINALS, WITH_TRIG, add, mul, sin, x


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def config():
    return RunConfig(max_depth_for_new_individuals=4,
                     max_depth_for_individuals_after_crossover=8,
                     max_depth_for_new_subtrees_in_mutants=3,
                     method_of_selection=SelectionMethod.TOURNAMENT,
                     method_of_generation=GenerationMethod.RAMPED_HALF_AND_HALF)


@pytest.fixture
def generator(config, rng):
    return ProgramGenerator(WITH_TRIG, TERMINALS, config, rng)


@pytest.fixture
def binary_generator(config, rng):
    return ProgramGenerator(ARITHMETIC, TERMINALS, config, rng)


@pytest.fixture
def sample_tree():
    # (x + sin((x * 2)))
    return add(x(), sin(mul(x(), IntConstant(2.0))))

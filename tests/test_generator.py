import dataclasses

import numpy as np
import pytest

from treegp.ast_nodes import ASTNode, BinaryOp, Constant, IntConstant, UnaryOp, Variable
from treegp.config import GenerationMethod
from treegp.errors import ConfigurationError
from treegp.generator import ProgramGenerator
from treegp.primitives import FunctionSpec, TerminalSpec

from .helpers import ARITHMETIC, TERMINALS, WITH_TRIG, add, mul, x


def is_function(tree: ASTNode) -> bool:
    return isinstance(tree, (UnaryOp, BinaryOp))


class TestTerminals:
    def test_ephemeral_constant_ranges(self, generator):
        floats, ints, names = [], [], set()
        for _ in range(600):
            terminal = generator.choose_terminal()
            if isinstance(terminal, IntConstant):
                ints.append(terminal.value)
            elif isinstance(terminal, Constant):
                floats.append(terminal.value)
            else:
                names.add(terminal.name)
        assert floats and ints
        assert all(-5.0 <= value < 5.0 for value in floats)
        assert all(-10 <= value < 10 and value == int(value) for value in ints)
        assert names == {'x', 'y'}

    def test_variable_only_terminal_set(self, config, rng):
        generator = ProgramGenerator(ARITHMETIC, [TerminalSpec.variables('t')], config, rng)
        assert generator.choose_terminal() == Variable('t')


class TestCreateProgram:
    def test_full_trees_are_complete(self, config, rng):
        generator = ProgramGenerator(ARITHMETIC, TERMINALS, config, rng)
        for _ in range(20):
            tree = generator.create_program(3, top_node=True, full=True)
            # Three levels of binary functions over a level of terminals
            assert tree.get_depth() == 4
            assert tree.size() == 15

    def test_full_trees_with_unary_functions(self, generator):
        for _ in range(20):
            tree = generator.create_program(3, top_node=True, full=True)
            assert tree.get_depth() == 4

    def test_grow_respects_budget(self, generator):
        depths = set()
        for _ in range(200):
            tree = generator.create_program(4, top_node=True, full=False)
            assert is_function(tree)
            assert 2 <= tree.get_depth() <= 5
            depths.add(tree.get_depth())
        assert len(depths) > 1

    def test_zero_budget_gives_terminal(self, generator):
        assert not is_function(generator.create_program(0, top_node=True))

    def test_subtree_has_function_root(self, generator):
        for _ in range(50):
            subtree = generator.create_subtree(2)
            assert is_function(subtree)
            assert subtree.get_depth() <= 3

    def test_same_seed_same_programs(self, config):
        first = ProgramGenerator(WITH_TRIG, TERMINALS, config, np.random.default_rng(7))
        second = ProgramGenerator(WITH_TRIG, TERMINALS, config, np.random.default_rng(7))
        assert first.create_population(30) == second.create_population(30)

    def test_empty_sets_rejected(self, config, rng):
        with pytest.raises(ConfigurationError):
            ProgramGenerator([], TERMINALS, config, rng)
        with pytest.raises(ConfigurationError):
            ProgramGenerator(ARITHMETIC, [], config, rng)


class TestCreatePopulation:
    @pytest.mark.parametrize('method', list(GenerationMethod))
    def test_generation_zero_is_unique(self, config, rng, method):
        config = dataclasses.replace(config, method_of_generation=method,
                                     max_depth_for_new_individuals=6)
        generator = ProgramGenerator(WITH_TRIG, TERMINALS, config, rng)
        programs = generator.create_population(200)
        assert len(programs) == 200
        assert len(set(programs)) == 200
        assert all(is_function(program) for program in programs)

    def test_ramped_varies_depth_and_shape(self, config, rng):
        generator = ProgramGenerator(ARITHMETIC, TERMINALS, config, rng)
        programs = generator.create_population(60)
        depths = {program.get_depth() for program in programs}
        assert len(depths) >= 3
        assert max(depths) <= config.max_depth_for_new_individuals + 1

    def test_seeded_programs_fill_first_slots(self, generator):
        seeds = [add(x(), x()), add(x(), x()), mul(x(), Constant(0.5))]
        programs = generator.create_population(10, seeds)
        assert programs[:3] == seeds
        assert all(program is not seed for program, seed in zip(programs, seeds))
        assert len(set(programs[3:])) == 7

    def test_depth_floor_rises_when_depth_is_exhausted(self, config, rng):
        config = dataclasses.replace(config, method_of_generation=GenerationMethod.FULL,
                                     max_depth_for_new_individuals=1)
        generator = ProgramGenerator([FunctionSpec('add', 2)], [TerminalSpec.variables('x')],
                                     config, rng)
        programs = generator.create_population(3)
        # Only one full tree of each depth exists with these sets
        assert len(set(programs)) == 3
        assert generator.min_depth > 1
        assert generator.max_depth >= generator.min_depth
        assert config.max_depth_for_new_individuals == 1

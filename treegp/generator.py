"""
treegp/generator.py - Random program construction and the initial population
"""
from typing import List, Sequence

import numpy as np
from loguru import logger

from .ast_nodes import ASTNode, BinaryOp, Constant, IntConstant, UnaryOp, Variable
from .config import GenerationMethod, RunConfig
from .errors import ConfigurationError
from .primitives import FLOAT_CONSTANT, INT_CONSTANT, FunctionSpec, TerminalSpec

# Failed attempts at one slot before the minimum depth is raised
MAX_ATTEMPTS_PER_INDIVIDUAL = 20


class ProgramGenerator:
    """Creates random programs from a function set and a terminal set"""

    def __init__(self, function_set: Sequence[FunctionSpec], terminal_set: Sequence[TerminalSpec],
                 config: RunConfig, rng: np.random.Generator):
        if not function_set:
            raise ConfigurationError("The function set is empty")
        if not terminal_set:
            raise ConfigurationError("The terminal set is empty")
        self.function_set = list(function_set)
        self.terminal_set = list(terminal_set)
        self.config = config
        self.rng = rng

        # Working depth bounds; the uniqueness check may push these up
        self.min_depth = 1
        self.max_depth = config.max_depth_for_new_individuals

    def _pick(self, n: int) -> int:
        return int(self.rng.integers(n))

    def choose_terminal(self) -> ASTNode:
        """Pick a terminal, creating a fresh value for ephemeral constants"""
        choice = self.terminal_set[self._pick(len(self.terminal_set))]
        if choice.kind == FLOAT_CONSTANT:
            return Constant(-5.0 + 10.0 * self.rng.random())
        if choice.kind == INT_CONSTANT:
            return IntConstant(float(-10 + self._pick(20)))
        return Variable(choice.names[self._pick(len(choice.names))])

    def _create_function(self, spec: FunctionSpec, allowable_depth: int, full: bool) -> ASTNode:
        args = [self.create_program(allowable_depth - 1, False, full) for _ in range(spec.arity)]
        if spec.arity == 1:
            return UnaryOp(spec.op, args[0])
        return BinaryOp(spec.op, args[0], args[1])

    def create_program(self, allowable_depth: int, top_node: bool = False, full: bool = False) -> ASTNode:
        """Create a program recursively.

        allowable_depth is the remaining depth budget; at zero only terminals
        are chosen. top_node forces a function at the root so a whole program
        is never a bare terminal. full makes every branch reach the budget.
        """
        if allowable_depth <= 0:
            return self.choose_terminal()

        if full or top_node:
            spec = self.function_set[self._pick(len(self.function_set))]
            return self._create_function(spec, allowable_depth, full)

        # Choose from the bag of functions and terminals
        choice = self._pick(len(self.function_set) + len(self.terminal_set))
        if choice < len(self.function_set):
            return self._create_function(self.function_set[choice], allowable_depth, full)
        return self.choose_terminal()

    def create_subtree(self, max_depth: int) -> ASTNode:
        """Grow a fresh subtree with a function at its root"""
        return self.create_program(max_depth, top_node=True, full=False)

    def _depth_for(self, index: int) -> int:
        if self.config.method_of_generation == GenerationMethod.RAMPED_HALF_AND_HALF:
            return self.min_depth + index % max(1, self.max_depth - self.min_depth)
        return self.max_depth

    def _full_for(self, full_cycle: bool) -> bool:
        method = self.config.method_of_generation
        if method == GenerationMethod.FULL:
            return True
        if method == GenerationMethod.GROW:
            return False
        return full_cycle

    def create_population(self, size: int, seeded_programs: Sequence[ASTNode] = ()) -> List[ASTNode]:
        """Create `size` programs for generation 0.

        Seeded programs fill the first slots as given. Every other program is
        structurally distinct from the generated ones before it.
        """
        programs = []
        uniquifier = set()
        attempts_at_this_individual = 0
        full_cycle = False
        index = 0

        while index < size:
            if index % max(1, self.max_depth - self.min_depth) == 0:
                full_cycle = not full_cycle

            if index < len(seeded_programs):
                programs.append(seeded_programs[index].copy())
                index += 1
                continue

            program = self.create_program(self._depth_for(index), True, self._full_for(full_cycle))
            if program not in uniquifier:
                uniquifier.add(program)
                programs.append(program)
                attempts_at_this_individual = 0
                index += 1
            elif attempts_at_this_individual > MAX_ATTEMPTS_PER_INDIVIDUAL:
                # This depth has probably filled up
                self.min_depth += 1
                self.max_depth = max(self.max_depth, self.min_depth)
                logger.debug(f"Generation 0 slot {index}: raised depth bounds to "
                             f"[{self.min_depth}, {self.max_depth}]")
            else:
                attempts_at_this_individual += 1

        return programs

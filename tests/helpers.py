"""Tree builders and primitive sets shared by the tests"""
from treegp.ast_nodes import BinaryOp, Constant, UnaryOp, Variable
from treegp.individual import Individual
from treegp.primitives import FunctionSpec, TerminalSpec


def x():
    return Variable('x')


def add(left, right):
    return BinaryOp('add', left, right)


def sub(left, right):
    return BinaryOp('sub', left, right)


def mul(left, right):
    return BinaryOp('mul', left, right)


def div(left, right):
    return BinaryOp('div', left, right)


def sin(child):
    return UnaryOp('sin', child)


ARITHMETIC = [FunctionSpec('add', 2), FunctionSpec('sub', 2),
              FunctionSpec('mul', 2), FunctionSpec('div', 2)]
WITH_TRIG = ARITHMETIC + [FunctionSpec('sin', 1), FunctionSpec('cos', 1)]
TERMINALS = [TerminalSpec.variables('x', 'y'), TerminalSpec.float_constant(),
             TerminalSpec.int_constant()]


def make_individual(standardized_fitness, program=None):
    individual = Individual(program if program is not None else add(x(), Constant(1.0)))
    individual.standardized_fitness = standardized_fitness
    return individual

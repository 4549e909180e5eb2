"""
treegp - Genetic programming over expression trees

Evolves a population of arithmetic expression trees towards programs that
score well on a problem-supplied fitness function, using tournament or
fitness-proportionate selection, subtree crossover and subtree mutation.
"""

__version__ = "0.1.0"
__author__ = "treegp Project"

from .errors import TreeGPError, ConfigurationError, EvaluationError, StructuralError
from .ast_nodes import (
    ASTNode, Variable, Constant, IntConstant, UnaryOp, BinaryOp, Placeholder,
    EvaluationContext, node_from_dict,
    count_function_points, count_any_points, get_subtree, replace,
    UNARY_OPS, BINARY_OPS
)
from .primitives import FunctionSpec, TerminalSpec
from .config import RunConfig, SelectionMethod, GenerationMethod
from .generator import ProgramGenerator
from .individual import Individual
from .population import Population
from .engine import Problem, BestOfRun, RunResult, EvolutionEngine, run_genetic_programming_system
from .report import Reporter, LoggingReporter

__all__ = [
    'TreeGPError', 'ConfigurationError', 'EvaluationError', 'StructuralError',
    'ASTNode', 'Variable', 'Constant', 'IntConstant', 'UnaryOp', 'BinaryOp', 'Placeholder',
    'EvaluationContext', 'node_from_dict',
    'count_function_points', 'count_any_points', 'get_subtree', 'replace',
    'UNARY_OPS', 'BINARY_OPS',
    'FunctionSpec', 'TerminalSpec',
    'RunConfig', 'SelectionMethod', 'GenerationMethod',
    'ProgramGenerator',
    'Individual',
    'Population',
    'Problem', 'BestOfRun', 'RunResult', 'EvolutionEngine', 'run_genetic_programming_system',
    'Reporter', 'LoggingReporter',
]

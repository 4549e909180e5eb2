"""
treegp/primitives.py - Function and terminal set entries
"""
from dataclasses import dataclass
from typing import Tuple

from .ast_nodes import BINARY_OPS, UNARY_OPS
from .errors import ConfigurationError


@dataclass(frozen=True)
class FunctionSpec:
    """An operator a generator may place at an internal node"""
    op: str
    arity: int

    def __post_init__(self):
        if self.op in BINARY_OPS:
            expected = 2
        elif self.op in UNARY_OPS:
            expected = 1
        else:
            raise ConfigurationError(f"Unknown function '{self.op}'")
        if self.arity != expected:
            raise ConfigurationError(
                f"Function '{self.op}' takes {expected} argument(s), not {self.arity}")


VARIABLES = 'variables'
FLOAT_CONSTANT = 'float'
INT_CONSTANT = 'int'


@dataclass(frozen=True)
class TerminalSpec:
    """A leaf choice: a pool of variable names or an ephemeral random constant"""
    kind: str
    names: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.kind not in (VARIABLES, FLOAT_CONSTANT, INT_CONSTANT):
            raise ConfigurationError(f"Unknown terminal kind '{self.kind}'")
        if self.kind == VARIABLES and not self.names:
            raise ConfigurationError("A variable terminal needs at least one name")

    @classmethod
    def variables(cls, *names: str) -> 'TerminalSpec':
        return cls(VARIABLES, tuple(names))

    @classmethod
    def float_constant(cls) -> 'TerminalSpec':
        return cls(FLOAT_CONSTANT)

    @classmethod
    def int_constant(cls) -> 'TerminalSpec':
        return cls(INT_CONSTANT)

"""
treegp/ast_nodes.py - Expression tree nodes, evaluation and point addressing
"""
import math
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Tuple

from .errors import EvaluationError, StructuralError


class EvaluationContext:
    """Variable bindings used while evaluating a program on one fitness case"""

    def __init__(self, bindings: Optional[Dict[str, float]] = None):
        self._bindings = {name: float(value) for name, value in (bindings or {}).items()}

    def bind(self, name: str, value: float) -> None:
        self._bindings[name] = float(value)

    def lookup(self, name: str) -> float:
        try:
            return self._bindings[name]
        except KeyError:
            raise EvaluationError(f"Variable '{name}' is not bound in the evaluation context") from None

    def __contains__(self, name: str) -> bool:
        return name in self._bindings


class ASTNode(ABC):
    """Base class for all AST nodes"""

    arity = 0

    @abstractmethod
    def evaluate(self, context: EvaluationContext) -> float:
        """Evaluate the node under the given variable bindings"""
        pass

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary"""
        pass

    @classmethod
    @abstractmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ASTNode':
        """Deserialize from dictionary"""
        pass

    @abstractmethod
    def copy(self) -> 'ASTNode':
        """Create a deep copy of this node"""
        pass

    @abstractmethod
    def key(self) -> Tuple:
        """Hashable structural identity of this subtree"""
        pass

    @property
    def children(self) -> List['ASTNode']:
        return []

    def get_all_nodes(self) -> List['ASTNode']:
        """Get all nodes in this subtree, depth first"""
        nodes = [self]
        for child in self.children:
            nodes.extend(child.get_all_nodes())
        return nodes

    def get_depth(self) -> int:
        """Get maximum depth of this subtree; a leaf has depth 1"""
        if not self.children:
            return 1
        return 1 + max(child.get_depth() for child in self.children)

    def size(self) -> int:
        return len(self.get_all_nodes())

    def count_function_points(self) -> int:
        """Number of internal (function) nodes"""
        return 0

    def count_any_points(self) -> int:
        """Number of addressable nodes when terminals are eligible too"""
        return 1

    def __eq__(self, other):
        if not isinstance(other, ASTNode):
            return NotImplemented
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())

    def __repr__(self):
        return f"<{type(self).__name__} {self}>"


class Variable(ASTNode):
    """Named input variable, looked up in the evaluation context"""

    def __init__(self, name: str):
        self.name = name

    def evaluate(self, context: EvaluationContext) -> float:
        return context.lookup(self.name)

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'Variable', 'name': self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Variable':
        return cls(data['name'])

    def copy(self) -> 'Variable':
        return Variable(self.name)

    def key(self) -> Tuple:
        return ('Variable', self.name)

    def __str__(self):
        return self.name


class Constant(ASTNode):
    """Floating point constant"""

    def __init__(self, value: float):
        self.value = float(value)

    def evaluate(self, context: EvaluationContext) -> float:
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        return {'type': type(self).__name__, 'value': self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Constant':
        return cls(data['value'])

    def copy(self) -> 'Constant':
        return type(self)(self.value)

    def key(self) -> Tuple:
        return (type(self).__name__, self.value)

    def __str__(self):
        return f"{self.value:g}"


class IntConstant(Constant):
    """Integer-valued constant, stored as a float"""

    def __str__(self):
        return str(int(self.value))


class UnaryOp(ASTNode):
    """Unary operations: sin, cos"""

    arity = 1

    def __init__(self, op: str, child: ASTNode):
        if op not in UNARY_OPS:
            raise ValueError(f"Unknown unary operator: {op}")
        self.op = op
        self.child = child

    @property
    def children(self) -> List[ASTNode]:
        return [self.child]

    def evaluate(self, context: EvaluationContext) -> float:
        child_val = self.child.evaluate(context)

        # math.sin/cos raise on infinities
        if not math.isfinite(child_val):
            return math.nan
        if self.op == 'sin':
            return math.sin(child_val)
        return math.cos(child_val)

    def count_function_points(self) -> int:
        return 1 + self.child.count_function_points()

    def count_any_points(self) -> int:
        # Terminals below a unary node are not eligible under this scheme
        return 1 + self.child.count_function_points()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'UnaryOp',
            'op': self.op,
            'child': self.child.to_dict()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UnaryOp':
        child = node_from_dict(data['child'])
        return cls(data['op'], child)

    def copy(self) -> 'UnaryOp':
        return UnaryOp(self.op, self.child.copy())

    def key(self) -> Tuple:
        return ('UnaryOp', self.op, self.child.key())

    def __str__(self):
        return f"{self.op}({self.child})"


class BinaryOp(ASTNode):
    """Binary operations: add, sub, mul and protected div"""

    arity = 2

    def __init__(self, op: str, left: ASTNode, right: ASTNode):
        if op not in BINARY_OPS:
            raise ValueError(f"Unknown binary operator: {op}")
        self.op = op
        self.left = left
        self.right = right

    @property
    def children(self) -> List[ASTNode]:
        return [self.left, self.right]

    def evaluate(self, context: EvaluationContext) -> float:
        left_val = self.left.evaluate(context)
        right_val = self.right.evaluate(context)

        if self.op == 'add':
            return left_val + right_val
        elif self.op == 'sub':
            return left_val - right_val
        elif self.op == 'mul':
            return left_val * right_val
        return protected_divide(left_val, right_val)

    def count_function_points(self) -> int:
        return 1 + self.left.count_function_points() + self.right.count_function_points()

    def count_any_points(self) -> int:
        return 1 + self.left.count_any_points() + self.right.count_any_points()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'BinaryOp',
            'op': self.op,
            'left': self.left.to_dict(),
            'right': self.right.to_dict()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BinaryOp':
        left = node_from_dict(data['left'])
        right = node_from_dict(data['right'])
        return cls(data['op'], left, right)

    def copy(self) -> 'BinaryOp':
        return BinaryOp(self.op, self.left.copy(), self.right.copy())

    def key(self) -> Tuple:
        return ('BinaryOp', self.op, self.left.key(), self.right.key())

    def __str__(self):
        return f"({self.left} {OP_SYMBOLS[self.op]} {self.right})"


class Placeholder(ASTNode):
    """Empty node marking a slot that holds no program yet"""

    def evaluate(self, context: EvaluationContext) -> float:
        raise EvaluationError("Attempted to evaluate an empty placeholder node")

    def get_depth(self) -> int:
        raise StructuralError("An empty placeholder node has no depth")

    def count_any_points(self) -> int:
        return 0

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'Placeholder'}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Placeholder':
        return cls()

    def copy(self) -> 'Placeholder':
        return Placeholder()

    def key(self) -> Tuple:
        return ('Placeholder',)

    def __str__(self):
        return ""


def protected_divide(numerator: float, denominator: float) -> float:
    """Division that returns 1.0 for a zero denominator"""
    if denominator == 0.0:
        return 1.0
    return numerator / denominator


# Point-counting schemes. Points are numbered left to right, depth first,
# starting at 0 for the root.
CountFunction = Callable[[ASTNode], int]


def count_function_points(tree: ASTNode) -> int:
    return tree.count_function_points()


def count_any_points(tree: ASTNode) -> int:
    return tree.count_any_points()


def get_subtree(count_points: CountFunction, tree: ASTNode, point: int) -> ASTNode:
    """Return the subtree labelled `point` under the given counting scheme"""
    if point == 0:
        return tree
    if isinstance(tree, BinaryOp):
        left_points = count_points(tree.left)
        if point <= left_points:
            return get_subtree(count_points, tree.left, point - 1)
        return get_subtree(count_points, tree.right, point - (left_points + 1))
    if isinstance(tree, UnaryOp):
        return get_subtree(count_points, tree.child, point - 1)
    raise StructuralError(f"The number of nodes in a tree branch is less than {point}")


def replace(count_points: CountFunction, tree: ASTNode, fragment: ASTNode, point: int) -> ASTNode:
    """Return a copy of `tree` with the subtree labelled `point` replaced by `fragment`.

    Neither `tree` nor `fragment` is modified; the fragment is copied in.
    """
    if point == 0:
        return fragment.copy()
    if isinstance(tree, BinaryOp):
        left_points = count_points(tree.left)
        if point <= left_points:
            return BinaryOp(tree.op,
                            replace(count_points, tree.left, fragment, point - 1),
                            tree.right.copy())
        return BinaryOp(tree.op,
                        tree.left.copy(),
                        replace(count_points, tree.right, fragment, point - (left_points + 1)))
    if isinstance(tree, UnaryOp):
        if point <= count_points(tree.child):
            return UnaryOp(tree.op, replace(count_points, tree.child, fragment, point - 1))
    raise StructuralError(f"replace: the number of nodes in a tree branch is less than {point}")


# Node creation helpers
def node_from_dict(data: Dict[str, Any]) -> ASTNode:
    """Create node from dictionary representation"""
    node_type = data['type']

    if node_type == 'Variable':
        return Variable.from_dict(data)
    elif node_type == 'Constant':
        return Constant.from_dict(data)
    elif node_type == 'IntConstant':
        return IntConstant.from_dict(data)
    elif node_type == 'UnaryOp':
        return UnaryOp.from_dict(data)
    elif node_type == 'BinaryOp':
        return BinaryOp.from_dict(data)
    elif node_type == 'Placeholder':
        return Placeholder.from_dict(data)
    else:
        raise ValueError(f"Unknown node type: {node_type}")


UNARY_OPS = ['sin', 'cos']
BINARY_OPS = ['add', 'sub', 'mul', 'div']

OP_SYMBOLS = {'add': '+', 'sub': '-', 'mul': '*', 'div': '%'}

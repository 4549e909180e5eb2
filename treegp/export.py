"""
treegp/export.py - Text and LaTeX renderings of programs
"""
from typing import Iterable

from .ast_nodes import ASTNode, BinaryOp, Constant, IntConstant, Placeholder, UnaryOp, Variable
from .individual import Individual

TEX_SYMBOLS = {'add': '$+$', 'sub': '$-$', 'mul': '$\\times$', 'div': '\\%'}


def tree_to_string(tree: ASTNode) -> str:
    """Infix notation, with % for protected division"""
    return str(tree)


def _to_tex(tree: ASTNode) -> str:
    if isinstance(tree, BinaryOp):
        return "\\ptbeg \\ptnode{%s}\n\t%s\n\t%s\n\\ptend" % (
            TEX_SYMBOLS[tree.op], _to_tex(tree.left), _to_tex(tree.right))
    if isinstance(tree, UnaryOp):
        return "\\ptbeg \\ptnode{%s}\n\t%s\n\\ptend" % (tree.op, _to_tex(tree.child))
    if isinstance(tree, Variable):
        return "\\ptleaf{%s}" % tree.name
    if isinstance(tree, IntConstant):
        return "\\ptleaf{%d}" % int(tree.value)
    if isinstance(tree, Constant):
        return "\\ptleaf{%.3f}" % tree.value
    if isinstance(tree, Placeholder):
        return ""
    raise TypeError(f"Cannot render {type(tree).__name__} as LaTeX")


def tree_to_tex(tree: ASTNode) -> str:
    """Render a program for LaTeX with the parsetree.sty package"""
    return "\\bigskip\\ptbegtree\n%s\\ptendtree\n" % _to_tex(tree)


def population_table(population: Iterable[Individual]) -> str:
    """One line per individual: index, standardized and normalized fitness, program"""
    lines = []
    for index, individual in enumerate(population):
        lines.append(f"{index} {individual.standardized_fitness:g} "
                     f"{individual.normalized_fitness:g} {tree_to_string(individual.program)}")
    return '\n'.join(lines)

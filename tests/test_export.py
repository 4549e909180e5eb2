from treegp.ast_nodes import Constant, IntConstant, Placeholder, UnaryOp
from treegp.export import population_table, tree_to_string, tree_to_tex

from .helpers import add, div, make_individual, sin, sub, x


def test_tree_to_string():
    tree = div(sub(x(), IntConstant(-3.0)), UnaryOp('cos', Constant(0.25)))
    assert tree_to_string(tree) == "((x - -3) % cos(0.25))"
    assert tree_to_string(Placeholder()) == ""


def test_tree_to_tex():
    tex = tree_to_tex(add(x(), sin(IntConstant(2.0))))
    assert tex == (
        "\\bigskip\\ptbegtree\n"
        "\\ptbeg \\ptnode{$+$}\n"
        "\t\\ptleaf{x}\n"
        "\t\\ptbeg \\ptnode{sin}\n"
        "\t\\ptleaf{2}\n"
        "\\ptend\n"
        "\\ptend"
        "\\ptendtree\n"
    )


def test_tex_float_leaves_have_three_decimals():
    assert "\\ptleaf{1.500}" in tree_to_tex(div(x(), Constant(1.5)))
    assert "\\%" in tree_to_tex(div(x(), Constant(1.5)))


def test_population_table():
    individual = make_individual(2.5, add(x(), x()))
    individual.normalized_fitness = 0.5
    assert population_table([individual]) == "0 2.5 0.5 (x + x)"

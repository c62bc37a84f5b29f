import math

import pytest
import sympy as sp

from polish_quadrature import parse, ExpressionTree, Node, NodeKind
from polish_quadrature.errors import TreeStructureError
from polish_quadrature.expression_tree import ExpressionValidator, format_literal
from polish_quadrature.expression_tree.utils import (
    get_all_nodes, calculate_tree_depth, subtree_end,
    count_operators, get_constants, uses_variable
)


FORMULA = "(+ (/ (* 2.3 x) (log x)) (sin x) 8)"


def test_tree_accessors():
    tree = parse(FORMULA)
    assert len(tree) == tree.size() == 10
    assert tree.root == 0
    assert tree.children(0) == (1, 7, 9)
    assert tree[9] == Node.constant(8)
    assert tree.depth() == 4
    assert parse("(+ 1 2)").depth() == 2


def test_nodes_are_immutable():
    tree = parse("(+ 1 2)")
    assert isinstance(tree.nodes, tuple)
    with pytest.raises(AttributeError):
        tree[0].kind = NodeKind.MUL
    with pytest.raises(TypeError):
        tree.nodes[0] = Node.constant(1)


def test_to_string_is_canonical():
    assert parse("(  +  x   1.50 )").to_string() == "(+ x 1.5)"
    assert parse("(* pi (sqr x))").to_string() == "(* pi (sqr x))"
    assert parse("(+ t 1)", "t").to_string() == "(+ t 1.0)"


@pytest.mark.parametrize("formula", [
    FORMULA,
    "(* pi (sqr x))",
    "(- (pow x 2.5e-3) (cot (exp -.5)))",
    "(+ 1e10 (sqrt (tan x)) (cos 0.1) 12e+2)",
    "(/ (* x x x) (- 1 x))",
])
def test_canonical_text_parses_back(formula):
    tree = parse(formula)
    assert parse(tree.to_string()) == tree


def test_format_literal():
    assert format_literal(1.5) == "1.5"
    assert format_literal(-3.0) == "-3.0"
    assert format_literal(1e-5) == "1e-5"
    assert format_literal(1e22) == "1e22"
    assert format_literal(math.inf) == "1e999"
    assert format_literal(-math.inf) == "-1e999"


def test_formula_falls_back_to_canonical_text():
    nodes = [Node.operator(NodeKind.SIN, [1]), Node.variable()]
    tree = ExpressionTree(nodes)
    assert tree.formula == "(sin x)"
    assert parse("( sin x )").formula == "( sin x )"


def test_equality_and_hash():
    first = parse("(+ x 1)")
    second = parse("(+  x  1)")
    assert first == second
    assert hash(first) == hash(second)
    assert first != parse("(+ x 2)")
    assert parse("(+ t 1)", "t") != parse("(+ x 1)")
    assert len({first, second}) == 1


def test_repr():
    assert repr(parse("(sin x)")) == "ExpressionTree('(sin x)', variable='x')"


def test_to_sympy():
    x = sp.Symbol("x")
    assert parse("(* pi (sqr x))").to_sympy() == sp.pi * x**2
    assert sp.simplify(parse("(- (/ 1 x) (cot x))").to_sympy() - (1 / x - sp.cot(x))) == 0
    t = sp.Symbol("t")
    assert parse("(+ (exp t) (log t) 2)", "t").to_sympy() == sp.exp(t) + sp.log(t) + 2


def test_validator_accepts_parsed_trees():
    assert ExpressionValidator.is_valid_tree(parse(FORMULA).nodes)


@pytest.mark.parametrize("nodes", [
    [],
    # wrong operand count
    [Node.operator(NodeKind.ADD, [1]), Node.constant(1)],
    [Node.operator(NodeKind.SIN, [1, 2]), Node.variable(), Node.variable()],
    # leaves with operands
    [Node(NodeKind.CONSTANT, 1.0, (1,)), Node.variable()],
    # NaN constant
    [Node.constant(math.nan)],
    # operand before its operator
    [Node.variable(), Node.operator(NodeKind.SIN, [0])],
    # shared operand
    [Node.operator(NodeKind.ADD, [1, 1]), Node.variable()],
    # missing operand
    [Node.operator(NodeKind.SIN, [3]), Node.variable()],
    # unreachable node
    [Node.operator(NodeKind.SIN, [1]), Node.variable(), Node.variable()],
    # operands not in pre-order
    [Node.operator(NodeKind.ADD, [2, 1]), Node.variable(), Node.constant(1)],
    [Node.operator(NodeKind.ADD, [1, 2]), Node.operator(NodeKind.SIN, [3]), Node.constant(1), Node.variable()],
])
def test_validator_rejects_bad_arenas(nodes):
    assert not ExpressionValidator.is_valid_tree(nodes)
    with pytest.raises(TreeStructureError):
        ExpressionTree(nodes)


def test_traversals():
    nodes = parse(FORMULA).nodes
    assert get_all_nodes(nodes) == list(range(10))
    assert get_all_nodes(nodes, traversal_order='breadth_first') == [0, 1, 7, 9, 2, 5, 8, 3, 4, 6]
    with pytest.raises(ValueError):
        get_all_nodes(nodes, traversal_order='sideways')


def test_subtree_helpers():
    nodes = parse(FORMULA).nodes
    assert calculate_tree_depth(nodes) == 4
    assert subtree_end(nodes, 0) == 10
    assert subtree_end(nodes, 1) == 7
    assert subtree_end(nodes, 7) == 9
    assert subtree_end(nodes, 9) == 10


def test_node_statistics():
    nodes = parse(FORMULA).nodes
    assert count_operators(nodes) == {
        NodeKind.ADD: 1, NodeKind.DIV: 1, NodeKind.MUL: 1, NodeKind.LOG: 1, NodeKind.SIN: 1
    }
    assert get_constants(nodes) == [2.3, 8.0]
    assert uses_variable(nodes)
    assert not uses_variable(parse("(+ 1 2)").nodes)


def test_pi_constant_with_variable_named_pi():
    tree = parse("(+ pi 3.141592653589793)", "pi")
    assert tree[1].kind == NodeKind.VARIABLE
    assert tree[2] == Node.constant(math.pi)
    assert tree.to_string() == "(+ pi 3.141592653589793)"
    assert parse(tree.to_string(), "pi") == tree

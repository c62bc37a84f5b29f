"""
Evaluation of expression trees.

Both entry points reduce the arena recursively from the root, operands left
to right, and raise the first domain error met. Nothing here mutates the
tree, so the same tree may be evaluated concurrently from several threads.
"""

import numpy as np
from typing import Sequence, TYPE_CHECKING

from .expression_tree.core.node import Node
from .expression_tree.core.operators import (
    NodeKind, apply_variadic, apply_binary, apply_unary,
    divisor_is_zero, is_negative
)
from .errors import DivisionByZeroError, NegativeSquareRootError, NegativeLogarithmError

if TYPE_CHECKING:
    from .expression_tree import ExpressionTree


def _reduce(nodes: Sequence[Node], index: int, x):
    node = nodes[index]
    kind = node.kind
    if kind == NodeKind.VARIABLE:
        return x
    if kind == NodeKind.CONSTANT:
        return node.value

    values = [_reduce(nodes, child, x) for child in node.children]

    if kind == NodeKind.MUL or kind == NodeKind.ADD:
        return apply_variadic(kind, values)
    if kind == NodeKind.DIV:
        if divisor_is_zero(values[1]):
            raise DivisionByZeroError(index)
        return apply_binary(kind, values[0], values[1])
    if kind == NodeKind.SUB or kind == NodeKind.POW:
        return apply_binary(kind, values[0], values[1])
    if kind == NodeKind.SQRT and is_negative(values[0]):
        raise NegativeSquareRootError(index)
    if kind == NodeKind.LOG and is_negative(values[0]):
        # log(0) is allowed and yields -inf
        raise NegativeLogarithmError(index)
    return apply_unary(kind, values[0])


def evaluate(tree: 'ExpressionTree', x: float) -> float:
    """Value of the formula at `x`."""
    return float(_reduce(tree.nodes, 0, float(x)))


def evaluate_many(tree: 'ExpressionTree', xs) -> np.ndarray:
    """
    Values of the formula at every point of `xs`.

    Raises the evaluation error if any point is outside the domain of an
    operator; which point failed is not reported.
    """
    xs = np.asarray(xs, dtype=np.float64)
    result = _reduce(tree.nodes, 0, xs)
    return np.array(np.broadcast_to(result, xs.shape), dtype=np.float64)

"""Expression Tree Module

Arena representation of parsed prefix formulas.
"""

from .expression import ExpressionTree
from .core.node import Node, format_literal
from .core.operators import (
    NodeKind,
    Arity,
    OPERATOR_MAP,
    OPERATOR_TOKENS,
    ARITY,
    PI_TOKEN
)
from .utils import ExpressionValidator, to_sympy

__all__ = [
    "ExpressionTree",
    "Node", "format_literal",
    "NodeKind", "Arity",
    "OPERATOR_MAP", "OPERATOR_TOKENS", "ARITY", "PI_TOKEN",
    "ExpressionValidator", "to_sympy"
]

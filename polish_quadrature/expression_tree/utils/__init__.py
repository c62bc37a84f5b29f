"""Utilities for expression trees."""

from .validator import ExpressionValidator
from .sympy_utils import to_sympy, constant_to_sympy
from .tree_utils import (
    get_all_nodes, calculate_tree_depth, subtree_end,
    count_operators, get_constants, uses_variable
)

__all__ = [
    'ExpressionValidator',
    'to_sympy', 'constant_to_sympy',
    'get_all_nodes', 'calculate_tree_depth', 'subtree_end',
    'count_operators', 'get_constants', 'uses_variable'
]

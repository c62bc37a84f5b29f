"""Core expression tree components."""

from .node import Node, format_literal
from .operators import (
    NodeKind, Arity, OPERATOR_MAP, OPERATOR_TOKENS, ARITY, PI_TOKEN,
    is_leaf, apply_variadic, apply_binary, apply_unary,
    divisor_is_zero, is_negative
)

__all__ = [
    'Node', 'format_literal',
    'NodeKind', 'Arity', 'OPERATOR_MAP', 'OPERATOR_TOKENS', 'ARITY', 'PI_TOKEN',
    'is_leaf', 'apply_variadic', 'apply_binary', 'apply_unary',
    'divisor_is_zero', 'is_negative'
]

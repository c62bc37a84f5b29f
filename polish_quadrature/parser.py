"""
Prefix ("Polish") notation parser.

Formulas look like ``(* pi (sqr x))`` for pi*x^2: every operation is a
parenthesized group holding an operator token followed by whitespace
separated operands, each of which is a nested group, the free variable,
the constant ``pi`` or a numeric literal.

Parsing scans the immutable formula string and works on (start, end) spans;
all error positions refer to the original string.
"""

import math
import re
from typing import List, Tuple

from .expression_tree import ExpressionTree, Node
from .expression_tree.core.operators import OPERATOR_MAP, ARITY, PI_TOKEN
from .errors import (
    UnbalancedParenthesesError, UnknownOperatorError, ArityError,
    MissingSeparatorError, InvalidLiteralError, MalformedExpressionError
)
from .logging_system import LogLevel, get_logger, log_debug

Span = Tuple[int, int]

# Optional sign; integer part 0 or [1-9]\d*, optional fraction, optional
# exponent without leading zeros; or a bare leading-dot fraction.
LITERAL_PATTERN = re.compile(
    r'-?(?:(?:0|[1-9]\d*)(?:\.\d*)?(?:e[+-]?[1-9]\d*)?|\.\d+)'
)


def check_parentheses(formula: str):
    """
    Validate the parenthesis structure of `formula`.

    Raises UnbalancedParenthesesError with the index of the first closing
    parenthesis that has no match, or without an index when a group is left
    open. A formula with no parentheses at all counts as unclosed.
    """
    if '(' not in formula and ')' not in formula:
        raise UnbalancedParenthesesError()

    depth = 0
    for index, char in enumerate(formula):
        if char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
            if depth < 0:
                raise UnbalancedParenthesesError(index)

    if depth != 0:
        raise UnbalancedParenthesesError()


def parse(formula: str, variable: str = 'x') -> ExpressionTree:
    """
    Parse a prefix formula into an ExpressionTree.

    Args:
        formula: Formula text, e.g. "(+ (/ (* 2.3 x) (log x)) (sin x) 8)"
        variable: Symbol of the free variable

    Returns:
        Immutable expression tree in pre-order

    Raises:
        ParseError: subclass describing the first structural problem found
    """
    if formula is None:
        raise MalformedExpressionError("Formula is undefined")
    if not formula.strip():
        raise MalformedExpressionError("Formula is empty")

    check_parentheses(formula)

    start = _skip_whitespace(formula, 0, len(formula))
    if start == len(formula) or formula[start] != '(':
        raise MalformedExpressionError(
            f"Expected a parenthesized expression at {start}")
    close = _matching_paren(formula, start)
    trailing = _skip_whitespace(formula, close + 1, len(formula))
    if trailing != len(formula):
        raise MalformedExpressionError(
            f"Unexpected text after the expression at {trailing}")

    builder = _TreeBuilder(formula, variable)
    builder.parse_group(start, close)
    if get_logger().is_enabled(LogLevel.VERBOSE):
        log_debug(f"Parsed {formula!r} into {len(builder.nodes)} nodes")
    return ExpressionTree(builder.nodes, variable, formula)


def _skip_whitespace(text: str, index: int, end: int) -> int:
    while index < end and text[index].isspace():
        index += 1
    return index


def _matching_paren(text: str, open_index: int) -> int:
    """Index of the ')' closing the group opened at `open_index`"""
    depth = 0
    for index in range(open_index, len(text)):
        char = text[index]
        if char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
            if depth == 0:
                return index
    raise UnbalancedParenthesesError()


def split_operands(text: str, start: int, end: int) -> List[Span]:
    """
    Split text[start:end] into top-level operand spans.

    A parenthesized sub-formula is one operand regardless of the whitespace
    inside it, and must be followed by whitespace or the end of the group.
    """
    spans: List[Span] = []
    index = _skip_whitespace(text, start, end)
    while index < end:
        if text[index] == '(':
            close = _matching_paren(text, index)
            after = close + 1
            if after < end and not text[after].isspace():
                raise MissingSeparatorError(after)
            spans.append((index, after))
            index = after
        else:
            token_end = index
            while token_end < end and not text[token_end].isspace() and text[token_end] != '(':
                token_end += 1
            if token_end < end and text[token_end] == '(':
                raise MissingSeparatorError(token_end)
            spans.append((index, token_end))
            index = token_end
        index = _skip_whitespace(text, index, end)
    return spans


def parse_literal(token: str) -> float:
    if not LITERAL_PATTERN.fullmatch(token):
        raise InvalidLiteralError(token)
    return float(token)


class _TreeBuilder:
    """Appends nodes in pre-order while descending through the groups"""

    def __init__(self, text: str, variable: str):
        self.text = text
        self.variable = variable
        self.nodes: List[Node] = []

    def parse_group(self, open_index: int, close_index: int) -> int:
        text = self.text
        body_start = _skip_whitespace(text, open_index + 1, close_index)
        if body_start == close_index:
            raise MalformedExpressionError(f"Empty expression at {open_index}")

        if text[body_start] == '(':
            nested_close = _matching_paren(text, body_start)
            raise UnknownOperatorError(text[body_start:nested_close + 1])

        token_end = body_start
        while token_end < close_index and not text[token_end].isspace() and text[token_end] != '(':
            token_end += 1
        token = text[body_start:token_end]
        if token not in OPERATOR_MAP:
            raise UnknownOperatorError(token)
        if token_end < close_index and text[token_end] == '(':
            raise MissingSeparatorError(token_end)

        kind = OPERATOR_MAP[token]
        operands = split_operands(text, token_end, close_index)
        arity = ARITY[kind]
        if not arity.accepts(len(operands)):
            raise ArityError(token, arity, len(operands))

        index = len(self.nodes)
        self.nodes.append(None)  # placeholder until child indices are known
        children = []
        for span_start, span_end in operands:
            children.append(len(self.nodes))
            if text[span_start] == '(':
                self.parse_group(span_start, span_end - 1)
            else:
                self.nodes.append(self._leaf(text[span_start:span_end]))
        self.nodes[index] = Node.operator(kind, children)
        return index

    def _leaf(self, token: str) -> Node:
        if token == self.variable:
            return Node.variable()
        if token == PI_TOKEN:
            return Node.constant(math.pi)
        return Node.constant(parse_literal(token))

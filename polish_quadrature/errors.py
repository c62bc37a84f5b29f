"""
Exception taxonomy for parsing, evaluating and integrating prefix formulas.

Parse errors are raised only by the parser, evaluation errors only while a
tree is being evaluated (directly or from inside an integration).
"""

from typing import Optional


class ParseError(ValueError):
    """Base class for structural problems in a formula string."""


class UnbalancedParenthesesError(ParseError):
    def __init__(self, index: Optional[int] = None):
        self.index = index
        if index is None:
            message = "Unclosed parentheses"
        else:
            message = f"Extra closing parenthesis at {index}"
        super().__init__(message)

    @property
    def unclosed(self) -> bool:
        return self.index is None


class UnknownOperatorError(ParseError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Unknown operation type: {token!r}")


class ArityError(ParseError):
    def __init__(self, operator: str, expected, actual: int):
        self.operator = operator
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Incorrect number of operands in the {operator} operation: "
            f"expected {expected.describe()}, got {actual}"
        )


class MissingSeparatorError(ParseError):
    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Whitespace between brackets is missed at {index}")


class InvalidLiteralError(ParseError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid number format: {token!r}")


class MalformedExpressionError(ParseError):
    """Formula is not a single parenthesized expression."""


class EvaluationError(ArithmeticError):
    """Base class for domain errors hit while evaluating a tree."""

    default_message = "Evaluation failed"

    def __init__(self, node_index: Optional[int] = None, message: Optional[str] = None):
        self.node_index = node_index
        text = message or self.default_message
        if node_index is not None:
            text = f"{text} (node {node_index})"
        super().__init__(text)


class DivisionByZeroError(EvaluationError, ZeroDivisionError):
    default_message = "Division by zero"


class NegativeSquareRootError(EvaluationError):
    default_message = "Square root of a negative value"


class NegativeLogarithmError(EvaluationError):
    default_message = "Logarithm of a negative value"


class TreeStructureError(ValueError):
    """Node arena violates the expression tree invariants."""


class ConfigurationError(ValueError):
    """Invalid approximation order, grain or execution setting."""


class IntegrationCancelled(RuntimeError):
    """Raised when a cancellation event is set during an integration."""


class ReversedLimitsWarning(UserWarning):
    """Integration limits were given in descending order."""

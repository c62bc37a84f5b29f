# Python

"""Prefix Formula Quadrature

Parse formulas written in prefix ("Polish") notation, evaluate them and
integrate them numerically with composite Newton-Cotes rules.
"""

from .expression_tree import ExpressionTree, Node, NodeKind
from .parser import parse, check_parentheses
from .evaluator import evaluate, evaluate_many
from .integrator import Integral, integrate, compute_step, NEWTON_COTES_WEIGHTS, COEFFICIENT_SUMS
from .config import ApproxOrder, Grain, IntegralConfig
from .errors import (
  ParseError, UnbalancedParenthesesError, UnknownOperatorError, ArityError,
  MissingSeparatorError, InvalidLiteralError, MalformedExpressionError,
  EvaluationError, DivisionByZeroError, NegativeSquareRootError, NegativeLogarithmError,
  TreeStructureError, ConfigurationError, IntegrationCancelled, ReversedLimitsWarning
)
from .logging_system import LogLevel, configure_logging, get_logger

__version__ = "0.1.0"
__all__ = [
  "ExpressionTree", "Node", "NodeKind",
  "parse", "check_parentheses",
  "evaluate", "evaluate_many",
  "Integral", "integrate", "compute_step", "NEWTON_COTES_WEIGHTS", "COEFFICIENT_SUMS",
  "ApproxOrder", "Grain", "IntegralConfig",
  "ParseError", "UnbalancedParenthesesError", "UnknownOperatorError", "ArityError",
  "MissingSeparatorError", "InvalidLiteralError", "MalformedExpressionError",
  "EvaluationError", "DivisionByZeroError", "NegativeSquareRootError", "NegativeLogarithmError",
  "TreeStructureError", "ConfigurationError", "IntegrationCancelled", "ReversedLimitsWarning",
  "LogLevel", "configure_logging", "get_logger"
]

import numpy as np
from enum import IntEnum
from typing import Dict, NamedTuple, Optional


class NodeKind(IntEnum):
  # Leaves
  VARIABLE = 0
  CONSTANT = 1
  # Operators
  MUL = 2
  DIV = 3
  ADD = 4
  SUB = 5
  SQR = 6
  SQRT = 7
  POW = 8
  SIN = 9
  COS = 10
  TAN = 11
  COT = 12
  EXP = 13
  LOG = 14


class Arity(NamedTuple):
  minimum: int
  maximum: Optional[int]  # None for variadic operators

  def accepts(self, count: int) -> bool:
    if count < self.minimum:
      return False
    return self.maximum is None or count <= self.maximum

  def describe(self) -> str:
    if self.maximum is None:
      return f"at least {self.minimum}"
    return f"exactly {self.minimum}"


UNARY = Arity(1, 1)
BINARY = Arity(2, 2)
VARIADIC = Arity(2, None)

# Token -> kind mapping for the prefix grammar
OPERATOR_MAP: Dict[str, NodeKind] = {
  '*': NodeKind.MUL,
  '/': NodeKind.DIV,
  '+': NodeKind.ADD,
  '-': NodeKind.SUB,
  'sqr': NodeKind.SQR,
  'sqrt': NodeKind.SQRT,
  'pow': NodeKind.POW,
  'sin': NodeKind.SIN,
  'cos': NodeKind.COS,
  'tan': NodeKind.TAN,
  'cot': NodeKind.COT,
  'exp': NodeKind.EXP,
  'log': NodeKind.LOG,
}

OPERATOR_TOKENS: Dict[NodeKind, str] = {kind: token for token, kind in OPERATOR_MAP.items()}

ARITY: Dict[NodeKind, Arity] = {
  NodeKind.MUL: VARIADIC,
  NodeKind.ADD: VARIADIC,
  NodeKind.DIV: BINARY,
  NodeKind.SUB: BINARY,
  NodeKind.POW: BINARY,
  NodeKind.SQR: UNARY,
  NodeKind.SQRT: UNARY,
  NodeKind.SIN: UNARY,
  NodeKind.COS: UNARY,
  NodeKind.TAN: UNARY,
  NodeKind.COT: UNARY,
  NodeKind.EXP: UNARY,
  NodeKind.LOG: UNARY,
}

PI_TOKEN = 'pi'


def is_leaf(kind: NodeKind) -> bool:
  return kind == NodeKind.VARIABLE or kind == NodeKind.CONSTANT


# Domain checks work on scalars and arrays alike; callers raise the matching
# evaluation error when one fires. Signed zeros are ordered -0.0 < 0.0: only
# +0.0 is a zero divisor, and -0.0 counts as negative. NaN is neither.

def divisor_is_zero(divisor) -> bool:
  return bool(np.any((divisor == 0.0) & ~np.signbit(divisor)))


def is_negative(operand) -> bool:
  return bool(np.any(np.signbit(operand) & (operand <= 0.0)))


def apply_variadic(kind: NodeKind, values):
  # Left fold from the identity, in operand order
  with np.errstate(all='ignore'):
    if kind == NodeKind.MUL:
      result = 1.0
      for value in values:
        result = result * value
      return result
    elif kind == NodeKind.ADD:
      result = 0.0
      for value in values:
        result = result + value
      return result
  raise ValueError(f"Not a variadic operator: {kind!r}")


def apply_binary(kind: NodeKind, left, right):
  with np.errstate(all='ignore'):
    if kind == NodeKind.DIV:
      return np.divide(left, right)
    elif kind == NodeKind.SUB:
      return np.subtract(left, right)
    elif kind == NodeKind.POW:
      return np.power(left, right)
  raise ValueError(f"Not a binary operator: {kind!r}")


def apply_unary(kind: NodeKind, operand):
  with np.errstate(all='ignore'):
    if kind == NodeKind.SQR:
      return np.power(operand, 2.0)
    elif kind == NodeKind.SQRT:
      return np.sqrt(operand)
    elif kind == NodeKind.SIN:
      return np.sin(operand)
    elif kind == NodeKind.COS:
      return np.cos(operand)
    elif kind == NodeKind.TAN:
      return np.tan(operand)
    elif kind == NodeKind.COT:
      # tan(a) == 0 gives a signed infinity, not an error
      return np.divide(1.0, np.tan(operand))
    elif kind == NodeKind.EXP:
      return np.exp(operand)
    elif kind == NodeKind.LOG:
      return np.log(operand)
  raise ValueError(f"Not a unary operator: {kind!r}")

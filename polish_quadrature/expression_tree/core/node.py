from typing import NamedTuple, Tuple
from .operators import NodeKind, OPERATOR_TOKENS, PI_TOKEN, is_leaf

import math


class Node(NamedTuple):
  """Arena entry: operator nodes reference their operands by index"""

  kind: NodeKind
  value: float = 0.0
  children: Tuple[int, ...] = ()

  @classmethod
  def variable(cls) -> 'Node':
    return cls(NodeKind.VARIABLE)

  @classmethod
  def constant(cls, value: float) -> 'Node':
    return cls(NodeKind.CONSTANT, float(value))

  @classmethod
  def operator(cls, kind: NodeKind, children) -> 'Node':
    return cls(kind, 0.0, tuple(children))

  @property
  def is_leaf(self) -> bool:
    return is_leaf(self.kind)

  def token(self, variable: str = 'x') -> str:
    if self.kind == NodeKind.VARIABLE:
      return variable
    if self.kind == NodeKind.CONSTANT:
      # a variable named pi shadows the constant
      if self.value == math.pi and variable != PI_TOKEN:
        return PI_TOKEN
      return format_literal(self.value)
    return OPERATOR_TOKENS[self.kind]


def format_literal(value: float) -> str:
  """Shortest literal text that reads back as `value` under the prefix grammar."""
  if math.isinf(value):
    return '1e999' if value > 0 else '-1e999'
  text = repr(float(value))
  if 'e' not in text:
    return text
  mantissa, exponent = text.split('e')
  sign = '-' if exponent.startswith('-') else ''
  return f"{mantissa}e{sign}{exponent.lstrip('+-').lstrip('0')}"

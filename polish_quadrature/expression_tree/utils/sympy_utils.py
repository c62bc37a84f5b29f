import math
import sympy as sp
from typing import Sequence
from ..core.node import Node
from ..core.operators import NodeKind


def constant_to_sympy(value: float) -> sp.Expr:
  if value == math.pi:
    return sp.pi
  if math.isfinite(value) and value == int(value):
    return sp.Integer(int(value))
  if math.isinf(value):
    return sp.oo if value > 0 else -sp.oo
  return sp.Float(value)


def to_sympy(nodes: Sequence[Node], variable: str = 'x', root: int = 0) -> sp.Expr:
  """Convert the subtree at `root` into a SymPy expression in `variable`"""
  symbol = sp.Symbol(variable)

  def convert(index: int) -> sp.Expr:
    node = nodes[index]
    if node.kind == NodeKind.VARIABLE:
      return symbol
    if node.kind == NodeKind.CONSTANT:
      return constant_to_sympy(node.value)

    args = [convert(child) for child in node.children]
    if node.kind == NodeKind.MUL:
      return sp.Mul(*args)
    elif node.kind == NodeKind.ADD:
      return sp.Add(*args)
    elif node.kind == NodeKind.DIV:
      return sp.Mul(args[0], sp.Pow(args[1], -1))
    elif node.kind == NodeKind.SUB:
      return sp.Add(args[0], sp.Mul(-1, args[1]))
    elif node.kind == NodeKind.POW:
      return sp.Pow(args[0], args[1])
    elif node.kind == NodeKind.SQR:
      return args[0] ** 2
    elif node.kind == NodeKind.SQRT:
      return sp.sqrt(args[0])
    elif node.kind == NodeKind.SIN:
      return sp.sin(args[0])
    elif node.kind == NodeKind.COS:
      return sp.cos(args[0])
    elif node.kind == NodeKind.TAN:
      return sp.tan(args[0])
    elif node.kind == NodeKind.COT:
      return sp.cot(args[0])
    elif node.kind == NodeKind.EXP:
      return sp.exp(args[0])
    elif node.kind == NodeKind.LOG:
      return sp.log(args[0])
    raise RuntimeWarning(f"to_sympy reached unexpected node kind: {node.kind!r}")

  return convert(root)

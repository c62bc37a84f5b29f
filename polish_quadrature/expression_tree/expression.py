import numpy as np
import sympy as sp
from typing import Iterator, Optional, Sequence, Tuple
from .core.node import Node
from .utils.validator import ExpressionValidator
from .utils.tree_utils import calculate_tree_depth
from .utils.sympy_utils import to_sympy


class ExpressionTree:
  """Immutable pre-order arena of a parsed formula.

  Node 0 is the root; every operator node is followed by its operand subtrees
  in left-to-right order. Evaluation walks the arena by index and never
  modifies it, so one tree can be evaluated any number of times, from any
  number of threads.
  """

  __slots__ = ('_nodes', '_variable', '_formula', '_string_cache', '_hash_cache')

  def __init__(self, nodes: Sequence[Node], variable: str = 'x', formula: Optional[str] = None):
    nodes = tuple(nodes)
    ExpressionValidator.validate(nodes, 0)
    self._nodes: Tuple[Node, ...] = nodes
    self._variable = variable
    self._formula = formula
    self._string_cache: Optional[str] = None
    self._hash_cache: Optional[int] = None

  @property
  def nodes(self) -> Tuple[Node, ...]:
    return self._nodes

  @property
  def root(self) -> int:
    return 0

  @property
  def variable(self) -> str:
    return self._variable

  @property
  def formula(self) -> str:
    """Source text the tree was parsed from, or its canonical form"""
    return self._formula if self._formula is not None else self.to_string()

  def __len__(self) -> int:
    return len(self._nodes)

  def __getitem__(self, index: int) -> Node:
    return self._nodes[index]

  def __iter__(self) -> Iterator[Node]:
    return iter(self._nodes)

  def children(self, index: int) -> Tuple[int, ...]:
    return self._nodes[index].children

  def size(self) -> int:
    """Node count"""
    return len(self._nodes)

  def depth(self) -> int:
    return calculate_tree_depth(self._nodes, 0)

  def evaluate(self, x: float) -> float:
    from ..evaluator import evaluate
    return evaluate(self, x)

  def evaluate_many(self, xs) -> np.ndarray:
    from ..evaluator import evaluate_many
    return evaluate_many(self, xs)

  def __call__(self, x: float) -> float:
    return self.evaluate(x)

  def to_string(self) -> str:
    """Canonical prefix text; parsing it yields an equal tree"""
    if self._string_cache is None:
      self._string_cache = self._render(0)
    return self._string_cache

  def _render(self, index: int) -> str:
    node = self._nodes[index]
    if node.is_leaf:
      return node.token(self._variable)
    operands = ' '.join(self._render(child) for child in node.children)
    return f"({node.token(self._variable)} {operands})"

  def to_sympy(self) -> sp.Expr:
    return to_sympy(self._nodes, self._variable, 0)

  def __hash__(self) -> int:
    if self._hash_cache is None:
      self._hash_cache = hash((self._variable, self._nodes))
    return self._hash_cache

  def __eq__(self, other) -> bool:
    if not isinstance(other, ExpressionTree):
      return NotImplemented
    return self._variable == other._variable and self._nodes == other._nodes

  def __repr__(self) -> str:
    return f"ExpressionTree({self.to_string()!r}, variable={self._variable!r})"

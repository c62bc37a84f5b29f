import math
from typing import List, Sequence
from ..core.node import Node
from ..core.operators import NodeKind, ARITY
from ...errors import TreeStructureError


class ExpressionValidator:

  @staticmethod
  def is_valid_tree(nodes: Sequence[Node], root: int = 0) -> bool:
    try:
      ExpressionValidator.validate(nodes, root)
      return True
    except TreeStructureError:
      return False

  @staticmethod
  def validate(nodes: Sequence[Node], root: int = 0):
    """Raise TreeStructureError unless `nodes` is a pre-order arena rooted at `root`."""
    if not nodes:
      raise TreeStructureError("Expression tree has no nodes")
    if not 0 <= root < len(nodes):
      raise TreeStructureError(f"Root index {root} out of range")

    referenced: List[int] = [0] * len(nodes)
    for index, node in enumerate(nodes):
      ExpressionValidator._check_node(index, node)
      for child in node.children:
        if not 0 <= child < len(nodes):
          raise TreeStructureError(f"Node {index} references missing node {child}")
        if child <= index:
          raise TreeStructureError(f"Node {index} references earlier node {child}")
        referenced[child] += 1

    for index, count in enumerate(referenced):
      if index == root:
        if count:
          raise TreeStructureError(f"Root node {index} is referenced as an operand")
      elif count != 1:
        raise TreeStructureError(f"Node {index} is referenced {count} times")

    reachable = ExpressionValidator._reachable(nodes, root)
    if reachable != len(nodes):
      raise TreeStructureError(f"{len(nodes) - reachable} nodes unreachable from root")

    # Operands must follow their operator contiguously, left to right
    for position, index in enumerate(ExpressionValidator._preorder(nodes, root)):
      if position != index:
        raise TreeStructureError(f"Node {index} is out of pre-order (expected {position})")

  @staticmethod
  def _check_node(index: int, node: Node):
    if node.kind == NodeKind.VARIABLE:
      if node.children:
        raise TreeStructureError(f"Variable node {index} has operands")
    elif node.kind == NodeKind.CONSTANT:
      if node.children:
        raise TreeStructureError(f"Constant node {index} has operands")
      if math.isnan(node.value):
        raise TreeStructureError(f"Constant node {index} is NaN")
    elif node.kind in ARITY:
      arity = ARITY[node.kind]
      if not arity.accepts(len(node.children)):
        raise TreeStructureError(
          f"Node {index} ({node.kind.name}) expects {arity.describe()} operands, "
          f"got {len(node.children)}")
    else:
      raise TreeStructureError(f"Node {index} has unknown kind {node.kind!r}")

  @staticmethod
  def _reachable(nodes: Sequence[Node], root: int) -> int:
    seen = set()
    pending = [root]
    while pending:
      index = pending.pop()
      if index in seen:
        continue
      seen.add(index)
      pending.extend(nodes[index].children)
    return len(seen)

  @staticmethod
  def _preorder(nodes: Sequence[Node], root: int) -> List[int]:
    order = []
    pending = [root]
    while pending:
      index = pending.pop()
      order.append(index)
      pending.extend(reversed(nodes[index].children))
    return order

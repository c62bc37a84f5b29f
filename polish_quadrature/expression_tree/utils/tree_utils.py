"""
Tree Utility Functions

Traversal and analysis helpers over the node arena of an expression tree.
All functions take the arena (a sequence of nodes) and never modify it.
"""

from typing import Dict, List, Sequence
from collections import Counter

from ..core.node import Node
from ..core.operators import NodeKind


def get_all_nodes(nodes: Sequence[Node], root: int = 0,
                  traversal_order: str = 'depth_first') -> List[int]:
    """
    Get the indices of all nodes reachable from `root`.

    Args:
        nodes: Node arena
        root: Index to start from
        traversal_order: 'depth_first' (default, pre-order) or 'breadth_first'

    Returns:
        List of node indices in visiting order
    """
    if traversal_order == 'depth_first':
        return _depth_first_traversal(nodes, root)
    elif traversal_order == 'breadth_first':
        return _breadth_first_traversal(nodes, root)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _depth_first_traversal(nodes: Sequence[Node], root: int) -> List[int]:
    """Pre-order traversal (iterative)"""
    order = []
    stack = [root]
    while stack:
        index = stack.pop()
        order.append(index)
        stack.extend(reversed(nodes[index].children))
    return order


def _breadth_first_traversal(nodes: Sequence[Node], root: int) -> List[int]:
    order = []
    frontier = [root]
    while frontier:
        index = frontier.pop(0)
        order.append(index)
        frontier.extend(nodes[index].children)
    return order


def calculate_tree_depth(nodes: Sequence[Node], root: int = 0) -> int:
    """
    Calculate the maximum depth of the tree.

    Leaf nodes have depth 1. Children always sit after their parent in the
    arena, so depths are filled in a single reverse sweep.
    """
    depths = [1] * len(nodes)
    for index in range(len(nodes) - 1, root - 1, -1):
        children = nodes[index].children
        if children:
            depths[index] = 1 + max(depths[child] for child in children)
    return depths[root]


def subtree_end(nodes: Sequence[Node], index: int) -> int:
    """Exclusive end of the contiguous arena slice holding the subtree at `index`."""
    # Rightmost leaf of the subtree is its last arena entry
    while nodes[index].children:
        index = nodes[index].children[-1]
    return index + 1


def count_operators(nodes: Sequence[Node]) -> Dict[NodeKind, int]:
    """Occurrences of each operator kind (leaves excluded)"""
    return dict(Counter(node.kind for node in nodes if not node.is_leaf))


def get_constants(nodes: Sequence[Node]) -> List[float]:
    """Constant values in arena order"""
    return [node.value for node in nodes if node.kind == NodeKind.CONSTANT]


def uses_variable(nodes: Sequence[Node]) -> bool:
    return any(node.kind == NodeKind.VARIABLE for node in nodes)

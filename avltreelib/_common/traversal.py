"""Traversal export for AVL trees.

Every traversal here is a full walk materialized into a list. Trees rebuilt
from traversal pairs can be arbitrarily deep, so the walks use explicit
stacks instead of recursion.
"""

from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, List, NamedTuple, Optional

from .node import AVLNode


def inorder(root: Optional[AVLNode]) -> List[Any]:
    """Left subtree, node, right subtree. Sorted for a valid BST."""
    result: List[Any] = []
    stack: List[AVLNode] = []
    current = root
    while stack or current is not None:
        while current is not None:
            stack.append(current)
            current = current.left
        current = stack.pop()
        result.append(current.value)
        current = current.right
    return result


def preorder(root: Optional[AVLNode]) -> List[Any]:
    """Node before its subtrees."""
    result: List[Any] = []
    stack = [root] if root is not None else []
    while stack:
        node = stack.pop()
        result.append(node.value)
        # Push right first so left is visited first
        if node.right is not None:
            stack.append(node.right)
        if node.left is not None:
            stack.append(node.left)
    return result


def postorder(root: Optional[AVLNode]) -> List[Any]:
    """Subtrees before the node."""
    result: List[Any] = []
    stack = [root] if root is not None else []
    # Node-right-left preorder, reversed
    while stack:
        node = stack.pop()
        result.append(node.value)
        if node.left is not None:
            stack.append(node.left)
        if node.right is not None:
            stack.append(node.right)
    result.reverse()
    return result


def level_order(root: Optional[AVLNode]) -> List[List[Any]]:
    """Values grouped by depth, top row first."""
    levels: List[List[Any]] = []
    queue: Deque[AVLNode] = deque([root] if root is not None else [])
    while queue:
        row = []
        for _ in range(len(queue)):
            node = queue.popleft()
            row.append(node.value)
            if node.left is not None:
                queue.append(node.left)
            if node.right is not None:
                queue.append(node.right)
        levels.append(row)
    return levels


def format_traversal(values: List[Any], separator: str = " → ") -> str:
    """Join traversal values for display, ``Empty`` for an empty tree."""
    if not values:
        return "Empty"
    return separator.join(str(v) for v in values)


class DescentStep(NamedTuple):
    """One comparison made while descending toward a value."""
    depth: int              # 1 for the root
    node_value: Any
    direction: Optional[str]  # 'left', 'right', or None on a match

    def describe(self, value: Any) -> str:
        if self.direction is None:
            return f"Level {self.depth}: found {value}"
        comparison = "less than" if self.direction == 'left' else "greater than"
        return (f"Level {self.depth}: {value} is {comparison} "
                f"{self.node_value}, go {self.direction}")


@dataclass
class SearchResult:
    """Outcome of a search: whether the value exists and the values visited."""
    found: bool
    path: List[Any]

    def __bool__(self) -> bool:
        return self.found


def trace_descent(root: Optional[AVLNode], value: Any) -> List[DescentStep]:
    """Record each comparison on the way to ``value``.

    The trace ends at the matching node, or at the last node before the
    empty slot where ``value`` would be inserted.
    """
    steps: List[DescentStep] = []
    current = root
    depth = 0
    while current is not None:
        depth += 1
        if value == current.value:
            steps.append(DescentStep(depth, current.value, None))
            break
        if value < current.value:
            steps.append(DescentStep(depth, current.value, 'left'))
            current = current.left
        else:
            steps.append(DescentStep(depth, current.value, 'right'))
            current = current.right
    return steps


def search(root: Optional[AVLNode], value: Any) -> SearchResult:
    """Iterative descent from ``root``. Never mutates the tree."""
    steps = trace_descent(root, value)
    found = bool(steps) and steps[-1].direction is None
    return SearchResult(found=found, path=[step.node_value for step in steps])

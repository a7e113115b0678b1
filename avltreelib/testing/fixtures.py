"""Test fixtures for avltreelib consumers.

These helpers check tree invariants and record observer traffic, so
projects that drive the engine (renderers, exercises, graders) can test
against it without reaching into internals.
"""

from typing import Any, List, Optional, Tuple

from .._common.node import AVLNode, balance_factor, height
from .._common.traversal import preorder


class TreeInvariantChecker:
    """Verify the structural invariants of an AVL tree.

    Example:
        checker = TreeInvariantChecker(tree.root)
        assert checker.is_valid_avl(), checker.violations()
    """

    def __init__(self, root: Optional[AVLNode]):
        """Initialize with the root to inspect.

        Args:
            root: Root node (None for an empty tree)
        """
        self.root = root

    def height_violations(self) -> List[Any]:
        """Values of nodes whose cached height is wrong."""
        bad = []
        for node in self._nodes():
            if node.height != 1 + max(height(node.left), height(node.right)):
                bad.append(node.value)
        return bad

    def balance_violations(self) -> List[Any]:
        """Values of nodes whose balance factor is outside {-1, 0, 1}."""
        return [node.value for node in self._nodes() if abs(balance_factor(node)) > 1]

    def ordering_violations(self) -> List[Any]:
        """Values of nodes that break strict BST ordering."""
        bad = []
        # (node, exclusive lower bound, exclusive upper bound)
        stack: List[Tuple[AVLNode, Any, Any]] = []
        if self.root is not None:
            stack.append((self.root, None, None))
        while stack:
            node, low, high = stack.pop()
            if (low is not None and not low < node.value) or \
               (high is not None and not node.value < high):
                bad.append(node.value)
            if node.left is not None:
                stack.append((node.left, low, node.value))
            if node.right is not None:
                stack.append((node.right, node.value, high))
        return bad

    def violations(self) -> dict:
        """All violations, keyed by invariant name."""
        return {
            'height': self.height_violations(),
            'balance': self.balance_violations(),
            'ordering': self.ordering_violations(),
        }

    def is_valid_bst(self) -> bool:
        return not self.ordering_violations() and not self.height_violations()

    def is_valid_avl(self) -> bool:
        return not any(self.violations().values())

    def _nodes(self) -> List[AVLNode]:
        nodes = []
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            nodes.append(node)
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        return nodes


class RecordingObserver:
    """Rotation observer that records what it was shown.

    For every rotation it stores the direction, the old and new root
    values, and the preorder of the old root's subtree as it looked
    before the rotation. Works with both engines.
    """

    def __init__(self):
        self.rotations: List[Tuple[str, Any, Any]] = []
        self.snapshots: List[List[Any]] = []

    def __call__(self, direction: str, old_root: AVLNode, new_root: AVLNode) -> None:
        self.rotations.append((direction, old_root.value, new_root.value))
        self.snapshots.append(preorder(old_root))

    @property
    def directions(self) -> List[str]:
        return [direction for direction, _, _ in self.rotations]

    def clear(self) -> None:
        self.rotations.clear()
        self.snapshots.clear()

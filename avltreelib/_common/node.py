"""AVL node model and height bookkeeping.

The node is a plain data container. Balancing logic lives in the engines
(sync and aio); the helpers here are the pure pieces both of them share.
"""

from typing import Any, Dict, List, Optional


class AVLNode:
    """One element of an AVL tree.

    Each node exclusively owns its ``left`` and ``right`` subtrees. The
    cached ``height`` is 1 for a leaf and must be refreshed with
    :func:`update_height` after any structural change beneath the node.
    """

    __slots__ = ('value', 'left', 'right', 'height')

    def __init__(self, value: Any,
                 left: Optional['AVLNode'] = None,
                 right: Optional['AVLNode'] = None):
        self.value = value
        self.left = left
        self.right = right
        self.height = 1

    def is_leaf(self) -> bool:
        """Check if this node has no children."""
        return self.left is None and self.right is None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(value={self.value!r}, height={self.height})"


def height(node: Optional[AVLNode]) -> int:
    """Return the cached height of ``node``, 0 for an absent subtree."""
    if node is None:
        return 0
    return node.height


def balance_factor(node: Optional[AVLNode]) -> int:
    """Return ``height(left) - height(right)``, 0 for an absent node."""
    if node is None:
        return 0
    return height(node.left) - height(node.right)


def update_height(node: AVLNode) -> int:
    """Recompute and store the height of ``node`` from its children.

    Returns:
        The new height
    """
    node.height = 1 + max(height(node.left), height(node.right))
    return node.height


def min_value_node(node: AVLNode) -> AVLNode:
    """Return the leftmost descendant of ``node``.

    Called on a right subtree this yields the in-order successor used
    when deleting a node with two children.
    """
    current = node
    while current.left is not None:
        current = current.left
    return current


def count_nodes(node: Optional[AVLNode]) -> int:
    """Count the nodes in a subtree."""
    count = 0
    stack = [node] if node is not None else []
    while stack:
        current = stack.pop()
        count += 1
        if current.left is not None:
            stack.append(current.left)
        if current.right is not None:
            stack.append(current.right)
    return count


def same_structure(a: Optional[AVLNode], b: Optional[AVLNode]) -> bool:
    """Check whether two subtrees have identical values and shape.

    Heights are not compared; two trees are the same when every node holds
    the same value and has the same parent/child relationships.
    """
    stack = [(a, b)]
    while stack:
        left, right = stack.pop()
        if left is None or right is None:
            if left is not right:
                return False
            continue
        if left.value != right.value:
            return False
        stack.append((left.left, right.left))
        stack.append((left.right, right.right))
    return True


def node_to_dict(node: Optional[AVLNode]) -> Optional[Dict[str, Any]]:
    """Snapshot a subtree as nested dictionaries.

    Renderers use this to draw a tree without holding live node
    references. Each entry carries ``value``, ``height``, ``balance``,
    ``left`` and ``right``.
    """
    if node is None:
        return None

    def entry(current: AVLNode) -> Dict[str, Any]:
        return {
            'value': current.value,
            'height': current.height,
            'balance': balance_factor(current),
            'left': None,
            'right': None,
        }

    snapshot = entry(node)
    stack = [(node, snapshot)]
    while stack:
        current, parent_entry = stack.pop()
        for side in ('left', 'right'):
            child = getattr(current, side)
            if child is not None:
                parent_entry[side] = entry(child)
                stack.append((child, parent_entry[side]))
    return snapshot


def find_unbalanced(node: Optional[AVLNode]) -> List[Any]:
    """Values of nodes whose balance factor lies outside ``{-1, 0, 1}``.

    Uses cached heights, so the height invariant must hold.
    """
    unbalanced = []
    stack = [node] if node is not None else []
    while stack:
        current = stack.pop()
        if abs(balance_factor(current)) > 1:
            unbalanced.append(current.value)
        if current.left is not None:
            stack.append(current.left)
        if current.right is not None:
            stack.append(current.right)
    return unbalanced

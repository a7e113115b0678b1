"""High-level API for the synchronous AVL engine.

This module provides simple, functional interfaces for common tasks.
These functions wrap the AVLTree class for ease of use in simple cases.
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence

from .._common.config import EngineConfig, build_config
from .._common.node import find_unbalanced
from .._common.parsing import parse_values
from .._common.traversal import inorder
from .engine import AVLTree


def build_tree(values: Iterable[Any],
               config: Optional[EngineConfig] = None,
               **kwargs) -> AVLTree:
    """Insert ``values`` in order into a new tree.

    Duplicates are skipped exactly as :meth:`AVLTree.insert` skips them.

    Args:
        values: Values to insert, in insertion order
        config: Engine configuration
        **kwargs: EngineConfig field overrides

    Returns:
        The populated tree

    Example:
        >>> tree = build_tree([10, 20, 30])
        >>> tree.preorder()
        [20, 10, 30]
    """
    tree = AVLTree(build_config(config, **kwargs))
    for value in values:
        tree.insert(value)
    return tree


def tree_from_traversals(sequence: Sequence[Any],
                         inorder_values: Sequence[Any],
                         order: str = 'pre',
                         config: Optional[EngineConfig] = None,
                         **kwargs) -> AVLTree:
    """Rebuild a tree from a preorder or postorder sequence plus inorder.

    Args:
        sequence: Preorder or postorder values
        inorder_values: Inorder values
        order: ``'pre'`` or ``'post'``
        config: Engine configuration
        **kwargs: EngineConfig field overrides

    Returns:
        A tree holding the reconstruction (not rebalanced)

    Raises:
        TraversalMismatchError: If the pair does not describe one tree
        ValueError: For an unknown order
    """
    tree = AVLTree(build_config(config, **kwargs))
    if order == 'pre':
        tree.rebuild_from_preorder_inorder(sequence, inorder_values)
    elif order == 'post':
        tree.rebuild_from_postorder_inorder(sequence, inorder_values)
    else:
        raise ValueError(f"Unknown traversal order: {order!r}. Choose 'pre' or 'post'")
    return tree


def tree_from_text(sequence_text: str,
                   inorder_text: str,
                   order: str = 'pre',
                   skip_invalid: bool = False,
                   **kwargs) -> AVLTree:
    """Rebuild a tree from comma-separated traversal text.

    Example:
        >>> tree_from_text("20, 10, 30", "10, 20, 30").postorder()
        [10, 30, 20]
    """
    return tree_from_traversals(
        parse_values(sequence_text, skip_invalid=skip_invalid),
        parse_values(inorder_text, skip_invalid=skip_invalid),
        order=order,
        **kwargs,
    )


def explain_insertions(values: Iterable[Any], **kwargs) -> List[str]:
    """Insert ``values`` into a fresh tree and return the status messages.

    Useful for printing a step-by-step account of every rebalance. A
    ``rotation_observer`` or ``progress_callback`` passed in ``kwargs`` is
    still called, after the message is recorded.
    """
    messages: List[str] = []
    observer = kwargs.pop('rotation_observer', None)
    callback = kwargs.pop('progress_callback', None)

    def observe(direction, old_root, new_root):
        messages.append(
            f"Rotate {direction}: {new_root.value} replaces {old_root.value}")
        if observer is not None:
            observer(direction, old_root, new_root)

    def report(event):
        messages.append(event.message)
        if callback is not None:
            callback(event)

    tree = AVLTree(build_config(
        None,
        rotation_observer=observe,
        progress_callback=report,
        **kwargs,
    ))
    for value in values:
        if tree.insert(value):
            messages.append(f"Inserted {value}")
    return messages


def get_tree_stats(tree: AVLTree) -> Dict[str, Any]:
    """Summarize a tree.

    Returns:
        Dictionary with size, height, min, max, leaf count, root value and
        whether every node satisfies the AVL balance invariant
    """
    values = inorder(tree.root)
    leaves = 0
    stack = [tree.root] if tree.root is not None else []
    while stack:
        node = stack.pop()
        if node.is_leaf():
            leaves += 1
        stack.extend(child for child in (node.left, node.right) if child is not None)

    return {
        'size': len(values),
        'height': tree.height,
        'min': values[0] if values else None,
        'max': values[-1] if values else None,
        'leaf_count': leaves,
        'root': tree.root.value if tree.root is not None else None,
        'is_balanced': not find_unbalanced(tree.root),
    }

"""Rebuild a binary tree from a traversal pair.

A preorder (or postorder) sequence names each subtree's root; the inorder
sequence tells which values fall left and right of it. The result is a
direct structural reconstruction: it is never rebalanced, so it may
legally violate the AVL balance invariant. Heights are recomputed so the
height invariant still holds.

Reconstruction works on index windows with an explicit work stack, so
degenerate (list-shaped) inputs do not hit the recursion limit.
"""

from typing import Any, Dict, List, Optional, Sequence

from .errors import TraversalMismatchError
from .node import AVLNode, update_height

PREORDER = 'pre'
POSTORDER = 'post'


def rebuild_from_preorder_inorder(preorder: Sequence[Any],
                                  inorder: Sequence[Any],
                                  validate: bool = True) -> AVLNode:
    """Rebuild a tree whose preorder and inorder walks are given.

    Args:
        preorder: Values in preorder; the first is the root
        inorder: Values in inorder
        validate: Run the descriptive up-front checks before building

    Returns:
        Root of the reconstructed tree

    Raises:
        TraversalMismatchError: If the pair does not describe one tree
    """
    return _rebuild(PREORDER, preorder, inorder, validate)


def rebuild_from_postorder_inorder(postorder: Sequence[Any],
                                   inorder: Sequence[Any],
                                   validate: bool = True) -> AVLNode:
    """Rebuild a tree whose postorder and inorder walks are given.

    The last postorder value is the root. See
    :func:`rebuild_from_preorder_inorder` for the arguments.
    """
    return _rebuild(POSTORDER, postorder, inorder, validate)


def validate_traversal_pair(order: str, sequence: Sequence[Any],
                            inorder: Sequence[Any]) -> None:
    """Check that ``sequence`` and ``inorder`` describe a single tree.

    Runs the reconstruction as a dry run after the cheap checks, so every
    inconsistency is reported before a caller's tree is touched.

    Args:
        order: ``'pre'`` or ``'post'``
        sequence: The preorder or postorder values
        inorder: The inorder values

    Raises:
        TraversalMismatchError: Describing the first problem found
    """
    _check_order(order)
    _check_shape(order, sequence, inorder)

    if len(set(inorder)) != len(inorder):
        raise TraversalMismatchError("Inorder sequence contains duplicate values", order)
    if len(set(sequence)) != len(sequence):
        raise TraversalMismatchError(
            f"{_order_name(order)} sequence contains duplicate values", order)
    if set(sequence) != set(inorder):
        missing = sorted(set(inorder) - set(sequence), key=repr)
        raise TraversalMismatchError(
            f"{_order_name(order)} and inorder sequences hold different values "
            f"(missing: {missing})", order)

    _reconstruct(order, sequence, inorder)


def _rebuild(order: str, sequence: Sequence[Any], inorder: Sequence[Any],
             validate: bool) -> AVLNode:
    if validate:
        validate_traversal_pair(order, sequence, inorder)
    else:
        _check_order(order)
        _check_shape(order, sequence, inorder)
    root = _reconstruct(order, sequence, inorder)
    _recompute_heights(root)
    return root


def _check_order(order: str) -> None:
    if order not in (PREORDER, POSTORDER):
        raise ValueError(f"Unknown traversal order: {order!r}. Choose 'pre' or 'post'")


def _check_shape(order: str, sequence: Sequence[Any], inorder: Sequence[Any]) -> None:
    if not sequence or not inorder:
        raise TraversalMismatchError("Both traversal sequences must be non-empty", order)
    if len(sequence) != len(inorder):
        raise TraversalMismatchError(
            f"Length mismatch: {_order_name(order).lower()} has {len(sequence)} "
            f"values, inorder has {len(inorder)}", order)


def _order_name(order: str) -> str:
    return "Preorder" if order == PREORDER else "Postorder"


def _reconstruct(order: str, sequence: Sequence[Any], inorder: Sequence[Any]) -> AVLNode:
    """Build nodes from index windows.

    Each work item is ``(parent, side, seq_lo, in_lo, in_hi)``: the subtree
    covering ``inorder[in_lo:in_hi + 1]`` whose traversal segment starts at
    ``sequence[seq_lo]``. Both windows always have the same length.
    """
    # First occurrence wins, matching a left-to-right index search
    positions: Dict[Any, int] = {}
    for index, value in enumerate(inorder):
        positions.setdefault(value, index)

    holder = AVLNode(None)
    work = [(holder, 'left', 0, 0, len(inorder) - 1)]

    while work:
        parent, side, seq_lo, in_lo, in_hi = work.pop()
        size = in_hi - in_lo + 1
        root_index = seq_lo if order == PREORDER else seq_lo + size - 1
        root_value = sequence[root_index]

        mid = positions.get(root_value)
        if mid is None or not in_lo <= mid <= in_hi:
            raise TraversalMismatchError(
                f"Root value {root_value!r} is not in its inorder window "
                f"{list(inorder[in_lo:in_hi + 1])!r}", order)

        node = AVLNode(root_value)
        setattr(parent, side, node)

        left_size = mid - in_lo
        left_seq = seq_lo + 1 if order == PREORDER else seq_lo
        right_seq = left_seq + left_size
        if mid < in_hi:
            work.append((node, 'right', right_seq, mid + 1, in_hi))
        if left_size > 0:
            work.append((node, 'left', left_seq, in_lo, mid - 1))

    return holder.left


def _recompute_heights(root: Optional[AVLNode]) -> None:
    """Refresh cached heights bottom-up."""
    ordered: List[AVLNode] = []
    stack = [root] if root is not None else []
    while stack:
        node = stack.pop()
        ordered.append(node)
        if node.left is not None:
            stack.append(node.left)
        if node.right is not None:
            stack.append(node.right)
    # Parents precede children in ``ordered``; walk it backwards
    for node in reversed(ordered):
        update_height(node)

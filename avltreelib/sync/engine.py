"""Synchronous AVL engine.

Insertion and deletion are recursive and return the new subtree root, so
every rotation is expressed as a local pointer reassignment by the caller
frame. The rotation observer is a plain callable invoked before each
rotation rewires anything.
"""

import inspect
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence

from .._common import events
from .._common.config import EngineConfig
from .._common.errors import ReentrantMutationError
from .._common.events import ImbalanceCase, RotationDirection, RotationEvent
from .._common.node import AVLNode, balance_factor, min_value_node, update_height
from .._common.parsing import ensure_orderable
from .._common.rebuild import (
    rebuild_from_postorder_inorder,
    rebuild_from_preorder_inorder,
)
from .._common.tree_base import TreeBase


class AVLTree(TreeBase):
    """Self-balancing binary search tree over unique orderable values.

    Example:
        tree = AVLTree()
        for value in (10, 20, 30):
            tree.insert(value)
        assert tree.root.value == 20
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        super().__init__(config)
        self._mutating = False

    # Tree-level operations

    def insert(self, value: Any) -> bool:
        """Insert ``value`` and rebalance.

        Returns:
            False if the value was already present (the tree is unchanged)
        """
        ensure_orderable(value)
        with self._mutation():
            if self.contains(value):
                self._emit(events.duplicate_ignored(value))
                return False
            self.root = self.insert_node(self.root, value)
        return True

    def delete(self, value: Any) -> bool:
        """Delete ``value`` and rebalance every ancestor on the way up.

        Returns:
            False if the value was absent (the tree is unchanged)
        """
        ensure_orderable(value)
        with self._mutation():
            if not self.contains(value):
                self._emit(events.value_not_found(value))
                return False
            self.root = self.delete_node(self.root, value)
        return True

    def clear(self) -> None:
        """Discard every node."""
        with self._mutation():
            self.root = None

    def rebuild_from_preorder_inorder(self, preorder: Sequence[Any],
                                      inorder: Sequence[Any]) -> Optional[AVLNode]:
        """Replace the tree with the one described by a preorder/inorder pair.

        The new tree is not rebalanced. Input is checked before the current
        tree is touched, unless the config disables validation.

        Raises:
            TraversalMismatchError: If the pair does not describe one tree
        """
        root = rebuild_from_preorder_inorder(
            preorder, inorder, validate=self.config.validate_rebuild)
        return self._replace_root(root, 'pre')

    def rebuild_from_postorder_inorder(self, postorder: Sequence[Any],
                                       inorder: Sequence[Any]) -> Optional[AVLNode]:
        """Replace the tree with the one described by a postorder/inorder pair."""
        root = rebuild_from_postorder_inorder(
            postorder, inorder, validate=self.config.validate_rebuild)
        return self._replace_root(root, 'post')

    # Node-level operations

    def insert_node(self, node: Optional[AVLNode], value: Any) -> AVLNode:
        """Insert ``value`` beneath ``node`` and return the new subtree root."""
        if node is None:
            return AVLNode(value)

        if value < node.value:
            node.left = self.insert_node(node.left, value)
        elif value > node.value:
            node.right = self.insert_node(node.right, value)
        else:
            return node  # duplicate

        update_height(node)
        balance = balance_factor(node)
        case = events.classify_insert(balance, value, node)
        if case is None:
            return node
        return self._rebalance(node, balance, case, inserted=value)

    def delete_node(self, node: Optional[AVLNode], value: Any) -> Optional[AVLNode]:
        """Delete ``value`` beneath ``node`` and return the new subtree root."""
        if node is None:
            return None

        if value < node.value:
            node.left = self.delete_node(node.left, value)
        elif value > node.value:
            node.right = self.delete_node(node.right, value)
        elif node.left is None or node.right is None:
            node = node.left if node.left is not None else node.right
        else:
            successor = min_value_node(node.right)
            node.value = successor.value
            node.right = self.delete_node(node.right, successor.value)

        if node is None:
            return None

        update_height(node)
        balance = balance_factor(node)
        case = events.classify_delete(
            balance, balance_factor(node.left), balance_factor(node.right))
        if case is None:
            return node
        return self._rebalance(node, balance, case)

    def rotate_right(self, y: AVLNode) -> AVLNode:
        """Rotate ``y`` down to the right; its left child becomes the root.

        The observer sees the structure before any pointer changes.
        """
        x = y.left
        self._notify_rotation(RotationDirection.RIGHT, y, x)
        t2 = x.right
        x.right = y
        y.left = t2
        update_height(y)
        update_height(x)
        return x

    def rotate_left(self, x: AVLNode) -> AVLNode:
        """Rotate ``x`` down to the left; its right child becomes the root."""
        y = x.right
        self._notify_rotation(RotationDirection.LEFT, x, y)
        t2 = y.left
        y.left = x
        x.right = t2
        update_height(x)
        update_height(y)
        return y

    # Internals

    def _rebalance(self, node: AVLNode, balance: int, case: ImbalanceCase,
                   inserted: Any = None) -> AVLNode:
        self._emit(events.imbalance_detected(node, balance))
        self._emit(events.case_classified(node, balance, case, inserted))
        self._emit(events.rotation_chosen(node, case))

        if case is ImbalanceCase.LEFT_LEFT:
            return self.rotate_right(node)
        if case is ImbalanceCase.RIGHT_RIGHT:
            return self.rotate_left(node)
        if case is ImbalanceCase.LEFT_RIGHT:
            node.left = self.rotate_left(node.left)
            return self.rotate_right(node)
        node.right = self.rotate_right(node.right)
        return self.rotate_left(node)

    def _notify_rotation(self, direction: RotationDirection,
                         old_root: AVLNode, new_root: AVLNode) -> None:
        observer = self.config.rotation_observer
        if observer is None or self._pending_error is not None:
            return

        event = RotationEvent(direction, old_root, new_root)
        try:
            result = observer(direction.value, old_root, new_root)
        except Exception as error:
            try:
                self.config.observer_policy.handle_sync(error, event)
            except Exception as reported:
                self._defer(reported)
            return

        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            self._defer(TypeError(
                "Rotation observer returned an awaitable; "
                "use avltreelib.aio.AsyncAVLTree for async observers"))

    def _replace_root(self, root: Optional[AVLNode], order: str) -> Optional[AVLNode]:
        with self._mutation():
            self.root = root
            self._emit(events.tree_rebuilt(order, self.size))
        return self.root

    @contextmanager
    def _mutation(self) -> Iterator[None]:
        """Run one mutation to structural completion.

        Errors deferred while it ran are raised once the tree is whole.
        """
        if self._mutating:
            raise ReentrantMutationError(
                "Tree mutated while another mutation was in progress "
                "(rotation observers must not modify the tree)")
        self._mutating = True
        self._pending_error = None
        try:
            yield
        finally:
            self._mutating = False
        pending = self._take_pending_error()
        if pending is not None:
            raise pending

    def _is_mutating(self) -> bool:
        return self._mutating

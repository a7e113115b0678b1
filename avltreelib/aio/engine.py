"""Asynchronous AVL engine.

Same algorithm as the sync engine, but the rotation observer may be a
coroutine function. Each rotation awaits the observer before rewiring any
pointers, which lets an animated front end show the pre-rotation state
for as long as it likes. The engine itself never suspends anywhere else.

Mutations of one tree are serialized: concurrent callers queue on an
internal lock and run one after another. A mutation cancelled while its
observer is awaited still completes its rebalancing before the
cancellation propagates.
"""

import asyncio
import inspect
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional, Sequence

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


class AsyncAVLTree(TreeBase):
    """AVL tree whose mutations await the rotation observer.

    Example:
        async def show(direction, old_root, new_root):
            await renderer.highlight(old_root.value)

        tree = AsyncAVLTree(EngineConfig.observed(show))
        await tree.insert(10)
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        super().__init__(config)
        self._lock: Optional[asyncio.Lock] = None
        self._owner: Optional[asyncio.Task] = None

    # Tree-level operations

    async def insert(self, value: Any) -> bool:
        """Insert ``value`` and rebalance.

        Returns:
            False if the value was already present (the tree is unchanged)
        """
        ensure_orderable(value)
        async with self._mutation():
            if self.contains(value):
                self._emit(events.duplicate_ignored(value))
                return False
            self.root = await self.insert_node(self.root, value)
        return True

    async def delete(self, value: Any) -> bool:
        """Delete ``value`` and rebalance every ancestor on the way up.

        Returns:
            False if the value was absent (the tree is unchanged)
        """
        ensure_orderable(value)
        async with self._mutation():
            if not self.contains(value):
                self._emit(events.value_not_found(value))
                return False
            self.root = await self.delete_node(self.root, value)
        return True

    async def clear(self) -> None:
        """Discard every node once in-flight mutations finish."""
        async with self._mutation():
            self.root = None

    async def rebuild_from_preorder_inorder(self, preorder: Sequence[Any],
                                            inorder: Sequence[Any]) -> Optional[AVLNode]:
        """Replace the tree with the one described by a preorder/inorder pair.

        Raises:
            TraversalMismatchError: If the pair does not describe one tree
        """
        root = rebuild_from_preorder_inorder(
            preorder, inorder, validate=self.config.validate_rebuild)
        return await self._replace_root(root, 'pre')

    async def rebuild_from_postorder_inorder(self, postorder: Sequence[Any],
                                             inorder: Sequence[Any]) -> Optional[AVLNode]:
        """Replace the tree with the one described by a postorder/inorder pair."""
        root = rebuild_from_postorder_inorder(
            postorder, inorder, validate=self.config.validate_rebuild)
        return await self._replace_root(root, 'post')

    # Node-level operations

    async def insert_node(self, node: Optional[AVLNode], value: Any) -> AVLNode:
        """Insert ``value`` beneath ``node`` and return the new subtree root."""
        if node is None:
            return AVLNode(value)

        if value < node.value:
            node.left = await self.insert_node(node.left, value)
        elif value > node.value:
            node.right = await self.insert_node(node.right, value)
        else:
            return node  # duplicate

        update_height(node)
        balance = balance_factor(node)
        case = events.classify_insert(balance, value, node)
        if case is None:
            return node
        return await self._rebalance(node, balance, case, inserted=value)

    async def delete_node(self, node: Optional[AVLNode], value: Any) -> Optional[AVLNode]:
        """Delete ``value`` beneath ``node`` and return the new subtree root."""
        if node is None:
            return None

        if value < node.value:
            node.left = await self.delete_node(node.left, value)
        elif value > node.value:
            node.right = await self.delete_node(node.right, value)
        elif node.left is None or node.right is None:
            node = node.left if node.left is not None else node.right
        else:
            successor = min_value_node(node.right)
            node.value = successor.value
            node.right = await self.delete_node(node.right, successor.value)

        if node is None:
            return None

        update_height(node)
        balance = balance_factor(node)
        case = events.classify_delete(
            balance, balance_factor(node.left), balance_factor(node.right))
        if case is None:
            return node
        return await self._rebalance(node, balance, case)

    async def rotate_right(self, y: AVLNode) -> AVLNode:
        """Rotate ``y`` down to the right once the observer has returned."""
        x = y.left
        await self._notify_rotation(RotationDirection.RIGHT, y, x)
        t2 = x.right
        x.right = y
        y.left = t2
        update_height(y)
        update_height(x)
        return x

    async def rotate_left(self, x: AVLNode) -> AVLNode:
        """Rotate ``x`` down to the left once the observer has returned."""
        y = x.right
        await self._notify_rotation(RotationDirection.LEFT, x, y)
        t2 = y.left
        y.left = x
        x.right = t2
        update_height(x)
        update_height(y)
        return y

    # Internals

    async def _rebalance(self, node: AVLNode, balance: int, case: ImbalanceCase,
                         inserted: Any = None) -> AVLNode:
        self._emit(events.imbalance_detected(node, balance))
        self._emit(events.case_classified(node, balance, case, inserted))
        self._emit(events.rotation_chosen(node, case))

        if case is ImbalanceCase.LEFT_LEFT:
            return await self.rotate_right(node)
        if case is ImbalanceCase.RIGHT_RIGHT:
            return await self.rotate_left(node)
        if case is ImbalanceCase.LEFT_RIGHT:
            node.left = await self.rotate_left(node.left)
            return await self.rotate_right(node)
        node.right = await self.rotate_right(node.right)
        return await self.rotate_left(node)

    async def _notify_rotation(self, direction: RotationDirection,
                               old_root: AVLNode, new_root: AVLNode) -> None:
        observer = self.config.rotation_observer
        if observer is None or self._pending_error is not None:
            return

        event = RotationEvent(direction, old_root, new_root)
        try:
            result = observer(direction.value, old_root, new_root)
            # Sync observers are accepted too
            if inspect.isawaitable(result):
                await result
        except asyncio.CancelledError as cancelled:
            # Finish the rebalancing unobserved, then honour the cancellation
            self._defer(cancelled)
        except Exception as error:
            try:
                await self.config.observer_policy.handle(error, event)
            except Exception as reported:
                self._defer(reported)

    async def _replace_root(self, root: Optional[AVLNode], order: str) -> Optional[AVLNode]:
        async with self._mutation():
            self.root = root
            self._emit(events.tree_rebuilt(order, self.size))
        return self.root

    def _get_lock(self) -> asyncio.Lock:
        # Created lazily so the tree can be built outside a running loop
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    @asynccontextmanager
    async def _mutation(self) -> AsyncIterator[None]:
        """Run one mutation to structural completion, one at a time.

        Errors deferred while it ran are raised once the tree is whole.
        """
        task = asyncio.current_task()
        if self._owner is not None and self._owner is task:
            raise ReentrantMutationError(
                "Tree mutated from inside its own mutation "
                "(rotation observers must not modify the tree)")

        async with self._get_lock():
            self._owner = task
            self._pending_error = None
            try:
                yield
            finally:
                self._owner = None
            pending = self._take_pending_error()
            if pending is not None:
                raise pending

    def _is_mutating(self) -> bool:
        return self._owner is not None

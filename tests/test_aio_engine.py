"""Tests for the asynchronous AVL engine."""

import asyncio

import pytest

from avltreelib.aio import (
    AsyncAVLTree,
    EngineConfig,
    InvalidValueError,
    ReentrantMutationError,
    TraversalMismatchError,
    insert_concurrently,
)
from avltreelib.testing import RecordingObserver, TreeInvariantChecker


async def populated(*values, config=None):
    tree = AsyncAVLTree(config)
    for value in values:
        await tree.insert(value)
    return tree


class TestAsyncOperations:
    """The async engine produces the same trees as the sync one."""

    @pytest.mark.asyncio
    async def test_rotation_cases(self):
        for values in [(10, 20, 30), (30, 20, 10), (30, 10, 20), (10, 30, 20)]:
            tree = await populated(*values)
            assert tree.preorder() == [20, 10, 30]
            assert tree.root.height == 2

    @pytest.mark.asyncio
    async def test_insert_and_delete(self):
        tree = await populated(1, 2, 3, 4, 5, 6, 7)
        assert await tree.delete(4) is True
        assert tree.preorder() == [5, 2, 1, 3, 6, 7]
        assert await tree.delete(4) is False
        assert await tree.insert(5) is False
        assert TreeInvariantChecker(tree.root).is_valid_avl()

    @pytest.mark.asyncio
    async def test_clear(self):
        tree = await populated(1, 2)
        await tree.clear()
        assert tree.is_empty()

    @pytest.mark.asyncio
    async def test_rebuild(self):
        tree = await populated(1, 2, 3)
        await tree.rebuild_from_preorder_inorder([1, 2, 3], [1, 2, 3])
        # Rebuilt trees are not rebalanced
        assert tree.preorder() == [1, 2, 3]
        assert tree.height == 3

        with pytest.raises(TraversalMismatchError):
            await tree.rebuild_from_postorder_inorder([1, 2], [1, 3])
        # A rejected pair leaves the tree alone
        assert tree.preorder() == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_invalid_value(self):
        tree = AsyncAVLTree()
        with pytest.raises(InvalidValueError):
            await tree.insert(None)

    def test_tree_can_be_built_outside_a_loop(self):
        tree = AsyncAVLTree()
        assert asyncio.run(tree.insert(1)) is True
        assert tree.inorder() == [1]


class TestAsyncObserver:
    """Observers are awaited before each rotation rewires anything."""

    @pytest.mark.asyncio
    async def test_async_observer_sees_pre_rotation_state(self):
        seen = []

        async def observer(direction, old_root, new_root):
            await asyncio.sleep(0)
            seen.append((direction, old_root.right is new_root, new_root.left))

        await populated(10, 20, 30, config=EngineConfig.observed(observer))
        assert seen == [('left', True, None)]

    @pytest.mark.asyncio
    async def test_sync_observer_is_accepted(self):
        observer = RecordingObserver()
        await populated(30, 10, 20, config=EngineConfig.observed(observer))
        assert observer.rotations == [('left', 10, 20), ('right', 30, 20)]

    @pytest.mark.asyncio
    async def test_readers_see_old_tree_while_observer_waits(self):
        gate = asyncio.Event()
        reached = asyncio.Event()

        async def observer(direction, old_root, new_root):
            reached.set()
            await gate.wait()

        tree = await populated(10, 20, config=EngineConfig.observed(observer))
        task = asyncio.create_task(tree.insert(30))

        await reached.wait()
        # 30 is linked in, but the rotation has not happened yet
        assert tree.preorder() == [10, 20, 30]

        gate.set()
        assert await task is True
        assert tree.preorder() == [20, 10, 30]

    @pytest.mark.asyncio
    async def test_observer_cannot_mutate_tree(self):
        tree = AsyncAVLTree()

        async def observer(direction, old_root, new_root):
            await tree.delete(old_root.value)

        tree.config.rotation_observer = observer
        await tree.insert(1)
        await tree.insert(2)
        with pytest.raises(ReentrantMutationError):
            await tree.insert(3)

        assert tree.inorder() == [1, 2, 3]
        assert TreeInvariantChecker(tree.root).is_valid_avl()


class TestCancellation:
    """A cancelled mutation still leaves a valid AVL tree behind."""

    async def slow_tree(self):
        tree = await populated(50, 30, 70, 20, 40, 60, 80, 10)
        calls = []

        async def observer(direction, old_root, new_root):
            calls.append(direction)
            await asyncio.sleep(10)

        tree.config.rotation_observer = observer
        return tree, calls

    @pytest.mark.asyncio
    async def test_timeout_during_observer(self):
        tree, calls = await self.slow_tree()

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(tree.insert(5), 0.05)

        assert calls == ['right']
        assert 5 in tree
        assert TreeInvariantChecker(tree.root).is_valid_avl()

    @pytest.mark.asyncio
    async def test_cancelled_task_releases_lock(self):
        tree, _ = await self.slow_tree()
        task = asyncio.create_task(tree.insert(5))
        for _ in range(5):
            await asyncio.sleep(0)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert TreeInvariantChecker(tree.root).is_valid_avl()
        tree.config.rotation_observer = None
        assert await asyncio.wait_for(tree.delete(5), 1) is True
        assert TreeInvariantChecker(tree.root).is_valid_avl()


class TestConcurrency:
    """Concurrent mutations of one tree run one at a time."""

    @pytest.mark.asyncio
    async def test_concurrent_inserts_are_serialized(self):
        active = []
        overlaps = []

        async def observer(direction, old_root, new_root):
            active.append(old_root.value)
            if len(active) > 1:
                overlaps.append(tuple(active))
            await asyncio.sleep(0)
            active.pop()

        tree = AsyncAVLTree(EngineConfig.observed(observer))
        results = await insert_concurrently(tree, range(1, 32))

        assert results == [True] * 31
        assert overlaps == []
        assert tree.inorder() == list(range(1, 32))
        assert TreeInvariantChecker(tree.root).is_valid_avl()

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_inserted_once(self):
        async def observer(direction, old_root, new_root):
            await asyncio.sleep(0)

        tree = await populated(10, 20, config=EngineConfig.observed(observer))
        results = await insert_concurrently(tree, [30, 30])

        assert sorted(results) == [False, True]
        assert tree.inorder() == [10, 20, 30]

    @pytest.mark.asyncio
    async def test_failed_insert_waits_for_the_rest(self):
        async def observer(direction, old_root, new_root):
            await asyncio.sleep(0.01)

        tree = await populated(10, 20, config=EngineConfig.observed(observer))

        with pytest.raises(InvalidValueError):
            await insert_concurrently(tree, [30, None, 5, 40])

        # Every other insert has already completed
        assert tree.inorder() == [5, 10, 20, 30, 40]
        assert TreeInvariantChecker(tree.root).is_valid_avl()

    @pytest.mark.asyncio
    async def test_concurrent_trees_are_independent(self):
        a, b = AsyncAVLTree(), AsyncAVLTree()
        await asyncio.gather(insert_concurrently(a, [1, 2, 3]),
                             insert_concurrently(b, [7, 8]))
        assert a.inorder() == [1, 2, 3]
        assert b.inorder() == [7, 8]

"""Contract tests ensuring sync and async implementations have identical behavior.

These tests verify that both sync and async engines:
1. Build the same tree from the same operations
2. Perform the same rotations, in the same order
3. Emit the same progress messages
4. Report duplicates and missing values the same way
5. Reject mutations started from inside an observer
"""

import random
from typing import Any, List, Tuple

import pytest

from avltreelib.sync import AVLTree, EngineConfig, ReentrantMutationError
from avltreelib.aio import AsyncAVLTree
from avltreelib._common.node import node_to_dict
from avltreelib.testing import RecordingObserver


def operation_script(seed: int, count: int = 200) -> List[Tuple[str, int]]:
    """A reproducible mix of inserts and deletes over a small value range."""
    rng = random.Random(seed)
    return [
        ('insert' if rng.random() < 0.65 else 'delete', rng.randrange(60))
        for _ in range(count)
    ]


def run_sync(script) -> Tuple[AVLTree, RecordingObserver, List[str], List[bool]]:
    observer = RecordingObserver()
    progress: List[str] = []
    tree = AVLTree(EngineConfig.observed(observer, lambda e: progress.append(e.message)))
    results = [getattr(tree, name)(value) for name, value in script]
    return tree, observer, progress, results


async def run_async(script) -> Tuple[AsyncAVLTree, RecordingObserver, List[str], List[bool]]:
    observer = RecordingObserver()
    progress: List[str] = []
    tree = AsyncAVLTree(EngineConfig.observed(observer, lambda e: progress.append(e.message)))
    results: List[Any] = []
    for name, value in script:
        results.append(await getattr(tree, name)(value))
    return tree, observer, progress, results


class TestEngineContract:
    """Both engines are the same algorithm behind different call styles."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    async def test_identical_trees(self, seed):
        script = operation_script(seed)
        sync_tree, _, _, _ = run_sync(script)
        async_tree, _, _, _ = await run_async(script)

        assert node_to_dict(sync_tree.root) == node_to_dict(async_tree.root)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("seed", [0, 1])
    async def test_identical_rotations(self, seed):
        script = operation_script(seed)
        _, sync_observer, _, _ = run_sync(script)
        _, async_observer, _, _ = await run_async(script)

        assert sync_observer.rotations
        assert sync_observer.rotations == async_observer.rotations
        assert sync_observer.snapshots == async_observer.snapshots

    @pytest.mark.asyncio
    async def test_identical_progress_and_results(self):
        script = operation_script(5)
        _, _, sync_progress, sync_results = run_sync(script)
        _, _, async_progress, async_results = await run_async(script)

        assert sync_progress == async_progress
        assert sync_results == async_results
        # Duplicates and misses are in the script
        assert False in sync_results

    @pytest.mark.asyncio
    async def test_identical_rebuild_from_preorder(self):
        preorder = [50, 30, 20, 40, 35, 70, 60, 80]
        sync_tree = AVLTree()
        sync_tree.rebuild_from_preorder_inorder(preorder, sorted(preorder))
        async_tree = AsyncAVLTree()
        await async_tree.rebuild_from_preorder_inorder(preorder, sorted(preorder))

        assert sync_tree.preorder() == preorder
        assert sync_tree.to_dict() == async_tree.to_dict()
        assert sync_tree.traversals() == async_tree.traversals()

    @pytest.mark.asyncio
    async def test_identical_rebuild_from_postorder(self):
        source, _, _, _ = run_sync(operation_script(3, count=40))
        postorder, inorder = source.postorder(), source.inorder()

        sync_tree = AVLTree()
        sync_tree.rebuild_from_postorder_inorder(postorder, inorder)
        async_tree = AsyncAVLTree()
        await async_tree.rebuild_from_postorder_inorder(postorder, inorder)

        assert sync_tree.to_dict() == source.to_dict()
        assert async_tree.to_dict() == source.to_dict()

    @pytest.mark.asyncio
    async def test_identical_reentrance_handling(self):
        # An observer re-entering with a duplicate is rejected by both engines
        sync_tree = AVLTree()
        sync_tree.config.rotation_observer = lambda d, old, new: sync_tree.insert(old.value)
        async_tree = AsyncAVLTree()

        async def reenter(direction, old_root, new_root):
            await async_tree.insert(old_root.value)

        async_tree.config.rotation_observer = reenter

        with pytest.raises(ReentrantMutationError):
            for value in (1, 2, 3):
                sync_tree.insert(value)
        with pytest.raises(ReentrantMutationError):
            for value in (1, 2, 3):
                await async_tree.insert(value)

        assert sync_tree.to_dict() == async_tree.to_dict()

"""Tests for the high-level sync and async APIs."""

import pytest

from avltreelib.aio import (
    AsyncAVLTree,
    Pacer,
    build_tree_async,
    narrated_tree,
    replay,
    tree_from_traversals_async,
)
from avltreelib.sync import (
    AVLTree,
    EngineConfig,
    InvalidValueError,
    TraversalMismatchError,
    build_tree,
    explain_insertions,
    get_tree_stats,
    tree_from_text,
    tree_from_traversals,
)


class TestSyncApi:

    def test_build_tree(self):
        tree = build_tree([10, 20, 30, 20])
        assert isinstance(tree, AVLTree)
        assert tree.preorder() == [20, 10, 30]

    def test_build_tree_with_overrides(self):
        tree = build_tree([1], EngineConfig.quiet(), validate_rebuild=False)
        assert tree.config.log_progress is False
        assert tree.config.validate_rebuild is False

    def test_build_tree_rejects_unknown_option(self):
        with pytest.raises(TypeError):
            build_tree([1], colour="red")

    def test_tree_from_traversals(self):
        tree = tree_from_traversals([10, 25, 20, 50, 40, 30],
                                    [10, 20, 25, 30, 40, 50], order='post')
        assert tree.preorder() == [30, 20, 10, 25, 40, 50]

        with pytest.raises(ValueError, match="Unknown traversal order"):
            tree_from_traversals([1], [1], order='level')

    def test_tree_from_text(self):
        assert tree_from_text("20, 10, 30", "10, 20, 30").postorder() == [10, 30, 20]

        with pytest.raises(InvalidValueError):
            tree_from_text("20, x", "x, 20")
        with pytest.raises(TraversalMismatchError):
            tree_from_text("20, 10", "10, 20, 30")

    def test_explain_insertions(self):
        assert explain_insertions([10, 20, 30, 30]) == [
            "Inserted 10",
            "Inserted 20",
            "Node 10 is unbalanced with balance factor -2",
            "Right-Right case detected at node 10 (BF = -2, inserted 30 > 20)",
            "Single LEFT rotation around node 10",
            "Rotate left: 20 replaces 10",
            "Inserted 30",
            "Value 30 already exists in the tree",
        ]

    def test_explain_insertions_chains_callers_hooks(self):
        rotations, events = [], []
        messages = explain_insertions(
            [30, 10, 20],
            rotation_observer=lambda d, old, new: rotations.append(d),
            progress_callback=events.append,
            log_progress=False,
        )

        assert rotations == ['left', 'right']
        assert [e.message for e in events] == [
            m for m in messages
            if not m.startswith(("Inserted", "Rotate"))
        ]
        assert messages[-1] == "Inserted 20"

    def test_get_tree_stats(self):
        stats = get_tree_stats(build_tree(range(1, 8)))
        assert stats == {
            'size': 7,
            'height': 3,
            'min': 1,
            'max': 7,
            'leaf_count': 4,
            'root': 4,
            'is_balanced': True,
        }

    def test_stats_of_unbalanced_rebuild(self):
        stats = get_tree_stats(tree_from_traversals([1, 2, 3], [1, 2, 3]))
        assert stats['is_balanced'] is False
        assert stats['height'] == 3
        assert stats['leaf_count'] == 1

    def test_stats_of_empty_tree(self):
        stats = get_tree_stats(AVLTree())
        assert stats['size'] == 0
        assert stats['min'] is None
        assert stats['root'] is None
        assert stats['is_balanced'] is True


class TestAsyncApi:

    @pytest.mark.asyncio
    async def test_build_tree_async(self):
        tree = await build_tree_async([30, 10, 20])
        assert isinstance(tree, AsyncAVLTree)
        assert tree.preorder() == [20, 10, 30]

    @pytest.mark.asyncio
    async def test_tree_from_traversals_async(self):
        tree = await tree_from_traversals_async([20, 10, 30], [10, 20, 30])
        assert tree.postorder() == [10, 30, 20]

        with pytest.raises(ValueError):
            await tree_from_traversals_async([1], [1], order='in')

    @pytest.mark.asyncio
    async def test_replay(self):
        waits = []

        async def fake_sleep(seconds):
            waits.append(seconds)

        tree = AsyncAVLTree()
        results = await replay(
            tree,
            [('insert', 1), ('insert', 2), ('insert', 3), ('delete', 2), ('delete', 9)],
            pacer=Pacer(sleep=fake_sleep),
            delay_ms=100,
        )

        assert results == [True, True, True, True, False]
        assert tree.inorder() == [1, 3]
        # One pause between each pair of operations
        assert sum(waits) == pytest.approx(0.4)

    @pytest.mark.asyncio
    async def test_replay_rejects_unknown_operation_up_front(self):
        tree = AsyncAVLTree()
        with pytest.raises(ValueError, match="Unknown operation"):
            await replay(tree, [('insert', 1), ('upsert', 2)])
        assert tree.is_empty()

    @pytest.mark.asyncio
    async def test_narrated_tree(self):
        messages = []
        tree, pacer = narrated_tree(speed=1000, emit=messages.append)

        for value in (1, 2, 3):
            await tree.insert(value)

        assert pacer.speed == 1000
        assert len(messages) == 5
        assert tree.preorder() == [2, 1, 3]

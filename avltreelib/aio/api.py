"""High-level async API for avltreelib.

This module provides simple async functions for common tasks built on
AsyncAVLTree, such as replaying a scripted sequence of operations for an
animated walkthrough.
"""

import asyncio
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from .._common.config import EngineConfig, build_config
from .engine import AsyncAVLTree
from .narration import RotationNarrator
from .pacing import Pacer

OPERATIONS = ('insert', 'delete')


async def build_tree_async(values: Iterable[Any],
                           config: Optional[EngineConfig] = None,
                           **kwargs) -> AsyncAVLTree:
    """Insert ``values`` in order into a new async tree.

    Args:
        values: Values to insert, in insertion order
        config: Engine configuration
        **kwargs: EngineConfig field overrides

    Returns:
        The populated tree
    """
    tree = AsyncAVLTree(build_config(config, **kwargs))
    for value in values:
        await tree.insert(value)
    return tree


async def tree_from_traversals_async(sequence: Sequence[Any],
                                     inorder_values: Sequence[Any],
                                     order: str = 'pre',
                                     config: Optional[EngineConfig] = None,
                                     **kwargs) -> AsyncAVLTree:
    """Rebuild an async tree from a preorder or postorder sequence plus inorder.

    Raises:
        TraversalMismatchError: If the pair does not describe one tree
        ValueError: For an unknown order
    """
    tree = AsyncAVLTree(build_config(config, **kwargs))
    if order == 'pre':
        await tree.rebuild_from_preorder_inorder(sequence, inorder_values)
    elif order == 'post':
        await tree.rebuild_from_postorder_inorder(sequence, inorder_values)
    else:
        raise ValueError(f"Unknown traversal order: {order!r}. Choose 'pre' or 'post'")
    return tree


async def replay(tree: AsyncAVLTree,
                 operations: Iterable[Tuple[str, Any]],
                 pacer: Optional[Pacer] = None,
                 delay_ms: float = 1000) -> List[bool]:
    """Apply ``(operation, value)`` pairs to ``tree`` one at a time.

    Args:
        tree: Tree to mutate
        operations: Pairs such as ``('insert', 10)`` or ``('delete', 10)``
        pacer: Optional pacer for a pause between operations
        delay_ms: Nominal pause between operations

    Returns:
        The boolean result of each operation, in order

    Raises:
        ValueError: For an unknown operation name (before anything runs)
    """
    steps = list(operations)
    for name, _ in steps:
        if name not in OPERATIONS:
            raise ValueError(f"Unknown operation: {name!r}. Choose from: {', '.join(OPERATIONS)}")

    results = []
    for index, (name, value) in enumerate(steps):
        if index and pacer is not None:
            await pacer.sleep(delay_ms)
        if name == 'insert':
            results.append(await tree.insert(value))
        else:
            results.append(await tree.delete(value))
    return results


async def insert_concurrently(tree: AsyncAVLTree, values: Iterable[Any]) -> List[bool]:
    """Start one insert task per value and wait for all of them.

    The tree's internal lock runs the inserts one after another, in the
    order the tasks acquire it.

    Raises:
        The first error any insert raised, once every insert has finished
    """
    results = await asyncio.gather(*(tree.insert(value) for value in values),
                                   return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)


def narrated_tree(speed: float = 1.0,
                  emit: Optional[Callable[[str], Any]] = None,
                  progress_callback: Optional[Callable] = None) -> Tuple[AsyncAVLTree, Pacer]:
    """Create a tree wired to a paced rotation narrator.

    Returns:
        ``(tree, pacer)``; use the pacer to pause, resume or change speed
    """
    pacer = Pacer(speed=speed)
    narrator = RotationNarrator(pacer, emit=emit)
    tree = AsyncAVLTree(EngineConfig.observed(narrator, progress_callback=progress_callback))
    return tree, pacer

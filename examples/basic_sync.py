#!/usr/bin/env python3
"""
Basic synchronous example showing an AVL tree rebalancing itself.

This example demonstrates:
- Inserting values and watching rotations through an observer
- Traversal export
- Rebuilding a tree from a traversal pair
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from avltreelib.sync import (
    AVLTree,
    EngineConfig,
    parse_values,
    tree_from_traversals,
    get_tree_stats,
)


def print_rotation(direction, old_root, new_root):
    """Observer: called before each rotation touches the tree."""
    print(f"  rotate {direction:<5} {old_root.value} -> {new_root.value}")


def main():
    """Insert values from the command line (or a default set)."""
    text = sys.argv[1] if len(sys.argv) > 1 else "10, 20, 30, 40, 50, 25"
    values = parse_values(text)

    config = EngineConfig.observed(
        print_rotation,
        progress_callback=lambda event: print(f"  {event}"),
    )
    tree = AVLTree(config)

    for value in values:
        print(f"insert {value}")
        for step in tree.trace(value):
            print(f"  {step.describe(value)}")
        if not tree.insert(value):
            print(f"  {value} already exists")

    print("-" * 50)
    for name, text in tree.traversals().items():
        print(f"{name:>9}: {text}")

    stats = get_tree_stats(tree)
    print(f"\nsize={stats['size']} height={stats['height']} "
          f"root={stats['root']} balanced={stats['is_balanced']}")

    rebuilt = tree_from_traversals(tree.preorder(), tree.inorder(), order='pre')
    print(f"rebuilt from preorder+inorder: {rebuilt.postorder() == tree.postorder()}")


if __name__ == "__main__":
    main()

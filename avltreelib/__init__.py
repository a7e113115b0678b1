"""avltreelib - Step-traceable AVL Tree Engine.

avltreelib provides a pure, deterministic AVL tree engine for teaching and
visualizing insertion, deletion, rotation and traversal. Renderers watch
rotations through an observer hook that runs before each rotation mutates
the tree.

Choose your implementation:
━━━━━━━━━━━━━━━━━━━━━━━━━━
Synchronous:
    from avltreelib.sync import AVLTree

Asynchronous:
    from avltreelib.aio import AsyncAVLTree
━━━━━━━━━━━━━━━━━━━━━━━━━━

Both implementations run the same algorithm and produce identical trees.
Pick the async one when your observer needs to await (e.g. animation).
"""

__version__ = "0.1.0"

# Re-export submodules for convenient access
from . import sync
from . import aio

# Users must explicitly choose their implementation
__all__ = [
    "__version__",
    "sync",
    "aio",
]

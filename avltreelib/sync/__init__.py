"""Synchronous implementation of avltreelib.

All components here operate in a blocking, synchronous manner. Rotation
observers are plain callables.
"""

# Engine
from .engine import AVLTree

# Shared model, events and errors (re-exported from _common)
from .._common import (
    AVLNode,
    EngineConfig,
    RotationDirection,
    ImbalanceCase,
    ProgressKind,
    RotationEvent,
    ProgressEvent,
    SearchResult,
    DescentStep,
    AVLTreeError,
    TraversalMismatchError,
    InvalidValueError,
    ReentrantMutationError,
    ErrorPolicy,
    FailFastPolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
    ThresholdPolicy,
    inorder,
    preorder,
    postorder,
    level_order,
    rebuild_from_preorder_inorder,
    rebuild_from_postorder_inorder,
    parse_values,
)

# High-level API
from .api import (
    build_tree,
    tree_from_traversals,
    tree_from_text,
    explain_insertions,
    get_tree_stats,
)

__all__ = [
    # Engine
    'AVLTree',
    'AVLNode',
    # Config
    'EngineConfig',
    # Events
    'RotationDirection',
    'ImbalanceCase',
    'ProgressKind',
    'RotationEvent',
    'ProgressEvent',
    'SearchResult',
    'DescentStep',
    # Errors
    'AVLTreeError',
    'TraversalMismatchError',
    'InvalidValueError',
    'ReentrantMutationError',
    'ErrorPolicy',
    'FailFastPolicy',
    'ContinueOnErrorsPolicy',
    'CollectErrorsPolicy',
    'ThresholdPolicy',
    # Traversal and rebuild
    'inorder',
    'preorder',
    'postorder',
    'level_order',
    'rebuild_from_preorder_inorder',
    'rebuild_from_postorder_inorder',
    'parse_values',
    # API
    'build_tree',
    'tree_from_traversals',
    'tree_from_text',
    'explain_insertions',
    'get_tree_stats',
]

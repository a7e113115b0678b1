"""Asynchronous implementation of avltreelib.

Rotation observers may be coroutine functions; the engine awaits each one
before the rotation it describes. Pacing and narration helpers support
step-animated front ends.
"""

# Engine
from .engine import AsyncAVLTree

# Animation helpers
from .pacing import Pacer
from .narration import RotationNarrator

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
)

# High-level API
from .api import (
    build_tree_async,
    tree_from_traversals_async,
    replay,
    insert_concurrently,
    narrated_tree,
)

__all__ = [
    # Engine
    'AsyncAVLTree',
    'AVLNode',
    # Animation
    'Pacer',
    'RotationNarrator',
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
    # High-level API
    'build_tree_async',
    'tree_from_traversals_async',
    'replay',
    'insert_concurrently',
    'narrated_tree',
]

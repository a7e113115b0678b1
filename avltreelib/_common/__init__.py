"""Common components shared between sync and aio implementations.

This internal package contains code that is identical between both
engines. It should NOT be imported directly by users.

Components here include:
- The node model and height bookkeeping
- Traversal export and rebuild from traversal pairs
- Events, errors, observer error policies and configuration

Important: This package must NEVER import from sync or aio to avoid
circular dependencies.
"""

from .config import EngineConfig, build_config
from .errors import (
    AVLTreeError,
    TraversalMismatchError,
    InvalidValueError,
    ReentrantMutationError,
)
from .error_policies import (
    ErrorPolicy,
    FailFastPolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
    ThresholdPolicy,
)
from .events import (
    RotationDirection,
    ImbalanceCase,
    ProgressKind,
    RotationEvent,
    ProgressEvent,
)
from .node import (
    AVLNode,
    height,
    balance_factor,
    update_height,
    min_value_node,
    count_nodes,
    same_structure,
    node_to_dict,
    find_unbalanced,
)
from .parsing import parse_values, ensure_orderable
from .rebuild import (
    rebuild_from_preorder_inorder,
    rebuild_from_postorder_inorder,
    validate_traversal_pair,
)
from .traversal import (
    inorder,
    preorder,
    postorder,
    level_order,
    format_traversal,
    search,
    trace_descent,
    SearchResult,
    DescentStep,
)

__all__ = [
    # Config
    'EngineConfig',
    'build_config',
    # Errors
    'AVLTreeError',
    'TraversalMismatchError',
    'InvalidValueError',
    'ReentrantMutationError',
    # Policies
    'ErrorPolicy',
    'FailFastPolicy',
    'ContinueOnErrorsPolicy',
    'CollectErrorsPolicy',
    'ThresholdPolicy',
    # Events
    'RotationDirection',
    'ImbalanceCase',
    'ProgressKind',
    'RotationEvent',
    'ProgressEvent',
    # Node model
    'AVLNode',
    'height',
    'balance_factor',
    'update_height',
    'min_value_node',
    'count_nodes',
    'same_structure',
    'node_to_dict',
    'find_unbalanced',
    # Parsing
    'parse_values',
    'ensure_orderable',
    # Rebuild
    'rebuild_from_preorder_inorder',
    'rebuild_from_postorder_inorder',
    'validate_traversal_pair',
    # Traversal
    'inorder',
    'preorder',
    'postorder',
    'level_order',
    'format_traversal',
    'search',
    'trace_descent',
    'SearchResult',
    'DescentStep',
]

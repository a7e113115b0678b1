"""State and read-only views shared by the sync and async engines.

Everything here is pure computation over the current root. Mutation and
the rotation observer live in the engine subclasses, because only they
know whether the observer is awaited.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional

from . import traversal
from .config import EngineConfig
from .events import ProgressEvent
from .node import AVLNode, count_nodes, height, node_to_dict

logger = logging.getLogger('avltreelib.engine')


class TreeBase:
    """Root holder with traversal, search and progress plumbing."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = (config or EngineConfig()).check()
        self.root: Optional[AVLNode] = None
        # First error deferred until the running mutation completes
        self._pending_error: Optional[BaseException] = None

    # Read-only views

    @property
    def height(self) -> int:
        """Height of the whole tree, 0 when empty."""
        return height(self.root)

    @property
    def size(self) -> int:
        """Number of values stored."""
        return count_nodes(self.root)

    def is_empty(self) -> bool:
        return self.root is None

    def search(self, value: Any) -> traversal.SearchResult:
        """Look ``value`` up; the result carries the values visited."""
        return traversal.search(self.root, value)

    def contains(self, value: Any) -> bool:
        return traversal.search(self.root, value).found

    def trace(self, value: Any) -> List[traversal.DescentStep]:
        """Comparisons made while descending toward ``value``."""
        return traversal.trace_descent(self.root, value)

    def inorder(self) -> List[Any]:
        return traversal.inorder(self.root)

    def preorder(self) -> List[Any]:
        return traversal.preorder(self.root)

    def postorder(self) -> List[Any]:
        return traversal.postorder(self.root)

    def level_order(self) -> List[List[Any]]:
        return traversal.level_order(self.root)

    def traversals(self) -> Dict[str, str]:
        """Display text for the three depth-first traversals."""
        return {
            'inorder': traversal.format_traversal(self.inorder()),
            'preorder': traversal.format_traversal(self.preorder()),
            'postorder': traversal.format_traversal(self.postorder()),
        }

    def to_dict(self) -> Optional[Dict[str, Any]]:
        """Nested snapshot of the tree for renderers."""
        return node_to_dict(self.root)

    def __len__(self) -> int:
        return self.size

    def __contains__(self, value: Any) -> bool:
        return self.contains(value)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.inorder())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={self.size}, height={self.height})"

    # Progress and deferred errors

    def _emit(self, event: ProgressEvent) -> None:
        """Send an advisory progress event to the logger and callback."""
        if self.config.log_progress:
            logger.debug("%s", event.message)
        callback = self.config.progress_callback
        if callback is None:
            return
        try:
            callback(event)
        except Exception as error:
            self._defer(error)

    def _defer(self, error: BaseException) -> None:
        """Hold ``error`` until the running mutation completes.

        Outside a mutation there is nothing to finish, so the error is
        raised at once.
        """
        if not self._is_mutating():
            raise error
        if self._pending_error is None:
            self._pending_error = error

    def _take_pending_error(self) -> Optional[BaseException]:
        pending, self._pending_error = self._pending_error, None
        return pending

    def _is_mutating(self) -> bool:
        raise NotImplementedError

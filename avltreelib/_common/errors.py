"""Exception types for avltreelib.

The engine is value-oriented: a duplicate insert or the delete of an absent
value is reported through a boolean result, never an exception. The types
below cover the cases that are real failures for the caller.
"""


class AVLTreeError(Exception):
    """Base class for all avltreelib errors."""
    pass


class TraversalMismatchError(AVLTreeError, ValueError):
    """A traversal pair cannot be rebuilt into a single tree.

    Raised for empty sequences, length mismatches, duplicate values,
    differing value sets, or a root value that is missing from its
    inorder window.
    """

    def __init__(self, message: str, order: str = None):
        super().__init__(message)
        self.order = order


class InvalidValueError(AVLTreeError, TypeError):
    """A value was rejected at the input boundary.

    Values must be totally ordered against each other; tokens that do not
    parse as integers are rejected by the sequence parser.
    """

    def __init__(self, message: str, value=None):
        super().__init__(message)
        self.value = value


class ReentrantMutationError(AVLTreeError, RuntimeError):
    """A tree mutation was started while another one was in flight.

    This happens when a rotation observer tries to insert into or delete
    from the tree it is observing.
    """
    pass

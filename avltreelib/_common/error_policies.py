"""
Observer error policies for avltreelib.

A rotation observer is outside code (usually a renderer). When it raises,
the engine hands the exception to a policy, which either re-raises it or
records it and lets the rotation go ahead. The rotation itself always
completes once the policy returns, so the tree never depends on whether
the observer succeeded.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from .events import RotationEvent

logger = logging.getLogger(__name__)


class ErrorPolicy(ABC):
    """
    Base class for observer error policies.

    Subclasses decide whether an observer failure stops the current
    insert/delete or is tolerated.
    """

    @abstractmethod
    def handle_sync(self, error: Exception, event: RotationEvent) -> None:
        """
        Handle an observer error.

        Args:
            error: The exception the observer raised
            event: The rotation the observer was notified about

        Raises:
            The original error (or another one) to have it reported to the
            caller once the mutation completes.
        """
        pass

    async def handle(self, error: Exception, event: RotationEvent) -> None:
        """
        Handle an observer error from the async engine.

        Policies hold no I/O, so the default simply delegates to
        :meth:`handle_sync`.
        """
        self.handle_sync(error, event)


class FailFastPolicy(ErrorPolicy):
    """
    Policy that immediately re-raises the observer's error.

    This is the default. A started insert/delete cannot be cancelled, so
    the engine finishes the structural work without notifying the observer
    again and then raises the error to its caller. The tree satisfies all
    invariants when the error surfaces.
    """

    def handle_sync(self, error: Exception, event: RotationEvent) -> None:
        """Re-raise the error immediately."""
        raise error


def _error_record(error: Exception, event: RotationEvent) -> Dict[str, Any]:
    return {
        'direction': event.direction.value,
        'old_root': event.old_root.value,
        'new_root': event.new_root.value,
        'error': error,
        'error_type': type(error).__name__,
        'error_message': str(error),
    }


class ContinueOnErrorsPolicy(ErrorPolicy):
    """
    Policy that records observer errors and lets the rotation proceed.

    Useful when a broken renderer should not stop the tree from being
    balanced.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, log a warning for each error
        """
        self.errors: List[Dict[str, Any]] = []
        self.verbose = verbose

    def handle_sync(self, error: Exception, event: RotationEvent) -> None:
        record = _error_record(error, event)
        self.errors.append(record)

        if self.verbose:
            logger.warning(
                "Observer failed before %s rotation at node %r: %s",
                record['direction'], record['old_root'], error,
            )

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        by_type: Dict[str, int] = {}
        for record in self.errors:
            by_type[record['error_type']] = by_type.get(record['error_type'], 0) + 1
        return {
            'total_errors': len(self.errors),
            'by_type': by_type,
            'errors': self.errors,
        }


class CollectErrorsPolicy(ContinueOnErrorsPolicy):
    """
    Policy that collects all observer errors without logging.

    Similar to ContinueOnErrorsPolicy but silent, for presenting all
    failures at the end of a batch of operations.
    """

    def __init__(self):
        super().__init__(verbose=False)


class ThresholdPolicy(ErrorPolicy):
    """
    Policy that tolerates observer errors up to a threshold, then fails.

    A few failures are tolerated; past the threshold every failure is
    reported to the caller as a RuntimeError.
    """

    def __init__(self, max_errors: int = 10, verbose: bool = True):
        """
        Initialize threshold policy.

        Args:
            max_errors: Maximum errors to tolerate before failing
            verbose: If True, log a warning for tolerated errors
        """
        self.max_errors = max_errors
        self.error_count = 0
        self.verbose = verbose
        self.errors: List[Exception] = []

    def handle_sync(self, error: Exception, event: RotationEvent) -> None:
        self.error_count += 1
        self.errors.append(error)

        if self.error_count > self.max_errors:
            raise RuntimeError(f"Observer error threshold exceeded ({self.max_errors} errors)") from error

        if self.verbose:
            logger.warning(
                "Observer error [%d/%d] before %s rotation at node %r: %s",
                self.error_count, self.max_errors,
                event.direction.value, event.old_root.value, error,
            )

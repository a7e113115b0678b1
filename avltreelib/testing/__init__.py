"""Testing utilities for avltreelib consumers."""

from .fixtures import TreeInvariantChecker, RecordingObserver

__all__ = ['TreeInvariantChecker', 'RecordingObserver']

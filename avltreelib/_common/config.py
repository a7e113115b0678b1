"""Configuration system for avltreelib.

This module defines how callers wire an engine to the outside world:
who observes rotations, where progress messages go, how observer failures
are treated and how strictly rebuild input is checked.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable, List, Optional

from .error_policies import ErrorPolicy, FailFastPolicy
from .events import ProgressEvent


@dataclass
class EngineConfig:
    """Complete configuration for an AVL engine.

    The same config type serves the sync and async engines. Only the async
    engine accepts observers that return awaitables.
    """

    # Called as observer(direction, old_root, new_root) before each rotation
    rotation_observer: Optional[Callable[..., Any]] = None

    # Advisory status messages
    progress_callback: Optional[Callable[[ProgressEvent], None]] = None
    log_progress: bool = True  # Also send progress to the module logger

    # Error handling
    observer_policy: ErrorPolicy = field(default_factory=FailFastPolicy)

    # Rebuild input checking
    validate_rebuild: bool = True

    # Convenience constructors for common configurations

    @classmethod
    def quiet(cls) -> 'EngineConfig':
        """Create config that emits no progress at all."""
        return cls(log_progress=False)

    @classmethod
    def permissive(cls) -> 'EngineConfig':
        """Create config that rebuilds trees without up-front validation.

        Reconstruction still rejects a pair that does not describe one
        tree, but the error names the first root it could not place
        instead of the underlying cause.
        """
        return cls(validate_rebuild=False)

    @classmethod
    def observed(cls, observer: Callable[..., Any],
                 progress_callback: Optional[Callable[[ProgressEvent], None]] = None) -> 'EngineConfig':
        """Create config for a renderer watching rotations.

        Args:
            observer: Rotation observer
            progress_callback: Optional status message sink

        Returns:
            EngineConfig wired to the observer
        """
        return cls(rotation_observer=observer, progress_callback=progress_callback)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.rotation_observer is not None and not callable(self.rotation_observer):
            errors.append("rotation_observer must be callable")

        if self.progress_callback is not None and not callable(self.progress_callback):
            errors.append("progress_callback must be callable")

        if not isinstance(self.observer_policy, ErrorPolicy):
            errors.append("observer_policy must be an ErrorPolicy instance")

        return errors

    def check(self) -> 'EngineConfig':
        """Raise ValueError if :meth:`validate` reports problems."""
        errors = self.validate()
        if errors:
            raise ValueError("Invalid engine configuration: " + "; ".join(errors))
        return self


def build_config(config: Optional[EngineConfig] = None, **kwargs) -> EngineConfig:
    """Merge keyword overrides into a config.

    Args:
        config: Base configuration (defaults to ``EngineConfig()``)
        **kwargs: Field overrides, e.g. ``rotation_observer=...``

    Returns:
        A new EngineConfig; ``config`` itself is not modified

    Raises:
        TypeError: For keywords that are not EngineConfig fields
    """
    base = config or EngineConfig()
    unknown = set(kwargs) - {f.name for f in fields(EngineConfig)}
    if unknown:
        raise TypeError(f"Unknown engine options: {', '.join(sorted(unknown))}")
    return replace(base, **kwargs)

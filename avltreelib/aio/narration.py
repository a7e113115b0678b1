"""Step-by-step narration of rotations.

RotationNarrator is an async rotation observer. Before each rotation it
explains, one paced step at a time, which node is unbalanced, which child
becomes the new subtree root, which subtree changes parent and where the
old root ends up. Because the engine awaits the observer before rewiring,
every step describes the tree as it still is.
"""

import inspect
import logging
from typing import Any, Callable, List, Optional, Sequence

from .._common.events import RotationDirection, RotationEvent
from .._common.node import AVLNode
from .pacing import Pacer

logger = logging.getLogger(__name__)


class RotationNarrator:
    """Async rotation observer that emits paced explanation steps.

    Example:
        narrator = RotationNarrator(Pacer(speed=4.0), emit=status_bar.set_text)
        tree = AsyncAVLTree(EngineConfig.observed(narrator))
    """

    # Nominal delay (ms) before the first step and after each of the five
    DEFAULT_DELAYS = (500, 2000, 2000, 2500, 2000, 1000)

    def __init__(self,
                 pacer: Optional[Pacer] = None,
                 emit: Optional[Callable[[str], Any]] = None,
                 delays: Sequence[float] = DEFAULT_DELAYS):
        """Initialize the narrator.

        Args:
            pacer: Pacer for the delays between steps (no delays if None)
            emit: Sync or async callable receiving each step message
            delays: Six nominal delays in milliseconds
        """
        if len(delays) != 6:
            raise ValueError(f"Expected 6 delays, got {len(delays)}")
        self.pacer = pacer
        self.emit = emit
        self.delays = tuple(delays)
        self.messages: List[str] = []

    async def __call__(self, direction: str, old_root: AVLNode, new_root: AVLNode) -> None:
        event = RotationEvent(RotationDirection(direction), old_root, new_root)
        steps = self.describe(event)

        await self._pause(self.delays[0])
        for message, delay in zip(steps, self.delays[1:]):
            await self._say(message)
            await self._pause(delay)

    @staticmethod
    def describe(event: RotationEvent) -> List[str]:
        """The five explanation steps for one rotation."""
        old, new = event.old_root, event.new_root
        name = event.direction.value.upper()

        moving = event.moving_subtree
        if moving is None:
            step3 = "STEP 3: No subtree T2 to move in this rotation"
        elif event.direction is RotationDirection.RIGHT:
            step3 = (f"STEP 3: Subtree T2 ({moving.value}) will move from "
                     f"{new.value}'s right to {old.value}'s left")
        else:
            step3 = (f"STEP 3: Subtree T2 ({moving.value}) will move from "
                     f"{new.value}'s left to {old.value}'s right")

        return [
            f"STEP 1: Unbalanced node {old.value} needs {name} rotation",
            f"STEP 2: Node {new.value} will become the new root (rotation pivot)",
            step3,
            f"STEP 4: Node {old.value} will move down to become "
            f"{event.direction.value} child of {new.value}",
            f"STEP 5: Executing {name} rotation...",
        ]

    async def _say(self, message: str) -> None:
        self.messages.append(message)
        logger.info("%s", message)
        if self.emit is not None:
            result = self.emit(message)
            if inspect.isawaitable(result):
                await result

    async def _pause(self, ms: float) -> None:
        if self.pacer is not None:
            await self.pacer.sleep(ms)

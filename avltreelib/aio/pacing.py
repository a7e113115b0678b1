"""Pacing for step-animated front ends.

A Pacer turns nominal animation delays into real waits, scaled by a speed
factor and suspended while paused. It sits outside the engine: the engine
only awaits its observer, and the observer decides how long to take.
Pacing changes wall-clock timing, never the resulting tree.
"""

import asyncio
from typing import Awaitable, Callable, Optional


class Pacer:
    """Speed-scaled, pausable async delays.

    Example:
        pacer = Pacer(speed=2.0)
        await pacer.sleep(1000)   # waits ~0.5s
        pacer.pause()             # later sleeps block until resume()
    """

    # Pause is checked between ticks of this length (seconds)
    TICK = 0.05

    def __init__(self, speed: float = 1.0,
                 sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        """Initialize the pacer.

        Args:
            speed: Playback speed; 2.0 halves every delay
            sleep: Coroutine function used for the actual waits
        """
        self._speed = self._check_speed(speed)
        self._sleep = sleep
        self._paused = False
        self._resumed: Optional[asyncio.Event] = None

    @staticmethod
    def _check_speed(speed: float) -> float:
        if speed <= 0:
            raise ValueError(f"speed must be positive, got {speed}")
        return float(speed)

    @property
    def speed(self) -> float:
        return self._speed

    def set_speed(self, speed: float) -> None:
        """Change playback speed; applies to sleeps started afterwards."""
        self._speed = self._check_speed(speed)

    @property
    def is_paused(self) -> bool:
        return self._paused

    def pause(self) -> None:
        self._paused = True
        if self._resumed is not None:
            self._resumed.clear()

    def resume(self) -> None:
        self._paused = False
        if self._resumed is not None:
            self._resumed.set()

    def scaled(self, ms: float) -> float:
        """Seconds actually waited for a nominal delay of ``ms``."""
        return max(ms, 0) / 1000.0 / self._speed

    async def wait_if_paused(self) -> None:
        """Block while the pacer is paused."""
        while self._paused:
            if self._resumed is None:
                # Created on first use so the pacer can be built outside a loop
                self._resumed = asyncio.Event()
            await self._resumed.wait()

    async def sleep(self, ms: float) -> None:
        """Wait ``ms`` milliseconds at the current speed.

        Time spent paused does not count toward the delay.
        """
        remaining = self.scaled(ms)
        while remaining > 1e-9:
            await self.wait_if_paused()
            chunk = min(remaining, self.TICK)
            await self._sleep(chunk)
            remaining -= chunk

"""
Frame-clock scheduler backed by pygame.

start() runs a blocking loop: pump window events, run one tick, flip the
display, then wait for the next frame. stop() ends the loop after the
current frame.
"""

import pygame
from typing import Any, Callable, Optional

from ..core.scheduler import Scheduler, TickCallback

EventHandler = Callable[[Any], None]


class PygameScheduler(Scheduler):
    """Runs the tick callback from a pygame.time.Clock loop."""

    def __init__(self, event_handler: Optional[EventHandler] = None):
        """
        Args:
            event_handler: Called with every pygame event before each tick
        """
        self.event_handler = event_handler
        self.clock: Optional[pygame.time.Clock] = None
        self.frames: int = 0
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self, callback: TickCallback, interval_ms: float) -> None:
        fps = max(1, int(round(1000.0 / interval_ms)))
        self.clock = pygame.time.Clock()
        self._running = True

        while self._running:
            for event in pygame.event.get():
                if self.event_handler is not None:
                    self.event_handler(event)

            if not self._running:
                break

            callback()
            self.frames += 1
            pygame.display.flip()
            self.clock.tick(fps)

    def stop(self) -> None:
        self._running = False

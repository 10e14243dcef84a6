"""
Scroll Player - asyncio ticker driving the marquee preview

At most one ticker task runs at a time. Each tick renders the current
scroll position into `last_strip` and notifies the optional on_frame callback.
"""

import asyncio
from typing import Callable, Optional

from neomatrix.engine.marquee import MarqueeScroller, Strip
from neomatrix.models.domain import Animation
from neomatrix.models.errors import EmptyAnimationError
from neomatrix.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.PLAYBACK)


class ScrollPlayer:
    """
    Owns the preview ticker task

    Example:
        player = ScrollPlayer()
        await player.start(animation, animation.step_delay_ms)
        ...
        await player.stop()
    """

    def __init__(self, on_frame: Optional[Callable[[Strip], None]] = None):
        self.on_frame = on_frame
        self.scroller: Optional[MarqueeScroller] = None
        self.delay_ms: int = 0
        self.tick_count: int = 0
        self.last_strip: Optional[Strip] = None
        self._task: Optional[asyncio.Task] = None
        self._animation: Optional[Animation] = None
        self._delay_override = False

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self, animation: Animation, delay_ms: Optional[int] = None) -> bool:
        """
        Start ticking

        Returns:
            False when already running (nothing changes)

        Raises:
            EmptyAnimationError: no frame has lit pixels
        """
        if self.is_running:
            log.debug("Start ignored, already running")
            return False

        snapshot = animation.snapshot()
        self.scroller = MarqueeScroller.from_frames(snapshot.frames, snapshot.grid)
        self._animation = snapshot
        self._delay_override = delay_ms is not None
        self.delay_ms = delay_ms if delay_ms is not None else snapshot.step_delay_ms
        self.tick_count = 0
        self.last_strip = None

        self._task = asyncio.create_task(self._run())
        log.info("Scroll preview started", delay_ms=self.delay_ms, cycle=self.scroller.cycle_length)
        return True

    async def stop(self) -> bool:
        """Cancel the ticker. Returns False when it wasn't running."""
        task = self._task
        self._task = None
        if task is None or task.done():
            return False

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        log.info("Scroll preview stopped", ticks=self.tick_count)
        return True

    async def restart(self, animation: Animation, delay_ms: Optional[int] = None) -> bool:
        await self.stop()
        return await self.start(animation, delay_ms)

    def invalidate(self, animation: Animation) -> None:
        """
        Rebuild the layout from the edited animation while running

        A changed step delay (without an explicit start() override) restarts
        the ticker task immediately.
        """
        if not self.is_running:
            return

        snapshot = animation.snapshot()
        try:
            scroller = MarqueeScroller.from_frames(snapshot.frames, snapshot.grid)
        except EmptyAnimationError:
            log.warn("Nothing left to scroll, stopping preview")
            self._task.cancel()
            self._task = None
            return

        self.scroller = scroller
        self._animation = snapshot
        log.debug("Scroll layout rebuilt", cycle=scroller.cycle_length)

        if not self._delay_override and snapshot.step_delay_ms != self.delay_ms:
            # the running task is mid-sleep on the old delay
            self.delay_ms = snapshot.step_delay_ms
            self._task.cancel()
            self._task = asyncio.create_task(self._run())
            log.info("Scroll preview restarted", delay_ms=self.delay_ms)

    def on_editor_change(self, change, animation: Animation) -> None:
        """EditorService listener"""
        self.invalidate(animation)

    def step(self) -> Strip:
        """Advance one tick synchronously"""
        strip = self.scroller.tick()
        self.last_strip = strip
        self.tick_count += 1
        if self.on_frame:
            self.on_frame(strip)
        return strip

    async def _run(self) -> None:
        while True:
            self.step()
            await asyncio.sleep(self.delay_ms / 1000)

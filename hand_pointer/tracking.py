"""
tracking.py
===========
Tracking session: owns the detector lifecycle, the pointer indicator and the
per-frame control loop.

High-level flow:
1) start(): make sure the indicator exists, provision the detector, then spawn
   the loop task. A failed provision leaves the session stopped; start() can be
   called again later.
2) Each iteration (step):
   - Estimate hands on the current video frame (errors skip the frame)
   - No hand / no index fingertip / stream not ready -> hide the indicator
   - Map the index fingertip to page space and show the indicator there
   - Index + middle fingertip pinch -> click at the pointer and flash it
3) Between iterations the loop waits on the frame clock, so it runs at the
   video's own cadence rather than on a timer.
4) stop() only clears the flag. An estimate already in flight finishes, its
   result is dropped, and the loop exits with the indicator hidden. The same
   holds when start() runs again before that estimate returns: the stale
   result belongs to an older loop generation and is ignored.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Tuple

from .gestures import CLICK_DISTANCE_PX, ClickGate, is_click_gesture
from .mapping import VideoSource, map_to_page
from .provisioner import ModelProvisioner
from .visual import PointerIndicator

logger = logging.getLogger(__name__)


class FrameClock(Protocol):
    async def next_frame(self) -> None:
        """Suspend until the next display frame."""


class DisplayClock:
    """Frame clock driven by the display loop.

    The display calls tick() once per rendered frame; every coroutine parked in
    next_frame() resumes on that tick. No ticks (no new video frames, preview
    not rendering) means no tracking iterations.
    """

    def __init__(self):
        self._waiters: List[asyncio.Future] = []

    async def next_frame(self) -> None:
        fut = asyncio.get_running_loop().create_future()
        self._waiters.append(fut)
        await fut

    def tick(self) -> int:
        waiters, self._waiters = self._waiters, []
        for fut in waiters:
            if not fut.done():
                fut.set_result(None)
        return len(waiters)


class TrackingSession:
    def __init__(
        self,
        video: VideoSource,
        provisioner: ModelProvisioner,
        clicker: Callable[[float, float], Any],
        frame_clock: FrameClock,
        indicator: Optional[PointerIndicator] = None,
        mirror: bool = True,
        edge_triggered_clicks: bool = True,
        click_threshold: float = CLICK_DISTANCE_PX,
        on_pointer: Optional[Callable[[float, float], Any]] = None,
    ):
        self.video = video
        self.provisioner = provisioner
        self.clicker = clicker
        self.frame_clock = frame_clock
        self.indicator = indicator
        self.mirror = mirror
        self.click_threshold = click_threshold
        self.click_gate = ClickGate(edge_triggered_clicks)
        self.on_pointer = on_pointer

        self.is_tracking = False
        self.last_pointer_position: Tuple[float, float] = (0.0, 0.0)
        self._starting = False
        self._generation = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def model_ready(self) -> bool:
        return self.provisioner.model_ready

    @property
    def load_attempts(self) -> int:
        return self.provisioner.load_attempts

    def ensure_indicator(self) -> PointerIndicator:
        if self.indicator is None:
            self.indicator = PointerIndicator()
        return self.indicator

    async def start(self) -> bool:
        """Begin tracking. Returns True when the loop is running."""
        if self.is_tracking or self._starting:
            return self.is_tracking
        self._starting = True
        try:
            self.ensure_indicator()
            if not self.model_ready:
                # each start gets its own bounded provisioning sequence
                self.provisioner.reset()
            if not await self.provisioner.ensure_ready():
                logger.error("Failed to load hand tracking models")
                return False
            self.is_tracking = True
            self._generation += 1
            self._task = asyncio.create_task(self._run(self._generation))
            logger.info("Hand tracking started")
            return True
        finally:
            self._starting = False

    def stop(self) -> None:
        if self.is_tracking:
            logger.info("Hand tracking stopped")
        self.is_tracking = False
        self.click_gate.reset()
        if self.indicator is not None:
            self.indicator.hide()

    async def toggle(self) -> bool:
        """Flip tracking on/off. Returns the new tracking state."""
        if self.is_tracking:
            self.stop()
            return False
        return await self.start()

    def update_settings(self, settings: Mapping[str, Any]) -> None:
        for key, value in settings.items():
            if key == "mirror":
                self.mirror = bool(value)
            elif key == "edge_triggered_clicks":
                self.click_gate.edge_triggered = bool(value)
                self.click_gate.reset()
            elif key == "click_threshold":
                self.click_threshold = float(value)
            else:
                logger.debug("Ignoring setting %s=%r", key, value)

    def settings(self) -> Dict[str, Any]:
        return {
            "mirror": self.mirror,
            "edge_triggered_clicks": self.click_gate.edge_triggered,
            "click_threshold": self.click_threshold,
        }

    async def wait_closed(self) -> None:
        if self._task is not None:
            await self._task

    def _active(self, generation: int) -> bool:
        # a stop() followed by start() must not revive the previous loop
        return self.is_tracking and generation == self._generation

    async def _run(self, generation: int) -> None:
        try:
            while self._active(generation):
                try:
                    await self.step(generation)
                except Exception:
                    logger.exception("Unexpected error in tracking step")
                    self.indicator.hide()
                if not self._active(generation):
                    break
                await self.frame_clock.next_frame()
        finally:
            if self.indicator is not None and not self.is_tracking:
                self.indicator.hide()

    async def step(self, generation: Optional[int] = None) -> None:
        if not self.is_tracking or not self.model_ready:
            return
        if generation is None:
            generation = self._generation
        indicator = self.ensure_indicator()

        try:
            hands = await self.provisioner.detector.estimate_hands(self.video.current_frame())
        except Exception as e:
            logger.warning("Error in hand tracking: %s", e)
            return

        if not self.is_tracking:
            # stopped while the estimate was in flight
            indicator.hide()
            return
        if generation != self._generation:
            # restarted while the estimate was in flight; the new loop owns the indicator
            return

        if not hands:
            self._lose_hand(indicator)
            return

        hand = hands[0]
        index_tip = hand.index_tip
        if index_tip is None:
            self._lose_hand(indicator)
            return

        page = map_to_page(index_tip, self.video, self.mirror)
        if page is None:
            self._lose_hand(indicator)
            return
        page_x, page_y = page
        indicator.show(page_x, page_y)
        self.last_pointer_position = page
        if self.on_pointer is not None:
            self.on_pointer(page_x, page_y)

        middle_tip = hand.middle_tip
        if middle_tip is None:
            self.click_gate.reset()
            return
        pinched = is_click_gesture(index_tip, middle_tip, self.click_threshold)
        if self.click_gate.update(pinched):
            logger.debug("Click at (%.0f, %.0f)", page_x, page_y)
            try:
                self.clicker(page_x, page_y)
            except Exception as e:
                logger.warning("Click at (%.0f, %.0f) failed: %s", page_x, page_y, e)
            indicator.flash_click()

    def _lose_hand(self, indicator: PointerIndicator) -> None:
        indicator.hide()
        self.click_gate.reset()

"""
visual.py
=========
Pointer indicator: a single round marker that follows the index fingertip in
page coordinates and turns green briefly when a click fires.

The indicator only holds state. `camera.PreviewWindow` draws it over the live
preview; it never receives or blocks input events.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

POINTER_RADIUS_PX = 10
POINTER_COLOR = (0, 0, 255)  # BGR red
POINTER_CLICK_COLOR = (0, 255, 0)  # BGR green
CLICK_FLASH_MS = 300


class PointerIndicator:
    def __init__(self, flash_ms: int = CLICK_FLASH_MS, radius: int = POINTER_RADIUS_PX):
        self.flash_ms = flash_ms
        self.radius = radius
        self.visible = False
        self.position: Tuple[float, float] = (0.0, 0.0)
        self.click_flash_active = False
        self._revert_handle: Optional[asyncio.TimerHandle] = None

    @property
    def color(self) -> Tuple[int, int, int]:
        return POINTER_CLICK_COLOR if self.click_flash_active else POINTER_COLOR

    def show(self, x: float, y: float) -> None:
        self.visible = True
        self.position = (x, y)

    def hide(self) -> None:
        self.visible = False

    def flash_click(self) -> None:
        """Switch to the click colour and (re)arm the revert timer."""
        self.click_flash_active = True
        if self._revert_handle is not None:
            self._revert_handle.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # nothing could revert the flash later
            logger.debug("flash_click outside event loop, reverting immediately")
            self.click_flash_active = False
            self._revert_handle = None
            return
        self._revert_handle = loop.call_later(self.flash_ms / 1000.0, self._end_flash)

    def _end_flash(self) -> None:
        self.click_flash_active = False
        self._revert_handle = None

    def dispose(self) -> None:
        if self._revert_handle is not None:
            self._revert_handle.cancel()
            self._revert_handle = None
        self.click_flash_active = False
        self.visible = False

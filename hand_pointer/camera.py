"""
camera.py
=========
Camera opening helpers, a frame-grabber thread that always keeps the latest
frame in memory, and the on-screen preview the pointer lives on.

The grabber thread only fills the frame buffer. Everything else (detection,
drawing, clicking) happens on the asyncio loop that reads from it.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Optional, Tuple

import cv2
import numpy as np

from .errors import CameraError
from .mapping import RenderRect
from .visual import PointerIndicator

logger = logging.getLogger(__name__)

PREVIEW_MARGIN_H = 10
PREVIEW_MARGIN_V = 20
PREVIEW_POSITIONS = ("leftTop", "rightTop", "leftBottom", "rightBottom")


def preview_origin(position: str, screen_size: Tuple[int, int], width: int, height: int) -> Tuple[int, int]:
    """Top-left screen corner for a `width` x `height` preview pinned to a screen corner."""
    screen_w, screen_h = screen_size
    left = PREVIEW_MARGIN_H if position.startswith("left") else max(0, screen_w - width - PREVIEW_MARGIN_H)
    top = PREVIEW_MARGIN_V if position.endswith("Top") else max(0, screen_h - height - PREVIEW_MARGIN_V)
    return left, top


def open_camera(cam_index: int, width: int, height: int) -> cv2.VideoCapture:
    backends = [cv2.CAP_MSMF, cv2.CAP_DSHOW, cv2.CAP_ANY]
    for be in backends:
        cap = cv2.VideoCapture(cam_index, be)
        if cap.isOpened():
            cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
            cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
            cap.set(cv2.CAP_PROP_BUFFERSIZE, 1)
            logger.info("Camera %d opened (backend %s)", cam_index, cap.getBackendName())
            return cap
        cap.release()
    raise CameraError(f"Unable to open camera {cam_index}")


class FrameGrabber:
    """Background thread that reads frames as fast as possible.

    latest: most recent BGR frame (h, w, 3) as captured, never flipped.
    frame_id: increments with every new frame.
    """

    def __init__(self, cap: cv2.VideoCapture):
        self.cap = cap
        self.latest: Optional[np.ndarray] = None
        self.frame_id = 0
        self._lock = threading.Lock()
        self._running = False
        self._thread = threading.Thread(target=self._loop, daemon=True)

    def start(self) -> None:
        self._running = True
        self._thread.start()

    def stop(self, join_timeout: float = 0.5) -> None:
        self._running = False
        if self._thread.is_alive():
            self._thread.join(timeout=join_timeout)

    def read_latest(self) -> Tuple[Optional[np.ndarray], int]:
        with self._lock:
            return self.latest, self.frame_id

    def _loop(self) -> None:
        while self._running:
            ret, f = self.cap.read()
            if not ret:
                time.sleep(0.001)
                continue
            with self._lock:
                self.latest = f
                self.frame_id += 1


class PreviewWindow:
    """OpenCV window showing the (optionally mirrored) feed and the pointer."""

    def __init__(self, name: str, width: int, screen_size: Tuple[int, int], position: str = "leftBottom"):
        self.name = name
        self.width = width
        self.height = width * 3 // 4
        left, top = preview_origin(position, screen_size, self.width, self.height)
        cv2.namedWindow(name, cv2.WINDOW_NORMAL)
        cv2.resizeWindow(name, self.width, self.height)
        cv2.moveWindow(name, left, top)
        self._rect = RenderRect(left, top, self.width, self.height)

    def rect(self) -> RenderRect:
        """Screen rectangle of the image area; last good value if the backend can't tell."""
        x, y, w, h = cv2.getWindowImageRect(self.name)
        if w > 0 and h > 0:
            self._rect = RenderRect(x, y, w, h)
        return self._rect

    def is_open(self) -> bool:
        return cv2.getWindowProperty(self.name, cv2.WND_PROP_VISIBLE) >= 1

    def render(self, frame: np.ndarray, indicator: Optional[PointerIndicator], mirror: bool, status: str) -> int:
        """Draw one preview frame. Returns the key pressed (or -1)."""
        rect = self.rect()
        view = cv2.flip(frame, 1) if mirror else frame
        view = cv2.resize(view, (int(rect.width), int(rect.height)), interpolation=cv2.INTER_LINEAR)

        if indicator is not None and indicator.visible:
            px = int(indicator.position[0] - rect.left)
            py = int(indicator.position[1] - rect.top)
            cv2.circle(view, (px, py), indicator.radius, indicator.color, -1, cv2.LINE_AA)

        cv2.putText(view, status, (8, 18), cv2.FONT_HERSHEY_SIMPLEX, 0.45, (0, 255, 0), 1, cv2.LINE_AA)
        cv2.imshow(self.name, view)
        return cv2.waitKey(1) & 0xFF

    def close(self) -> None:
        cv2.destroyWindow(self.name)


class CameraVideoSource:
    """VideoSource over a FrameGrabber, rendered in a PreviewWindow."""

    def __init__(self, grabber: FrameGrabber, preview: PreviewWindow):
        self.grabber = grabber
        self.preview = preview

    @property
    def video_width(self) -> int:
        frame, _ = self.grabber.read_latest()
        return 0 if frame is None else frame.shape[1]

    @property
    def video_height(self) -> int:
        frame, _ = self.grabber.read_latest()
        return 0 if frame is None else frame.shape[0]

    def render_rect(self) -> RenderRect:
        return self.preview.rect()

    def current_frame(self) -> Optional[np.ndarray]:
        frame, _ = self.grabber.read_latest()
        return frame

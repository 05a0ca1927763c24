"""
mapping.py
==========
Video-to-page coordinate mapping. A fingertip detected in the camera frame is
projected onto the rectangle where the preview is rendered on screen, with an
optional horizontal mirror so the preview behaves like a mirror.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple


@dataclass(frozen=True)
class RenderRect:
    """On-screen rectangle of the preview, in page (screen) pixels."""
    left: float
    top: float
    width: float
    height: float


class VideoSource(Protocol):
    video_width: int
    video_height: int

    def render_rect(self) -> RenderRect: ...

    def current_frame(self): ...


def map_to_page(point, video: VideoSource, mirror: bool) -> Optional[Tuple[float, float]]:
    """Map `point` (anything with .x/.y in video px) to page coordinates.

    Returns None while the stream has no valid dimensions yet.
    """
    if video.video_width <= 0 or video.video_height <= 0:
        return None
    rect = video.render_rect()
    scale_x = rect.width / video.video_width
    scale_y = rect.height / video.video_height
    if mirror:
        page_x = rect.left + (rect.width - point.x * scale_x)
    else:
        page_x = rect.left + point.x * scale_x
    page_y = rect.top + point.y * scale_y
    return page_x, page_y

"""
landmarks.py
============
Hand keypoint schema and per-frame pose containers.

Keypoint identities follow the MediaPipe Hands 21-landmark layout. Coordinates
are in video-frame pixels (MediaPipe's normalized output scaled by the frame
size), which keeps pinch distances independent of the on-screen preview size.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional


class HandKeypoint(IntEnum):
    """MediaPipe hand landmark indices."""
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_FINGER_MCP = 5
    INDEX_FINGER_PIP = 6
    INDEX_FINGER_DIP = 7
    INDEX_FINGER_TIP = 8
    MIDDLE_FINGER_MCP = 9
    MIDDLE_FINGER_PIP = 10
    MIDDLE_FINGER_DIP = 11
    MIDDLE_FINGER_TIP = 12
    RING_FINGER_MCP = 13
    RING_FINGER_PIP = 14
    RING_FINGER_DIP = 15
    RING_FINGER_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


@dataclass
class Keypoint:
    x: float  # video px
    y: float  # video px
    z: float = 0.0  # relative depth, model units
    score: float = 1.0


@dataclass
class HandPose:
    """
    One detected hand.

    Attributes:
        keypoints: Landmarks indexed by `HandKeypoint`; may be shorter than 21
            when the estimator drops trailing points.
        handedness: 'Left', 'Right' or 'Unknown'.
        score: Detection confidence.
    """
    keypoints: List[Optional[Keypoint]] = field(default_factory=list)
    handedness: str = "Unknown"
    score: float = 1.0

    def keypoint(self, which: HandKeypoint) -> Optional[Keypoint]:
        """Return the keypoint for `which`, or None when it is not resolvable."""
        index = int(which)
        if 0 <= index < len(self.keypoints):
            return self.keypoints[index]
        return None

    @property
    def index_tip(self) -> Optional[Keypoint]:
        return self.keypoint(HandKeypoint.INDEX_FINGER_TIP)

    @property
    def middle_tip(self) -> Optional[Keypoint]:
        return self.keypoint(HandKeypoint.MIDDLE_FINGER_TIP)

    @classmethod
    def from_normalized(cls, landmarks, width: int, height: int, handedness: str = "Unknown", score: float = 1.0) -> "HandPose":
        """Build a pose from MediaPipe normalized landmarks scaled to a `width` x `height` frame."""
        points = [Keypoint(l.x * width, l.y * height, l.z) for l in landmarks]
        return cls(points, handedness, score)

"""
hand_pointer - control the desktop pointer with hand gestures from a webcam.

A MediaPipe hand-pose model tracks the index fingertip over a live camera
preview; the fingertip drives a pointer indicator in screen space and an
index/middle fingertip pinch synthesizes a click.
"""

__version__ = "1.0.0"

from .errors import HandPointerError, ProvisioningError, CameraError
from .landmarks import HandKeypoint, Keypoint, HandPose
from .mapping import RenderRect, map_to_page
from .gestures import ClickGate, is_click_gesture
from .visual import PointerIndicator
from .provisioner import DetectorConfig, ModelProvisioner, PoseRuntime
from .tracking import TrackingSession

__all__ = [
    "HandPointerError",
    "ProvisioningError",
    "CameraError",
    "HandKeypoint",
    "Keypoint",
    "HandPose",
    "RenderRect",
    "map_to_page",
    "ClickGate",
    "is_click_gesture",
    "PointerIndicator",
    "DetectorConfig",
    "ModelProvisioner",
    "PoseRuntime",
    "TrackingSession",
]

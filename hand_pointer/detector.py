"""
detector.py
===========
MediaPipe Hands backend for the provisioner.

`MediaPipeRuntime` implements `PoseRuntime`: the `mediapipe` package is the
inference runtime and `mediapipe.python.solutions.hands` is the hand-pose detector
module loaded on top of it. Imports and graph construction are slow, so they run
in the default executor and the preview keeps rendering while the model loads.
`MediaPipeHandDetector` wraps a `Hands` graph and returns poses in video-pixel
coordinates.
"""

from __future__ import annotations

import asyncio
import functools
import importlib
import logging
from typing import List, Optional

import cv2
import numpy as np

from .landmarks import HandPose
from .provisioner import DetectorConfig, PoseRuntime

logger = logging.getLogger(__name__)

MODEL_COMPLEXITY = {"lite": 0, "full": 1}


class MediaPipeHandDetector:
    def __init__(self, hands):
        self.hands = hands

    async def estimate_hands(self, frame: Optional[np.ndarray]) -> List[HandPose]:
        """Run the hand graph on a BGR frame. Runs inline on the event loop thread."""
        if frame is None:
            return []
        h, w = frame.shape[:2]
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb.flags.writeable = False
        result = self.hands.process(rgb)
        if not result.multi_hand_landmarks:
            return []

        poses = []
        for i, hand_lm in enumerate(result.multi_hand_landmarks):
            label, score = "Unknown", 1.0
            if result.multi_handedness and i < len(result.multi_handedness):
                cls = result.multi_handedness[i].classification[0]
                label, score = cls.label, cls.score
            poses.append(HandPose.from_normalized(hand_lm.landmark, w, h, label, score))
        return poses

    def close(self) -> None:
        self.hands.close()


class MediaPipeRuntime(PoseRuntime):
    def __init__(self):
        self._mp = None
        self._hands_module = None

    def is_loaded(self) -> bool:
        return self._mp is not None

    async def inject(self) -> bool:
        loop = asyncio.get_running_loop()
        try:
            self._mp = await loop.run_in_executor(None, importlib.import_module, "mediapipe")
        except ImportError as e:
            logger.error("Failed to import mediapipe: %s", e)
            return False
        logger.info("MediaPipe %s loaded", getattr(self._mp, "__version__", "unknown"))
        return True

    async def ready(self) -> None:
        if not hasattr(self._mp, "solutions"):
            logger.warning("mediapipe %s has no solutions API", getattr(self._mp, "__version__", "unknown"))

    def has_detector_namespace(self) -> bool:
        return self._hands_module is not None and hasattr(self._hands_module, "Hands")

    async def load_detector_module(self) -> bool:
        loop = asyncio.get_running_loop()
        try:
            self._hands_module = await loop.run_in_executor(
                None, importlib.import_module, "mediapipe.python.solutions.hands"
            )
        except ImportError as e:
            logger.error("Failed to load hand pose detection module: %s", e)
            return False
        logger.info("Hand pose detection module loaded")
        return True

    async def create_detector(self, config: DetectorConfig) -> MediaPipeHandDetector:
        if config.model != "MediaPipeHands" or config.runtime != "mediapipe":
            raise ValueError(f"Unsupported detector {config.model}/{config.runtime}")
        build = functools.partial(
            self._hands_module.Hands,
            static_image_mode=False,
            max_num_hands=config.max_hands,
            model_complexity=MODEL_COMPLEXITY.get(config.model_type, 0),
            min_detection_confidence=config.min_detection_confidence,
            min_tracking_confidence=config.min_tracking_confidence,
        )
        hands = await asyncio.get_running_loop().run_in_executor(None, build)
        return MediaPipeHandDetector(hands)

from __future__ import annotations

import asyncio
from typing import List, Optional

import pytest

from hand_pointer.landmarks import HandKeypoint, HandPose, Keypoint
from hand_pointer.mapping import RenderRect
from hand_pointer.provisioner import DetectorConfig, ModelProvisioner, PoseRuntime


class FakeVideo:
    def __init__(self, width=640, height=480, rect=RenderRect(100, 50, 640, 480)):
        self.video_width = width
        self.video_height = height
        self.rect = rect
        self.frames = 0

    def render_rect(self) -> RenderRect:
        return self.rect

    def current_frame(self):
        self.frames += 1
        return object()


class FakeDetector:
    """Returns queued results; an Exception instance in the queue is raised."""

    def __init__(self, results: Optional[list] = None):
        self.results = list(results or [])
        self.default: list = []
        self.calls = 0
        self.gate: Optional[asyncio.Event] = None
        self.closed = False

    async def estimate_hands(self, frame):
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        result = self.results.pop(0) if self.results else self.default
        if isinstance(result, Exception):
            raise result
        return result

    def close(self):
        self.closed = True


class FakeRuntime(PoseRuntime):
    def __init__(self, inject_ok=True, module_ok=True, preloaded_module=False, detector=None):
        self.inject_ok = inject_ok
        self.module_ok = module_ok
        self.namespace = preloaded_module
        self.detector = detector or FakeDetector()
        self.loaded = False
        self.inject_calls = 0
        self.ready_calls = 0
        self.module_calls = 0
        self.created: List[DetectorConfig] = []

    def is_loaded(self) -> bool:
        return self.loaded

    async def inject(self) -> bool:
        self.inject_calls += 1
        self.loaded = self.inject_ok
        return self.inject_ok

    async def ready(self) -> None:
        self.ready_calls += 1

    def has_detector_namespace(self) -> bool:
        return self.namespace

    async def load_detector_module(self) -> bool:
        self.module_calls += 1
        self.namespace = self.module_ok
        return self.module_ok

    async def create_detector(self, config: DetectorConfig):
        self.created.append(config)
        return self.detector


class YieldClock:
    """Frame clock that just yields to the event loop."""

    def __init__(self):
        self.waits = 0

    async def next_frame(self) -> None:
        self.waits += 1
        await asyncio.sleep(0)


def make_hand(index=(320.0, 240.0), middle=(400.0, 240.0)) -> HandPose:
    points: List[Optional[Keypoint]] = [Keypoint(0.0, 0.0) for _ in HandKeypoint]
    points[HandKeypoint.INDEX_FINGER_TIP] = None if index is None else Keypoint(*index)
    points[HandKeypoint.MIDDLE_FINGER_TIP] = None if middle is None else Keypoint(*middle)
    return HandPose(points, "Right", 0.9)


def fast_provisioner(runtime: PoseRuntime, **kwargs) -> ModelProvisioner:
    kwargs.setdefault("retry_delay_s", 0.0)
    kwargs.setdefault("settle_delay_s", 0.0)
    return ModelProvisioner(runtime, **kwargs)


@pytest.fixture
def video():
    return FakeVideo()


@pytest.fixture
def clicks():
    return []

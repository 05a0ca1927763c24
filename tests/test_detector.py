import asyncio
import threading
from types import SimpleNamespace

import pytest

pytest.importorskip("cv2")

from hand_pointer import detector  # noqa: E402
from hand_pointer.detector import MediaPipeHandDetector, MediaPipeRuntime  # noqa: E402
from hand_pointer.provisioner import DetectorConfig  # noqa: E402


def test_runtime_loads_off_the_event_loop_thread(monkeypatch):
    threads = []
    built = []

    def fake_hands(**kwargs):
        threads.append(threading.get_ident())
        built.append(kwargs)
        return SimpleNamespace(close=lambda: None)

    def fake_import(name):
        threads.append(threading.get_ident())
        if name == "mediapipe":
            return SimpleNamespace(__version__="test", solutions=object())
        return SimpleNamespace(Hands=fake_hands)

    monkeypatch.setattr(detector, "importlib", SimpleNamespace(import_module=fake_import))

    async def scenario():
        runtime = MediaPipeRuntime()
        assert await runtime.inject()
        assert runtime.is_loaded()
        await runtime.ready()
        assert await runtime.load_detector_module()
        assert runtime.has_detector_namespace()
        det = await runtime.create_detector(DetectorConfig())
        assert isinstance(det, MediaPipeHandDetector)
        return threading.get_ident()

    loop_thread = asyncio.run(scenario())
    assert len(threads) == 3
    assert loop_thread not in threads
    assert built[0]["max_num_hands"] == 1
    assert built[0]["model_complexity"] == 0


def test_missing_mediapipe_reports_failure(monkeypatch):
    def fake_import(name):
        raise ImportError(f"No module named {name!r}")

    monkeypatch.setattr(detector, "importlib", SimpleNamespace(import_module=fake_import))

    async def scenario():
        runtime = MediaPipeRuntime()
        assert await runtime.inject() is False
        assert not runtime.is_loaded()
        assert await runtime.load_detector_module() is False
        assert not runtime.has_detector_namespace()

    asyncio.run(scenario())

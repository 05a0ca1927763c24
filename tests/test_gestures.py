from hand_pointer.gestures import CLICK_DISTANCE_PX, ClickGate, is_click_gesture
from hand_pointer.landmarks import Keypoint


def test_threshold_boundary():
    a = Keypoint(0.0, 0.0)
    assert is_click_gesture(a, Keypoint(19.999, 0.0))
    assert not is_click_gesture(a, Keypoint(20.0, 0.0))


def test_distance_is_euclidean():
    # 12-16-20 triangle: exactly on the threshold
    assert not is_click_gesture(Keypoint(0, 0), Keypoint(12, 16))
    assert is_click_gesture(Keypoint(0, 0), Keypoint(11, 16))


def test_custom_threshold():
    assert is_click_gesture(Keypoint(0, 0), Keypoint(30, 0), threshold=40)
    assert CLICK_DISTANCE_PX == 20.0


def test_edge_triggered_fires_once_per_pinch():
    gate = ClickGate(edge_triggered=True)
    fired = [gate.update(p) for p in [False, True, True, True, False, True]]
    assert fired == [False, True, False, False, False, True]


def test_level_triggered_fires_every_pinched_frame():
    gate = ClickGate(edge_triggered=False)
    fired = [gate.update(p) for p in [True, True, False, True]]
    assert fired == [True, True, False, True]


def test_reset_rearms_edge():
    gate = ClickGate()
    assert gate.update(True)
    gate.reset()
    assert gate.update(True)

from types import SimpleNamespace

from hand_pointer.landmarks import HandKeypoint, HandPose, Keypoint


def test_fingertip_identities():
    assert HandKeypoint.INDEX_FINGER_TIP == 8
    assert HandKeypoint.MIDDLE_FINGER_TIP == 12
    assert len(HandKeypoint) == 21


def test_from_normalized_scales_to_video_pixels():
    lms = [SimpleNamespace(x=0.5, y=0.25, z=-0.1) for _ in range(21)]
    pose = HandPose.from_normalized(lms, 640, 480, "Left", 0.8)
    tip = pose.index_tip
    assert (tip.x, tip.y, tip.z) == (320.0, 120.0, -0.1)
    assert pose.handedness == "Left"
    assert pose.score == 0.8


def test_unresolvable_keypoints_are_none():
    pose = HandPose([Keypoint(1, 1)] * 5)
    assert pose.keypoint(HandKeypoint.THUMB_TIP) == Keypoint(1, 1)
    assert pose.index_tip is None
    assert HandPose().middle_tip is None

import pytest

pytest.importorskip("cv2")

from hand_pointer.camera import PREVIEW_POSITIONS, preview_origin  # noqa: E402

SCREEN = (1920, 1080)


@pytest.mark.parametrize(
    "position, expected",
    [
        ("leftTop", (10, 20)),
        ("rightTop", (1670, 20)),
        ("leftBottom", (10, 880)),
        ("rightBottom", (1670, 880)),
    ],
)
def test_preview_origin_pins_to_corner(position, expected):
    assert position in PREVIEW_POSITIONS
    assert preview_origin(position, SCREEN, 240, 180) == expected


def test_preview_origin_stays_on_small_screen():
    assert preview_origin("rightBottom", (100, 100), 240, 180) == (0, 0)

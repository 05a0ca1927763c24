"""
gestures.py
===========
Pinch-click recognition. The index and middle fingertips touching counts as a
click. Distances are measured in video pixels so the threshold does not depend
on how large the preview is drawn on screen.

This module is pure logic: `is_click_gesture` is stateless, and `ClickGate`
turns the per-frame pinch signal into click events.
"""

from __future__ import annotations

from .utils import distance

CLICK_DISTANCE_PX = 20.0


def is_click_gesture(point_a, point_b, threshold: float = CLICK_DISTANCE_PX) -> bool:
    """True iff the two keypoints are closer than `threshold` video px."""
    return distance((point_a.x, point_a.y), (point_b.x, point_b.y)) < threshold


class ClickGate:
    """Decides whether a pinched frame fires a click.

    edge_triggered=True fires once per pinch (on the open -> pinched
    transition). edge_triggered=False fires on every pinched frame, so a held
    pinch repeats the click at the frame rate.
    """

    def __init__(self, edge_triggered: bool = True):
        self.edge_triggered = edge_triggered
        self.pinched = False

    def update(self, pinched: bool) -> bool:
        fire = pinched and (not self.edge_triggered or not self.pinched)
        self.pinched = pinched
        return fire

    def reset(self) -> None:
        self.pinched = False

"""
actions.py
==========
OS pointer output through pyautogui. Clicks go to whatever window sits under
the given screen coordinate at that moment.
"""

from __future__ import annotations

import pyautogui

from .utils import clamp

EDGE_DEADBAND_PX = 2


def configure() -> None:
    pyautogui.FAILSAFE = False
    pyautogui.PAUSE = 0


def screen_size():
    return pyautogui.size()


def click_at(x: float, y: float) -> None:
    pyautogui.click(x=int(round(x)), y=int(round(y)), _pause=False)


def move_cursor(x: float, y: float) -> None:
    screen_w, screen_h = pyautogui.size()
    tx = int(clamp(x, EDGE_DEADBAND_PX, screen_w - EDGE_DEADBAND_PX))
    ty = int(clamp(y, EDGE_DEADBAND_PX, screen_h - EDGE_DEADBAND_PX))
    pyautogui.moveTo(tx, ty, duration=0, _pause=False)

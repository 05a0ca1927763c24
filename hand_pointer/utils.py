"""
utils.py
========
Small math helpers shared across modules.
"""

from __future__ import annotations

import math
from typing import Tuple


def distance(p1: Tuple[float, float], p2: Tuple[float, float]) -> float:
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))

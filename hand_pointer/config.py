"""
config.py
=========
Centralized configuration and CLI argument parsing for hand_pointer.

This module defines default values and exposes `parse_args()` that returns a
populated namespace. The rest of the app should import from here to avoid
scattering configuration across modules.

Key groups:
- Camera & preview: device index, capture size, preview window, mirroring.
- Model: MediaPipe variant, confidences, load retries and settle delay.
- Gestures: pinch-click threshold, edge vs repeated clicks, click flash.
- Logging: debug level and optional log file.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class Defaults:
    # Camera & preview
    camera_index: int = 0
    camera_width: int = 640
    camera_height: int = 480
    window_name: str = "hand_pointer"
    preview_width: int = 240  # on-screen preview width; height follows 4:3
    preview_position: str = "leftBottom"  # screen corner: leftTop, rightTop, leftBottom, rightBottom
    mirror: bool = True

    # Model
    model_type: str = "lite"  # "lite" fast, "full" accurate
    max_hands: int = 1
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5
    max_load_attempts: int = 3
    retry_delay_s: float = 1.0
    settle_delay_s: float = 0.5

    # Gestures
    click_threshold_px: float = 20.0  # index/middle fingertip distance, video px
    edge_triggered_clicks: bool = True
    click_flash_ms: int = 300

    # Behaviour
    autostart: bool = True
    move_cursor: bool = False

    def to_settings(self) -> Dict[str, Any]:
        return {
            "mirror": self.mirror,
            "edge_triggered_clicks": self.edge_triggered_clicks,
            "click_threshold": self.click_threshold_px,
        }


def add_args(parser: argparse.ArgumentParser, d: Defaults) -> None:
    # Camera and preview
    parser.add_argument("--camera", type=int, default=d.camera_index, help="Camera index (0,1,2,...) to open")
    parser.add_argument("--width", type=int, default=d.camera_width, help="Camera capture width")
    parser.add_argument("--height", type=int, default=d.camera_height, help="Camera capture height")
    parser.add_argument("--preview_width", type=int, default=d.preview_width, help="Preview window width on screen (px)")
    parser.add_argument("--position", choices=["leftTop", "rightTop", "leftBottom", "rightBottom"], default=d.preview_position, help="Screen corner the preview is pinned to")
    parser.add_argument("--window_name", default=d.window_name, help="Title of the preview window")
    parser.add_argument("--no_mirror", action="store_true", help="Show the preview unmirrored")

    # Model
    parser.add_argument("--model_type", choices=["lite", "full"], default=d.model_type, help="MediaPipe Hands variant: lite fast, full accurate")
    parser.add_argument("--min_detection_confidence", type=float, default=d.min_detection_confidence, help="Minimum hand detection confidence")
    parser.add_argument("--min_tracking_confidence", type=float, default=d.min_tracking_confidence, help="Minimum landmark tracking confidence")
    parser.add_argument("--max_load_attempts", type=int, default=d.max_load_attempts, help="Attempts to load the pose runtime before giving up")
    parser.add_argument("--retry_delay", type=float, default=d.retry_delay_s, help="Delay between runtime load attempts (s)")
    parser.add_argument("--settle_delay", type=float, default=d.settle_delay_s, help="Wait after loading the detector module (s)")

    # Gestures
    parser.add_argument("--click_threshold", type=float, default=d.click_threshold_px, help="Index/middle fingertip distance that counts as a pinch (video px)")
    parser.add_argument("--repeat_clicks", action="store_true", help="Click on every pinched frame instead of once per pinch")
    parser.add_argument("--flash_ms", type=int, default=d.click_flash_ms, help="How long the pointer stays green after a click (ms)")

    # Behaviour
    parser.add_argument("--no_autostart", action="store_true", help="Wait for 't' in the preview before tracking")
    parser.add_argument("--move_cursor", action="store_true", help="Move the OS cursor along with the pointer")

    # Logging
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--log_file", default=None, help="Also write logs to this file (rotated)")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    d = Defaults()
    parser = argparse.ArgumentParser(description="hand_pointer webcam gesture pointer")
    add_args(parser, d)
    args = parser.parse_args(argv)
    return args


def defaults_from_args(args: argparse.Namespace) -> Defaults:
    """Fold parsed CLI args back into a Defaults instance."""
    return Defaults(
        camera_index=args.camera,
        camera_width=args.width,
        camera_height=args.height,
        window_name=args.window_name,
        preview_width=args.preview_width,
        preview_position=args.position,
        mirror=not args.no_mirror,
        model_type=args.model_type,
        min_detection_confidence=args.min_detection_confidence,
        min_tracking_confidence=args.min_tracking_confidence,
        max_load_attempts=args.max_load_attempts,
        retry_delay_s=args.retry_delay,
        settle_delay_s=args.settle_delay,
        click_threshold_px=args.click_threshold,
        edge_triggered_clicks=not args.repeat_clicks,
        click_flash_ms=args.flash_ms,
        autostart=not args.no_autostart,
        move_cursor=args.move_cursor,
    )

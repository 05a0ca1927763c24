"""
app.py
======
Application launcher: parses config, opens the camera and preview, wires up a
tracking session and runs the display loop.

High-level flow:
1) Parse CLI args into Defaults and configure logging
2) Open camera with preferred backend and start a FrameGrabber thread
3) Build the session: MediaPipe provisioner, pointer indicator, pyautogui clicks
4) For each new camera frame:
   - Render the preview with the pointer on top
   - Tick the display clock so the tracking loop runs one iteration
   - Handle keys: 't' toggle tracking, 'm' toggle mirror, 'q'/Esc quit
5) Stop tracking and release camera, model and window on exit
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import List, Optional

import cv2

from . import actions
from .camera import CameraVideoSource, FrameGrabber, PreviewWindow, open_camera
from .config import Defaults, defaults_from_args, parse_args
from .detector import MediaPipeRuntime
from .errors import CameraError
from .logger import setup_logging
from .provisioner import DetectorConfig, ModelProvisioner
from .tracking import DisplayClock, TrackingSession
from .visual import PointerIndicator

logger = logging.getLogger(__name__)

KEY_ESC = 27


def build_session(d: Defaults, video, clock: DisplayClock) -> TrackingSession:
    config = DetectorConfig(
        model_type=d.model_type,
        max_hands=d.max_hands,
        min_detection_confidence=d.min_detection_confidence,
        min_tracking_confidence=d.min_tracking_confidence,
    )
    provisioner = ModelProvisioner(
        MediaPipeRuntime(),
        config,
        max_load_attempts=d.max_load_attempts,
        retry_delay_s=d.retry_delay_s,
        settle_delay_s=d.settle_delay_s,
    )
    return TrackingSession(
        video,
        provisioner,
        clicker=actions.click_at,
        frame_clock=clock,
        indicator=PointerIndicator(flash_ms=d.click_flash_ms),
        on_pointer=actions.move_cursor if d.move_cursor else None,
        **d.to_settings(),
    )


def status_line(session: TrackingSession) -> str:
    if session.is_tracking:
        return "Tracking: ON  [t]oggle [m]irror [q]uit"
    return "Tracking: OFF [t]oggle [m]irror [q]uit"


async def run(d: Defaults) -> int:
    actions.configure()
    screen = actions.screen_size()

    try:
        cap = open_camera(d.camera_index, d.camera_width, d.camera_height)
    except CameraError as e:
        logger.error("%s", e)
        return 1
    grabber = FrameGrabber(cap)
    grabber.start()

    preview = PreviewWindow(d.window_name, d.preview_width, screen, d.preview_position)
    video = CameraVideoSource(grabber, preview)
    clock = DisplayClock()
    session = build_session(d, video, clock)
    logger.info("Session settings: %s", session.settings())
    pending = set()

    def spawn(coro) -> None:
        task = asyncio.create_task(coro)
        pending.add(task)
        task.add_done_callback(pending.discard)

    if d.autostart:
        spawn(session.start())

    last_id = 0
    try:
        while True:
            frame, frame_id = grabber.read_latest()
            if frame is None or frame_id == last_id:
                await asyncio.sleep(0.001)
                continue
            last_id = frame_id

            key = preview.render(frame, session.indicator, session.mirror, status_line(session))
            clock.tick()
            # let the tracking loop run its iteration for this frame
            await asyncio.sleep(0)

            if key in (ord("q"), KEY_ESC) or not preview.is_open():
                break
            if key == ord("t"):
                spawn(session.toggle())
            elif key == ord("m"):
                session.update_settings({"mirror": not session.mirror})
                logger.info("Mirror: %s", "ON" if session.mirror else "OFF")
    except KeyboardInterrupt:
        pass
    finally:
        for task in list(pending):
            task.cancel()
        session.stop()
        clock.tick()
        await session.wait_closed()
        if session.indicator is not None:
            session.indicator.dispose()
        session.provisioner.close()
        grabber.stop()
        cap.release()
        cv2.destroyAllWindows()
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(debug=args.debug, log_file=args.log_file)
    d = defaults_from_args(args)
    try:
        code = asyncio.run(run(d))
    except KeyboardInterrupt:
        code = 0
    sys.exit(code)


if __name__ == "__main__":
    main()

"""
provisioner.py
==============
Brings a hand-pose detector up before tracking starts.

The pose runtime is injected as a `PoseRuntime` so the retry and settle logic
can run against a test double. Loading has two independent stages: the
inference runtime itself (retried with a fixed back-off) and the hand-pose
detector module on top of it (given a short settle delay after loading).

`ensure_ready()` never raises. Every failure is logged and reported as False
so a broken load cannot take down a tracking loop started earlier.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from .errors import ProvisioningError

logger = logging.getLogger(__name__)

MAX_LOAD_ATTEMPTS = 3
RETRY_DELAY_S = 1.0
SETTLE_DELAY_S = 0.5


@dataclass(frozen=True)
class DetectorConfig:
    model: str = "MediaPipeHands"
    model_type: str = "lite"  # "lite" or "full"
    max_hands: int = 1
    runtime: str = "mediapipe"
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5


class PoseRuntime(ABC):
    """Capability the provisioner loads a detector through."""

    @abstractmethod
    def is_loaded(self) -> bool:
        """True once the inference runtime is importable/usable."""

    @abstractmethod
    async def inject(self) -> bool:
        """Try to load the runtime once. Returns False on failure."""

    @abstractmethod
    async def ready(self) -> None:
        """Handshake required before any model is constructed."""

    @abstractmethod
    def has_detector_namespace(self) -> bool:
        """True once the hand-pose detector module is available."""

    @abstractmethod
    async def load_detector_module(self) -> bool:
        """Try to load the hand-pose detector module. Returns False on failure."""

    @abstractmethod
    async def create_detector(self, config: DetectorConfig) -> Any:
        """Build a detector exposing `async estimate_hands(frame)`."""


class ModelProvisioner:
    def __init__(
        self,
        runtime: PoseRuntime,
        config: Optional[DetectorConfig] = None,
        max_load_attempts: int = MAX_LOAD_ATTEMPTS,
        retry_delay_s: float = RETRY_DELAY_S,
        settle_delay_s: float = SETTLE_DELAY_S,
    ):
        self.runtime = runtime
        self.config = config or DetectorConfig()
        self.max_load_attempts = max_load_attempts
        self.retry_delay_s = retry_delay_s
        self.settle_delay_s = settle_delay_s
        self.load_attempts = 0
        self.detector: Any = None

    @property
    def model_ready(self) -> bool:
        return self.detector is not None

    async def ensure_ready(self) -> bool:
        """Load the detector if needed. Returns True when a detector is cached."""
        if self.detector is not None:
            return True
        try:
            await self._load_runtime()
            await self.runtime.ready()

            if not self.runtime.has_detector_namespace():
                if not await self.runtime.load_detector_module():
                    logger.error("Failed to load hand pose detection module")
                # the module may finish initializing after its load signal
                await asyncio.sleep(self.settle_delay_s)

            if not self.runtime.has_detector_namespace():
                logger.error("Hand pose detection module not available")
                return False

            self.detector = await self.runtime.create_detector(self.config)
            logger.info(
                "Hand tracking model loaded (%s/%s, max_hands=%d, runtime=%s)",
                self.config.model, self.config.model_type, self.config.max_hands, self.config.runtime,
            )
            return True
        except ProvisioningError as e:
            logger.error("%s", e)
            return False
        except Exception:
            logger.exception("Error loading hand tracking model")
            return False

    async def _load_runtime(self) -> None:
        while not self.runtime.is_loaded():
            if self.load_attempts >= self.max_load_attempts:
                raise ProvisioningError(
                    f"Failed to load pose runtime after {self.load_attempts} attempts"
                )
            self.load_attempts += 1
            logger.info("Loading pose runtime (attempt %d/%d)", self.load_attempts, self.max_load_attempts)
            if not await self.runtime.inject():
                logger.warning("Pose runtime load attempt %d failed", self.load_attempts)
            if not self.runtime.is_loaded():
                await asyncio.sleep(self.retry_delay_s)

    def reset(self) -> None:
        """Start a fresh provisioning sequence; a cached detector is kept."""
        self.load_attempts = 0

    def close(self) -> None:
        close = getattr(self.detector, "close", None)
        if close is not None:
            close()
        self.detector = None

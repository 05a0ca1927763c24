"""
errors.py
=========
Exception types raised inside hand_pointer. Only `CameraError` ever leaves
the package; provisioning failures are converted to a boolean outcome by
`ModelProvisioner.ensure_ready`.
"""

from __future__ import annotations


class HandPointerError(Exception):
    """Base class for hand_pointer errors."""


class ProvisioningError(HandPointerError):
    """The pose runtime could not be loaded within the allowed attempts."""


class CameraError(HandPointerError):
    """No camera backend could open the requested device."""

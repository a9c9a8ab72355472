"""Context-key derivation for layout state.

A context is a (page path, device class) pair. Keys are the SHA3-256 hex
digest of ``"<path>:<device>"`` with the device normalized first, so distinct
paths or device classes never share a row.
"""

from __future__ import annotations

import hashlib
from typing import Optional

DEVICE_MOBILE = "mobile"
DEVICE_DESKTOP = "desktop"
DEVICES = (DEVICE_MOBILE, DEVICE_DESKTOP)
DEFAULT_DEVICE = DEVICE_DESKTOP


def normalize_device(device: Optional[str]) -> str:
    """Map any client-supplied device string onto ``mobile`` or ``desktop``."""

    if isinstance(device, str):
        value = device.strip().lower()
        if value in DEVICES:
            return value
    return DEFAULT_DEVICE


def context_key(path: str, device: Optional[str] = None) -> str:
    combined = f"{path}:{normalize_device(device)}"
    return hashlib.sha3_256(combined.encode("utf-8")).hexdigest()

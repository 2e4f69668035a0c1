"""Small numeric helpers shared by the voxel model and the exporters."""

from __future__ import annotations

import math

VOXEL_MAX = 4095
NORMALIZED_MAX = 255


def normalize(value: int) -> int:
    """Rescale a 12-bit voxel value (0-4095) to the 8-bit display range.

    Rounds half away from zero. ``value`` is expected to be in range already,
    so the result always lies in 0-255.
    """
    scaled = value / float(VOXEL_MAX) * float(NORMALIZED_MAX)
    return int(math.floor(scaled + 0.5))


def voxel_from_bytes(byte0: int, byte1: int) -> int:
    """Decode a little-endian 16-bit voxel value from two bytes."""
    return byte0 | (byte1 << 8)

"""Voxel value model: a validated 12-bit sample stored in 16 bits."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral

from medviz.core.errors import VoxelValueOutOfRange
from medviz.core.utils import VOXEL_MAX, normalize, voxel_from_bytes

# Size in bytes of one voxel in the volume data (little-endian u16).
VOXEL_BYTES = 2


@dataclass(frozen=True)
class Voxel:
    """A single volumetric sample in the 0-4095 range.

    Construction is the only validation point: every ``Voxel`` instance
    holds an in-range value.
    """

    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, Integral):
            raise TypeError(f"Voxel value must be an integer, not {type(self.value).__name__}")
        if not 0 <= self.value <= VOXEL_MAX:
            raise VoxelValueOutOfRange(int(self.value))
        # numpy integers become plain ints.
        object.__setattr__(self, "value", int(self.value))

    @classmethod
    def create(cls, value: int) -> Voxel:
        """Create a voxel.

        Raises ``VoxelValueOutOfRange`` outside 0-4095 and ``TypeError`` for
        anything but an integer (``bool`` included).
        """
        return cls(value)

    @classmethod
    def decode_le(cls, byte0: int, byte1: int) -> Voxel:
        """Create a voxel from two bytes in little-endian order."""
        return cls(voxel_from_bytes(byte0, byte1))

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> Voxel:
        """Create a voxel from the first two bytes of ``data``.

        Raises IndexError if ``data`` holds fewer than two bytes.
        """
        return cls.decode_le(data[0], data[1])

    @staticmethod
    def byte_width() -> int:
        return VOXEL_BYTES

    def normalized(self) -> int:
        """Value rescaled to 0-255 for display."""
        return normalize(self.value)

    def to_le_bytes(self) -> bytes:
        return self.value.to_bytes(VOXEL_BYTES, "little")

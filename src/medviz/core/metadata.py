"""Volume metadata: dimension sizes read from MetaImage-style header text.

Only the ``DimSize`` key is meaningful. Everything else in the header
(``NDims``, ``ElementSpacing``, ...) is tolerated and ignored.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from medviz.core.errors import (
    DimSizeNotFound,
    DuplicateKey,
    InvalidDimSizeValue,
    MissingDimSizeValues,
    TooManyDimSizeValues,
)
from medviz.core.types import Axis

logger = logging.getLogger("medviz")

DIMSIZE_KEY = "DimSize"

# Dimension sizes must fit an unsigned 64-bit size type.
_SIZE_MAX = 2**64 - 1
_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class VolumeMetadata:
    """Number of voxels along each axis of a volume."""

    xdim: int
    ydim: int
    zdim: int

    @classmethod
    def parse(cls, text: str) -> VolumeMetadata:
        """Load volume metadata from header text.

        Finds the first line with the ``DimSize`` key and reads three
        dimension sizes from it, in X, Y, Z order.

        This is not a real parser. Lines are split on ``\\n`` and each line
        is split at its first ``=``; anything that does not look like a
        ``DimSize`` entry is skipped. Scanning continues after a match so
        that a later ``DimSize`` line is reported as a duplicate.

        Raises:
            MissingDimSizeValues: ``DimSize`` has fewer than three values.
            TooManyDimSizeValues: ``DimSize`` has more than three values.
            InvalidDimSizeValue: a value is not a base-10 size.
            DuplicateKey: ``DimSize`` appears again after a valid entry.
            DimSizeNotFound: no ``DimSize`` entry at all.
        """
        result: VolumeMetadata | None = None

        for line_number, line in enumerate(text.split("\n"), start=1):
            key, sep, value = line.partition("=")
            if not sep:
                if line.strip():
                    logger.warning(f"Line {line_number}: Skipping entry without an `=` sign")
                else:
                    logger.debug(f"Line {line_number}: Skipping empty line")
                continue

            key = key.strip()
            if not key:
                logger.debug(f"Line {line_number}: Skipping line with empty key")
                continue

            if key != DIMSIZE_KEY:
                logger.debug(f"Line {line_number}: Skipping key {key}")
                continue

            if result is not None:
                raise DuplicateKey(line_number)

            tokens = value.split()
            if len(tokens) < 3:
                raise MissingDimSizeValues(line_number)
            if len(tokens) > 3:
                raise TooManyDimSizeValues(line_number)

            xdim, ydim, zdim = (_parse_dim_size(t, line_number) for t in tokens)
            result = cls(xdim, ydim, zdim)
            logger.debug(f"Line {line_number}: Found {DIMSIZE_KEY} = {xdim} {ydim} {zdim}")

        if result is None:
            raise DimSizeNotFound()
        return result

    @property
    def xframe_len(self) -> int:
        """Number of voxels in a frame on the X-axis."""
        return self.ydim * self.zdim

    @property
    def yframe_len(self) -> int:
        """Number of voxels in a frame on the Y-axis."""
        return self.xdim * self.zdim

    @property
    def zframe_len(self) -> int:
        """Number of voxels in a frame on the Z-axis."""
        return self.xdim * self.ydim

    @property
    def voxel_count(self) -> int:
        return self.xdim * self.ydim * self.zdim

    def dim(self, axis: Axis) -> int:
        """Number of voxels (and so of frames) along ``axis``."""
        return {Axis.X: self.xdim, Axis.Y: self.ydim, Axis.Z: self.zdim}[axis]

    def frame_len(self, axis: Axis) -> int:
        return {
            Axis.X: self.xframe_len,
            Axis.Y: self.yframe_len,
            Axis.Z: self.zframe_len,
        }[axis]

    def frame_shape(self, axis: Axis) -> tuple[int, int]:
        """Return (width, height) of a frame orthogonal to ``axis``."""
        return {
            Axis.X: (self.ydim, self.zdim),
            Axis.Y: (self.xdim, self.zdim),
            Axis.Z: (self.xdim, self.ydim),
        }[axis]


def _parse_dim_size(text: str, line_number: int) -> int:
    """Parse one dimension size, rejecting signs, non-digits and overflow."""
    if not _DIGITS.fullmatch(text):
        raise InvalidDimSizeValue(line_number, text)
    dim = int(text)
    if dim > _SIZE_MAX:
        raise InvalidDimSizeValue(line_number, text)
    return dim

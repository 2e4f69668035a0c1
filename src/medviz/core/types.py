"""Core data types for the medviz pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import NamedTuple

from medviz.core.errors import VoxelValueOutOfRange
from medviz.core.voxel import Voxel


class Axis(Enum):
    """Volume axis a frame is taken orthogonal to."""

    X = "x"
    Y = "y"
    Z = "z"


class OutputFormat(Enum):
    IMAGE = "image"
    RAW = "raw"


class FrameSample(NamedTuple):
    """One decoded position of a frame.

    ``x`` and ``y`` are the first and second coordinates of the 2D frame, in
    the order an image sink expects them. Exactly one of ``voxel`` and
    ``error`` is set: decoding failures are reported per sample instead of
    ending the frame.
    """

    voxel: Voxel | None
    x: int
    y: int
    error: VoxelValueOutOfRange | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Voxel:
        """Return the voxel, or raise the decoding error for this sample."""
        if self.error is not None:
            raise self.error
        return self.voxel


@dataclass
class FrameRequest:
    """A single frame to extract and where to write it."""

    axis: Axis
    output: Path
    index: int | None = None  # None = middle frame


@dataclass
class FrameSummary:
    """Result of exporting one frame."""

    axis: Axis
    index: int
    width: int
    height: int
    output: Path
    size_bytes: int = 0


@dataclass
class ExtractConfig:
    """Configuration for the extraction pipeline (from CLI flags)."""

    metadata_path: Path
    data_path: Path | None = None  # None = resolve from ElementDataFile
    requests: list[FrameRequest] = field(default_factory=list)
    format: OutputFormat = OutputFormat.IMAGE
    rgb: bool = False

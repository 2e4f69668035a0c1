"""Shared test fixtures: synthetic volumes and metadata files."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from medviz.core.metadata import VolumeMetadata

# Small, non-cubic so that axis mix-ups show up as shape errors.
SHAPE_XYZ = (4, 3, 5)


def encode_coords(x: int, y: int, z: int) -> int:
    """Voxel value that encodes its own coordinates (all < 10)."""
    return 100 * z + 10 * y + x


def make_coord_volume_bytes(xdim: int, ydim: int, zdim: int) -> bytes:
    """Row-major (X fastest) little-endian u16 buffer of coordinate-encoded voxels."""
    zz, yy, xx = np.mgrid[0:zdim, 0:ydim, 0:xdim]
    values = (100 * zz + 10 * yy + xx).astype("<u2")
    return values.tobytes()


def make_metadata_text(xdim: int, ydim: int, zdim: int, data_file: str | None = None) -> str:
    lines = [
        "ObjectType = Image",
        "NDims = 3",
        f"DimSize = {xdim} {ydim} {zdim}",
        "ElementSpacing = 0.402344 0.402344 0.899994",
        "ElementType = MET_USHORT",
    ]
    if data_file is not None:
        lines.append(f"ElementDataFile = {data_file}")
    return "\n".join(lines) + "\n"


@pytest.fixture
def coord_metadata() -> VolumeMetadata:
    return VolumeMetadata(*SHAPE_XYZ)


@pytest.fixture
def coord_volume_bytes() -> bytes:
    return make_coord_volume_bytes(*SHAPE_XYZ)


@pytest.fixture
def sequential_volume_bytes() -> bytes:
    """2x2x2 volume holding the values 0..7 in storage order."""
    return np.arange(8, dtype="<u2").tobytes()


@pytest.fixture
def volume_files(tmp_path) -> tuple[Path, Path]:
    """Header + raw data file pair for the coordinate volume."""
    header = tmp_path / "volume.mhd"
    raw = tmp_path / "volume.raw"
    header.write_text(make_metadata_text(*SHAPE_XYZ, data_file="volume.raw"))
    raw.write_bytes(make_coord_volume_bytes(*SHAPE_XYZ))
    return header, raw


@pytest.fixture
def make_volume_bytes():
    """Factory for coordinate-encoded volume buffers of any shape."""
    return make_coord_volume_bytes


@pytest.fixture
def make_header():
    """Factory for metadata header text."""
    return make_metadata_text

"""Frame exporters: raster images (BMP, PNG, ...) and raw 16-bit dumps."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import numpy as np

from medviz.core.types import FrameSample
from medviz.core.utils import NORMALIZED_MAX, VOXEL_MAX

# Flush raw output every this many bytes.
_RAW_CHUNK_BYTES = 1 << 16


def frame_to_array(
    samples: Iterable[FrameSample],
    width: int,
    height: int,
    normalized: bool = True,
) -> np.ndarray:
    """Collect frame samples into a [height, width] array.

    With ``normalized`` the array is uint8 display values, otherwise uint16
    raw values. The first sample holding a decoding error raises it.
    """
    values = np.zeros((height, width), dtype=np.uint16)
    for sample in samples:
        values[sample.y, sample.x] = sample.unwrap().value
    return normalize_array(values) if normalized else values


def normalize_array(values: np.ndarray) -> np.ndarray:
    """Vectorized ``normalize``: rescale 0-4095 values to uint8 0-255."""
    scaled = values.astype(np.float64) / VOXEL_MAX * NORMALIZED_MAX
    return np.floor(scaled + 0.5).astype(np.uint8)


def export_image(
    samples: Iterable[FrameSample],
    width: int,
    height: int,
    output_path: Path,
    rgb: bool = False,
) -> None:
    """Export a frame as a grayscale raster image.

    The file format follows the ``output_path`` suffix. With ``rgb`` the
    normalized value is duplicated across three channels, for sinks that need
    a 3-channel image.
    """
    from PIL import Image

    if width == 0 or height == 0:
        raise ValueError(f"Cannot export an empty {width}x{height} frame as an image")

    pixels = frame_to_array(samples, width, height, normalized=True)
    if rgb:
        pixels = np.repeat(pixels[:, :, np.newaxis], 3, axis=2)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(pixels).save(output_path)


def export_raw(samples: Iterable[FrameSample], output_path: Path) -> int:
    """Export a frame as little-endian 16-bit raw values, in sample order.

    Returns the number of bytes written. Data goes to a ``.part`` sibling
    that replaces ``output_path`` only once the whole frame is written, so a
    decoding error never leaves a truncated file behind.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    part_path = output_path.with_name(output_path.name + ".part")

    written = 0
    buf = bytearray()
    try:
        with open(part_path, "wb") as f:
            for sample in samples:
                buf += sample.unwrap().to_le_bytes()
                if len(buf) >= _RAW_CHUNK_BYTES:
                    f.write(buf)
                    written += len(buf)
                    buf.clear()
            f.write(buf)
            written += len(buf)
    except BaseException:
        part_path.unlink(missing_ok=True)
        raise

    part_path.replace(output_path)
    return written

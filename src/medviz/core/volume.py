"""Volume data and frame extraction.

Voxels are stored row-major with X varying fastest, then Y, then Z. The byte
offset of voxel ``(x, y, z)`` is ``2 * (z * xdim * ydim + y * xdim + x)``.
Frames are produced lazily from strided byte offsets into the buffer; the
buffer itself is never copied.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from itertools import chain
from numbers import Integral

from medviz.core.errors import DataSizeMismatch, DataSizeUneven, VoxelValueOutOfRange
from medviz.core.metadata import VolumeMetadata
from medviz.core.types import Axis, FrameSample
from medviz.core.voxel import VOXEL_BYTES, Voxel


class Volume:
    """A read-only view of volumetric data described by ``VolumeMetadata``.

    ``data`` may be any object supporting the buffer protocol (``bytes``,
    ``bytearray``, ``memoryview``, ``numpy.memmap``). Only its size is checked
    on construction; voxel values are validated as frames are iterated.
    """

    def __init__(self, metadata: VolumeMetadata, data):
        view = memoryview(data)
        if view.ndim != 1 or view.format != "B":
            view = view.cast("B")

        expected = metadata.voxel_count * VOXEL_BYTES
        if view.nbytes != expected:
            raise DataSizeMismatch(view.nbytes, expected)

        if view.nbytes % VOXEL_BYTES != 0:
            raise DataSizeUneven(view.nbytes)

        self._metadata = metadata
        self._data = view

    @classmethod
    def open(cls, metadata: VolumeMetadata, data) -> Volume:
        """Create a volume, raising ``DataSizeMismatch`` or ``DataSizeUneven``."""
        return cls(metadata, data)

    @property
    def metadata(self) -> VolumeMetadata:
        return self._metadata

    @property
    def nbytes(self) -> int:
        return self._data.nbytes

    def __repr__(self) -> str:
        md = self._metadata
        return f"Volume(xdim={md.xdim}, ydim={md.ydim}, zdim={md.zdim})"

    # --- Byte offsets ---

    def _zframe_size(self) -> int:
        """Size in bytes of a frame on the Z-axis."""
        return self._metadata.zframe_len * VOXEL_BYTES

    def _row_size(self) -> int:
        """Size in bytes of a row on a frame on the Z-axis."""
        return self._metadata.xdim * VOXEL_BYTES

    def _zframe_offsets(self, zframe_index: int) -> range:
        start = self._zframe_size() * zframe_index
        return range(start, start + self._zframe_size(), VOXEL_BYTES)

    def _zframe_row_offsets(self, zframe_index: int, row_index: int) -> range:
        start = self._zframe_size() * zframe_index + self._row_size() * row_index
        return range(start, start + self._row_size(), VOXEL_BYTES)

    def _zframe_col_offsets(self, zframe_index: int, col_index: int) -> range:
        # Columns are not contiguous: one voxel per row, a full row apart.
        start = self._zframe_size() * zframe_index + col_index * VOXEL_BYTES
        row_size = self._row_size()
        return range(start, start + row_size * self._metadata.ydim, row_size)

    # --- Decoding ---

    def _samples(self, offsets: Iterable[int], width: int) -> Iterator[FrameSample]:
        data = self._data
        for index, offset in enumerate(offsets):
            x, y = index % width, index // width
            try:
                voxel = Voxel.decode_le(data[offset], data[offset + 1])
            except VoxelValueOutOfRange as e:
                yield FrameSample(None, x, y, e)
            else:
                yield FrameSample(voxel, x, y)

    @staticmethod
    def _check_index(axis: Axis, index: int, dim: int) -> None:
        if isinstance(index, bool) or not isinstance(index, Integral):
            raise TypeError(
                f"{axis.value.upper()}-frame index must be an integer, not {type(index).__name__}"
            )
        if not 0 <= index < dim:
            raise IndexError(
                f"{axis.value.upper()}-frame index {index} out of range (0-{dim - 1})"
            )

    # --- Frames ---

    def xframe(self, xframe_index: int) -> Iterator[FrameSample]:
        """Iterate the voxels of the frame at ``xframe_index`` on the X-axis.

        Walks every Z-frame from last to first and reads column
        ``xframe_index`` of each, one voxel per row. Output coordinates are
        ``x`` along Y and ``y`` along reversed Z.

        Raises IndexError if ``xframe_index`` is outside the range of frames.
        """
        md = self._metadata
        self._check_index(Axis.X, xframe_index, md.xdim)
        offsets = chain.from_iterable(
            self._zframe_col_offsets(zframe_index, xframe_index)
            for zframe_index in reversed(range(md.zdim))
        )
        return self._samples(offsets, md.ydim)

    def yframe(self, yframe_index: int) -> Iterator[FrameSample]:
        """Iterate the voxels of the frame at ``yframe_index`` on the Y-axis.

        Walks every Z-frame from last to first and reads row ``yframe_index``
        of each. Output coordinates are ``x`` along X and ``y`` along
        reversed Z.

        Raises IndexError if ``yframe_index`` is outside the range of frames.
        """
        md = self._metadata
        self._check_index(Axis.Y, yframe_index, md.ydim)
        offsets = chain.from_iterable(
            self._zframe_row_offsets(zframe_index, yframe_index)
            for zframe_index in reversed(range(md.zdim))
        )
        return self._samples(offsets, md.xdim)

    def zframe(self, zframe_index: int) -> Iterator[FrameSample]:
        """Iterate the voxels of the frame at ``zframe_index`` on the Z-axis.

        A single contiguous scan. Output coordinates are ``x`` along X and
        ``y`` along Y.

        Raises IndexError if ``zframe_index`` is outside the range of frames.
        """
        md = self._metadata
        self._check_index(Axis.Z, zframe_index, md.zdim)
        return self._samples(self._zframe_offsets(zframe_index), md.xdim)

    def frame(self, axis: Axis, index: int) -> Iterator[FrameSample]:
        """Iterate the voxels of a frame orthogonal to ``axis``."""
        if axis is Axis.X:
            return self.xframe(index)
        if axis is Axis.Y:
            return self.yframe(index)
        return self.zframe(index)

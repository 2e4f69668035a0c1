"""Exception hierarchy for medviz.

A single hierarchy covers the whole library since the number of modules is
small. Metadata and volume-size errors are raised eagerly while loading;
``VoxelValueOutOfRange`` is produced lazily, one per offending sample, while
a frame is iterated.
"""

from __future__ import annotations


class MedvizError(Exception):
    """Base class for all medviz errors."""


# --- Metadata errors ---


class MetadataError(MedvizError, ValueError):
    """Metadata text could not yield volume dimensions."""


class MissingDimSizeValues(MetadataError):
    """A ``DimSize`` key has fewer than three values."""

    def __init__(self, line_number: int):
        self.line_number = line_number
        super().__init__(f"Metadata line {line_number}: expecting values for `DimSize` key")


class InvalidDimSizeValue(MetadataError):
    """One of the ``DimSize`` values is not a valid dimension size."""

    def __init__(self, line_number: int, value: str):
        self.line_number = line_number
        self.value = value
        super().__init__(
            f"Metadata line {line_number}: invalid value {value} for dimension size"
        )


class DuplicateKey(MetadataError):
    """A second ``DimSize`` key was found after a valid one."""

    def __init__(self, line_number: int):
        self.line_number = line_number
        super().__init__(f"Metadata line {line_number}: duplicated `DimSize` key")


class DimSizeNotFound(MetadataError):
    """No valid ``DimSize`` key anywhere in the metadata."""

    def __init__(self):
        super().__init__("Invalid metadata, `DimSize` key not found")


class TooManyDimSizeValues(MetadataError):
    """A ``DimSize`` key has more than three values."""

    def __init__(self, line_number: int):
        self.line_number = line_number
        super().__init__(f"Metadata line {line_number}: too many values for `DimSize` key")


# --- Volume errors ---


class VolumeError(MedvizError, ValueError):
    """Volume data does not agree with its metadata."""


class DataSizeMismatch(VolumeError):
    def __init__(self, actual: int, expected: int):
        self.actual = actual
        self.expected = expected
        super().__init__(
            f"Data size of {actual} bytes does not match metadata: "
            f"expecting {expected} bytes"
        )


class DataSizeUneven(VolumeError):
    def __init__(self, size: int):
        self.size = size
        super().__init__(f"Data size of {size} bytes is uneven")


# --- Voxel errors ---


class VoxelValueOutOfRange(MedvizError, ValueError):
    """Voxel value outside the 12-bit 0-4095 range."""

    def __init__(self, value: int):
        self.value = value
        super().__init__(f"Voxel value {value} is out of the 0-4095 range")

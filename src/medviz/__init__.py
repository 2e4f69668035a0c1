"""medviz: extract 2D frames from 3D volumetric data.

"Frames" are 2D cross-sections (commonly called slices) taken orthogonal
to one axis of a volume stored as a flat buffer of 16-bit voxels.
"""

from medviz.core.errors import MedvizError
from medviz.core.metadata import VolumeMetadata
from medviz.core.types import Axis, FrameSample
from medviz.core.volume import Volume
from medviz.core.voxel import Voxel

__version__ = "0.1.0"

__all__ = [
    "Axis",
    "FrameSample",
    "MedvizError",
    "Volume",
    "VolumeMetadata",
    "Voxel",
    "__version__",
]

"""Raw volume reader: MetaImage-style header text plus a flat data file.

The data file is memory-mapped read-only, so a volume never has to fit in
memory and is never copied.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from medviz.core.metadata import VolumeMetadata
from medviz.core.volume import Volume

logger = logging.getLogger("medviz")

_DATA_FILE_KEY = "ElementDataFile"


def load_metadata(path: Path) -> VolumeMetadata:
    """Read and parse a metadata (header) file."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Metadata file not found: {path}")

    text = path.read_text(encoding="utf-8", errors="replace")
    metadata = VolumeMetadata.parse(text)

    logger.info(f"Loaded metadata from {path}")
    logger.info(f"  X-dim = {metadata.xdim}")
    logger.info(f"  Y-dim = {metadata.ydim}")
    logger.info(f"  Z-dim = {metadata.zdim}")
    return metadata


def map_volume_data(path: Path) -> np.memmap | bytes:
    """Memory-map a volume data file read-only.

    numpy cannot map an empty file, so an empty file yields ``b""``.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Data file not found: {path}")

    size = path.stat().st_size
    if size == 0:
        logger.info(f"Data file {path} is empty")
        return b""

    data = np.memmap(path, dtype=np.uint8, mode="r")
    logger.info(f"Mapped {size} bytes of data from {path}")
    return data


def find_data_file(metadata_path: Path) -> Path | None:
    """Resolve the data file named by the header's ``ElementDataFile`` key.

    Relative names are resolved against the header's directory. Returns None
    when the key is missing or names in-header (``LOCAL``) data.
    """
    metadata_path = Path(metadata_path)
    text = metadata_path.read_text(encoding="utf-8", errors="replace")

    for line in text.split("\n"):
        key, sep, value = line.partition("=")
        if not sep or key.strip() != _DATA_FILE_KEY:
            continue
        name = value.strip()
        if not name or name.upper() == "LOCAL":
            return None
        candidate = Path(name)
        if not candidate.is_absolute():
            candidate = metadata_path.parent / candidate
        logger.debug(f"{_DATA_FILE_KEY} resolves to {candidate}")
        return candidate

    return None


def open_volume(metadata_path: Path, data_path: Path) -> Volume:
    """Load a header and its data file into a validated ``Volume``."""
    metadata = load_metadata(metadata_path)
    data = map_volume_data(data_path)
    return Volume.open(metadata, data)

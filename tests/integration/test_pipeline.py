"""Integration test: header + raw file to exported frames."""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from medviz._pipeline_extract import default_index, extract_frames, resolve_data_path, run_extract
from medviz.core.metadata import VolumeMetadata
from medviz.core.types import Axis, ExtractConfig, FrameRequest, OutputFormat
from medviz.io.raw_reader import open_volume


def test_default_index_is_middle():
    md = VolumeMetadata(512, 512, 333)
    assert default_index(md, Axis.Y) == 256
    assert default_index(md, Axis.Z) == 166


def test_extract_all_axes_as_images(volume_files, tmp_path):
    header, raw = volume_files
    volume = open_volume(header, raw)
    requests = [
        FrameRequest(Axis.X, tmp_path / "x.bmp"),
        FrameRequest(Axis.Y, tmp_path / "y.bmp"),
        FrameRequest(Axis.Z, tmp_path / "z.bmp", index=0),
    ]
    summaries = extract_frames(volume, requests)

    assert [(s.axis, s.index) for s in summaries] == [(Axis.X, 2), (Axis.Y, 1), (Axis.Z, 0)]
    for s, shape in zip(summaries, [(3, 5), (4, 5), (4, 3)]):
        assert (s.width, s.height) == shape
        with Image.open(s.output) as img:
            assert img.size == shape
        assert s.size_bytes == s.output.stat().st_size


def test_extract_raw_matches_reference_layout(volume_files, tmp_path):
    """Raw dumps hold the frame values in display order."""
    header, raw = volume_files
    volume = open_volume(header, raw)
    out = tmp_path / "y.raw"
    extract_frames(volume, [FrameRequest(Axis.Y, out, index=2)], fmt=OutputFormat.RAW)

    values = np.frombuffer(out.read_bytes(), dtype="<u2").reshape(5, 4)
    zz = np.arange(5)[::-1, np.newaxis]
    xx = np.arange(4)[np.newaxis, :]
    np.testing.assert_array_equal(values, 100 * zz + 20 + xx)


def test_bad_index_fails_before_writing(volume_files, tmp_path):
    header, raw = volume_files
    volume = open_volume(header, raw)
    requests = [
        FrameRequest(Axis.Z, tmp_path / "z.bmp"),
        FrameRequest(Axis.X, tmp_path / "x.bmp", index=4),
    ]
    with pytest.raises(IndexError):
        extract_frames(volume, requests)
    assert not (tmp_path / "z.bmp").exists()


def test_resolve_data_path_from_header(volume_files):
    header, raw = volume_files
    assert resolve_data_path(ExtractConfig(metadata_path=header)) == raw


def test_resolve_data_path_missing(tmp_path):
    header = tmp_path / "a.mhd"
    header.write_text("DimSize = 1 1 1\n")
    with pytest.raises(ValueError):
        resolve_data_path(ExtractConfig(metadata_path=header))


def test_run_extract(volume_files, tmp_path):
    header, _ = volume_files
    config = ExtractConfig(
        metadata_path=header,
        requests=[FrameRequest(Axis.Z, tmp_path / "out" / "z.png")],
        rgb=True,
    )
    summaries = run_extract(config)
    assert len(summaries) == 1
    with Image.open(tmp_path / "out" / "z.png") as img:
        assert img.mode == "RGB"


def test_run_extract_requires_requests(volume_files):
    header, _ = volume_files
    with pytest.raises(ValueError, match="No frames requested"):
        run_extract(ExtractConfig(metadata_path=header))


def test_run_extract_rgb_ignored_for_raw(volume_files, tmp_path, caplog):
    header, _ = volume_files
    out = tmp_path / "z.raw"
    config = ExtractConfig(
        metadata_path=header,
        requests=[FrameRequest(Axis.Z, out, index=0)],
        format=OutputFormat.RAW,
        rgb=True,
    )
    with caplog.at_level("WARNING", logger="medviz"):
        run_extract(config)
    assert "--rgb has no effect on raw output" in caplog.text
    md = VolumeMetadata.parse(header.read_text())
    assert out.stat().st_size == md.zframe_len * 2

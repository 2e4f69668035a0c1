"""Extraction pipeline: load a volume, export the requested frames, summarize."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from medviz._console import console
from medviz.core.metadata import VolumeMetadata
from medviz.core.types import (
    Axis,
    ExtractConfig,
    FrameRequest,
    FrameSummary,
    OutputFormat,
)
from medviz.core.volume import Volume

logger = logging.getLogger("medviz")


def default_index(metadata: VolumeMetadata, axis: Axis) -> int:
    """Index of the middle frame along ``axis``."""
    return metadata.dim(axis) // 2


def resolve_data_path(config: ExtractConfig) -> Path:
    """Return the data file for ``config``, falling back to ElementDataFile."""
    from medviz.io.raw_reader import find_data_file

    if config.data_path is not None:
        return config.data_path

    data_path = find_data_file(config.metadata_path)
    if data_path is None:
        raise ValueError(
            f"No data file given and {config.metadata_path} names no ElementDataFile"
        )
    return data_path


def extract_frames(
    volume: Volume,
    requests: list[FrameRequest],
    fmt: OutputFormat = OutputFormat.IMAGE,
    rgb: bool = False,
    progress: Progress | None = None,
) -> list[FrameSummary]:
    """Export each requested frame of ``volume``.

    Indexes are validated up front so that a bad request fails before any
    file is written.
    """
    from medviz.io.exporters import export_image, export_raw

    md = volume.metadata
    resolved = []
    for request in requests:
        index = request.index if request.index is not None else default_index(md, request.axis)
        if not 0 <= index < md.dim(request.axis):
            raise IndexError(
                f"{request.axis.value.upper()}-frame index {index} out of range "
                f"(volume has {md.dim(request.axis)} frames on that axis)"
            )
        resolved.append((request, index))

    summaries: list[FrameSummary] = []
    for request, index in resolved:
        axis_name = request.axis.value.upper()
        width, height = md.frame_shape(request.axis)

        task = None
        if progress is not None:
            task = progress.add_task(f"Extracting {axis_name} frame {index}...", total=None)

        samples = volume.frame(request.axis, index)
        if fmt is OutputFormat.RAW:
            export_raw(samples, request.output)
        else:
            export_image(samples, width, height, request.output, rgb=rgb)

        logger.info(f"Saved {axis_name} frame {index} ({width}x{height}) to {request.output}")
        summaries.append(FrameSummary(
            axis=request.axis,
            index=index,
            width=width,
            height=height,
            output=request.output,
            size_bytes=request.output.stat().st_size,
        ))

        if progress is not None:
            progress.update(task, advance=1)
            progress.remove_task(task)

    return summaries


def print_summary(volume: Volume, summaries: list[FrameSummary], elapsed: float) -> None:
    """Display a Rich table of exported frames."""
    md = volume.metadata
    table = Table(title=f"Frames from {md.xdim}x{md.ydim}x{md.zdim} volume")
    table.add_column("Axis", style="bold")
    table.add_column("Index", justify="right")
    table.add_column("Size", justify="right", style="cyan")
    table.add_column("Output", style="green")
    table.add_column("Bytes", justify="right")

    for s in summaries:
        table.add_row(
            s.axis.value.upper(),
            str(s.index),
            f"{s.width}x{s.height}",
            str(s.output),
            f"{s.size_bytes:,}",
        )

    console.print(table)
    console.print(f"\n[green]Extraction complete![/green] ({elapsed:.1f}s)")


def run_extract(config: ExtractConfig) -> list[FrameSummary]:
    """Execute the extraction pipeline for one volume."""
    from medviz.io.raw_reader import load_metadata, map_volume_data

    if not config.requests:
        raise ValueError("No frames requested: give at least one of --xfile, --yfile, --zfile")
    if config.rgb and config.format is OutputFormat.RAW:
        logger.warning("--rgb has no effect on raw output; writing 16-bit values")

    start_time = time.time()
    data_path = resolve_data_path(config)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(bar_width=20),
        MofNCompleteColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Loading volume...", total=None)
        metadata = load_metadata(config.metadata_path)
        volume = Volume.open(metadata, map_volume_data(data_path))
        progress.remove_task(task)

        summaries = extract_frames(
            volume,
            config.requests,
            fmt=config.format,
            rgb=config.rgb,
            progress=progress,
        )

    print_summary(volume, summaries, time.time() - start_time)
    return summaries

"""CLI entry point for medviz."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from medviz import __version__
from medviz._console import console, print_error, print_traceback
from medviz.core.types import Axis, ExtractConfig, FrameRequest, OutputFormat

app = typer.Typer(
    name="medviz",
    help="Extract 2D frames from 3D volumetric data.",
    add_completion=False,
)

logger = logging.getLogger("medviz")


def version_callback(value: bool):
    if value:
        console.print(f"medviz {__version__}")
        raise typer.Exit()


def _log_level(verbose: int) -> int:
    if verbose <= 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


def _build_requests(
    xfile: Path | None,
    yfile: Path | None,
    zfile: Path | None,
    xindex: int | None,
    yindex: int | None,
    zindex: int | None,
) -> list[FrameRequest]:
    requests = []
    for axis, output, index in (
        (Axis.X, xfile, xindex),
        (Axis.Y, yfile, yindex),
        (Axis.Z, zfile, zindex),
    ):
        if output is not None:
            requests.append(FrameRequest(axis=axis, output=output, index=index))
    return requests


@app.command()
def main(
    metadata: Path = typer.Option(
        ...,
        "-m",
        "--metadata",
        help="Input: metadata (header) file with a DimSize entry.",
        exists=True,
        dir_okay=False,
    ),
    data: Path = typer.Option(
        None,
        "-d",
        "--data",
        help="Input: volumetric data file (default: ElementDataFile from the header).",
    ),
    xfile: Path = typer.Option(None, "--xfile", help="Output: X frame file."),
    yfile: Path = typer.Option(None, "--yfile", help="Output: Y frame file."),
    zfile: Path = typer.Option(None, "--zfile", help="Output: Z frame file."),
    xindex: int = typer.Option(None, "--xindex", help="X frame index (default: middle)."),
    yindex: int = typer.Option(None, "--yindex", help="Y frame index (default: middle)."),
    zindex: int = typer.Option(None, "--zindex", help="Z frame index (default: middle)."),
    format: OutputFormat = typer.Option(
        OutputFormat.IMAGE,
        "-f",
        "--format",
        help="Output format: image (by file suffix, e.g. .bmp/.png) or raw 16-bit LE.",
        case_sensitive=False,
    ),
    rgb: bool = typer.Option(
        False,
        "--rgb",
        help="Write 3-channel images with the gray value on every channel.",
    ),
    verbose: int = typer.Option(
        0,
        "-v",
        "--verbose",
        count=True,
        help="Verbose output (can be given multiple times).",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
):
    """Extract frames from volumetric data."""
    logging.basicConfig(level=_log_level(verbose), format="%(levelname)s: %(message)s")
    logger.info("Informational output enabled.")
    logger.debug("Debug output enabled.")

    config = ExtractConfig(
        metadata_path=metadata,
        data_path=data,
        requests=_build_requests(xfile, yfile, zfile, xindex, yindex, zindex),
        format=format,
        rgb=rgb,
    )

    from medviz._pipeline_extract import run_extract

    try:
        run_extract(config)
    except (ValueError, IndexError) as e:
        print_error(e)
        raise typer.Exit(code=1)
    except FileNotFoundError as e:
        print_error(e)
        raise typer.Exit(code=4)
    except Exception as e:
        print_error(e)
        if verbose:
            print_traceback()
        raise typer.Exit(code=1)

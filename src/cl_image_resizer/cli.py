#!/usr/bin/env python3
"""Command line entry point: ``cl-image-resize``."""

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from loguru import logger
from pydantic import ValidationError

from .common.errors import EnvironmentUnavailableError, OutputDirectoryCreateError
from .common.schemas import (
    ImageFormat,
    InterpolationMode,
    PixelOffsetMode,
    RenderQuality,
    ResizeRequest,
    SmoothingMode,
)
from .resizer import Resizer, check_environment
from .utils.log import configure_logging
from .worklist import build_worklist, expand_recursive

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_UNUSABLE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cl-image-resize",
        description="Resize images, optionally converting format and keeping EXIF and timestamps",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example:
  cl-image-resize photo.jpg -o small/ --max-width 800
  cl-image-resize /imgs -o /out --format png --max-width 1000 --max-height 500 --disable-ratio
  find /imgs -name '*.tiff' | cl-image-resize -o /out --max-height 1080
""",
    )

    parser.add_argument(
        "inputs",
        nargs="*",
        help="Input files or directories ('-' reads newline separated paths from stdin)",
    )
    parser.add_argument("--output", "-o", required=True, help="Output file or directory")
    parser.add_argument(
        "--format",
        "-f",
        type=ImageFormat.parse,
        default=ImageFormat.JPG,
        metavar="{" + ",".join(f.value for f in ImageFormat) + "}",
        help="Output format (default: jpg)",
    )
    parser.add_argument("--max-width", type=int, default=None, help="Bounding width in pixels")
    parser.add_argument("--max-height", type=int, default=None, help="Bounding height in pixels")
    parser.add_argument(
        "--disable-ratio",
        dest="preserve_ratio",
        action="store_false",
        help="Stretch to exactly --max-width x --max-height",
    )
    parser.add_argument(
        "--disable-exif",
        dest="preserve_metadata",
        action="store_false",
        help="Do not copy EXIF metadata to the output",
    )
    parser.add_argument(
        "--smoothing",
        type=SmoothingMode,
        choices=list(SmoothingMode),
        default=SmoothingMode.HIGH_QUALITY,
    )
    parser.add_argument(
        "--interpolation",
        type=InterpolationMode,
        choices=list(InterpolationMode),
        default=InterpolationMode.HIGH_QUALITY_BICUBIC,
    )
    parser.add_argument(
        "--pixel-offset",
        type=PixelOffsetMode,
        choices=list(PixelOffsetMode),
        default=PixelOffsetMode.HIGH_QUALITY,
    )
    parser.add_argument(
        "--recursive",
        "-r",
        action="store_true",
        help="Process files in sub-directories of directory inputs too",
    )
    parser.add_argument("--workers", "-w", type=int, default=1, help="Number of parallel workers")
    parser.add_argument("--report-json", type=str, default=None, help="Path to save JSON report")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def read_piped_paths(stream: TextIO) -> list[Path]:
    """Paths piped on ``stream``, one per line; empty lines are ignored.

    Only the line ending is removed, spaces belong to the file name.
    """
    paths = (line.rstrip("\r\n") for line in stream)
    return [Path(p) for p in paths if p]


def collect_inputs(inputs: Sequence[str], stdin: TextIO) -> list[Path]:
    """Normalize positional inputs and piped paths into a single list of paths."""
    if not inputs:
        return [] if stdin.isatty() else read_piped_paths(stdin)

    paths: list[Path] = []
    for raw in inputs:
        if raw == "-":
            paths.extend(read_piped_paths(stdin))
        else:
            paths.append(Path(raw))
    return paths


def prepare_output_dir(output: Path, inputs: Sequence[Path]) -> None:
    """Create ``output`` as a directory when several files are going to it.

    Without this every file of a batch would be written to the same path.

    Raises:
        OutputDirectoryCreateError: If the directory cannot be created
    """
    if output.exists() or output.suffix:
        return
    if len(build_worklist(inputs)) > 1:
        try:
            output.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputDirectoryCreateError(
                f"Cannot create output directory {output}: {exc}"
            ) from exc
        logger.info(f"Created output folder: {output}")


def save_json_report(filepath: str, report_json: str) -> None:
    try:
        Path(filepath).write_text(report_json, encoding="utf-8")
        logger.info(f"JSON report saved to {filepath}")
    except OSError as e:
        logger.error(f"Failed to save JSON report: {e}")


def main(argv: Sequence[str] | None = None, stdin: TextIO | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _ = configure_logging(args.verbose)

    inputs = collect_inputs(args.inputs, stdin if stdin is not None else sys.stdin)
    if args.recursive:
        inputs = expand_recursive(inputs)
    if not inputs:
        logger.error("No input given")
        return EXIT_UNUSABLE

    try:
        request = ResizeRequest(
            input_paths=inputs,
            output_path=Path(args.output),
            format=args.format,
            max_width=args.max_width,
            max_height=args.max_height,
            preserve_ratio=args.preserve_ratio,
            preserve_metadata=args.preserve_metadata,
            quality=RenderQuality(
                smoothing=args.smoothing,
                interpolation=args.interpolation,
                pixel_offset=args.pixel_offset,
            ),
        )
    except ValidationError as e:
        logger.error(f"Invalid arguments: {e}")
        return EXIT_UNUSABLE

    environment = check_environment([request.format])
    try:
        resizer = Resizer(environment, workers=max(1, args.workers))
    except EnvironmentUnavailableError as e:
        logger.critical(f"Imaging environment unavailable, nothing processed: {e}")
        return EXIT_UNUSABLE

    try:
        prepare_output_dir(request.output_path, request.input_paths)
    except OutputDirectoryCreateError as e:
        logger.error(f"{e}, nothing processed")
        return EXIT_UNUSABLE

    report = resizer.process(request)

    if args.report_json:
        save_json_report(args.report_json, report.model_dump_json(indent=2))

    return EXIT_OK if report.ok else EXIT_FAILURES


if __name__ == "__main__":
    sys.exit(main())

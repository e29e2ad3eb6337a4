"""Batch resizer: environment check, per-file error isolation and reporting."""

import dataclasses
from collections.abc import Iterable
from pathlib import Path
from concurrent.futures import ThreadPoolExecutor

import PIL
from loguru import logger
from PIL import Image, features
from pydantic import BaseModel, Field

from .algo.image_resize import get_pil_format, image_resize
from .algo.output_path import resolve_output_path
from .common.errors import (
    EnvironmentUnavailableError,
    InputNotFoundError,
    OutputConflictError,
    ProcessingError,
    ResizerError,
    UnsupportedFormatError,
)
from .common.schemas import BatchReport, ImageFormat, ResizeOutcome, ResizeRequest, ResizeResult
from .utils.media_types import InputKind
from .worklist import WorkItem, build_worklist

# Writers that need an optional library compiled into Pillow
_REQUIRED_CODECS = {"JPEG": "jpg", "PNG": "zlib"}


class EnvironmentStatus(BaseModel):
    """Result of probing Pillow for the codecs a run needs."""

    pillow_version: str
    formats: list[ImageFormat] = Field(default_factory=list)
    missing: dict[str, str] = Field(default_factory=dict)

    @property
    def available(self) -> bool:
        return bool(self.formats) and not self.missing

    def supports(self, format: ImageFormat | str) -> bool:
        return ImageFormat.parse(format) in self.formats

    def describe(self) -> str:
        if not self.missing:
            return f"Pillow {self.pillow_version}: all requested formats available"
        details = "; ".join(f"{fmt}: {reason}" for fmt, reason in self.missing.items())
        return f"Pillow {self.pillow_version}: {details}"


def check_environment(formats: Iterable[ImageFormat | str] | None = None) -> EnvironmentStatus:
    """Probe Pillow for writers and codecs of ``formats`` (default: all formats).

    Call this once before a batch and hand the result to ``Resizer``.
    """
    Image.init()
    requested = [ImageFormat.parse(f) for f in formats] if formats else list(ImageFormat)

    available: list[ImageFormat] = []
    missing: dict[str, str] = {}
    for fmt in requested:
        pil_format = get_pil_format(fmt)
        codec = _REQUIRED_CODECS.get(pil_format)
        if pil_format not in Image.SAVE:
            missing[fmt.value] = f"Pillow has no {pil_format} writer"
        elif codec is not None and not features.check_codec(codec):
            missing[fmt.value] = f"Pillow was built without {codec} support"
        else:
            available.append(fmt)

    return EnvironmentStatus(
        pillow_version=PIL.__version__,
        formats=available,
        missing=missing,
    )


class Resizer:
    """
    Runs a ResizeRequest over its worklist.

    - Every file is processed independently; one failing file never stops
      the others
    - Outcomes are reported in worklist order, also when ``workers > 1``
    """

    def __init__(self, environment: EnvironmentStatus, workers: int = 1) -> None:
        if not environment.available:
            raise EnvironmentUnavailableError(environment.describe())
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")

        self.environment: EnvironmentStatus = environment
        self.workers: int = workers

    def process(self, request: ResizeRequest) -> BatchReport:
        if not self.environment.supports(request.format):
            raise EnvironmentUnavailableError(
                f"Output format {request.format} is not available ({self.environment.describe()})"
            )

        items = self.flag_output_conflicts(build_worklist(request.input_paths), request)

        if self.workers > 1 and len(items) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                outcomes = list(executor.map(lambda item: self.execute(item, request), items))
        else:
            outcomes = [self.execute(item, request) for item in items]

        report = BatchReport(outcomes=outcomes)
        logger.info(
            f"Done: {report.succeeded} resized, {report.skipped} skipped, {report.failed} failed"
        )
        return report

    def flag_output_conflicts(
        self, items: list[WorkItem], request: ResizeRequest
    ) -> list[WorkItem]:
        """Mark files whose output path is already taken by an earlier file.

        Inputs sharing a stem (``a.jpg``, ``a.png``) resolve to the same output;
        only the first one in worklist order is written.
        """
        claimed: dict[Path, Path] = {}
        flagged: list[WorkItem] = []
        for item in items:
            if item.kind is InputKind.FILE:
                output = resolve_output_path(item.path, request.output_path, request.format)
                first = claimed.setdefault(output, item.path)
                if first != item.path:
                    logger.warning(f"{item.path} and {first} both resolve to {output}")
                    item = dataclasses.replace(item, conflicts_with=first)
            flagged.append(item)
        return flagged

    def run(self, item: WorkItem, request: ResizeRequest) -> ResizeResult:
        """Resize one work item; raises for anything that is not a usable file."""
        if item.kind is InputKind.MISSING:
            raise InputNotFoundError(f"Input not found: {item.path}")
        if item.kind is InputKind.UNSUPPORTED:
            raise UnsupportedFormatError(f"Unsupported input format: {item.path}")
        if item.kind is InputKind.UNREADABLE:
            raise ProcessingError(item.reason or f"Cannot read {item.path}")
        if item.conflicts_with is not None:
            raise OutputConflictError(
                f"Not writing {item.path}: its output would overwrite the one of {item.conflicts_with}"
            )

        return image_resize(
            input_path=item.path,
            output_path=request.output_path,
            format=request.format,
            max_width=request.max_width,
            max_height=request.max_height,
            preserve_ratio=request.preserve_ratio,
            preserve_metadata=request.preserve_metadata,
            quality=request.quality,
        )

    def execute(self, item: WorkItem, request: ResizeRequest) -> ResizeOutcome:
        input_path = str(item.path)
        try:
            result = self.run(item, request)

        except (InputNotFoundError, UnsupportedFormatError) as exc:
            logger.warning(f"{exc}, skipping")
            return ResizeOutcome(input_path=input_path, status="skipped", error=str(exc))

        except ResizerError as exc:
            logger.error(str(exc))
            return ResizeOutcome(input_path=input_path, status="error", error=str(exc))

        except Exception as exc:
            logger.opt(exception=exc).error(f"Unexpected error processing {input_path}: {exc}")
            return ResizeOutcome(input_path=input_path, status="error", error=str(exc))

        if result.skipped_properties:
            logger.warning(
                f"{len(result.skipped_properties)} EXIF tag(s) could not be carried to {result.output_path}"
            )
        logger.success(f"Wrote {result.output_path}")

        return ResizeOutcome(
            input_path=input_path,
            status="ok",
            output_path=result.output_path,
            width=result.width,
            height=result.height,
            skipped_properties=result.skipped_properties,
        )

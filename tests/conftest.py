"""Test configuration and fixtures for cl_image_resizer.

This module provides:
- Synthetic image fixtures (plain, with EXIF, directory batches)
- Fixed source timestamps
- Log capture for loguru
"""

import os
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from loguru import logger
from PIL import ExifTags, Image, ImageDraw

# 2020-09-13 12:26:40 UTC / 2017-07-14 02:40:00 UTC, whole seconds on every filesystem
SOURCE_MTIME_NS = 1_600_000_000 * 1_000_000_000
SOURCE_ATIME_NS = 1_500_000_000 * 1_000_000_000

EXIF_MAKE = "CL Test Camera"
EXIF_MODEL = "Resizer 3000"
EXIF_DATETIME_ORIGINAL = "2023:01:01 12:00:00"

ImageFactory = Callable[..., Path]


# ============================================================================
# Logging
# ============================================================================


@pytest.fixture(autouse=True)
def reset_logger() -> Iterator[None]:
    """Restore loguru's default sink after tests that reconfigure it."""
    yield
    logger.remove()
    _ = logger.add(sys.stderr)


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Collect formatted loguru records as "LEVEL|message" strings."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(str(message).rstrip("\n")),
        level="DEBUG",
        format="{level}|{message}",
    )
    yield messages
    logger.remove(handler_id)


# ============================================================================
# Image Fixtures
# ============================================================================


def draw_test_pattern(width: int, height: int, mode: str = "RGB") -> Image.Image:
    """Grid and circle pattern, so scaling has something to resample."""
    img = Image.new("RGB", (width, height), color=(73, 109, 137))
    draw = ImageDraw.Draw(img)
    step = max(1, min(width, height) // 8)
    for x in range(0, width, step):
        draw.line([(x, 0), (x, height)], fill=(255, 255, 255), width=1)
    for y in range(0, height, step):
        draw.line([(0, y), (width, y)], fill=(255, 255, 255), width=1)
    draw.ellipse(
        [width // 4, height // 4, 3 * width // 4, 3 * height // 4],
        fill=(200, 100, 100),
    )
    return img if mode == "RGB" else img.convert(mode)


def sample_exif() -> Image.Exif:
    exif = Image.Exif()
    exif[0x010F] = EXIF_MAKE  # Make
    exif[0x0110] = EXIF_MODEL  # Model
    exif[ExifTags.IFD.Exif] = {0x9003: EXIF_DATETIME_ORIGINAL}  # DateTimeOriginal
    exif[ExifTags.IFD.GPSInfo] = {0x0001: "N"}  # GPSLatitudeRef
    return exif


@pytest.fixture
def make_image(tmp_path: Path) -> ImageFactory:
    """Factory writing a synthetic image with fixed timestamps.

    Usage:
        path = make_image("photo.jpg", size=(1600, 900), exif=True)
    """

    def factory(
        name: str,
        size: tuple[int, int] = (800, 600),
        mode: str = "RGB",
        exif: bool = False,
        directory: Path | None = None,
    ) -> Path:
        target_dir = directory or tmp_path / "input"
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name

        img = draw_test_pattern(size[0], size[1], mode)
        save_kwargs: dict[str, object] = {}
        if exif:
            save_kwargs["exif"] = sample_exif()
        img.save(path, **save_kwargs)

        os.utime(path, ns=(SOURCE_ATIME_NS, SOURCE_MTIME_NS))
        return path

    return factory


@pytest.fixture
def sample_jpeg(make_image: ImageFactory) -> Path:
    """1600x900 JPEG without metadata."""
    return make_image("landscape.jpg", size=(1600, 900))


@pytest.fixture
def exif_jpeg(make_image: ImageFactory) -> Path:
    """800x600 JPEG carrying Make/Model, Exif and GPS entries."""
    return make_image("with_exif.jpg", size=(800, 600), exif=True)


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Provide clean temporary directory for test outputs."""
    out = tmp_path / "output"
    out.mkdir()
    return out

"""Pure image resize computation logic (single file)."""

import os
import tempfile
from pathlib import Path

from PIL import Image

from ..common.errors import InputNotFoundError, ProcessingError, UnsupportedFormatError
from ..common.schemas import (
    ImageFormat,
    InterpolationMode,
    RenderQuality,
    ResizeResult,
    SmoothingMode,
)
from ..utils.media_types import is_supported_extension
from ..utils.profiling import timed
from ..utils.timestamp import copy_file_times
from .dimensions import compute_target_size
from .metadata import metadata_save_kwargs
from .output_path import ensure_parent_dir, resolve_output_path

RESAMPLING: dict[InterpolationMode, Image.Resampling] = {
    InterpolationMode.DEFAULT: Image.Resampling.BILINEAR,
    InterpolationMode.LOW: Image.Resampling.BILINEAR,
    InterpolationMode.HIGH: Image.Resampling.LANCZOS,
    InterpolationMode.BILINEAR: Image.Resampling.BILINEAR,
    InterpolationMode.BICUBIC: Image.Resampling.BICUBIC,
    InterpolationMode.NEAREST_NEIGHBOR: Image.Resampling.NEAREST,
    InterpolationMode.HIGH_QUALITY_BILINEAR: Image.Resampling.BILINEAR,
    InterpolationMode.HIGH_QUALITY_BICUBIC: Image.Resampling.BICUBIC,
}

# Modes each writer stores as-is; anything else is converted first. None = any.
SAVE_MODES: dict[str, frozenset[str] | None] = {
    "JPEG": frozenset({"1", "L", "RGB", "CMYK"}),
    "PNG": frozenset({"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"}),
    "GIF": frozenset({"1", "L", "P", "RGB", "RGBA"}),
    "BMP": frozenset({"1", "L", "P", "RGB", "RGBA"}),
    "TIFF": None,
}

# Info keys Pillow writers may pick up from the image itself
METADATA_INFO_KEYS = frozenset(
    {"exif", "icc_profile", "xmp", "XML:com.adobe.xmp", "photoshop", "comment"}
)

# mkstemp creates 0600 files; outputs get the mode open() would give them
_UMASK = os.umask(0)
_ = os.umask(_UMASK)
NEW_FILE_MODE = 0o666 & ~_UMASK

_PROCESSING_ERRORS = (
    OSError,
    ValueError,
    SyntaxError,
    EOFError,
    Image.DecompressionBombError,
)


def get_pil_format(format_str: str) -> str:
    """Convert format string to PIL format name."""
    format_map = {
        "jpg": "JPEG",
        "jpeg": "JPEG",
        "png": "PNG",
        "gif": "GIF",
        "bmp": "BMP",
        "tiff": "TIFF",
    }
    return format_map.get(format_str.lower(), format_str.upper())


def _has_alpha(img: Image.Image) -> bool:
    return "A" in img.getbands() or "transparency" in img.info


def render(img: Image.Image, size: tuple[int, int], quality: RenderQuality) -> Image.Image:
    """Scale the whole of ``img`` onto a new canvas of ``size``.

    Pillow samples pixel centres over the full source box, so every
    ``pixel_offset`` mode maps the source edges onto the canvas edges.
    """
    # Palette and bilevel images are resampled in a full color mode
    if img.mode in ("P", "PA"):
        img = img.convert("RGBA" if _has_alpha(img) else "RGB")
    elif img.mode == "1":
        img = img.convert("L")

    if img.size == size:
        return img.copy()

    if quality.smoothing in (SmoothingMode.HIGH_QUALITY, SmoothingMode.ANTI_ALIAS):
        reducing_gap = None
    else:
        reducing_gap = 2.0

    return img.resize(
        size,
        RESAMPLING[quality.interpolation],
        reducing_gap=reducing_gap,
    )


def prepare_for_format(img: Image.Image, pil_format: str) -> Image.Image:
    """Convert ``img`` to a mode the target writer can store."""
    modes = SAVE_MODES.get(pil_format)
    if modes is None or img.mode in modes:
        return img

    target = "RGBA" if _has_alpha(img) and "RGBA" in modes else "RGB"
    return img.convert(target)


def write_atomic(
    img: Image.Image,
    output_path: Path,
    pil_format: str,
    save_kwargs: dict[str, object],
    source_stat: os.stat_result,
) -> None:
    """Encode ``img`` next to ``output_path`` and move it into place.

    The temporary file gets the permissions of a newly created file and
    the timestamps of the source before the move, so the output appears
    complete or not at all.
    """
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{output_path.stem}.",
        suffix=output_path.suffix,
        dir=output_path.parent,
    )
    os.close(fd)
    tmp_path = Path(tmp_name)

    try:
        img.save(tmp_path, format=pil_format, **save_kwargs)
        os.chmod(tmp_path, NEW_FILE_MODE)
        copy_file_times(source_stat, tmp_path)
        os.replace(tmp_path, output_path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


@timed
def image_resize(
    *,
    input_path: str | Path,
    output_path: str | Path,
    format: ImageFormat | str = ImageFormat.JPG,
    max_width: int | None = None,
    max_height: int | None = None,
    preserve_ratio: bool = True,
    preserve_metadata: bool = True,
    quality: RenderQuality | None = None,
) -> ResizeResult:
    """
    Resize a single image and write output.

    Framework-agnostic, single-responsibility function.

    Args:
        input_path: Path to input image
        output_path: Output file, or existing directory to write into
        format: Output format (the output suffix always matches it)
        max_width: Bounding width
        max_height: Bounding height
        preserve_ratio: Fit within the bounds keeping the aspect ratio if True
        preserve_metadata: Copy EXIF and ICC profile to the output if True
        quality: Rendering quality settings

    Returns:
        ResizeResult with the written path and size

    Raises:
        InputNotFoundError: If input image does not exist
        UnsupportedFormatError: If the input extension is not a supported format
        OutputDirectoryCreateError: If the output directory cannot be created
        InvalidDimensionsError: If the image size cannot be scaled
        ProcessingError: If Pillow fails to read, render or write the image
    """
    input_path = Path(input_path)
    fmt = ImageFormat.parse(format)
    pil_format = get_pil_format(fmt)
    quality = quality or RenderQuality()

    if not input_path.exists():
        raise InputNotFoundError(f"Input file not found: {input_path}")
    if input_path.is_dir() or not is_supported_extension(input_path):
        raise UnsupportedFormatError(f"Unsupported input format: {input_path}")

    resolved = resolve_output_path(input_path, output_path, fmt)
    _ = ensure_parent_dir(resolved)

    # Taken before the file is opened so the access time is the original one
    source_stat = input_path.stat()

    try:
        with Image.open(input_path) as img:
            size = compute_target_size(
                img.width,
                img.height,
                max_width,
                max_height,
                preserve_ratio,
            )
            canvas = prepare_for_format(render(img, size, quality), pil_format)
            canvas.info = {
                key: value
                for key, value in canvas.info.items()
                if key not in METADATA_INFO_KEYS
            }

            save_kwargs: dict[str, object] = {}
            skipped: list[int] = []
            if preserve_metadata:
                save_kwargs, skipped = metadata_save_kwargs(img, canvas, pil_format)

            if pil_format == "PNG":
                save_kwargs["optimize"] = True

            write_atomic(canvas, resolved, pil_format, save_kwargs, source_stat)

    except _PROCESSING_ERRORS as exc:
        raise ProcessingError(f"Failed to process {input_path}: {exc}") from exc

    return ResizeResult(
        output_path=str(resolved),
        width=size[0],
        height=size[1],
        skipped_properties=skipped,
    )

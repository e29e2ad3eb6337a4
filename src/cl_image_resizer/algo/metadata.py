"""EXIF / ICC transfer from a source image to a rendered canvas."""

import struct

from loguru import logger
from PIL import ExifTags, Image

# Pillow writers that accept the ``exif`` / ``icc_profile`` save options
EXIF_FORMATS = frozenset({"JPEG", "PNG", "TIFF"})
ICC_FORMATS = frozenset({"JPEG", "PNG", "TIFF"})

_SERIALIZE_ERRORS = (
    ValueError,
    TypeError,
    AttributeError,
    OverflowError,
    KeyError,
    struct.error,
)

# Tags describing the source raster layout; they are wrong for the new canvas
LAYOUT_TAGS = frozenset(
    {
        256,  # ImageWidth
        257,  # ImageLength
        258,  # BitsPerSample
        259,  # Compression
        262,  # PhotometricInterpretation
        273,  # StripOffsets
        277,  # SamplesPerPixel
        278,  # RowsPerStrip
        279,  # StripByteCounts
        284,  # PlanarConfiguration
        317,  # Predictor
        320,  # ColorMap
        322,  # TileWidth
        323,  # TileLength
        324,  # TileOffsets
        325,  # TileByteCounts
        338,  # ExtraSamples
        339,  # SampleFormat
        347,  # JPEGTables
    }
)


def _expand_ifd(exif: Image.Exif, tag: int) -> dict[int, object]:
    """Load a sub-IFD (Exif, GPS) as a dict so it can be written on its own."""
    ifd: dict[int, object] = dict(exif.get_ifd(tag))
    if tag == ExifTags.IFD.Exif and ExifTags.IFD.Interop in ifd:
        try:
            ifd[ExifTags.IFD.Interop] = dict(exif.get_ifd(ExifTags.IFD.Interop))
        except _SERIALIZE_ERRORS:
            del ifd[ExifTags.IFD.Interop]
    return ifd


def copy_exif(source: Image.Image) -> tuple[Image.Exif, list[int]]:
    """
    Copy every EXIF entry of ``source`` into a new Exif block.

    Entries are added one at a time and the block is re-serialized after each
    one; an entry that cannot be serialized is left out instead of failing
    the whole transfer.

    Returns:
        (exif, skipped_tags)
    """
    source_exif = source.getexif()
    carried = Image.Exif()
    skipped: list[int] = []

    for tag, value in source_exif.items():
        if tag in LAYOUT_TAGS:
            continue
        try:
            if tag in (ExifTags.IFD.Exif, ExifTags.IFD.GPSInfo):
                value = _expand_ifd(source_exif, tag)
            carried[tag] = value
            _ = carried.tobytes()
        except _SERIALIZE_ERRORS as exc:
            if tag in carried:
                del carried[tag]
            skipped.append(tag)
            name = ExifTags.TAGS.get(tag, hex(tag))
            logger.debug(f"Skipping EXIF property {name}: {exc}")

    return carried, skipped


def metadata_save_kwargs(
    source: Image.Image,
    canvas: Image.Image,
    pil_format: str,
) -> tuple[dict[str, object], list[int]]:
    """Build the Pillow save options that carry ``source`` metadata to ``canvas``.

    Returns:
        (save_kwargs, skipped_exif_tags)
    """
    kwargs: dict[str, object] = {}
    skipped: list[int] = []

    if pil_format in EXIF_FORMATS:
        exif, skipped = copy_exif(source)
        if len(exif):
            kwargs["exif"] = exif
    else:
        logger.debug(f"{pil_format} cannot carry EXIF, metadata not copied")

    # A profile only describes the canvas if the color mode was kept
    icc_profile = source.info.get("icc_profile")
    if icc_profile and pil_format in ICC_FORMATS and canvas.mode == source.mode:
        kwargs["icc_profile"] = icc_profile

    return kwargs, skipped

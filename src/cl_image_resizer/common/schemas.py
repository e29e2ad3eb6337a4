"""Pydantic schemas for resize requests and results."""

from enum import StrEnum
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

# ─────────────────────────────────────────────────────────────
# Formats
# ─────────────────────────────────────────────────────────────


class ImageFormat(StrEnum):
    """Output formats accepted by the resizer (also the accepted input extensions)."""

    JPG = "jpg"
    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"
    BMP = "bmp"
    TIFF = "tiff"

    @classmethod
    def parse(cls, value: "str | ImageFormat") -> "ImageFormat":
        """Parse a format token or file extension ("JPG", ".png", "tiff")."""
        if isinstance(value, ImageFormat):
            return value
        return cls(value.strip().lstrip(".").lower())

    @property
    def suffix(self) -> str:
        return f".{self.value}"


# ─────────────────────────────────────────────────────────────
# Render quality knobs
# ─────────────────────────────────────────────────────────────


class SmoothingMode(StrEnum):
    DEFAULT = "default"
    HIGH_SPEED = "high_speed"
    HIGH_QUALITY = "high_quality"
    NONE = "none"
    ANTI_ALIAS = "anti_alias"


class InterpolationMode(StrEnum):
    DEFAULT = "default"
    LOW = "low"
    HIGH = "high"
    BILINEAR = "bilinear"
    BICUBIC = "bicubic"
    NEAREST_NEIGHBOR = "nearest_neighbor"
    HIGH_QUALITY_BILINEAR = "high_quality_bilinear"
    HIGH_QUALITY_BICUBIC = "high_quality_bicubic"


class PixelOffsetMode(StrEnum):
    DEFAULT = "default"
    HIGH_SPEED = "high_speed"
    HIGH_QUALITY = "high_quality"
    NONE = "none"
    HALF = "half"


class RenderQuality(BaseModel):
    """Rendering quality settings, passed through to the resampler."""

    smoothing: SmoothingMode = SmoothingMode.HIGH_QUALITY
    interpolation: InterpolationMode = InterpolationMode.HIGH_QUALITY_BICUBIC
    pixel_offset: PixelOffsetMode = PixelOffsetMode.HIGH_QUALITY

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


# ─────────────────────────────────────────────────────────────
# Request
# ─────────────────────────────────────────────────────────────


class ResizeRequest(BaseModel):
    """Parameters for one resize run.

    Attributes:
        input_paths: Files and/or directories to process
        output_path: Output file, or an existing directory to write into
        format: Output codec (default: jpg)
        max_width: Bounding width in pixels (None = unbounded)
        max_height: Bounding height in pixels (None = unbounded)
        preserve_ratio: Fit within the bounds keeping the aspect ratio (default: True)
        preserve_metadata: Copy EXIF/ICC data to the output (default: True)
        quality: Rendering quality settings
    """

    input_paths: list[Path] = Field(
        ...,
        min_length=1,
        description="Input files or directories",
    )
    output_path: Path = Field(..., description="Output file or directory")
    format: ImageFormat = Field(default=ImageFormat.JPG, description="Output format")
    max_width: PositiveInt | None = Field(default=None, description="Bounding width")
    max_height: PositiveInt | None = Field(default=None, description="Bounding height")
    preserve_ratio: bool = True
    preserve_metadata: bool = True
    quality: RenderQuality = Field(default_factory=RenderQuality)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @field_validator("input_paths", mode="before")
    @classmethod
    def normalize_input_paths(cls, v: object) -> object:
        """Accept a single path as well as a sequence of paths."""
        if isinstance(v, (str, Path)):
            return [v]
        return v

    @field_validator("format", mode="before")
    @classmethod
    def normalize_format(cls, v: object) -> object:
        if isinstance(v, str):
            return ImageFormat.parse(v)
        return v

    @property
    def has_bounds(self) -> bool:
        return self.max_width is not None or self.max_height is not None


# ─────────────────────────────────────────────────────────────
# Results
# ─────────────────────────────────────────────────────────────

OutcomeStatus = Literal["ok", "skipped", "error"]


class ResizeResult(BaseModel):
    """Result of resizing a single file."""

    output_path: str
    width: int
    height: int
    skipped_properties: list[int] = Field(default_factory=list)


class ResizeOutcome(BaseModel):
    """Per-file record of a batch run."""

    input_path: str
    status: OutcomeStatus
    output_path: str | None = None
    width: int | None = None
    height: int | None = None
    error: str | None = None
    skipped_properties: list[int] = Field(default_factory=list)

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")


class BatchReport(BaseModel):
    """Ordered outcomes of a batch run."""

    outcomes: list[ResizeOutcome] = Field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "ok")

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "skipped")

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "error")

    @property
    def ok(self) -> bool:
        return self.failed == 0

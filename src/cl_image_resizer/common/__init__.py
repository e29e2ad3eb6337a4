"""Common module - schemas and errors."""

from .errors import (
    EnvironmentUnavailableError,
    InputNotFoundError,
    InvalidDimensionsError,
    OutputConflictError,
    OutputDirectoryCreateError,
    ProcessingError,
    ResizerError,
    UnsupportedFormatError,
)
from .schemas import (
    BatchReport,
    ImageFormat,
    InterpolationMode,
    PixelOffsetMode,
    RenderQuality,
    ResizeOutcome,
    ResizeRequest,
    ResizeResult,
    SmoothingMode,
)

__all__ = [
    "BatchReport",
    "EnvironmentUnavailableError",
    "ImageFormat",
    "InputNotFoundError",
    "InterpolationMode",
    "InvalidDimensionsError",
    "OutputConflictError",
    "OutputDirectoryCreateError",
    "PixelOffsetMode",
    "ProcessingError",
    "RenderQuality",
    "ResizeOutcome",
    "ResizeRequest",
    "ResizeResult",
    "ResizerError",
    "SmoothingMode",
    "UnsupportedFormatError",
]

"""cl_image_resizer - Resize and convert images keeping EXIF metadata and timestamps."""

from .algo import compute_target_size, image_resize, resolve_output_path
from .common.errors import (
    EnvironmentUnavailableError,
    InputNotFoundError,
    InvalidDimensionsError,
    OutputConflictError,
    OutputDirectoryCreateError,
    ProcessingError,
    ResizerError,
    UnsupportedFormatError,
)
from .common.schemas import (
    BatchReport,
    ImageFormat,
    RenderQuality,
    ResizeOutcome,
    ResizeRequest,
    ResizeResult,
)
from .resizer import EnvironmentStatus, Resizer, check_environment
from .worklist import WorkItem, build_worklist, expand_recursive

__version__ = "0.1.0"

__all__ = [
    "BatchReport",
    "EnvironmentStatus",
    "EnvironmentUnavailableError",
    "ImageFormat",
    "InputNotFoundError",
    "InvalidDimensionsError",
    "OutputConflictError",
    "OutputDirectoryCreateError",
    "ProcessingError",
    "RenderQuality",
    "ResizeOutcome",
    "ResizeRequest",
    "ResizeResult",
    "Resizer",
    "ResizerError",
    "UnsupportedFormatError",
    "WorkItem",
    "__version__",
    "build_worklist",
    "check_environment",
    "compute_target_size",
    "expand_recursive",
    "image_resize",
    "resolve_output_path",
]

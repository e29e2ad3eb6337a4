"""Image resize algorithms."""

from .dimensions import compute_target_size
from .image_resize import get_pil_format, image_resize
from .metadata import copy_exif
from .output_path import ensure_parent_dir, resolve_output_path

__all__ = [
    "compute_target_size",
    "copy_exif",
    "ensure_parent_dir",
    "get_pil_format",
    "image_resize",
    "resolve_output_path",
]

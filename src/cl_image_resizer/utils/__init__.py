"""Utility helpers: input classification, timestamps, logging and profiling."""

from .log import configure_logging
from .media_types import InputKind, extension_token, is_supported_extension
from .profiling import timed
from .timestamp import copy_file_times, creation_time

__all__ = [
    "InputKind",
    "configure_logging",
    "copy_file_times",
    "creation_time",
    "extension_token",
    "is_supported_extension",
    "timed",
]

from enum import StrEnum
from pathlib import Path

from ..common.schemas import ImageFormat


class InputKind(StrEnum):
    DIRECTORY = "directory"
    FILE = "file"
    MISSING = "missing"
    UNSUPPORTED = "unsupported"
    UNREADABLE = "unreadable"

    @classmethod
    def from_path(cls, path: Path) -> "InputKind":
        if path.is_dir():
            return InputKind.DIRECTORY
        elif not path.exists():
            return InputKind.MISSING
        elif is_supported_extension(path):
            return InputKind.FILE
        else:
            return InputKind.UNSUPPORTED


def extension_token(path: str | Path) -> str:
    """Lowercased extension without its leading dot ("" when there is none)."""
    return Path(path).suffix.lstrip(".").lower()


def is_supported_extension(path: str | Path) -> bool:
    return extension_token(path) in {fmt.value for fmt in ImageFormat}

from pathlib import Path

from loguru import logger

from ..common.errors import OutputDirectoryCreateError
from ..common.schemas import ImageFormat


def resolve_output_path(
    input_path: str | Path,
    output_path: str | Path,
    format: ImageFormat | str,
) -> Path:
    """Work out where the output for ``input_path`` is written.

    An existing directory receives a file named after the input. Otherwise
    ``output_path`` names the file. Either way the suffix becomes the one of
    ``format``.
    """
    input_path = Path(input_path)
    output_path = Path(output_path)
    fmt = ImageFormat.parse(format)

    if output_path.is_dir():
        resolved = output_path / input_path.name
    else:
        resolved = output_path

    return resolved.with_suffix(fmt.suffix)


def ensure_parent_dir(path: Path) -> Path:
    """Create the parent directory of ``path`` (with intermediates) if missing.

    Raises:
        OutputDirectoryCreateError: If the directory cannot be created
    """
    parent = path.parent
    if parent.is_dir():
        return parent

    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputDirectoryCreateError(
            f"Cannot create output directory {parent}: {exc}"
        ) from exc

    logger.debug(f"Created output directory: {parent}")
    return parent

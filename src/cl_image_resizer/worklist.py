"""Input classification: turn the caller's paths into an ordered worklist."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from .utils.media_types import InputKind


@dataclass(frozen=True)
class WorkItem:
    path: Path
    kind: InputKind
    reason: str | None = None
    # Earlier input writing to the same output path
    conflicts_with: Path | None = None


def _list_directory(directory: Path) -> Iterator[WorkItem]:
    """Immediate entries of ``directory``; sub-directories are not expanded."""
    try:
        entries = sorted(directory.iterdir())
    except OSError as exc:
        yield WorkItem(directory, InputKind.UNREADABLE, f"Cannot list {directory}: {exc}")
        return

    for entry in entries:
        kind = InputKind.from_path(entry)
        if kind is InputKind.DIRECTORY:
            logger.debug(f"Not descending into {entry}")
            continue
        yield WorkItem(entry, kind)


def build_worklist(inputs: Iterable[str | Path]) -> list[WorkItem]:
    """Classify every input once, expanding directories one level deep.

    Missing and unsupported inputs stay in the list so the caller can report
    them in order with the files that are processed.
    """
    items: list[WorkItem] = []
    for raw in inputs:
        path = Path(raw)
        kind = InputKind.from_path(path)
        if kind is InputKind.DIRECTORY:
            items.extend(_list_directory(path))
        else:
            items.append(WorkItem(path, kind))

    logger.debug(f"Worklist holds {len(items)} item(s)")
    return items


def expand_recursive(inputs: Iterable[str | Path]) -> list[Path]:
    """Replace each directory in ``inputs`` by every file below it.

    Used by callers that want more than the one-level directory listing of
    ``build_worklist``.
    """
    expanded: list[Path] = []
    for raw in inputs:
        path = Path(raw)
        if path.is_dir():
            expanded.extend(sorted(p for p in path.rglob("*") if not p.is_dir()))
        else:
            expanded.append(path)
    return expanded

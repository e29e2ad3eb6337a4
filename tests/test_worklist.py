"""Unit tests for worklist construction."""

from pathlib import Path

from cl_image_resizer.utils.media_types import InputKind
from cl_image_resizer.worklist import WorkItem, build_worklist, expand_recursive

from tests.conftest import ImageFactory


def test_single_file(make_image: ImageFactory):
    """Test a supported file becomes one FILE item."""
    source = make_image("a.jpg", size=(10, 10))

    assert build_worklist([source]) == [WorkItem(source, InputKind.FILE)]


def test_missing_and_unsupported_are_kept(tmp_path: Path):
    """Test inputs that will be skipped stay in the list, in order."""
    text = tmp_path / "notes.txt"
    _ = text.write_text("hello")
    missing = tmp_path / "missing.png"

    items = build_worklist([missing, text])

    assert [item.kind for item in items] == [InputKind.MISSING, InputKind.UNSUPPORTED]
    assert [item.path for item in items] == [missing, text]


def test_directory_expands_one_level(make_image: ImageFactory, tmp_path: Path):
    """Test a directory lists its immediate files, sorted, without descending."""
    folder = tmp_path / "batch"
    b = make_image("b.png", size=(10, 10), directory=folder)
    a = make_image("a.jpg", size=(10, 10), directory=folder)
    _ = make_image("deep.jpg", size=(10, 10), directory=folder / "sub")
    readme = folder / "readme.md"
    _ = readme.write_text("docs")

    items = build_worklist([folder])

    assert [item.path for item in items] == [a, b, readme]
    assert [item.kind for item in items] == [InputKind.FILE, InputKind.FILE, InputKind.UNSUPPORTED]


def test_accepts_strings(make_image: ImageFactory):
    """Test string inputs are normalized to paths."""
    source = make_image("a.gif", size=(10, 10))

    assert build_worklist([str(source)])[0].path == source


def test_expand_recursive(make_image: ImageFactory, tmp_path: Path):
    """Test recursive expansion lists files at every depth and keeps plain files."""
    folder = tmp_path / "tree"
    top = make_image("top.jpg", size=(10, 10), directory=folder)
    deep = make_image("deep.jpg", size=(10, 10), directory=folder / "x" / "y")
    loose = make_image("loose.png", size=(10, 10), directory=tmp_path / "elsewhere")

    expanded = expand_recursive([folder, loose])

    assert expanded == [top, deep, loose]

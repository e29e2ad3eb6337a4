"""Unit tests for timestamp utilities."""

import os
import sys
from pathlib import Path

import pytest

from cl_image_resizer.utils.timestamp import copy_file_times, creation_time

MTIME_NS = 1_650_000_000 * 1_000_000_000
ATIME_NS = 1_640_000_000 * 1_000_000_000


def test_copy_file_times(tmp_path: Path):
    """Test access and modification times are copied exactly."""
    source = tmp_path / "source.bin"
    target = tmp_path / "target.bin"
    _ = source.write_bytes(b"source")
    _ = target.write_bytes(b"target")
    os.utime(source, ns=(ATIME_NS, MTIME_NS))

    copy_file_times(os.stat(source), target)

    stat = os.stat(target)
    assert stat.st_mtime_ns == MTIME_NS
    assert stat.st_atime_ns == ATIME_NS


def test_copy_file_times_accepts_str(tmp_path: Path):
    """Test a string target path is accepted."""
    source = tmp_path / "source.bin"
    target = tmp_path / "target.bin"
    _ = source.write_bytes(b"source")
    _ = target.write_bytes(b"target")
    os.utime(source, ns=(ATIME_NS, MTIME_NS))

    copy_file_times(os.stat(source), str(target))

    assert os.stat(target).st_mtime_ns == MTIME_NS


def test_copy_file_times_missing_target(tmp_path: Path):
    """Test a missing target raises FileNotFoundError."""
    source = tmp_path / "source.bin"
    _ = source.write_bytes(b"source")

    with pytest.raises(FileNotFoundError):
        copy_file_times(os.stat(source), tmp_path / "missing.bin")


def test_creation_time_is_a_known_timestamp(tmp_path: Path):
    """Test creation_time picks birth time, or a sensible fallback per platform."""
    path = tmp_path / "file.bin"
    _ = path.write_bytes(b"x")
    stat = os.stat(path)

    created = creation_time(stat)

    birthtime = getattr(stat, "st_birthtime", None)
    if birthtime is not None:
        assert created == birthtime
    elif sys.platform == "win32":
        assert created == stat.st_ctime
    else:
        assert created == stat.st_mtime
